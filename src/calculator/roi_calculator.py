"""
DesignROI - ROI Calculation Engine

Turns a room renovation request into a cost breakdown, ROI metrics,
a market comparison and rule-based advice. Everything here is a pure
function of its inputs and the tables in roi_data.
"""

import math
from dataclasses import dataclass, field, asdict
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from .roi_data import ROIDatabase, RoomType, QualityLevel


# Bucket shares of the adjusted renovation cost
MATERIALS_SHARE = 0.4
LABOR_SHARE = 0.35
PERMITS_SHARE = 0.05
OVERHEAD_SHARE = 0.1
CONTINGENCY_SHARE = 0.1

RENTAL_YIELD = 0.01          # annual yield on the value increase
ANNUAL_APPRECIATION = 0.03
PROJECTION_YEARS = 5
LONG_PAYBACK_MONTHS = 60
MIN_CONTINGENCY_RATIO = 0.1


def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves up (2.5 -> 3) instead of to the nearest even digit."""
    scale = 10 ** digits
    return math.floor(value * scale + 0.5) / scale


def _whole(value: float) -> int:
    return int(round_half_up(value))


@dataclass(frozen=True)
class CalculationInput:
    """A single-room renovation request."""
    room_type: str
    room_size: str
    style: str
    square_footage: float
    current_property_value: float
    region: str = "suburban"
    quality_level: str = "mid-range"
    timeline: Optional[int] = None  # months; informational only

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "roomType": _raw(self.room_type),
            "roomSize": _raw(self.room_size),
            "style": self.style,
            "squareFootage": self.square_footage,
            "currentPropertyValue": self.current_property_value,
            "region": _raw(self.region),
            "qualityLevel": _raw(self.quality_level),
        }
        if self.timeline is not None:
            data["timeline"] = self.timeline
        return data


@dataclass(frozen=True)
class MultiRoomInput(CalculationInput):
    """A room in a multi-room project. Priority is recorded but not weighted."""
    priority: int = 0

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["priority"] = self.priority
        return data


@dataclass(frozen=True)
class CostBreakdown:
    """
    Renovation cost split into categories.

    Each category is rounded on its own while ``total`` is the rounded sum
    of the unrounded categories, so the parts may not add up to ``total``
    exactly.
    """
    materials: int
    labor: int
    permits: int
    overhead: int
    contingency: int
    total: int

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


@dataclass(frozen=True)
class ROIMetrics:
    """Return figures for a renovation investment."""
    total_investment: float
    estimated_value_increase: int
    roi_percentage: float
    payback_timeline_months: int
    annual_return: int
    five_year_projection: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalInvestment": self.total_investment,
            "estimatedValueIncrease": self.estimated_value_increase,
            "roiPercentage": self.roi_percentage,
            "paybackTimelineMonths": self.payback_timeline_months,
            "annualReturn": self.annual_return,
            "fiveYearProjection": self.five_year_projection,
        }


@dataclass(frozen=True)
class MarketComparison:
    """Industry benchmark figures for the same room and region."""
    average_roi: float
    average_cost: int
    average_timeframe: int
    confidence_level: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "averageROI": self.average_roi,
            "averageCost": self.average_cost,
            "averageTimeframe": self.average_timeframe,
            "confidenceLevel": self.confidence_level,
        }


@dataclass(frozen=True)
class CalculationResult:
    """Complete ROI calculation for one room."""
    input: CalculationInput
    cost_breakdown: CostBreakdown
    roi_metrics: ROIMetrics
    market_comparison: MarketComparison
    recommendations: Tuple[str, ...] = ()
    risk_factors: Tuple[str, ...] = ()
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the camelCase shape used by the API and stored notes."""
        return {
            "input": self.input.to_dict(),
            "costBreakdown": self.cost_breakdown.to_dict(),
            "roiMetrics": self.roi_metrics.to_dict(),
            "marketComparison": self.market_comparison.to_dict(),
            "recommendations": list(self.recommendations),
            "riskFactors": list(self.risk_factors),
            "createdAt": self.created_at.isoformat(),
        }


@dataclass(frozen=True)
class CombinedSummary:
    """Aggregate figures for a multi-room project."""
    total_cost: int
    total_roi: float
    weighted_payback: float
    recommendations: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalCost": self.total_cost,
            "totalROI": self.total_roi,
            "weightedPayback": self.weighted_payback,
            "recommendations": list(self.recommendations),
        }


@dataclass(frozen=True)
class MultiRoomResult:
    """Per-room results plus the combined project summary."""
    individual: Tuple[CalculationResult, ...]
    combined: CombinedSummary

    def to_dict(self) -> Dict[str, Any]:
        return {
            "individual": [result.to_dict() for result in self.individual],
            "combined": self.combined.to_dict(),
        }


def _raw(value) -> Any:
    # Enum members echo as their plain value
    return getattr(value, "value", value)


class ROICalculator:
    """
    Renovation cost and ROI estimator.

    Unknown room types, sizes, regions and quality levels never raise; they
    are priced as living room, medium, suburban and mid-range respectively.
    Numeric inputs are not validated here: square footage and property
    value must be positive for a meaningful result.
    """

    @classmethod
    def calculate_renovation_cost(
        cls,
        room_type: str,
        room_size: str,
        style: str,
        square_footage: float,
        region: str = "suburban",
        quality_level: str = "mid-range"
    ) -> CostBreakdown:
        """
        Estimate renovation cost for a room.

        Args:
            room_type: Room being renovated (e.g., 'kitchen')
            room_size: Size bucket ('small' to 'extra_large')
            style: Design style label; does not affect price
            square_footage: Floor area in sq ft
            region: Market region for cost and labor adjustment
            quality_level: Finish quality driving the cost factor

        Returns:
            CostBreakdown with whole-currency category amounts
        """
        room_data = ROIDatabase.get_room_costs(room_type)
        style_multiplier = ROIDatabase.get_style_multiplier(quality_level)
        size_multiplier = ROIDatabase.get_size_multiplier(room_size)
        regional = ROIDatabase.get_regional_adjustment(region)

        base_cost = room_data.base_cost_per_sqft * square_footage
        adjusted_cost = (
            base_cost
            * style_multiplier.cost_factor
            * size_multiplier.factor
            * regional.cost_multiplier
            * room_data.complexity_factor
        )

        materials = adjusted_cost * MATERIALS_SHARE
        labor = adjusted_cost * LABOR_SHARE * room_data.labor_multiplier * regional.labor_multiplier
        permits = adjusted_cost * PERMITS_SHARE
        overhead = adjusted_cost * OVERHEAD_SHARE
        contingency = adjusted_cost * CONTINGENCY_SHARE

        total = materials + labor + permits + overhead + contingency

        return CostBreakdown(
            materials=_whole(materials),
            labor=_whole(labor),
            permits=_whole(permits),
            overhead=_whole(overhead),
            contingency=_whole(contingency),
            total=_whole(total),
        )

    @classmethod
    def estimate_roi(
        cls,
        total_investment: float,
        current_property_value: float,
        room_type: str,
        quality_level: str = "mid-range"
    ) -> ROIMetrics:
        """
        Estimate value increase and return figures for an investment.

        The payback and annual return treat the value increase as if it
        earned a 1% annual rental-equivalent yield.
        """
        roi_factor = ROIDatabase.get_roi_factor(room_type, quality_level)
        estimated_value_increase = total_investment * roi_factor

        if total_investment:
            roi_percentage = (estimated_value_increase / total_investment) * 100
        else:
            roi_percentage = 0.0

        monthly_rent_increase = estimated_value_increase * RENTAL_YIELD / 12
        if monthly_rent_increase > 0:
            payback_timeline_months = _whole(total_investment / monthly_rent_increase)
        else:
            payback_timeline_months = 0

        annual_return = estimated_value_increase * RENTAL_YIELD
        five_year_projection = (
            current_property_value
            + estimated_value_increase
            + estimated_value_increase * ANNUAL_APPRECIATION * PROJECTION_YEARS
        )

        return ROIMetrics(
            total_investment=total_investment,
            estimated_value_increase=_whole(estimated_value_increase),
            roi_percentage=round_half_up(roi_percentage, 2),
            payback_timeline_months=payback_timeline_months,
            annual_return=_whole(annual_return),
            five_year_projection=_whole(five_year_projection),
        )

    @classmethod
    def get_market_comparison(cls, room_type: str, region: str = "suburban") -> MarketComparison:
        """Get regional industry benchmarks for a room type."""
        benchmark = ROIDatabase.get_market_benchmark(room_type)
        regional = ROIDatabase.get_regional_adjustment(region)

        return MarketComparison(
            average_roi=benchmark.roi,
            average_cost=_whole(benchmark.cost * regional.cost_multiplier),
            average_timeframe=benchmark.time,
            confidence_level=ROIDatabase.CONFIDENCE_LEVEL,
        )

    @classmethod
    def generate_recommendations(
        cls,
        calc_input: CalculationInput,
        cost_breakdown: CostBreakdown,
        roi_metrics: ROIMetrics,
        market_comparison: MarketComparison
    ) -> List[str]:
        """
        Build advice strings from independent rules.

        Every rule is checked; matches are appended in rule order.
        """
        recommendations = []
        room_type = RoomType.from_value(calc_input.room_type)
        quality_level = QualityLevel.from_value(calc_input.quality_level)

        if roi_metrics.roi_percentage > market_comparison.average_roi:
            recommendations.append("Excellent ROI potential - above market average")
        elif roi_metrics.roi_percentage < market_comparison.average_roi * 0.8:
            recommendations.append("Consider reducing scope or budget to improve ROI")

        if cost_breakdown.total > market_comparison.average_cost * 1.2:
            recommendations.append("Project cost is above market average - consider alternative materials")

        if roi_metrics.payback_timeline_months > LONG_PAYBACK_MONTHS:
            recommendations.append("Long payback period - consider phased approach")

        if room_type == RoomType.KITCHEN:
            recommendations.append("Kitchen renovations typically provide strong ROI - focus on quality appliances")
        elif room_type == RoomType.BATHROOM:
            recommendations.append("Bathroom updates are cost-effective - consider modern fixtures")

        if quality_level == QualityLevel.LUXURY and roi_metrics.roi_percentage < 60:
            recommendations.append("Luxury finishes may not provide proportional return in this market")

        return recommendations

    @classmethod
    def generate_risk_factors(cls, calc_input: CalculationInput, cost_breakdown: CostBreakdown) -> List[str]:
        """Build risk strings from independent rules."""
        risks = []
        room_type = RoomType.from_value(calc_input.room_type)
        quality_level = QualityLevel.from_value(calc_input.quality_level)

        if cost_breakdown.total and cost_breakdown.contingency / cost_breakdown.total < MIN_CONTINGENCY_RATIO:
            risks.append("Low contingency budget may lead to cost overruns")

        if room_type in (RoomType.BASEMENT, RoomType.ATTIC):
            risks.append("Conversion projects may face permitting delays")

        if room_type in (RoomType.KITCHEN, RoomType.BATHROOM):
            risks.append("Plumbing/electrical work may reveal hidden issues")

        if quality_level == QualityLevel.BUDGET:
            risks.append("Budget materials may require earlier replacement")

        return risks

    @classmethod
    def calculate_roi(cls, calc_input: CalculationInput) -> CalculationResult:
        """
        Run the full single-room calculation.

        Args:
            calc_input: Room renovation request

        Returns:
            CalculationResult stamped with the current UTC time
        """
        cost_breakdown = cls.calculate_renovation_cost(
            calc_input.room_type,
            calc_input.room_size,
            calc_input.style,
            calc_input.square_footage,
            calc_input.region,
            calc_input.quality_level,
        )

        roi_metrics = cls.estimate_roi(
            cost_breakdown.total,
            calc_input.current_property_value,
            calc_input.room_type,
            calc_input.quality_level,
        )

        market_comparison = cls.get_market_comparison(calc_input.room_type, calc_input.region)

        recommendations = cls.generate_recommendations(
            calc_input, cost_breakdown, roi_metrics, market_comparison
        )
        risk_factors = cls.generate_risk_factors(calc_input, cost_breakdown)

        return CalculationResult(
            input=calc_input,
            cost_breakdown=cost_breakdown,
            roi_metrics=roi_metrics,
            market_comparison=market_comparison,
            recommendations=tuple(recommendations),
            risk_factors=tuple(risk_factors),
        )

    @classmethod
    def calculate_multi_room_roi(cls, rooms: List[MultiRoomInput], total_budget: float) -> MultiRoomResult:
        """
        Calculate each room independently, then combine.

        Args:
            rooms: Room requests; priority is carried but not weighted
            total_budget: Budget the combined cost is checked against

        Returns:
            MultiRoomResult with per-room results and a cost-weighted summary
        """
        individual = [cls.calculate_roi(room) for room in rooms]

        total_cost = sum(result.cost_breakdown.total for result in individual)
        total_value_increase = sum(result.roi_metrics.estimated_value_increase for result in individual)
        total_roi = (total_value_increase / total_cost) * 100 if total_cost else 0.0

        weighted_payback = 0.0
        if total_cost:
            for result in individual:
                weight = result.cost_breakdown.total / total_cost
                weighted_payback += result.roi_metrics.payback_timeline_months * weight

        recommendations = [
            f"Total project cost: ${total_cost:,}",
            f"Combined ROI: {total_roi:.1f}%",
            f"Weighted payback: {_whole(weighted_payback)} months",
        ]

        if total_cost > total_budget:
            recommendations.append("Consider phasing project to stay within budget")

        return MultiRoomResult(
            individual=tuple(individual),
            combined=CombinedSummary(
                total_cost=total_cost,
                total_roi=total_roi,
                weighted_payback=weighted_payback,
                recommendations=tuple(recommendations),
            ),
        )


def compare_quality_levels(calc_input: CalculationInput) -> Dict[str, Dict[str, float]]:
    """
    Compare cost and ROI across every quality level for one room.

    Args:
        calc_input: Room request; its own quality level is ignored

    Returns:
        Dictionary mapping quality level to total cost and ROI percentage
    """
    results = {}

    for level in QualityLevel:
        cost = ROICalculator.calculate_renovation_cost(
            calc_input.room_type,
            calc_input.room_size,
            calc_input.style,
            calc_input.square_footage,
            calc_input.region,
            level,
        )
        metrics = ROICalculator.estimate_roi(
            cost.total, calc_input.current_property_value, calc_input.room_type, level
        )
        results[level.value] = {
            "total_cost": cost.total,
            "roi_percentage": metrics.roi_percentage,
        }

    return results
