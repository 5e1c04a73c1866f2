"""
DesignROI - Result Insights

Derived figures shown next to an ROI result: rating bands, benchmark
deltas, a value projection series and category cost shares.
"""

from dataclasses import dataclass
from typing import Dict, List

from .roi_calculator import CostBreakdown, MarketComparison, ROIMetrics, round_half_up


MONTHLY_APPRECIATION = 0.005  # 6% a year
PROJECTION_STEP_MONTHS = 6
PROJECTION_HORIZON_MONTHS = 60


@dataclass
class BenchmarkDelta:
    """User figure against the market figure for one metric."""
    metric: str
    user: float
    market: float
    difference: float
    is_favorable: bool
    label: str


@dataclass
class ProjectionPoint:
    """Projected value of the improvement at a point in time."""
    month: int
    year: float
    value: int
    cumulative: int


def roi_rating(roi_percentage: float) -> str:
    """Grade an ROI percentage."""
    if roi_percentage >= 80:
        return "Excellent"
    if roi_percentage >= 60:
        return "Good"
    if roi_percentage >= 40:
        return "Fair"
    return "Poor"


def payback_status(months: int) -> str:
    """Describe how quickly an investment pays back."""
    if months <= 24:
        return "Quick"
    if months <= 48:
        return "Moderate"
    if months <= 72:
        return "Slow"
    return "Very Slow"


def compare_to_benchmarks(metrics: ROIMetrics, comparison: MarketComparison) -> List[BenchmarkDelta]:
    """
    Compare a result with market averages.

    Higher ROI is favorable; lower cost and a shorter payback are favorable.
    """
    roi_diff = metrics.roi_percentage - comparison.average_roi
    cost_diff = metrics.total_investment - comparison.average_cost
    time_diff = metrics.payback_timeline_months - comparison.average_timeframe

    if roi_diff > 0:
        roi_label = f"+{roi_diff:.1f}% above market"
    else:
        roi_label = f"{roi_diff:.1f}% below market"

    if cost_diff < 0:
        cost_label = f"${abs(cost_diff):,.0f} below market"
    else:
        cost_label = f"${cost_diff:,.0f} above market"

    if time_diff < 0:
        time_label = f"{abs(time_diff)} months faster"
    else:
        time_label = f"{time_diff} months slower"

    return [
        BenchmarkDelta("roi", metrics.roi_percentage, comparison.average_roi, roi_diff, roi_diff > 0, roi_label),
        BenchmarkDelta("cost", metrics.total_investment, comparison.average_cost, cost_diff, cost_diff < 0, cost_label),
        BenchmarkDelta(
            "timeline",
            metrics.payback_timeline_months,
            comparison.average_timeframe,
            time_diff,
            time_diff < 0,
            time_label,
        ),
    ]


def value_projection(metrics: ROIMetrics) -> List[ProjectionPoint]:
    """Project the value increase every six months over five years."""
    points = []
    base_value = metrics.estimated_value_increase

    for month in range(0, PROJECTION_HORIZON_MONTHS + 1, PROJECTION_STEP_MONTHS):
        appreciated = base_value * (1 + MONTHLY_APPRECIATION) ** month
        points.append(ProjectionPoint(
            month=month,
            year=round_half_up(month / 12, 1),
            value=int(round_half_up(appreciated)),
            cumulative=int(round_half_up(appreciated + metrics.annual_return * (month / 12))),
        ))

    return points


def cost_shares(breakdown: CostBreakdown) -> Dict[str, float]:
    """Percentage of the total taken by each cost category."""
    categories = {
        "materials": breakdown.materials,
        "labor": breakdown.labor,
        "permits": breakdown.permits,
        "overhead": breakdown.overhead,
        "contingency": breakdown.contingency,
    }
    if not breakdown.total:
        return {name: 0.0 for name in categories}
    return {name: round_half_up(value / breakdown.total * 100, 1) for name, value in categories.items()}
