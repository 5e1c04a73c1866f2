#!/usr/bin/env python3
"""Tests for the renovation cost and ROI engine."""

import os
import sys
sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), 'src'))

from dataclasses import FrozenInstanceError, replace
from itertools import product

import pytest

from calculator import (
    ROICalculator,
    ROIDatabase,
    CalculationInput,
    MultiRoomInput,
    CostBreakdown,
    ROIMetrics,
    MarketComparison,
    RoomType,
    QualityLevel,
    Region,
    RoomSize,
    compare_quality_levels,
    round_half_up,
)


def kitchen_input(**overrides):
    fields = dict(
        room_type="kitchen",
        room_size="medium",
        style="modern",
        square_footage=200,
        current_property_value=500000,
        region="suburban",
        quality_level="mid-range",
    )
    fields.update(overrides)
    return CalculationInput(**fields)


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(3.5) == 4
    assert round_half_up(1.005 * 1000) == 1005


def test_enum_lookup_fallbacks():
    assert RoomType.from_value("KITCHEN ") == RoomType.KITCHEN
    assert RoomType.from_value("office") == RoomType.HOME_OFFICE
    assert RoomType.from_value("garage") == RoomType.LIVING_ROOM
    assert RoomType.from_value(None) == RoomType.LIVING_ROOM
    assert RoomSize.from_value("huge") == RoomSize.MEDIUM
    assert Region.from_value("moon") == Region.SUBURBAN
    assert QualityLevel.from_value("mid_range") == QualityLevel.MID_RANGE
    assert QualityLevel.from_value("platinum") == QualityLevel.MID_RANGE


def test_kitchen_cost_breakdown():
    cost = ROICalculator.calculate_renovation_cost("kitchen", "medium", "modern", 200)

    assert cost.materials == 48000
    assert cost.labor == 63000
    assert cost.permits == 6000
    assert cost.overhead == 12000
    assert cost.contingency == 12000
    assert cost.total == 141000


def test_style_does_not_change_cost():
    modern = ROICalculator.calculate_renovation_cost("bathroom", "small", "modern", 80)
    rustic = ROICalculator.calculate_renovation_cost("bathroom", "small", "rustic", 80)
    assert modern == rustic


def test_cost_scales_with_quality_size_and_region():
    base = ROICalculator.calculate_renovation_cost("bedroom", "medium", "modern", 150)
    luxury = ROICalculator.calculate_renovation_cost("bedroom", "medium", "modern", 150, quality_level="luxury")
    budget = ROICalculator.calculate_renovation_cost("bedroom", "medium", "modern", 150, quality_level="budget")
    large = ROICalculator.calculate_renovation_cost("bedroom", "large", "modern", 150)
    city = ROICalculator.calculate_renovation_cost("bedroom", "medium", "modern", 150, region="major_city")

    assert budget.total < base.total < luxury.total
    assert large.total > base.total
    assert city.total > base.total
    # Labor picks up the regional labor multiplier on top of the cost multiplier
    assert city.labor / base.labor == pytest.approx(1.3 * 1.4, rel=1e-3)


def test_unknown_values_price_as_defaults():
    unknown = ROICalculator.calculate_renovation_cost("garage", "huge", "modern", 100, region="moon", quality_level="gold")
    default = ROICalculator.calculate_renovation_cost("living_room", "medium", "modern", 100)
    assert unknown == default


def test_living_room_cost_is_exact():
    cost = ROICalculator.calculate_renovation_cost("living_room", "medium", "modern", 100)
    assert cost == CostBreakdown(materials=4800, labor=4200, permits=600, overhead=1200, contingency=1200, total=12000)


def test_estimate_roi_kitchen():
    metrics = ROICalculator.estimate_roi(141000, 500000, "kitchen", "mid-range")

    assert metrics.total_investment == 141000
    assert metrics.estimated_value_increase == 105750
    assert metrics.roi_percentage == pytest.approx(75.0)
    assert metrics.payback_timeline_months == 1600
    assert metrics.annual_return == 1058
    assert metrics.five_year_projection > 500000 + 105750


def test_estimate_roi_zero_investment():
    metrics = ROICalculator.estimate_roi(0, 300000, "kitchen")

    assert metrics.roi_percentage == 0
    assert metrics.payback_timeline_months == 0
    assert metrics.estimated_value_increase == 0
    assert metrics.five_year_projection == 300000


def test_roi_factor_lookup():
    assert ROIDatabase.get_roi_factor("kitchen", "luxury") == 0.85
    assert ROIDatabase.get_roi_factor("bathroom", "budget") == 0.60
    # Unknown room and quality both normalize before the lookup
    assert ROIDatabase.get_roi_factor("garage", "luxury") == 0.70
    assert ROIDatabase.get_roi_factor("garage", "gold") == 0.60


def test_market_comparison_regional_cost():
    suburban = ROICalculator.get_market_comparison("kitchen")
    city = ROICalculator.get_market_comparison("kitchen", "major_city")

    assert suburban == MarketComparison(average_roi=72, average_cost=25000, average_timeframe=18, confidence_level=85)
    assert city.average_cost == 32500
    assert city.average_roi == 72


def test_full_kitchen_calculation():
    result = ROICalculator.calculate_roi(kitchen_input())

    assert result.cost_breakdown.total == 141000
    assert result.roi_metrics.roi_percentage == pytest.approx(75.0)
    assert list(result.recommendations) == [
        "Excellent ROI potential - above market average",
        "Project cost is above market average - consider alternative materials",
        "Long payback period - consider phased approach",
        "Kitchen renovations typically provide strong ROI - focus on quality appliances",
    ]
    assert list(result.risk_factors) == [
        "Low contingency budget may lead to cost overruns",
        "Plumbing/electrical work may reveal hidden issues",
    ]
    assert result.created_at.tzinfo is not None


def test_contingency_at_threshold_is_not_a_risk():
    result = ROICalculator.calculate_roi(kitchen_input(room_type="living_room", square_footage=100))

    assert result.cost_breakdown.total == 12000
    assert list(result.risk_factors) == []
    assert list(result.recommendations) == [
        "Excellent ROI potential - above market average",
        "Long payback period - consider phased approach",
    ]


def test_risk_rules():
    budget_bath = ROICalculator.calculate_roi(kitchen_input(room_type="bathroom", quality_level="budget"))
    assert "Budget materials may require earlier replacement" in budget_bath.risk_factors
    assert "Plumbing/electrical work may reveal hidden issues" in budget_bath.risk_factors

    attic = ROICalculator.calculate_roi(kitchen_input(room_type="attic"))
    assert "Conversion projects may face permitting delays" in attic.risk_factors


def test_recommendation_rules_on_weak_luxury_result():
    calc_input = kitchen_input(room_type="dining_room", quality_level="luxury")
    cost = CostBreakdown(materials=400, labor=350, permits=50, overhead=100, contingency=100, total=1000)
    metrics = ROIMetrics(
        total_investment=1000,
        estimated_value_increase=300,
        roi_percentage=30.0,
        payback_timeline_months=40,
        annual_return=3,
        five_year_projection=500345,
    )
    market = MarketComparison(average_roi=48, average_cost=10000, average_timeframe=6, confidence_level=85)

    recommendations = ROICalculator.generate_recommendations(calc_input, cost, metrics, market)

    assert recommendations == [
        "Consider reducing scope or budget to improve ROI",
        "Luxury finishes may not provide proportional return in this market",
    ]


def test_zero_total_has_no_contingency_risk():
    cost = CostBreakdown(materials=0, labor=0, permits=0, overhead=0, contingency=0, total=0)
    assert ROICalculator.generate_risk_factors(kitchen_input(room_type="bedroom"), cost) == []


def test_result_to_dict_shape():
    data = ROICalculator.calculate_roi(kitchen_input(timeline=3)).to_dict()

    assert set(data) == {
        "input", "costBreakdown", "roiMetrics", "marketComparison",
        "recommendations", "riskFactors", "createdAt",
    }
    assert data["input"]["roomType"] == "kitchen"
    assert data["input"]["timeline"] == 3
    assert data["roiMetrics"]["paybackTimelineMonths"] == 1600
    assert data["marketComparison"]["averageROI"] == 72


def test_multi_room_combined_summary():
    rooms = [
        MultiRoomInput(**vars(kitchen_input()), priority=1),
        MultiRoomInput(**vars(kitchen_input(room_type="living_room", square_footage=100)), priority=2),
    ]

    result = ROICalculator.calculate_multi_room_roi(rooms, total_budget=100000)

    assert len(result.individual) == 2
    assert result.combined.total_cost == 153000
    assert result.combined.total_roi == pytest.approx(112950 / 153000 * 100)
    assert result.combined.weighted_payback == pytest.approx((1600 * 141000 + 2000 * 12000) / 153000)
    assert list(result.combined.recommendations) == [
        "Total project cost: $153,000",
        "Combined ROI: 73.8%",
        "Weighted payback: 1631 months",
        "Consider phasing project to stay within budget",
    ]


def test_multi_room_within_budget_and_empty():
    rooms = [MultiRoomInput(**vars(kitchen_input(room_type="living_room", square_footage=100)))]
    within = ROICalculator.calculate_multi_room_roi(rooms, total_budget=12000)
    assert "Consider phasing project to stay within budget" not in within.combined.recommendations

    empty = ROICalculator.calculate_multi_room_roi([], total_budget=0)
    assert list(empty.individual) == []
    assert empty.combined.total_cost == 0
    assert empty.combined.total_roi == 0
    assert empty.combined.weighted_payback == 0
    assert list(empty.combined.recommendations) == [
        "Total project cost: $0",
        "Combined ROI: 0.0%",
        "Weighted payback: 0 months",
    ]


def test_compare_quality_levels():
    comparison = compare_quality_levels(kitchen_input())

    assert list(comparison) == ["budget", "mid-range", "luxury"]
    assert comparison["mid-range"]["total_cost"] == 141000
    assert comparison["budget"]["total_cost"] < comparison["mid-range"]["total_cost"] < comparison["luxury"]["total_cost"]
    assert comparison["luxury"]["roi_percentage"] == pytest.approx(85.0)


def test_cost_breakdown_invariants_for_every_combination():
    for room_type, room_size, quality, region in product(RoomType, RoomSize, QualityLevel, Region):
        cost = ROICalculator.calculate_renovation_cost(
            room_type.value, room_size.value, "modern", 137, region=region.value, quality_level=quality.value
        )
        parts = [cost.materials, cost.labor, cost.permits, cost.overhead, cost.contingency]

        assert all(part >= 0 for part in parts), (room_type, room_size, quality, region)
        assert abs(sum(parts) - cost.total) <= 4, (room_type, room_size, quality, region)


@pytest.mark.parametrize("investment", [1000, 12345, 141000, 987654])
def test_doubling_investment_doubles_returns(investment):
    single = ROICalculator.estimate_roi(investment, 400000, "bathroom", "luxury")
    double = ROICalculator.estimate_roi(investment * 2, 400000, "bathroom", "luxury")

    assert abs(double.estimated_value_increase - 2 * single.estimated_value_increase) <= 1
    assert abs(double.annual_return - 2 * single.annual_return) <= 1
    assert double.roi_percentage == single.roi_percentage


def test_roi_percentage_matches_factor_table():
    checked = 0
    for room_type, factors in ROIDatabase.ROI_FACTORS.items():
        for quality, factor in factors.items():
            metrics = ROICalculator.estimate_roi(25000, 300000, room_type.value, quality.value)
            assert metrics.roi_percentage == pytest.approx(factor * 100), (room_type, quality)
            checked += 1

    assert checked == 24


def test_calculate_roi_is_repeatable():
    first = ROICalculator.calculate_roi(kitchen_input(region="rural", quality_level="budget"))
    second = ROICalculator.calculate_roi(kitchen_input(region="rural", quality_level="budget"))

    assert replace(first, created_at=second.created_at) == second


def test_unknown_room_matches_living_room_result():
    unknown = ROICalculator.calculate_roi(kitchen_input(room_type="unknown_room_xyz"))
    living = ROICalculator.calculate_roi(kitchen_input(room_type="living_room"))

    assert unknown.cost_breakdown == living.cost_breakdown
    assert unknown.roi_metrics == living.roi_metrics
    assert unknown.market_comparison == living.market_comparison
    assert unknown.recommendations == living.recommendations
    assert unknown.risk_factors == living.risk_factors
    assert unknown.input.room_type == "unknown_room_xyz"


def test_property_value_only_moves_projection():
    base = ROICalculator.calculate_roi(kitchen_input(room_type="living_room", square_footage=100, current_property_value=400000))
    doubled = ROICalculator.calculate_roi(kitchen_input(room_type="living_room", square_footage=100, current_property_value=800000))

    assert doubled.roi_metrics.five_year_projection - base.roi_metrics.five_year_projection == 400000
    assert doubled.cost_breakdown == base.cost_breakdown
    assert doubled.roi_metrics.roi_percentage == base.roi_metrics.roi_percentage


def test_results_are_immutable():
    result = ROICalculator.calculate_roi(kitchen_input())

    with pytest.raises(FrozenInstanceError):
        result.cost_breakdown.total = 1
    with pytest.raises(FrozenInstanceError):
        result.roi_metrics.roi_percentage = 99.0
    with pytest.raises(FrozenInstanceError):
        result.recommendations = ()
    assert isinstance(result.recommendations, tuple)
    assert isinstance(result.risk_factors, tuple)
