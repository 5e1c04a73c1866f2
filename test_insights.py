#!/usr/bin/env python3
"""Tests for rating bands, benchmark deltas, projections and cost shares."""

import os
import sys
sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), 'src'))

from dataclasses import replace

import pytest

from calculator import (
    ROICalculator,
    CalculationInput,
    CostBreakdown,
    roi_rating,
    payback_status,
    compare_to_benchmarks,
    value_projection,
    cost_shares,
)


@pytest.fixture
def kitchen_result():
    return ROICalculator.calculate_roi(CalculationInput(
        room_type="kitchen",
        room_size="medium",
        style="modern",
        square_footage=200,
        current_property_value=500000,
    ))


@pytest.mark.parametrize("roi, expected", [
    (95, "Excellent"),
    (80, "Excellent"),
    (79.9, "Good"),
    (60, "Good"),
    (40, "Fair"),
    (12, "Poor"),
])
def test_roi_rating(roi, expected):
    assert roi_rating(roi) == expected


@pytest.mark.parametrize("months, expected", [
    (6, "Quick"),
    (24, "Quick"),
    (48, "Moderate"),
    (72, "Slow"),
    (73, "Very Slow"),
])
def test_payback_status(months, expected):
    assert payback_status(months) == expected


def test_compare_to_benchmarks(kitchen_result):
    deltas = {d.metric: d for d in compare_to_benchmarks(kitchen_result.roi_metrics, kitchen_result.market_comparison)}

    assert list(deltas) == ["roi", "cost", "timeline"]

    assert deltas["roi"].difference == pytest.approx(3.0)
    assert deltas["roi"].is_favorable
    assert deltas["roi"].label == "+3.0% above market"

    assert deltas["cost"].difference == 116000
    assert not deltas["cost"].is_favorable
    assert deltas["cost"].label == "$116,000 above market"

    assert deltas["timeline"].difference == 1582
    assert not deltas["timeline"].is_favorable
    assert deltas["timeline"].label == "1582 months slower"


def test_compare_to_benchmarks_favorable_side(kitchen_result):
    metrics = replace(
        kitchen_result.roi_metrics,
        roi_percentage=50.0,
        total_investment=20000,
        payback_timeline_months=12,
    )

    deltas = {d.metric: d for d in compare_to_benchmarks(metrics, kitchen_result.market_comparison)}

    assert deltas["roi"].label == "-22.0% below market"
    assert deltas["cost"].label == "$5,000 below market"
    assert deltas["cost"].is_favorable
    assert deltas["timeline"].label == "6 months faster"
    assert deltas["timeline"].is_favorable


def test_value_projection(kitchen_result):
    points = value_projection(kitchen_result.roi_metrics)

    assert [p.month for p in points] == list(range(0, 61, 6))
    assert points[0].value == 105750
    assert points[0].cumulative == 105750
    assert points[-1].year == 5.0
    values = [p.value for p in points]
    assert values == sorted(values)
    assert all(p.cumulative >= p.value for p in points)


def test_cost_shares(kitchen_result):
    shares = cost_shares(kitchen_result.cost_breakdown)

    assert shares["materials"] == 34.0
    assert shares["labor"] == 44.7
    assert shares["contingency"] == 8.5
    assert sum(shares.values()) == pytest.approx(100, abs=0.5)


def test_cost_shares_zero_total():
    empty = CostBreakdown(materials=0, labor=0, permits=0, overhead=0, contingency=0, total=0)
    assert cost_shares(empty) == {
        "materials": 0.0, "labor": 0.0, "permits": 0.0, "overhead": 0.0, "contingency": 0.0,
    }


def test_cost_shares_round_halves_up():
    breakdown = CostBreakdown(materials=1, labor=15, permits=0, overhead=0, contingency=0, total=16)

    shares = cost_shares(breakdown)

    assert shares["materials"] == 6.3
    assert shares["labor"] == 93.8
