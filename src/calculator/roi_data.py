"""
DesignROI - Renovation Reference Data

Room, quality, size and regional lookup tables used by the ROI calculator,
plus the industry benchmark figures shown next to each estimate.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping, Union


class RoomType(str, Enum):
    """Room types the calculator prices."""
    KITCHEN = "kitchen"
    BATHROOM = "bathroom"
    LIVING_ROOM = "living_room"
    BEDROOM = "bedroom"
    DINING_ROOM = "dining_room"
    HOME_OFFICE = "home_office"
    BASEMENT = "basement"
    ATTIC = "attic"

    @classmethod
    def from_value(cls, value: Union[str, "RoomType", None]) -> "RoomType":
        """Map a raw room type to a member, falling back to living room."""
        return _lookup(cls, value, ROOM_TYPE_ALIASES, cls.LIVING_ROOM)


class RoomSize(str, Enum):
    """Room size buckets."""
    SMALL = "small"              # Under 100 sq ft
    MEDIUM = "medium"            # 100-200 sq ft
    LARGE = "large"              # 200-400 sq ft
    EXTRA_LARGE = "extra_large"  # Over 400 sq ft

    @classmethod
    def from_value(cls, value: Union[str, "RoomSize", None]) -> "RoomSize":
        """Map a raw room size to a member, falling back to medium."""
        return _lookup(cls, value, {}, cls.MEDIUM)


class Region(str, Enum):
    """Market regions for pricing."""
    MAJOR_CITY = "major_city"
    SUBURBAN = "suburban"
    RURAL = "rural"

    @classmethod
    def from_value(cls, value: Union[str, "Region", None]) -> "Region":
        """Map a raw region to a member, falling back to suburban."""
        return _lookup(cls, value, {}, cls.SUBURBAN)


class QualityLevel(str, Enum):
    """Finish quality levels."""
    BUDGET = "budget"
    MID_RANGE = "mid-range"
    LUXURY = "luxury"

    @classmethod
    def from_value(cls, value: Union[str, "QualityLevel", None]) -> "QualityLevel":
        """Map a raw quality level to a member, falling back to mid-range."""
        return _lookup(cls, value, QUALITY_LEVEL_ALIASES, cls.MID_RANGE)


# Alternate spellings seen in stored designs and form payloads
ROOM_TYPE_ALIASES = {
    "office": RoomType.HOME_OFFICE,
}

QUALITY_LEVEL_ALIASES = {
    "mid_range": QualityLevel.MID_RANGE,
}


def _lookup(enum_cls, value, aliases: Dict[str, Enum], default: Enum):
    if isinstance(value, enum_cls):
        return value
    if not isinstance(value, str):
        return default

    key = value.strip().lower()
    if key in aliases:
        return aliases[key]
    try:
        return enum_cls(key)
    except ValueError:
        return default


@dataclass(frozen=True)
class RoomCostData:
    """Base renovation cost profile for a room type."""
    room_type: RoomType
    base_cost_per_sqft: float
    labor_multiplier: float
    complexity_factor: float


@dataclass(frozen=True)
class StyleMultiplier:
    """Cost factor for a finish quality level."""
    style: str
    cost_factor: float
    description: str


@dataclass(frozen=True)
class SizeMultiplier:
    """Cost factor for a room size bucket."""
    size: RoomSize
    factor: float
    description: str


@dataclass(frozen=True)
class RegionalAdjustment:
    """Cost and labor multipliers for a region."""
    region: Region
    cost_multiplier: float
    labor_multiplier: float


@dataclass(frozen=True)
class MarketBenchmark:
    """Industry averages for a room renovation."""
    roi: float   # percent
    cost: float  # currency, suburban baseline
    time: int    # months


@dataclass(frozen=True)
class DetailedBenchmark:
    """Extended benchmark figures served alongside an estimate."""
    average_roi: float
    average_cost: float
    average_timeframe: int
    popular_features: tuple
    cost_range: tuple  # (min, max)
    roi_range: tuple   # (min, max)


@dataclass(frozen=True)
class RegionalMarketData:
    """Regional market context."""
    cost_multiplier: float
    market_trends: str
    top_features: tuple


def _frozen(data: dict) -> Mapping:
    return MappingProxyType(data)


class ROIDatabase:
    """
    Static reference tables for renovation cost and ROI estimates.

    Figures are approximate US averages. Every table is read-only; the
    calculator only ever looks values up.
    """

    ROOM_BASE_COSTS: Mapping[RoomType, RoomCostData] = _frozen({
        RoomType.KITCHEN: RoomCostData(RoomType.KITCHEN, 300, 1.5, 2.0),
        RoomType.BATHROOM: RoomCostData(RoomType.BATHROOM, 250, 1.4, 1.8),
        RoomType.LIVING_ROOM: RoomCostData(RoomType.LIVING_ROOM, 120, 1.0, 1.0),
        RoomType.BEDROOM: RoomCostData(RoomType.BEDROOM, 100, 0.8, 0.8),
        RoomType.DINING_ROOM: RoomCostData(RoomType.DINING_ROOM, 110, 0.9, 0.9),
        RoomType.HOME_OFFICE: RoomCostData(RoomType.HOME_OFFICE, 130, 1.1, 1.1),
        RoomType.BASEMENT: RoomCostData(RoomType.BASEMENT, 90, 1.2, 1.3),
        RoomType.ATTIC: RoomCostData(RoomType.ATTIC, 95, 1.3, 1.4),
    })

    # "custom" is listed for display only; it is not an accepted quality level
    STYLE_MULTIPLIERS: Mapping[str, StyleMultiplier] = _frozen({
        QualityLevel.BUDGET.value: StyleMultiplier("budget", 0.6, "Basic materials and finishes"),
        QualityLevel.MID_RANGE.value: StyleMultiplier("mid-range", 1.0, "Standard materials and finishes"),
        QualityLevel.LUXURY.value: StyleMultiplier("luxury", 2.0, "Premium materials and finishes"),
        "custom": StyleMultiplier("custom", 2.5, "Custom materials and finishes"),
    })

    SIZE_MULTIPLIERS: Mapping[RoomSize, SizeMultiplier] = _frozen({
        RoomSize.SMALL: SizeMultiplier(RoomSize.SMALL, 0.7, "Under 100 sq ft"),
        RoomSize.MEDIUM: SizeMultiplier(RoomSize.MEDIUM, 1.0, "100-200 sq ft"),
        RoomSize.LARGE: SizeMultiplier(RoomSize.LARGE, 1.5, "200-400 sq ft"),
        RoomSize.EXTRA_LARGE: SizeMultiplier(RoomSize.EXTRA_LARGE, 2.0, "Over 400 sq ft"),
    })

    REGIONAL_ADJUSTMENTS: Mapping[Region, RegionalAdjustment] = _frozen({
        Region.MAJOR_CITY: RegionalAdjustment(Region.MAJOR_CITY, 1.3, 1.4),
        Region.SUBURBAN: RegionalAdjustment(Region.SUBURBAN, 1.0, 1.0),
        Region.RURAL: RegionalAdjustment(Region.RURAL, 0.8, 0.9),
    })

    # Share of the improvement cost recovered as property value
    ROI_FACTORS: Mapping[RoomType, Mapping[QualityLevel, float]] = _frozen({
        RoomType.KITCHEN: _frozen({QualityLevel.BUDGET: 0.65, QualityLevel.MID_RANGE: 0.75, QualityLevel.LUXURY: 0.85}),
        RoomType.BATHROOM: _frozen({QualityLevel.BUDGET: 0.60, QualityLevel.MID_RANGE: 0.70, QualityLevel.LUXURY: 0.80}),
        RoomType.LIVING_ROOM: _frozen({QualityLevel.BUDGET: 0.50, QualityLevel.MID_RANGE: 0.60, QualityLevel.LUXURY: 0.70}),
        RoomType.BEDROOM: _frozen({QualityLevel.BUDGET: 0.45, QualityLevel.MID_RANGE: 0.55, QualityLevel.LUXURY: 0.65}),
        RoomType.DINING_ROOM: _frozen({QualityLevel.BUDGET: 0.40, QualityLevel.MID_RANGE: 0.50, QualityLevel.LUXURY: 0.60}),
        RoomType.HOME_OFFICE: _frozen({QualityLevel.BUDGET: 0.55, QualityLevel.MID_RANGE: 0.65, QualityLevel.LUXURY: 0.75}),
        RoomType.BASEMENT: _frozen({QualityLevel.BUDGET: 0.50, QualityLevel.MID_RANGE: 0.60, QualityLevel.LUXURY: 0.70}),
        RoomType.ATTIC: _frozen({QualityLevel.BUDGET: 0.45, QualityLevel.MID_RANGE: 0.55, QualityLevel.LUXURY: 0.65}),
    })
    DEFAULT_ROI_FACTOR = 0.60

    MARKET_BENCHMARKS: Mapping[RoomType, MarketBenchmark] = _frozen({
        RoomType.KITCHEN: MarketBenchmark(roi=72, cost=25000, time=18),
        RoomType.BATHROOM: MarketBenchmark(roi=68, cost=18000, time=12),
        RoomType.LIVING_ROOM: MarketBenchmark(roi=58, cost=15000, time=10),
        RoomType.BEDROOM: MarketBenchmark(roi=52, cost=12000, time=8),
        RoomType.DINING_ROOM: MarketBenchmark(roi=48, cost=10000, time=6),
        RoomType.HOME_OFFICE: MarketBenchmark(roi=62, cost=16000, time=9),
        RoomType.BASEMENT: MarketBenchmark(roi=55, cost=20000, time=15),
        RoomType.ATTIC: MarketBenchmark(roi=50, cost=18000, time=12),
    })
    CONFIDENCE_LEVEL = 85

    DETAILED_BENCHMARKS: Mapping[RoomType, DetailedBenchmark] = _frozen({
        RoomType.KITCHEN: DetailedBenchmark(
            75, 28000, 18,
            ("quartz countertops", "stainless steel appliances", "subway tile backsplash"),
            (15000, 50000), (60, 90),
        ),
        RoomType.BATHROOM: DetailedBenchmark(
            70, 20000, 12,
            ("walk-in shower", "double vanity", "heated floors"),
            (10000, 35000), (55, 85),
        ),
        RoomType.LIVING_ROOM: DetailedBenchmark(
            60, 16000, 10,
            ("hardwood flooring", "built-in storage", "fireplace upgrade"),
            (8000, 25000), (45, 75),
        ),
        RoomType.BEDROOM: DetailedBenchmark(
            55, 12000, 8,
            ("closet organization", "luxury flooring", "ceiling fans"),
            (5000, 20000), (40, 70),
        ),
        RoomType.DINING_ROOM: DetailedBenchmark(
            50, 10000, 6,
            ("hardwood floors", "crown molding", "updated lighting"),
            (4000, 18000), (35, 65),
        ),
        RoomType.HOME_OFFICE: DetailedBenchmark(
            65, 16000, 9,
            ("built-in desk", "upgraded lighting", "sound insulation"),
            (8000, 25000), (50, 80),
        ),
        RoomType.BASEMENT: DetailedBenchmark(
            58, 22000, 15,
            ("waterproofing", "finished ceiling", "egress windows"),
            (12000, 35000), (45, 75),
        ),
        RoomType.ATTIC: DetailedBenchmark(
            53, 20000, 12,
            ("insulation upgrade", "dormer windows", "HVAC extension"),
            (10000, 32000), (40, 70),
        ),
    })

    REGIONAL_MARKET_DATA: Mapping[Region, RegionalMarketData] = _frozen({
        Region.MAJOR_CITY: RegionalMarketData(
            1.3, "High demand, premium pricing",
            ("luxury finishes", "smart home integration", "energy efficiency"),
        ),
        Region.SUBURBAN: RegionalMarketData(
            1.0, "Steady demand, moderate pricing",
            ("family-friendly features", "open floor plans", "storage solutions"),
        ),
        Region.RURAL: RegionalMarketData(
            0.8, "Value-focused, practical upgrades",
            ("durability", "low maintenance", "energy efficiency"),
        ),
    })

    COST_FACTORS: tuple = (
        "Material quality and availability",
        "Local labor costs",
        "Permit requirements",
        "Market demand",
    )

    ROI_INFLUENCES: tuple = (
        "Property location and market",
        "Quality of renovation",
        "Current market conditions",
        "Property type and age",
    )

    @classmethod
    def get_room_costs(cls, room_type) -> RoomCostData:
        """Get the base cost profile for a room type."""
        return cls.ROOM_BASE_COSTS[RoomType.from_value(room_type)]

    @classmethod
    def get_style_multiplier(cls, quality_level) -> StyleMultiplier:
        """Get the cost factor for a quality level."""
        return cls.STYLE_MULTIPLIERS[QualityLevel.from_value(quality_level).value]

    @classmethod
    def get_size_multiplier(cls, room_size) -> SizeMultiplier:
        """Get the cost factor for a room size."""
        return cls.SIZE_MULTIPLIERS[RoomSize.from_value(room_size)]

    @classmethod
    def get_regional_adjustment(cls, region) -> RegionalAdjustment:
        """Get the cost and labor multipliers for a region."""
        return cls.REGIONAL_ADJUSTMENTS[Region.from_value(region)]

    @classmethod
    def get_roi_factor(cls, room_type, quality_level) -> float:
        """Get the share of investment recovered as property value."""
        by_quality = cls.ROI_FACTORS.get(RoomType.from_value(room_type), {})
        return by_quality.get(QualityLevel.from_value(quality_level), cls.DEFAULT_ROI_FACTOR)

    @classmethod
    def get_market_benchmark(cls, room_type) -> MarketBenchmark:
        """Get industry averages for a room type."""
        return cls.MARKET_BENCHMARKS[RoomType.from_value(room_type)]

    @classmethod
    def get_detailed_benchmark(cls, room_type) -> DetailedBenchmark:
        """Get extended benchmark figures for a room type."""
        return cls.DETAILED_BENCHMARKS[RoomType.from_value(room_type)]

    @classmethod
    def get_regional_market_data(cls, region) -> RegionalMarketData:
        """Get market context for a region."""
        return cls.REGIONAL_MARKET_DATA[Region.from_value(region)]
