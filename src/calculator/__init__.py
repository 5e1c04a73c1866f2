from .roi_data import ROIDatabase, RoomType, RoomSize, Region, QualityLevel, RoomCostData, MarketBenchmark, DetailedBenchmark, RegionalMarketData
from .roi_calculator import ROICalculator, CalculationInput, MultiRoomInput, CostBreakdown, ROIMetrics, MarketComparison, CalculationResult, CombinedSummary, MultiRoomResult, compare_quality_levels, round_half_up
from .insights import roi_rating, payback_status, compare_to_benchmarks, value_projection, cost_shares, BenchmarkDelta, ProjectionPoint
