"""
Models package for API data structures.
Imports all models for easy access.
"""

# Observation models
from .observation_models import HourlyObservation, DataDateRange, StoreSummary

# Analytics models
from .analytics_models import (
    MonthlyPriceComparison,
    PeakHourRisk,
    SeasonalInsight,
    SeasonalInsights,
    TwelveCPSavingsData
)

# Simulator models
from .simulator_models import (
    StrategyType,
    StrategyPolicy,
    BaselineCost,
    StrategyCost,
    SavingsBreakdown,
    SavingsSimulatorResult
)

# Historical peak models
from .peak_models import (
    MonthlyDemandPeak,
    AllTimePeakHour,
    PeakHourCount,
    HistoricalPeakStats,
    MonthPeakPattern,
    HourPeakPattern,
    DayOfWeekPeakPattern,
    PeakPatterns,
    YearlyPeakTrend,
    HistoricalPeaksData
)

# Response models
from .response_models import (
    NotificationSeverity,
    Notification,
    AnalysisStatus,
    AnalysisOutcome,
    NotificationFeed,
    TransmissionAdderResponse,
    APIInfo,
    HealthResponse
)

__all__ = [
    # Observation models
    "HourlyObservation",
    "DataDateRange",
    "StoreSummary",

    # Analytics models
    "MonthlyPriceComparison",
    "PeakHourRisk",
    "SeasonalInsight",
    "SeasonalInsights",
    "TwelveCPSavingsData",

    # Simulator models
    "StrategyType",
    "StrategyPolicy",
    "BaselineCost",
    "StrategyCost",
    "SavingsBreakdown",
    "SavingsSimulatorResult",

    # Historical peak models
    "MonthlyDemandPeak",
    "AllTimePeakHour",
    "PeakHourCount",
    "HistoricalPeakStats",
    "MonthPeakPattern",
    "HourPeakPattern",
    "DayOfWeekPeakPattern",
    "PeakPatterns",
    "YearlyPeakTrend",
    "HistoricalPeaksData",

    # Response models
    "NotificationSeverity",
    "Notification",
    "AnalysisStatus",
    "AnalysisOutcome",
    "NotificationFeed",
    "TransmissionAdderResponse",
    "APIInfo",
    "HealthResponse"
]
