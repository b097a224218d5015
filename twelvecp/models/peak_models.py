"""
Models for historical demand-based 12CP peaks.
"""

from pydantic import BaseModel
from typing import Dict, List, Optional

from .observation_models import DataDateRange


class MonthlyDemandPeak(BaseModel):
    """The highest-demand hour of one month."""
    month_key: str
    month_label: str
    peak_timestamp: str
    peak_demand_mw: float
    peak_hour: int
    price_at_peak: float
    day_of_week: str
    year: int


class AllTimePeakHour(BaseModel):
    """One of the highest-demand hours in the window."""
    rank: int
    timestamp: str
    demand_mw: float
    price_at_peak: float
    hour: int
    day_of_week: str
    month: int
    month_name: str
    year: int


class PeakHourCount(BaseModel):
    """How often an hour of day hosted a monthly peak."""
    hour: int
    count: int
    label: str


class HistoricalPeakStats(BaseModel):
    """Summary over the monthly demand peaks."""
    all_time_peak_mw: float
    all_time_peak_timestamp: Optional[str] = None
    avg_monthly_peak_mw: float
    common_peak_hours: List[PeakHourCount]
    winter_avg_peak_mw: float
    summer_avg_peak_mw: float
    peaks_by_year: Dict[int, List[MonthlyDemandPeak]] = {}


class MonthPeakPattern(BaseModel):
    """High-demand hours falling in one calendar month."""
    month: int
    month_name: str
    avg_peak: float
    max_peak: float
    peak_count: int


class HourPeakPattern(BaseModel):
    """High-demand hours falling in one hour of day."""
    hour: int
    avg_peak: float
    max_peak: float
    peak_count: int


class DayOfWeekPeakPattern(BaseModel):
    """High-demand hours falling on one weekday."""
    day: str
    day_index: int  # 0 = Monday
    avg_peak: float
    max_peak: float
    peak_count: int


class PeakPatterns(BaseModel):
    """Distribution of high-demand hours, each list busiest bucket first."""
    high_demand_threshold_mw: float
    by_month: List[MonthPeakPattern]
    by_hour: List[HourPeakPattern]
    by_day_of_week: List[DayOfWeekPeakPattern]


class YearlyPeakTrend(BaseModel):
    """Maximum and mean demand of one calendar year."""
    year: int
    max_peak: float
    avg_peak: float


class HistoricalPeaksData(BaseModel):
    """Model for historical peaks response."""
    peaks: List[MonthlyDemandPeak]
    all_time_peaks: List[AllTimePeakHour]
    stats: HistoricalPeakStats
    peak_patterns: PeakPatterns
    yearly_trends: List[YearlyPeakTrend]
    data_date_range: DataDateRange
    record_count: int
    years_analyzed: int
