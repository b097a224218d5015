"""
Models for 12CP price analytics.
"""

from pydantic import BaseModel
from typing import List

from .observation_models import DataDateRange


class MonthlyPriceComparison(BaseModel):
    """Average price vs. the most expensive hour-of-day within one month."""
    month_key: str  # YYYY-MM
    month_label: str  # "Jan 25"
    avg_price: float
    peak_hour_price: float
    peak_hour: int
    savings_opportunity: float
    total_hours: int


class PeakHourRisk(BaseModel):
    """Risk profile for one hour of day across the whole look-back window."""
    hour: int
    occurrences: int
    avg_price_at_peak: float
    risk_score: int  # one of 10, 30, 50, 70, 90
    seasonal_pattern: str


class SeasonalInsight(BaseModel):
    """Peak price aggregate for one season."""
    avg_peak: float
    risk_level: str  # "Low", "Moderate", "High" or "Unknown" for an empty season
    month_count: int


class SeasonalInsights(BaseModel):
    """Winter, summer and shoulder season aggregates."""
    winter: SeasonalInsight
    summer: SeasonalInsight
    shoulder: SeasonalInsight


class TwelveCPSavingsData(BaseModel):
    """Complete result of one 12CP analysis run."""
    monthly_comparisons: List[MonthlyPriceComparison]
    annual_avg_price: float  # mean of monthly averages
    annual_peak_price: float  # mean of monthly peak-hour prices
    annual_avg_price_weighted: float  # mean of every raw hourly price
    total_potential_savings: float
    peak_hour_risks: List[PeakHourRisk]
    high_risk_hours: List[int]
    safe_hours: List[int]
    seasonal_insights: SeasonalInsights
    data_date_range: DataDateRange
    record_count: int
