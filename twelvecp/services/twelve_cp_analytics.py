"""
12CP price analytics.

Pure functions that turn a window of hourly pool prices into the
TwelveCPSavingsData aggregate:

    - monthly average vs. peak hour-of-day price comparisons
    - a 24-hour risk profile scored against the annual average price
    - high-risk / safe hour partitions
    - winter, summer and shoulder season insights

Annual figures are two-stage means: the mean of the monthly values, not of
the raw hours. Months with fewer observed hours therefore carry the same
weight as full months. The single-stage mean is reported separately as
`annual_avg_price_weighted`.
"""

from typing import Dict, List, Optional, Tuple

import pandas as pd

from ..models import (
    DataDateRange,
    MonthlyPriceComparison,
    PeakHourRisk,
    SeasonalInsight,
    SeasonalInsights,
    TwelveCPSavingsData
)
from ..utils.rounding import round_price
from ..utils.time_utils import hour_of_day, month_label, to_grid_local

HOURS_IN_DAY = 24
DEFAULT_PEAK_HOUR = 17

# (multiple of annual average price, score), checked top-down, strict >
RISK_THRESHOLDS: List[Tuple[float, int]] = [
    (1.5, 90),
    (1.2, 70),
    (1.0, 50),
    (0.8, 30),
]
BASE_RISK_SCORE = 10
HIGH_RISK_MIN_SCORE = 70
SAFE_MAX_SCORE = 30

SEASON_MONTHS: Dict[str, Tuple[str, ...]] = {
    "winter": ("01", "02", "11", "12"),
    "summer": ("06", "07", "08"),
    "shoulder": ("03", "04", "05", "09", "10"),
}


def risk_score(avg_price: float, annual_avg_price: float) -> int:
    """Bucket an hour's average price against the annual average."""
    for multiple, score in RISK_THRESHOLDS:
        if avg_price > annual_avg_price * multiple:
            return score
    return BASE_RISK_SCORE


def seasonal_pattern(hour: int) -> str:
    """Label an hour of day with its load-shape band."""
    if 6 <= hour <= 9:
        return "Morning Ramp"
    elif 16 <= hour <= 20:
        return "Evening Peak"
    elif 0 <= hour <= 5:
        return "Off-Peak"
    elif 10 <= hour <= 15:
        return "Midday"
    else:
        return "Late Evening"


def season_risk_level(avg_peak: float, annual_peak_price: float) -> str:
    """Classify a season's average peak price against the annual peak average."""
    if avg_peak > annual_peak_price * 1.2:
        return "High"
    elif avg_peak > annual_peak_price * 1.0:
        return "Moderate"
    return "Low"


def prepare_observations(
    df: pd.DataFrame,
    grid_timezone: str,
    deduplicate: bool = False
) -> pd.DataFrame:
    """
    Normalize raw store rows for aggregation.

    Adds `month_key` (YYYY-MM on the grid calendar) and `hour` (the upstream
    hour_of_day when present, else the local timestamp hour, folded into
    0-23). Rows without a pool price are dropped.
    """
    frame = df[df['pool_price'].notna()].copy()
    if deduplicate:
        frame = frame.drop_duplicates(subset=['timestamp'], keep='first')

    if frame.empty:
        return frame

    local = to_grid_local(frame['timestamp'], grid_timezone)
    frame['month_key'] = local.dt.strftime('%Y-%m')
    frame['hour'] = hour_of_day(frame, local)
    frame['pool_price'] = frame['pool_price'].astype(float)
    return frame


def build_monthly_comparisons(
    frame: pd.DataFrame,
    default_peak_hour: int = DEFAULT_PEAK_HOUR
) -> List[MonthlyPriceComparison]:
    """Compare each month's average price with its most expensive hour of day."""
    comparisons = []
    for month_key, rows in frame.groupby('month_key', sort=True):
        avg_price = rows['pool_price'].mean()
        hourly_means = rows.groupby('hour')['pool_price'].mean()

        peak_hour = default_peak_hour
        peak_hour_price = float('-inf')
        for hour in range(HOURS_IN_DAY):
            if hour in hourly_means.index and hourly_means[hour] > peak_hour_price:
                peak_hour_price = float(hourly_means[hour])
                peak_hour = hour
        if peak_hour_price == float('-inf'):
            peak_hour_price = avg_price

        comparisons.append(MonthlyPriceComparison(
            month_key=month_key,
            month_label=month_label(month_key),
            avg_price=round_price(avg_price),
            peak_hour_price=round_price(peak_hour_price),
            peak_hour=peak_hour,
            savings_opportunity=round_price(peak_hour_price - avg_price),
            total_hours=int(len(rows))
        ))

    return comparisons


def build_peak_hour_risks(frame: pd.DataFrame, annual_avg_price: float) -> List[PeakHourRisk]:
    """Score every hour of day over the whole window."""
    hourly = frame.groupby('hour')['pool_price'].agg(['mean', 'count'])

    risks = []
    for hour in range(HOURS_IN_DAY):
        if hour in hourly.index:
            avg_price = float(hourly.loc[hour, 'mean'])
            occurrences = int(hourly.loc[hour, 'count'])
        else:
            avg_price, occurrences = 0.0, 0

        risks.append(PeakHourRisk(
            hour=hour,
            occurrences=occurrences,
            avg_price_at_peak=round_price(avg_price),
            risk_score=risk_score(avg_price, annual_avg_price),
            seasonal_pattern=seasonal_pattern(hour)
        ))

    return risks


def partition_hours(risks: List[PeakHourRisk]) -> Tuple[List[int], List[int]]:
    """
    Split hours into high-risk (score >= 70) and safe (score <= 30) lists.

    Both lists follow descending risk score; equal scores keep hour order.
    """
    by_risk = sorted(risks, key=lambda r: r.risk_score, reverse=True)
    high_risk = [r.hour for r in by_risk if r.risk_score >= HIGH_RISK_MIN_SCORE]
    safe = [r.hour for r in by_risk if r.risk_score <= SAFE_MAX_SCORE]
    return high_risk, safe


def build_seasonal_insights(
    comparisons: List[MonthlyPriceComparison],
    annual_peak_price: float
) -> SeasonalInsights:
    """Aggregate monthly peak prices by season."""
    insights = {}
    for season, months in SEASON_MONTHS.items():
        peaks = [m.peak_hour_price for m in comparisons if m.month_key[5:7] in months]
        if not peaks:
            insights[season] = SeasonalInsight(avg_peak=0.0, risk_level="Unknown", month_count=0)
            continue

        avg_peak = sum(peaks) / len(peaks)
        insights[season] = SeasonalInsight(
            avg_peak=round_price(avg_peak),
            risk_level=season_risk_level(avg_peak, annual_peak_price),
            month_count=len(peaks)
        )

    return SeasonalInsights(**insights)


def analyze_observations(
    df: pd.DataFrame,
    grid_timezone: str = "America/Edmonton",
    default_peak_hour: int = DEFAULT_PEAK_HOUR,
    deduplicate: bool = False
) -> Optional[TwelveCPSavingsData]:
    """
    Run the full 12CP analysis over a window of observations.

    Args:
        df: Rows with at least `timestamp` and `pool_price`, ordered by timestamp.
        grid_timezone: Zone used to read offset-carrying timestamps.
        default_peak_hour: Peak hour reported when a month has no hour buckets.
        deduplicate: Drop repeated timestamps before aggregating.

    Returns:
        TwelveCPSavingsData, or None when no priced rows remain.
    """
    frame = prepare_observations(df, grid_timezone, deduplicate=deduplicate)
    if frame.empty:
        return None

    comparisons = build_monthly_comparisons(frame, default_peak_hour)

    # Scoring baselines stay unrounded; only the reported figures are rounded
    annual_avg_price = sum(m.avg_price for m in comparisons) / len(comparisons)
    annual_peak_price = sum(m.peak_hour_price for m in comparisons) / len(comparisons)

    risks = build_peak_hour_risks(frame, annual_avg_price)
    high_risk_hours, safe_hours = partition_hours(risks)

    return TwelveCPSavingsData(
        monthly_comparisons=comparisons,
        annual_avg_price=round_price(annual_avg_price),
        annual_peak_price=round_price(annual_peak_price),
        annual_avg_price_weighted=round_price(frame['pool_price'].mean()),
        total_potential_savings=round_price(
            sum(m.savings_opportunity for m in comparisons)),
        peak_hour_risks=risks,
        high_risk_hours=high_risk_hours,
        safe_hours=safe_hours,
        seasonal_insights=build_seasonal_insights(comparisons, annual_peak_price),
        data_date_range=DataDateRange(
            start=str(frame['timestamp'].iloc[0]),
            end=str(frame['timestamp'].iloc[-1])
        ),
        record_count=int(len(frame))
    )
