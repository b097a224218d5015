"""
Shared fixtures: synthetic hourly data and an in-memory observation store.
"""

from datetime import datetime

import pandas as pd
import pytest

from twelvecp.models import (
    DataDateRange,
    SeasonalInsight,
    SeasonalInsights,
    StoreSummary,
    TwelveCPSavingsData
)
from twelvecp.repositories import BaseRepository, OBSERVATION_COLUMNS
from twelvecp.services import NotificationService, TwelveCPAnalyzer


def make_hourly_frame(start, end, price_fn, demand_fn=None, include_hour=True):
    """Build one row per hour in [start, end) using price_fn(timestamp)."""
    stamps = pd.date_range(start, end, freq="h", inclusive="left")
    frame = pd.DataFrame({
        "timestamp": stamps.strftime("%Y-%m-%d %H:%M:%S"),
        "pool_price": [price_fn(ts) for ts in stamps],
        "hour_of_day": stamps.hour,
        "month": stamps.month,
        "demand_mw": [demand_fn(ts) if demand_fn else None for ts in stamps],
    })
    if not include_hour:
        frame = frame.drop(columns=["hour_of_day"])
    return frame


def flat_month_price(ts) -> float:
    """January 100, July 20, every other month 50, no hour variation."""
    if ts.month == 1:
        return 100.0
    if ts.month == 7:
        return 20.0
    return 50.0


def shaped_day_price(ts) -> float:
    """Evening spike at 18h, shoulder at 17h, overnight dip at 3h."""
    return {18: 300.0, 17: 80.0, 3: 10.0}.get(ts.hour, 50.0)


class FakeObservationRepository(BaseRepository):
    """In-memory stand-in for HourlyObservationRepository."""

    def __init__(self, frame: pd.DataFrame = None, error: Exception = None):
        self.frame = frame if frame is not None else pd.DataFrame(columns=OBSERVATION_COLUMNS)
        self.error = error
        self.calls = []

    def find_observations(self, start, end, columns=None, not_null="pool_price"):
        self.calls.append((start, end))
        if self.error is not None:
            raise self.error
        stamps = pd.to_datetime(self.frame["timestamp"])
        mask = (stamps >= start) & (stamps <= end) & self.frame[not_null].notna()
        return self.frame.loc[mask, list(columns or self.frame.columns)].reset_index(drop=True)

    def get_data_summary(self):
        if self.error is not None:
            raise self.error
        stamps = self.frame["timestamp"]
        return StoreSummary(
            total_records=len(self.frame),
            priced_records=int(self.frame["pool_price"].notna().sum()),
            demand_records=int(self.frame["demand_mw"].notna().sum()),
            first_timestamp=stamps.min() if len(stamps) else None,
            latest_timestamp=stamps.max() if len(stamps) else None
        )


def make_savings_data(annual_avg_price: float, annual_peak_price: float) -> TwelveCPSavingsData:
    """Minimal aggregate carrying only the figures the simulator reads."""
    empty = SeasonalInsight(avg_peak=0.0, risk_level="Unknown", month_count=0)
    return TwelveCPSavingsData(
        monthly_comparisons=[],
        annual_avg_price=annual_avg_price,
        annual_peak_price=annual_peak_price,
        annual_avg_price_weighted=annual_avg_price,
        total_potential_savings=0.0,
        peak_hour_risks=[],
        high_risk_hours=[],
        safe_hours=[],
        seasonal_insights=SeasonalInsights(winter=empty, summer=empty, shoulder=empty),
        data_date_range=DataDateRange(start="2024-01-01 00:00:00", end="2024-12-31 23:00:00"),
        record_count=0
    )


ANALYSIS_NOW = datetime(2025, 1, 1, 0, 0, 0)


@pytest.fixture
def flat_frame():
    """24 months of flat monthly prices covering 2023 and 2024."""
    return make_hourly_frame("2023-01-01", "2025-01-01", flat_month_price)


@pytest.fixture
def shaped_frame():
    """January 2024 with an intra-day price shape."""
    return make_hourly_frame("2024-01-01", "2024-02-01", shaped_day_price)


@pytest.fixture
def notifier():
    return NotificationService(history_size=10)


@pytest.fixture
def make_analyzer(notifier):
    def factory(repository):
        return TwelveCPAnalyzer(
            repository=repository,
            notifier=notifier,
            clock=lambda: ANALYSIS_NOW
        )
    return factory
