"""
Tests for the stateful TwelveCPAnalyzer.
"""

from datetime import datetime

import pandas as pd
import pytest
from fastapi import HTTPException

from twelvecp.config import AnalyticsConfig

from twelvecp.models import AnalysisStatus, NotificationSeverity, StrategyType
from twelvecp.services import NotificationService, TwelveCPAnalyzer

from conftest import (
    ANALYSIS_NOW,
    FakeObservationRepository,
    make_hourly_frame,
    shaped_day_price
)


class OvertakingRepository(FakeObservationRepository):
    """Starts a second analysis while the first one is still fetching."""

    def __init__(self, slow_frame, fast_frame):
        super().__init__(slow_frame)
        self.fast_frame = fast_frame
        self.analyzer = None
        self.newer_outcome = None
        self.overtaken = False

    def find_price_observations(self, start, end):
        if not self.overtaken:
            self.overtaken = True
            slow = super().find_price_observations(start, end)
            self.frame = self.fast_frame
            self.newer_outcome = self.analyzer.fetch_and_analyze()
            return slow
        return super().find_price_observations(start, end)


def test_fresh_analyzer_has_nothing_to_simulate(make_analyzer):
    analyzer = make_analyzer(FakeObservationRepository())
    assert analyzer.savings_data is None
    assert analyzer.is_loading is False
    assert analyzer.calculate_savings(10, 8760, "full") is None


def test_successful_analysis_is_cached(make_analyzer, flat_frame, notifier):
    analyzer = make_analyzer(FakeObservationRepository(flat_frame))
    outcome = analyzer.fetch_and_analyze()

    assert outcome.status == AnalysisStatus.SUCCESS
    assert outcome.data is analyzer.savings_data
    assert len(outcome.data.monthly_comparisons) == 12
    assert outcome.notification.severity == NotificationSeverity.SUCCESS
    assert outcome.notification.title == "12CP Analysis Complete"
    assert notifier.recent(1)[0] == outcome.notification
    assert analyzer.is_loading is False


def test_window_ends_at_injected_now(make_analyzer):
    repository = FakeObservationRepository()
    analyzer = make_analyzer(repository)

    analyzer.fetch_and_analyze()
    analyzer.fetch_and_analyze(lookback_months=3, now=datetime(2025, 3, 31, 12, 0))

    assert repository.calls[0] == (datetime(2024, 1, 1, 0, 0), ANALYSIS_NOW)
    assert repository.calls[1] == (datetime(2024, 12, 31, 12, 0), datetime(2025, 3, 31, 12, 0))


def test_default_clock_reads_grid_wall_clock(notifier):
    config = AnalyticsConfig(grid_timezone="Pacific/Kiritimati")
    repository = FakeObservationRepository()
    TwelveCPAnalyzer(repository, notifier, config=config).fetch_and_analyze()

    end = repository.calls[0][1]
    expected = pd.Timestamp.now(tz="Pacific/Kiritimati").tz_localize(None)
    assert end.tzinfo is None
    assert abs(pd.Timestamp(end) - expected) < pd.Timedelta(minutes=1)


def test_describe_store(make_analyzer, shaped_frame):
    summary = make_analyzer(FakeObservationRepository(shaped_frame)).describe_store()
    assert summary.total_records == 744
    assert summary.latest_timestamp == "2024-01-31 23:00:00"


def test_empty_window_reports_no_data(make_analyzer, notifier):
    analyzer = make_analyzer(FakeObservationRepository())
    outcome = analyzer.fetch_and_analyze()

    assert outcome.status == AnalysisStatus.NO_DATA
    assert outcome.data is None
    assert analyzer.savings_data is None
    assert outcome.notification.severity == NotificationSeverity.INFO
    assert outcome.notification.description == "No price data available for 12CP analysis."
    assert notifier.recent() == [outcome.notification]


def test_empty_window_keeps_previous_result(make_analyzer, flat_frame):
    repository = FakeObservationRepository(flat_frame)
    analyzer = make_analyzer(repository)
    analyzer.fetch_and_analyze()
    previous = analyzer.savings_data

    outcome = analyzer.fetch_and_analyze(now=datetime(2030, 1, 1))

    assert outcome.status == AnalysisStatus.NO_DATA
    assert analyzer.savings_data is previous


def test_store_failure_keeps_previous_result(make_analyzer, flat_frame, notifier):
    repository = FakeObservationRepository(flat_frame)
    analyzer = make_analyzer(repository)
    analyzer.fetch_and_analyze()
    previous = analyzer.savings_data

    repository.error = ConnectionError("connection refused")
    outcome = analyzer.fetch_and_analyze()

    assert outcome.status == AnalysisStatus.ERROR
    assert outcome.data is None
    assert outcome.notification.severity == NotificationSeverity.ERROR
    assert outcome.notification.title == "Error Loading 12CP Data"
    assert outcome.notification.description == "connection refused"
    assert analyzer.savings_data is previous
    assert analyzer.is_loading is False


def test_store_failure_without_message_uses_fallback(make_analyzer):
    analyzer = make_analyzer(FakeObservationRepository(error=RuntimeError()))
    outcome = analyzer.fetch_and_analyze()
    assert outcome.status == AnalysisStatus.ERROR
    assert outcome.notification.description == "Failed to fetch price data for 12CP analysis."
    assert analyzer.savings_data is None


def test_new_analysis_overwrites_cache(make_analyzer, flat_frame, shaped_frame):
    repository = FakeObservationRepository(flat_frame)
    analyzer = make_analyzer(repository)
    analyzer.fetch_and_analyze()
    assert analyzer.savings_data.annual_avg_price == 51.67

    repository.frame = shaped_frame
    analyzer.fetch_and_analyze()
    assert analyzer.savings_data.annual_avg_price == 60.0
    assert analyzer.savings_data.high_risk_hours == [18, 17]


def test_older_run_does_not_overwrite_newer_result(flat_frame, shaped_frame):
    notifier = NotificationService(history_size=10)
    repository = OvertakingRepository(slow_frame=flat_frame, fast_frame=shaped_frame)
    analyzer = TwelveCPAnalyzer(repository=repository, notifier=notifier, clock=lambda: ANALYSIS_NOW)
    repository.analyzer = analyzer

    older = analyzer.fetch_and_analyze()

    assert repository.newer_outcome.status == AnalysisStatus.SUCCESS
    assert older.status == AnalysisStatus.SUCCESS
    assert older.notification.title == "12CP Analysis Superseded"
    assert older.data.annual_avg_price == 51.67
    assert analyzer.savings_data is repository.newer_outcome.data
    assert analyzer.savings_data.annual_avg_price == 60.0


def test_calculate_savings_uses_cached_prices(make_analyzer, shaped_frame):
    analyzer = make_analyzer(FakeObservationRepository(shaped_frame))
    analyzer.fetch_and_analyze()

    result = analyzer.calculate_savings(10, 8760, StrategyType.FULL)

    assert result.without_strategy.energy_cost == 5256000.0
    assert result.without_strategy.transmission_cost == 1027548.0
    assert result.savings.energy_savings == 28800.0
    assert result.with_strategy.hours_avoided == 12


def test_transmission_adder_from_config(make_analyzer):
    analyzer = make_analyzer(FakeObservationRepository())
    assert analyzer.transmission_adder == 11.73


class TestValidation:
    @pytest.fixture
    def analyzer(self, make_analyzer):
        return make_analyzer(FakeObservationRepository(
            make_hourly_frame("2024-06-01", "2024-06-02", shaped_day_price)))

    @pytest.mark.parametrize("lookback_months", [0, -1, 61])
    def test_lookback_out_of_range(self, analyzer, lookback_months):
        with pytest.raises(HTTPException) as exc:
            analyzer.fetch_and_analyze(lookback_months=lookback_months)
        assert exc.value.status_code == 400

    def test_invalid_lookback_does_not_fetch(self, analyzer):
        with pytest.raises(HTTPException):
            analyzer.fetch_and_analyze(lookback_months=0)
        assert analyzer.repository.calls == []

    @pytest.mark.parametrize("kwargs", [
        {"facility_mw": -1, "annual_operating_hours": 8000, "strategy": "full"},
        {"facility_mw": 10, "annual_operating_hours": -5, "strategy": "full"},
        {"facility_mw": 10, "annual_operating_hours": 9000, "strategy": "full"},
        {"facility_mw": 10, "annual_operating_hours": 8000, "strategy": "aggressive"},
    ])
    def test_invalid_simulation_parameters(self, analyzer, kwargs):
        with pytest.raises(HTTPException) as exc:
            analyzer.calculate_savings(**kwargs)
        assert exc.value.status_code == 400
