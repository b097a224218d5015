"""
Service owning the 12CP savings analysis for one dashboard session.

The analyzer fetches a look-back window of hourly pool prices, runs the 12CP
analytics and keeps the last successful result. The savings simulator runs
against that cached result and never fetches on its own.

Failure handling:
    - Store errors become an error notice; the cached result is kept.
    - An empty window becomes an informational "no data" notice; the cached
      result is kept.
    - Simulating before any successful analysis returns None.

Concurrent runs are ordered by a request sequence number. A run only
replaces the cache if no later-started run has already done so.
"""

import threading
from datetime import datetime
from typing import Callable, Optional, Union

from fastapi import HTTPException

from .base_service import BaseService
from .notification_service import NotificationService
from .savings_simulator import simulate_savings
from .twelve_cp_analytics import analyze_observations
from ..config import app_config, AnalyticsConfig
from ..models import (
    AnalysisOutcome,
    AnalysisStatus,
    SavingsSimulatorResult,
    StoreSummary,
    StrategyType,
    TwelveCPSavingsData
)
from ..repositories import BaseRepository
from ..utils.time_utils import grid_now, lookback_window


class TwelveCPAnalyzer(BaseService):
    """Fetches, analyzes and caches 12CP price data; simulates savings."""

    def __init__(
        self,
        repository: BaseRepository = None,
        notifier: NotificationService = None,
        config: AnalyticsConfig = None,
        clock: Callable[[], datetime] = None
    ):
        """
        Initialize the analyzer.

        Args:
            repository: Source of hourly observations.
            notifier: Side channel for user-facing notices.
            config: Analytics settings. Defaults to the application config.
            clock: Supplies "now" when a run does not pass one explicitly.
                Defaults to the grid wall clock.
        """
        super().__init__(repository, notifier)
        self.config = config or app_config.analytics
        self.clock = clock or self._grid_now

        self._savings_data: Optional[TwelveCPSavingsData] = None
        self._lock = threading.Lock()
        self._request_seq = 0
        self._committed_seq = 0
        self._in_flight = 0

    @property
    def savings_data(self) -> Optional[TwelveCPSavingsData]:
        """Result of the last committed analysis, if any."""
        return self._savings_data

    @property
    def transmission_adder(self) -> float:
        return self.config.transmission_adder

    @property
    def is_loading(self) -> bool:
        return self._in_flight > 0

    def validate_input(self, **kwargs) -> bool:
        """Validate analysis and simulation parameters."""
        lookback_months = kwargs.get('lookback_months')
        facility_mw = kwargs.get('facility_mw')
        annual_operating_hours = kwargs.get('annual_operating_hours')
        strategy = kwargs.get('strategy')

        if lookback_months is not None and (
                lookback_months < 1 or lookback_months > self.config.max_lookback_months):
            raise HTTPException(
                status_code=400,
                detail=f"Lookback months must be between 1 and {self.config.max_lookback_months}"
            )

        if facility_mw is not None and facility_mw < 0:
            raise HTTPException(
                status_code=400, detail="Facility size cannot be negative")

        if annual_operating_hours is not None and (
                annual_operating_hours < 0 or annual_operating_hours > self.config.hours_per_year):
            raise HTTPException(
                status_code=400,
                detail=f"Annual operating hours must be between 0 and {self.config.hours_per_year}"
            )

        if strategy is not None:
            try:
                StrategyType(strategy)
            except ValueError:
                raise HTTPException(
                    status_code=400,
                    detail="Strategy must be 'full', 'partial' or 'none'"
                )

        return True

    def fetch_and_analyze(
        self,
        lookback_months: Optional[int] = None,
        now: Optional[datetime] = None
    ) -> AnalysisOutcome:
        """
        Fetch the look-back window and replace the cached analysis.

        Args:
            lookback_months: Window length in calendar months. Defaults to 12.
            now: End of the window. Defaults to the analyzer clock.

        Returns:
            AnalysisOutcome with status success, no_data or error.

        Raises:
            HTTPException: 400 if lookback_months is out of range.
        """
        if lookback_months is None:
            lookback_months = self.config.default_lookback_months
        self.validate_input(lookback_months=lookback_months)

        with self._lock:
            self._request_seq += 1
            seq = self._request_seq
            self._in_flight += 1

        try:
            start, end = lookback_window(now or self.clock(), lookback_months)
            self.logger.info(
                f"🔄 Running 12CP analysis #{seq} for {start:%Y-%m-%d %H:%M} to {end:%Y-%m-%d %H:%M}")

            try:
                df = self.repository.find_price_observations(start, end)
            except Exception as e:
                return self._failed(e, "Failed to fetch price data for 12CP analysis.")

            if df is None or df.empty:
                return self._no_data()

            try:
                data = analyze_observations(
                    df,
                    grid_timezone=self.config.grid_timezone,
                    default_peak_hour=self.config.default_peak_hour,
                    deduplicate=self.config.deduplicate_timestamps
                )
            except Exception as e:
                return self._failed(e, "Failed to analyze price data.")

            if data is None:
                return self._no_data()

            if not self._commit(seq, data):
                self.logger.warning(
                    f"⚠️  Discarded 12CP analysis #{seq}; a newer analysis is already cached")
                notification = self.notifier.info(
                    "12CP Analysis Superseded",
                    "A newer analysis finished first and remains active."
                )
                return AnalysisOutcome(
                    status=AnalysisStatus.SUCCESS, notification=notification, data=data)

            notification = self.notifier.success(
                "12CP Analysis Complete",
                f"Analyzed {data.record_count:,} price records across "
                f"{len(data.monthly_comparisons)} months."
            )
            return AnalysisOutcome(
                status=AnalysisStatus.SUCCESS, notification=notification, data=data)

        finally:
            with self._lock:
                self._in_flight -= 1

    def calculate_savings(
        self,
        facility_mw: float,
        annual_operating_hours: float,
        strategy: Union[StrategyType, str]
    ) -> Optional[SavingsSimulatorResult]:
        """
        Simulate savings for a facility against the cached analysis.

        Returns:
            SavingsSimulatorResult, or None if no analysis has completed yet.

        Raises:
            HTTPException: 400 on invalid facility parameters or strategy.
        """
        self.validate_input(
            facility_mw=facility_mw,
            annual_operating_hours=annual_operating_hours,
            strategy=strategy
        )

        savings_data = self._savings_data
        if savings_data is None:
            return None

        return simulate_savings(
            savings_data,
            facility_mw=facility_mw,
            annual_operating_hours=annual_operating_hours,
            strategy=strategy,
            transmission_adder=self.config.transmission_adder,
            hours_per_year=self.config.hours_per_year
        )

    def describe_store(self) -> StoreSummary:
        """Summarize the hours available to analyze."""
        return self.repository.get_data_summary()

    def _grid_now(self) -> datetime:
        return grid_now(self.config.grid_timezone)

    def _commit(self, seq: int, data: TwelveCPSavingsData) -> bool:
        with self._lock:
            if seq <= self._committed_seq:
                return False
            self._savings_data = data
            self._committed_seq = seq
            return True

    def _no_data(self) -> AnalysisOutcome:
        notification = self.notifier.info(
            "No Price Data",
            "No price data available for 12CP analysis."
        )
        return AnalysisOutcome(status=AnalysisStatus.NO_DATA, notification=notification)

    def _failed(self, e: Exception, fallback: str) -> AnalysisOutcome:
        notification = self.report_failure("Error Loading 12CP Data", e, fallback)
        return AnalysisOutcome(status=AnalysisStatus.ERROR, notification=notification)
