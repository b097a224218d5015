"""
Controller for 12CP savings analytics endpoints.

This controller exposes the 12CP analyzer to dashboard widgets: running the
look-back analysis, reading the cached result, simulating facility savings
and browsing historical demand peaks.

Tags:
    - 12cp
    - transmission-savings
    - peak-avoidance
    - price-analytics

Endpoints:
    - POST /12cp/analyze: Fetch and analyze the look-back window
    - GET /12cp/savings-data: Cached analysis result
    - GET /12cp/simulate: Savings simulation against the cached result
    - GET /12cp/transmission-adder: Transmission adder constant
    - GET /12cp/historical-peaks: Demand-based monthly peaks
    - GET /12cp/data-summary: Hours available in the observation store
    - GET /notifications: Recent analysis notices

Handlers that reach the store or run the analytics are plain functions, so
FastAPI runs them in its thread pool instead of on the event loop.
"""

from fastapi import HTTPException, Depends, Query

from .base_controller import ANALYSIS_REQUIRED, BaseController
from ..models import (
    AnalysisOutcome,
    AnalysisStatus,
    HistoricalPeaksData,
    NotificationFeed,
    SavingsSimulatorResult,
    StoreSummary,
    StrategyType,
    TransmissionAdderResponse,
    TwelveCPSavingsData
)
from ..services import HistoricalPeakService, NotificationService, TwelveCPAnalyzer

# One analyzer per process; its cache is the session state the simulator reads
notification_service = NotificationService()
twelve_cp_analyzer = TwelveCPAnalyzer(notifier=notification_service)
historical_peak_service = HistoricalPeakService(notifier=notification_service)


def get_twelve_cp_analyzer() -> TwelveCPAnalyzer:
    """Dependency injection for TwelveCPAnalyzer."""
    return twelve_cp_analyzer


def get_historical_peak_service() -> HistoricalPeakService:
    """Dependency injection for HistoricalPeakService."""
    return historical_peak_service


def get_notification_service() -> NotificationService:
    """Dependency injection for NotificationService."""
    return notification_service


class TwelveCPController(BaseController):
    """Controller for 12CP analytics endpoints."""

    def _setup_routes(self):
        """Setup routes for 12CP analytics operations."""

        @self.router.post(
            "/12cp/analyze",
            response_model=AnalysisOutcome,
            tags=["12CP Analytics"],
            summary="Run the 12CP price analysis",
            description="""
            Fetch the look-back window of hourly pool prices and rebuild the cached analysis.

            **Outcomes:**
            - `success`: the cached analysis was replaced
            - `no_data`: the window holds no priced hours; the previous analysis is kept
            - transport failures return HTTP 502 and keep the previous analysis
            """,
            response_description="Analysis status, the emitted notice and the new aggregate"
        )
        def analyze(
            lookback_months: int = Query(
                12, description="Number of calendar months to analyze", ge=1, le=60),
            analyzer: TwelveCPAnalyzer = Depends(get_twelve_cp_analyzer)
        ):
            """Fetch and analyze the look-back window."""
            try:
                outcome = analyzer.fetch_and_analyze(lookback_months=lookback_months)
            except HTTPException:
                raise
            except Exception as e:
                self.handle_exception(e, "Error running 12CP analysis")

            if outcome.status == AnalysisStatus.ERROR:
                raise HTTPException(
                    status_code=502, detail=outcome.notification.description)
            return outcome

        @self.router.get(
            "/12cp/savings-data",
            response_model=TwelveCPSavingsData,
            tags=["12CP Analytics"]
        )
        async def get_savings_data(
            analyzer: TwelveCPAnalyzer = Depends(get_twelve_cp_analyzer)
        ):
            """Get the cached 12CP analysis."""
            return self.require(analyzer.savings_data, 404, ANALYSIS_REQUIRED)

        @self.router.get(
            "/12cp/simulate",
            response_model=SavingsSimulatorResult,
            tags=["12CP Analytics"],
            summary="Simulate 12CP savings for a facility",
            description="""
            Compare annual energy and transmission cost with and without peak avoidance.

            **Strategies:**
            - `full`: avoid 12 peak hours, 100% transmission reduction
            - `partial`: avoid 6 peak hours, 50% transmission reduction
            - `none`: baseline
            """
        )
        def simulate(
            facility_mw: float = Query(
                ..., description="Facility size in MW", ge=0),
            annual_operating_hours: float = Query(
                8000, description="Annual operating hours", ge=0, le=8760),
            strategy: StrategyType = Query(
                StrategyType.FULL, description="Peak avoidance strategy"),
            analyzer: TwelveCPAnalyzer = Depends(get_twelve_cp_analyzer)
        ):
            """Simulate savings against the cached analysis."""
            try:
                result = analyzer.calculate_savings(
                    facility_mw, annual_operating_hours, strategy)
            except HTTPException:
                raise
            except Exception as e:
                self.handle_exception(e, "Error simulating 12CP savings")

            return self.require(result, 409, ANALYSIS_REQUIRED)

        @self.router.get(
            "/12cp/transmission-adder",
            response_model=TransmissionAdderResponse,
            tags=["12CP Analytics"]
        )
        async def get_transmission_adder(
            analyzer: TwelveCPAnalyzer = Depends(get_twelve_cp_analyzer)
        ):
            """Get the transmission adder used by the simulator."""
            return TransmissionAdderResponse(
                transmission_adder=analyzer.transmission_adder,
                unit="$/MW per hour"
            )

        @self.router.get(
            "/12cp/historical-peaks",
            response_model=HistoricalPeaksData,
            tags=["12CP Analytics"]
        )
        def get_historical_peaks(
            years: int = Query(1, description="Years to look back (1, 2 or 4)"),
            service: HistoricalPeakService = Depends(get_historical_peak_service)
        ):
            """Get monthly demand peaks and the top all-time demand hours."""
            try:
                data = service.get_historical_peaks(years=years)
            except HTTPException:
                raise
            except Exception as e:
                self.handle_exception(e, "Error retrieving historical peaks")

            return self.require(
                data, 404, "No demand data available for the selected period.")

        @self.router.get(
            "/12cp/data-summary",
            response_model=StoreSummary,
            tags=["12CP Analytics"]
        )
        def get_data_summary(
            analyzer: TwelveCPAnalyzer = Depends(get_twelve_cp_analyzer)
        ):
            """Get record counts, the covered span and the latest stored hour."""
            try:
                return analyzer.describe_store()
            except Exception as e:
                self.handle_exception(e, "Error summarizing stored observations")

        @self.router.get(
            "/notifications",
            response_model=NotificationFeed,
            tags=["12CP Analytics"]
        )
        async def get_notifications(
            limit: int = Query(20, description="Maximum notices to return", ge=1, le=100),
            service: NotificationService = Depends(get_notification_service)
        ):
            """Get the most recent analysis notices."""
            notifications = service.recent(limit)
            return NotificationFeed(notifications=notifications, count=len(notifications))
