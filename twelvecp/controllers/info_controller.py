"""
Controller for API information and health endpoints.
"""

from .base_controller import BaseController
from ..config import app_config
from ..models import APIInfo, HealthResponse


class InfoController(BaseController):
    """Controller for API information and health endpoints."""

    def _setup_routes(self):
        """Setup routes for API info and health."""

        @self.router.get("/", response_model=APIInfo, tags=["System Information"])
        async def get_api_info():
            """API root endpoint with basic information."""
            return APIInfo(
                message="AESO 12CP Savings Analytics API",
                version=app_config.api.version,
                endpoints={
                    "analyze": "/12cp/analyze - Fetch and analyze the look-back window",
                    "savings_data": "/12cp/savings-data - Get the cached analysis",
                    "simulate": "/12cp/simulate - Simulate facility savings",
                    "transmission_adder": "/12cp/transmission-adder - Get the transmission adder",
                    "historical_peaks": "/12cp/historical-peaks - Get demand peaks",
                    "notifications": "/notifications - Get recent notices",
                    "health": "/health - Health check"
                }
            )

        @self.router.get("/health", response_model=HealthResponse, tags=["System Information"])
        async def health_check():
            """Health check endpoint."""
            return HealthResponse(
                status="healthy",
                service="twelvecp-analytics-api"
            )
