"""
Controllers package for API endpoint handlers.
Imports all controllers for easy access.
"""

from fastapi import APIRouter

# Base controller
from .base_controller import BaseController

# Individual controllers
from .info_controller import InfoController
from .twelve_cp_controller import (
    TwelveCPController,
    get_historical_peak_service,
    get_notification_service,
    get_twelve_cp_analyzer
)


class AnalyticsController:
    """
    Aggregate controller that combines all API controllers under one router.
    """

    def __init__(self):
        """Initialize aggregate controller with all sub-controllers."""
        self.router = APIRouter()

        self.info_controller = InfoController()
        self.twelve_cp_controller = TwelveCPController()

        self.router.include_router(self.info_controller.router)
        self.router.include_router(self.twelve_cp_controller.router)


# Create aggregate controller
analytics_controller = AnalyticsController()

__all__ = [
    # Base controller
    "BaseController",

    # Individual controllers
    "InfoController",
    "TwelveCPController",

    # Aggregate controller
    "AnalyticsController",
    "analytics_controller",

    # Dependencies
    "get_twelve_cp_analyzer",
    "get_historical_peak_service",
    "get_notification_service"
]
