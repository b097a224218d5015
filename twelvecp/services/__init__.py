"""
Services package for business logic layer.
Imports all services for easy access.
"""

# Base service
from .base_service import BaseService

# Individual services
from .notification_service import NotificationService
from .twelve_cp_analyzer import TwelveCPAnalyzer
from .historical_peak_service import HistoricalPeakService

# Pure analytics
from .twelve_cp_analytics import analyze_observations, risk_score, seasonal_pattern
from .savings_simulator import STRATEGY_POLICIES, simulate_savings

__all__ = [
    # Base service
    "BaseService",

    # Individual services
    "NotificationService",
    "TwelveCPAnalyzer",
    "HistoricalPeakService",

    # Pure analytics
    "analyze_observations",
    "risk_score",
    "seasonal_pattern",
    "STRATEGY_POLICIES",
    "simulate_savings"
]
