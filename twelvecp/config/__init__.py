"""
Configuration package for application settings.
"""

from .settings import ApplicationConfig, APIConfig, AnalyticsConfig, DatabaseConfig, app_config
from .database import DatabaseManager, db_manager

__all__ = [
    "ApplicationConfig",
    "APIConfig",
    "AnalyticsConfig",
    "DatabaseConfig",
    "app_config",
    "DatabaseManager",
    "db_manager"
]
