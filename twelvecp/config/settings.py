"""
Application configuration settings.
Spring Boot-like configuration management.
"""

import os
from typing import Optional
from pydantic import BaseModel


class DatabaseConfig(BaseModel):
    """Database configuration settings."""

    database_path: str = "db/aeso_prices.db"  # Relative to package directory
    table_name: str = "aeso_training_data"
    connection_timeout: int = 30


class APIConfig(BaseModel):
    """API configuration settings."""

    title: str = "AESO 12CP Savings Analytics API"
    description: str = "REST API for 12 Coincident Peak price analytics and transmission savings simulation on the Alberta power pool"
    version: str = "1.0.0"
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False
    log_level: str = "INFO"

    # CORS settings
    allow_origins: list = ["*"]
    allow_credentials: bool = True
    allow_methods: list = ["*"]
    allow_headers: list = ["*"]


class AnalyticsConfig(BaseModel):
    """12CP analytics and simulator settings."""

    default_lookback_months: int = 12
    max_lookback_months: int = 60

    # Transmission adder in $/MW per hour, billed on connected capacity
    transmission_adder: float = 11.73
    hours_per_year: int = 8760

    # Peak hour reported for a month with no bucketed prices
    default_peak_hour: int = 17

    # Month keys and hours of day are taken on the grid's local calendar
    grid_timezone: str = "America/Edmonton"

    # Upstream re-ingestion can produce duplicate hours; off keeps the raw aggregates
    deduplicate_timestamps: bool = False

    # Hours above this system demand count toward the historical peak patterns
    high_demand_threshold_mw: float = 11000.0

    notification_history: int = 50


class ApplicationConfig:
    """Main application configuration."""

    def __init__(self, database_path: Optional[str] = None):
        self.database = DatabaseConfig()
        self.api = APIConfig()
        self.analytics = AnalyticsConfig()

        override = database_path or os.environ.get("TWELVECP_DATABASE_PATH")
        if override:
            self.database.database_path = override

    @property
    def database_path(self) -> str:
        """Get database path."""
        if os.path.isabs(self.database.database_path):
            return self.database.database_path
        # Relative paths resolve against the twelvecp package directory
        config_dir = os.path.dirname(os.path.abspath(__file__))
        package_dir = os.path.dirname(config_dir)
        return os.path.join(package_dir, self.database.database_path)


# Global configuration instance
app_config = ApplicationConfig()
