"""
Domain models for hourly market observations.
"""

from pydantic import BaseModel
from typing import Optional


class HourlyObservation(BaseModel):
    """Model for one hourly pool price/demand record."""
    timestamp: str
    pool_price: Optional[float] = None  # $/MWh, None means absent, not zero
    hour_of_day: Optional[int] = None  # 0-23, derived from timestamp when missing
    month: Optional[int] = None
    demand_mw: Optional[float] = None  # Alberta internal load


class DataDateRange(BaseModel):
    """First and last timestamp of an analyzed record set."""
    start: str
    end: str


class StoreSummary(BaseModel):
    """What the observation store currently holds."""
    total_records: int
    priced_records: int
    demand_records: int
    first_timestamp: Optional[str] = None
    latest_timestamp: Optional[str] = None
    latest_observation: Optional[HourlyObservation] = None
