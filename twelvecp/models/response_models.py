"""
Response models for API endpoints.
"""

from datetime import datetime
from enum import Enum
from pydantic import BaseModel
from typing import List, Optional

from .analytics_models import TwelveCPSavingsData


class NotificationSeverity(str, Enum):
    """Severity of a user-facing notice."""
    SUCCESS = "success"
    INFO = "info"
    ERROR = "error"


class Notification(BaseModel):
    """A user-facing notice emitted by an analysis run."""
    title: str
    description: str
    severity: NotificationSeverity
    created_at: datetime


class AnalysisStatus(str, Enum):
    """Outcome of a fetch-and-analyze run."""
    SUCCESS = "success"
    NO_DATA = "no_data"
    ERROR = "error"


class AnalysisOutcome(BaseModel):
    """Model for fetch-and-analyze response."""
    status: AnalysisStatus
    notification: Notification
    data: Optional[TwelveCPSavingsData] = None


class NotificationFeed(BaseModel):
    """Model for recent notifications response."""
    notifications: List[Notification]
    count: int


class TransmissionAdderResponse(BaseModel):
    """Model for transmission adder response."""
    transmission_adder: float
    unit: str


class APIInfo(BaseModel):
    """Model for API information."""
    message: str
    version: str
    endpoints: dict


class HealthResponse(BaseModel):
    """Model for health check response."""
    status: str
    service: str
