"""
Repository package for data access layer.
"""

from .base_repository import BaseRepository
from .observation_repository import (
    HourlyObservationRepository,
    OBSERVATION_COLUMNS,
    TIMESTAMP_FORMAT,
    format_timestamp
)

__all__ = [
    "BaseRepository",
    "HourlyObservationRepository",
    "OBSERVATION_COLUMNS",
    "TIMESTAMP_FORMAT",
    "format_timestamp"
]
