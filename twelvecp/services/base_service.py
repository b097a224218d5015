"""
Base class for 12CP services.

Services read from an observation store, validate their inputs (HTTP 400 on
bad parameters) and report the outcome of each run as a user-facing notice.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from fastapi import HTTPException

from .notification_service import NotificationService
from ..models import Notification
from ..repositories import BaseRepository, HourlyObservationRepository


class BaseService(ABC):
    """Abstract service over an observation store with a notice channel."""

    def __init__(self, repository: Optional[BaseRepository] = None,
                 notifier: Optional[NotificationService] = None):
        """Initialize service with repository and notifier dependencies."""
        self.repository = repository or HourlyObservationRepository()
        self.notifier = notifier or NotificationService()
        self.logger = logging.getLogger(self.__class__.__module__)

    @abstractmethod
    def validate_input(self, **kwargs) -> bool:
        """Validate input parameters, raising HTTPException(400) when invalid."""
        pass

    def report_failure(self, title: str, e: Exception, fallback: str) -> Notification:
        """Log a failed run and emit it as an error notice."""
        self.logger.error(f"❌ {title}: {e!r}")
        return self.notifier.error(title, str(e) or fallback)

    def handle_exception(self, e: Exception, context: str = None) -> None:
        """Convert an unexpected failure into an HTTP 500."""
        error_message = f"{context}: {str(e)}" if context else str(e)
        raise HTTPException(status_code=500, detail=error_message)
