"""
Base controller for the 12CP analytics endpoints.

Every controller owns an APIRouter populated by `_setup_routes()`. Services
signal "nothing to return yet" with None rather than raising, so controllers
translate those results into the matching HTTP status here.

Status conventions:
    - 400: invalid parameters rejected by a service
    - 404: nothing cached or stored for the request
    - 409: the request depends on an analysis that has not run
    - 500: unexpected failure, reported with context
"""

from abc import ABC, abstractmethod
from fastapi import APIRouter, HTTPException
from typing import Optional, TypeVar

T = TypeVar("T")

ANALYSIS_REQUIRED = "No 12CP analysis available. Run /12cp/analyze first."


class BaseController(ABC):
    """
    Abstract base controller.

    Attributes:
        router (APIRouter): Router the concrete controller registers endpoints on
    """

    def __init__(self):
        self.router = APIRouter()
        self._setup_routes()

    @abstractmethod
    def _setup_routes(self):
        """Register this controller's endpoints on self.router."""
        pass

    @staticmethod
    def require(result: Optional[T], status_code: int, detail: str) -> T:
        """
        Return a service result, or raise when the service produced nothing.

        Args:
            result: Value returned by the service, None when unavailable
            status_code (int): HTTP status to raise for a missing result
            detail (str): Message for the client

        Raises:
            HTTPException: If result is None
        """
        if result is None:
            raise HTTPException(status_code=status_code, detail=detail)
        return result

    def handle_exception(self, e: Exception, context: Optional[str] = None) -> None:
        """
        Convert an unexpected exception into an HTTP 500 carrying context.

        Raises:
            HTTPException: Always
        """
        error_message = f"{context}: {str(e)}" if context else str(e)
        raise HTTPException(status_code=500, detail=error_message)
