"""
Base interface for hourly observation stores.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Iterable, Optional, Union
import pandas as pd

from ..models import StoreSummary

WindowBound = Union[str, datetime]


class BaseRepository(ABC):
    """Abstract store of hourly observations queried by timestamp window."""

    @abstractmethod
    def find_observations(
        self,
        start: WindowBound,
        end: WindowBound,
        columns: Optional[Iterable[str]] = None,
        not_null: str = "pool_price"
    ) -> pd.DataFrame:
        """Find rows with start <= timestamp <= end and `not_null` present, oldest first."""
        pass

    @abstractmethod
    def get_data_summary(self) -> StoreSummary:
        """Describe how many hours are stored and the span they cover."""
        pass

    def find_price_observations(self, start: WindowBound, end: WindowBound) -> pd.DataFrame:
        """Find hours with a pool price inside the window."""
        return self.find_observations(start, end, not_null="pool_price")

    def find_demand_observations(self, start: WindowBound, end: WindowBound) -> pd.DataFrame:
        """Find hours with a recorded demand inside the window."""
        return self.find_observations(start, end, not_null="demand_mw")
