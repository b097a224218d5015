"""
Repository for hourly pool price and demand observations.
Serves the windowed, ordered reads the 12CP analytics depend on.
"""

import pandas as pd
from datetime import datetime
from typing import Iterable, List, Optional, Union

from .base_repository import BaseRepository
from ..config import db_manager, DatabaseManager
from ..models import HourlyObservation, StoreSummary

OBSERVATION_COLUMNS = ["timestamp", "pool_price", "hour_of_day", "month", "demand_mw"]

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_timestamp(value: Union[str, datetime, pd.Timestamp]) -> str:
    """Render a window bound in the stored timestamp format."""
    if isinstance(value, str):
        return value
    return value.strftime(TIMESTAMP_FORMAT)


class HourlyObservationRepository(BaseRepository):
    """Repository for hourly observation reads."""

    def __init__(self, manager: DatabaseManager = None):
        self.db_manager = manager or db_manager

    @property
    def table(self) -> str:
        return self.db_manager.table_name

    def find_observations(
        self,
        start: Union[str, datetime],
        end: Union[str, datetime],
        columns: Optional[Iterable[str]] = None,
        not_null: str = "pool_price"
    ) -> pd.DataFrame:
        """
        Find every observation with start <= timestamp <= end.

        Rows where the `not_null` column is missing are excluded. Results are
        ordered by timestamp ascending and are not paginated.

        Args:
            start: Inclusive window start.
            end: Inclusive window end.
            columns: Columns to project. Defaults to all observation columns.
            not_null: Column that must be present on every returned row.

        Raises:
            ValueError: If an unknown column is requested.
            sqlite3.Error: If the query fails.
        """
        selected = self._validate_columns(columns or OBSERVATION_COLUMNS)
        self._validate_columns([not_null])

        conn = self.db_manager.get_connection()
        try:
            query = f"""
                SELECT {', '.join(selected)}
                FROM {self.table}
                WHERE timestamp >= ?
                AND timestamp <= ?
                AND {not_null} IS NOT NULL
                ORDER BY timestamp ASC
            """
            return pd.read_sql_query(
                query, conn, params=[format_timestamp(start), format_timestamp(end)])
        finally:
            conn.close()

    def get_data_summary(self) -> StoreSummary:
        """Get summary information about the stored observations."""
        conn = self.db_manager.get_connection()
        try:
            query = f"""
                SELECT
                    COUNT(*) as total_records,
                    MIN(timestamp) as first_timestamp,
                    MAX(timestamp) as latest_timestamp,
                    COUNT(pool_price) as priced_records,
                    COUNT(demand_mw) as demand_records
                FROM {self.table}
            """
            counts = pd.read_sql_query(query, conn).iloc[0]
            latest = pd.read_sql_query(
                f"SELECT {', '.join(OBSERVATION_COLUMNS)} FROM {self.table} "
                f"ORDER BY timestamp DESC LIMIT 1",
                conn
            )
        finally:
            conn.close()

        return StoreSummary(
            total_records=int(counts['total_records']),
            priced_records=int(counts['priced_records']),
            demand_records=int(counts['demand_records']),
            first_timestamp=counts['first_timestamp'],
            latest_timestamp=counts['latest_timestamp'],
            latest_observation=self._to_observation(latest)
        )

    @staticmethod
    def _to_observation(df: pd.DataFrame) -> Optional[HourlyObservation]:
        if df.empty:
            return None
        # Missing price or demand stays None rather than NaN
        row = df.astype(object).where(df.notna(), None).iloc[0]
        return HourlyObservation(**row.to_dict())

    @staticmethod
    def _validate_columns(columns: Iterable[str]) -> List[str]:
        selected = list(columns)
        unknown = [col for col in selected if col not in OBSERVATION_COLUMNS]
        if unknown:
            raise ValueError(f"Unknown observation columns: {unknown}")
        return selected
