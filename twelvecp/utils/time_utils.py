"""
Calendar helpers for grid-local hourly data.
"""

from datetime import datetime
from typing import Tuple

import pandas as pd

MONTH_NAMES = ['Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun',
               'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec']
DAY_NAMES = ['Monday', 'Tuesday', 'Wednesday', 'Thursday',
             'Friday', 'Saturday', 'Sunday']  # pandas dayofweek order

_OFFSET_PATTERN = r"(?:Z|[+-]\d{2}:?\d{2})$"


def lookback_window(now: datetime, months: int) -> Tuple[datetime, datetime]:
    """
    Return the [now - months, now] window.

    Month arithmetic is calendar based; a day that does not exist in the
    target month is clamped to that month's last day (Mar 31 - 1 month = Feb 28/29).
    """
    start = pd.Timestamp(now) - pd.DateOffset(months=months)
    return start.to_pydatetime(), now


def to_grid_local(timestamps: pd.Series, grid_timezone: str) -> pd.Series:
    """
    Parse timestamps onto the grid's local wall clock.

    Naive timestamps are taken as already local. Offset-carrying timestamps
    are converted to `grid_timezone` and the zone is dropped so month and hour
    fields read as local calendar values.
    """
    if pd.api.types.is_datetime64_any_dtype(timestamps):
        parsed = timestamps
    elif timestamps.astype(str).str.contains(_OFFSET_PATTERN).any():
        parsed = pd.to_datetime(timestamps, utc=True, format="ISO8601")
    else:
        parsed = pd.to_datetime(timestamps, format="ISO8601")

    if parsed.dt.tz is not None:
        parsed = parsed.dt.tz_convert(grid_timezone).dt.tz_localize(None)
    return parsed


def grid_now(grid_timezone: str) -> datetime:
    """Current wall-clock time in `grid_timezone`, returned naive like stored timestamps."""
    return pd.Timestamp.now(tz=grid_timezone).tz_localize(None).to_pydatetime()


def hour_of_day(frame: pd.DataFrame, local: pd.Series) -> pd.Series:
    """
    Hour of day per row, folded into 0-23.

    Uses the upstream hour_of_day column where present and parseable, else the
    hour of the local timestamp. Hour-ending 24 folds to 0.
    """
    hours = local.dt.hour
    if 'hour_of_day' in frame.columns:
        hours = pd.to_numeric(frame['hour_of_day'], errors='coerce').fillna(hours)
    return hours.astype(int) % 24


def month_label(month_key: str) -> str:
    """Turn a YYYY-MM key into a short label, e.g. '2025-01' -> 'Jan 25'."""
    year, month = month_key.split('-')
    return f"{MONTH_NAMES[int(month) - 1]} {year[2:]}"


def format_peak_hour(hour: int) -> str:
    """Format an hour of day on a 12-hour clock, e.g. 0 -> '12 AM', 17 -> '5 PM'."""
    if hour == 0:
        return '12 AM'
    if hour == 12:
        return '12 PM'
    return f"{hour} AM" if hour < 12 else f"{hour - 12} PM"
