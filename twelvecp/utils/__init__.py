"""
Utility helpers for calendar handling, rounding and data import.
"""

from .rounding import round_currency, round_half_up, round_price
from .time_utils import (
    format_peak_hour,
    grid_now,
    hour_of_day,
    lookback_window,
    month_label,
    to_grid_local
)

__all__ = [
    "round_currency",
    "round_half_up",
    "round_price",
    "format_peak_hour",
    "grid_now",
    "hour_of_day",
    "lookback_window",
    "month_label",
    "to_grid_local"
]
