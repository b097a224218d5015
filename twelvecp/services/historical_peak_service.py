"""
Service for historical demand-based 12CP peaks.
"""

from collections import Counter
from datetime import datetime
from typing import Dict, List, Optional

import pandas as pd
from fastapi import HTTPException

from .base_service import BaseService
from .notification_service import NotificationService
from ..config import app_config
from ..models import (
    AllTimePeakHour,
    DataDateRange,
    DayOfWeekPeakPattern,
    HistoricalPeakStats,
    HistoricalPeaksData,
    HourPeakPattern,
    MonthlyDemandPeak,
    MonthPeakPattern,
    PeakHourCount,
    PeakPatterns,
    YearlyPeakTrend
)
from ..repositories import BaseRepository
from ..utils.rounding import round_currency, round_price
from ..utils.time_utils import (
    DAY_NAMES,
    MONTH_NAMES,
    format_peak_hour,
    grid_now,
    hour_of_day,
    lookback_window,
    month_label,
    to_grid_local
)

SUPPORTED_YEAR_RANGES = (1, 2, 4)
TOP_PEAK_COUNT = 12
COMMON_PEAK_HOUR_COUNT = 5
WINTER_MONTHS = ("01", "02", "11", "12")
SUMMER_MONTHS = ("06", "07", "08")


class HistoricalPeakService(BaseService):
    """Service for historical system demand peaks."""

    def __init__(self, repository: BaseRepository = None,
                 notifier: NotificationService = None):
        """Initialize service with repository and notifier injection."""
        super().__init__(repository, notifier)

    def validate_input(self, **kwargs) -> bool:
        """Validate input parameters for historical peak queries."""
        years = kwargs.get('years')

        if years is not None and years not in SUPPORTED_YEAR_RANGES:
            raise HTTPException(
                status_code=400,
                detail=f"Years must be one of {list(SUPPORTED_YEAR_RANGES)}"
            )

        return True

    def get_historical_peaks(self, years: int = 1, now: Optional[datetime] = None) -> Optional[HistoricalPeaksData]:
        """Get monthly demand peaks and the highest-demand hours of the window."""
        try:
            self.validate_input(years=years)

            start, end = lookback_window(
                now or grid_now(app_config.analytics.grid_timezone), years * 12)
            df = self.repository.find_demand_observations(start, end)

            if df.empty:
                self.notifier.info(
                    "No Historical Data",
                    "No demand data available for the selected period.")
                return None

            frame = self._prepare(df)
            peaks = self._monthly_peaks(frame)
            data = HistoricalPeaksData(
                peaks=peaks,
                all_time_peaks=self._top_peaks(frame),
                stats=self._peak_stats(peaks),
                peak_patterns=self._peak_patterns(
                    frame, app_config.analytics.high_demand_threshold_mw),
                yearly_trends=self._yearly_trends(frame),
                data_date_range=DataDateRange(
                    start=str(frame['timestamp'].iloc[0]),
                    end=str(frame['timestamp'].iloc[-1])
                ),
                record_count=int(len(frame)),
                years_analyzed=len({p.year for p in peaks})
            )

            self.notifier.success(
                "Historical Peaks Loaded",
                f"Found {len(peaks)} monthly peaks across {data.years_analyzed} years "
                f"with top {len(data.all_time_peaks)} all-time peaks."
            )
            return data

        except HTTPException:
            raise
        except Exception as e:
            self.report_failure("Error Loading Historical Data", e, "Failed to fetch historical peaks.")
            self.handle_exception(e, "Error retrieving historical peaks")

    @staticmethod
    def _prepare(df: pd.DataFrame) -> pd.DataFrame:
        frame = df.copy()
        local = to_grid_local(frame['timestamp'], app_config.analytics.grid_timezone)
        frame['local_ts'] = local
        frame['month_key'] = local.dt.strftime('%Y-%m')

        frame['hour'] = hour_of_day(frame, local)
        frame['demand_mw'] = frame['demand_mw'].astype(float)
        frame['pool_price'] = pd.to_numeric(frame['pool_price'], errors='coerce').fillna(0.0)
        return frame.reset_index(drop=True)

    @staticmethod
    def _monthly_peaks(frame: pd.DataFrame) -> List[MonthlyDemandPeak]:
        peaks = []
        for month_key, rows in frame.groupby('month_key', sort=True):
            # idxmax keeps the first of equal maxima
            record = rows.loc[rows['demand_mw'].idxmax()]
            peaks.append(MonthlyDemandPeak(
                month_key=month_key,
                month_label=month_label(month_key),
                peak_timestamp=str(record['timestamp']),
                peak_demand_mw=round_currency(record['demand_mw']),
                peak_hour=int(record['hour']),
                price_at_peak=round_price(record['pool_price']),
                day_of_week=DAY_NAMES[record['local_ts'].dayofweek],
                year=int(month_key[:4])
            ))
        return peaks

    @staticmethod
    def _top_peaks(frame: pd.DataFrame) -> List[AllTimePeakHour]:
        top = frame.sort_values('demand_mw', ascending=False, kind='stable').head(TOP_PEAK_COUNT)
        return [
            AllTimePeakHour(
                rank=rank,
                timestamp=str(row['timestamp']),
                demand_mw=round_currency(row['demand_mw']),
                price_at_peak=round_price(row['pool_price']),
                hour=int(row['hour']),
                day_of_week=DAY_NAMES[row['local_ts'].dayofweek],
                month=int(row['local_ts'].month),
                month_name=MONTH_NAMES[row['local_ts'].month - 1],
                year=int(row['local_ts'].year)
            )
            for rank, (_, row) in enumerate(top.iterrows(), start=1)
        ]

    @staticmethod
    def _peak_stats(peaks: List[MonthlyDemandPeak]) -> HistoricalPeakStats:
        all_time = max(peaks, key=lambda p: p.peak_demand_mw)

        hour_counts = Counter(p.peak_hour for p in peaks)
        common = sorted(hour_counts.items(), key=lambda item: (-item[1], item[0]))[:COMMON_PEAK_HOUR_COUNT]

        peaks_by_year: Dict[int, List[MonthlyDemandPeak]] = {}
        for peak in peaks:
            peaks_by_year.setdefault(peak.year, []).append(peak)

        def season_avg(months) -> float:
            values = [p.peak_demand_mw for p in peaks if p.month_key[5:7] in months]
            return round_currency(sum(values) / len(values)) if values else 0.0

        return HistoricalPeakStats(
            all_time_peak_mw=all_time.peak_demand_mw,
            all_time_peak_timestamp=all_time.peak_timestamp,
            avg_monthly_peak_mw=round_currency(sum(p.peak_demand_mw for p in peaks) / len(peaks)),
            common_peak_hours=[
                PeakHourCount(hour=hour, count=count, label=format_peak_hour(hour))
                for hour, count in common
            ],
            winter_avg_peak_mw=season_avg(WINTER_MONTHS),
            summer_avg_peak_mw=season_avg(SUMMER_MONTHS),
            peaks_by_year=peaks_by_year
        )

    @staticmethod
    def _demand_profile(demand: pd.Series, keys: pd.Series, buckets) -> pd.DataFrame:
        """Mean, max and count of demand per bucket, busiest first; empty buckets read as zero."""
        profile = demand.groupby(keys).agg(['mean', 'max', 'count']).reindex(buckets)
        profile = profile.fillna({'mean': 0.0, 'max': 0.0, 'count': 0})
        return profile.sort_values('count', ascending=False, kind='stable')

    @classmethod
    def _peak_patterns(cls, frame: pd.DataFrame, threshold_mw: float) -> PeakPatterns:
        high = frame[frame['demand_mw'] > threshold_mw]
        demand = high['demand_mw']

        by_month = cls._demand_profile(demand, high['local_ts'].dt.month, range(1, 13))
        by_hour = cls._demand_profile(demand, high['hour'], range(24))
        by_day = cls._demand_profile(demand, high['local_ts'].dt.dayofweek, range(7))

        return PeakPatterns(
            high_demand_threshold_mw=threshold_mw,
            by_month=[
                MonthPeakPattern(
                    month=int(month),
                    month_name=MONTH_NAMES[int(month) - 1],
                    avg_peak=round_currency(row['mean']),
                    max_peak=round_currency(row['max']),
                    peak_count=int(row['count'])
                )
                for month, row in by_month.iterrows()
            ],
            by_hour=[
                HourPeakPattern(
                    hour=int(hour),
                    avg_peak=round_currency(row['mean']),
                    max_peak=round_currency(row['max']),
                    peak_count=int(row['count'])
                )
                for hour, row in by_hour.iterrows()
            ],
            by_day_of_week=[
                DayOfWeekPeakPattern(
                    day=DAY_NAMES[int(day)],
                    day_index=int(day),
                    avg_peak=round_currency(row['mean']),
                    max_peak=round_currency(row['max']),
                    peak_count=int(row['count'])
                )
                for day, row in by_day.iterrows()
            ]
        )

    @staticmethod
    def _yearly_trends(frame: pd.DataFrame) -> List[YearlyPeakTrend]:
        yearly = frame.groupby(frame['local_ts'].dt.year)['demand_mw'].agg(['max', 'mean'])
        return [
            YearlyPeakTrend(
                year=int(year),
                max_peak=round_currency(row['max']),
                avg_peak=round_currency(row['mean'])
            )
            for year, row in yearly.iterrows()
        ]
