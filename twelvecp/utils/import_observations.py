#!/usr/bin/env python3
"""
Load hourly AESO observations from a CSV export into the local store.

Expected columns: timestamp, pool_price and optionally hour_of_day, month,
demand_mw. Timestamps are stored as 'YYYY-MM-DD HH:MM:SS' on the grid's local
clock; hours already present in the store are skipped.

Usage:
    python -m twelvecp.utils.import_observations path/to/aeso_hourly.csv [--db-path store.db]
"""

import argparse
import logging
import sys

import pandas as pd

from ..config import DatabaseManager, app_config, db_manager
from ..repositories import HourlyObservationRepository, OBSERVATION_COLUMNS, TIMESTAMP_FORMAT
from .time_utils import to_grid_local

logger = logging.getLogger(__name__)


def load_observations_csv(csv_path: str) -> pd.DataFrame:
    """Read and normalize a CSV export of hourly observations."""
    df = pd.read_csv(csv_path)

    if 'timestamp' not in df.columns or 'pool_price' not in df.columns:
        raise ValueError(
            f"CSV file missing expected columns. Found: {df.columns.tolist()}")

    local = to_grid_local(df['timestamp'], app_config.analytics.grid_timezone)
    df['timestamp'] = local.dt.strftime(TIMESTAMP_FORMAT)
    if 'hour_of_day' not in df.columns:
        df['hour_of_day'] = local.dt.hour
    if 'month' not in df.columns:
        df['month'] = local.dt.month
    if 'demand_mw' not in df.columns:
        df['demand_mw'] = None

    return df[OBSERVATION_COLUMNS].drop_duplicates(subset=['timestamp'], keep='first')


def import_observations(csv_path: str, manager: DatabaseManager = None) -> int:
    """
    Import a CSV export into the observation table.

    Returns:
        int: Number of new rows inserted.
    """
    df = load_observations_csv(csv_path)

    manager = manager or db_manager
    manager.ensure_schema()
    existing = manager.execute_query(f"SELECT timestamp FROM {manager.table_name}")
    new_rows = df[~df['timestamp'].isin(existing['timestamp'])]

    if new_rows.empty:
        logger.info("No new observations to import")
        return 0

    conn = manager.get_connection()
    try:
        new_rows.to_sql(manager.table_name, conn, if_exists='append', index=False)
        conn.commit()
    finally:
        conn.close()

    logger.info(
        f"✅ Imported {len(new_rows)} observations ({len(df) - len(new_rows)} already present)")

    summary = HourlyObservationRepository(manager).get_data_summary()
    logger.info(
        f"📊 Store holds {summary.total_records} hours from "
        f"{summary.first_timestamp} to {summary.latest_timestamp}")
    return int(len(new_rows))


def main(argv=None) -> int:
    """Command-line entry point."""
    parser = argparse.ArgumentParser(
        description="Import hourly AESO pool price and demand observations from a CSV export",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m twelvecp.utils.import_observations aeso_hourly.csv
  python -m twelvecp.utils.import_observations aeso_hourly.csv --db-path custom.db
  python -m twelvecp.utils.import_observations aeso_hourly.csv --verbose
        """
    )

    parser.add_argument(
        'csv_path',
        type=str,
        help='CSV file with timestamp and pool_price columns'
    )

    parser.add_argument(
        '--db-path',
        type=str,
        help='Path to the SQLite database file (optional)',
        default=None
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose logging'
    )

    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    manager = DatabaseManager(database_path=args.db_path) if args.db_path else None
    try:
        import_observations(args.csv_path, manager)
    except Exception as e:
        logger.error(f"❌ Import failed: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
