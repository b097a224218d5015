"""
Database Configuration and Management Module

This module provides centralized database connection and query management for the
12CP Savings Analytics API. It implements the Repository pattern with a
shared DatabaseManager for consistent data access across all repositories.

Tags:
    - database
    - configuration
    - sqlite
    - data-access
    - repository-pattern

Features:
    - Shared database manager for consistent connections
    - Automatic connection cleanup and transaction handling
    - Type-safe parameter binding for SQL injection prevention
    - Pandas DataFrame integration for data analysis
    - Idempotent schema creation for local stores

Usage:
    The db_manager instance is automatically available for import:

    ```python
    from twelvecp.config import db_manager

    # Query hourly observations for analysis
    df = db_manager.execute_query(
        "SELECT timestamp, pool_price FROM aeso_training_data ORDER BY timestamp ASC"
    )
    ```

Database Schema:
    - Table: aeso_training_data
    - Columns: timestamp, pool_price, hour_of_day, month, demand_mw
    - Indexes: ON timestamp for window queries

Version: 1.0.0
"""

import logging
import os
import sqlite3
import pandas as pd
from typing import Any, List, Optional
from .settings import app_config

logger = logging.getLogger(__name__)


SCHEMA_TEMPLATE = """
    CREATE TABLE IF NOT EXISTS {table} (
        timestamp TEXT NOT NULL,
        pool_price REAL,
        hour_of_day INTEGER,
        month INTEGER,
        demand_mw REAL
    );
    CREATE INDEX IF NOT EXISTS idx_{table}_timestamp ON {table} (timestamp);
"""


class DatabaseManager:
    """
    Centralized database connection and query management for hourly market data.

    This class provides a unified interface for all database operations including:
    - Connection management with automatic cleanup
    - Query execution with parameter binding
    - Data retrieval as pandas DataFrames
    - Idempotent schema creation

    Examples:
        >>> db = DatabaseManager()
        >>> df = db.execute_query("SELECT * FROM aeso_training_data LIMIT 5")
    """

    def __init__(self, database_path: Optional[str] = None, table_name: Optional[str] = None):
        """
        Initialize the DatabaseManager with configuration settings.

        Args:
            database_path (Optional[str]): Explicit SQLite file. Defaults to the
                                           configured application database.
            table_name (Optional[str]): Observation table. Defaults to the configured table.
        """
        self.database_path = database_path or app_config.database_path
        self.table_name = table_name or app_config.database.table_name
        self.timeout = app_config.database.connection_timeout

    def get_connection(self) -> sqlite3.Connection:
        """
        Get a database connection.

        Returns:
            sqlite3.Connection: Database connection using the configured timeout.

        Note:
            The connection should be closed after use. Consider using execute_query, which
            handles connection cleanup automatically.
        """
        return sqlite3.connect(self.database_path, timeout=self.timeout)

    def ensure_schema(self) -> None:
        """
        Create the observation table and its timestamp index if missing.

        Creates the parent directory of the database file when needed.
        """
        directory = os.path.dirname(self.database_path)
        if directory and not os.path.exists(directory):
            os.makedirs(directory, exist_ok=True)

        conn = self.get_connection()
        try:
            conn.executescript(SCHEMA_TEMPLATE.format(table=self.table_name))
            conn.commit()
            logger.info(f"Schema ready for table '{self.table_name}' at {self.database_path}")
        finally:
            conn.close()

    def execute_query(self, query: str, params: Optional[List[Any]] = None) -> pd.DataFrame:
        """
        Execute a SELECT query and return results as a pandas DataFrame.

        Args:
            query (str): SQL SELECT query to execute. Use ? placeholders for parameters.
            params (Optional[List[Any]]): List of parameters to bind to query placeholders.

        Returns:
            pd.DataFrame: Query results as a pandas DataFrame with column names preserved.

        Raises:
            sqlite3.Error: If the query execution fails.

        Examples:
            >>> df = db.execute_query(
            ...     "SELECT * FROM aeso_training_data WHERE timestamp >= ? AND timestamp <= ?",
            ...     ["2024-01-01 00:00:00", "2024-12-31 23:00:00"]
            ... )
        """
        conn = self.get_connection()
        try:
            if params is None:
                params = []
            return pd.read_sql_query(query, conn, params=params)
        finally:
            conn.close()


# Shared instance for use throughout the application
db_manager = DatabaseManager()
