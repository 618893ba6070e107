"""
Connectivity checks, in run order.

Each check takes (datasource, lines), appends human-readable detail lines and
raises on failure.
"""

from collections.abc import Callable
from typing import NamedTuple

from dbprobe.models import DataSource

from .connection import check_basic_connection, check_connection_with_properties
from .operations import check_database_operations
from .pooling import check_connection_pool
from .queries import check_prepared_statements, check_query_operations


class Check(NamedTuple):
    name: str
    title: str
    success: str
    func: Callable[[DataSource, list[str]], None]


CHECKS: list[Check] = [
    Check(
        "basic",
        "basic connection",
        "Basic connection successful!",
        check_basic_connection,
    ),
    Check(
        "properties",
        "connection with properties",
        "Connection with properties successful!",
        check_connection_with_properties,
    ),
    Check(
        "pool",
        "connection pool",
        "Connection pool test successful!",
        check_connection_pool,
    ),
    Check(
        "operations",
        "database operations",
        "Database operations successful!",
        check_database_operations,
    ),
    Check(
        "queries",
        "query operations",
        "Query operations successful!",
        check_query_operations,
    ),
    Check(
        "prepared",
        "prepared statements",
        "Prepared statements successful!",
        check_prepared_statements,
    ),
]

CHECK_NAMES: list[str] = [c.name for c in CHECKS]

__all__ = ["Check", "CHECKS", "CHECK_NAMES"]
