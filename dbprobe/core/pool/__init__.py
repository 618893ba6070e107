"""
DB connection and connection pool for the probe target.

No driver layer: psycopg, pymysql and oracledb are installed via pip; a DataSource is enough.
Pooling is delegated to SQLAlchemy's QueuePool.
"""

from .connect import (
    connect,
    cursor_to_dicts,
    driver_info,
    execute,
    fetch_scalar,
    server_info,
)
from .health import health_check
from .manager import PoolManager

__all__ = [
    "connect",
    "execute",
    "cursor_to_dicts",
    "fetch_scalar",
    "driver_info",
    "server_info",
    "health_check",
    "PoolManager",
]
