"""Raw and parameterized connection checks."""

from dbprobe.core import dialect
from dbprobe.core.config import settings
from dbprobe.core.pool import connect, cursor_to_dicts, execute, health_check, server_info
from dbprobe.models import DataSource


def check_basic_connection(datasource: DataSource, lines: list[str]) -> None:
    """Open a plain connection and report server and driver metadata."""
    conn = connect(datasource)
    try:
        if not health_check(conn, datasource.product_type):
            raise RuntimeError("connection is not usable after connect")
        info = server_info(conn, datasource)
        lines.append(f"Database: {info['database']}")
        lines.append(f"Version: {info['version']}")
        lines.append(f"Driver: {info['driver']}")
        lines.append(f"URL: {info['url']}")
        lines.append(f"Username: {info['username']}")
    finally:
        conn.close()


def check_connection_with_properties(datasource: DataSource, lines: list[str]) -> None:
    """Connect with explicit connect/read timeouts and run a greeting query."""
    lines.append(
        f"Connect timeout: {settings.CONNECT_TIMEOUT}s, read timeout: {settings.READ_TIMEOUT}s"
    )
    conn = connect(
        datasource,
        connect_timeout=settings.CONNECT_TIMEOUT,
        read_timeout=settings.READ_TIMEOUT,
    )
    try:
        pt = datasource.product_type
        cur = execute(conn, dialect.greeting_sql(pt, f"Hello {pt.label}!"))
        try:
            rows = cursor_to_dicts(cur)
        finally:
            cur.close()
        if not rows:
            raise RuntimeError("greeting query returned no rows")
        lines.append(f"Message: {rows[0]['message']}")
        lines.append(f"Server Time: {rows[0]['server_time']}")
    finally:
        conn.close()
