"""Connection pool check."""

from dbprobe.core import dialect
from dbprobe.core.config import settings
from dbprobe.core.pool import PoolManager, cursor_to_dicts, execute
from dbprobe.models import DataSource


def check_connection_pool(datasource: DataSource, lines: list[str]) -> None:
    """Create a pool, borrow connections from it one at a time, report pool statistics."""
    manager = PoolManager()
    try:
        manager.get_pool(datasource)
        lines.append(
            f"Pool created (max size {manager.max_size}, min idle {manager.min_idle})"
        )
        pt = datasource.product_type
        for i in range(1, settings.POOL_CHECKOUTS + 1):
            with manager.connection(datasource) as conn:
                lines.append(f"Connection {i} acquired from pool")
                sql = f"SELECT 'Pool Connection {i}' AS message" + dialect.from_dual(pt)
                cur = execute(conn, sql)
                try:
                    rows = cursor_to_dicts(cur)
                finally:
                    cur.close()
                if rows:
                    lines.append(f"  {rows[0]['message']}")

        stats = manager.stats(datasource.id)
        lines.append("Pool statistics:")
        lines.append(f"  Active connections: {stats.active}")
        lines.append(f"  Idle connections: {stats.idle}")
        lines.append(f"  Total connections: {stats.total}")
    finally:
        manager.dispose()
