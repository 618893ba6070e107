"""
Connection pool for the probe target.

One SQLAlchemy QueuePool per datasource_id. The pool bounds, acquisition
timeout and max-lifetime recycling are SQLAlchemy's; this module wires the
settings in, warms the pool to its minimum idle size, and hooks checkout to
retire connections that sat idle too long or fail a ping.
"""

import logging
import threading
import time
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import event, exc
from sqlalchemy.pool import QueuePool

from dbprobe.core.config import settings
from dbprobe.models import DataSource, PoolStats, ProductTypeEnum

from .connect import connect
from .health import health_check

_log = logging.getLogger(__name__)

_PING_IDLE_THRESHOLD = 30.0  # only ping connections idle longer than this (seconds)


class PoolManager:
    """Per-datasource_id connection pool with min-idle warm-up, idle timeout and max lifetime."""

    def __init__(
        self,
        *,
        max_size: int | None = None,
        min_idle: int | None = None,
        connection_timeout: float | None = None,
        idle_timeout: float | None = None,
        max_lifetime: float | None = None,
    ) -> None:
        self._pools: dict[uuid.UUID, QueuePool] = {}
        self._lock = threading.Lock()
        self._max_size: int = max_size if max_size is not None else settings.POOL_MAX_SIZE
        self._min_idle: int = min_idle if min_idle is not None else settings.POOL_MIN_IDLE
        self._connection_timeout: float = (
            connection_timeout
            if connection_timeout is not None
            else settings.POOL_CONNECTION_TIMEOUT
        )
        self._idle_timeout: float = (
            idle_timeout if idle_timeout is not None else settings.POOL_IDLE_TIMEOUT
        )
        self._max_lifetime: float = (
            max_lifetime if max_lifetime is not None else settings.POOL_MAX_LIFETIME
        )
        if self._min_idle > self._max_size:
            raise ValueError(
                f"min_idle ({self._min_idle}) must not exceed max_size ({self._max_size})"
            )

    @property
    def max_size(self) -> int:
        return self._max_size

    @property
    def min_idle(self) -> int:
        return self._min_idle

    def get_pool(self, datasource: DataSource) -> QueuePool:
        """Return the pool for *datasource*, creating and warming it on first use."""
        with self._lock:
            pool = self._pools.get(datasource.id)
        if pool is not None:
            return pool

        pool = self._create_pool(datasource)
        with self._lock:
            existing = self._pools.setdefault(datasource.id, pool)
        if existing is not pool:
            pool.dispose()
        return existing

    def get_connection(self, datasource: DataSource) -> Any:
        """Check out a pooled connection; raises sqlalchemy.exc.TimeoutError when exhausted."""
        return self.get_pool(datasource).connect()

    def release(self, conn: Any) -> None:
        """Return a pooled connection (rolled back by the pool)."""
        conn.close()

    @contextmanager
    def connection(self, datasource: DataSource) -> Iterator[Any]:
        conn = self.get_connection(datasource)
        try:
            yield conn
        finally:
            self.release(conn)

    def dispose(self, datasource_id: uuid.UUID | None = None) -> None:
        """Close pooled connections. ``None`` = dispose all pools."""
        with self._lock:
            if datasource_id is not None:
                pools = [p for p in [self._pools.pop(datasource_id, None)] if p is not None]
            else:
                pools = list(self._pools.values())
                self._pools.clear()
        for p in pools:
            p.dispose()

    def stats(self, datasource_id: uuid.UUID) -> PoolStats:
        """Active (checked out), idle (checked in) and total connections for one pool."""
        with self._lock:
            pool = self._pools.get(datasource_id)
        if pool is None:
            return PoolStats(max_size=self._max_size)
        active = pool.checkedout()
        idle = pool.checkedin()
        return PoolStats(
            active=active, idle=idle, total=active + idle, max_size=self._max_size
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _create_pool(self, datasource: DataSource) -> QueuePool:
        pool = QueuePool(
            lambda: connect(datasource),
            pool_size=self._max_size,
            max_overflow=0,
            timeout=self._connection_timeout,
            recycle=int(self._max_lifetime),
            use_lifo=True,
        )
        self._install_listeners(pool, datasource.product_type)
        try:
            self._warm(pool)
        except Exception:
            pool.dispose()
            raise
        _log.info(
            "Created pool for %s (max_size=%d, min_idle=%d)",
            datasource.name,
            self._max_size,
            self._min_idle,
        )
        return pool

    def _warm(self, pool: QueuePool) -> None:
        """Open min_idle connections up front and leave them idle in the pool."""
        conns: list[Any] = []
        try:
            for _ in range(self._min_idle):
                conns.append(pool.connect())
        finally:
            for c in conns:
                c.close()

    def _install_listeners(self, pool: QueuePool, product_type: ProductTypeEnum) -> None:
        idle_timeout = self._idle_timeout

        def on_connect(dbapi_connection: Any, connection_record: Any) -> None:
            connection_record.info["last_used"] = None

        def on_checkin(dbapi_connection: Any, connection_record: Any) -> None:
            connection_record.info["last_used"] = time.monotonic()

        def on_checkout(
            dbapi_connection: Any, connection_record: Any, connection_proxy: Any
        ) -> None:
            last_used = connection_record.info.get("last_used")
            if last_used is None:
                return
            idle_sec = time.monotonic() - last_used
            # DisconnectionError makes the pool discard this connection and open a new one.
            if idle_sec > idle_timeout:
                raise exc.DisconnectionError(
                    f"connection idle for {idle_sec:.0f}s (idle timeout {idle_timeout:.0f}s)"
                )
            if idle_sec > _PING_IDLE_THRESHOLD and not health_check(
                dbapi_connection, product_type
            ):
                raise exc.DisconnectionError("connection failed ping on checkout")

        event.listen(pool, "connect", on_connect)
        event.listen(pool, "checkin", on_checkin)
        event.listen(pool, "checkout", on_checkout)

