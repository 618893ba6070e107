"""
DB connection helpers for the probe target.

Uses psycopg (PostgreSQL), pymysql (MySQL) or oracledb thin mode (Oracle) based on product_type.
"""

from typing import Any

import oracledb
import psycopg
import pymysql

from dbprobe.core import dialect
from dbprobe.core.config import settings
from dbprobe.models import DataSource, ProductTypeEnum

_DRIVERS = {
    ProductTypeEnum.POSTGRES: psycopg,
    ProductTypeEnum.MYSQL: pymysql,
    ProductTypeEnum.ORACLE: oracledb,
}


def _get(datasource: Any, key: str) -> Any:
    """Get attribute or dict key; connect() takes a DataSource or a plain dict."""
    if isinstance(datasource, dict):
        return datasource.get(key)
    return getattr(datasource, key, None)


def _resolve_product_type(
    datasource: Any, product_type: ProductTypeEnum | None
) -> ProductTypeEnum:
    pt = product_type or _get(datasource, "product_type")
    if pt is None:
        raise ValueError("product_type is required (from datasource or argument)")
    if isinstance(pt, str):
        try:
            return ProductTypeEnum(pt)
        except ValueError:
            raise ValueError(f"Unsupported product_type: {pt}") from None
    return pt


def connect(
    datasource: Any,
    *,
    product_type: ProductTypeEnum | None = None,
    connect_timeout: int | None = None,
    read_timeout: int | None = None,
) -> Any:
    """
    Open a raw driver connection from a DataSource or connection dict.

    - datasource: DataSource model or dict with host, port, database, username,
      password and product_type (or pass product_type=).
    - connect_timeout: seconds to wait for the TCP/login handshake
      (defaults to settings.CONNECT_TIMEOUT).
    - read_timeout: seconds a single round-trip may take; None leaves the driver default.
    """
    pt = _resolve_product_type(datasource, product_type)
    host = _get(datasource, "host")
    port = _get(datasource, "port") or pt.default_port
    database = _get(datasource, "database")
    username = _get(datasource, "username")
    password = _get(datasource, "password")

    for name, val in [
        ("host", host),
        ("database", database),
        ("username", username),
    ]:
        if not val:
            raise ValueError(f"datasource must provide {name}")
    password = password if password is not None else ""

    timeout = connect_timeout if connect_timeout is not None else settings.CONNECT_TIMEOUT

    if pt == ProductTypeEnum.POSTGRES:
        kwargs: dict[str, Any] = {}
        if read_timeout is not None:
            kwargs["options"] = f"-c statement_timeout={int(read_timeout * 1000)}"
        return psycopg.connect(
            host=host,
            port=int(port),
            dbname=database,
            user=username,
            password=password,
            connect_timeout=timeout,
            **kwargs,
        )
    if pt == ProductTypeEnum.MYSQL:
        kwargs = {}
        if read_timeout is not None:
            kwargs["read_timeout"] = read_timeout
            kwargs["write_timeout"] = read_timeout
        return pymysql.connect(
            host=host,
            port=int(port),
            database=database,
            user=username,
            password=password,
            connect_timeout=timeout,
            **kwargs,
        )
    if pt == ProductTypeEnum.ORACLE:
        if _get(datasource, "oracle_use_sid"):
            target = {"sid": database}
        else:
            target = {"service_name": database}
        conn = oracledb.connect(
            user=username,
            password=password,
            host=host,
            port=int(port),
            tcp_connect_timeout=float(timeout),
            **target,
        )
        if read_timeout is not None:
            conn.call_timeout = int(read_timeout * 1000)
        return conn
    raise ValueError(f"Unsupported product_type: {pt}")


def execute(
    conn: Any,
    sql: str,
    params: dict | list | tuple | None = None,
) -> Any:
    """Execute SQL and return the cursor. Caller uses cursor_to_dicts(cursor) or cursor.rowcount."""
    cur = conn.cursor()
    try:
        if params is not None:
            cur.execute(sql, params)
        else:
            cur.execute(sql)
    except Exception:
        cur.close()
        raise
    return cur


def cursor_to_dicts(cursor: Any) -> list[dict[str, Any]]:
    """
    Convert cursor result to list of dicts keyed by lower-cased column name.

    Oracle reports unquoted identifiers upper-cased; lowering keeps lookups uniform.
    """
    desc = cursor.description
    if not desc:
        return []
    names = [d[0].lower() for d in desc]
    return [dict(zip(names, row, strict=True)) for row in cursor.fetchall()]


def fetch_scalar(
    conn: Any,
    sql: str,
    params: dict | list | tuple | None = None,
) -> Any:
    """Return the first column of the first row, or None when there are no rows."""
    cur = execute(conn, sql, params)
    try:
        row = cur.fetchone()
        return row[0] if row else None
    finally:
        cur.close()


def driver_info(product_type: ProductTypeEnum) -> tuple[str, str]:
    """(driver name, driver version) for *product_type*."""
    module = _DRIVERS[product_type]
    return module.__name__, getattr(module, "__version__", "unknown")


def server_info(conn: Any, datasource: DataSource) -> dict[str, str]:
    """Database product, version, driver, URL and session user for an open connection."""
    pt = datasource.product_type
    driver_name, driver_version = driver_info(pt)
    return {
        "database": pt.label,
        "version": str(fetch_scalar(conn, dialect.version_sql(pt))),
        "driver": f"{driver_name} {driver_version}",
        "url": dialect.display_url(datasource),
        "username": str(fetch_scalar(conn, dialect.current_user_sql(pt))),
    }
