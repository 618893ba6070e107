"""
Product-specific SQL for the probe checks.

Only what the checks need: placeholders, DUAL, greeting/version/user/ping
queries, row limits and stored-procedure calls with OUT parameters.
"""

from typing import Any

from dbprobe.models import DataSource, ProductTypeEnum


def placeholder(product_type: ProductTypeEnum, position: int) -> str:
    """Positional bind marker for *position* (1-based): ``%s`` or ``:n`` (oracledb)."""
    if product_type == ProductTypeEnum.ORACLE:
        return f":{position}"
    return "%s"


def placeholders(product_type: ProductTypeEnum, count: int) -> str:
    return ", ".join(placeholder(product_type, i) for i in range(1, count + 1))


def from_dual(product_type: ProductTypeEnum) -> str:
    """`` FROM DUAL`` for Oracle, empty elsewhere."""
    return " FROM DUAL" if product_type == ProductTypeEnum.ORACLE else ""


def ping_sql(product_type: ProductTypeEnum) -> str:
    return "SELECT 1" + from_dual(product_type)


def greeting_sql(product_type: ProductTypeEnum, message: str) -> str:
    """SELECT a literal message and the server clock as (message, server_time)."""
    now = {
        ProductTypeEnum.ORACLE: "SYSDATE",
        ProductTypeEnum.POSTGRES: "CURRENT_TIMESTAMP",
        ProductTypeEnum.MYSQL: "NOW()",
    }[product_type]
    literal = message.replace("'", "''")
    return f"SELECT '{literal}' AS message, {now} AS server_time" + from_dual(product_type)


def version_sql(product_type: ProductTypeEnum) -> str:
    if product_type == ProductTypeEnum.ORACLE:
        return "SELECT banner FROM v$version WHERE ROWNUM = 1"
    if product_type == ProductTypeEnum.POSTGRES:
        return "SELECT version()"
    return "SELECT VERSION()"


def current_user_sql(product_type: ProductTypeEnum) -> str:
    if product_type == ProductTypeEnum.ORACLE:
        return "SELECT USER FROM DUAL"
    if product_type == ProductTypeEnum.POSTGRES:
        return "SELECT current_user"
    return "SELECT CURRENT_USER()"


def limit_rows(product_type: ProductTypeEnum, sql: str, limit: int) -> str:
    """Restrict an ordered query to its first *limit* rows."""
    if limit <= 0:
        return sql
    if product_type == ProductTypeEnum.ORACLE:
        # ROWNUM is assigned before ORDER BY, so filter the ordered subquery.
        return f"SELECT * FROM ({sql}) WHERE ROWNUM <= {int(limit)}"
    return f"{sql} LIMIT {int(limit)}"


def display_url(datasource: DataSource) -> str:
    """Connection URL for display (never includes the password)."""
    pt = datasource.product_type
    base = f"{pt.value}://{datasource.username}@{datasource.host}:{datasource.port}"
    if pt == ProductTypeEnum.ORACLE and datasource.oracle_use_sid:
        return f"{base}:{datasource.database}"
    return f"{base}/{datasource.database}"


def call_procedure(
    conn: Any,
    product_type: ProductTypeEnum,
    name: str,
    in_args: list[Any] | tuple[Any, ...],
    *,
    out_types: tuple[type, ...] = (int,),
) -> list[Any]:
    """
    Call stored procedure *name* with IN args followed by OUT params; return the OUT values.

    - oracle: cursor.callproc with cursor.var() bind variables.
    - postgres: ``CALL name(%s, ..., NULL)``; the OUT values come back as a row.
    - mysql: cursor.callproc, then ``SELECT @_name_n`` for each OUT position.
    """
    n_in = len(in_args)
    cur = conn.cursor()
    try:
        if product_type == ProductTypeEnum.ORACLE:
            out_vars = [cur.var(t) for t in out_types]
            cur.callproc(name, [*in_args, *out_vars])
            return [v.getvalue() for v in out_vars]

        if product_type == ProductTypeEnum.POSTGRES:
            args = ", ".join(["%s"] * n_in + ["NULL"] * len(out_types))
            cur.execute(f"CALL {name}({args})", tuple(in_args))
            row = cur.fetchone()
            if row is None:
                raise RuntimeError(f"Procedure {name} returned no OUT values")
            return list(row)

        if product_type == ProductTypeEnum.MYSQL:
            cur.callproc(name, [*in_args, *([None] * len(out_types))])
            # Drain the procedure's result sets before reading session variables.
            while cur.nextset():
                pass
            names = ", ".join(
                f"@_{name}_{i}" for i in range(n_in, n_in + len(out_types))
            )
            cur.execute(f"SELECT {names}")
            return list(cur.fetchone())
    finally:
        cur.close()

    raise ValueError(f"Unsupported product_type: {product_type}")
