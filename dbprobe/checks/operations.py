"""
Data operations on the sample schema: SELECT, INSERT with cleanup,
stored procedure call and scalar function call, all on one raw connection.
"""

import logging
from typing import Any

from dbprobe.core import dialect
from dbprobe.core.config import settings
from dbprobe.core.pool import connect, execute, fetch_scalar
from dbprobe.models import DataSource, ProductTypeEnum

from .sample import count_by_department, get_departments

_log = logging.getLogger(__name__)


def check_database_operations(datasource: DataSource, lines: list[str]) -> None:
    pt = datasource.product_type
    conn = connect(datasource)
    try:
        lines.append("Testing SELECT operations...")
        select_operations(conn, lines)

        lines.append("Testing INSERT operation...")
        insert_operation(conn, pt, lines)

        lines.append("Testing stored procedure call...")
        stored_procedure_call(conn, pt, lines)

        lines.append("Testing function call...")
        function_call(conn, pt, lines)
    finally:
        conn.close()


def select_operations(conn: Any, lines: list[str]) -> None:
    lines.append("  Departments:")
    for dept in get_departments(conn):
        lines.append(f"    {dept.id}: {dept.name} ({dept.location})")

    lines.append("  Employee count by department:")
    for name, count in count_by_department(conn):
        lines.append(f"    {name}: {count} employees")


def insert_operation(conn: Any, product_type: ProductTypeEnum, lines: list[str]) -> None:
    """Insert a throwaway employee with bound parameters, then delete it by email."""
    email = settings.TEST_EMPLOYEE_EMAIL
    sql = (
        "INSERT INTO employees (first_name, last_name, email, job_title, salary, dept_id) "
        f"VALUES ({dialect.placeholders(product_type, 6)})"
    )
    params = ("Test", "User", email, "Software Tester", 65000.0, settings.SAMPLE_DEPT_ID)

    cur = execute(conn, sql, params)
    try:
        inserted = cur.rowcount
    finally:
        cur.close()
    try:
        conn.commit()
    except Exception as commit_error:
        # Raise the commit error; a cleanup failure is logged and chained as its cause.
        try:
            _delete_test_employee(conn, product_type, email, lines)
        except Exception as cleanup_error:
            raise commit_error from cleanup_error
        raise
    lines.append(f"  Inserted {inserted} test employee record")
    _delete_test_employee(conn, product_type, email, lines)


def _delete_test_employee(
    conn: Any, product_type: ProductTypeEnum, email: str, lines: list[str]
) -> None:
    try:
        conn.rollback()
        cur = execute(
            conn,
            f"DELETE FROM employees WHERE email = {dialect.placeholder(product_type, 1)}",
            (email,),
        )
        cur.close()
        conn.commit()
    except Exception:
        _log.warning("Could not remove test employee %s", email, exc_info=True)
        lines.append(f"  Cleanup failed; remove {email} manually")
        raise
    lines.append("  Cleaned up test record")


def stored_procedure_call(conn: Any, product_type: ProductTypeEnum, lines: list[str]) -> None:
    (count,) = dialect.call_procedure(
        conn, product_type, "get_employee_count", [settings.SAMPLE_DEPT_ID]
    )
    lines.append(
        f"  {settings.SAMPLE_DEPT_LABEL} department has {int(count or 0)} employees"
    )


def function_call(conn: Any, product_type: ProductTypeEnum, lines: list[str]) -> None:
    sql = (
        f"SELECT get_department_budget({dialect.placeholder(product_type, 1)}) AS budget"
        + dialect.from_dual(product_type)
    )
    budget = fetch_scalar(conn, sql, (settings.SAMPLE_DEPT_ID,))
    lines.append(
        f"  {settings.SAMPLE_DEPT_LABEL} department total budget: ${float(budget or 0):.2f}"
    )
