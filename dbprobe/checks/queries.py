"""Read-only query checks: listing queries and a bound-parameter query."""

from dbprobe.core.config import settings
from dbprobe.core.pool import connect
from dbprobe.models import DataSource

from .sample import get_departments, get_employees, get_employees_above_salary


def check_query_operations(datasource: DataSource, lines: list[str]) -> None:
    """List departments with their manager and the first few employees."""
    conn = connect(datasource)
    try:
        lines.append("Querying departments...")
        for dept in get_departments(conn):
            if dept.manager_id is None:
                manager = "No manager"
            else:
                manager = f"Manager ID: {dept.manager_id}"
            lines.append(f"  {dept.id}: {dept.name} ({dept.location}) - {manager}")

        lines.append("Querying employees...")
        for emp in get_employees(conn, datasource.product_type, settings.EMPLOYEE_LIMIT):
            lines.append(
                f"  {emp.id}: {emp.first_name} {emp.last_name} ({emp.job_title}) - ${emp.salary:.2f}"
            )
    finally:
        conn.close()


def check_prepared_statements(datasource: DataSource, lines: list[str]) -> None:
    conn = connect(datasource)
    try:
        employees = get_employees_above_salary(
            conn,
            datasource.product_type,
            settings.SAMPLE_DEPT_ID,
            settings.SALARY_THRESHOLD,
        )
        lines.append(
            f"{settings.SAMPLE_DEPT_LABEL} employees with salary > ${settings.SALARY_THRESHOLD:,.0f}:"
        )
        for emp in employees:
            lines.append(f"  {emp.id}: {emp.first_name} {emp.last_name} - ${emp.salary:.2f}")
    finally:
        conn.close()
