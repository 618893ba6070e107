"""
Readers for the sample HR schema: departments, employees, per-department counts.

Expected tables:
  departments(dept_id, dept_name, location, manager_id)
  employees(emp_id, first_name, last_name, email, job_title, salary, dept_id, hire_date, status)
"""

from typing import Any

from dbprobe.core import dialect
from dbprobe.core.pool import cursor_to_dicts, execute
from dbprobe.models import Department, Employee, ProductTypeEnum


def _query(conn: Any, sql: str, params: tuple | None = None) -> list[dict[str, Any]]:
    cur = execute(conn, sql, params)
    try:
        return cursor_to_dicts(cur)
    finally:
        cur.close()


def get_departments(conn: Any) -> list[Department]:
    rows = _query(
        conn,
        "SELECT dept_id, dept_name, location, manager_id FROM departments ORDER BY dept_id",
    )
    return [
        Department(
            id=r["dept_id"],
            name=r["dept_name"],
            location=r["location"],
            manager_id=r["manager_id"],
        )
        for r in rows
    ]


def _to_employee(r: dict[str, Any]) -> Employee:
    return Employee(
        id=r["emp_id"],
        first_name=r["first_name"],
        last_name=r["last_name"],
        email=r.get("email"),
        job_title=r.get("job_title"),
        salary=float(r["salary"] or 0),
        dept_id=r.get("dept_id"),
        hire_date=r.get("hire_date"),
        status=r.get("status"),
    )


def get_employees(conn: Any, product_type: ProductTypeEnum, limit: int = 0) -> list[Employee]:
    """Employees ordered by id; ``limit`` > 0 keeps only the first rows."""
    sql = (
        "SELECT emp_id, first_name, last_name, email, job_title, salary, dept_id, "
        "hire_date, status FROM employees ORDER BY emp_id"
    )
    rows = _query(conn, dialect.limit_rows(product_type, sql, limit))
    return [_to_employee(r) for r in rows]


def get_employees_above_salary(
    conn: Any, product_type: ProductTypeEnum, dept_id: int, min_salary: float
) -> list[Employee]:
    """Employees of *dept_id* earning more than *min_salary*, via bound parameters."""
    sql = (
        "SELECT emp_id, first_name, last_name, salary FROM employees "
        f"WHERE dept_id = {dialect.placeholder(product_type, 1)} "
        f"AND salary > {dialect.placeholder(product_type, 2)} ORDER BY emp_id"
    )
    rows = _query(conn, sql, (dept_id, min_salary))
    return [_to_employee(r) for r in rows]


def count_by_department(conn: Any) -> list[tuple[str, int]]:
    """(department name, employee count), largest first; empty departments count 0."""
    rows = _query(
        conn,
        "SELECT d.dept_name, COUNT(e.emp_id) AS emp_count "
        "FROM departments d LEFT JOIN employees e ON d.dept_id = e.dept_id "
        "GROUP BY d.dept_name ORDER BY emp_count DESC",
    )
    return [(r["dept_name"], int(r["emp_count"])) for r in rows]
