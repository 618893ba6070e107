"""Unit tests for the listing-query and prepared-statement checks."""

from datetime import datetime
from unittest.mock import MagicMock, patch

from dbprobe.checks.queries import check_prepared_statements, check_query_operations
from dbprobe.checks.sample import get_employees
from dbprobe.models import ProductTypeEnum
from tests.utils.datasource import make_datasource
from tests.utils.fakedb import FakeConnection

EMPLOYEE_COLUMNS = [
    "emp_id",
    "first_name",
    "last_name",
    "email",
    "job_title",
    "salary",
    "dept_id",
    "hire_date",
    "status",
]


@patch("dbprobe.checks.queries.connect")
def test_query_operations_lists_departments_and_employees(mock_connect: MagicMock) -> None:
    hired = datetime(2020, 3, 1)
    conn = FakeConnection(
        results={
            "FROM departments": (
                ["dept_id", "dept_name", "location", "manager_id"],
                [(1, "IT", "Building A", 101), (3, "Sales", "Building C", None)],
            ),
            "FROM employees": (
                EMPLOYEE_COLUMNS,
                [
                    (101, "Ada", "Lovelace", "ada@company.com", "Engineer", 95000, 1, hired, "ACTIVE"),
                    (102, "Alan", "Turing", "alan@company.com", "Analyst", 72000.5, 1, hired, "ACTIVE"),
                ],
            ),
        }
    )
    mock_connect.return_value = conn
    lines: list[str] = []

    check_query_operations(make_datasource(ProductTypeEnum.POSTGRES), lines)

    assert lines == [
        "Querying departments...",
        "  1: IT (Building A) - Manager ID: 101",
        "  3: Sales (Building C) - No manager",
        "Querying employees...",
        "  101: Ada Lovelace (Engineer) - $95000.00",
        "  102: Alan Turing (Analyst) - $72000.50",
    ]
    assert conn.statements()[1].endswith("ORDER BY emp_id LIMIT 5")
    assert conn.closed


def test_get_employees_oracle_limits_with_rownum() -> None:
    conn = FakeConnection(results={"FROM employees": (EMPLOYEE_COLUMNS, [])})

    assert get_employees(conn, ProductTypeEnum.ORACLE, 5) == []
    sql = conn.statements()[0]
    assert sql.startswith("SELECT * FROM (SELECT emp_id")
    assert sql.endswith("WHERE ROWNUM <= 5")


@patch("dbprobe.checks.queries.connect")
def test_prepared_statements_bind_department_and_salary(mock_connect: MagicMock) -> None:
    conn = FakeConnection(
        results={
            "salary >": (
                ["EMP_ID", "FIRST_NAME", "LAST_NAME", "SALARY"],
                [(101, "Ada", "Lovelace", 95000)],
            )
        }
    )
    mock_connect.return_value = conn
    lines: list[str] = []

    check_prepared_statements(make_datasource(ProductTypeEnum.ORACLE), lines)

    sql, params = conn.executed[0]
    assert "WHERE dept_id = :1 AND salary > :2" in sql
    assert params == (1, 70000.0)
    assert lines == [
        "IT employees with salary > $70,000:",
        "  101: Ada Lovelace - $95000.00",
    ]
    assert conn.closed
