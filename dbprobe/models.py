"""
Probe models.

Entities: DataSource (connection target), Department and Employee (sample
schema rows), CheckResult and SuiteReport (diagnostic output), PoolStats.
None of these are persisted; SQLModel is used for validation and dumping only.
"""

import uuid
from datetime import datetime, timezone
from enum import Enum

from pydantic import model_validator
from sqlmodel import Field, SQLModel


def _utc_now() -> datetime:
    """Timezone-aware UTC now."""
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class ProductTypeEnum(str, Enum):
    """Supported database product types (postgres, mysql, oracle)."""

    POSTGRES = "postgres"
    MYSQL = "mysql"
    ORACLE = "oracle"

    @property
    def default_port(self) -> int:
        return _DEFAULT_PORTS[self]

    @property
    def label(self) -> str:
        """Human-readable product name."""
        return _LABELS[self]


_DEFAULT_PORTS = {
    ProductTypeEnum.POSTGRES: 5432,
    ProductTypeEnum.MYSQL: 3306,
    ProductTypeEnum.ORACLE: 1521,
}

_LABELS = {
    ProductTypeEnum.POSTGRES: "PostgreSQL",
    ProductTypeEnum.MYSQL: "MySQL",
    ProductTypeEnum.ORACLE: "Oracle",
}


# ---------------------------------------------------------------------------
# DataSource - connection target
# ---------------------------------------------------------------------------


class DataSource(SQLModel):
    """Connection parameters for the database under test."""

    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    name: str = Field(default="default", max_length=255)
    product_type: ProductTypeEnum
    host: str = Field(..., min_length=1, max_length=255)
    port: int | None = Field(default=None, ge=1, le=65535)
    database: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Database name; for Oracle the service name (or SID when oracle_use_sid).",
    )
    username: str = Field(..., min_length=1, max_length=255)
    password: str = Field(default="", max_length=512)
    oracle_use_sid: bool = Field(
        default=False,
        description="For Oracle: connect with SID=database instead of SERVICE_NAME=database.",
    )

    @model_validator(mode="after")
    def default_port_for_product(self) -> "DataSource":
        if self.port is None:
            self.port = self.product_type.default_port
        return self


# ---------------------------------------------------------------------------
# Sample schema rows
# ---------------------------------------------------------------------------


class Department(SQLModel):
    id: int
    name: str
    location: str | None = None
    manager_id: int | None = None


class Employee(SQLModel):
    id: int
    first_name: str
    last_name: str
    email: str | None = None
    job_title: str | None = None
    salary: float = 0.0
    dept_id: int | None = None
    hire_date: datetime | None = None
    status: str | None = None


# ---------------------------------------------------------------------------
# Diagnostic results
# ---------------------------------------------------------------------------


class PoolStats(SQLModel):
    """Snapshot of one pool: checked-out, idle and total connections."""

    active: int = 0
    idle: int = 0
    total: int = 0
    max_size: int = 0


class CheckResult(SQLModel):
    number: int
    name: str
    title: str
    ok: bool
    message: str
    lines: list[str] = Field(default_factory=list)
    elapsed_ms: float = 0.0


class SuiteReport(SQLModel):
    product_type: ProductTypeEnum
    target: str
    started_at: datetime = Field(default_factory=_utc_now)
    results: list[CheckResult] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return all(r.ok for r in self.results)

    @property
    def failed(self) -> list[CheckResult]:
        return [r for r in self.results if not r.ok]
