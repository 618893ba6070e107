"""
Probe settings, read from DBPROBE_* environment variables and an optional .env file.

Defaults target the sample Oracle XE schema (app_schema on localhost:1521).
"""

from typing import Any, Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from dbprobe.models import DataSource, ProductTypeEnum


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="DBPROBE_",
        env_ignore_empty=True,
        extra="ignore",
    )

    PROJECT_NAME: str = "dbprobe"
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"

    # Target database
    PRODUCT_TYPE: ProductTypeEnum = ProductTypeEnum.ORACLE
    HOST: str = "localhost"
    PORT: int | None = None
    DATABASE: str = "XE"
    USERNAME: str = "app_schema"
    PASSWORD: str = ""
    ORACLE_USE_SID: bool = True

    # Parameterized connection (seconds)
    CONNECT_TIMEOUT: int = 10
    READ_TIMEOUT: int = 10

    # Connection pool (timeouts in seconds)
    POOL_MAX_SIZE: int = 5
    POOL_MIN_IDLE: int = 2
    POOL_CONNECTION_TIMEOUT: float = 30.0
    POOL_IDLE_TIMEOUT: float = 600.0
    POOL_MAX_LIFETIME: float = 1800.0
    POOL_CHECKOUTS: int = 3

    # Sample schema (departments / employees / get_employee_count / get_department_budget)
    SAMPLE_DEPT_ID: int = 1
    SAMPLE_DEPT_LABEL: str = "IT"
    TEST_EMPLOYEE_EMAIL: str = "test.user@company.com"
    SALARY_THRESHOLD: float = 70000.0
    EMPLOYEE_LIMIT: int = 5

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def _upper_log_level(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v

    @model_validator(mode="after")
    def _check_pool_bounds(self) -> "Settings":
        if self.POOL_MAX_SIZE < 1:
            raise ValueError("POOL_MAX_SIZE must be at least 1")
        if not 0 <= self.POOL_MIN_IDLE <= self.POOL_MAX_SIZE:
            raise ValueError(
                f"POOL_MIN_IDLE ({self.POOL_MIN_IDLE}) must be between 0 and "
                f"POOL_MAX_SIZE ({self.POOL_MAX_SIZE})"
            )
        return self

    def datasource(self, **overrides: Any) -> DataSource:
        """Build the DataSource for the configured target; overrides win when not None."""
        params: dict[str, Any] = {
            "name": self.PROJECT_NAME,
            "product_type": self.PRODUCT_TYPE,
            "host": self.HOST,
            "port": self.PORT,
            "database": self.DATABASE,
            "username": self.USERNAME,
            "password": self.PASSWORD,
            "oracle_use_sid": self.ORACLE_USE_SID,
        }
        params.update({k: v for k, v in overrides.items() if v is not None})
        return DataSource(**params)


settings = Settings()  # type: ignore
