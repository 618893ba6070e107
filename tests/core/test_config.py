import pytest
from pydantic import ValidationError

from dbprobe.core.config import Settings
from dbprobe.models import ProductTypeEnum


def test_defaults_target_oracle_sample_schema(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in ("DBPROBE_PRODUCT_TYPE", "DBPROBE_HOST", "DBPROBE_PORT", "DBPROBE_DATABASE"):
        monkeypatch.delenv(var, raising=False)
    s = Settings(_env_file=None)  # type: ignore[call-arg]

    assert s.PRODUCT_TYPE == ProductTypeEnum.ORACLE
    assert s.POOL_MAX_SIZE == 5
    assert s.POOL_MIN_IDLE == 2
    ds = s.datasource()
    assert ds.port == 1521
    assert ds.database == "XE"


def test_reads_prefixed_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DBPROBE_PRODUCT_TYPE", "mysql")
    monkeypatch.setenv("DBPROBE_HOST", "db.example")
    monkeypatch.setenv("DBPROBE_POOL_MAX_SIZE", "8")
    monkeypatch.delenv("DBPROBE_PORT", raising=False)

    s = Settings(_env_file=None)  # type: ignore[call-arg]
    ds = s.datasource()

    assert s.POOL_MAX_SIZE == 8
    assert ds.product_type == ProductTypeEnum.MYSQL
    assert ds.host == "db.example"
    assert ds.port == 3306


def test_datasource_overrides_skip_none() -> None:
    s = Settings(_env_file=None, HOST="configured", USERNAME="app")  # type: ignore[call-arg]

    ds = s.datasource(host=None, username="other", product_type=ProductTypeEnum.POSTGRES)

    assert ds.host == "configured"
    assert ds.username == "other"
    assert ds.port == 5432


def test_min_idle_above_max_size_rejected() -> None:
    with pytest.raises(ValidationError, match="POOL_MIN_IDLE"):
        Settings(_env_file=None, POOL_MAX_SIZE=2, POOL_MIN_IDLE=3)  # type: ignore[call-arg]


def test_log_level_normalized_and_checked() -> None:
    assert Settings(_env_file=None, LOG_LEVEL="debug").LOG_LEVEL == "DEBUG"  # type: ignore[call-arg]
    with pytest.raises(ValidationError, match="LOG_LEVEL"):
        Settings(_env_file=None, LOG_LEVEL="verbose")  # type: ignore[call-arg]
