import pytest
from pydantic import ValidationError

from dbprobe.models import CheckResult, DataSource, ProductTypeEnum, SuiteReport


@pytest.mark.parametrize(
    "product_type,port",
    [
        (ProductTypeEnum.POSTGRES, 5432),
        (ProductTypeEnum.MYSQL, 3306),
        (ProductTypeEnum.ORACLE, 1521),
    ],
)
def test_datasource_default_port(product_type: ProductTypeEnum, port: int) -> None:
    ds = DataSource(product_type=product_type, host="h", database="d", username="u")
    assert ds.port == port


def test_datasource_explicit_port_kept() -> None:
    ds = DataSource(product_type="postgres", host="h", port=6543, database="d", username="u")
    assert ds.port == 6543


def test_datasource_requires_host() -> None:
    with pytest.raises(ValidationError):
        DataSource(product_type="postgres", host="", database="d", username="u")


def test_datasource_rejects_unknown_product() -> None:
    with pytest.raises(ValidationError):
        DataSource(product_type="db2", host="h", database="d", username="u")


def test_suite_report_ok_and_failed() -> None:
    def result(n: int, ok: bool) -> CheckResult:
        return CheckResult(number=n, name=f"c{n}", title="t", ok=ok, message="m")

    report = SuiteReport(product_type=ProductTypeEnum.MYSQL, target="x")
    assert report.ok is True

    report.results = [result(1, True), result(2, False)]
    assert report.ok is False
    assert [r.number for r in report.failed] == [2]
