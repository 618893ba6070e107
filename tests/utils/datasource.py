"""Test helpers for DataSource."""

from dbprobe.models import DataSource, ProductTypeEnum


def make_datasource(
    product_type: ProductTypeEnum = ProductTypeEnum.POSTGRES,
    **overrides: object,
) -> DataSource:
    params: dict[str, object] = {
        "name": "test",
        "product_type": product_type,
        "host": "localhost",
        "database": "db",
        "username": "u",
        "password": "p",
    }
    params.update(overrides)
    return DataSource(**params)
