"""
Connection health check for the probe target.
"""

import logging
from typing import Any

from dbprobe.core.dialect import ping_sql
from dbprobe.models import ProductTypeEnum

from .connect import execute

_log = logging.getLogger(__name__)


def health_check(conn: Any, product_type: ProductTypeEnum) -> bool:
    """
    Run the product's ping query (SELECT 1 [FROM DUAL]) and return True if no exception.
    """
    cur = None
    try:
        cur = execute(conn, ping_sql(product_type))
        cur.fetchone()
        return True
    except Exception as e:
        _log.debug("Health check failed: %s", e)
        return False
    finally:
        if cur is not None:
            try:
                cur.close()
            except Exception:
                pass
