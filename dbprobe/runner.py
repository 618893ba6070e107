"""
Run connectivity checks against a DataSource and collect a SuiteReport.

A failing check never stops the ones after it: any exception becomes a failed
CheckResult carrying the exception text and whatever detail lines the check
had produced so far.
"""

import logging
import time
from collections.abc import Iterable

from dbprobe.checks import CHECK_NAMES, CHECKS, Check
from dbprobe.core.dialect import display_url
from dbprobe.models import CheckResult, DataSource, SuiteReport

_log = logging.getLogger(__name__)


def select_checks(names: Iterable[str] | None = None) -> list[tuple[int, Check]]:
    """(number, check) pairs in run order; ``None`` selects every check."""
    numbered = list(enumerate(CHECKS, start=1))
    if names is None:
        return numbered
    wanted = set(names)
    unknown = sorted(wanted - set(CHECK_NAMES))
    if unknown:
        raise ValueError(
            f"Unknown check(s): {', '.join(unknown)}. Available: {', '.join(CHECK_NAMES)}"
        )
    return [(n, c) for n, c in numbered if c.name in wanted]


def run_check(number: int, check: Check, datasource: DataSource) -> CheckResult:
    lines: list[str] = []
    start = time.perf_counter()
    try:
        check.func(datasource, lines)
        ok, message = True, check.success
    except Exception as e:
        _log.debug("Check %s failed", check.name, exc_info=True)
        ok, message = False, str(e) or type(e).__name__
    elapsed_ms = (time.perf_counter() - start) * 1000
    _log.info("Check %s %s in %.1f ms", check.name, "passed" if ok else "failed", elapsed_ms)
    return CheckResult(
        number=number,
        name=check.name,
        title=check.title,
        ok=ok,
        message=message,
        lines=lines,
        elapsed_ms=round(elapsed_ms, 1),
    )


def run_checks(
    datasource: DataSource, names: Iterable[str] | None = None
) -> SuiteReport:
    """Run the selected checks (all by default) in order and return the report."""
    selected = select_checks(names)
    report = SuiteReport(
        product_type=datasource.product_type, target=display_url(datasource)
    )
    for number, check in selected:
        report.results.append(run_check(number, check, datasource))
    return report
