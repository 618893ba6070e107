"""Console and JSON rendering of a SuiteReport."""

import json

from dbprobe.models import CheckResult, SuiteReport

PASS_MARK = "✓"
FAIL_MARK = "✗"


def render_result(result: CheckResult) -> list[str]:
    out = [f"{result.number}. Testing {result.title}..."]
    out.extend(f"  {line}" for line in result.lines)
    if result.ok:
        out.append(f"{PASS_MARK} {result.message}")
    else:
        out.append(f"{FAIL_MARK} {result.title.capitalize()} failed: {result.message}")
    out.append("")
    return out


def render_text(report: SuiteReport) -> str:
    label = report.product_type.label
    out = [f"=== {label} Database Connectivity Test ===", f"Target: {report.target}", ""]
    for result in report.results:
        out.extend(render_result(result))
    passed = len(report.results) - len(report.failed)
    out.append(
        f"=== All checks completed: {passed} passed, {len(report.failed)} failed ==="
    )
    return "\n".join(out)


def render_json(report: SuiteReport) -> str:
    data = report.model_dump(mode="json")
    data["ok"] = report.ok
    return json.dumps(data, indent=2, ensure_ascii=False)
