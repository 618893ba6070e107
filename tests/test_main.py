"""CLI tests: argument handling, output and exit status."""

import json
import os
import subprocess
import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from dbprobe.main import main
from dbprobe.models import CheckResult, ProductTypeEnum, SuiteReport


def _report(ok: bool) -> SuiteReport:
    return SuiteReport(
        product_type=ProductTypeEnum.POSTGRES,
        target="postgres://u@db:5432/app",
        results=[
            CheckResult(
                number=1,
                name="basic",
                title="basic connection",
                ok=ok,
                message="Basic connection successful!" if ok else "connection refused",
            )
        ],
    )


@patch("dbprobe.runner.run_checks")
def test_main_success_exit_zero(mock_run: MagicMock, capsys: pytest.CaptureFixture) -> None:
    mock_run.return_value = _report(True)

    code = main(
        [
            "--product-type", "postgres",
            "--host", "db",
            "--database", "app",
            "--user", "u",
            "--password", "pw",
            "--check", "basic",
        ]
    )

    assert code == 0
    ds, names = mock_run.call_args.args
    assert ds.product_type == ProductTypeEnum.POSTGRES
    assert (ds.host, ds.database, ds.username, ds.password) == ("db", "app", "u", "pw")
    assert names == ["basic"]
    out = capsys.readouterr().out
    assert "✓ Basic connection successful!" in out


@patch("dbprobe.runner.run_checks")
def test_main_failure_exit_one(mock_run: MagicMock, capsys: pytest.CaptureFixture) -> None:
    mock_run.return_value = _report(False)

    assert main(["--product-type", "postgres", "--host", "db"]) == 1
    assert "✗ Basic connection failed: connection refused" in capsys.readouterr().out


@patch("dbprobe.runner.run_checks")
def test_main_json_output(mock_run: MagicMock, capsys: pytest.CaptureFixture) -> None:
    mock_run.return_value = _report(True)

    assert main(["--product-type", "postgres", "--json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["ok"] is True


@patch("dbprobe.runner.run_checks")
def test_main_sid_flag(mock_run: MagicMock) -> None:
    mock_run.return_value = _report(True)

    main(["--product-type", "oracle", "--database", "XE", "--sid"])
    assert mock_run.call_args.args[0].oracle_use_sid is True

    main(["--product-type", "oracle", "--database", "XEPDB1", "--service-name"])
    assert mock_run.call_args.args[0].oracle_use_sid is False


@patch("dbprobe.runner.run_checks")
def test_main_unknown_check_exit_two(mock_run: MagicMock, capsys: pytest.CaptureFixture) -> None:
    assert main(["--check", "nope"]) == 2
    mock_run.assert_not_called()
    assert "Unknown check" in capsys.readouterr().err


@patch("dbprobe.runner.run_checks")
def test_main_invalid_port_exit_two(mock_run: MagicMock) -> None:
    assert main(["--port", "70000"]) == 2
    mock_run.assert_not_called()


def test_main_list_checks(capsys: pytest.CaptureFixture) -> None:
    assert main(["--list-checks"]) == 0
    out = capsys.readouterr().out
    assert "1. basic" in out
    assert "6. prepared" in out


def test_main_rejects_unknown_log_level() -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["--log-level", "verbose", "--list-checks"])
    assert excinfo.value.code == 2


def test_main_log_level_is_case_insensitive() -> None:
    assert main(["--log-level", "debug", "--list-checks"]) == 0


@pytest.mark.parametrize(
    "env",
    [
        {"DBPROBE_POOL_MIN_IDLE": "9"},
        {"DBPROBE_PORT": "not-a-port"},
        {"DBPROBE_LOG_LEVEL": "verbose"},
    ],
)
def test_invalid_environment_exit_two(env: dict[str, str]) -> None:
    result = subprocess.run(
        [sys.executable, "-m", "dbprobe", "--list-checks"],
        cwd=Path(__file__).resolve().parents[1],
        env={**os.environ, **env},
        capture_output=True,
        text=True,
        timeout=60,
    )

    assert result.returncode == 2, result.stderr
    assert result.stderr.startswith("Error: invalid DBPROBE_* configuration")
    assert "Traceback" not in result.stderr
