"""
dbprobe command line.

Usage:
  dbprobe [--product-type oracle|postgres|mysql] [--host H] [--port P] [--database D]
          [--user U] [--password PW] [--sid | --service-name] [--check NAME ...] [--json]
  Or set env: DBPROBE_HOST, DBPROBE_PASSWORD, ... (see dbprobe.core.config)

Exit status: 0 when every selected check passes, 1 when any fails, 2 on bad
arguments or configuration.
"""

import argparse
import logging
import sys
from typing import TYPE_CHECKING

from pydantic import ValidationError

from dbprobe.models import ProductTypeEnum
from dbprobe.report import render_json, render_text

if TYPE_CHECKING:
    from dbprobe.core.config import Settings

_log = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def build_parser(settings: "Settings") -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dbprobe",
        description="Check connectivity to a relational database: raw, parameterized "
        "and pooled connections plus sample data operations.",
    )
    parser.add_argument(
        "--product-type",
        choices=[p.value for p in ProductTypeEnum],
        help=f"Database product (default {settings.PRODUCT_TYPE.value})",
    )
    parser.add_argument("--host", help=f"Database host (default {settings.HOST})")
    parser.add_argument("--port", type=int, help="Database port (default: product default)")
    parser.add_argument(
        "--database",
        help=f"Database name, or Oracle SID/service name (default {settings.DATABASE})",
    )
    parser.add_argument("--user", help=f"Username (default {settings.USERNAME})")
    parser.add_argument(
        "--password", help="Password (or set DBPROBE_PASSWORD env)"
    )
    sid = parser.add_mutually_exclusive_group()
    sid.add_argument(
        "--sid",
        dest="oracle_use_sid",
        action="store_true",
        default=None,
        help="Oracle: treat --database as a SID",
    )
    sid.add_argument(
        "--service-name",
        dest="oracle_use_sid",
        action="store_false",
        help="Oracle: treat --database as a service name",
    )
    parser.add_argument(
        "--check",
        action="append",
        dest="checks",
        metavar="NAME",
        help="Run only this check (repeatable). See --list-checks.",
    )
    parser.add_argument(
        "--list-checks", action="store_true", help="List available checks and exit"
    )
    parser.add_argument("--json", action="store_true", help="Print the report as JSON")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=settings.LOG_LEVEL,
        help=f"Logging level for diagnostics on stderr (default {settings.LOG_LEVEL})",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    # Settings are read from the environment on import.
    try:
        from dbprobe.checks import CHECKS
        from dbprobe.core.config import settings
        from dbprobe.runner import run_checks, select_checks
    except ValidationError as e:
        print(f"Error: invalid DBPROBE_* configuration: {e}", file=sys.stderr)
        return 2

    parser = build_parser(settings)
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.list_checks:
        for number, check in enumerate(CHECKS, start=1):
            print(f"{number}. {check.name:<12} {check.title}")
        return 0

    try:
        datasource = settings.datasource(
            product_type=args.product_type,
            host=args.host,
            port=args.port,
            database=args.database,
            username=args.user,
            password=args.password,
            oracle_use_sid=args.oracle_use_sid,
        )
        select_checks(args.checks)
    except (ValidationError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    _log.info("Probing %s", datasource.product_type.value)
    report = run_checks(datasource, args.checks)
    print(render_json(report) if args.json else render_text(report))
    return 0 if report.ok else 1


if __name__ == "__main__":
    sys.exit(main())
