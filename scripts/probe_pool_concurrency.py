#!/usr/bin/env python3
"""
Probe pool bounds: borrow N pooled connections in parallel and hold each for a while.

With the default pool (DBPROBE_POOL_MAX_SIZE=5) and --concurrent 8 --hold 3 --timeout 1:
  Expected: 5 workers acquire a connection, 3 time out waiting for one.

Usage:
  python scripts/probe_pool_concurrency.py [--concurrent N] [--hold SECONDS] [--timeout SECONDS]
  Target comes from DBPROBE_* env (see dbprobe.core.config).
"""

import argparse
import os
import sys
import time
from concurrent.futures import ThreadPoolExecutor, as_completed

from sqlalchemy.exc import TimeoutError as PoolTimeoutError

from dbprobe.core.config import settings
from dbprobe.core.pool import PoolManager, health_check
from dbprobe.models import DataSource


def borrow(
    manager: PoolManager, datasource: DataSource, index: int, hold: float
) -> tuple[int, str]:
    """Acquire one connection, ping it, hold it; return (index, outcome)."""
    start = time.monotonic()
    try:
        with manager.connection(datasource) as conn:
            waited = time.monotonic() - start
            ok = health_check(conn, datasource.product_type)
            time.sleep(hold)
            return (index, f"acquired after {waited:.2f}s, ping {'ok' if ok else 'FAILED'}")
    except PoolTimeoutError:
        return (index, f"timed out after {time.monotonic() - start:.2f}s")
    except Exception as e:
        return (index, f"error: {e}")


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Borrow N pooled connections in parallel to exercise the pool bound."
    )
    parser.add_argument(
        "--concurrent",
        type=int,
        default=int(os.environ.get("CONCURRENT", "8")),
        help="Number of parallel borrowers (default 8)",
    )
    parser.add_argument(
        "--hold",
        type=float,
        default=3.0,
        help="Seconds each borrower keeps its connection (default 3)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=1.0,
        help="Pool acquisition timeout in seconds (default 1)",
    )
    args = parser.parse_args()

    manager = PoolManager(connection_timeout=args.timeout)
    datasource = settings.datasource()
    try:
        manager.get_pool(datasource)
    except Exception as e:
        print(f"Error: could not create pool: {e}", file=sys.stderr)
        sys.exit(1)

    print(
        f"Borrowing {args.concurrent} connections from a pool of {manager.max_size} "
        f"(hold {args.hold}s, timeout {args.timeout}s)"
    )
    print("---")

    results: list[tuple[int, str]] = []
    try:
        with ThreadPoolExecutor(max_workers=args.concurrent) as executor:
            futures = {
                executor.submit(borrow, manager, datasource, i, args.hold): i
                for i in range(args.concurrent)
            }
            for future in as_completed(futures):
                results.append(future.result())

        results.sort(key=lambda x: x[0])
        for idx, outcome in results:
            print(f"  Worker {idx + 1:2d}: {outcome}")

        stats = manager.stats(datasource.id)
        print("---")
        print(f"Pool: active={stats.active} idle={stats.idle} total={stats.total}")
    finally:
        manager.dispose()


if __name__ == "__main__":
    main()
