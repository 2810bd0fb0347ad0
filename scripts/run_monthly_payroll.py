"""Create UNPAID salary records for every active employee.

Meant for a monthly scheduler entry; safe to re-run for the same month.

    python scripts/run_monthly_payroll.py [--month March --year 2025]
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from src.hr_backoffice.hr_backoffice.container import build_container_from_settings
from src.hr_backoffice.hr_backoffice.main import load_settings

logger = logging.getLogger("scripts.run_monthly_payroll")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--month", help="month name or number (default: current civil month)")
    parser.add_argument("--year", type=int, help="year (default: current civil year)")
    args = parser.parse_args(argv)

    settings = load_settings()
    container = build_container_from_settings(settings)
    result = container.payroll_job.run(month=args.month, year=args.year)

    logger.info("Payroll run finished: %s", result.to_dict())
    return 1 if result.failed_count else 0


if __name__ == "__main__":
    sys.exit(main())
