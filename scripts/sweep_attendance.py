"""Delete attendance records older than ATTENDANCE_RETENTION_MONTHS.

Meant for a daily scheduler entry.
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from src.hr_backoffice.hr_backoffice.container import build_container_from_settings
from src.hr_backoffice.hr_backoffice.main import load_settings

logger = logging.getLogger("scripts.sweep_attendance")


def main() -> int:
    settings = load_settings()
    container = build_container_from_settings(settings)
    result = container.retention_job.run()
    logger.info("Retention sweep finished: %s", result.to_dict())
    return 0


if __name__ == "__main__":
    sys.exit(main())
