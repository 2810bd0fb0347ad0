from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..common.clock import Clock
from ..common.datetime_utils import subtract_months
from ..core.constants import DEFAULT_BATCH_SIZE, DEFAULT_RETENTION_MONTHS
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RetentionResult:
    deleted_count: int
    cutoff: date

    def to_dict(self) -> dict:
        return {"deletedCount": self.deleted_count, "cutoff": self.cutoff.strftime("%Y-%m-%d")}


class AttendanceRetentionJob:
    """Deletes attendance records older than the retention window.

    Works in small batches; re-running after a crash simply continues.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        clock: Clock,
        *,
        retention_months: int = DEFAULT_RETENTION_MONTHS,
        batch_size: int = DEFAULT_BATCH_SIZE,
    ):
        if int(batch_size) <= 0:
            raise ValueError("batch_size must be positive")
        self._attendance = attendance
        self._clock = clock
        self._retention_months = int(retention_months)
        self._batch_size = int(batch_size)

    def run(self, *, today: Optional[date] = None) -> RetentionResult:
        today = today or self._clock.today()
        cutoff = subtract_months(today, self._retention_months)

        deleted = 0
        while True:
            n = self._attendance.delete_before(cutoff=cutoff, limit=self._batch_size)
            deleted += n
            if n < self._batch_size:
                break

        logger.info("Attendance retention sweep removed %s records dated before %s", deleted, cutoff)
        return RetentionResult(deleted_count=deleted, cutoff=cutoff)
