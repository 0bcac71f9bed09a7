from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from decimal import Decimal

from ..attendance.model import DayEntry
from ..core.enums import AttendanceCode


@dataclass(frozen=True)
class LeaveRequest:
    """A day off asked for by a firefighter or shift leader."""

    user_id: int
    work_date: date
    code: AttendanceCode

    def to_day_entry(self) -> DayEntry:
        # Days off are stored with zeroed times and no overtime.
        return DayEntry(
            user_id=self.user_id,
            work_date=self.work_date,
            code=self.code,
            entry_time=time(0, 0),
            exit_time=time(0, 0),
            overtime_hours=Decimal("0"),
        )
