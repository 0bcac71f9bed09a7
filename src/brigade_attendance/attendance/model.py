from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from decimal import Decimal
from typing import Optional

from ..core.enums import LEAVE_CODES, AttendanceCode


@dataclass(frozen=True)
class AttendanceRecord:
    """One attendance row per user and calendar day."""

    attendance_id: int
    user_id: int
    work_date: date
    code: Optional[AttendanceCode]
    entry_time: Optional[time]
    exit_time: Optional[time]
    overtime_hours: Decimal = Decimal("0")

    @property
    def is_leave(self) -> bool:
        return self.code in LEAVE_CODES

    @property
    def has_overtime(self) -> bool:
        return self.overtime_hours > 0

    def to_dict(self) -> dict:
        return {
            "attendance_id": self.attendance_id,
            "user_id": self.user_id,
            "date": self.work_date.isoformat(),
            "code": self.code.value if self.code else None,
            "entry_time": self.entry_time.strftime("%H:%M") if self.entry_time else None,
            "exit_time": self.exit_time.strftime("%H:%M") if self.exit_time else None,
            "overtime_hours": float(self.overtime_hours),
        }


@dataclass(frozen=True)
class DayEntry:
    """A validated write for one user and day, ready for storage."""

    user_id: int
    work_date: date
    code: AttendanceCode
    entry_time: time
    exit_time: time
    overtime_hours: Decimal = Decimal("0")


@dataclass(frozen=True)
class AttendanceReportRow:
    user_id: int
    email: str
    full_name: str
    dni: Optional[str]
    unit_name: Optional[str]
    station_name: Optional[str]
    work_date: date
    code: Optional[AttendanceCode]
    entry_time: Optional[time]
    exit_time: Optional[time]
    overtime_hours: Decimal
