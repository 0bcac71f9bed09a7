from __future__ import annotations

from datetime import date
from typing import Callable, Collection, Optional, Protocol, Sequence

from ..core.enums import AttendanceCode
from .model import AttendanceRecord, AttendanceReportRow, DayEntry


class AttendanceRepository(Protocol):
    def list_for_user(
        self,
        user_id: int,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        """All records of a user, optionally limited to an inclusive date range."""

        raise NotImplementedError

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_recent_for_user(
        self,
        user_id: int,
        *,
        codes: Optional[Collection[AttendanceCode]] = None,
        limit: int = 30,
    ) -> Sequence[AttendanceRecord]:
        """Newest first."""

        raise NotImplementedError

    def create(self, entry: DayEntry) -> int:
        """Insert one record; a second record for the same user and day raises ConflictError."""

        raise NotImplementedError

    def save_day_entries(self, entries: Sequence[DayEntry], *, replace: bool = False) -> list[int]:
        """Write the whole sheet in one transaction.

        With ``replace`` an existing record for the user and day is updated in
        place and keeps its id; without it a duplicate raises ConflictError.
        Any failure leaves nothing stored.
        """

        raise NotImplementedError

    def create_checked(self, entry: DayEntry, check: Callable[[Sequence[AttendanceRecord]], None]) -> int:
        """Insert ``entry`` after ``check`` accepts the user's records, read under a per-user lock."""

        raise NotImplementedError

    def list_for_day(self, work_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def get_report_rows(
        self,
        *,
        start_date: date,
        end_date: date,
        unit_id: Optional[int] = None,
        station_id: Optional[int] = None,
    ) -> Sequence[AttendanceReportRow]:
        raise NotImplementedError
