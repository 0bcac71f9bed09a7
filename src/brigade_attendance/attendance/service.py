from __future__ import annotations

import calendar
import logging
from datetime import date
from typing import Any, Iterable, Mapping, Sequence

from ..common.datetime_utils import month_bounds, parse_clock, parse_iso_date
from ..common.validators import parse_overtime_hours, parse_positive_int
from ..core.constants import DEFAULT_ENTRY_TIME, DEFAULT_EXIT_TIME, DEFAULT_HISTORY_LIMIT
from ..core.enums import CODE_LABELS, DAILY_ENTRY_CODES, LEAVE_CODES, AttendanceCode, Role
from ..core.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from ..users.repository import UserRepository
from .model import AttendanceRecord, DayEntry
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def parse_day_entry(raw: Mapping[str, Any]) -> DayEntry:
    """Validate one row of the shift leader's daily sheet."""

    if not raw.get("user_id"):
        raise ValidationError("Falta el usuario")
    if not raw.get("date"):
        raise ValidationError("Falta la fecha")

    user_id = parse_positive_int(raw.get("user_id"), "Usuario")
    work_date = parse_iso_date(str(raw.get("date")))

    raw_code = str(raw.get("code") or "").strip()
    if raw_code:
        code = AttendanceCode.parse(raw_code)
        if code not in DAILY_ENTRY_CODES:
            raise ValidationError(f"Código no válido: {raw_code}")
    else:
        code = AttendanceCode.JR

    overtime = parse_overtime_hours(raw.get("overtime_hours"))
    if code in LEAVE_CODES and overtime > 0:
        raise ConflictError("Un día de permiso no puede tener horas extra")

    return DayEntry(
        user_id=user_id,
        work_date=work_date,
        code=code,
        entry_time=parse_clock(raw.get("entry_time"), DEFAULT_ENTRY_TIME),
        exit_time=parse_clock(raw.get("exit_time"), DEFAULT_EXIT_TIME),
        overtime_hours=overtime,
    )


class AttendanceService:
    def __init__(self, attendance: AttendanceRepository, users: UserRepository):
        self._attendance = attendance
        self._users = users

    def record_day_entries(
        self,
        *,
        current_role: Role,
        entries: Iterable[Mapping[str, Any]],
        replace: bool = False,
    ) -> list[int]:
        """Store the daily sheet; all rows are validated and then written in one transaction."""

        if current_role not in (Role.JR, Role.ADMIN):
            raise AuthorizationError("Solo un jefe de retén puede registrar anotaciones")

        parsed = [parse_day_entry(raw) for raw in entries]
        if not parsed:
            raise ValidationError("No hay anotaciones que guardar")

        seen: set[tuple[int, date]] = set()
        for entry in parsed:
            key = (entry.user_id, entry.work_date)
            if key in seen:
                raise ValidationError("Hay anotaciones repetidas para el mismo usuario y fecha")
            seen.add(key)

            if not self._users.get_by_id(entry.user_id):
                raise NotFoundError(f"Usuario {entry.user_id} no encontrado")
            if not replace and self._attendance.get_for_user_and_date(entry.user_id, entry.work_date):
                raise ConflictError(
                    f"Ya existe una anotación del usuario {entry.user_id} el {entry.work_date.isoformat()}"
                )

        ids = self._attendance.save_day_entries(parsed, replace=replace)
        logger.info("Stored %d attendance entries (replace=%s)", len(ids), replace)
        return ids

    def history(self, *, user_id: int, limit: int = DEFAULT_HISTORY_LIMIT) -> Sequence[AttendanceRecord]:
        if int(limit) <= 0:
            raise ValidationError("Límite no válido")
        return self._attendance.list_recent_for_user(int(user_id), limit=int(limit))

    def month_calendar(self, *, user_id: int, year: int, month: int) -> list[dict]:
        """One row per calendar day of the month, with code and label when recorded."""

        start, end = month_bounds(year, month)
        by_day = {
            r.work_date: r for r in self._attendance.list_for_user(int(user_id), start_date=start, end_date=end)
        }

        days = []
        for day in range(1, calendar.monthrange(start.year, start.month)[1] + 1):
            current = date(start.year, start.month, day)
            rec = by_day.get(current)
            code = rec.code if rec else None
            days.append(
                {
                    "date": current.isoformat(),
                    "code": code.value if code else None,
                    "label": CODE_LABELS.get(code) if code else None,
                    "overtime_hours": float(rec.overtime_hours) if rec else 0.0,
                }
            )
        return days
