from __future__ import annotations

import logging
from datetime import date
from typing import Any, Iterable, Mapping, Optional, Sequence

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import parse_clock
from ..core.constants import DEFAULT_OUTING_DEPARTURE, DEFAULT_OUTING_RETURN
from ..core.enums import OutingKind, Role
from ..core.exceptions import AuthorizationError, ValidationError
from .model import NewOuting, Outing
from .repository import OutingRepository

logger = logging.getLogger(__name__)


def _parse_kind(value: Any) -> OutingKind:
    text = str(value or "").strip().lower()
    if text.startswith("prev"):
        return OutingKind.PREVENCION
    return OutingKind.EXTINCION


def _parse_crew(value: Any) -> int:
    try:
        return int(float(str(value).strip()))
    except (TypeError, ValueError, OverflowError):
        return 0


def parse_outing(raw: Mapping[str, Any]) -> Optional[NewOuting]:
    """Normalize one outing row; rows without crew are dropped (None)."""

    crew = _parse_crew(raw.get("crew_count"))
    if crew <= 0:
        return None
    place = str(raw.get("place") or "").strip() or None
    return NewOuting(
        kind=_parse_kind(raw.get("kind")),
        departure_time=parse_clock(raw.get("departure_time"), DEFAULT_OUTING_DEPARTURE),
        return_time=parse_clock(raw.get("return_time"), DEFAULT_OUTING_RETURN),
        place=place,
        crew_count=crew,
    )


class OutingService:
    """Use case: log the call-outs of a day against that day's attendance."""

    def __init__(self, outings: OutingRepository, attendance: AttendanceRepository):
        self._outings = outings
        self._attendance = attendance

    def record_outings(
        self,
        *,
        current_role: Role,
        work_date: Optional[date],
        user_ids: Sequence[int],
        outings: Iterable[Mapping[str, Any]],
    ) -> int:
        if current_role not in (Role.JR, Role.ADMIN):
            raise AuthorizationError("Solo un jefe de retén puede registrar salidas")
        if work_date is None:
            raise ValidationError("Falta la fecha")

        raw = list(outings or [])
        if not raw:
            raise ValidationError("No hay salidas que guardar")

        day_records = list(self._attendance.list_for_day(work_date))
        if not day_records:
            raise ValidationError("No existen anotaciones para esa fecha; guarda primero las anotaciones")

        wanted = [int(u) for u in (user_ids or [])]
        anchor = next(
            (rec for uid in wanted for rec in day_records if rec.user_id == uid),
            day_records[0],
        )

        to_store = [o for o in (parse_outing(r) for r in raw) if o is not None]
        inserted = self._outings.create_many(attendance_id=anchor.attendance_id, outings=to_store)
        logger.info(
            "Stored %d outings on %s (anchor attendance %s)", inserted, work_date.isoformat(), anchor.attendance_id
        )
        return inserted

    def list_for_day(self, work_date: date) -> Sequence[Outing]:
        return self._outings.list_for_day(work_date)
