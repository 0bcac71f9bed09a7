from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Optional

from ..core.enums import OutingKind


@dataclass(frozen=True)
class Outing:
    outing_id: int
    attendance_id: int
    work_date: date
    kind: OutingKind
    departure_time: Optional[time]
    return_time: Optional[time]
    place: Optional[str]
    crew_count: int

    def to_dict(self) -> dict:
        return {
            "outing_id": self.outing_id,
            "attendance_id": self.attendance_id,
            "date": self.work_date.isoformat(),
            "kind": self.kind.value,
            "departure_time": self.departure_time.strftime("%H:%M") if self.departure_time else None,
            "return_time": self.return_time.strftime("%H:%M") if self.return_time else None,
            "place": self.place,
            "crew_count": self.crew_count,
        }


@dataclass(frozen=True)
class NewOuting:
    kind: OutingKind
    departure_time: time
    return_time: time
    place: Optional[str]
    crew_count: int
