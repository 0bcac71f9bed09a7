from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import NewOuting, Outing


class OutingRepository(Protocol):
    def create_many(self, *, attendance_id: int, outings: Sequence[NewOuting]) -> int:
        """Insert all outings in one transaction; returns how many were stored."""

        raise NotImplementedError

    def list_for_day(self, work_date: date) -> Sequence[Outing]:
        raise NotImplementedError
