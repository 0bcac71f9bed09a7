from __future__ import annotations

from datetime import date
from typing import Sequence

from ..core.enums import OutingKind
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, normalize_mysql_time
from .model import NewOuting, Outing
from .repository import OutingRepository


class MySQLOutingRepository(OutingRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create_many(self, *, attendance_id: int, outings: Sequence[NewOuting]) -> int:
        if not outings:
            return 0
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                """
                INSERT INTO outings(attendance_id, kind, departure_time, return_time, place, crew_count)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                [
                    (int(attendance_id), o.kind.value, o.departure_time, o.return_time, o.place, int(o.crew_count))
                    for o in outings
                ],
            )
            return len(outings)

    def list_for_day(self, work_date: date) -> Sequence[Outing]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT o.outing_id, o.attendance_id, ar.work_date, o.kind,
                       o.departure_time, o.return_time, o.place, o.crew_count
                FROM outings o
                JOIN attendance_records ar ON ar.attendance_id = o.attendance_id
                WHERE ar.work_date=%s
                ORDER BY o.outing_id
                """,
                (work_date,),
            )
            return [
                Outing(
                    outing_id=int(r["outing_id"]),
                    attendance_id=int(r["attendance_id"]),
                    work_date=r["work_date"],
                    kind=OutingKind(r["kind"]),
                    departure_time=normalize_mysql_time(r.get("departure_time")),
                    return_time=normalize_mysql_time(r.get("return_time")),
                    place=r.get("place"),
                    crew_count=int(r["crew_count"]),
                )
                for r in fetchall(cur)
            ]
