from __future__ import annotations

from datetime import date
from typing import Any, Callable, Collection, Dict, Optional, Sequence

from ..core.enums import AttendanceCode
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time, to_decimal, unique_violation_as_conflict
from .model import AttendanceRecord, AttendanceReportRow, DayEntry
from .repository import AttendanceRepository

_DUPLICATE_DAY = "Ya existe una anotación para ese usuario y fecha"

_COLUMNS = "attendance_id, user_id, work_date, code, entry_time, exit_time, overtime_hours"


def _to_record(r: Dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        user_id=int(r["user_id"]),
        work_date=r["work_date"],
        code=AttendanceCode.parse(r.get("code")),
        entry_time=normalize_mysql_time(r.get("entry_time")),
        exit_time=normalize_mysql_time(r.get("exit_time")),
        overtime_hours=to_decimal(r.get("overtime_hours")),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_user(
        self,
        user_id: int,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["user_id=%s"]
        params: list[object] = [int(user_id)]
        if start_date is not None:
            clauses.append("work_date >= %s")
            params.append(start_date)
        if end_date is not None:
            clauses.append("work_date <= %s")
            params.append(end_date)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE {' AND '.join(clauses)} ORDER BY work_date",
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE user_id=%s AND work_date=%s",
                (int(user_id), work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def list_recent_for_user(
        self,
        user_id: int,
        *,
        codes: Optional[Collection[AttendanceCode]] = None,
        limit: int = 30,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["user_id=%s"]
        params: list[object] = [int(user_id)]
        if codes:
            clauses.append(f"code IN ({', '.join(['%s'] * len(codes))})")
            params.extend(c.value for c in codes)
        params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE {' AND '.join(clauses)}
                ORDER BY work_date DESC
                LIMIT %s
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]

    @staticmethod
    def _insert(cur, entry: DayEntry) -> int:
        cur.execute(
            """
            INSERT INTO attendance_records(user_id, work_date, code, entry_time, exit_time, overtime_hours)
            VALUES(%s,%s,%s,%s,%s,%s)
            """,
            (
                int(entry.user_id),
                entry.work_date,
                entry.code.value,
                entry.entry_time,
                entry.exit_time,
                entry.overtime_hours,
            ),
        )
        return int(cur.lastrowid)

    def create(self, entry: DayEntry) -> int:
        with unique_violation_as_conflict(_DUPLICATE_DAY), db_cursor(self._conn_factory) as (_, cur):
            return self._insert(cur, entry)

    @staticmethod
    def _update_in_place(cur, entry: DayEntry) -> Optional[int]:
        cur.execute(
            "SELECT attendance_id FROM attendance_records WHERE user_id=%s AND work_date=%s FOR UPDATE",
            (int(entry.user_id), entry.work_date),
        )
        r = fetchone(cur)
        if not r:
            return None

        attendance_id = int(r["attendance_id"])
        cur.execute(
            """
            UPDATE attendance_records
            SET code=%s, entry_time=%s, exit_time=%s, overtime_hours=%s
            WHERE attendance_id=%s
            """,
            (entry.code.value, entry.entry_time, entry.exit_time, entry.overtime_hours, attendance_id),
        )
        return attendance_id

    def save_day_entries(self, entries: Sequence[DayEntry], *, replace: bool = False) -> list[int]:
        ids: list[int] = []
        with unique_violation_as_conflict(_DUPLICATE_DAY), db_cursor(self._conn_factory) as (_, cur):
            for entry in entries:
                # Updating keeps attendance_id, so outings anchored to the day survive.
                existing_id = self._update_in_place(cur, entry) if replace else None
                ids.append(existing_id if existing_id is not None else self._insert(cur, entry))
        return ids

    def create_checked(self, entry: DayEntry, check: Callable[[Sequence[AttendanceRecord]], None]) -> int:
        with unique_violation_as_conflict(_DUPLICATE_DAY), db_cursor(self._conn_factory) as (_, cur):
            # Serializes concurrent requests of the same user until commit.
            cur.execute("SELECT user_id FROM users WHERE user_id=%s FOR UPDATE", (int(entry.user_id),))
            fetchone(cur)
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE user_id=%s ORDER BY work_date",
                (int(entry.user_id),),
            )
            check([_to_record(r) for r in fetchall(cur)])
            return self._insert(cur, entry)

    def list_for_day(self, work_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE work_date=%s ORDER BY attendance_id",
                (work_date,),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def get_report_rows(
        self,
        *,
        start_date: date,
        end_date: date,
        unit_id: Optional[int] = None,
        station_id: Optional[int] = None,
    ) -> Sequence[AttendanceReportRow]:
        clauses = ["ar.work_date BETWEEN %s AND %s"]
        params: list[object] = [start_date, end_date]

        if unit_id is not None:
            clauses.append("u.unit_id=%s")
            params.append(int(unit_id))
        if station_id is not None:
            clauses.append("u.station_id=%s")
            params.append(int(station_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT
                    u.user_id, u.email, u.dni,
                    TRIM(CONCAT(COALESCE(u.first_name, ''), ' ', COALESCE(u.last_name, ''))) AS full_name,
                    un.name AS unit_name, st.name AS station_name,
                    ar.work_date, ar.code, ar.entry_time, ar.exit_time, ar.overtime_hours
                FROM attendance_records ar
                JOIN users u ON u.user_id = ar.user_id
                LEFT JOIN units un ON un.unit_id = u.unit_id
                LEFT JOIN stations st ON st.station_id = u.station_id
                WHERE {' AND '.join(clauses)}
                ORDER BY ar.work_date ASC, u.last_name ASC, u.first_name ASC
                """,
                tuple(params),
            )
            return [
                AttendanceReportRow(
                    user_id=int(r["user_id"]),
                    email=r["email"],
                    full_name=r.get("full_name") or r["email"],
                    dni=r.get("dni"),
                    unit_name=r.get("unit_name"),
                    station_name=r.get("station_name"),
                    work_date=r["work_date"],
                    code=AttendanceCode.parse(r.get("code")),
                    entry_time=normalize_mysql_time(r.get("entry_time")),
                    exit_time=normalize_mysql_time(r.get("exit_time")),
                    overtime_hours=to_decimal(r.get("overtime_hours")),
                )
                for r in fetchall(cur)
            ]
