from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..balance.service import BalanceService
from ..common.datetime_utils import month_bounds
from ..core.enums import AttendanceCode

REPORT_FIELDS = [
    "work_date",
    "user_id",
    "full_name",
    "email",
    "dni",
    "unit_name",
    "station_name",
    "code",
    "entry_time",
    "exit_time",
    "overtime_hours",
]


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: list[dict]


class AttendanceReportService:
    """Monthly rollup for admins: raw rows plus one summary line per user."""

    def __init__(self, attendance: AttendanceRepository, balances: BalanceService):
        self._attendance = attendance
        self._balances = balances

    def build_month_report(
        self,
        *,
        year: int,
        month: int,
        unit_id: Optional[int] = None,
        station_id: Optional[int] = None,
    ) -> ReportData:
        start, end = month_bounds(year, month)
        query_rows = self._attendance.get_report_rows(
            start_date=start, end_date=end, unit_id=unit_id, station_id=station_id
        )

        summary_map: dict[int, dict] = {}
        out_rows: list[dict] = []

        for r in query_rows:
            code = r.code.value if r.code else ""
            out_rows.append(
                {
                    "work_date": r.work_date.strftime("%Y-%m-%d"),
                    "user_id": r.user_id,
                    "full_name": r.full_name,
                    "email": r.email,
                    "dni": r.dni or "",
                    "unit_name": r.unit_name or "-",
                    "station_name": r.station_name or "-",
                    "code": code,
                    "entry_time": r.entry_time.strftime("%H:%M") if r.entry_time else "-",
                    "exit_time": r.exit_time.strftime("%H:%M") if r.exit_time else "-",
                    "overtime_hours": f"{r.overtime_hours:.2f}",
                }
            )

            s = summary_map.get(r.user_id)
            if not s:
                s = {
                    "user_id": r.user_id,
                    "full_name": r.full_name,
                    "email": r.email,
                    "codes": {c.value: 0 for c in AttendanceCode},
                    "month_overtime_hours": Decimal("0"),
                }
                summary_map[r.user_id] = s
            if code:
                s["codes"][code] += 1
            if r.overtime_hours > 0:
                s["month_overtime_hours"] += r.overtime_hours

        summary = []
        for s in summary_map.values():
            snapshot = self._balances.snapshot_for_user(s["user_id"], year)
            summary.append(
                {
                    "user_id": s["user_id"],
                    "full_name": s["full_name"],
                    "email": s["email"],
                    "codes": s["codes"],
                    "month_overtime_hours": float(s["month_overtime_hours"]),
                    "balance": snapshot.to_dict(),
                }
            )
        summary.sort(key=lambda x: x["full_name"].lower())

        return ReportData(rows=out_rows, summary=summary)


def report_to_csv(data: ReportData) -> bytes:
    """CSV export of the report rows (UTF-8 with BOM so spreadsheets pick the encoding)."""

    out = io.StringIO()
    writer = csv.DictWriter(out, fieldnames=REPORT_FIELDS)
    writer.writeheader()
    for row in data.rows:
        writer.writerow(row)
    return out.getvalue().encode("utf-8-sig")
