from __future__ import annotations

from flask import Flask, jsonify

from ..common.datetime_utils import now_local
from ..common.guards import roles_required
from ..common.http import int_arg
from ..core.enums import Role
from ..container import Container
from .service import ReportData, report_to_csv


def register(app: Flask, container: Container) -> None:
    def _build() -> tuple[int, int, ReportData]:
        today = now_local().date()
        year = int_arg("year", today.year)
        month = int_arg("month", today.month)
        data = container.report_service.build_month_report(
            year=year,
            month=month,
            unit_id=int_arg("unit_id"),
            station_id=int_arg("station_id"),
        )
        return year, month, data

    @app.route("/api/admin/reports/month", methods=["GET"], endpoint="month_report")
    @roles_required(Role.ADMIN)
    def month_report():
        year, month, data = _build()
        return jsonify({"year": year, "month": month, "rows": data.rows, "summary": data.summary})

    @app.route("/api/admin/reports/month.csv", methods=["GET"], endpoint="month_report_csv")
    @roles_required(Role.ADMIN)
    def month_report_csv():
        year, month, data = _build()
        return app.response_class(
            report_to_csv(data),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename=asistencia_{year}_{month:02d}.csv"},
        )
