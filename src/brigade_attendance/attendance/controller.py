from __future__ import annotations

from flask import Flask, jsonify

from ..common.datetime_utils import now_local
from ..common.guards import login_required, roles_required, session_role
from ..common.http import int_arg, request_payload, target_user_id
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/jr/entries", methods=["POST"], endpoint="record_entries")
    @roles_required(Role.JR, Role.ADMIN)
    def record_entries():
        payload = request_payload()
        entries = payload.get("entries")
        if not isinstance(entries, list):
            raise ValidationError("Se esperaba una lista de anotaciones")

        ids = container.attendance_service.record_day_entries(
            current_role=session_role(),
            entries=entries,
            replace=bool(payload.get("replace", False)),
        )
        return jsonify({"attendance_ids": ids}), 201

    @app.route("/api/attendance/history", methods=["GET"], endpoint="attendance_history")
    @login_required
    def attendance_history():
        records = container.attendance_service.history(
            user_id=target_user_id(),
            limit=int_arg("limit", DEFAULT_HISTORY_LIMIT),
        )
        return jsonify({"records": [r.to_dict() for r in records]})

    @app.route("/api/attendance/month", methods=["GET"], endpoint="attendance_month")
    @login_required
    def attendance_month():
        today = now_local().date()
        days = container.attendance_service.month_calendar(
            user_id=target_user_id(),
            year=int_arg("year", today.year),
            month=int_arg("month", today.month),
        )
        return jsonify({"days": days})
