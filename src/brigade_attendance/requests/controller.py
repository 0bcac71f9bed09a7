from __future__ import annotations

from flask import Flask, jsonify

from ..common.datetime_utils import parse_iso_date
from ..common.guards import roles_required, session_role, session_user_id
from ..common.http import int_arg, request_payload
from ..core.constants import REQUEST_LIST_LIMITS
from ..core.enums import Role
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/requests", methods=["GET"], endpoint="my_requests")
    @roles_required(Role.BF, Role.JR)
    def my_requests():
        records = container.leave_request_service.list_requests(
            user_id=session_user_id(),
            limit=int_arg("limit", REQUEST_LIST_LIMITS[0]),
        )
        return jsonify({"requests": [r.to_dict() for r in records]})

    @app.route("/api/requests", methods=["POST"], endpoint="new_request")
    @roles_required(Role.BF, Role.JR)
    def new_request():
        payload = request_payload()
        attendance_id = container.leave_request_service.submit(
            current_role=session_role(),
            user_id=session_user_id(),
            work_date=parse_iso_date(payload.get("date", "")),
            code=payload.get("code", ""),
        )
        return jsonify({"attendance_id": attendance_id}), 201
