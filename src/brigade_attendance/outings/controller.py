from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.guards import roles_required, session_role
from ..common.http import request_payload
from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/jr/outings", methods=["POST"], endpoint="record_outings")
    @roles_required(Role.JR, Role.ADMIN)
    def record_outings():
        payload = request_payload()
        raw_date = payload.get("date")
        outings = payload.get("outings") or []
        if not isinstance(outings, list):
            raise ValidationError("Se esperaba una lista de salidas")

        inserted = container.outing_service.record_outings(
            current_role=session_role(),
            work_date=parse_iso_date(raw_date) if raw_date else None,
            user_ids=payload.get("user_ids") or [],
            outings=outings,
        )
        return jsonify({"inserted": inserted}), 201

    @app.route("/api/jr/outings", methods=["GET"], endpoint="list_outings")
    @roles_required(Role.JR, Role.ADMIN)
    def list_outings():
        work_date = parse_iso_date(request.args.get("date", ""))
        return jsonify({"outings": [o.to_dict() for o in container.outing_service.list_for_day(work_date)]})
