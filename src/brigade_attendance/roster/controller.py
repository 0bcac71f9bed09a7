from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.guards import roles_required
from ..common.http import request_payload
from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..container import Container
from .draft import RosterContext, RosterDraftStore


def register(app: Flask, container: Container) -> None:
    def _store() -> RosterDraftStore:
        return RosterDraftStore(session)

    @app.route("/api/jr/roster/draft", methods=["GET"], endpoint="load_roster_draft")
    @roles_required(Role.JR)
    def load_roster_draft():
        ctx = RosterContext.from_mapping(request.args)
        return jsonify({"key": ctx.key(), "selections": _store().load(ctx)})

    @app.route("/api/jr/roster/draft", methods=["PUT"], endpoint="save_roster_draft")
    @roles_required(Role.JR)
    def save_roster_draft():
        payload = request_payload()
        ctx = RosterContext.from_mapping(payload)
        selections = payload.get("selections") or []
        if not isinstance(selections, list):
            raise ValidationError("Se esperaba una lista de selecciones")
        return jsonify({"key": ctx.key(), "selections": _store().save(ctx, selections)})

    @app.route("/api/jr/roster/draft", methods=["DELETE"], endpoint="clear_roster_draft")
    @roles_required(Role.JR)
    def clear_roster_draft():
        ctx = RosterContext.from_mapping(request.args)
        _store().clear(ctx)
        return jsonify({"ok": True})
