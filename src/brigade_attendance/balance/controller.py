from __future__ import annotations

from flask import Flask, jsonify

from ..common.datetime_utils import now_local
from ..common.guards import login_required
from ..common.http import int_arg, target_user_id
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/balance/overtime", methods=["GET"], endpoint="overtime_balance")
    @login_required
    def overtime_balance():
        balance = container.balance_service.overtime_for_user(target_user_id())
        return jsonify(balance.to_dict())

    @app.route("/api/balance/leave", methods=["GET"], endpoint="leave_balance")
    @login_required
    def leave_balance():
        year = int_arg("year", now_local().year)
        balance = container.balance_service.leave_for_user(target_user_id(), year)
        return jsonify(balance.to_dict())

    @app.route("/api/balance", methods=["GET"], endpoint="balance_snapshot")
    @login_required
    def balance_snapshot():
        year = int_arg("year", now_local().year)
        snapshot = container.balance_service.snapshot_for_user(target_user_id(), year)
        return jsonify(snapshot.to_dict())
