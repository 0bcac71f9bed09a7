from __future__ import annotations

import logging
from datetime import timedelta

from flask import Flask, jsonify, redirect, request, session

from ..common.guards import home_for, login_required, roles_required, session_role, session_user_id
from ..common.http import request_payload
from ..core.enums import Role
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/", methods=["GET"], endpoint="home")
    def home():
        role = session_role()
        if "user_id" not in session or role is None:
            return redirect("/login")
        return redirect(home_for(role))

    @app.route("/auth/login", methods=["POST"], endpoint="login")
    def login():
        payload = request_payload()
        s_user = container.auth_service.authenticate(payload.get("email", ""), payload.get("password", ""))

        session.clear()
        session.permanent = bool(payload.get("remember_me"))
        app.permanent_session_lifetime = timedelta(days=7)
        session["user_id"] = s_user.user_id
        session["name"] = s_user.full_name
        session["role"] = s_user.role.value

        logger.info("User %s logged in as %s", s_user.user_id, s_user.role.value)
        return jsonify({"user_id": s_user.user_id, "role": s_user.role.value, "home": home_for(s_user.role)})

    @app.route("/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"ok": True})

    @app.route("/api/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        user = container.user_service.profile(session_user_id())
        return jsonify({**user.to_dict(), "home": home_for(user.role)})

    @app.route("/api/register", methods=["POST"], endpoint="register_pending")
    def register_pending():
        user_id = container.user_service.register(email=request_payload().get("email", ""))
        return jsonify({"user_id": user_id, "role": Role.PENDING.value}), 201

    @app.route("/api/jr/proposals", methods=["POST"], endpoint="propose_user")
    @roles_required(Role.JR)
    def propose_user():
        payload = request_payload()
        user_id = container.user_service.propose_user(
            current_role=session_role(),
            email=payload.get("email", ""),
            dni=payload.get("dni"),
            first_name=payload.get("first_name"),
            last_name=payload.get("last_name"),
            post=payload.get("post"),
        )
        return jsonify({"user_id": user_id}), 201

    @app.route("/api/admin/users", methods=["GET"], endpoint="admin_users")
    @roles_required(Role.ADMIN)
    def admin_users():
        pending_only = request.args.get("pending", "1") not in ("0", "false")
        users = container.user_service.list_accounts(pending_only=pending_only)
        return jsonify({"users": [u.to_dict() for u in users]})

    @app.route("/api/admin/users", methods=["POST"], endpoint="add_user")
    @roles_required(Role.ADMIN)
    def add_user():
        payload = request_payload()
        user_id = container.user_service.create_account(
            current_role=session_role(),
            email=payload.get("email", ""),
            password=payload.get("password", ""),
            role=payload.get("role", ""),
            dni=payload.get("dni"),
            first_name=payload.get("first_name"),
            last_name=payload.get("last_name"),
            post=payload.get("post"),
        )
        return jsonify({"user_id": user_id}), 201

    @app.route("/api/admin/users/<int:user_id>/approve", methods=["POST"], endpoint="approve_user")
    @roles_required(Role.ADMIN)
    def approve_user(user_id: int):
        temp_password = container.user_service.approve(
            current_role=session_role(),
            user_id=user_id,
            role=request_payload().get("role", ""),
        )
        return jsonify({"user_id": user_id, "temporary_password": temp_password})

    @app.route("/api/admin/users/<int:user_id>", methods=["DELETE"], endpoint="delete_user")
    @roles_required(Role.ADMIN)
    def delete_user(user_id: int):
        container.user_service.delete_user(
            current_role=session_role(),
            current_user_id=session_user_id(),
            user_id=user_id,
        )
        return jsonify({"ok": True})

    @app.route("/api/users/by-dni", methods=["GET"], endpoint="user_by_dni")
    @roles_required(Role.ADMIN, Role.JR)
    def user_by_dni():
        user = container.user_service.find_by_dni(request.args.get("dni", ""))
        return jsonify(user.to_dict())
