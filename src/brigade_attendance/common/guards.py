"""Session guards shared by every controller.

All role checks go through ``roles_required`` so the allowed roles of an
endpoint are visible next to its route.
"""

from __future__ import annotations

from functools import wraps
from typing import Optional

from flask import jsonify, session

from ..core.enums import Role

HOME_BY_ROLE = {
    Role.ADMIN: "/admin",
    Role.JR: "/jr",
    Role.BF: "/bf",
    Role.PENDING: "/pendiente",
}

_unmapped = set(Role) - set(HOME_BY_ROLE)
if _unmapped:
    raise RuntimeError(f"Roles without a home route: {sorted(r.value for r in _unmapped)}")


def home_for(role: Role) -> str:
    return HOME_BY_ROLE[Role(role)]


def session_role() -> Optional[Role]:
    try:
        return Role(session.get("role"))
    except ValueError:
        return None


def session_user_id() -> int:
    return int(session["user_id"])


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session or session_role() is None:
            return jsonify({"error": "Inicia sesión para continuar"}), 401
        return view(*args, **kwargs)

    return wrapper


def roles_required(*roles: Role):
    allowed = frozenset(roles)

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return jsonify({"error": "Inicia sesión para continuar"}), 401
            if session_role() not in allowed:
                return jsonify({"error": "No tienes permiso"}), 403
            return view(*args, **kwargs)

        return wrapper

    return decorator
