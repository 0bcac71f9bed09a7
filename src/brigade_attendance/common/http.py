from __future__ import annotations

from typing import Optional

from flask import request

from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from .guards import session_role, session_user_id

# Roles allowed to read another user's attendance and balances.
SUPERVISOR_ROLES = (Role.ADMIN, Role.JR)


def request_payload() -> dict:
    """JSON body, or the submitted form for classic HTML posts."""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()


def int_arg(name: str, default: Optional[int] = None) -> Optional[int]:
    value = request.args.get(name)
    if value in (None, ""):
        return default
    try:
        return int(value)
    except ValueError:
        raise ValidationError(f"Parámetro no válido: {name}")


def target_user_id() -> int:
    """The ``user_id`` query argument, or the logged-in user when absent."""
    own_id = session_user_id()
    requested = int_arg("user_id", own_id)
    if requested != own_id and session_role() not in SUPERVISOR_ROLES:
        raise AuthorizationError("No tienes permiso para consultar a otro usuario")
    return int(requested)

