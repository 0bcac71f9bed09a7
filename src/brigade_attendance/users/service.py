from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass
from typing import Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_email, require_min_length
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, ConflictError, NotFoundError, ValidationError
from ..locations.service import LocationService
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)

ASSIGNABLE_ROLES = (Role.ADMIN, Role.JR, Role.BF)


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    user_id: int
    full_name: str
    role: Role
    unit_id: Optional[int]
    station_id: Optional[int]


def _parse_role(value: object) -> Role:
    try:
        role = Role(str(getattr(value, "value", value) or "").strip().lower())
    except ValueError:
        raise ValidationError("Rol no válido")
    if role not in ASSIGNABLE_ROLES:
        raise ValidationError("Rol no válido")
    return role


def _clean(value: Optional[str]) -> Optional[str]:
    value = (value or "").strip()
    return value or None


def _clean_dni(value: Optional[str]) -> Optional[str]:
    value = _clean(value)
    return value.upper() if value else None


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, email: str, password: str) -> SessionUser:
        user = self._users.get_by_email((email or "").strip().lower())
        if not user or not user.is_active or not user.password_hash:
            raise AuthenticationError("Email o contraseña incorrectos")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except (TypeError, ValueError):
            # e.g. placeholder or corrupted hashes
            ok = False

        if not ok:
            raise AuthenticationError("Email o contraseña incorrectos")

        return SessionUser(
            user_id=user.user_id,
            full_name=user.full_name,
            role=user.role,
            unit_id=user.unit_id,
            station_id=user.station_id,
        )


class UserService:
    """Use case: accounts, self-registration and admin approval."""

    def __init__(self, users: UserRepository, locations: LocationService):
        self._users = users
        self._locations = locations

    def create_account(
        self,
        *,
        current_role: Role,
        email: str,
        password: str,
        role: object,
        dni: Optional[str] = None,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        post: Optional[str] = None,
    ) -> int:
        if current_role != Role.ADMIN:
            raise AuthorizationError("No tienes permiso")

        email = require_email(email)
        require_min_length(password or "", "La contraseña", MIN_PASSWORD_LENGTH)
        role = _parse_role(role)
        destination = self._locations.resolve_post(post)

        if self._users.get_by_email(email):
            raise ConflictError("El email ya está registrado")

        user_id = self._users.create_user(
            email=email,
            password_hash=generate_password_hash(password),
            role=role,
            dni=_clean_dni(dni),
            first_name=_clean(first_name),
            last_name=_clean(last_name),
            unit_id=destination.unit_id,
            station_id=destination.station_id,
        )
        logger.info("Account %s created with role %s", user_id, role.value)
        return user_id

    def register(self, *, email: str) -> int:
        email = require_email(email)
        if self._users.get_by_email(email):
            raise ConflictError("El email ya está registrado")
        user_id = self._users.create_user(email=email, password_hash=None, role=Role.PENDING)
        logger.info("Pending registration %s", user_id)
        return user_id

    def propose_user(
        self,
        *,
        current_role: Role,
        email: str,
        dni: Optional[str] = None,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        post: Optional[str] = None,
    ) -> int:
        if current_role != Role.JR:
            raise AuthorizationError("Solo un jefe de retén puede proponer usuarios")

        email = require_email(email)
        existing = self._users.get_by_email(email)
        if existing and not existing.is_pending:
            raise ConflictError("El usuario ya tiene una cuenta activa")

        destination = self._locations.resolve_post(post)
        return self._users.upsert_pending(
            email=email,
            dni=_clean_dni(dni),
            first_name=_clean(first_name),
            last_name=_clean(last_name),
            unit_id=destination.unit_id,
            station_id=destination.station_id,
        )

    def list_accounts(self, *, pending_only: bool = True) -> Sequence[User]:
        return self._users.list_accounts(pending_only=pending_only)

    def approve(self, *, current_role: Role, user_id: int, role: object) -> str:
        """Give a pending account its role and return a one-time temporary password."""

        if current_role != Role.ADMIN:
            raise AuthorizationError("No tienes permiso")

        role = _parse_role(role)
        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError("Usuario no encontrado")
        if not user.is_pending:
            raise ConflictError("El usuario ya está aprobado")

        temp_password = secrets.token_urlsafe(9)
        if not self._users.approve(user_id=user.user_id, role=role, password_hash=generate_password_hash(temp_password)):
            raise NotFoundError("Usuario no encontrado")

        logger.info("Account %s approved as %s", user.user_id, role.value)
        return temp_password

    def delete_user(self, *, current_role: Role, current_user_id: int, user_id: int) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("No tienes permiso")

        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError("Usuario no encontrado")
        if user.user_id == int(current_user_id):
            raise ValidationError("No puedes eliminar tu propia cuenta")
        if user.role == Role.ADMIN:
            raise ValidationError("No se puede eliminar una cuenta de administrador")

        if not self._users.delete_by_id(user.user_id):
            raise NotFoundError("Usuario no encontrado")
        logger.info("Account %s deleted", user.user_id)

    def find_by_dni(self, dni: str) -> User:
        dni = (dni or "").strip()
        if not dni:
            raise ValidationError("DNI no válido")
        user = self._users.get_by_dni(dni)
        if not user:
            raise NotFoundError("No existe ningún usuario con ese DNI")
        return user

    def profile(self, user_id: int) -> User:
        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError("Usuario no encontrado")
        return user
