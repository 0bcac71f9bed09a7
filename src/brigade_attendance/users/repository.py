from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import User


class UserRepository(Protocol):
    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def get_by_dni(self, dni: str) -> Optional[User]:
        """Case-insensitive lookup by national id."""

        raise NotImplementedError

    def create_user(
        self,
        *,
        email: str,
        password_hash: Optional[str],
        role: Role,
        dni: Optional[str] = None,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        unit_id: Optional[int] = None,
        station_id: Optional[int] = None,
    ) -> int:
        """Duplicate email or DNI raises ConflictError."""

        raise NotImplementedError

    def upsert_pending(
        self,
        *,
        email: str,
        dni: Optional[str] = None,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        unit_id: Optional[int] = None,
        station_id: Optional[int] = None,
    ) -> int:
        """Create a pending account or refresh the details of an existing pending one."""

        raise NotImplementedError

    def list_accounts(self, *, pending_only: bool = False) -> Sequence[User]:
        raise NotImplementedError

    def list_by_zone(self, zone: str) -> Sequence[User]:
        """Active non-pending users posted to a unit or station of the zone."""

        raise NotImplementedError

    def approve(self, *, user_id: int, role: Role, password_hash: str) -> bool:
        raise NotImplementedError

    def delete_by_id(self, user_id: int) -> bool:
        raise NotImplementedError
