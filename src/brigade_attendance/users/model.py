from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: an account of the organization.

    Pending accounts have no password until an admin approves them.
    """

    user_id: int
    email: str
    password_hash: Optional[str]
    role: Role
    dni: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    unit_id: Optional[int] = None
    station_id: Optional[int] = None
    is_active: bool = True
    created_at: Optional[datetime] = None

    @property
    def full_name(self) -> str:
        name = " ".join(p for p in (self.first_name, self.last_name) if p)
        return name or self.email

    @property
    def is_pending(self) -> bool:
        return self.role == Role.PENDING or not self.password_hash

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "email": self.email,
            "role": self.role.value,
            "dni": self.dni,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "full_name": self.full_name,
            "unit_id": self.unit_id,
            "station_id": self.station_id,
            "pending": self.is_pending,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
