from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, unique_violation_as_conflict
from .model import User
from .repository import UserRepository

_COLUMNS = (
    "u.user_id, u.email, u.password_hash, u.role, u.dni, u.first_name, u.last_name, "
    "u.unit_id, u.station_id, u.is_active, u.created_at"
)


def _to_user(row: Dict[str, Any]) -> User:
    return User(
        user_id=int(row["user_id"]),
        email=row["email"],
        password_hash=row.get("password_hash"),
        role=Role(row["role"]),
        dni=row.get("dni"),
        first_name=row.get("first_name"),
        last_name=row.get("last_name"),
        unit_id=row.get("unit_id"),
        station_id=row.get("station_id"),
        is_active=bool(row.get("is_active", True)),
        created_at=row.get("created_at"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get_one(self, where: str, params: tuple) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users u WHERE {where}", params)
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._get_one("u.user_id=%s", (int(user_id),))

    def get_by_email(self, email: str) -> Optional[User]:
        return self._get_one("u.email=%s", ((email or "").strip().lower(),))

    def get_by_dni(self, dni: str) -> Optional[User]:
        return self._get_one("UPPER(u.dni)=UPPER(%s)", ((dni or "").strip(),))

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
        with unique_violation_as_conflict("El email o DNI ya está registrado"), db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(email, password_hash, role, dni, first_name, last_name, unit_id, station_id)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (email, password_hash, role.value, dni, first_name, last_name, unit_id, station_id),
            )
            return int(cur.lastrowid)

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
        with unique_violation_as_conflict("El DNI ya está registrado"), db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(email, password_hash, role, dni, first_name, last_name, unit_id, station_id)
                VALUES(%s, NULL, 'pending', %s, %s, %s, %s, %s)
                ON DUPLICATE KEY UPDATE
                    user_id=LAST_INSERT_ID(user_id),
                    dni=COALESCE(VALUES(dni), dni),
                    first_name=COALESCE(VALUES(first_name), first_name),
                    last_name=COALESCE(VALUES(last_name), last_name),
                    unit_id=COALESCE(VALUES(unit_id), unit_id),
                    station_id=COALESCE(VALUES(station_id), station_id)
                """,
                (email, dni, first_name, last_name, unit_id, station_id),
            )
            return int(cur.lastrowid)

    def list_accounts(self, *, pending_only: bool = False) -> Sequence[User]:
        where = "WHERE u.role='pending' OR u.password_hash IS NULL" if pending_only else ""
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users u {where} ORDER BY u.created_at DESC, u.user_id DESC")
            return [_to_user(r) for r in fetchall(cur)]

    def list_by_zone(self, zone: str) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM users u
                LEFT JOIN units un ON un.unit_id = u.unit_id
                LEFT JOIN stations st ON st.station_id = u.station_id
                LEFT JOIN municipalities m ON m.municipality_id = st.municipality_id
                WHERE u.is_active=1 AND u.role IN ('jr', 'bf')
                  AND (un.zone=%s OR m.zone=%s)
                ORDER BY u.last_name, u.first_name
                """,
                (zone, zone),
            )
            return [_to_user(r) for r in fetchall(cur)]

    def approve(self, *, user_id: int, role: Role, password_hash: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE users SET role=%s, password_hash=%s, is_active=1 WHERE user_id=%s",
                (role.value, password_hash, int(user_id)),
            )
            return cur.rowcount > 0

    def delete_by_id(self, user_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM users WHERE user_id=%s", (int(user_id),))
            return cur.rowcount > 0
