from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from brigade_attendance.attendance.model import AttendanceRecord, AttendanceReportRow, DayEntry
from brigade_attendance.balance.model import BalancePolicy
from brigade_attendance.container import wire_services
from brigade_attendance.core.enums import AttendanceCode, Role
from brigade_attendance.core.exceptions import ConflictError
from brigade_attendance.locations.model import Municipality, Station, Unit
from brigade_attendance.outings.model import Outing
from brigade_attendance.users.model import User


class InMemoryUsers:
    def __init__(self, users=()):
        self._users: dict[int, User] = {u.user_id: u for u in users}
        self._next_id = max(self._users, default=0) + 1
        self.unit_zones: dict[int, str] = {}
        self.station_zones: dict[int, str] = {}

    def add(self, user: User) -> User:
        self._users[user.user_id] = user
        self._next_id = max(self._next_id, user.user_id + 1)
        return user

    def get_by_id(self, user_id):
        return self._users.get(int(user_id))

    def get_by_email(self, email):
        return next((u for u in self._users.values() if u.email == email), None)

    def get_by_dni(self, dni):
        return next((u for u in self._users.values() if u.dni and u.dni.upper() == dni.upper()), None)

    def create_user(self, *, email, password_hash, role, dni=None, first_name=None, last_name=None, unit_id=None, station_id=None):
        if self.get_by_email(email) or (dni and self.get_by_dni(dni)):
            raise ConflictError("El email o DNI ya está registrado")
        user = User(
            user_id=self._next_id,
            email=email,
            password_hash=password_hash,
            role=role,
            dni=dni,
            first_name=first_name,
            last_name=last_name,
            unit_id=unit_id,
            station_id=station_id,
            created_at=datetime(2026, 1, 1, 9, 0),
        )
        return self.add(user).user_id

    def upsert_pending(self, *, email, dni=None, first_name=None, last_name=None, unit_id=None, station_id=None):
        existing = self.get_by_email(email)
        if not existing:
            return self.create_user(
                email=email,
                password_hash=None,
                role=Role.PENDING,
                dni=dni,
                first_name=first_name,
                last_name=last_name,
                unit_id=unit_id,
                station_id=station_id,
            )
        self._users[existing.user_id] = User(
            user_id=existing.user_id,
            email=email,
            password_hash=existing.password_hash,
            role=existing.role,
            dni=dni or existing.dni,
            first_name=first_name or existing.first_name,
            last_name=last_name or existing.last_name,
            unit_id=unit_id if unit_id is not None else existing.unit_id,
            station_id=station_id if station_id is not None else existing.station_id,
            created_at=existing.created_at,
        )
        return existing.user_id

    def list_accounts(self, *, pending_only=False):
        users = list(self._users.values())
        return [u for u in users if u.is_pending] if pending_only else users

    def list_by_zone(self, zone):
        return [
            u
            for u in self._users.values()
            if self.unit_zones.get(u.unit_id) == zone or self.station_zones.get(u.station_id) == zone
        ]

    def approve(self, *, user_id, role, password_hash):
        user = self._users.get(int(user_id))
        if not user:
            return False
        self._users[user.user_id] = User(
            user_id=user.user_id,
            email=user.email,
            password_hash=password_hash,
            role=role,
            dni=user.dni,
            first_name=user.first_name,
            last_name=user.last_name,
            unit_id=user.unit_id,
            station_id=user.station_id,
            created_at=user.created_at,
        )
        return True

    def delete_by_id(self, user_id):
        return self._users.pop(int(user_id), None) is not None


class InMemoryAttendance:
    """Keeps the (user_id, work_date) uniqueness of the real table."""

    def __init__(self, users: Optional[InMemoryUsers] = None):
        self._records: dict[tuple[int, date], AttendanceRecord] = {}
        self._next_id = 1
        self._users = users

    def add(self, user_id, work_date, code=None, overtime_hours="0"):
        rec = AttendanceRecord(
            attendance_id=self._next_id,
            user_id=user_id,
            work_date=work_date,
            code=AttendanceCode.parse(code),
            entry_time=None,
            exit_time=None,
            overtime_hours=Decimal(str(overtime_hours)),
        )
        self._next_id += 1
        self._records[(user_id, work_date)] = rec
        return rec

    def all(self):
        return sorted(self._records.values(), key=lambda r: (r.work_date, r.attendance_id))

    def list_for_user(self, user_id, *, start_date=None, end_date=None):
        return [
            r
            for r in self.all()
            if r.user_id == int(user_id)
            and (start_date is None or r.work_date >= start_date)
            and (end_date is None or r.work_date <= end_date)
        ]

    def get_for_user_and_date(self, user_id, work_date):
        return self._records.get((int(user_id), work_date))

    def list_recent_for_user(self, user_id, *, codes=None, limit=30):
        items = [r for r in self.list_for_user(user_id) if not codes or r.code in codes]
        items.sort(key=lambda r: r.work_date, reverse=True)
        return items[:limit]

    def _store(self, entry: DayEntry, attendance_id: Optional[int] = None) -> int:
        if attendance_id is None:
            attendance_id = self._next_id
            self._next_id += 1
        rec = AttendanceRecord(
            attendance_id=attendance_id,
            user_id=entry.user_id,
            work_date=entry.work_date,
            code=entry.code,
            entry_time=entry.entry_time,
            exit_time=entry.exit_time,
            overtime_hours=entry.overtime_hours,
        )
        self._records[(entry.user_id, entry.work_date)] = rec
        return rec.attendance_id

    def create(self, entry: DayEntry) -> int:
        if (entry.user_id, entry.work_date) in self._records:
            raise ConflictError("Ya existe una anotación para ese usuario y fecha")
        return self._store(entry)

    def save_day_entries(self, entries, *, replace=False):
        saved = dict(self._records)
        try:
            ids = []
            for entry in entries:
                existing = self._records.get((entry.user_id, entry.work_date)) if replace else None
                if existing:
                    ids.append(self._store(entry, existing.attendance_id))
                else:
                    ids.append(self.create(entry))
            return ids
        except Exception:
            self._records = saved
            raise

    def create_checked(self, entry, check):
        check(self.list_for_user(entry.user_id))
        return self.create(entry)

    def list_for_day(self, work_date):
        return [r for r in self.all() if r.work_date == work_date]

    def get_report_rows(self, *, start_date, end_date, unit_id=None, station_id=None):
        rows = []
        for r in self.all():
            if not start_date <= r.work_date <= end_date:
                continue
            user = self._users.get_by_id(r.user_id) if self._users else None
            if unit_id is not None and (not user or user.unit_id != unit_id):
                continue
            if station_id is not None and (not user or user.station_id != station_id):
                continue
            rows.append(
                AttendanceReportRow(
                    user_id=r.user_id,
                    email=user.email if user else "",
                    full_name=user.full_name if user else str(r.user_id),
                    dni=user.dni if user else None,
                    unit_name=None,
                    station_name=None,
                    work_date=r.work_date,
                    code=r.code,
                    entry_time=r.entry_time,
                    exit_time=r.exit_time,
                    overtime_hours=r.overtime_hours,
                )
            )
        return rows


class InMemoryLocations:
    def __init__(self):
        self.municipalities = {
            1: Municipality(municipality_id=1, name="Llanes", zone="Oriente"),
            2: Municipality(municipality_id=2, name="Tineo", zone="Occidente"),
        }
        self.units = {1: Unit(unit_id=1, name="Unidad Oriente 1", zone="Oriente")}
        self.stations = {
            1: Station(station_id=1, name="Caseta Llanes", municipality_id=1),
            2: Station(station_id=2, name="Caseta Tineo", municipality_id=2),
        }

    def list_zones(self):
        zones = {u.zone for u in self.units.values()} | {m.zone for m in self.municipalities.values()}
        return sorted(zones)

    def list_municipalities(self, zone):
        return [m for m in self.municipalities.values() if m.zone == zone]

    def list_units(self, zone):
        return [u for u in self.units.values() if u.zone == zone]

    def list_stations(self, municipality_id):
        return [s for s in self.stations.values() if s.municipality_id == municipality_id]

    def get_unit(self, unit_id):
        return self.units.get(unit_id)

    def get_station(self, station_id):
        return self.stations.get(station_id)

    def get_municipality(self, municipality_id):
        return self.municipalities.get(municipality_id)

    def find_unit_by_name(self, name):
        return next((u for u in self.units.values() if u.name == name), None)

    def find_station_by_name(self, name):
        return next((s for s in self.stations.values() if s.name == name), None)


class InMemoryOutings:
    def __init__(self, attendance: InMemoryAttendance):
        self._attendance = attendance
        self.stored: list[Outing] = []

    def create_many(self, *, attendance_id, outings):
        work_date = next(r.work_date for r in self._attendance.all() if r.attendance_id == attendance_id)
        for o in outings:
            self.stored.append(
                Outing(
                    outing_id=len(self.stored) + 1,
                    attendance_id=attendance_id,
                    work_date=work_date,
                    kind=o.kind,
                    departure_time=o.departure_time,
                    return_time=o.return_time,
                    place=o.place,
                    crew_count=o.crew_count,
                )
            )
        return len(outings)

    def list_for_day(self, work_date):
        return [o for o in self.stored if o.work_date == work_date]


def make_user(user_id, role, *, email=None, password=None, dni=None, unit_id=None, station_id=None, first_name=None):
    return User(
        user_id=user_id,
        email=email or f"user{user_id}@brigadas.local",
        password_hash=generate_password_hash(password) if password else None,
        role=role,
        dni=dni,
        first_name=first_name,
        last_name=None,
        unit_id=unit_id,
        station_id=station_id,
        created_at=datetime(2026, 1, 1, 9, 0),
    )


@pytest.fixture
def fixed_now():
    return datetime(2026, 6, 15, 10, 0, 0)


@pytest.fixture
def policy():
    return BalancePolicy(comp_day_threshold=Decimal("3.15"), vacation_quota=22, personal_quota=7)


@pytest.fixture
def users_repo():
    repo = InMemoryUsers(
        [
            make_user(1, Role.ADMIN, email="admin@brigadas.local", password="admin123"),
            make_user(2, Role.JR, email="jr@brigadas.local", password="jefe1234", dni="11111111H", unit_id=1, first_name="Marta"),
            make_user(3, Role.BF, email="bf@brigadas.local", password="bombero1", dni="22222222J", unit_id=1, first_name="Pablo"),
            make_user(4, Role.BF, email="bf2@brigadas.local", password="bombero2", dni="33333333P", station_id=1, first_name="Lucía"),
            make_user(5, Role.PENDING, email="nuevo@brigadas.local"),
        ]
    )
    repo.unit_zones = {1: "Oriente"}
    repo.station_zones = {1: "Oriente", 2: "Occidente"}
    return repo


@pytest.fixture
def attendance_repo(users_repo):
    return InMemoryAttendance(users_repo)


@pytest.fixture
def locations_repo():
    return InMemoryLocations()


@pytest.fixture
def outings_repo(attendance_repo):
    return InMemoryOutings(attendance_repo)


@pytest.fixture
def container(users_repo, locations_repo, attendance_repo, outings_repo, policy):
    return wire_services(
        users_repo=users_repo,
        locations_repo=locations_repo,
        attendance_repo=attendance_repo,
        outings_repo=outings_repo,
        policy=policy,
    )
