from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .balance.model import BalancePolicy
from .balance.service import BalanceService
from .core.constants import (
    DEFAULT_COMP_DAY_THRESHOLD_HOURS,
    DEFAULT_PERSONAL_ANNUAL_QUOTA,
    DEFAULT_VACATION_ANNUAL_QUOTA,
)
from .database.connection import DBConfig, DatabaseConnection
from .locations.mysql_location_repository import MySQLLocationRepository
from .locations.repository import LocationRepository
from .locations.service import LocationService
from .outings.mysql_outing_repository import MySQLOutingRepository
from .outings.repository import OutingRepository
from .outings.service import OutingService
from .reports.service import AttendanceReportService
from .requests.service import LeaveRequestService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    locations_repo: LocationRepository
    attendance_repo: AttendanceRepository
    outings_repo: OutingRepository

    auth_service: AuthService
    user_service: UserService
    location_service: LocationService
    attendance_service: AttendanceService
    balance_service: BalanceService
    leave_request_service: LeaveRequestService
    outing_service: OutingService
    report_service: AttendanceReportService


def policy_from_settings(settings: Any) -> BalancePolicy:
    return BalancePolicy(
        comp_day_threshold=Decimal(str(getattr(settings, "COMP_DAY_THRESHOLD_HOURS", DEFAULT_COMP_DAY_THRESHOLD_HOURS))),
        vacation_quota=int(getattr(settings, "VACATION_ANNUAL_QUOTA", DEFAULT_VACATION_ANNUAL_QUOTA)),
        personal_quota=int(getattr(settings, "PERSONAL_ANNUAL_QUOTA", DEFAULT_PERSONAL_ANNUAL_QUOTA)),
    )


def wire_services(
    *,
    users_repo: UserRepository,
    locations_repo: LocationRepository,
    attendance_repo: AttendanceRepository,
    outings_repo: OutingRepository,
    policy: BalancePolicy,
) -> Container:
    """Build every service over the given repositories (MySQL in the app, fakes in tests)."""

    location_service = LocationService(locations_repo, users_repo)
    balance_service = BalanceService(attendance_repo, users_repo, policy)

    return Container(
        users_repo=users_repo,
        locations_repo=locations_repo,
        attendance_repo=attendance_repo,
        outings_repo=outings_repo,
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo, location_service),
        location_service=location_service,
        attendance_service=AttendanceService(attendance_repo, users_repo),
        balance_service=balance_service,
        leave_request_service=LeaveRequestService(attendance_repo, users_repo, policy),
        outing_service=OutingService(outings_repo, attendance_repo),
        report_service=AttendanceReportService(attendance_repo, balance_service),
    )


def build_container(*, db_config: dict, policy: BalancePolicy) -> Container:
    conn = DatabaseConnection(DBConfig.from_mapping(db_config))
    return wire_services(
        users_repo=MySQLUserRepository(conn),
        locations_repo=MySQLLocationRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        outings_repo=MySQLOutingRepository(conn),
        policy=policy,
    )
