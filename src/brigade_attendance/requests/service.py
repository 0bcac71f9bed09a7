from __future__ import annotations

import logging
from datetime import date
from typing import Any, Sequence

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..balance.engine import compute_overtime_balance
from ..balance.model import BalancePolicy
from ..core.constants import REQUEST_LIST_LIMITS
from ..core.enums import LEAVE_CODES, AttendanceCode, Role
from ..core.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from ..users.repository import UserRepository
from .model import LeaveRequest

logger = logging.getLogger(__name__)


class LeaveRequestService:
    """Use case: accept or reject a V/AP/H day-off request against current balances."""

    def __init__(self, attendance: AttendanceRepository, users: UserRepository, policy: BalancePolicy):
        self._attendance = attendance
        self._users = users
        self._policy = policy

    @staticmethod
    def _parse_code(value: Any) -> AttendanceCode:
        code = AttendanceCode.parse(value)
        if code not in LEAVE_CODES:
            raise ValidationError("Tipo de solicitud no válido (V, AP o H)")
        return code

    def submit(self, *, current_role: Role, user_id: int, work_date: date, code: Any) -> int:
        if current_role not in (Role.BF, Role.JR):
            raise AuthorizationError("No tienes permiso para solicitar días")

        req = LeaveRequest(user_id=int(user_id), work_date=work_date, code=self._parse_code(code))
        if not self._users.get_by_id(req.user_id):
            raise NotFoundError("Usuario no encontrado")

        # Any other record that day is caught by the (user, date) unique key.
        attendance_id = self._attendance.create_checked(
            req.to_day_entry(), lambda records: self._guard(req, records)
        )
        logger.info(
            "Leave request %s stored for user %s on %s", req.code.value, req.user_id, req.work_date.isoformat()
        )
        return attendance_id

    def _guard(self, req: LeaveRequest, records: Sequence[AttendanceRecord]) -> None:
        same_day = [r for r in records if r.work_date == req.work_date]
        if any(r.has_overtime for r in same_day):
            raise ConflictError("Ese día tiene horas extra registradas")
        if any(r.is_leave for r in same_day):
            raise ConflictError("Ya tienes un permiso registrado ese día")

        if req.code == AttendanceCode.H:
            balance = compute_overtime_balance(records, self._policy.comp_day_threshold)
            if balance.comp_days_available <= 0:
                raise ConflictError("No tienes días libres por horas disponibles")

    def list_requests(self, *, user_id: int, limit: int = REQUEST_LIST_LIMITS[0]) -> Sequence[AttendanceRecord]:
        if int(limit) not in REQUEST_LIST_LIMITS:
            raise ValidationError("Límite no válido (10, 20 o 30)")
        return self._attendance.list_recent_for_user(int(user_id), codes=LEAVE_CODES, limit=int(limit))
