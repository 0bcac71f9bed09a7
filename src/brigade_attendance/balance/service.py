from __future__ import annotations

from ..common.datetime_utils import year_bounds
from ..attendance.repository import AttendanceRepository
from ..core.exceptions import NotFoundError
from ..users.repository import UserRepository
from .engine import compute_balance_snapshot, compute_leave_balance, compute_overtime_balance
from .model import BalancePolicy, BalanceSnapshot, LeaveBalance, OvertimeBalance


class BalanceService:
    """Use case: read a user's records and run the balance engine on them."""

    def __init__(self, attendance: AttendanceRepository, users: UserRepository, policy: BalancePolicy):
        self._attendance = attendance
        self._users = users
        self._policy = policy

    @property
    def policy(self) -> BalancePolicy:
        return self._policy

    def _require_user(self, user_id: int) -> int:
        if not self._users.get_by_id(int(user_id)):
            raise NotFoundError("Usuario no encontrado")
        return int(user_id)

    def overtime_for_user(self, user_id: int) -> OvertimeBalance:
        user_id = self._require_user(user_id)
        return compute_overtime_balance(self._attendance.list_for_user(user_id), self._policy.comp_day_threshold)

    def leave_for_user(self, user_id: int, year: int) -> LeaveBalance:
        user_id = self._require_user(user_id)
        start, end = year_bounds(year)
        records = self._attendance.list_for_user(user_id, start_date=start, end_date=end)
        return compute_leave_balance(records, year, self._policy.vacation_quota, self._policy.personal_quota)

    def snapshot_for_user(self, user_id: int, year: int) -> BalanceSnapshot:
        user_id = self._require_user(user_id)
        return compute_balance_snapshot(self._attendance.list_for_user(user_id), year, self._policy)
