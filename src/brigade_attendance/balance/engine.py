"""Attendance balance engine.

Pure functions over a user's attendance records. Records only need the
attributes ``work_date``, ``code`` and ``overtime_hours``; nothing here
touches storage, so the same records always give the same balances.
"""

from __future__ import annotations

from decimal import ROUND_DOWN, ROUND_HALF_UP, Decimal
from typing import Any, Iterable

from ..common.datetime_utils import year_bounds
from ..core.enums import AttendanceCode
from ..core.exceptions import ValidationError
from .model import BalancePolicy, BalanceSnapshot, LeaveBalance, OvertimeBalance

_CENT = Decimal("0.01")
_ZERO = Decimal("0")


def _as_decimal(value: Any) -> Decimal:
    if value is None:
        return _ZERO
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _code_of(record: Any) -> str:
    code = getattr(record, "code", None)
    if code is None:
        return ""
    return str(getattr(code, "value", code)).strip().upper()


def _positive_hours(record: Any) -> Decimal:
    try:
        hours = _as_decimal(getattr(record, "overtime_hours", None))
    except ArithmeticError:
        return _ZERO
    if not hours.is_finite() or hours <= 0:
        return _ZERO
    return hours


def _round_remainder(remainder: Decimal, threshold: Decimal) -> Decimal:
    rounded = remainder.quantize(_CENT, rounding=ROUND_HALF_UP)
    if rounded >= threshold:
        # 3.149 of 3.15 must not display as a full comp day.
        rounded = remainder.quantize(_CENT, rounding=ROUND_DOWN)
    return rounded


def compute_overtime_balance(records: Iterable[Any], threshold: Any) -> OvertimeBalance:
    """Overtime hours converted to comp days, minus comp days already taken.

    Only strictly positive overtime counts. Comp days earned use floor
    division so partial days never round up.
    """

    threshold = _as_decimal(threshold)
    if not threshold.is_finite() or threshold <= 0:
        raise ValidationError("El umbral de horas por día libre debe ser positivo")

    records = tuple(records)
    total = sum((_positive_hours(r) for r in records), _ZERO)
    consumed = sum(1 for r in records if _code_of(r) == AttendanceCode.H.value)

    earned = int(total // threshold)
    remainder = max(total - earned * threshold, _ZERO)

    return OvertimeBalance(
        total_overtime_hours=total,
        comp_days_earned=earned,
        comp_days_consumed=consumed,
        comp_days_available=max(0, earned - consumed),
        hours_toward_next_comp_day=_round_remainder(remainder, threshold),
    )


def compute_leave_balance(records: Iterable[Any], year: int, vacation_quota: int, personal_quota: int) -> LeaveBalance:
    """Vacation (V) and personal (AP) days used within one calendar year."""

    if int(vacation_quota) <= 0 or int(personal_quota) <= 0:
        raise ValidationError("Las cuotas anuales deben ser positivas")

    start, end = year_bounds(year)
    vacation_used = 0
    personal_used = 0
    for r in records:
        work_date = getattr(r, "work_date", None)
        if work_date is None or not start <= work_date <= end:
            continue
        code = _code_of(r)
        if code == AttendanceCode.V.value:
            vacation_used += 1
        elif code == AttendanceCode.AP.value:
            personal_used += 1

    return LeaveBalance(
        year=int(year),
        vacation_used=vacation_used,
        vacation_remaining=max(0, int(vacation_quota) - vacation_used),
        personal_used=personal_used,
        personal_remaining=max(0, int(personal_quota) - personal_used),
    )


def compute_balance_snapshot(records: Iterable[Any], year: int, policy: BalancePolicy) -> BalanceSnapshot:
    records = tuple(records)
    return BalanceSnapshot(
        overtime=compute_overtime_balance(records, policy.comp_day_threshold),
        leave=compute_leave_balance(records, year, policy.vacation_quota, policy.personal_quota),
    )
