from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class BalancePolicy:
    """Organization policy the balances are computed under."""

    comp_day_threshold: Decimal
    vacation_quota: int
    personal_quota: int


@dataclass(frozen=True)
class OvertimeBalance:
    total_overtime_hours: Decimal
    comp_days_earned: int
    comp_days_consumed: int
    comp_days_available: int
    hours_toward_next_comp_day: Decimal

    def to_dict(self) -> dict:
        return {
            "total_overtime_hours": float(self.total_overtime_hours),
            "comp_days_earned": self.comp_days_earned,
            "comp_days_consumed": self.comp_days_consumed,
            "comp_days_available": self.comp_days_available,
            "hours_toward_next_comp_day": float(self.hours_toward_next_comp_day),
        }


@dataclass(frozen=True)
class LeaveBalance:
    year: int
    vacation_used: int
    vacation_remaining: int
    personal_used: int
    personal_remaining: int

    def to_dict(self) -> dict:
        return {
            "year": self.year,
            "vacation_used": self.vacation_used,
            "vacation_remaining": self.vacation_remaining,
            "personal_used": self.personal_used,
            "personal_remaining": self.personal_remaining,
        }


@dataclass(frozen=True)
class BalanceSnapshot:
    """Both balances for one user; derived on every read, never stored."""

    overtime: OvertimeBalance
    leave: LeaveBalance

    def to_dict(self) -> dict:
        return {**self.overtime.to_dict(), **self.leave.to_dict()}
