from __future__ import annotations

from enum import Enum
from typing import Optional


class Role(str, Enum):
    """Roles used for authorization and home routing."""

    ADMIN = "admin"
    JR = "jr"
    BF = "bf"
    PENDING = "pending"


class AttendanceCode(str, Enum):
    """Daily attendance codes stored on each record."""

    JR = "JR"
    TH = "TH"
    TC = "TC"
    B = "B"
    V = "V"
    AP = "AP"
    H = "H"

    @classmethod
    def parse(cls, value: object) -> Optional["AttendanceCode"]:
        """Upper-cased lookup; empty or unknown values give None."""
        text = str(value or "").strip().upper()
        if not text:
            return None
        try:
            return cls(text)
        except ValueError:
            return None


# Codes that consume a leave allowance or a comp day.
LEAVE_CODES = frozenset({AttendanceCode.V, AttendanceCode.AP, AttendanceCode.H})

# Codes a shift leader may write in the daily sheet.
DAILY_ENTRY_CODES = frozenset(
    {
        AttendanceCode.JR,
        AttendanceCode.TH,
        AttendanceCode.TC,
        AttendanceCode.B,
        AttendanceCode.V,
        AttendanceCode.AP,
    }
)

CODE_LABELS = {
    AttendanceCode.V: "Vacaciones",
    AttendanceCode.AP: "Asuntos propios",
    AttendanceCode.H: "Día libre por horas",
}


class OutingKind(str, Enum):
    """Kind of call-out logged by a shift leader."""

    EXTINCION = "extincion"
    PREVENCION = "prevencion"
