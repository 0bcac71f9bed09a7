from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Any

from ..core.exceptions import ValidationError

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} no es válido")
    return str(value).strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} debe tener al menos {min_len} caracteres")
    return value


def require_email(value: str) -> str:
    email = (value or "").strip().lower()
    if not _EMAIL_RE.match(email):
        raise ValidationError("Email no válido")
    return email


def parse_overtime_hours(value: Any) -> Decimal:
    """Parse an overtime amount typed by a shift leader.

    Missing or blank values mean no overtime. Anything else must be a finite,
    non-negative number; malformed input is rejected instead of being
    silently stored.
    """

    if value is None:
        return Decimal("0")
    if isinstance(value, bool):
        raise ValidationError("Horas extra no válidas")
    text = str(value).strip().replace(",", ".")
    if not text:
        return Decimal("0")
    try:
        hours = Decimal(text)
    except InvalidOperation:
        raise ValidationError("Horas extra no válidas")
    if not hours.is_finite():
        raise ValidationError("Horas extra no válidas")
    if hours < 0:
        raise ValidationError("Las horas extra no pueden ser negativas")
    return hours


def parse_positive_int(value: Any, field_name: str) -> int:
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} no es válido")
    if number <= 0:
        raise ValidationError(f"{field_name} no es válido")
    return number
