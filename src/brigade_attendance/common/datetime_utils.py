from __future__ import annotations

import calendar
from datetime import MAXYEAR, MINYEAR, date, datetime, time
from typing import Optional

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(str(value or "").strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError("Fecha no válida (AAAA-MM-DD)")


def parse_clock(value: Optional[str], default: str) -> time:
    """Parse HH:MM (or HH:MM:SS), falling back to ``default`` when blank."""
    text = str(value or "").strip() or default
    for fmt in ("%H:%M", "%H:%M:%S"):
        try:
            return datetime.strptime(text, fmt).time()
        except ValueError:
            continue
    raise ValidationError("Hora no válida (HH:MM)")


def check_year(year: int) -> int:
    if not MINYEAR <= int(year) <= MAXYEAR:
        raise ValidationError("Año no válido")
    return int(year)


def year_bounds(year: int) -> tuple[date, date]:
    year = check_year(year)
    return date(year, 1, 1), date(year, 12, 31)


def month_bounds(year: int, month: int) -> tuple[date, date]:
    year = check_year(year)
    if not 1 <= int(month) <= 12:
        raise ValidationError("Mes no válido")
    last_day = calendar.monthrange(year, int(month))[1]
    return date(year, int(month), 1), date(year, int(month), last_day)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch it.
    """
    return datetime.now()
