from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Optional


@dataclass(frozen=True)
class Municipality:
    municipality_id: int
    name: str
    zone: str

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class Unit:
    unit_id: int
    name: str
    zone: str

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class Station:
    station_id: int
    name: str
    municipality_id: int

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class Post:
    """Where an account is posted: a unit or a station, never both."""

    unit_id: Optional[int] = None
    station_id: Optional[int] = None


@dataclass(frozen=True)
class Assignment:
    """A shift leader's destination with its zone."""

    kind: str  # "unidad" | "caseta"
    location_id: int
    name: str
    zone: str
    municipality: Optional[str] = None

    def to_dict(self) -> dict:
        return asdict(self)
