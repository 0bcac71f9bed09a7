from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping, MutableMapping, Optional

from ..core.exceptions import ValidationError

ROSTER_KINDS = ("unidad", "caseta")
_PREFIX = "roster_draft"


@dataclass(frozen=True)
class RosterContext:
    """Destination a crew selection belongs to."""

    kind: str
    zone: str
    unit_id: Optional[int] = None
    station_id: Optional[int] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "RosterContext":
        kind = str(data.get("kind") or "").strip().lower()
        if kind not in ROSTER_KINDS:
            raise ValidationError("Tipo de destino no válido (unidad o caseta)")
        zone = str(data.get("zone") or "").strip()
        if not zone:
            raise ValidationError("Falta la zona")

        def _opt_int(value: Any) -> Optional[int]:
            if value in (None, ""):
                return None
            try:
                return int(value)
            except (TypeError, ValueError):
                raise ValidationError("Identificador de destino no válido")

        unit_id = _opt_int(data.get("unit_id"))
        station_id = _opt_int(data.get("station_id"))
        if kind == "unidad" and unit_id is None:
            raise ValidationError("Falta la unidad")
        if kind == "caseta" and station_id is None:
            raise ValidationError("Falta la caseta")
        return cls(kind=kind, zone=zone, unit_id=unit_id, station_id=station_id)

    def key(self) -> str:
        return ":".join(
            [
                _PREFIX,
                self.kind,
                self.zone,
                str(self.unit_id) if self.unit_id is not None else "-",
                str(self.station_id) if self.station_id is not None else "-",
            ]
        )


def _clean_selection(item: Any) -> dict:
    if not isinstance(item, Mapping):
        raise ValidationError("Selección no válida")
    dni = str(item.get("dni") or "").strip().upper()
    name = str(item.get("name") or "").strip()
    if not dni or not name:
        raise ValidationError("Cada selección necesita DNI y nombre")
    return {"dni": dni, "name": name}


class RosterDraftStore:
    """In-progress crew selections, kept per destination across reloads.

    Backed by any mutable mapping; the controllers pass the Flask session.
    """

    def __init__(self, storage: MutableMapping[str, Any]):
        self._storage = storage

    def load(self, ctx: RosterContext) -> list[dict]:
        return [dict(item) for item in self._storage.get(ctx.key(), [])]

    def save(self, ctx: RosterContext, selections: Iterable[Any]) -> list[dict]:
        cleaned: list[dict] = []
        seen: set[str] = set()
        for item in selections or []:
            sel = _clean_selection(item)
            if sel["dni"] in seen:
                continue
            seen.add(sel["dni"])
            cleaned.append(sel)
        self._storage[ctx.key()] = cleaned
        return cleaned

    def clear(self, ctx: RosterContext) -> None:
        self._storage.pop(ctx.key(), None)
