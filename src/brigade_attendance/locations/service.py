from __future__ import annotations

from typing import Optional, Sequence

from ..common.validators import require_non_empty
from ..core.enums import Role
from ..core.exceptions import ConflictError, NotFoundError
from ..users.model import User
from ..users.repository import UserRepository
from .model import Assignment, Municipality, Post, Station, Unit
from .repository import LocationRepository


class LocationService:
    """Use case: browse zones/units/stations and resolve postings."""

    def __init__(self, locations: LocationRepository, users: UserRepository):
        self._locations = locations
        self._users = users

    def zones(self) -> Sequence[str]:
        return self._locations.list_zones()

    def municipalities(self, zone: str) -> Sequence[Municipality]:
        return self._locations.list_municipalities(require_non_empty(zone, "Zona"))

    def units(self, zone: str) -> Sequence[Unit]:
        return self._locations.list_units(require_non_empty(zone, "Zona"))

    def stations(self, municipality_id: int) -> Sequence[Station]:
        return self._locations.list_stations(int(municipality_id))

    def resolve_post(self, name: Optional[str]) -> Post:
        """Map a free-text post name to a unit first, then a station."""

        name = (name or "").strip()
        if not name:
            return Post()

        unit = self._locations.find_unit_by_name(name)
        if unit:
            return Post(unit_id=unit.unit_id)

        station = self._locations.find_station_by_name(name)
        if station:
            return Post(station_id=station.station_id)

        raise NotFoundError(f"Destino no encontrado: {name}")

    def assignment_for(self, user_id: int) -> Assignment:
        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError("Usuario no encontrado")

        if user.unit_id is not None:
            unit = self._locations.get_unit(user.unit_id)
            if not unit:
                raise NotFoundError("Unidad no encontrada")
            return Assignment(kind="unidad", location_id=unit.unit_id, name=unit.name, zone=unit.zone)

        if user.station_id is not None:
            station = self._locations.get_station(user.station_id)
            if not station:
                raise NotFoundError("Caseta no encontrada")
            municipality = self._locations.get_municipality(station.municipality_id)
            if not municipality:
                raise NotFoundError("Municipio no encontrado")
            return Assignment(
                kind="caseta",
                location_id=station.station_id,
                name=station.name,
                zone=municipality.zone,
                municipality=municipality.name,
            )

        raise ConflictError("El jefe de retén no tiene destino asignado")

    def crew_for_zone(self, zone: str) -> Sequence[User]:
        zone = require_non_empty(zone, "Zona")
        return [u for u in self._users.list_by_zone(zone) if u.role in (Role.JR, Role.BF)]
