from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Municipality, Station, Unit


class LocationRepository(Protocol):
    def list_zones(self) -> Sequence[str]:
        raise NotImplementedError

    def list_municipalities(self, zone: str) -> Sequence[Municipality]:
        raise NotImplementedError

    def list_units(self, zone: str) -> Sequence[Unit]:
        raise NotImplementedError

    def list_stations(self, municipality_id: int) -> Sequence[Station]:
        raise NotImplementedError

    def get_unit(self, unit_id: int) -> Optional[Unit]:
        raise NotImplementedError

    def get_station(self, station_id: int) -> Optional[Station]:
        raise NotImplementedError

    def get_municipality(self, municipality_id: int) -> Optional[Municipality]:
        raise NotImplementedError

    def find_unit_by_name(self, name: str) -> Optional[Unit]:
        raise NotImplementedError

    def find_station_by_name(self, name: str) -> Optional[Station]:
        raise NotImplementedError
