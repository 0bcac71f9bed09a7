from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Municipality, Station, Unit
from .repository import LocationRepository


class MySQLLocationRepository(LocationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_zones(self) -> Sequence[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT zone FROM units
                UNION
                SELECT zone FROM municipalities
                ORDER BY zone
                """
            )
            return [r["zone"] for r in fetchall(cur)]

    def list_municipalities(self, zone: str) -> Sequence[Municipality]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT municipality_id, name, zone FROM municipalities WHERE zone=%s ORDER BY name",
                (zone,),
            )
            return [
                Municipality(municipality_id=int(r["municipality_id"]), name=r["name"], zone=r["zone"])
                for r in fetchall(cur)
            ]

    def list_units(self, zone: str) -> Sequence[Unit]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT unit_id, name, zone FROM units WHERE zone=%s ORDER BY name", (zone,))
            return [Unit(unit_id=int(r["unit_id"]), name=r["name"], zone=r["zone"]) for r in fetchall(cur)]

    def list_stations(self, municipality_id: int) -> Sequence[Station]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT station_id, name, municipality_id FROM stations WHERE municipality_id=%s ORDER BY name",
                (int(municipality_id),),
            )
            return [
                Station(station_id=int(r["station_id"]), name=r["name"], municipality_id=int(r["municipality_id"]))
                for r in fetchall(cur)
            ]

    def get_unit(self, unit_id: int) -> Optional[Unit]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT unit_id, name, zone FROM units WHERE unit_id=%s", (int(unit_id),))
            r = fetchone(cur)
            return Unit(unit_id=int(r["unit_id"]), name=r["name"], zone=r["zone"]) if r else None

    def get_station(self, station_id: int) -> Optional[Station]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT station_id, name, municipality_id FROM stations WHERE station_id=%s",
                (int(station_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Station(station_id=int(r["station_id"]), name=r["name"], municipality_id=int(r["municipality_id"]))

    def get_municipality(self, municipality_id: int) -> Optional[Municipality]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT municipality_id, name, zone FROM municipalities WHERE municipality_id=%s",
                (int(municipality_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Municipality(municipality_id=int(r["municipality_id"]), name=r["name"], zone=r["zone"])

    def find_unit_by_name(self, name: str) -> Optional[Unit]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT unit_id, name, zone FROM units WHERE name=%s", (name,))
            r = fetchone(cur)
            return Unit(unit_id=int(r["unit_id"]), name=r["name"], zone=r["zone"]) if r else None

    def find_station_by_name(self, name: str) -> Optional[Station]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT station_id, name, municipality_id FROM stations WHERE name=%s", (name,))
            r = fetchone(cur)
            if not r:
                return None
            return Station(station_id=int(r["station_id"]), name=r["name"], municipality_id=int(r["municipality_id"]))
