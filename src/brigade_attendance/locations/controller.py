from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.guards import login_required, roles_required, session_user_id
from ..common.http import int_arg
from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/zones", methods=["GET"], endpoint="zones")
    @login_required
    def zones():
        return jsonify({"zones": list(container.location_service.zones())})

    @app.route("/api/municipalities", methods=["GET"], endpoint="municipalities")
    @login_required
    def municipalities():
        items = container.location_service.municipalities(request.args.get("zone", ""))
        return jsonify({"municipalities": [m.to_dict() for m in items]})

    @app.route("/api/units", methods=["GET"], endpoint="units")
    @login_required
    def units():
        items = container.location_service.units(request.args.get("zone", ""))
        return jsonify({"units": [u.to_dict() for u in items]})

    @app.route("/api/stations", methods=["GET"], endpoint="stations")
    @login_required
    def stations():
        municipality_id = int_arg("municipality_id")
        if municipality_id is None:
            raise ValidationError("Falta el municipio")
        items = container.location_service.stations(municipality_id)
        return jsonify({"stations": [s.to_dict() for s in items]})

    @app.route("/api/zones/<zone>/crew", methods=["GET"], endpoint="zone_crew")
    @roles_required(Role.ADMIN, Role.JR)
    def zone_crew(zone: str):
        crew = container.location_service.crew_for_zone(zone)
        return jsonify({"crew": [u.to_dict() for u in crew]})

    @app.route("/api/jr/assignment", methods=["GET"], endpoint="jr_assignment")
    @roles_required(Role.JR)
    def jr_assignment():
        return jsonify(container.location_service.assignment_for(session_user_id()).to_dict())
