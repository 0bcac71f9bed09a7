from __future__ import annotations

import pytest

from brigade_attendance.core.exceptions import ConflictError, NotFoundError, ValidationError
from brigade_attendance.locations.service import LocationService


@pytest.fixture
def svc(locations_repo, users_repo):
    return LocationService(locations_repo, users_repo)


def test_lookups_by_zone_and_municipality(svc):
    assert svc.zones() == ["Occidente", "Oriente"]
    assert [m.name for m in svc.municipalities("Oriente")] == ["Llanes"]
    assert [u.name for u in svc.units("Oriente")] == ["Unidad Oriente 1"]
    assert [s.name for s in svc.stations(2)] == ["Caseta Tineo"]


def test_zone_is_required(svc):
    with pytest.raises(ValidationError):
        svc.units("  ")


def test_resolve_post_prefers_unit_then_station(svc):
    assert svc.resolve_post("Unidad Oriente 1").unit_id == 1
    post = svc.resolve_post("Caseta Llanes")
    assert (post.unit_id, post.station_id) == (None, 1)
    assert svc.resolve_post("").unit_id is None
    with pytest.raises(NotFoundError):
        svc.resolve_post("Caseta Inexistente")


def test_assignment_of_shift_leader_posted_to_unit(svc):
    a = svc.assignment_for(2)
    assert a.kind == "unidad"
    assert a.name == "Unidad Oriente 1"
    assert a.zone == "Oriente"


def test_assignment_of_station_includes_municipality(svc):
    a = svc.assignment_for(4)
    assert a.kind == "caseta"
    assert a.municipality == "Llanes"
    assert a.zone == "Oriente"


def test_unassigned_user_is_conflict(svc):
    with pytest.raises(ConflictError):
        svc.assignment_for(1)


def test_unknown_user_assignment_is_not_found(svc):
    with pytest.raises(NotFoundError):
        svc.assignment_for(999)


def test_crew_for_zone_lists_jr_and_bf_only(svc):
    assert sorted(u.user_id for u in svc.crew_for_zone("Oriente")) == [2, 3, 4]
    assert svc.crew_for_zone("Occidente") == []
