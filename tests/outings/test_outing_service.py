from __future__ import annotations

from datetime import date, time

import pytest

from brigade_attendance.core.enums import OutingKind, Role
from brigade_attendance.core.exceptions import AuthorizationError, ValidationError
from brigade_attendance.outings.service import OutingService, parse_outing

DAY = date(2026, 8, 2)


@pytest.fixture
def svc(outings_repo, attendance_repo):
    return OutingService(outings_repo, attendance_repo)


def test_parse_outing_normalizes_kind_and_default_times():
    outing = parse_outing({"kind": "Prevencion", "crew_count": "4", "place": " Monte Hijedo "})
    assert outing.kind == OutingKind.PREVENCION
    assert outing.departure_time == time(15, 0)
    assert outing.return_time == time(8, 0)
    assert outing.place == "Monte Hijedo"
    assert outing.crew_count == 4

    assert parse_outing({"kind": "whatever", "crew_count": 1}).kind == OutingKind.EXTINCION


@pytest.mark.parametrize("crew", [0, -2, "", "abc", None])
def test_outings_without_crew_are_dropped(crew):
    assert parse_outing({"crew_count": crew}) is None


def test_outings_anchor_to_first_listed_crew_member(svc, attendance_repo, outings_repo):
    attendance_repo.add(2, DAY, "JR")
    anchor = attendance_repo.add(3, DAY, "JR")

    inserted = svc.record_outings(
        current_role=Role.JR,
        work_date=DAY,
        user_ids=[3, 2],
        outings=[{"kind": "extincion", "crew_count": 5}, {"kind": "prevencion", "crew_count": 0}],
    )

    assert inserted == 1
    assert [o.attendance_id for o in outings_repo.stored] == [anchor.attendance_id]
    assert [o.crew_count for o in svc.list_for_day(DAY)] == [5]


def test_outings_fall_back_to_first_record_of_the_day(svc, attendance_repo, outings_repo):
    first = attendance_repo.add(4, DAY, "JR")

    svc.record_outings(current_role=Role.ADMIN, work_date=DAY, user_ids=[], outings=[{"crew_count": 2}])

    assert outings_repo.stored[0].attendance_id == first.attendance_id


def test_outings_need_annotations_for_that_day(svc):
    with pytest.raises(ValidationError):
        svc.record_outings(current_role=Role.JR, work_date=DAY, user_ids=[3], outings=[{"crew_count": 2}])


def test_outings_need_date_and_rows(svc, attendance_repo):
    attendance_repo.add(3, DAY, "JR")
    with pytest.raises(ValidationError):
        svc.record_outings(current_role=Role.JR, work_date=None, user_ids=[3], outings=[{"crew_count": 2}])
    with pytest.raises(ValidationError):
        svc.record_outings(current_role=Role.JR, work_date=DAY, user_ids=[3], outings=[])


def test_firefighters_cannot_log_outings(svc):
    with pytest.raises(AuthorizationError):
        svc.record_outings(current_role=Role.BF, work_date=DAY, user_ids=[3], outings=[{"crew_count": 2}])
