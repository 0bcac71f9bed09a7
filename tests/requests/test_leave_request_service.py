from __future__ import annotations

from datetime import date, time

import pytest

from brigade_attendance.core.enums import AttendanceCode, Role
from brigade_attendance.core.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from brigade_attendance.requests.service import LeaveRequestService

DAY = date(2026, 7, 10)


@pytest.fixture
def svc(attendance_repo, users_repo, policy):
    return LeaveRequestService(attendance_repo, users_repo, policy)


def test_firefighter_can_request_vacation_on_a_free_day(svc, attendance_repo):
    attendance_id = svc.submit(current_role=Role.BF, user_id=3, work_date=DAY, code="v")

    rec = attendance_repo.get_for_user_and_date(3, DAY)
    assert rec.attendance_id == attendance_id
    assert rec.code == AttendanceCode.V
    assert rec.entry_time == time(0, 0)
    assert rec.exit_time == time(0, 0)
    assert rec.overtime_hours == 0


def test_request_on_a_day_with_overtime_is_rejected(svc, attendance_repo):
    attendance_repo.add(3, DAY, "JR", "2")

    with pytest.raises(ConflictError):
        svc.submit(current_role=Role.BF, user_id=3, work_date=DAY, code="V")

    assert attendance_repo.get_for_user_and_date(3, DAY).code == AttendanceCode.JR


def test_second_leave_on_same_day_is_rejected(svc, attendance_repo):
    attendance_repo.add(3, DAY, "AP")

    with pytest.raises(ConflictError):
        svc.submit(current_role=Role.BF, user_id=3, work_date=DAY, code="V")


def test_comp_day_without_available_balance_is_rejected(svc, attendance_repo):
    attendance_repo.add(3, date(2026, 7, 1), "JR", "3.0")

    with pytest.raises(ConflictError):
        svc.submit(current_role=Role.BF, user_id=3, work_date=DAY, code="H")

    assert attendance_repo.get_for_user_and_date(3, DAY) is None


def test_comp_day_is_accepted_once_enough_overtime_is_banked(svc, attendance_repo):
    attendance_repo.add(3, date(2026, 7, 1), "JR", "2.0")
    attendance_repo.add(3, date(2026, 7, 2), "JR", "1.15")

    svc.submit(current_role=Role.BF, user_id=3, work_date=DAY, code="H")

    with pytest.raises(ConflictError):
        svc.submit(current_role=Role.BF, user_id=3, work_date=date(2026, 7, 11), code="H")


def test_comp_day_balance_is_read_at_write_time(svc, attendance_repo, monkeypatch):
    attendance_repo.add(3, date(2026, 7, 1), "JR", "3.15")
    create_checked = attendance_repo.create_checked

    def other_request_commits_first(entry, check):
        attendance_repo.add(3, date(2026, 7, 20), "H")
        return create_checked(entry, check)

    monkeypatch.setattr(attendance_repo, "create_checked", other_request_commits_first)

    with pytest.raises(ConflictError):
        svc.submit(current_role=Role.BF, user_id=3, work_date=DAY, code="H")

    assert attendance_repo.get_for_user_and_date(3, DAY) is None


def test_day_with_ordinary_record_is_rejected_by_uniqueness(svc, attendance_repo):
    attendance_repo.add(3, DAY, "JR", "0")

    with pytest.raises(ConflictError):
        svc.submit(current_role=Role.BF, user_id=3, work_date=DAY, code="AP")


def test_shift_leader_can_request_too(svc):
    assert svc.submit(current_role=Role.JR, user_id=2, work_date=DAY, code="AP") > 0


@pytest.mark.parametrize("role", [Role.ADMIN, Role.PENDING])
def test_other_roles_cannot_request(svc, role):
    with pytest.raises(AuthorizationError):
        svc.submit(current_role=role, user_id=3, work_date=DAY, code="V")


@pytest.mark.parametrize("code", ["JR", "X", ""])
def test_only_leave_codes_can_be_requested(svc, code):
    with pytest.raises(ValidationError):
        svc.submit(current_role=Role.BF, user_id=3, work_date=DAY, code=code)


def test_unknown_user_is_not_found(svc):
    with pytest.raises(NotFoundError):
        svc.submit(current_role=Role.BF, user_id=404, work_date=DAY, code="V")


def test_list_requests_returns_leave_days_newest_first(svc, attendance_repo):
    attendance_repo.add(3, date(2026, 1, 5), "V")
    attendance_repo.add(3, date(2026, 3, 5), "AP")
    attendance_repo.add(3, date(2026, 2, 5), "JR", "1")

    records = svc.list_requests(user_id=3, limit=10)

    assert [r.work_date for r in records] == [date(2026, 3, 5), date(2026, 1, 5)]


def test_list_requests_only_accepts_known_page_sizes(svc):
    with pytest.raises(ValidationError):
        svc.list_requests(user_id=3, limit=15)
