from __future__ import annotations

from datetime import date

import pytest

from brigade_attendance.main import create_app


@pytest.fixture
def app(container):
    app = create_app(container=container, settings_module="brigade_attendance.config.testing")
    return app


@pytest.fixture
def client(app):
    return app.test_client()


def login(client, email, password):
    return client.post("/auth/login", json={"email": email, "password": password})


def test_login_reports_home_for_role(client):
    resp = login(client, "bf@brigadas.local", "bombero1")
    assert resp.status_code == 200
    assert resp.get_json()["home"] == "/bf"

    resp = client.get("/")
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/bf")


def test_bad_login_is_401_json(client):
    resp = login(client, "bf@brigadas.local", "nope")
    assert resp.status_code == 401
    assert "error" in resp.get_json()


def test_anonymous_requests_are_401(client):
    assert client.get("/api/balance/overtime").status_code == 401
    assert client.get("/api/me").status_code == 401


def test_firefighter_cannot_reach_admin_endpoints(client):
    login(client, "bf@brigadas.local", "bombero1")
    assert client.get("/api/admin/users").status_code == 403
    assert client.post("/api/jr/entries", json={"entries": []}).status_code == 403


def test_firefighter_cannot_read_someone_elses_balance(client):
    login(client, "bf@brigadas.local", "bombero1")
    assert client.get("/api/balance/overtime?user_id=4").status_code == 403


def test_shift_leader_records_day_and_firefighter_sees_balance(client):
    login(client, "jr@brigadas.local", "jefe1234")
    resp = client.post(
        "/api/jr/entries",
        json={"entries": [{"user_id": 3, "date": "2026-07-01", "overtime_hours": "3.5"}]},
    )
    assert resp.status_code == 201

    resp = client.get("/api/balance/overtime?user_id=3")
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["comp_days_earned"] == 1
    assert body["hours_toward_next_comp_day"] == 0.35


def test_leave_request_conflict_maps_to_409(client, attendance_repo):
    attendance_repo.add(3, date(2026, 7, 1), "JR", "2")
    login(client, "bf@brigadas.local", "bombero1")

    resp = client.post("/api/requests", json={"date": "2026-07-01", "code": "V"})

    assert resp.status_code == 409
    assert resp.get_json()["error"]


def test_leave_request_created_and_listed(client):
    login(client, "bf@brigadas.local", "bombero1")

    assert client.post("/api/requests", json={"date": "2026-07-02", "code": "AP"}).status_code == 201
    resp = client.get("/api/requests?limit=10")

    assert [r["code"] for r in resp.get_json()["requests"]] == ["AP"]


def test_validation_errors_map_to_400(client):
    login(client, "bf@brigadas.local", "bombero1")
    resp = client.post("/api/requests", json={"date": "ayer", "code": "V"})
    assert resp.status_code == 400


def test_admin_approves_pending_user(client):
    login(client, "admin@brigadas.local", "admin123")

    pending = client.get("/api/admin/users").get_json()["users"]
    assert [u["user_id"] for u in pending] == [5]

    resp = client.post("/api/admin/users/5/approve", json={"role": "bf"})
    assert resp.status_code == 200
    assert resp.get_json()["temporary_password"]

    assert client.post("/api/admin/users/5/approve", json={"role": "bf"}).status_code == 409
    assert client.delete("/api/admin/users/999").status_code == 404


def test_roster_draft_survives_between_requests(client):
    login(client, "jr@brigadas.local", "jefe1234")
    ctx = {"kind": "unidad", "zone": "Oriente", "unit_id": 1}

    client.put("/api/jr/roster/draft", json={**ctx, "selections": [{"dni": "22222222J", "name": "Pablo"}]})
    resp = client.get("/api/jr/roster/draft", query_string=ctx)

    assert resp.get_json()["selections"] == [{"dni": "22222222J", "name": "Pablo"}]


def test_shift_leader_assignment(client):
    login(client, "jr@brigadas.local", "jefe1234")
    body = client.get("/api/jr/assignment").get_json()
    assert body["kind"] == "unidad"
    assert body["zone"] == "Oriente"


def test_unknown_route_is_json_404(client):
    resp = client.get("/api/nope")
    assert resp.status_code == 404
    assert "error" in resp.get_json()


def test_month_report_csv_download(client, attendance_repo):
    attendance_repo.add(3, date(2026, 7, 1), "JR", "1")
    login(client, "admin@brigadas.local", "admin123")

    resp = client.get("/api/admin/reports/month.csv?year=2026&month=7")

    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    assert b"work_date" in resp.data


@pytest.mark.parametrize(
    "path",
    [
        "/api/balance/leave?year=0",
        "/api/balance?year=10000",
        "/api/attendance/month?year=0&month=7",
    ],
)
def test_out_of_range_year_is_400(client, path):
    login(client, "bf@brigadas.local", "bombero1")
    resp = client.get(path)
    assert resp.status_code == 400
    assert resp.get_json()["error"]
