from __future__ import annotations

import pytest
from werkzeug.security import generate_password_hash

from src.classroom_records.classroom_records.identity.model import StaffAccount
from src.classroom_records.classroom_records.main import create_app


@pytest.fixture
def client(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    container.staff_repo.upsert(
        StaffAccount(
            account="T01",
            email="lan.gv@school.edu.vn",
            display_name="Cô Lan",
            password_hash=generate_password_hash("secret"),
        )
    )
    app = create_app(container)
    return app.test_client()


def _login(client, **body):
    return client.post("/api/auth/login", json=body)


def test_requests_without_login_are_rejected(client):
    for path in ("/api/students", "/api/attendance", "/api/grades", "/api/summary/class"):
        resp = client.get(path)
        assert resp.status_code == 401, path
        assert resp.get_json()["success"] is False


def test_unknown_account_cannot_login(client):
    resp = _login(client, account="9999")

    assert resp.status_code == 401
    assert client.get("/api/auth/me").get_json()["data"] is None


def test_login_requires_a_credential(client):
    assert _login(client).status_code == 400


def test_leader_marks_only_own_group(client):
    resp = _login(client, account="1001")
    assert resp.status_code == 200
    assert resp.get_json()["data"]["role"] == "group_leader"

    ok = client.put("/api/attendance/2025-03-10/1002", json={"isPresent": True})
    assert ok.status_code == 200
    assert ok.get_json()["data"]["isPresent"] is True

    denied = client.put("/api/attendance/2025-03-10/2001", json={"isPresent": True})
    assert denied.status_code == 403


def test_teacher_password_login_and_grades(client):
    resp = _login(client, email="Lan.GV@school.edu.vn", password="secret")
    assert resp.status_code == 200
    assert resp.get_json()["data"]["role"] == "teacher"

    assert client.put("/api/grades/1002/midterm", json={"value": 8}).status_code == 200
    final = client.put("/api/grades/1002/final", json={"value": 7})
    assert final.get_json()["data"]["total"] == 7.43

    missing = client.put("/api/grades/9999/final", json={"value": 7})
    assert missing.status_code == 404


def test_wrong_password(client):
    assert _login(client, email="lan.gv@school.edu.vn", password="nope").status_code == 401


def test_import_with_invalid_row_commits_nothing(client, container):
    _login(client, email="lan.gv@school.edu.vn", password="secret")
    rows = [
        {"account": "1001", "midterm": 8},
        {"account": "1002", "midterm": 7},
        {"account": "1003", "midterm": 9},
        {"account": "2001", "midterm": "abc"},
    ]

    resp = client.post("/api/imports/grades/midterm", json={"rows": rows})

    data = resp.get_json()
    assert resp.status_code == 400
    assert data["processedCount"] == 0
    assert data["totalCount"] == 4
    assert data["errors"][0]["row"] == 5
    assert container.grades_repo.get("1001") is None


def test_import_body_must_be_rows(client):
    _login(client, email="lan.gv@school.edu.vn", password="secret")
    assert client.post("/api/imports/roster", json={"rows": "nope"}).status_code == 400


def test_invalid_date_is_a_validation_error(client):
    _login(client, email="lan.gv@school.edu.vn", password="secret")

    assert client.put("/api/attendance/10-03-2025/1002", json={"isPresent": True}).status_code == 400
    assert client.get("/api/attendance?date=yesterday").status_code == 400


def test_student_summary_endpoint(client):
    _login(client, account="1002")

    own = client.get("/api/summary/students/1002")
    assert own.status_code == 200
    assert own.get_json()["data"]["account"] == "1002"

    assert client.get("/api/summary/students/1003").status_code == 403


def test_logout_clears_session(client):
    _login(client, account="1002")
    assert client.get("/api/auth/me").get_json()["data"]["account"] == "1002"

    client.post("/api/auth/logout")

    assert client.get("/api/auth/me").get_json()["data"] is None
    assert client.get("/api/grades").status_code == 401
