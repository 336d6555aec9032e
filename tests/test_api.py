from __future__ import annotations

import pytest

from school_portal.main import create_app
from school_portal.store.kv import InMemoryKeyValueStore


@pytest.fixture
def app():
    return create_app("config.testing", kv=InMemoryKeyValueStore())


@pytest.fixture
def client(app):
    return app.test_client()


def _login(client, email, password="password123"):
    return client.post("/api/login", json={"email": email, "password": password})


def test_login_and_dashboard(client):
    assert client.get("/api/dashboard").status_code == 401

    resp = _login(client, "teacher@school.com")
    assert resp.status_code == 200
    assert "password_hash" not in resp.get_json()["user"]

    dash = client.get("/api/dashboard").get_json()
    assert dash["kind"] == "teacher"


def test_bad_login_is_401_with_message(client):
    resp = _login(client, "teacher@school.com", "nope")
    assert resp.status_code == 401
    assert resp.get_json()["error"] == "Invalid email or password."


def test_low_attendance_student_is_blocked_on_login(client):
    _login(client, "ian@school.com")
    assert client.get("/api/dashboard").get_json()["kind"] == "access_blocked"


def test_parent_signup_with_unknown_child(client, app):
    resp = client.post(
        "/api/signup",
        json={
            "name": "Mum",
            "email": "mum@home.com",
            "password": "secret1",
            "role": "parent",
            "child_email": "nobody@school.com",
        },
    )
    assert resp.status_code == 401
    assert "No student account found" in resp.get_json()["error"]
    store = app.extensions["school_portal"].store
    assert store.find_user_by_email("mum@home.com") is None


def test_leave_flow_marks_attendance(client, app):
    _login(client, "student@school.com")
    resp = client.post(
        "/api/leaves",
        json={"start_date": "2024-01-10", "end_date": "2024-01-12", "reason": "Conference"},
    )
    assert resp.status_code == 201
    leave_id = resp.get_json()["leave_application"]["id"]

    # students cannot decide their own leave
    assert client.post(f"/api/leaves/{leave_id}/decision", json={"status": "Approved"}).status_code == 403

    client.post("/api/logout")
    _login(client, "teacher@school.com")
    resp = client.post(f"/api/leaves/{leave_id}/decision", json={"status": "Approved", "comment": "ok"})
    assert resp.get_json() == {"updated": True}
    client.post(f"/api/leaves/{leave_id}/decision", json={"status": "Approved"})

    student = app.extensions["school_portal"].store.get_student("user-student-1")
    assert len([r for r in student.attendance if r.subject == "On Approved Leave"]) == 3


def test_invalid_leave_dates_are_400(client):
    _login(client, "student@school.com")
    resp = client.post("/api/leaves", json={"start_date": "10/01/2024", "end_date": "2024-01-12", "reason": "x"})
    assert resp.status_code == 400


def test_pending_status_is_not_a_decision(client):
    _login(client, "teacher@school.com")
    assert client.post("/api/leaves/any/decision", json={"status": "Pending"}).status_code == 400


def test_exam_lifecycle(client, app):
    _login(client, "teacher@school.com")
    exam = {
        "title": "Capitals",
        "subject": "Geography",
        "duration_minutes": 5,
        "questions": [
            {"id": "q1", "text": "France?", "options": ["Paris", "Rome"], "correct_answer": "Paris"},
            {"id": "q2", "text": "Italy?", "options": ["Paris", "Rome"], "correct_answer": "Rome"},
        ],
    }
    assert client.put("/api/exams/geo-1", json=exam).status_code == 200
    assert client.put("/api/exams/geo-2", json={"title": "Broken"}).status_code == 400
    client.post("/api/logout")

    _login(client, "student@school.com")
    resp = client.post("/api/exams/geo-1/submissions", json={"answers": {"q1": "Paris", "q2": "Paris"}})
    assert resp.status_code == 201
    assert resp.get_json()["submission"]["score"] == 50
    assert client.post("/api/exams/missing/submissions", json={"answers": {}}).status_code == 404
    client.post("/api/logout")

    _login(client, "teacher@school.com")
    listed = client.get("/api/exams/geo-1/submissions").get_json()["exam_submissions"]
    assert [s["score"] for s in listed] == [50]
    assert client.delete("/api/exams/geo-1").get_json() == {"deleted": True}
    store = app.extensions["school_portal"].store
    assert all(s.exam_id != "geo-1" for s in store.exam_submissions)


def test_teacher_can_unblock_student(client, app):
    _login(client, "ian@school.com")
    client.post("/api/logout")

    _login(client, "teacher@school.com")
    assert client.post("/api/students/user-student-2/unblock").get_json() == {"updated": True}
    assert client.post("/api/students/ghost/unblock").get_json() == {"updated": False}

    student = app.extensions["school_portal"].store.get_student("user-student-2")
    assert student.is_access_blocked is False


def test_update_profile(client):
    _login(client, "parent@school.com")
    resp = client.put("/api/users/me", json={"name": "John H."})
    assert resp.get_json()["user"]["name"] == "John H."
    assert client.get("/api/session").get_json()["user"]["name"] == "John H."


def test_signup_validation_errors_are_400(client):
    resp = client.post(
        "/api/signup",
        json={"name": "Kid", "email": "kid@school.com", "password": "123", "role": "student"},
    )
    assert resp.status_code == 400


def test_duplicate_signup_is_401(client):
    resp = client.post(
        "/api/signup",
        json={"name": "Dup", "email": "teacher@school.com", "password": "secret1", "role": "teacher"},
    )
    assert resp.status_code == 401


@pytest.mark.parametrize("hours", ["inf", "nan", 1e12, -1])
def test_unreasonable_temporary_access_is_400(client, hours):
    _login(client, "teacher@school.com")
    resp = client.post("/api/students/user-student-2/temporary-access", json={"hours": hours})
    assert resp.status_code == 400
