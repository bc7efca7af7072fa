from __future__ import annotations

import pytest

from tutoring_roster.main import create_app


def _new_student(client, context="Med", **overrides):
    payload = {"name": "Alice", "grade": "M.6", "contact": "081", "course_type": "theory", "total_hours": 20}
    payload.update(overrides)
    return client.post(f"/api/contexts/{context}/students", json=payload)


def test_api_contexts_lists_fixed_order(client):
    resp = client.get("/api/contexts")
    assert resp.status_code == 200
    assert [c["name"] for c in resp.get_json()["contexts"]] == ["Login", "Meta", "Med", "IRE", "Ed-tech"]


def test_unknown_context_is_404(client):
    assert client.get("/api/contexts/Nope/students").status_code == 404
    assert client.get("/contexts/Nope").status_code == 404


def test_api_add_student_returns_created_student(client):
    resp = _new_student(client)
    assert resp.status_code == 201
    body = resp.get_json()
    assert body["used_hours"] == 0
    assert body["remaining_hours"] == 20
    assert body["balance"] == "normal"
    assert body["session_count"] == 0

    listed = client.get("/api/contexts/Med/students").get_json()["students"]
    assert [s["id"] for s in listed] == [body["id"]]
    assert client.get("/api/contexts/IRE/students").get_json()["students"] == []


def test_api_add_student_returns_field_errors(client):
    resp = _new_student(client, name="", total_hours=-2)
    assert resp.status_code == 400
    assert set(resp.get_json()["errors"]) == {"name", "total_hours"}


def test_api_record_session_and_history(client):
    sid = _new_student(client, total_hours=20).get_json()["id"]
    url = f"/api/contexts/Med/students/{sid}/sessions"

    ok = client.post(url, json={"session_date": "2024-01-10", "hours_used": 8, "content": "Algebra", "teacher": "T"})
    assert ok.status_code == 201
    assert ok.get_json()["session_date"] == "2024-01-10"

    rejected = client.post(url, json={"session_date": "2024-01-11", "hours_used": 15, "content": "More", "teacher": "T"})
    assert rejected.status_code == 400
    assert "hours_used" in rejected.get_json()["errors"]

    history = client.get(url).get_json()
    assert history["student"]["used_hours"] == 8
    assert history["student"]["remaining_hours"] == 12
    assert [(s["number"], s["content"]) for s in history["sessions"]] == [(1, "Algebra")]


def test_api_record_session_for_unknown_student(client):
    resp = client.post(
        "/api/contexts/Med/students/missing/sessions",
        json={"session_date": "2024-01-10", "hours_used": 1, "content": "x", "teacher": "y"},
    )
    assert resp.status_code == 400
    assert resp.get_json()["errors"] == {"student_id": "Student not found"}


def test_api_edit_and_delete(client):
    sid = _new_student(client).get_json()["id"]

    edited = client.put(
        f"/api/contexts/Med/students/{sid}",
        json={"name": "Bob", "grade": "M.4", "contact": "x", "course_type": "practical", "total_hours": 3},
    )
    assert edited.status_code == 200
    assert edited.get_json()["balance"] == "low"

    missing = client.put(
        "/api/contexts/Med/students/missing",
        json={"name": "Bob", "grade": "M.4", "contact": "x", "course_type": "practical", "total_hours": 3},
    )
    assert missing.status_code == 404

    assert client.delete(f"/api/contexts/Med/students/{sid}").status_code == 204
    assert client.delete(f"/api/contexts/Med/students/{sid}").status_code == 404


def test_api_summary(client):
    _new_student(client, total_hours=4)
    _new_student(client, total_hours=10)

    summary = client.get("/api/contexts/Med/summary").get_json()

    assert summary["student_count"] == 2
    assert summary["total_hours"] == 14
    assert summary["low_count"] == 1
    assert summary["normal_count"] == 1


def test_index_redirects_to_first_context(client):
    resp = client.get("/")
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/contexts/Login")


def test_roster_page_renders(client):
    _new_student(client, name="Alice")
    resp = client.get("/contexts/Med")
    assert resp.status_code == 200
    assert "Alice" in resp.get_data(as_text=True)


@pytest.mark.parametrize("modal", ["add_student", "edit_student", "record_session", "view_history"])
def test_roster_page_renders_each_modal(client, modal):
    sid = _new_student(client).get_json()["id"]
    resp = client.get(f"/contexts/Med?modal={modal}&student_id={sid}")
    assert resp.status_code == 200


def test_form_add_student_redirects_on_success(client):
    resp = client.post(
        "/contexts/Med/students",
        data={"name": "Carol", "grade": "M.3", "contact": "line:carol", "course_type": "practical", "total_hours": "12"},
    )
    assert resp.status_code == 302
    assert client.get("/api/contexts/Med/summary").get_json()["student_count"] == 1


def test_form_add_student_rerenders_with_errors(client):
    resp = client.post("/contexts/Med/students", data={"name": "", "grade": "", "contact": "", "total_hours": "0"})
    assert resp.status_code == 400
    assert "Name is required" in resp.get_data(as_text=True)


def test_form_record_session_over_balance_rerenders(client):
    sid = _new_student(client, total_hours=2).get_json()["id"]
    resp = client.post(
        f"/contexts/Med/students/{sid}/sessions",
        data={"session_date": "2024-01-10", "hours_used": "3", "content": "x", "teacher": "y"},
    )
    assert resp.status_code == 400
    assert "cannot exceed" in resp.get_data(as_text=True)


def test_form_delete_student(client):
    sid = _new_student(client).get_json()["id"]
    resp = client.post(f"/contexts/Med/students/{sid}/delete")
    assert resp.status_code == 302
    assert client.get("/api/contexts/Med/students").get_json()["students"] == []


def test_development_settings_seed_demo_data():
    client = create_app("tutoring_roster.config.development").test_client()
    counts = {c["name"]: c["student_count"] for c in client.get("/api/contexts").get_json()["contexts"]}
    assert counts == {"Login": 2, "Meta": 1, "Med": 0, "IRE": 0, "Ed-tech": 0}


def test_api_huge_hour_counts_are_rejected_as_field_errors(client):
    resp = _new_student(client, total_hours=10**400)
    assert resp.status_code == 400
    assert "total_hours" in resp.get_json()["errors"]

    sid = _new_student(client).get_json()["id"]
    resp = client.post(
        f"/api/contexts/Med/students/{sid}/sessions",
        json={"session_date": "2024-01-10", "hours_used": 10**400, "content": "x", "teacher": "y"},
    )
    assert resp.status_code == 400
    assert "hours_used" in resp.get_json()["errors"]


def test_api_fractional_sessions_use_exact_remaining_balance(client):
    sid = _new_student(client, total_hours=10).get_json()["id"]
    url = f"/api/contexts/Med/students/{sid}/sessions"
    body = {"session_date": "2024-01-10", "content": "x", "teacher": "y"}

    assert client.post(url, json=dict(body, hours_used=8.9)).status_code == 201
    assert client.post(url, json=dict(body, hours_used=1.1)).status_code == 201
    assert client.get(url).get_json()["student"]["remaining_hours"] == 0


@pytest.mark.parametrize("payload", [[1, 2], "text", 5])
def test_api_non_object_body_is_rejected(client, payload):
    sid = _new_student(client).get_json()["id"]

    for method, url in [
        (client.post, "/api/contexts/Med/students"),
        (client.put, f"/api/contexts/Med/students/{sid}"),
        (client.post, f"/api/contexts/Med/students/{sid}/sessions"),
    ]:
        resp = method(url, json=payload)
        assert resp.status_code == 400
        assert resp.get_json()["errors"] == {"body": "Expected a JSON object"}


def test_hour_inputs_leave_range_checks_to_the_server(client):
    sid = _new_student(client, total_hours=12.25).get_json()["id"]
    html = client.get(f"/contexts/Med?modal=edit_student&student_id={sid}").get_data(as_text=True)
    assert 'step="any"' in html
    assert "12.25" in html
