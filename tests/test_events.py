from datetime import timedelta

from conftest import event_payload


def _create(client, account, **kwargs):
    response = client.post("/api/v1/events", json=event_payload(**kwargs), headers=account.headers)
    assert response.status_code == 201, response.text
    return response.json()


def _set_status(client, account, event_id, status):
    return client.patch(f"/api/v1/events/{event_id}/status", json={"status": status}, headers=account.headers)


def _register(client, account, event_id):
    return client.post(f"/api/v1/events/{event_id}/participations", headers=account.headers)


def test_events_start_as_drafts_and_publish(client, student, faculty):
    event = client.post(
        "/api/v1/events",
        json={k: v for k, v in event_payload().items() if k != "status"},
        headers=faculty.headers,
    ).json()

    assert event["status"] == "draft"
    assert event["institution_id"] == str(faculty.institution_id)
    assert client.get("/api/v1/events", headers=student.headers).json() == []

    assert _set_status(client, faculty, event["id"], "published").json()["status"] == "published"
    assert [e["id"] for e in client.get("/api/v1/events", headers=student.headers).json()] == [event["id"]]


def test_listing_is_scoped_by_role(client, faculty, admin, make_account, institution):
    colleague = make_account("dr.lee@example.edu", "faculty", institution)
    _create(client, faculty, title="Mine")
    _create(client, colleague, title="Theirs")

    assert [e["title"] for e in client.get("/api/v1/events", headers=faculty.headers).json()] == ["Mine"]
    assert len(client.get("/api/v1/events", headers=admin.headers).json()) == 2


def test_upcoming_events_are_soonest_first(client, student, faculty):
    _create(client, faculty, title="Later", starts_in=timedelta(days=10))
    _create(client, faculty, title="Sooner", starts_in=timedelta(days=1))

    titles = [e["title"] for e in client.get("/api/v1/events", headers=student.headers).json()]

    assert titles == ["Sooner", "Later"]


def test_only_faculty_create_events(client, student):
    response = client.post("/api/v1/events", json=event_payload(), headers=student.headers)

    assert response.status_code == 403


def test_end_before_start_is_rejected(client, faculty):
    payload = event_payload()
    payload["end_date"], payload["start_date"] = payload["start_date"], payload["end_date"]

    assert client.post("/api/v1/events", json=payload, headers=faculty.headers).status_code == 422


def test_new_events_cannot_start_completed(client, faculty):
    response = client.post("/api/v1/events", json=event_payload(status="completed"), headers=faculty.headers)

    assert response.status_code == 400


def test_invalid_status_change(client, faculty):
    event = _create(client, faculty, status="draft")

    response = _set_status(client, faculty, event["id"], "completed")

    assert response.status_code == 409
    assert response.json()["detail"] == "Cannot move event from draft to completed."


def test_only_organiser_changes_status(client, faculty, make_account, institution):
    colleague = make_account("dr.lee@example.edu", "faculty", institution)
    event = _create(client, faculty, status="draft")

    assert _set_status(client, colleague, event["id"], "published").status_code == 403


def test_registration_flow(client, student, faculty):
    event = _create(client, faculty)

    response = _register(client, student, event["id"])

    assert response.status_code == 201
    assert response.json()["status"] == "registered"
    duplicate = _register(client, student, event["id"])
    assert duplicate.status_code == 409
    assert duplicate.json()["detail"] == "Student is already registered for this event."


def test_capacity_is_enforced(client, student, faculty, make_account, institution):
    second = make_account("ben@example.edu", "student", institution)
    event = _create(client, faculty, max_participants=1)
    assert _register(client, student, event["id"]).status_code == 201

    response = _register(client, second, event["id"])

    assert response.status_code == 409
    assert response.json()["detail"] == "Event is full."


def test_cannot_register_for_other_institution(client, faculty, make_account, other_institution):
    outsider = make_account("dev@southbank.edu", "student", other_institution)
    event = _create(client, faculty)

    assert _register(client, outsider, event["id"]).status_code == 403


def test_cannot_register_for_draft_or_past_events(client, student, faculty):
    draft = _create(client, faculty, status="draft")
    past = _create(client, faculty, starts_in=timedelta(days=-2))

    assert _register(client, student, draft["id"]).status_code == 409
    assert _register(client, student, past["id"]).json()["detail"] == "Event is not open for registration."


def test_organiser_records_outcome(client, student, faculty, make_account, institution):
    colleague = make_account("dr.lee@example.edu", "faculty", institution)
    event = _create(client, faculty)
    participation = _register(client, student, event["id"]).json()
    url = f"/api/v1/events/{event['id']}/participations/{participation['id']}"

    assert client.patch(url, json={"status": "attended"}, headers=colleague.headers).status_code == 403

    response = client.patch(url, json={"status": "attended", "achievement_points": 5}, headers=faculty.headers)

    assert response.status_code == 200
    assert response.json()["status"] == "attended"
    assert response.json()["achievement_points"] == 5
    assert response.json()["verified_by"] == str(faculty.id)

    listing = client.get(f"/api/v1/events/{event['id']}/participations", headers=faculty.headers).json()
    assert [p["id"] for p in listing] == [participation["id"]]
    assert client.get(f"/api/v1/events/{event['id']}/participations", headers=colleague.headers).status_code == 403


def test_unknown_event(client, faculty):
    response = _set_status(client, faculty, "00000000-0000-0000-0000-000000000001", "published")

    assert response.status_code == 404
