from conftest import PASSWORD, sign_in, sign_up


def test_sign_up_creates_pending_account_without_signing_in(client, institution):
    response = sign_up(client, "ana@example.edu", institution_id=institution, student_id="S1001")

    assert response.status_code == 201
    body = response.json()
    assert body["role"] == "student"
    assert body["student_id"] == "S1001"
    assert body["verification_status"] == "pending"
    assert "access_token" not in body


def test_sign_in_then_me(client, institution):
    sign_up(client, "Ana@Example.edu", institution_id=institution, student_id="S1001")
    headers = sign_in(client, "ana@example.edu")

    response = client.get("/api/v1/auth/me", headers=headers)

    assert response.status_code == 200
    assert response.json()["email"] == "ana@example.edu"


def test_duplicate_email_is_rejected(client, institution):
    sign_up(client, "ana@example.edu", institution_id=institution, student_id="S1001")

    response = sign_up(client, "ana@example.edu", institution_id=institution, student_id="S1002")

    assert response.status_code == 409
    assert response.json()["detail"] == "User already registered"


def test_short_password_is_rejected(client):
    response = sign_up(client, "ana@example.edu", student_id="S1001", password="abc")

    assert response.status_code == 400
    assert response.json()["detail"] == "Password must be at least 6 characters"


def test_student_needs_student_number(client):
    response = sign_up(client, "ana@example.edu", student_id=None)

    assert response.status_code == 422


def test_student_number_dropped_for_staff(client, institution):
    response = sign_up(client, "prof@example.edu", role="faculty", institution_id=institution, student_id="S9")

    assert response.status_code == 201
    assert response.json()["student_id"] is None


def test_unknown_institution_is_rejected(client):
    response = sign_up(
        client,
        "ana@example.edu",
        student_id="S1001",
        institution_id="00000000-0000-0000-0000-000000000001",
    )

    assert response.status_code == 400


def test_bad_credentials(client):
    sign_up(client, "ana@example.edu", student_id="S1001")

    response = client.post("/api/v1/auth/sign-in", json={"email": "ana@example.edu", "password": "wrong-pass"})

    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid login credentials"


def test_unknown_email_gets_same_error(client):
    response = client.post("/api/v1/auth/sign-in", json={"email": "ghost@example.edu", "password": PASSWORD})

    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid login credentials"


def test_sign_out_revokes_token(client):
    sign_up(client, "ana@example.edu", student_id="S1001")
    headers = sign_in(client, "ana@example.edu")

    assert client.post("/api/v1/auth/sign-out", headers=headers).status_code == 204
    assert client.get("/api/v1/auth/me", headers=headers).status_code == 401


def test_sign_out_without_token_succeeds(client):
    assert client.post("/api/v1/auth/sign-out").status_code == 204


def test_me_requires_token(client):
    response = client.get("/api/v1/auth/me")

    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"


def test_garbage_token_is_unauthenticated(client):
    response = client.get("/api/v1/auth/me", headers={"Authorization": "Bearer not-a-token"})

    assert response.status_code == 401


def test_health(client):
    assert client.get("/api/v1/health").json() == {"status": "ok"}
