"""HTTP tests for the auth and user endpoints."""

from __future__ import annotations

JOHN = {"name": "John Doe", "email": "John@Example.com", "password": "password123", "age": 30}


def _register(client, **overrides):
    payload = {**JOHN, **overrides}
    return client.post("/api/auth/register", json=payload)


def test_register_returns_sanitized_user_and_token(client):
    response = _register(client)

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["token"]
    assert body["user"]["email"] == "john@example.com"
    assert "createdAt" in body["user"]
    assert "password" not in body["user"]
    assert "password_hash" not in body["user"]


def test_register_duplicate_email_is_conflict(client):
    _register(client)

    response = _register(client, email="JOHN@example.com")

    assert response.status_code == 409
    assert response.json()["success"] is False


def test_register_missing_fields_is_bad_request(client):
    response = client.post("/api/auth/register", json={"name": "John Doe"})

    assert response.status_code == 400
    assert response.json()["errors"] == [
        "Email is required",
        "Password is required",
        "Age is required",
    ]


def test_register_invalid_email_is_bad_request(client):
    response = _register(client, email="not-an-email")

    assert response.status_code == 400
    assert response.json()["message"] == "Validation error"


def test_register_age_bounds(client):
    assert _register(client, email="a@example.com", age=0).status_code == 400
    assert _register(client, email="b@example.com", age=121).status_code == 400
    assert _register(client, email="c@example.com", age=1).status_code == 201
    assert _register(client, email="d@example.com", age=120).status_code == 201


def test_login_and_profile(client):
    registered = _register(client).json()["user"]

    login = client.post(
        "/api/auth/login", json={"email": "john@example.com", "password": "password123"}
    )
    assert login.status_code == 200
    token = login.json()["token"]

    profile = client.get("/api/auth/profile", headers={"Authorization": f"Bearer {token}"})
    assert profile.status_code == 200
    assert profile.json()["user"]["id"] == registered["id"]


def test_login_failures_share_status_and_message(client):
    _register(client)

    wrong_password = client.post(
        "/api/auth/login", json={"email": "john@example.com", "password": "wrong"}
    )
    unknown_email = client.post(
        "/api/auth/login", json={"email": "ghost@example.com", "password": "password123"}
    )

    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json()
    assert wrong_password.headers["WWW-Authenticate"] == "Bearer"


def test_profile_requires_valid_token(client):
    assert client.get("/api/auth/profile").status_code == 401

    response = client.get("/api/auth/profile", headers={"Authorization": "Bearer nonsense"})
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid or expired token"


def test_list_users_with_filters(client):
    _register(client)
    _register(client, name="Jane Roe", email="jane@corp.org", age=45)

    everyone = client.get("/api/users").json()
    assert everyone["count"] == 2
    assert all("password" not in user for user in everyone["users"])

    by_name = client.get("/api/users", params={"name": "jane"}).json()
    assert [user["name"] for user in by_name["users"]] == ["Jane Roe"]

    by_email = client.get("/api/users", params={"email": "EXAMPLE"}).json()
    assert [user["name"] for user in by_email["users"]] == ["John Doe"]

    by_age = client.get("/api/users", params={"minAge": 31, "maxAge": 50}).json()
    assert [user["age"] for user in by_age["users"]] == [45]


def test_get_and_delete_user(client):
    user_id = _register(client).json()["user"]["id"]

    fetched = client.get(f"/api/users/{user_id}")
    assert fetched.status_code == 200
    assert fetched.json()["user"]["id"] == user_id

    deleted = client.delete(f"/api/users/{user_id}")
    assert deleted.status_code == 200
    assert deleted.json()["deletedUser"]["id"] == user_id

    assert client.get(f"/api/users/{user_id}").status_code == 404
    assert client.delete(f"/api/users/{user_id}").status_code == 404


def test_create_user_without_token(client):
    response = client.post("/api/users", json={**JOHN, "age": "28"})

    assert response.status_code == 201
    body = response.json()
    assert "token" not in body
    assert body["user"]["age"] == 28
    assert "password" not in body["user"]


def test_unknown_endpoint(client):
    response = client.get("/api/nothing-here")

    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Endpoint not found"}


def test_health_and_security_headers(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["success"] is True
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"


def test_over_long_login_password_gives_same_response_for_any_email(client):
    _register(client)

    known = client.post("/api/auth/login", json={"email": "john@example.com", "password": "x" * 80})
    unknown = client.post("/api/auth/login", json={"email": "ghost@example.com", "password": "x" * 80})

    assert known.status_code == unknown.status_code == 401
    assert known.json() == unknown.json()


def test_register_over_long_password_is_bad_request(client):
    response = _register(client, password="p" * 80)

    assert response.status_code == 400
    assert response.json()["success"] is False


def test_register_malformed_age_string_is_bad_request(client):
    assert _register(client, email="a@example.com", age="--5").status_code == 400
    assert _register(client, email="b@example.com", age="²").status_code == 400
