"""Tests for signup, login and role checks"""


def test_register_creates_client(client):
    resp = client.post(
        "/api/auth/register",
        json={
            "email": "New.User@Example.com",
            "password": "abc12345",
            "full_name": "New User",
            "phone": "555-0199",
        },
    )

    assert resp.status_code == 201
    body = resp.get_json()
    assert body["token"]
    assert body["user"]["email"] == "new.user@example.com"
    assert body["user"]["role"] == "CLIENT"
    assert body["user"]["full_name"] == "New User"


def test_register_rejects_weak_password(client):
    resp = client.post(
        "/api/auth/register",
        json={"email": "a@b.co", "password": "abcdefgh", "full_name": "A", "phone": "1"},
    )
    assert resp.status_code == 400
    assert "number" in resp.get_json()["message"]


def test_register_rejects_duplicate_email(client, client_user):
    resp = client.post(
        "/api/auth/register",
        json={
            "email": "client@example.com",
            "password": "abc12345",
            "full_name": "Dup",
            "phone": "1",
        },
    )
    assert resp.status_code == 400


def test_login_and_me(client, client_user):
    resp = client.post(
        "/api/auth/login", json={"email": "client@example.com", "password": "secret123"}
    )
    assert resp.status_code == 200
    token = resp.get_json()["token"]

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.get_json()["user"]["id"] == client_user.id


def test_login_bad_password(client, client_user):
    resp = client.post(
        "/api/auth/login", json={"email": "client@example.com", "password": "wrong1234"}
    )
    assert resp.status_code == 401


def test_missing_token(client):
    resp = client.get("/api/auth/me")
    assert resp.status_code == 401
    assert resp.get_json()["message"] == "Missing or invalid auth token"


def test_admin_route_rejects_client(client, client_headers):
    resp = client.get("/api/admin/clients", headers=client_headers)
    assert resp.status_code == 403
    assert resp.get_json() == {"message": "admin access required"}


def test_client_route_rejects_admin(client, admin_headers):
    resp = client.post("/api/client/log-workout", json={}, headers=admin_headers)
    assert resp.status_code == 403
    assert resp.get_json() == {"message": "client access required"}


def test_health(client):
    assert client.get("/api/health").get_json() == {"status": "ok"}
