from constellation.core.security import create_access_token
from constellation.tests.factories import auth, register


def test_health(client):
    r = client.get("/api/v1/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"
    assert r.headers["X-Request-Id"]


def test_register_login_me(client):
    token, user = register(client, "Alice")
    assert "passwordHash" not in user
    assert user["role"] == "user"

    r = client.post("/api/v1/auth/login", json={"email": "ALICE@example.com", "password": "secret123"})
    assert r.status_code == 200
    assert r.json()["user"]["id"] == user["id"]

    me = client.get("/api/v1/auth/me", headers=auth(token))
    assert me.status_code == 200
    assert me.json()["user"]["email"] == "alice@example.com"


def test_duplicate_email_conflicts(client):
    register(client, "Alice")
    r = client.post(
        "/api/v1/auth/register",
        json={"name": "Other", "email": "Alice@Example.com", "password": "secret123"},
    )
    assert r.status_code == 409


def test_register_validation(client):
    r = client.post("/api/v1/auth/register", json={"name": "Bob", "email": "bob@example.com", "password": "123"})
    assert r.status_code == 400
    assert r.json()["detail"]

    r = client.post("/api/v1/auth/register", json={"name": "Bob", "email": "not-an-email", "password": "secret123"})
    assert r.status_code == 400


def test_bad_login(client):
    register(client, "Alice")
    r = client.post("/api/v1/auth/login", json={"email": "alice@example.com", "password": "wrong-pass"})
    assert r.status_code == 401

    r = client.post("/api/v1/auth/login", json={"email": "nobody@example.com", "password": "secret123"})
    assert r.status_code == 401


def test_protected_route_without_token(client):
    assert client.get("/api/v1/auth/me").status_code == 401
    assert client.get("/api/v1/auth/me", headers=auth("garbage")).status_code == 401


def test_expired_token_rejected(client, settings):
    _, user = register(client, "Alice")
    token = create_access_token(user["id"], {"role": "user"}, expires_minutes=-1, settings=settings)
    assert client.get("/api/v1/auth/me", headers=auth(token)).status_code == 401


def test_token_for_unknown_user_rejected(client, settings):
    token = create_access_token("user-ghost", {"role": "user"}, settings=settings)
    assert client.get("/api/v1/auth/me", headers=auth(token)).status_code == 401


def test_cookie_token_accepted(client):
    token, _ = register(client, "Alice")
    client.cookies.set("token", token)
    assert client.get("/api/v1/auth/me").status_code == 200
