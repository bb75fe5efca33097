# tests/test_users.py
from farmconnect.domain.enums import Role
from tests.helpers import auth, make_user


def test_register_and_me(client):
    resp = client.post(
        "/users/register",
        json={"email": "tigist@example.com", "displayName": "Tigist", "role": "farmer"},
        headers=auth("uid-tigist"),
    )

    assert resp.status_code == 201
    assert resp.json()["role"] == "farmer"

    me = client.get("/users/me", headers=auth("uid-tigist"))
    assert me.status_code == 200
    assert me.json()["displayName"] == "Tigist"


def test_register_is_idempotent_per_identity(client):
    payload = {"email": "dawit@example.com", "displayName": "Dawit"}
    first = client.post("/users/register", json=payload, headers=auth("uid-dawit"))
    second = client.post("/users/register", json=payload, headers=auth("uid-dawit"))

    assert first.json()["id"] == second.json()["id"]
    assert second.json()["role"] == "buyer"


def test_register_conflicting_email(client):
    make_user("someone")
    resp = client.post(
        "/users/register",
        json={"email": "someone@example.com", "displayName": "Impostor"},
        headers=auth("uid-other"),
    )
    assert resp.status_code == 409


def test_admin_cannot_self_register(client):
    resp = client.post(
        "/users/register",
        json={"email": "root@example.com", "displayName": "Root", "role": "admin"},
        headers=auth("uid-root"),
    )
    assert resp.status_code == 422


def test_missing_token(client):
    resp = client.get("/orders/cart")
    assert resp.status_code == 401
    assert resp.json() == {"error": "Missing token"}


def test_invalid_token(client):
    resp = client.get("/orders/cart", headers=auth("bad-token"))
    assert resp.status_code == 401


def test_unregistered_identity(client):
    resp = client.get("/orders/cart", headers=auth("nobody"))
    assert resp.status_code == 403
    assert resp.json() == {"error": "User not registered"}


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_farmer_role_from_registry(client):
    make_user("farmer", Role.farmer)
    assert client.get("/orders/farmer/orders", headers=auth("farmer")).status_code == 200
