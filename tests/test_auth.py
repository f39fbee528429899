import pytest

from propdesk.extensions import db
from propdesk.models import User


def test_signup_issues_session(client):
    resp = client.post("/api/auth/signup", json={
        "email": "  Jane@Example.com ", "password": "secret123", "name": "Jane",
    })
    assert resp.status_code == 201
    body = resp.get_json()
    assert body["access_token"]
    assert body["user"]["email"] == "jane@example.com"
    assert body["user"]["name"] == "Jane"
    assert body["user"]["is_new_user"] is True
    assert isinstance(body["user"]["id"], str)


def test_signup_stores_hashed_password(app, make_user):
    make_user(email="hash@example.com", password="plaintext-pw")
    with app.app_context():
        user = User.query.filter_by(email="hash@example.com").one()
        assert user.password_hash != "plaintext-pw"
        assert user.check_password("plaintext-pw")
        assert not user.check_password("wrong")


def test_signup_duplicate_email(client, make_user):
    make_user(email="dup@example.com")
    resp = client.post("/api/auth/signup", json={
        "email": "DUP@example.com", "password": "another1", "name": "Again",
    })
    assert resp.status_code == 409
    body = resp.get_json()
    assert body["error"] == "duplicate_email"
    assert body["message"] == "Email already registered"
    assert "access_token" not in body


def test_signup_with_demo_email_is_duplicate(client):
    resp = client.post("/api/auth/signup", json={
        "email": "admin@realestate.com", "password": "whatever", "name": "Admin",
    })
    assert resp.status_code == 409


def test_signup_missing_fields(client):
    resp = client.post("/api/auth/signup", json={"email": "a@example.com", "password": "", "name": "A"})
    assert resp.status_code == 400
    assert resp.get_json()["message"] == "password is required"


def test_signup_rejects_malformed_email(client):
    resp = client.post("/api/auth/signup", json={"email": "not-an-email", "password": "pw", "name": "A"})
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "validation_error"


def test_login(client, make_user):
    make_user(email="login@example.com", password="secret123")
    resp = client.post("/api/auth/login", json={"email": "Login@example.com", "password": "secret123"})
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["access_token"]
    assert body["user"]["email"] == "login@example.com"
    assert body["user"]["is_new_user"] is False


def test_login_accepts_username_key(client, make_user):
    make_user(email="user@example.com", password="secret123")
    resp = client.post("/api/auth/login", json={"username": "user@example.com", "password": "secret123"})
    assert resp.status_code == 200


def test_login_wrong_password(client, make_user):
    make_user(email="login@example.com", password="secret123")
    resp = client.post("/api/auth/login", json={"email": "login@example.com", "password": "nope"})
    assert resp.status_code == 401
    body = resp.get_json()
    assert body["error"] == "invalid_credentials"
    assert body["message"] == "Invalid email or password"


def test_login_unknown_email(client):
    resp = client.post("/api/auth/login", json={"email": "ghost@example.com", "password": "x"})
    assert resp.status_code == 401


def test_login_requires_both_fields(client):
    resp = client.post("/api/auth/login", json={"email": "someone@example.com"})
    assert resp.status_code == 400


def test_demo_login_materializes_one_user(app, client):
    first = client.post("/api/auth/login", json={"email": "admin@realestate.com", "password": "admin123"})
    second = client.post("/api/auth/login", json={"email": "admin@realestate.com", "password": "admin123"})
    assert first.status_code == 200
    assert second.status_code == 200
    assert first.get_json()["user"]["id"] == second.get_json()["user"]["id"]
    with app.app_context():
        assert User.query.filter_by(email="admin@realestate.com").count() == 1


def test_demo_login_wrong_password(client):
    resp = client.post("/api/auth/login", json={"email": "admin@realestate.com", "password": "admin"})
    assert resp.status_code == 401


def test_demo_login_disabled(app, client):
    app.config["DEMO_ENABLED"] = False
    resp = client.post("/api/auth/login", json={"email": "admin@realestate.com", "password": "admin123"})
    assert resp.status_code == 401


def test_me(client, auth_headers):
    resp = client.get("/api/auth/me", headers=auth_headers)
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["email"] == "owner@example.com"
    assert body["is_new_user"] is True


def test_protected_route_without_token(client):
    resp = client.get("/api/properties")
    assert resp.status_code == 401
    assert resp.get_json()["error"] == "unauthorized"


def test_logout_revokes_token(client, auth_headers):
    resp = client.post("/api/auth/logout", headers=auth_headers)
    assert resp.status_code == 200

    resp = client.get("/api/auth/me", headers=auth_headers)
    assert resp.status_code == 401
    assert resp.get_json()["message"] == "Token has been revoked"


def test_logout_keeps_other_sessions(client, make_user):
    make_user(email="multi@example.com", password="secret123")
    tokens = [
        client.post("/api/auth/login", json={"email": "multi@example.com", "password": "secret123"})
        .get_json()["access_token"]
        for _ in range(2)
    ]
    client.post("/api/auth/logout", headers={"Authorization": f"Bearer {tokens[0]}"})
    resp = client.get("/api/auth/me", headers={"Authorization": f"Bearer {tokens[1]}"})
    assert resp.status_code == 200


def test_me_for_deleted_user(app, client, auth_headers):
    with app.app_context():
        db.session.delete(User.query.filter_by(email="owner@example.com").one())
        db.session.commit()
    resp = client.get("/api/auth/me", headers=auth_headers)
    assert resp.status_code == 404

@pytest.mark.parametrize("payload, message", [
    ({"email": 123, "password": "secret123", "name": "A"}, "email must be a string"),
    ({"email": "a@example.com", "password": 123456, "name": "A"}, "password must be a string"),
    ({"email": "a@example.com", "password": "secret123", "name": {"first": "A"}}, "name must be a string"),
    ({"email": "a@example.com", "password": "secret123", "name": "n" * 256}, "name must be at most 255 characters"),
])
def test_signup_rejects_non_text_values(client, payload, message):
    resp = client.post("/api/auth/signup", json=payload)
    assert resp.status_code == 400
    assert resp.get_json()["message"] == message


@pytest.mark.parametrize("payload", [
    {"email": 123, "password": "secret123"},
    {"email": "owner@example.com", "password": 123456},
])
def test_login_rejects_non_text_values(client, payload):
    resp = client.post("/api/auth/login", json=payload)
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "validation_error"
