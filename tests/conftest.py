"""Shared fixtures: an app on in-memory SQLite, a test client and signed-up users."""
import pytest

from propdesk import create_app
from propdesk.config import TestingConfig
from propdesk.extensions import db


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def ctx(app):
    """App context for calling the service layer directly."""
    with app.app_context():
        yield app
        db.session.remove()


def signup(client, email="owner@example.com", password="secret123", name="Owner"):
    resp = client.post("/api/auth/signup", json={"email": email, "password": password, "name": name})
    assert resp.status_code == 201, resp.get_json()
    body = resp.get_json()
    return {"Authorization": f"Bearer {body['access_token']}"}, body["user"]


@pytest.fixture
def auth_headers(client):
    headers, _ = signup(client)
    return headers


@pytest.fixture
def other_headers(client):
    headers, _ = signup(client, email="other@example.com", name="Other")
    return headers


@pytest.fixture
def create_property(client, auth_headers):
    """Factory posting a property as the default user; returns the JSON body."""
    def _create(headers=None, **fields):
        payload = {"name": "Unit 1", "rent": 150000, "property_type": "apartment", "status": "vacant"}
        payload.update(fields)
        resp = client.post("/api/properties", json=payload, headers=headers or auth_headers)
        assert resp.status_code == 201, resp.get_json()
        return resp.get_json()
    return _create


@pytest.fixture
def make_user(client):
    """Sign up another account; returns (headers, serialized user)."""
    def _make(**kwargs):
        return signup(client, **kwargs)
    return _make
