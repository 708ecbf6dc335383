"""
Pytest configuration and fixtures.
Each test gets a fresh application bound to an in-memory SQLite database.
"""

import pytest

from reservation_api.app import create_app
from reservation_api.config import TestConfig
from reservation_api.extensions import db


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_reservation(client):
    """POSTs a valid reservation, overriding any fields given, and returns its id."""

    def _make(path="/api/reservations/create", **overrides):
        payload = {
            "firstName": "Jane",
            "lastName": "Doe",
            "email": "jane.doe@example.com",
            "date": "2026-11-20T19:00:00Z",
            "seats": 2,
        }
        payload.update(overrides)
        payload = {k: v for k, v in payload.items() if v is not None}
        r = client.post(path, json=payload)
        assert r.status_code == 201, r.get_json()
        return r.get_json()["reservationId"]

    return _make


@pytest.fixture
def make_blacklist_entry(client):
    def _make(**fields):
        r = client.post("/api/blacklist/create", json=fields)
        assert r.status_code == 201, r.get_json()
        return r.get_json()["blacklistId"]

    return _make

