"""Shared test fixtures."""

import json

import pytest

from subtracker import create_app
from subtracker.extensions import db as _db

USER_ID = "60601fee-2bf1-4721-ae6f-7636e79a0cba"
OTHER_USER_ID = "7d9f4b3e-8a52-4c1d-9e0f-2b6a1c3d5e7f"


@pytest.fixture(scope="session")
def app():
    """Create an application instance configured for testing."""
    app = create_app("testing")
    with app.app_context():
        _db.create_all()
        yield app
        _db.drop_all()


@pytest.fixture(autouse=True)
def db_session(app):
    """Ensure a clean database state for each test.

    Re-creates all tables before each test to guarantee isolation.
    """
    with app.app_context():
        _db.create_all()
        yield _db.session
        _db.session.rollback()
        _db.drop_all()


@pytest.fixture()
def client(app):
    """Flask test client."""
    return app.test_client()


def send_json(client, method, url, data):
    """Send a JSON body and return ``(status_code, parsed_json)``."""
    resp = client.open(url, method=method, data=json.dumps(data), content_type="application/json")
    return resp.status_code, resp.get_json()
