# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# Fixtures shared by every test module:
# - app: a fresh application on an in-memory SQLite database per test
# - client: Flask test client bound to that app
# - ctx: an application context for tests that call services directly
# =============================================================================

import os

os.environ.setdefault("FLASK_CONFIG", "testing")
os.environ.setdefault("JWT_SECRET_KEY", "test-jwt-secret")

import pytest

from snackspot import create_app
from snackspot.extensions import db


@pytest.fixture
def app():
    """Application built with TestingConfig and an empty schema."""
    app = create_app("testing")
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
    """Push an app context for service-level tests."""
    with app.app_context():
        yield app
