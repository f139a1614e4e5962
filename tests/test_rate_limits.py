# =============================================================================
# tests/test_rate_limits.py - Per-route request limits
# =============================================================================
# TestingConfig switches limiting off; the limited_app fixture turns it back
# on so the windows configured in RATE_LIMITS apply.
# =============================================================================

import pytest

from snackspot import create_app
from snackspot.config import TestingConfig
from snackspot.extensions import db
from snackspot.models import User
from snackspot.utils.tokens import rate_limit_key
from tests.factories import auth_headers, make_category, make_store, make_user


def _registration(n):
    return {"username": f"snacker{n}", "email": f"snacker{n}@example.com", "password": "snackspot123"}


@pytest.fixture
def limited_app(monkeypatch):
    monkeypatch.setattr(TestingConfig, "RATELIMIT_ENABLED", True)
    app = create_app("testing")
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def limited_client(limited_app):
    return limited_app.test_client()


class TestRateLimitKey:
    """Tests for rate_limit_key."""

    def test_anonymous_requests_keyed_by_address(self, app):
        with app.test_request_context(environ_base={"REMOTE_ADDR": "203.0.113.9"}):
            assert rate_limit_key() == "ip:203.0.113.9"

    def test_authenticated_requests_keyed_by_user(self, app):
        with app.app_context():
            user = make_user()
            user_id = user.id
            headers = auth_headers(user)

        with app.test_request_context(headers=headers):
            assert rate_limit_key() == f"user:{user_id}"

    def test_invalid_token_falls_back_to_address(self, app):
        with app.test_request_context(headers={"Authorization": "Bearer not-a-jwt"},
                                      environ_base={"REMOTE_ADDR": "203.0.113.9"}):
            assert rate_limit_key() == "ip:203.0.113.9"


class TestRateLimits:
    """Limits enforced over HTTP."""

    def test_register_limit_exceeded(self, limited_client):
        for n in range(3):
            assert limited_client.post("/api/v1/auth/register", json=_registration(n)).status_code == 201

        response = limited_client.post("/api/v1/auth/register", json=_registration(3))

        assert response.status_code == 429
        body = response.get_json()
        assert body["statusCode"] == 429
        assert body["message"] == "Rate limit exceeded"
        assert body["path"] == "/api/v1/auth/register"
        assert "limit" in body["details"]
        assert "Retry-After" in response.headers
        assert response.headers["X-Content-Type-Options"] == "nosniff"

    def test_rejected_request_has_no_side_effects(self, limited_app, limited_client):
        for n in range(4):
            limited_client.post("/api/v1/auth/register", json=_registration(n))

        with limited_app.app_context():
            assert User.query.filter_by(username="snacker3").first() is None

    def test_mutation_limits_are_per_user(self, limited_app, limited_client):
        limited_app.config["RATE_LIMITS"] = {**limited_app.config["RATE_LIMITS"], "snack_create": "1 per minute"}
        with limited_app.app_context():
            first = make_user()
            second = make_user(username="second")
            store = make_store(first)
            category = make_category()
            payload = {"name": "Pie", "categoryId": category.id, "storeId": store.id}
            first_headers = auth_headers(first)
            second_headers = auth_headers(second)

        assert limited_client.post("/api/v1/snacks", json=payload, headers=first_headers).status_code == 201
        assert limited_client.post("/api/v1/snacks", json=payload, headers=first_headers).status_code == 429
        assert limited_client.post("/api/v1/snacks", json=payload, headers=second_headers).status_code == 201

    def test_disabled_in_testing_config(self, client):
        for n in range(5):
            assert client.post("/api/v1/auth/register", json=_registration(n)).status_code == 201
