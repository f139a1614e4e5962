# =============================================================================
# tests/test_catalog.py - Stores, categories and snack creation
# =============================================================================

import pytest

from snackspot.errors import ValidationFailed
from snackspot.extensions import db
from snackspot.models import Category, Store, User
from snackspot.services import category_service, snack_service, store_service
from tests.factories import (
    AUCKLAND_LAT,
    AUCKLAND_LNG,
    auth_headers,
    make_category,
    make_snack,
    make_store,
    make_user,
)


class TestStoreService:
    """Tests for store_service."""

    def test_create_is_idempotent_on_name_and_coordinates(self, ctx):
        user = make_user()
        first, created = store_service.create_store(user, "Corner Dairy", AUCKLAND_LAT, AUCKLAND_LNG)
        again, created_again = store_service.create_store(
            user, "  corner DAIRY ", AUCKLAND_LAT, AUCKLAND_LNG
        )

        assert created is True
        assert created_again is False
        assert again.id == first.id
        assert Store.query.count() == 1

    def test_same_name_elsewhere_is_a_new_store(self, ctx):
        user = make_user()
        store_service.create_store(user, "Corner Dairy", AUCKLAND_LAT, AUCKLAND_LNG)
        _, created = store_service.create_store(user, "Corner Dairy", AUCKLAND_LAT + 0.01, AUCKLAND_LNG)
        assert created is True
        assert Store.query.count() == 2

    @pytest.mark.parametrize("lat,lng", [(-91, 0), (0, 181), (None, 0)])
    def test_invalid_coordinates(self, ctx, lat, lng):
        with pytest.raises(ValidationFailed):
            store_service.create_store(make_user(), "Nowhere", lat, lng)

    def test_delete_refused_with_active_snacks(self, ctx):
        owner = make_user()
        store = make_store(owner)
        snack = make_snack(owner, store, make_category())

        with pytest.raises(ValidationFailed, match="active snacks"):
            store_service.delete_store(owner, store.id)

        snack_service.delete_snack(owner, snack.id)
        store_service.delete_store(owner, store.id)
        assert db.session.get(Store, store.id).is_deleted is True

    def test_list_search_and_pagination(self, ctx):
        owner = make_user()
        for name in ("Bakehouse", "Dairy One", "Dairy Two", "Fish Shop"):
            make_store(owner, name=name, address=f"{name} Road")

        page = store_service.list_stores(search="dairy", page=1, page_size=1)

        assert page.total == 2
        assert [s.name for s in page.items] == ["Dairy One"]
        assert page.pages == 2


class TestCategoryService:
    """Tests for category_service."""

    def test_create_collapses_whitespace(self, ctx):
        category, created = category_service.create_category(make_user(), "  Late   Night  Eats ")
        assert created is True
        assert category.name == "Late Night Eats"
        assert category.slug == "late-night-eats"

    def test_create_is_idempotent_ignoring_case(self, ctx):
        user = make_user()
        first, _ = category_service.create_category(user, "Drinks")
        second, created = category_service.create_category(user, "DRINKS")
        assert created is False
        assert second.id == first.id
        assert Category.query.count() == 1

    def test_blank_name_rejected(self, ctx):
        with pytest.raises(ValidationFailed):
            category_service.create_category(make_user(), "   ")

    def test_default_categories_seeded_once(self, ctx):
        assert category_service.ensure_default_categories() == 5
        assert category_service.ensure_default_categories() == 0
        names = [c.name for c in category_service.list_categories()]
        assert "Sweet Snacks" in names
        assert names == sorted(names)


class TestSnackService:
    """Snack creation rules."""

    def test_create_starts_with_zero_aggregate(self, ctx):
        user = make_user()
        snack = snack_service.create_snack(
            user, "Hokey Pokey", make_category().id, make_store(user).id
        )
        assert snack.total_ratings == 0
        assert float(snack.average_rating) == 0.0
        assert snack.owner_id == user.id

    def test_create_awards_experience(self, ctx):
        user = make_user()
        for i in range(10):
            snack_service.create_snack(user, f"Snack {i}", make_category(f"Cat {i}").id,
                                       make_store(user, name=f"Store {i}").id)
        user = db.session.get(User, user.id)
        assert user.experience_points == 100
        assert user.level == 2

    def test_unknown_category_or_store(self, ctx):
        user = make_user()
        store = make_store(user)
        category = make_category()
        with pytest.raises(ValidationFailed, match="category"):
            snack_service.create_snack(user, "Pie", 999, store.id)
        with pytest.raises(ValidationFailed, match="store"):
            snack_service.create_snack(user, "Pie", category.id, 999)

    def test_deleted_store_rejected(self, ctx):
        user = make_user()
        store = make_store(user)
        store.is_deleted = True
        db.session.commit()
        with pytest.raises(ValidationFailed):
            snack_service.create_snack(user, "Pie", make_category().id, store.id)


class TestCatalogEndpoints:
    """HTTP surface for stores, categories and snacks."""

    def _user(self, app):
        with app.app_context():
            return auth_headers(make_user())

    def test_store_create_then_duplicate(self, app, client):
        headers = self._user(app)
        payload = {"name": "Queen Street Dairy", "address": "210 Queen Street",
                   "latitude": AUCKLAND_LAT, "longitude": AUCKLAND_LNG}

        first = client.post("/api/v1/stores", json=payload, headers=headers)
        second = client.post("/api/v1/stores", json=payload, headers=headers)

        assert first.status_code == 201
        assert second.status_code == 200
        assert first.get_json()["id"] == second.get_json()["id"]
        assert first.get_json()["latitude"] == pytest.approx(AUCKLAND_LAT)

    def test_store_missing_latitude(self, app, client):
        headers = self._user(app)
        response = client.post("/api/v1/stores", json={"name": "X", "longitude": 174.0},
                               headers=headers)
        assert response.status_code == 400
        assert "latitude" in response.get_json()["details"]

    def test_store_list_and_detail(self, app, client):
        with app.app_context():
            owner = make_user()
            store = make_store(owner, name="Britomart Market")
            make_snack(owner, store, make_category())
            store_id = store.id

        listing = client.get("/api/v1/stores").get_json()
        detail = client.get(f"/api/v1/stores/{store_id}").get_json()

        assert listing["totalCount"] == 1
        assert listing["items"][0]["name"] == "Britomart Market"
        assert detail["snackCount"] == 1

    def test_unknown_store(self, client):
        assert client.get("/api/v1/stores/999").status_code == 404

    def test_category_create_then_duplicate(self, app, client):
        headers = self._user(app)

        first = client.post("/api/v1/categories", json={"name": "Pies"}, headers=headers)
        second = client.post("/api/v1/categories", json={"name": "pies"}, headers=headers)

        assert first.status_code == 201
        assert second.status_code == 200
        assert second.get_json()["id"] == first.get_json()["id"]
        assert [c["name"] for c in client.get("/api/v1/categories").get_json()] == ["Pies"]

    def test_category_requires_authentication(self, client):
        assert client.post("/api/v1/categories", json={"name": "Pies"}).status_code == 401

    def test_snack_create(self, app, client):
        with app.app_context():
            user = make_user()
            category_id = make_category().id
            store_id = make_store(user).id
            headers = auth_headers(user)

        response = client.post(
            "/api/v1/snacks",
            json={"name": "Fish & Chips", "categoryId": category_id, "storeId": store_id},
            headers=headers,
        )

        assert response.status_code == 201
        body = response.get_json()
        assert body["name"] == "Fish & Chips"
        assert body["totalRatings"] == 0
        assert body["dataSource"] == "user"

    def test_snack_create_missing_fields(self, app, client):
        headers = self._user(app)
        response = client.post("/api/v1/snacks", json={"name": "Pie"}, headers=headers)
        assert response.status_code == 400
        details = response.get_json()["details"]
        assert "category_id" in details
        assert "store_id" in details

    def test_snack_create_invalid_category(self, app, client):
        with app.app_context():
            user = make_user()
            store_id = make_store(user).id
            headers = auth_headers(user)

        response = client.post(
            "/api/v1/snacks",
            json={"name": "Pie", "categoryId": 999, "storeId": store_id},
            headers=headers,
        )

        assert response.status_code == 400
        assert response.get_json()["message"] == "Invalid category ID"
