"""Tests for user profile endpoints."""

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from marketplace.models.user_role import Buyer, Seller, UserCategory


def _auth(test_user: dict) -> dict:
    return {"Authorization": f"Bearer {test_user['token']}"}


class TestRoles:
    """Tests for buyer/seller registration."""

    def test_create_buyer_and_seller(self, client: TestClient, test_user: dict, db_session: Session):
        response = client.post(
            "/api/v1/users/create",
            json={"is_buyer": True, "is_seller": True},
            headers=_auth(test_user),
        )
        assert response.status_code == 200
        assert response.text == "User roles updated successfully"
        assert db_session.query(Buyer).filter(Buyer.user_id == test_user["user_id"]).count() == 1
        assert db_session.query(Seller).filter(Seller.user_id == test_user["user_id"]).count() == 1

    def test_create_is_idempotent(self, client: TestClient, test_user: dict, db_session: Session):
        """Repeating the call replaces the role row instead of duplicating it."""
        for _ in range(2):
            response = client.post(
                "/api/v1/users/create",
                json={"is_buyer": True, "is_seller": False},
                headers=_auth(test_user),
            )
            assert response.status_code == 200
        assert db_session.query(Buyer).count() == 1
        assert db_session.query(Seller).count() == 0

    def test_create_requires_auth(self, client: TestClient):
        response = client.post("/api/v1/users/create", json={"is_buyer": True, "is_seller": False})
        assert response.status_code == 401


class TestCategories:
    """Tests for followed categories."""

    def _categories(self, db_session: Session, test_user: dict) -> set[int]:
        rows = db_session.query(UserCategory).filter(UserCategory.user_id == test_user["user_id"]).all()
        return {r.category_id for r in rows}

    def test_set_categories(self, client: TestClient, test_user: dict, db_session: Session):
        response = client.post(
            "/api/v1/users/categories",
            json={"categories": [{"category_id": 1}, {"category_id": 3}, {"category_id": 3}]},
            headers=_auth(test_user),
        )
        assert response.status_code == 200
        assert response.text == "User categories updated successfully"
        assert self._categories(db_session, test_user) == {1, 3}

    def test_replace_categories(self, client: TestClient, test_user: dict, db_session: Session):
        """A second call replaces the earlier set."""
        client.post("/api/v1/users/categories", json={"categories": [{"category_id": 1}]}, headers=_auth(test_user))
        client.post("/api/v1/users/categories", json={"categories": [{"category_id": 2}]}, headers=_auth(test_user))
        assert self._categories(db_session, test_user) == {2}

    def test_clear_categories(self, client: TestClient, test_user: dict, db_session: Session):
        client.post("/api/v1/users/categories", json={"categories": [{"category_id": 1}]}, headers=_auth(test_user))
        response = client.post("/api/v1/users/categories", json={"categories": []}, headers=_auth(test_user))
        assert response.status_code == 200
        assert response.text == "User categories cleared"
        assert self._categories(db_session, test_user) == set()

    def test_categories_requires_auth(self, client: TestClient):
        response = client.post("/api/v1/users/categories", json={"categories": []})
        assert response.status_code == 401
