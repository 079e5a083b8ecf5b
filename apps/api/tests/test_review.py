"""
Tests for review endpoints.
"""
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from delivery_api.models.restaurant import Restaurant
from delivery_api.models.user import User


def _completed_order(client: TestClient, login, place_order, customer, restaurant, menus) -> dict:
    order = place_order(customer, restaurant, [(menus[0], 1)])
    response = client.post(
        f"/api/payment/{order['id']}",
        json={"amount": order["total_price"]},
        headers=login(customer),
    )
    assert response.status_code == 201, response.text
    return order


class TestCreateReview:
    """Tests for POST /api/review."""

    def test_review_completed_order(
        self, client: TestClient, login, place_order, customer: User, restaurant: Restaurant, menus
    ):
        order = _completed_order(client, login, place_order, customer, restaurant, menus)

        response = client.post(
            "/api/review",
            json={"order_id": order["id"], "rating": 4, "comment": "Crispy crust"},
            headers=login(customer),
        )

        assert response.status_code == 201
        data = response.json()
        assert data["restaurant_id"] == str(restaurant.id)
        assert client.get(f"/api/restaurants/{restaurant.id}").json()["average_rating"] == 4.0

    def test_pending_order_cannot_be_reviewed(
        self, client: TestClient, login, place_order, customer: User, restaurant: Restaurant, menus
    ):
        order = place_order(customer, restaurant, [(menus[0], 1)])

        response = client.post(
            "/api/review", json={"order_id": order["id"], "rating": 5}, headers=login(customer)
        )

        assert response.status_code == 400

    def test_one_review_per_order(
        self, client: TestClient, login, place_order, customer: User, restaurant: Restaurant, menus
    ):
        order = _completed_order(client, login, place_order, customer, restaurant, menus)
        headers = login(customer)
        client.post("/api/review", json={"order_id": order["id"], "rating": 5}, headers=headers)

        response = client.post("/api/review", json={"order_id": order["id"], "rating": 1}, headers=headers)

        assert response.status_code == 409

    def test_rating_out_of_range(
        self, client: TestClient, login, place_order, customer: User, restaurant: Restaurant, menus
    ):
        order = _completed_order(client, login, place_order, customer, restaurant, menus)

        response = client.post("/api/review", json={"order_id": order["id"], "rating": 6}, headers=login(customer))

        assert response.status_code == 422

    def test_owner_cannot_review(
        self, client: TestClient, login, place_order, customer: User, owner: User, restaurant: Restaurant, menus
    ):
        order = _completed_order(client, login, place_order, customer, restaurant, menus)

        response = client.post("/api/review", json={"order_id": order["id"], "rating": 5}, headers=login(owner))

        assert response.status_code == 403


class TestReadAndDeleteReview:

    def _review(self, client, login, place_order, customer, restaurant, menus) -> dict:
        order = _completed_order(client, login, place_order, customer, restaurant, menus)
        response = client.post(
            "/api/review", json={"order_id": order["id"], "rating": 3}, headers=login(customer)
        )
        return response.json()

    def test_reviews_are_public(
        self, client: TestClient, login, place_order, customer: User, restaurant: Restaurant, menus
    ):
        review = self._review(client, login, place_order, customer, restaurant, menus)

        listing = client.get("/api/review", params={"restaurant_id": str(restaurant.id)})
        single = client.get(f"/api/review/{review['id']}")

        assert listing.status_code == 200
        assert listing.json()["total"] == 1
        assert single.json()["rating"] == 3

    def test_author_deletes_review(
        self, client: TestClient, login, place_order, customer: User, restaurant: Restaurant, menus
    ):
        review = self._review(client, login, place_order, customer, restaurant, menus)

        response = client.patch(f"/api/review/{review['id']}", headers=login(customer))

        assert response.status_code == 200
        assert client.get(f"/api/review/{review['id']}").status_code == 404
        assert client.get(f"/api/restaurants/{restaurant.id}").json()["average_rating"] is None

    def test_stranger_cannot_delete(
        self, client: TestClient, login, place_order, customer: User, other_customer: User,
        restaurant: Restaurant, menus,
    ):
        review = self._review(client, login, place_order, customer, restaurant, menus)

        response = client.patch(f"/api/review/{review['id']}", headers=login(other_customer))

        assert response.status_code == 403

    def test_manager_deletes_any_review(
        self, client: TestClient, login, place_order, customer: User, manager: User,
        restaurant: Restaurant, menus,
    ):
        review = self._review(client, login, place_order, customer, restaurant, menus)

        response = client.patch(f"/api/review/{review['id']}", headers=login(manager))

        assert response.status_code == 200


class TestReviewVisibility:
    """Reviews of hidden or deleted restaurants are not exposed."""

    def test_hidden_restaurant_reviews_are_excluded(
        self, client: TestClient, db: Session, login, place_order, customer: User,
        restaurant: Restaurant, menus,
    ):
        order = _completed_order(client, login, place_order, customer, restaurant, menus)
        review = client.post(
            "/api/review", json={"order_id": order["id"], "rating": 4}, headers=login(customer)
        ).json()
        restaurant.is_hidden = True
        db.commit()

        assert client.get("/api/review").json()["total"] == 0
        assert client.get(f"/api/review/{review['id']}").status_code == 404

    def test_deleted_restaurant_reviews_are_excluded(
        self, client: TestClient, db: Session, login, place_order, customer: User,
        restaurant: Restaurant, menus,
    ):
        order = _completed_order(client, login, place_order, customer, restaurant, menus)
        client.post("/api/review", json={"order_id": order["id"], "rating": 2}, headers=login(customer))
        restaurant.mark_as_deleted("manager1")
        db.commit()

        assert client.get("/api/review").json()["items"] == []
