"""
Tests for menu endpoints.
"""
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from delivery_api.models.menu import Menu
from delivery_api.models.restaurant import Restaurant
from delivery_api.models.user import User


class TestReadMenus:
    """Public menu reads."""

    def test_list_restaurant_menus(self, client: TestClient, restaurant: Restaurant, menus: list[Menu]):
        response = client.get(f"/api/menus/{restaurant.id}")

        assert response.status_code == 200
        assert [m["name"] for m in response.json()["items"]] == ["Margherita", "Pepperoni"]

    def test_hidden_menu_is_excluded(self, client: TestClient, make_menu, restaurant: Restaurant, menus):
        secret = make_menu(restaurant, "Staff Special", 5000, is_hidden=True)

        listing = client.get(f"/api/menus/{restaurant.id}").json()

        assert listing["total"] == 2
        assert client.get(f"/api/menus/item/{secret.id}").status_code == 404

    def test_menus_of_hidden_restaurant_are_excluded(
        self, client: TestClient, make_restaurant, make_menu, owner: User
    ):
        hidden = make_restaurant("Secret Kitchen", owner, is_hidden=True)
        menu = make_menu(hidden, "Mystery Box", 9000)

        assert client.get(f"/api/menus/{hidden.id}").status_code == 404
        assert client.get(f"/api/menus/item/{menu.id}").status_code == 404
        assert client.get("/api/menus").json()["total"] == 0

    def test_search_across_restaurants(self, client: TestClient, menus: list[Menu]):
        response = client.get("/api/menus", params={"search": "pepper"})

        assert [m["name"] for m in response.json()["items"]] == ["Pepperoni"]

    def test_get_single_menu(self, client: TestClient, menus: list[Menu]):
        response = client.get(f"/api/menus/item/{menus[0].id}")

        assert response.status_code == 200
        assert response.json()["price"] == 12000


class TestWriteMenus:
    """Menu writes follow restaurant ownership."""

    def test_owner_adds_menu(self, client: TestClient, login, owner: User, restaurant: Restaurant):
        response = client.post(
            "/api/menus",
            json={"restaurant_id": str(restaurant.id), "name": "Calzone", "price": 13000},
            headers=login(owner),
        )

        assert response.status_code == 201
        assert response.json()["name"] == "Calzone"

    def test_other_owner_cannot_add(self, client: TestClient, login, other_owner: User, restaurant: Restaurant):
        response = client.post(
            "/api/menus",
            json={"restaurant_id": str(restaurant.id), "name": "Calzone", "price": 13000},
            headers=login(other_owner),
        )

        assert response.status_code == 403

    def test_negative_price_rejected(self, client: TestClient, login, owner: User, restaurant: Restaurant):
        response = client.post(
            "/api/menus",
            json={"restaurant_id": str(restaurant.id), "name": "Freebie", "price": -1},
            headers=login(owner),
        )

        assert response.status_code == 422

    def test_partial_update(self, client: TestClient, login, owner: User, menus: list[Menu]):
        response = client.patch(
            f"/api/menus/{menus[0].id}",
            json={"price": 11000},
            headers=login(owner),
        )

        assert response.status_code == 200
        data = response.json()
        assert data["price"] == 11000
        assert data["name"] == "Margherita"

    def test_owner_can_hide_menu(self, client: TestClient, login, owner: User, menus: list[Menu]):
        response = client.patch(f"/api/menus/{menus[0].id}", json={"is_hidden": True}, headers=login(owner))

        assert response.status_code == 200
        assert client.get(f"/api/menus/item/{menus[0].id}").status_code == 404

    def test_manager_deletes_menu(self, client: TestClient, db: Session, login, manager: User, menus: list[Menu]):
        response = client.delete(f"/api/menus/{menus[1].id}", headers=login(manager))

        assert response.status_code == 204
        db.expire_all()
        assert db.get(Menu, menus[1].id).deleted_by == manager.username

    def test_customer_cannot_delete(self, client: TestClient, login, customer: User, menus: list[Menu]):
        response = client.delete(f"/api/menus/{menus[1].id}", headers=login(customer))

        assert response.status_code == 403
