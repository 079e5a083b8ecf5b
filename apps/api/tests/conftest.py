"""
Test configuration and fixtures.
"""
import os
import pytest
from typing import Callable, Generator
from sqlalchemy.orm import Session
from fastapi.testclient import TestClient

# Configure an in-memory database before importing app
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET_KEY"] = "delivery-test-secret-key-0123456789abcdef"
os.environ["MANAGER_SIGNUP_TOKEN"] = "let-me-manage"
os.environ["REDIS_URL"] = ""

from delivery_api.main import app
from delivery_api.db.base import Base
from delivery_api.db.session import SessionLocal, engine, get_db
from delivery_api.models.category import Category
from delivery_api.models.enums import UserRole
from delivery_api.models.menu import Menu
from delivery_api.models.restaurant import Restaurant
from delivery_api.models.user import User
from delivery_api.core.security import hash_password

PASSWORD = "testpassword123"
# bcrypt is slow on purpose; hash once per run
PASSWORD_HASH = hash_password(PASSWORD)


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """Create a fresh schema and a database session for the test."""
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db: Session) -> Generator[TestClient, None, None]:
    """Create test client with database session override."""
    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db: Session) -> Callable[..., User]:
    """Factory inserting a user with the shared test password."""
    def _make(username: str, role: UserRole = UserRole.CUSTOMER, address: str | None = "1 Main St") -> User:
        user = User(username=username, hashed_password=PASSWORD_HASH, address=address, role=role)
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _make


@pytest.fixture
def customer(make_user) -> User:
    return make_user("customer1")


@pytest.fixture
def other_customer(make_user) -> User:
    return make_user("customer2")


@pytest.fixture
def owner(make_user) -> User:
    return make_user("owner1", UserRole.OWNER)


@pytest.fixture
def other_owner(make_user) -> User:
    return make_user("owner2", UserRole.OWNER)


@pytest.fixture
def manager(make_user) -> User:
    return make_user("manager1", UserRole.MANAGER)


@pytest.fixture
def master(make_user) -> User:
    return make_user("master1", UserRole.MASTER)


@pytest.fixture
def login(client: TestClient) -> Callable[[User], dict]:
    """Log a user in and return bearer auth headers."""
    def _login(user: User) -> dict:
        response = client.post(
            "/api/user/login",
            json={"username": user.username, "password": PASSWORD},
        )
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['access_token']}"}
    return _login


@pytest.fixture
def category(db: Session) -> Category:
    category = Category(name="Pizza & Pasta")
    db.add(category)
    db.commit()
    db.refresh(category)
    return category


@pytest.fixture
def make_restaurant(db: Session, category: Category) -> Callable[..., Restaurant]:
    def _make(name: str, owner: User, is_hidden: bool = False, category_id=None) -> Restaurant:
        restaurant = Restaurant(
            name=name,
            owner_id=owner.id,
            category_id=category_id or category.id,
            address="42 Market St",
            is_hidden=is_hidden,
        )
        db.add(restaurant)
        db.commit()
        db.refresh(restaurant)
        return restaurant
    return _make


@pytest.fixture
def restaurant(make_restaurant, owner: User) -> Restaurant:
    return make_restaurant("Pizza Palace", owner)


@pytest.fixture
def make_menu(db: Session) -> Callable[..., Menu]:
    def _make(restaurant: Restaurant, name: str, price: int, is_hidden: bool = False) -> Menu:
        menu = Menu(restaurant_id=restaurant.id, name=name, price=price, is_hidden=is_hidden)
        db.add(menu)
        db.commit()
        db.refresh(menu)
        return menu
    return _make


@pytest.fixture
def menus(make_menu, restaurant: Restaurant) -> list[Menu]:
    return [
        make_menu(restaurant, "Margherita", 12000),
        make_menu(restaurant, "Pepperoni", 14000),
    ]


@pytest.fixture
def place_order(client: TestClient, login) -> Callable[..., dict]:
    """Place an order through the API and return its JSON body."""
    def _place(user: User, restaurant: Restaurant, items: list[tuple[Menu, int]]) -> dict:
        response = client.post(
            "/api/order",
            json={
                "restaurant_id": str(restaurant.id),
                "order_type": "DELIVERY",
                "items": [{"menu_id": str(menu.id), "quantity": qty} for menu, qty in items],
            },
            headers=login(user),
        )
        assert response.status_code == 201, response.text
        return response.json()
    return _place
