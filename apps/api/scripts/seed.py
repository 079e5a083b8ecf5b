"""
Seed script for the delivery development database.

Creates one account per role, a few categories, restaurants and menus for
local development. Every account uses the password ``password123``.

Usage:
    cd apps/api
    python scripts/seed.py
"""
from delivery_api.core.security import hash_password
from delivery_api.db.base import Base
from delivery_api.db.session import SessionLocal, engine
from delivery_api.models import Category, Menu, Restaurant, User
from delivery_api.models.enums import UserRole

SEED_PASSWORD = "password123"

CATALOG = {
    "Pizza": {
        "Pizza Napoli": [("Margherita", 12000), ("Quattro Formaggi", 15000)],
        "Slice of Heaven": [("Pepperoni Slice", 4000), ("Garlic Knots", 3500)],
    },
    "Korean": {
        "Seoul Kitchen": [("Bibimbap", 11000), ("Kimchi Jjigae", 9500)],
    },
    "Burgers": {
        "Burger Barn": [("Classic Burger", 8900), ("Cheese Fries", 4500)],
    },
}


def seed_database():
    """Seed the database with test data."""
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()

    try:
        # Check if data already exists
        if session.query(User).count() > 0:
            print("Database already seeded. Skipping...")
            return

        print("Seeding database...")

        hashed = hash_password(SEED_PASSWORD)
        users = {
            role: User(username=f"{role.value.lower()}_demo", hashed_password=hashed, address="1 Demo St", role=role)
            for role in (UserRole.CUSTOMER, UserRole.OWNER, UserRole.MANAGER, UserRole.MASTER)
        }
        session.add_all(users.values())
        session.flush()

        restaurant_count = 0
        for category_name, restaurants in CATALOG.items():
            category = Category(name=category_name, created_by="seed")
            session.add(category)
            session.flush()

            for restaurant_name, menus in restaurants.items():
                restaurant = Restaurant(
                    name=restaurant_name,
                    category_id=category.id,
                    owner_id=users[UserRole.OWNER].id,
                    address="100 Food Court",
                    created_by="seed",
                )
                session.add(restaurant)
                session.flush()
                restaurant_count += 1

                for menu_name, price in menus:
                    session.add(Menu(restaurant_id=restaurant.id, name=menu_name, price=price, created_by="seed"))

        session.commit()

        print(f"Created {len(users)} users, {len(CATALOG)} categories, {restaurant_count} restaurants")
        for user in users.values():
            print(f"  {user.username} ({user.role.value}) / {SEED_PASSWORD}")

    except Exception as e:
        session.rollback()
        print(f"Error seeding database: {e}")
        raise
    finally:
        session.close()


if __name__ == "__main__":
    seed_database()
