"""
SQLAlchemy models for the delivery backend.
"""
# Core entities
from delivery_api.models.user import User
from delivery_api.models.category import Category
from delivery_api.models.restaurant import Restaurant
from delivery_api.models.menu import Menu

# Ordering
from delivery_api.models.order import Order, OrderItem
from delivery_api.models.payment import Payment
from delivery_api.models.review import Review

# Token Blacklist
from delivery_api.models.token_blacklist import TokenBlacklist


__all__ = [
    # Core
    "User",
    "Category",
    "Restaurant",
    "Menu",
    # Ordering
    "Order",
    "OrderItem",
    "Payment",
    "Review",
    # Token Blacklist
    "TokenBlacklist",
]
