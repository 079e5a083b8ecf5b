"""
Data access layer: one repository per aggregate.
"""
from delivery_api.repositories.category import CategoryRepository
from delivery_api.repositories.menu import MenuRepository
from delivery_api.repositories.order import OrderRepository
from delivery_api.repositories.pagination import Page, PageRequest
from delivery_api.repositories.payment import PaymentRepository
from delivery_api.repositories.restaurant import RestaurantRepository
from delivery_api.repositories.review import ReviewRepository
from delivery_api.repositories.user import UserRepository

__all__ = [
    "CategoryRepository",
    "MenuRepository",
    "OrderRepository",
    "Page",
    "PageRequest",
    "PaymentRepository",
    "RestaurantRepository",
    "ReviewRepository",
    "UserRepository",
]
