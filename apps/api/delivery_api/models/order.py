"""
Order models: an order placed by a customer and its line items.
"""
import uuid
from sqlalchemy import Column, String, Text, Integer, Enum, ForeignKey, Uuid
from sqlalchemy.orm import relationship

from delivery_api.db.base import Base
from delivery_api.models.enums import OrderStatus, OrderType
from delivery_api.models.mixins import AuditMixin


class Order(AuditMixin, Base):
    __tablename__ = "orders"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    customer_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    restaurant_id = Column(Uuid, ForeignKey("restaurants.id"), nullable=False, index=True)
    order_type = Column(Enum(OrderType, name="order_type"), nullable=False, default=OrderType.DELIVERY)
    status = Column(Enum(OrderStatus, name="order_status"), nullable=False, default=OrderStatus.PENDING)
    delivery_address = Column(String(255))
    request = Column(Text)
    total_price = Column(Integer, nullable=False, default=0)

    customer = relationship("User", back_populates="orders")
    restaurant = relationship("Restaurant", back_populates="orders")
    items = relationship("OrderItem", back_populates="order", cascade="all, delete-orphan")
    payment = relationship("Payment", back_populates="order", uselist=False)
    review = relationship("Review", back_populates="order", uselist=False)


class OrderItem(Base):
    """A menu line within an order. Unit price is captured at order time."""
    __tablename__ = "order_items"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    order_id = Column(Uuid, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    menu_id = Column(Uuid, ForeignKey("menus.id"), nullable=False)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Integer, nullable=False)

    order = relationship("Order", back_populates="items")
    menu = relationship("Menu")
