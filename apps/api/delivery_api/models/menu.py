"""
Menu model: dishes offered by a restaurant.
"""
import uuid
from sqlalchemy import Column, String, Text, Integer, Boolean, ForeignKey, Uuid
from sqlalchemy.orm import relationship

from delivery_api.db.base import Base
from delivery_api.models.mixins import AuditMixin


class Menu(AuditMixin, Base):
    """A dish sold by a restaurant. Prices are whole currency units."""
    __tablename__ = "menus"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    restaurant_id = Column(Uuid, ForeignKey("restaurants.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text)
    price = Column(Integer, nullable=False)
    is_hidden = Column(Boolean, nullable=False, default=False)

    restaurant = relationship("Restaurant", back_populates="menus")
