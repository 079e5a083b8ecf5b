import uuid
from sqlalchemy import Column, String, Boolean, ForeignKey, Uuid
from sqlalchemy.orm import relationship

from delivery_api.db.base import Base
from delivery_api.models.mixins import AuditMixin


class Restaurant(AuditMixin, Base):
    __tablename__ = "restaurants"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False, index=True)
    category_id = Column(Uuid, ForeignKey("categories.id"), nullable=False, index=True)
    owner_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    address = Column(String(255), nullable=True)
    # Hidden restaurants are invisible to every lookup, like deleted ones
    is_hidden = Column(Boolean, nullable=False, default=False)

    category = relationship("Category", back_populates="restaurants")
    owner = relationship("User", back_populates="restaurants")
    menus = relationship("Menu", back_populates="restaurant")
    orders = relationship("Order", back_populates="restaurant")
