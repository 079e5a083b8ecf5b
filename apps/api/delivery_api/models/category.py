import uuid
from sqlalchemy import Column, String, Uuid
from sqlalchemy.orm import relationship

from delivery_api.db.base import Base
from delivery_api.models.mixins import AuditMixin


class Category(AuditMixin, Base):
    """Cuisine grouping for restaurants (korean, pizza, chicken, ...)."""
    __tablename__ = "categories"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(100), nullable=False, unique=True)

    restaurants = relationship("Restaurant", back_populates="category")
