import uuid
from sqlalchemy import Column, String, Enum, Uuid
from sqlalchemy.orm import relationship

from delivery_api.db.base import Base
from delivery_api.models.enums import UserRole
from delivery_api.models.mixins import AuditMixin


class User(AuditMixin, Base):
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    username = Column(String(50), nullable=False, unique=True, index=True)
    hashed_password = Column(String, nullable=False)
    address = Column(String(255), nullable=True)
    role = Column(Enum(UserRole, name="user_role"), nullable=False, default=UserRole.CUSTOMER)

    restaurants = relationship("Restaurant", back_populates="owner")
    orders = relationship("Order", back_populates="customer")
