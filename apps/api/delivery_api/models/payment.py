import uuid
from sqlalchemy import Column, Integer, Enum, ForeignKey, Uuid
from sqlalchemy.orm import relationship

from delivery_api.db.base import Base
from delivery_api.models.enums import PaymentMethod, PaymentStatus
from delivery_api.models.mixins import AuditMixin


class Payment(AuditMixin, Base):
    __tablename__ = "payments"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    order_id = Column(Uuid, ForeignKey("orders.id"), nullable=False, unique=True)
    amount = Column(Integer, nullable=False)
    method = Column(Enum(PaymentMethod, name="payment_method"), nullable=False, default=PaymentMethod.CARD)
    status = Column(Enum(PaymentStatus, name="payment_status"), nullable=False, default=PaymentStatus.COMPLETED)

    order = relationship("Order", back_populates="payment")
