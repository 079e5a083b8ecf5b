import uuid
from sqlalchemy import Column, Integer, Text, ForeignKey, CheckConstraint, Uuid
from sqlalchemy.orm import relationship

from delivery_api.db.base import Base
from delivery_api.models.mixins import AuditMixin


class Review(AuditMixin, Base):
    """Customer rating of a completed order, 1 to 5."""
    __tablename__ = "reviews"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    order_id = Column(Uuid, ForeignKey("orders.id"), nullable=False, unique=True)
    rating = Column(Integer, nullable=False)
    comment = Column(Text)

    order = relationship("Order", back_populates="review")

    __table_args__ = (
        CheckConstraint("rating BETWEEN 1 AND 5", name="ck_reviews_rating_range"),
    )

    @property
    def restaurant_id(self):
        return self.order.restaurant_id if self.order is not None else None
