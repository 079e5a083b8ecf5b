from uuid import UUID

from sqlalchemy import ColumnElement, select

from delivery_api.models.order import Order
from delivery_api.models.payment import Payment
from delivery_api.repositories.base import BaseRepository
from delivery_api.repositories.pagination import Page, PageRequest


class PaymentRepository(BaseRepository[Payment]):
    model = Payment

    def exists_for_order(self, order_id: UUID) -> bool:
        # Unique on order_id: a canceled payment still occupies the slot
        stmt = select(Payment.id).where(Payment.order_id == order_id)
        return self.db.execute(stmt).first() is not None

    def find_payments(
        self,
        page_request: PageRequest,
        customer_id: UUID | None = None,
        restaurant_ids: list[UUID] | None = None,
    ) -> Page[Payment]:
        predicates: list[ColumnElement[bool]] = [self.not_deleted()]
        if customer_id is not None:
            predicates.append(Order.customer_id == customer_id)
        if restaurant_ids is not None:
            predicates.append(Order.restaurant_id.in_(restaurant_ids))
        return self.find_page(
            predicates,
            page_request,
            order_by=(Payment.created_at.desc(), Payment.id.asc()),
            base=select(Payment).join(Order, Payment.order_id == Order.id),
        )
