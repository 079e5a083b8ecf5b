from uuid import UUID

from sqlalchemy import ColumnElement

from delivery_api.models.enums import OrderStatus
from delivery_api.models.order import Order
from delivery_api.repositories.base import BaseRepository
from delivery_api.repositories.pagination import Page, PageRequest


class OrderRepository(BaseRepository[Order]):
    model = Order

    def find_orders(
        self,
        page_request: PageRequest,
        customer_id: UUID | None = None,
        restaurant_ids: list[UUID] | None = None,
        status: OrderStatus | None = None,
    ) -> Page[Order]:
        """
        Orders matching the given scope. ``restaurant_ids`` of an empty list
        matches nothing; ``None`` means no restaurant restriction.
        """
        predicates: list[ColumnElement[bool]] = [self.not_deleted()]
        if customer_id is not None:
            predicates.append(Order.customer_id == customer_id)
        if restaurant_ids is not None:
            predicates.append(Order.restaurant_id.in_(restaurant_ids))
        if status is not None:
            predicates.append(Order.status == status)
        return self.find_page(
            predicates,
            page_request,
            order_by=(Order.created_at.desc(), Order.id.asc()),
        )
