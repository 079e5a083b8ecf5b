"""
Order placement, lookup and cancellation.

Visibility of an order depends on the caller's role:

- CUSTOMER: only orders they placed
- OWNER: only orders placed at restaurants they own
- MANAGER / MASTER: every order
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID

from delivery_api.core.config import get_settings
from delivery_api.core.exceptions import BadRequestError, ForbiddenError, NotFoundError
from delivery_api.models.enums import OrderStatus, UserRole
from delivery_api.models.order import Order, OrderItem
from delivery_api.models.user import User
from delivery_api.repositories import (
    MenuRepository,
    OrderRepository,
    Page,
    PageRequest,
    RestaurantRepository,
)
from delivery_api.schemas.order import OrderCreate
from delivery_api.services.access import can_manage, is_staff
from delivery_api.services.base import BaseService

logger = logging.getLogger(__name__)
settings = get_settings()


def _as_utc(value: datetime) -> datetime:
    # SQLite hands timestamps back naive
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)


class OrderService(BaseService):

    def __init__(self, db):
        super().__init__(db)
        self.orders = OrderRepository(db)
        self.menus = MenuRepository(db)
        self.restaurants = RestaurantRepository(db)

    def can_view(self, order: Order, caller: User) -> bool:
        if caller.role == UserRole.CUSTOMER:
            return order.customer_id == caller.id
        return can_manage(caller, order.restaurant.owner_id)

    def find_order_for(self, order_id: UUID, caller: User) -> Order:
        """Load an order the caller may see; other callers get 404, not 403."""
        order = self.orders.get(order_id)
        if order is None or not self.can_view(order, caller):
            raise NotFoundError("Order", order_id)
        return order

    def create_order(self, request: OrderCreate, caller: User) -> Order:
        restaurant = self.restaurants.get_visible(request.restaurant_id)
        if restaurant is None:
            raise NotFoundError("Restaurant", request.restaurant_id)

        menu_ids = [item.menu_id for item in request.items]
        menus = self.menus.get_visible_many(menu_ids)

        order = Order(
            customer_id=caller.id,
            restaurant_id=restaurant.id,
            order_type=request.order_type,
            status=OrderStatus.PENDING,
            delivery_address=request.delivery_address or caller.address,
            request=request.request,
            created_by=caller.username,
        )

        total = 0
        for item in request.items:
            menu = menus.get(item.menu_id)
            if menu is None:
                raise NotFoundError("Menu", item.menu_id)
            if menu.restaurant_id != restaurant.id:
                raise BadRequestError(f"Menu {menu.id} does not belong to restaurant {restaurant.id}")
            order.items.append(OrderItem(menu_id=menu.id, quantity=item.quantity, unit_price=menu.price))
            total += menu.price * item.quantity

        order.total_price = total
        self.orders.add(order)
        self._commit()

        logger.info("Order %s placed by %s at %s (total=%s)", order.id, caller.username, restaurant.id, total)
        return order

    def get_order(self, order_id: UUID, caller: User) -> Order:
        return self.find_order_for(order_id, caller)

    def get_orders(
        self,
        page_request: PageRequest,
        caller: User,
        restaurant_id: Optional[UUID] = None,
        status: Optional[OrderStatus] = None,
    ) -> Page[Order]:
        if is_staff(caller):
            scope = [restaurant_id] if restaurant_id is not None else None
            return self.orders.find_orders(page_request, restaurant_ids=scope, status=status)

        if caller.role == UserRole.OWNER:
            owned = self.restaurants.find_owned_ids(caller.id)
            if restaurant_id is not None:
                if restaurant_id not in owned:
                    raise ForbiddenError("list orders of this restaurant", user=caller.username)
                owned = [restaurant_id]
            return self.orders.find_orders(page_request, restaurant_ids=owned, status=status)

        return self.orders.find_orders(
            page_request,
            customer_id=caller.id,
            restaurant_ids=[restaurant_id] if restaurant_id is not None else None,
            status=status,
        )

    def cancel_order(self, order_id: UUID, caller: User) -> Order:
        """
        Cancel a pending order. Customers only inside the cancel window;
        the restaurant's owner and MANAGER/MASTER at any time.
        """
        order = self.find_order_for(order_id, caller)

        if order.status != OrderStatus.PENDING:
            raise BadRequestError(f"Only pending orders can be canceled (status is {order.status.value})")

        if caller.role == UserRole.CUSTOMER:
            window = timedelta(minutes=settings.ORDER_CANCEL_WINDOW_MINUTES)
            if datetime.now(timezone.utc) - _as_utc(order.created_at) > window:
                raise BadRequestError(
                    f"Orders can only be canceled within {settings.ORDER_CANCEL_WINDOW_MINUTES} minutes"
                )

        order.status = OrderStatus.CANCELED
        order.updated_by = caller.username
        self._commit()

        logger.info("Order %s canceled by %s", order.id, caller.username)
        return order
