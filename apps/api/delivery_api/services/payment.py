import logging
from uuid import UUID

from delivery_api.core.exceptions import BadRequestError, ConflictError, NotFoundError
from delivery_api.models.enums import OrderStatus, PaymentStatus, UserRole
from delivery_api.models.payment import Payment
from delivery_api.models.user import User
from delivery_api.repositories import Page, PageRequest, PaymentRepository, RestaurantRepository
from delivery_api.schemas.payment import PaymentCreate
from delivery_api.services.base import BaseService
from delivery_api.services.access import is_staff
from delivery_api.services.order import OrderService

logger = logging.getLogger(__name__)


class PaymentService(BaseService):
    """Payments settle a pending order in full; visibility follows the order."""

    def __init__(self, db):
        super().__init__(db)
        self.payments = PaymentRepository(db)
        self.restaurants = RestaurantRepository(db)
        self.order_service = OrderService(db)

    def _find_payment_for(self, payment_id: UUID, caller: User) -> Payment:
        payment = self.payments.get(payment_id)
        if payment is None or not self.order_service.can_view(payment.order, caller):
            raise NotFoundError("Payment", payment_id)
        return payment

    def create_payment(self, order_id: UUID, request: PaymentCreate, caller: User) -> Payment:
        order = self.order_service.find_order_for(order_id, caller)

        if order.customer_id != caller.id:
            raise NotFoundError("Order", order_id)
        if self.payments.exists_for_order(order.id):
            raise ConflictError(f"Order {order.id} has already been paid")
        if order.status != OrderStatus.PENDING:
            raise BadRequestError(f"Order {order.id} is {order.status.value} and cannot be paid")
        if request.amount != order.total_price:
            raise BadRequestError(
                f"Payment amount {request.amount} does not match order total {order.total_price}"
            )

        payment = self.payments.add(Payment(
            order_id=order.id,
            amount=request.amount,
            method=request.method,
            status=PaymentStatus.COMPLETED,
            created_by=caller.username,
        ))
        order.status = OrderStatus.COMPLETED
        order.updated_by = caller.username
        self._commit()

        logger.info("Payment %s settled order %s (%s)", payment.id, order.id, request.amount)
        return payment

    def get_payment(self, payment_id: UUID, caller: User) -> Payment:
        return self._find_payment_for(payment_id, caller)

    def get_payments(self, page_request: PageRequest, caller: User) -> Page[Payment]:
        if is_staff(caller):
            return self.payments.find_payments(page_request)
        if caller.role == UserRole.OWNER:
            owned = self.restaurants.find_owned_ids(caller.id)
            return self.payments.find_payments(page_request, restaurant_ids=owned)
        return self.payments.find_payments(page_request, customer_id=caller.id)

    def cancel_payment(self, payment_id: UUID, caller: User) -> Payment:
        """
        Mark the payment CANCELED and soft delete it. The order it settled is
        canceled too, and a review left on it stops counting.
        """
        payment = self._find_payment_for(payment_id, caller)
        payment.status = PaymentStatus.CANCELED
        payment.mark_as_deleted(caller.username)

        order = payment.order
        order.status = OrderStatus.CANCELED
        order.updated_by = caller.username
        if order.review is not None and not order.review.is_deleted:
            order.review.mark_as_deleted(caller.username)
        self._commit()

        logger.info("Payment %s canceled by %s", payment.id, caller.username)
        return payment
