import logging
from uuid import UUID

from delivery_api.core.exceptions import BadRequestError, ConflictError, ForbiddenError, NotFoundError
from delivery_api.models.enums import OrderStatus
from delivery_api.models.review import Review
from delivery_api.models.user import User
from delivery_api.repositories import Page, PageRequest, RestaurantRepository, ReviewRepository
from delivery_api.schemas.review import ReviewCreate
from delivery_api.services.access import can_manage
from delivery_api.services.base import BaseService
from delivery_api.services.order import OrderService

logger = logging.getLogger(__name__)


class ReviewService(BaseService):
    """One review per completed order, written by the customer who placed it."""

    def __init__(self, db):
        super().__init__(db)
        self.reviews = ReviewRepository(db)
        self.restaurants = RestaurantRepository(db)
        self.order_service = OrderService(db)

    def create_review(self, request: ReviewCreate, caller: User) -> Review:
        order = self.order_service.find_order_for(request.order_id, caller)

        if order.customer_id != caller.id:
            raise ForbiddenError("review an order placed by someone else", user=caller.username)
        if order.status != OrderStatus.COMPLETED:
            raise BadRequestError("Only completed orders can be reviewed")
        if self.reviews.exists_for_order(order.id):
            raise ConflictError(f"Order {order.id} has already been reviewed")

        review = self.reviews.add(Review(
            order_id=order.id,
            rating=request.rating,
            comment=request.comment,
            created_by=caller.username,
        ))
        self._commit()

        logger.info("Review %s (%s stars) added to order %s", review.id, review.rating, order.id)
        return review

    def get_review(self, review_id: UUID) -> Review:
        review = self.reviews.get_visible(review_id)
        if review is None:
            raise NotFoundError("Review", review_id)
        return review

    def get_reviews(self, page_request: PageRequest, restaurant_id: UUID | None = None) -> Page[Review]:
        if restaurant_id is not None and self.restaurants.get_visible(restaurant_id) is None:
            raise NotFoundError("Restaurant", restaurant_id)
        return self.reviews.find_reviews(page_request, restaurant_id=restaurant_id)

    def delete_review(self, review_id: UUID, caller: User) -> None:
        """Soft delete; allowed for the author and MANAGER/MASTER."""
        review = self.get_review(review_id)
        if not can_manage(caller, review.order.customer_id):
            raise ForbiddenError("delete this review", user=caller.username)

        review.mark_as_deleted(caller.username)
        self._commit()
