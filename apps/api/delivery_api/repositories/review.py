from uuid import UUID

from sqlalchemy import ColumnElement, select

from delivery_api.models.order import Order
from delivery_api.models.restaurant import Restaurant
from delivery_api.models.review import Review
from delivery_api.repositories.base import BaseRepository
from delivery_api.repositories.pagination import Page, PageRequest


class ReviewRepository(BaseRepository[Review]):
    model = Review

    def visible(self) -> list[ColumnElement[bool]]:
        """Live review of a live, non-hidden restaurant (requires the joins in ``_joined``)."""
        return [
            self.not_deleted(),
            Restaurant.deleted_at.is_(None),
            Restaurant.is_hidden.is_(False),
        ]

    def _joined(self):
        return (
            select(Review)
            .join(Order, Review.order_id == Order.id)
            .join(Restaurant, Order.restaurant_id == Restaurant.id)
        )

    def get_visible(self, review_id: UUID) -> Review | None:
        stmt = self._joined().where(Review.id == review_id, *self.visible())
        return self.db.execute(stmt).scalars().first()

    def exists_for_order(self, order_id: UUID) -> bool:
        # Unique on order_id, so a soft-deleted review still occupies the slot
        stmt = select(Review.id).where(Review.order_id == order_id)
        return self.db.execute(stmt).first() is not None

    def find_reviews(
        self,
        page_request: PageRequest,
        restaurant_id: UUID | None = None,
    ) -> Page[Review]:
        predicates = self.visible()
        if restaurant_id is not None:
            predicates.append(Order.restaurant_id == restaurant_id)
        return self.find_page(
            predicates,
            page_request,
            order_by=(Review.created_at.desc(), Review.id.asc()),
            base=self._joined(),
        )
