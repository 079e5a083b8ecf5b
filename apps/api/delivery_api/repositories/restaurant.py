"""
Restaurant queries, including the visibility filter and rating aggregation.
"""
from typing import Iterable
from uuid import UUID

from sqlalchemy import ColumnElement, func, select

from delivery_api.models.order import Order
from delivery_api.models.restaurant import Restaurant
from delivery_api.models.review import Review
from delivery_api.repositories.base import BaseRepository
from delivery_api.repositories.pagination import Page, PageRequest


class RestaurantRepository(BaseRepository[Restaurant]):
    model = Restaurant

    def visible(self) -> list[ColumnElement[bool]]:
        """Predicates every public restaurant read must carry."""
        return [self.not_deleted(), Restaurant.is_hidden.is_(False)]

    def build_filter(
        self,
        category_id: UUID | None = None,
        search: str | None = None,
    ) -> list[ColumnElement[bool]]:
        """
        Compound restaurant filter: visible only, then optionally one
        category and a case-insensitive name substring.
        """
        predicates = self.visible()
        if category_id is not None:
            predicates.append(Restaurant.category_id == category_id)
        if search:
            predicates.append(Restaurant.name.icontains(search, autoescape=True))
        return predicates

    def get_visible(self, restaurant_id: UUID) -> Restaurant | None:
        stmt = select(Restaurant).where(Restaurant.id == restaurant_id, *self.visible())
        return self.db.execute(stmt).scalars().first()

    def find_restaurants(
        self,
        predicates: Iterable[ColumnElement[bool]],
        page_request: PageRequest,
    ) -> Page[Restaurant]:
        return self.find_page(
            predicates,
            page_request,
            order_by=(Restaurant.name.asc(), Restaurant.id.asc()),
        )

    def find_owned_ids(self, owner_id: UUID) -> list[UUID]:
        stmt = select(Restaurant.id).where(Restaurant.owner_id == owner_id, self.not_deleted())
        return list(self.db.execute(stmt).scalars().all())

    def _rating_query(self):
        return (
            select(Order.restaurant_id, func.avg(Review.rating))
            .join(Review, Review.order_id == Order.id)
            .where(Review.deleted_at.is_(None))
            .group_by(Order.restaurant_id)
        )

    def calculate_average_rating(self, restaurant_id: UUID) -> float | None:
        """Mean rating of the restaurant's live reviews, None without reviews."""
        stmt = self._rating_query().where(Order.restaurant_id == restaurant_id)
        row = self.db.execute(stmt).first()
        return float(row[1]) if row is not None and row[1] is not None else None

    def calculate_average_ratings(self, restaurant_ids: Iterable[UUID]) -> dict[UUID, float]:
        """Average rating per restaurant; restaurants without reviews are absent."""
        ids = list(restaurant_ids)
        if not ids:
            return {}
        stmt = self._rating_query().where(Order.restaurant_id.in_(ids))
        return {rid: float(avg) for rid, avg in self.db.execute(stmt).all() if avg is not None}
