"""
Restaurant catalog service.

Hidden and soft-deleted restaurants behave as if they did not exist for every
read and every mutation. Creation is reserved to MANAGER/MASTER; updates and
deletion to the owning user or MANAGER/MASTER.
"""
import logging
from typing import Optional
from uuid import UUID

from delivery_api.core.exceptions import NotFoundError
from delivery_api.models.category import Category
from delivery_api.models.restaurant import Restaurant
from delivery_api.models.user import User
from delivery_api.repositories import (
    CategoryRepository,
    Page,
    PageRequest,
    RestaurantRepository,
    UserRepository,
)
from delivery_api.schemas.restaurant import RestaurantCreate, RestaurantResponse, RestaurantUpdate
from delivery_api.services.access import require_manage, require_staff
from delivery_api.services.base import BaseService

logger = logging.getLogger(__name__)


class RestaurantService(BaseService):

    def __init__(self, db):
        super().__init__(db)
        self.restaurants = RestaurantRepository(db)
        self.categories = CategoryRepository(db)
        self.users = UserRepository(db)

    def _find_restaurant_or_raise(self, restaurant_id: UUID) -> Restaurant:
        restaurant = self.restaurants.get_visible(restaurant_id)
        if restaurant is None:
            raise NotFoundError("Restaurant", restaurant_id)
        return restaurant

    def _find_category_or_raise(self, category_id: UUID) -> Category:
        category = self.categories.get(category_id)
        if category is None:
            raise NotFoundError("Category", category_id)
        return category

    @staticmethod
    def _to_response(restaurant: Restaurant, average_rating: Optional[float]) -> RestaurantResponse:
        return RestaurantResponse(
            id=restaurant.id,
            name=restaurant.name,
            category_id=restaurant.category_id,
            owner_id=restaurant.owner_id,
            address=restaurant.address,
            average_rating=average_rating,
        )

    def create_restaurant(self, request: RestaurantCreate, caller: User) -> RestaurantResponse:
        """Register a restaurant for ``request.owner_id``. MANAGER/MASTER only."""
        require_staff(caller, "create restaurants")

        category = self._find_category_or_raise(request.category_id)

        owner = self.users.get(request.owner_id)
        if owner is None:
            raise NotFoundError("User", request.owner_id)

        restaurant = self.restaurants.add(Restaurant(
            name=request.name,
            category_id=category.id,
            owner_id=owner.id,
            address=request.address,
            is_hidden=False,
            created_by=caller.username,
        ))
        self._commit()

        logger.info("Restaurant %s created by %s for owner %s", restaurant.id, caller.username, owner.username)
        return self._to_response(restaurant, None)

    def update_restaurant(self, request: RestaurantUpdate, restaurant_id: UUID, caller: User) -> RestaurantResponse:
        """Replace name, category and address. Ownership does not change."""
        restaurant = self._find_restaurant_or_raise(restaurant_id)
        require_manage(caller, restaurant.owner_id, "modify this restaurant")

        category = self._find_category_or_raise(request.category_id)

        restaurant.name = request.name
        restaurant.category_id = category.id
        restaurant.address = request.address
        restaurant.updated_by = caller.username
        self._commit()

        return self._to_response(restaurant, self.restaurants.calculate_average_rating(restaurant.id))

    def delete_restaurant(self, restaurant_id: UUID, caller: User) -> None:
        """Soft delete: the row stays but drops out of every read."""
        restaurant = self._find_restaurant_or_raise(restaurant_id)
        require_manage(caller, restaurant.owner_id, "delete this restaurant")

        restaurant.mark_as_deleted(caller.username)
        self._commit()
        logger.info("Restaurant %s deleted by %s", restaurant_id, caller.username)

    def get_restaurant(self, restaurant_id: UUID) -> RestaurantResponse:
        restaurant = self._find_restaurant_or_raise(restaurant_id)
        average_rating = self.restaurants.calculate_average_rating(restaurant_id)
        return self._to_response(restaurant, average_rating)

    def _list(self, page_request: PageRequest, category_id: UUID | None, search: str | None) -> Page[RestaurantResponse]:
        predicates = self.restaurants.build_filter(category_id=category_id, search=search)
        page = self.restaurants.find_restaurants(predicates, page_request)
        ratings = self.restaurants.calculate_average_ratings(r.id for r in page.items)
        return page.map(lambda r: self._to_response(r, ratings.get(r.id)))

    def get_restaurants(self, page_request: PageRequest, search: str | None = None) -> Page[RestaurantResponse]:
        return self._list(page_request, None, search)

    def get_restaurants_by_category(
        self,
        page_request: PageRequest,
        category_id: UUID,
        search: str | None = None,
    ) -> Page[RestaurantResponse]:
        return self._list(page_request, category_id, search)
