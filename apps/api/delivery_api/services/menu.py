from uuid import UUID

from delivery_api.core.exceptions import NotFoundError
from delivery_api.models.menu import Menu
from delivery_api.models.user import User
from delivery_api.repositories import MenuRepository, Page, PageRequest, RestaurantRepository
from delivery_api.schemas.menu import MenuCreate, MenuUpdate
from delivery_api.services.access import require_manage
from delivery_api.services.base import BaseService


class MenuService(BaseService):
    """
    Menus of a restaurant. Writes follow the restaurant's ownership rule;
    reads hide menus that are hidden or belong to a hidden restaurant.
    """

    def __init__(self, db):
        super().__init__(db)
        self.menus = MenuRepository(db)
        self.restaurants = RestaurantRepository(db)

    def _find_menu_or_raise(self, menu_id: UUID) -> Menu:
        menu = self.menus.get(menu_id)
        if menu is None or self.restaurants.get_visible(menu.restaurant_id) is None:
            raise NotFoundError("Menu", menu_id)
        return menu

    def create_menu(self, request: MenuCreate, caller: User) -> Menu:
        restaurant = self.restaurants.get_visible(request.restaurant_id)
        if restaurant is None:
            raise NotFoundError("Restaurant", request.restaurant_id)
        require_manage(caller, restaurant.owner_id, "add menus to this restaurant")

        menu = self.menus.add(Menu(
            restaurant_id=restaurant.id,
            name=request.name,
            description=request.description,
            price=request.price,
            is_hidden=request.is_hidden,
            created_by=caller.username,
        ))
        self._commit()
        return menu

    def update_menu(self, menu_id: UUID, request: MenuUpdate, caller: User) -> Menu:
        # Owners may still edit menus they have hidden
        menu = self._find_menu_or_raise(menu_id)
        require_manage(caller, menu.restaurant.owner_id, "modify this menu")

        for field, value in request.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(menu, field, value)
        menu.updated_by = caller.username
        self._commit()
        return menu

    def delete_menu(self, menu_id: UUID, caller: User) -> None:
        menu = self._find_menu_or_raise(menu_id)
        require_manage(caller, menu.restaurant.owner_id, "delete this menu")
        menu.mark_as_deleted(caller.username)
        self._commit()

    def get_menu(self, menu_id: UUID) -> Menu:
        menu = self.menus.get_visible(menu_id)
        if menu is None:
            raise NotFoundError("Menu", menu_id)
        return menu

    def get_menus(
        self,
        page_request: PageRequest,
        restaurant_id: UUID | None = None,
        search: str | None = None,
    ) -> Page[Menu]:
        if restaurant_id is not None and self.restaurants.get_visible(restaurant_id) is None:
            raise NotFoundError("Restaurant", restaurant_id)
        return self.menus.find_menus(page_request, restaurant_id=restaurant_id, search=search)
