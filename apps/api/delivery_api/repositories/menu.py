from uuid import UUID

from sqlalchemy import ColumnElement, select

from delivery_api.models.menu import Menu
from delivery_api.models.restaurant import Restaurant
from delivery_api.repositories.base import BaseRepository
from delivery_api.repositories.pagination import Page, PageRequest


class MenuRepository(BaseRepository[Menu]):
    model = Menu

    def visible(self) -> list[ColumnElement[bool]]:
        """Menu is live and so is its restaurant (requires a join on Restaurant)."""
        return [
            self.not_deleted(),
            Menu.is_hidden.is_(False),
            Restaurant.deleted_at.is_(None),
            Restaurant.is_hidden.is_(False),
        ]

    def _joined(self):
        return select(Menu).join(Restaurant, Menu.restaurant_id == Restaurant.id)

    def get_visible(self, menu_id: UUID) -> Menu | None:
        stmt = self._joined().where(Menu.id == menu_id, *self.visible())
        return self.db.execute(stmt).scalars().first()

    def get_visible_many(self, menu_ids: list[UUID]) -> dict[UUID, Menu]:
        stmt = self._joined().where(Menu.id.in_(menu_ids), *self.visible())
        return {menu.id: menu for menu in self.db.execute(stmt).scalars().all()}

    def find_menus(
        self,
        page_request: PageRequest,
        restaurant_id: UUID | None = None,
        search: str | None = None,
    ) -> Page[Menu]:
        predicates = self.visible()
        if restaurant_id is not None:
            predicates.append(Menu.restaurant_id == restaurant_id)
        if search:
            predicates.append(Menu.name.icontains(search, autoescape=True))
        return self.find_page(
            predicates,
            page_request,
            order_by=(Menu.name.asc(), Menu.id.asc()),
            base=self._joined(),
        )
