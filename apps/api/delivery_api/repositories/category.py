from uuid import UUID

from sqlalchemy import func, select

from delivery_api.models.category import Category
from delivery_api.repositories.base import BaseRepository
from delivery_api.repositories.pagination import Page, PageRequest


class CategoryRepository(BaseRepository[Category]):
    model = Category

    def exists_by_name(self, name: str, exclude_id: UUID | None = None) -> bool:
        # Names stay unique across soft-deleted rows too
        stmt = select(func.count(Category.id)).where(Category.name == name)
        if exclude_id is not None:
            stmt = stmt.where(Category.id != exclude_id)
        return self.db.execute(stmt).scalar_one() > 0

    def find_categories(self, page_request: PageRequest, search: str | None = None) -> Page[Category]:
        predicates = [self.not_deleted()]
        if search:
            predicates.append(Category.name.icontains(search, autoescape=True))
        return self.find_page(predicates, page_request, order_by=(Category.name.asc(),))
