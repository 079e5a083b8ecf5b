from uuid import UUID

from delivery_api.core.exceptions import ConflictError, NotFoundError
from delivery_api.models.category import Category
from delivery_api.models.user import User
from delivery_api.repositories import CategoryRepository, Page, PageRequest
from delivery_api.schemas.category import CategoryRequest
from delivery_api.services.access import require_staff
from delivery_api.services.base import BaseService


class CategoryService(BaseService):
    """Restaurant categories. Anyone may read; only MANAGER/MASTER may write."""

    def __init__(self, db):
        super().__init__(db)
        self.categories = CategoryRepository(db)

    def _find_or_raise(self, category_id: UUID) -> Category:
        category = self.categories.get(category_id)
        if category is None:
            raise NotFoundError("Category", category_id)
        return category

    def create_category(self, request: CategoryRequest, caller: User) -> Category:
        require_staff(caller, "create categories")
        if self.categories.exists_by_name(request.name):
            raise ConflictError(f"Category '{request.name}' already exists")

        category = self.categories.add(Category(name=request.name, created_by=caller.username))
        self._commit()
        return category

    def update_category(self, category_id: UUID, request: CategoryRequest, caller: User) -> Category:
        require_staff(caller, "modify categories")
        category = self._find_or_raise(category_id)
        if self.categories.exists_by_name(request.name, exclude_id=category_id):
            raise ConflictError(f"Category '{request.name}' already exists")

        category.name = request.name
        category.updated_by = caller.username
        self._commit()
        return category

    def delete_category(self, category_id: UUID, caller: User) -> None:
        require_staff(caller, "delete categories")
        category = self._find_or_raise(category_id)
        category.mark_as_deleted(caller.username)
        self._commit()

    def get_categories(self, page_request: PageRequest, search: str | None = None) -> Page[Category]:
        return self.categories.find_categories(page_request, search)
