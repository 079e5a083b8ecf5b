"""
Generic repository over one SQLAlchemy model.

Filtering is expressed as a list of boolean predicates that is ANDed onto
both the page query and its count query, so the reported total always
agrees with the filter.
"""
from typing import Any, Generic, Iterable, Sequence, TypeVar

from sqlalchemy import ColumnElement, Select, func, select
from sqlalchemy.orm import Session

from delivery_api.repositories.pagination import Page, PageRequest

ModelT = TypeVar("ModelT")


class BaseRepository(Generic[ModelT]):
    """CRUD helpers shared by all repositories. Subclasses set ``model``."""

    model: type[ModelT]

    def __init__(self, db: Session):
        self.db = db

    def not_deleted(self) -> ColumnElement[bool]:
        return self.model.deleted_at.is_(None)

    def get(self, entity_id: Any, include_deleted: bool = False) -> ModelT | None:
        entity = self.db.get(self.model, entity_id)
        if entity is None:
            return None
        if not include_deleted and getattr(entity, "deleted_at", None) is not None:
            return None
        return entity

    def find_one(self, *predicates: ColumnElement[bool]) -> ModelT | None:
        stmt = select(self.model).where(self.not_deleted(), *predicates)
        return self.db.execute(stmt).scalars().first()

    def exists(self, *predicates: ColumnElement[bool]) -> bool:
        return self.find_one(*predicates) is not None

    def add(self, entity: ModelT) -> ModelT:
        self.db.add(entity)
        self.db.flush()
        return entity

    def find_page(
        self,
        predicates: Iterable[ColumnElement[bool]],
        page_request: PageRequest,
        order_by: Sequence[Any] = (),
        base: Select | None = None,
    ) -> Page[ModelT]:
        """Apply predicates, order and pagination; count with the same predicates."""
        predicates = list(predicates)
        stmt = base if base is not None else select(self.model)
        stmt = stmt.where(*predicates)

        count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
        total = self.db.execute(count_stmt).scalar_one()

        if order_by:
            stmt = stmt.order_by(*order_by)
        stmt = stmt.offset(page_request.offset).limit(page_request.limit)
        items = self.db.execute(stmt).scalars().all()

        return Page(items=items, request=page_request, total=total)
