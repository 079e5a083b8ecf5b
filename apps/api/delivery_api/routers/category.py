"""
Category router. Listing is public; writes require MANAGER/MASTER.
"""
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from delivery_api.core.deps import get_current_user, get_page_request
from delivery_api.db.session import get_db
from delivery_api.models.user import User
from delivery_api.repositories import PageRequest
from delivery_api.schemas.category import CategoryRequest, CategoryResponse
from delivery_api.schemas.common import PageResponse
from delivery_api.services.category import CategoryService

router = APIRouter(prefix="/category", tags=["category"])


@router.get("", response_model=PageResponse[CategoryResponse])
def list_categories(
    search: Optional[str] = Query(None, max_length=100, description="Case-insensitive name filter"),
    page_request: PageRequest = Depends(get_page_request),
    db: Session = Depends(get_db),
):
    page = CategoryService(db).get_categories(page_request, search)
    return PageResponse[CategoryResponse].from_page(page.map(CategoryResponse.model_validate))


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
def create_category(
    request: CategoryRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return CategoryService(db).create_category(request, current_user)


@router.put("/{category_id}", response_model=CategoryResponse)
def update_category(
    category_id: UUID,
    request: CategoryRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return CategoryService(db).update_category(category_id, request, current_user)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(
    category_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    CategoryService(db).delete_category(category_id, current_user)
