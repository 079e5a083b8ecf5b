"""
Menu router. Reads are public; writes follow restaurant ownership.
"""
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from delivery_api.core.deps import get_current_user, get_page_request
from delivery_api.db.session import get_db
from delivery_api.models.user import User
from delivery_api.repositories import PageRequest
from delivery_api.schemas.common import PageResponse
from delivery_api.schemas.menu import MenuCreate, MenuResponse, MenuUpdate
from delivery_api.services.menu import MenuService

router = APIRouter(prefix="/menus", tags=["menus"])


def _page_response(page) -> PageResponse[MenuResponse]:
    return PageResponse[MenuResponse].from_page(page.map(MenuResponse.model_validate))


@router.get("", response_model=PageResponse[MenuResponse])
def list_menus(
    search: Optional[str] = Query(None, max_length=255),
    page_request: PageRequest = Depends(get_page_request),
    db: Session = Depends(get_db),
):
    return _page_response(MenuService(db).get_menus(page_request, search=search))


@router.get("/item/{menu_id}", response_model=MenuResponse)
def get_menu(menu_id: UUID, db: Session = Depends(get_db)):
    return MenuService(db).get_menu(menu_id)


@router.get("/{restaurant_id}", response_model=PageResponse[MenuResponse])
def list_restaurant_menus(
    restaurant_id: UUID,
    search: Optional[str] = Query(None, max_length=255),
    page_request: PageRequest = Depends(get_page_request),
    db: Session = Depends(get_db),
):
    return _page_response(MenuService(db).get_menus(page_request, restaurant_id=restaurant_id, search=search))


@router.post("", response_model=MenuResponse, status_code=status.HTTP_201_CREATED)
def create_menu(
    request: MenuCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return MenuService(db).create_menu(request, current_user)


@router.patch("/{menu_id}", response_model=MenuResponse)
def update_menu(
    menu_id: UUID,
    request: MenuUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return MenuService(db).update_menu(menu_id, request, current_user)


@router.delete("/{menu_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_menu(
    menu_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    MenuService(db).delete_menu(menu_id, current_user)
