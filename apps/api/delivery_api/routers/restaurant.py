"""
Restaurant router.

Reads are public and never expose hidden or deleted restaurants. Creation is
for MANAGER/MASTER; update and delete for the owner or MANAGER/MASTER.
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
from delivery_api.schemas.restaurant import RestaurantCreate, RestaurantResponse, RestaurantUpdate
from delivery_api.services.restaurant import RestaurantService

router = APIRouter(prefix="/restaurants", tags=["restaurants"])


@router.get("", response_model=PageResponse[RestaurantResponse])
def list_restaurants(
    search: Optional[str] = Query(None, max_length=255, description="Case-insensitive name filter"),
    page_request: PageRequest = Depends(get_page_request),
    db: Session = Depends(get_db),
):
    """List visible restaurants with their average rating."""
    page = RestaurantService(db).get_restaurants(page_request, search)
    return PageResponse[RestaurantResponse].from_page(page)


@router.get("/category/{category_id}", response_model=PageResponse[RestaurantResponse])
def list_restaurants_by_category(
    category_id: UUID,
    search: Optional[str] = Query(None, max_length=255, description="Case-insensitive name filter"),
    page_request: PageRequest = Depends(get_page_request),
    db: Session = Depends(get_db),
):
    """List visible restaurants of one category."""
    page = RestaurantService(db).get_restaurants_by_category(page_request, category_id, search)
    return PageResponse[RestaurantResponse].from_page(page)


@router.get("/{restaurant_id}", response_model=RestaurantResponse)
def get_restaurant(restaurant_id: UUID, db: Session = Depends(get_db)):
    """Restaurant detail; `average_rating` is null when nobody has reviewed it yet."""
    return RestaurantService(db).get_restaurant(restaurant_id)


@router.post("", response_model=RestaurantResponse, status_code=status.HTTP_201_CREATED)
def create_restaurant(
    request: RestaurantCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return RestaurantService(db).create_restaurant(request, current_user)


@router.put("/{restaurant_id}", response_model=RestaurantResponse)
def update_restaurant(
    restaurant_id: UUID,
    request: RestaurantUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return RestaurantService(db).update_restaurant(request, restaurant_id, current_user)


@router.delete("/{restaurant_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_restaurant(
    restaurant_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    RestaurantService(db).delete_restaurant(restaurant_id, current_user)
