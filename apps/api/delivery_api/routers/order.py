"""
Order router: placement by customers, scoped listing and cancellation.
"""
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from delivery_api.core.deps import get_current_user, get_page_request
from delivery_api.db.session import get_db
from delivery_api.models.enums import OrderStatus
from delivery_api.models.user import User
from delivery_api.repositories import PageRequest
from delivery_api.schemas.common import PageResponse
from delivery_api.schemas.order import OrderCreate, OrderResponse
from delivery_api.services.order import OrderService

router = APIRouter(prefix="/order", tags=["order"])


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
def create_order(
    request: OrderCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return OrderService(db).create_order(request, current_user)


@router.get("", response_model=PageResponse[OrderResponse])
def list_orders(
    restaurant_id: Optional[UUID] = Query(None),
    order_status: Optional[OrderStatus] = Query(None, alias="status"),
    page_request: PageRequest = Depends(get_page_request),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Orders visible to the caller: owners see their restaurants', staff see all."""
    page = OrderService(db).get_orders(page_request, current_user, restaurant_id, order_status)
    return PageResponse[OrderResponse].from_page(page.map(OrderResponse.model_validate))


@router.get("/{order_id}", response_model=OrderResponse)
def get_order(
    order_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return OrderService(db).get_order(order_id, current_user)


@router.patch("/{order_id}", response_model=OrderResponse)
def cancel_order(
    order_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Cancel a pending order."""
    return OrderService(db).cancel_order(order_id, current_user)
