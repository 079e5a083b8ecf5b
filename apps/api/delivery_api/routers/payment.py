"""
Payment router.
"""
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from delivery_api.core.deps import get_current_user, get_page_request
from delivery_api.db.session import get_db
from delivery_api.models.user import User
from delivery_api.repositories import PageRequest
from delivery_api.schemas.common import PageResponse
from delivery_api.schemas.payment import PaymentCreate, PaymentResponse
from delivery_api.services.payment import PaymentService

router = APIRouter(prefix="/payment", tags=["payment"])


@router.post("/{order_id}", response_model=PaymentResponse, status_code=status.HTTP_201_CREATED)
def create_payment(
    order_id: UUID,
    request: PaymentCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Pay a pending order in full; the order becomes COMPLETED."""
    return PaymentService(db).create_payment(order_id, request, current_user)


@router.get("", response_model=PageResponse[PaymentResponse])
def list_payments(
    page_request: PageRequest = Depends(get_page_request),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    page = PaymentService(db).get_payments(page_request, current_user)
    return PageResponse[PaymentResponse].from_page(page.map(PaymentResponse.model_validate))


@router.get("/{payment_id}", response_model=PaymentResponse)
def get_payment(
    payment_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return PaymentService(db).get_payment(payment_id, current_user)


@router.patch("/{payment_id}", response_model=PaymentResponse)
def cancel_payment(
    payment_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return PaymentService(db).cancel_payment(payment_id, current_user)
