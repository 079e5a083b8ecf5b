"""
Review router. Reading reviews is public.
"""
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from delivery_api.core.deps import get_current_user, get_page_request
from delivery_api.db.session import get_db
from delivery_api.models.user import User
from delivery_api.repositories import PageRequest
from delivery_api.schemas.common import MessageResponse, PageResponse
from delivery_api.schemas.review import ReviewCreate, ReviewResponse
from delivery_api.services.review import ReviewService

router = APIRouter(prefix="/review", tags=["review"])


@router.post("", response_model=ReviewResponse, status_code=status.HTTP_201_CREATED)
def create_review(
    request: ReviewCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return ReviewService(db).create_review(request, current_user)


@router.get("", response_model=PageResponse[ReviewResponse])
def list_reviews(
    restaurant_id: Optional[UUID] = Query(None),
    page_request: PageRequest = Depends(get_page_request),
    db: Session = Depends(get_db),
):
    page = ReviewService(db).get_reviews(page_request, restaurant_id)
    return PageResponse[ReviewResponse].from_page(page.map(ReviewResponse.model_validate))


@router.get("/{review_id}", response_model=ReviewResponse)
def get_review(review_id: UUID, db: Session = Depends(get_db)):
    return ReviewService(db).get_review(review_id)


@router.patch("/{review_id}", response_model=MessageResponse)
def delete_review(
    review_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Soft delete a review (author or MANAGER/MASTER)."""
    ReviewService(db).delete_review(review_id, current_user)
    return MessageResponse(message="Review deleted")
