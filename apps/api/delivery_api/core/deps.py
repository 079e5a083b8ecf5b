"""
FastAPI dependencies for the authenticated caller and pagination.
"""
from fastapi import Depends, Query, Request
from sqlalchemy.orm import Session

from delivery_api.core.config import get_settings
from delivery_api.core.exceptions import AuthenticationError
from delivery_api.core.security import ANONYMOUS, Principal
from delivery_api.db.session import get_db
from delivery_api.models.user import User
from delivery_api.repositories.pagination import PageRequest

settings = get_settings()


def get_principal(request: Request) -> Principal:
    """Principal resolved by the authentication middleware."""
    return getattr(request.state, "principal", ANONYMOUS)


def get_current_user(
    principal: Principal = Depends(get_principal),
    db: Session = Depends(get_db),
) -> User:
    """
    Load the user behind the access token.

    Raises 401 when the caller is anonymous or the account no longer exists.
    """
    if not principal.is_authenticated:
        raise AuthenticationError()

    user = db.get(User, principal.user_id)
    if user is None or user.is_deleted:
        raise AuthenticationError("User not found")
    return user


def get_page_request(
    page: int = Query(0, ge=0, description="Zero-based page index"),
    size: int = Query(
        settings.DEFAULT_PAGE_SIZE,
        ge=1,
        le=settings.MAX_PAGE_SIZE,
        description="Maximum number of items per page",
    ),
) -> PageRequest:
    return PageRequest(page=page, size=size)
