"""
User router: signup, login, token refresh/logout and profile endpoints.
"""
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from delivery_api.core.deps import get_current_user
from delivery_api.core.security import REFRESH_TOKEN_TYPE, blacklist_token, decode_token
from delivery_api.db.session import get_db
from delivery_api.models.token_blacklist import REASON_LOGOUT
from delivery_api.models.user import User
from delivery_api.schemas.common import MessageResponse
from delivery_api.schemas.user import (
    LoginRequest,
    SignupRequest,
    Token,
    TokenRefresh,
    UserResponse,
    UserUpdate,
)
from delivery_api.services.user import UserService

router = APIRouter(prefix="/user", tags=["user"])


@router.post("/signup", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def signup(request: SignupRequest, db: Session = Depends(get_db)):
    """
    Register a new account.

    Role is CUSTOMER unless `owner` is set (OWNER) or `manager` is set with a
    valid `manager_token` (MANAGER).
    """
    return UserService(db).signup(request)


@router.post("/login", response_model=Token)
def login(request: LoginRequest, db: Session = Depends(get_db)) -> Token:
    """Authenticate and return an access/refresh token pair."""
    return UserService(db).login(request)


@router.post("/refresh", response_model=Token)
def refresh(token_data: TokenRefresh, db: Session = Depends(get_db)) -> Token:
    """
    Exchange a refresh token for a new token pair.

    Implements token rotation: the old refresh token is blacklisted.
    """
    return UserService(db).refresh(token_data.refresh_token)


@router.post("/logout", response_model=MessageResponse)
def logout(
    token_data: TokenRefresh | None = None,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Logout. When a refresh token is supplied it is revoked; access tokens
    simply expire.
    """
    if token_data is not None:
        payload = decode_token(token_data.refresh_token)
        if payload and payload.get("type") == REFRESH_TOKEN_TYPE and payload.get("sub") == str(current_user.id):
            expires_at = datetime.fromtimestamp(payload["exp"], tz=timezone.utc)
            blacklist_token(token_data.refresh_token, expires_at, db, reason=REASON_LOGOUT)
    return MessageResponse(message="Successfully logged out")


@router.get("/{username}", response_model=UserResponse)
def get_user(username: str, db: Session = Depends(get_db)):
    return UserService(db).get_user(username)


@router.put("/{username}", response_model=UserResponse)
@router.patch("/{username}", response_model=UserResponse)
def update_user(
    username: str,
    request: UserUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Update address and/or password of the caller (or any user, for MANAGER/MASTER)."""
    return UserService(db).update_user(username, request, current_user)
