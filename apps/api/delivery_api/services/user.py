"""
User accounts: signup, credential checks, token issuance and profile edits.
"""
import hmac
import logging
from datetime import datetime, timezone
from uuid import UUID

from delivery_api.core.config import get_settings
from delivery_api.core.exceptions import AuthenticationError, ConflictError, ForbiddenError, NotFoundError
from delivery_api.core.security import (
    REFRESH_TOKEN_TYPE,
    blacklist_token,
    create_access_token,
    create_refresh_token,
    decode_token,
    hash_password,
    is_token_blacklisted,
    verify_password,
)
from delivery_api.models.enums import UserRole
from delivery_api.models.user import User
from delivery_api.repositories import UserRepository
from delivery_api.schemas.user import LoginRequest, SignupRequest, Token, UserUpdate
from delivery_api.services.access import can_manage
from delivery_api.services.base import BaseService

logger = logging.getLogger(__name__)
settings = get_settings()


class UserService(BaseService):

    def __init__(self, db):
        super().__init__(db)
        self.users = UserRepository(db)

    def _resolve_signup_role(self, request: SignupRequest) -> UserRole:
        if request.manager:
            expected = settings.MANAGER_SIGNUP_TOKEN
            if not expected or not hmac.compare_digest(request.manager_token, expected):
                raise ForbiddenError("sign up as manager", username=request.username)
            return UserRole.MANAGER
        if request.owner:
            return UserRole.OWNER
        return UserRole.CUSTOMER

    @staticmethod
    def issue_tokens(user: User) -> Token:
        return Token(
            access_token=create_access_token(subject=user.id, username=user.username, role=user.role),
            refresh_token=create_refresh_token(subject=user.id),
        )

    def signup(self, request: SignupRequest) -> User:
        """Create an account. MASTER can never be obtained through signup."""
        if self.users.username_taken(request.username):
            raise ConflictError("Username already registered", username=request.username)

        role = self._resolve_signup_role(request)
        user = self.users.add(User(
            username=request.username,
            hashed_password=hash_password(request.password),
            address=request.address,
            role=role,
            created_by=request.username,
        ))
        self._commit()

        logger.info("User %s signed up as %s", user.username, role.value)
        return user

    def login(self, request: LoginRequest) -> Token:
        user = self.users.get_by_username(request.username)
        if user is None or not verify_password(request.password, user.hashed_password):
            raise AuthenticationError("Invalid username or password")
        return self.issue_tokens(user)

    def refresh(self, refresh_token: str) -> Token:
        """
        Exchange a refresh token for a new token pair.

        The old refresh token is blacklisted, so each one works only once.
        """
        payload = decode_token(refresh_token)
        if payload is None:
            raise AuthenticationError("Invalid or expired refresh token")

        if payload.get("type") != REFRESH_TOKEN_TYPE:
            raise AuthenticationError("Invalid token type")

        if is_token_blacklisted(refresh_token, self.db):
            raise AuthenticationError("Refresh token has already been used. Please log in again.")

        try:
            user_id = UUID(payload.get("sub"))
        except (TypeError, ValueError):
            raise AuthenticationError("Invalid token payload")

        user = self.users.get(user_id)
        if user is None:
            raise AuthenticationError("User not found")

        exp_timestamp = payload.get("exp")
        if exp_timestamp:
            expires_at = datetime.fromtimestamp(exp_timestamp, tz=timezone.utc)
            blacklist_token(refresh_token, expires_at, self.db)

        return self.issue_tokens(user)

    def get_user(self, username: str) -> User:
        user = self.users.get_by_username(username)
        if user is None:
            raise NotFoundError("User", username)
        return user

    def update_user(self, username: str, request: UserUpdate, caller: User) -> User:
        """Change address and/or password. Allowed for the user or MANAGER/MASTER."""
        user = self.get_user(username)
        if not can_manage(caller, user.id):
            raise ForbiddenError("modify this user", user=caller.username)

        if request.address is not None:
            user.address = request.address
        if request.password is not None:
            user.hashed_password = hash_password(request.password)
        user.updated_by = caller.username
        self._commit()
        return user
