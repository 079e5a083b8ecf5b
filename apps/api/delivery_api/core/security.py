"""
Security utilities for password hashing and JWT token handling.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Optional
from uuid import UUID, uuid4
import hashlib

import bcrypt
from jose import jwt, JWTError
from sqlalchemy.orm import Session

from delivery_api.core.config import get_settings
from delivery_api.models.enums import UserRole

settings = get_settings()

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


@dataclass(frozen=True)
class Principal:
    """Identity extracted from a validated access token."""
    user_id: Optional[UUID]
    username: Optional[str]
    role: UserRole

    @property
    def is_authenticated(self) -> bool:
        return self.role != UserRole.ANONYMOUS

    @property
    def roles(self) -> frozenset[UserRole]:
        return frozenset({self.role})


ANONYMOUS = Principal(user_id=None, username=None, role=UserRole.ANONYMOUS)


def hash_token(token: str) -> str:
    """
    Hash a JWT token for storage in blacklist.

    Tokens are hashed before storage so a leaked blacklist table cannot be
    replayed.
    """
    return hashlib.sha256(token.encode()).hexdigest()


# bcrypt rejects longer secrets outright
BCRYPT_MAX_BYTES = 72


def hash_password(password: str) -> str:
    """Hash a password using bcrypt. Callers validate the byte length first."""
    return bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt()).decode('utf-8')


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash. Over-long passwords never match."""
    if len(plain_password.encode("utf-8")) > BCRYPT_MAX_BYTES:
        return False
    return bcrypt.checkpw(plain_password.encode('utf-8'), hashed_password.encode('utf-8'))


def _encode(claims: dict, token_type: str, expire: datetime) -> str:
    # jti keeps tokens minted in the same second distinct
    to_encode = {**claims, "exp": expire, "type": token_type, "jti": uuid4().hex}
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def create_access_token(
    subject: str | Any,
    username: str,
    role: UserRole,
    expires_delta: timedelta | None = None,
) -> str:
    """Create a JWT access token carrying identity and role claims."""
    if expires_delta is not None:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    claims = {"sub": str(subject), "username": username, "role": UserRole(role).value}
    return _encode(claims, ACCESS_TOKEN_TYPE, expire)


def create_refresh_token(subject: str | Any, expires_delta: timedelta | None = None) -> str:
    """Create a JWT refresh token."""
    if expires_delta is not None:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS)

    return _encode({"sub": str(subject)}, REFRESH_TOKEN_TYPE, expire)


def decode_token(token: str) -> dict | None:
    """Decode and validate a JWT token. Returns payload or None if invalid or expired."""
    try:
        payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
        return payload
    except JWTError:
        return None


def principal_from_token(token: str | None) -> Principal:
    """
    Resolve the caller behind a bearer token.

    Anything other than a well-formed, unexpired access token yields the
    anonymous principal.
    """
    if not token:
        return ANONYMOUS

    payload = decode_token(token)
    if payload is None or payload.get("type") != ACCESS_TOKEN_TYPE:
        return ANONYMOUS

    try:
        user_id = UUID(payload["sub"])
        role = UserRole(payload["role"])
    except (KeyError, TypeError, ValueError):
        return ANONYMOUS

    if role == UserRole.ANONYMOUS:
        return ANONYMOUS

    return Principal(user_id=user_id, username=payload.get("username"), role=role)


def extract_bearer_token(authorization: str | None) -> str | None:
    """Return the token part of an ``Authorization: Bearer <token>`` header."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def is_token_blacklisted(token: str, db: Session) -> bool:
    """
    Check if a token has been blacklisted (revoked).

    Args:
        token: The JWT token string
        db: Database session

    Returns:
        True if token is blacklisted, False otherwise
    """
    from delivery_api.models.token_blacklist import TokenBlacklist

    token_hash_value = hash_token(token)
    blacklisted = db.query(TokenBlacklist).filter(
        TokenBlacklist.token_hash == token_hash_value
    ).first()

    return blacklisted is not None


def blacklist_token(token: str, expires_at: datetime, db: Session, reason: str = "rotated") -> None:
    """
    Add a token to the blacklist.

    Args:
        token: The JWT token string to blacklist
        expires_at: When the token expires (for cleanup)
        db: Database session
        reason: "rotated" after a refresh, "logout" after an explicit logout
    """
    from delivery_api.models.token_blacklist import TokenBlacklist

    token_hash_value = hash_token(token)

    existing = db.query(TokenBlacklist).filter(
        TokenBlacklist.token_hash == token_hash_value
    ).first()

    if not existing:
        db.add(TokenBlacklist(token_hash=token_hash_value, reason=reason, expires_at=expires_at))
        db.commit()


def cleanup_expired_tokens(db: Session) -> int:
    """
    Remove expired tokens from the blacklist.

    Meant to be run periodically (see scripts/cleanup_tokens.py).

    Returns:
        Number of tokens removed
    """
    from delivery_api.models.token_blacklist import TokenBlacklist

    now = datetime.now(timezone.utc)
    result = db.query(TokenBlacklist).filter(
        TokenBlacklist.expires_at < now
    ).delete()

    db.commit()
    return result
