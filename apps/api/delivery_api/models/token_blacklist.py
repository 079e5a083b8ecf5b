"""
Revoked refresh tokens.

A refresh token is single use: exchanging it at /api/user/refresh rotates
the pair and records the old token here, as does an explicit logout.
"""
from sqlalchemy import Column, String, DateTime, Index
from sqlalchemy.sql import func

from delivery_api.db.base import Base

REASON_ROTATED = "rotated"
REASON_LOGOUT = "logout"


class TokenBlacklist(Base):
    __tablename__ = "token_blacklist"

    # SHA-256 hex digest, never the raw JWT
    token_hash = Column(String(64), primary_key=True)
    reason = Column(String(20), nullable=False, default=REASON_ROTATED)
    blacklisted_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        Index('idx_token_blacklist_expires', 'expires_at'),
    )
