"""
User and auth Pydantic schemas for request/response validation.
"""
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from delivery_api.core.security import BCRYPT_MAX_BYTES
from delivery_api.models.enums import UserRole


def _check_password_bytes(value: Optional[str]) -> Optional[str]:
    if value is not None and len(value.encode("utf-8")) > BCRYPT_MAX_BYTES:
        raise ValueError(f"Password must be at most {BCRYPT_MAX_BYTES} bytes when UTF-8 encoded")
    return value


class SignupRequest(BaseModel):
    """Schema for user signup request."""
    username: str = Field(min_length=4, max_length=50, pattern=r"^[a-z0-9_]+$")
    password: str = Field(min_length=8, max_length=72)
    address: Optional[str] = Field(default=None, max_length=255)
    # Restaurant owners sign up themselves; managers need the shared token
    owner: bool = False
    manager: bool = False
    manager_token: str = ""

    @field_validator("password")
    @classmethod
    def validate_password_bytes(cls, v):
        return _check_password_bytes(v)


class LoginRequest(BaseModel):
    """Schema for login request."""
    username: str
    password: str


class Token(BaseModel):
    """Schema for token response."""
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class TokenRefresh(BaseModel):
    """Schema for token refresh request."""
    refresh_token: str


class UserUpdate(BaseModel):
    """Fields a user may change on their profile. Role is immutable."""
    address: Optional[str] = Field(default=None, max_length=255)
    password: Optional[str] = Field(default=None, min_length=8, max_length=72)

    @field_validator("password")
    @classmethod
    def validate_password_bytes(cls, v):
        return _check_password_bytes(v)


class UserResponse(BaseModel):
    """Schema for user response (without password)."""
    id: UUID
    username: str
    address: Optional[str] = None
    role: UserRole

    model_config = ConfigDict(from_attributes=True)
