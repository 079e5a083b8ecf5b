"""
Domain exceptions raised by services and turned into HTTP responses by FastAPI.

Usage:
    from delivery_api.core.exceptions import NotFoundError, ForbiddenError

    raise NotFoundError("Restaurant", restaurant_id)
    raise ForbiddenError("update this restaurant")
"""
import logging
from typing import Any

from fastapi import HTTPException, status

logger = logging.getLogger(__name__)


class AppException(HTTPException):
    """
    Base exception with automatic logging.

    Subclasses pick the status code; the detail message ends up in the
    response body as ``{"detail": ...}``.
    """

    def __init__(
        self,
        status_code: int,
        detail: str,
        headers: dict[str, str] | None = None,
        **log_context: Any,
    ):
        logger.warning("%s (status=%s) %s", detail, status_code, log_context or "")
        super().__init__(status_code=status_code, detail=detail, headers=headers)


class NotFoundError(AppException):
    """Entity absent, hidden or soft-deleted (404)."""

    def __init__(self, entity: str, entity_id: Any = None, **log_context: Any):
        if entity_id is not None:
            detail = f"{entity} {entity_id} not found"
        else:
            detail = f"{entity} not found"
        super().__init__(status.HTTP_404_NOT_FOUND, detail, entity=entity, **log_context)


class ForbiddenError(AppException):
    """Role or ownership check failed (403)."""

    def __init__(self, action: str | None = None, **log_context: Any):
        detail = f"Not allowed to {action}" if action else "Access denied"
        super().__init__(status.HTTP_403_FORBIDDEN, detail, **log_context)


class BadRequestError(AppException):
    """A domain rule rejected the request (400)."""

    def __init__(self, detail: str, **log_context: Any):
        super().__init__(status.HTTP_400_BAD_REQUEST, detail, **log_context)


class ConflictError(AppException):
    """Unique constraint on a domain key would be violated (409)."""

    def __init__(self, detail: str, **log_context: Any):
        super().__init__(status.HTTP_409_CONFLICT, detail, **log_context)


class AuthenticationError(AppException):
    """Missing, expired or otherwise invalid credentials (401)."""

    def __init__(self, detail: str = "Not authenticated", **log_context: Any):
        super().__init__(
            status.HTTP_401_UNAUTHORIZED,
            detail,
            headers={"WWW-Authenticate": "Bearer"},
            **log_context,
        )
