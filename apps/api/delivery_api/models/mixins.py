"""
Audit columns and soft-delete support shared by every domain table.
"""
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String, func


class AuditMixin:
    """
    Adds created/updated/deleted timestamps plus the acting username.

    A row is soft-deleted once ``deleted_at`` is set; it stays in the table
    but normal reads filter it out.
    """

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    created_by = Column(String(100), nullable=True)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now(), nullable=True)
    updated_by = Column(String(100), nullable=True)
    deleted_at = Column(DateTime(timezone=True), nullable=True)
    deleted_by = Column(String(100), nullable=True)

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def mark_as_deleted(self, username: str | None) -> None:
        self.deleted_at = datetime.now(timezone.utc)
        self.deleted_by = username
