import logging

from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class BaseService:
    """Holds the request-scoped session; one commit per mutating operation."""

    def __init__(self, db: Session):
        self.db = db

    def _commit(self) -> None:
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            logger.exception("Commit failed, transaction rolled back")
            raise
