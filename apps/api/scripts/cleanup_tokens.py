"""
Remove expired refresh tokens from the blacklist.

Run from cron or a scheduler, e.g. once a day:

    cd apps/api
    python scripts/cleanup_tokens.py
"""
import logging

from delivery_api.core.logging import setup_logging
from delivery_api.core.security import cleanup_expired_tokens
from delivery_api.db.session import SessionLocal

logger = logging.getLogger("cleanup_tokens")


def main() -> int:
    setup_logging()
    session = SessionLocal()
    try:
        removed = cleanup_expired_tokens(session)
        logger.info("Removed %d expired blacklist entries", removed)
        return removed
    finally:
        session.close()


if __name__ == "__main__":
    main()
