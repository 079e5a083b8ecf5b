"""
Liveness and readiness probes.

`/health` only proves the process answers. `/api/health` checks the database,
which every endpoint needs, and reports Redis for operators without letting it
fail the probe.
"""
import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.orm import Session
import redis

from delivery_api.db.session import get_db
from delivery_api.core.config import get_settings

router = APIRouter(tags=["health"])
settings = get_settings()
logger = logging.getLogger(__name__)


def _probe_database(db: Session) -> dict:
    try:
        db.execute(text("SELECT 1"))
    except Exception as e:
        logger.error("Database health check failed: %s", e)
        return {"status": "error", "message": str(e)}
    return {"status": "ok"}


def _probe_redis() -> dict:
    if not settings.REDIS_URL:
        return {"status": "disabled"}
    try:
        redis.Redis.from_url(settings.REDIS_URL, socket_connect_timeout=2).ping()
    except redis.ConnectionError:
        return {"status": "unavailable", "message": "Redis not connected"}
    except redis.RedisError as e:
        return {"status": "error", "message": str(e)}
    return {"status": "ok"}


@router.get("/health")
async def health_check():
    return {"status": "ok", "app": settings.APP_NAME}


@router.get("/api/health")
def api_health_check(db: Session = Depends(get_db)):
    """Readiness: 200 while the database answers, 503 otherwise."""
    services = {"database": _probe_database(db), "redis": _probe_redis()}

    if services["database"]["status"] != "ok":
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unhealthy", "services": services},
        )
    return {"status": "ok", "services": services}
