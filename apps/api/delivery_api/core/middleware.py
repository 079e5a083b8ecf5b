"""
Request pipeline run in front of every router.

Stages are plain Starlette middlewares listed in ``build_middleware`` in the
order they run. Any stage may answer the request itself; later stages and the
routers never see a request that was short-circuited.
"""
import logging
import time
import uuid

from fastapi import Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware import Middleware
from starlette.middleware.base import BaseHTTPMiddleware

from delivery_api.core.policy import AuthorizationPolicy, Decision, default_policy
from delivery_api.core.security import extract_bearer_token, principal_from_token

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Assign a request id and log method, path, status and duration."""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        response.headers[REQUEST_ID_HEADER] = request_id
        logger.info(
            "%s %s -> %s (%.1f ms) [%s]",
            request.method, request.url.path, response.status_code, elapsed_ms, request_id,
        )
        return response


class AuthenticationMiddleware(BaseHTTPMiddleware):
    """
    Resolve the bearer token into a principal on ``request.state``.

    Never rejects on its own: a missing, expired or tampered token leaves the
    caller anonymous and the authorization stage decides.
    """

    async def dispatch(self, request: Request, call_next):
        token = extract_bearer_token(request.headers.get("Authorization"))
        request.state.principal = principal_from_token(token)
        return await call_next(request)


class AuthorizationMiddleware(BaseHTTPMiddleware):
    """Gate the request on the route policy before any handler runs."""

    def __init__(self, app, policy: AuthorizationPolicy = default_policy):
        super().__init__(app)
        self.policy = policy

    async def dispatch(self, request: Request, call_next):
        principal = request.state.principal
        decision = self.policy.evaluate(request.method, request.url.path, principal.roles)

        if decision == Decision.ALLOW:
            return await call_next(request)

        if not principal.is_authenticated:
            logger.info("Rejected anonymous %s %s", request.method, request.url.path)
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content={"detail": "Not authenticated"},
                headers={"WWW-Authenticate": "Bearer"},
            )

        logger.info(
            "Rejected %s %s for role %s",
            request.method, request.url.path, principal.role.value,
        )
        return JSONResponse(
            status_code=status.HTTP_403_FORBIDDEN,
            content={"detail": "Insufficient role for this resource"},
        )


def build_middleware(policy: AuthorizationPolicy = default_policy) -> list[Middleware]:
    """Middleware stack, outermost first."""
    return [
        Middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        ),
        Middleware(RequestContextMiddleware),
        Middleware(AuthenticationMiddleware),
        Middleware(AuthorizationMiddleware, policy=policy),
    ]
