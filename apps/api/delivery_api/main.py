from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import logging

from delivery_api.core.config import get_settings
from delivery_api.core.logging import setup_logging
from delivery_api.core.middleware import build_middleware
from delivery_api.routers.category import router as category_router
from delivery_api.routers.health import router as health_router
from delivery_api.routers.menu import router as menu_router
from delivery_api.routers.order import router as order_router
from delivery_api.routers.payment import router as payment_router
from delivery_api.routers.restaurant import router as restaurant_router
from delivery_api.routers.review import router as review_router
from delivery_api.routers.user import router as user_router

settings = get_settings()
setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    description="Food delivery backend API - Restaurants, menus, orders, payments and reviews.",
    version="0.1.0",
    middleware=build_middleware(),
)


# Global exception handler for unhandled errors
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle unexpected server errors with structured response."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_server_error",
            "message": "An unexpected error occurred. Please try again later.",
            "request_id": request.headers.get("X-Request-ID"),
        }
    )


app.include_router(health_router)
app.include_router(user_router, prefix="/api")
app.include_router(category_router, prefix="/api")
app.include_router(restaurant_router, prefix="/api")
app.include_router(menu_router, prefix="/api")
app.include_router(order_router, prefix="/api")
app.include_router(payment_router, prefix="/api")
app.include_router(review_router, prefix="/api")


@app.get("/")
def read_root():
    return {
        "message": f"Welcome to {settings.APP_NAME}",
        "docs": "/docs",
        "health": "/health"
    }
