"""FastAPI application for the advice gateway.

Main entry point for the stateless REST API that authenticates users,
counts their requests and proxies advice and translation requests to
external inference services.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from starlette.routing import Match

from app import messages
from app.config import get_settings
from app.exceptions import ApiError
from app.routes import accounts, admin, health, inference
from app.services import database
from app.services.counters import get_endpoint_stat_store

logger = logging.getLogger(__name__)

# Stats bucket for requests that match no route
UNMATCHED_ENDPOINT = "(unmatched)"
KNOWN_METHODS = {"GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"}


@asynccontextmanager
async def lifespan(fastapi_app: FastAPI):
    """Application lifespan context manager for startup and shutdown events.

    Handles:
    - Startup: Initialise MongoDB connection and ensure indexes
    - Shutdown: Close MongoDB connection gracefully

    Args:
        fastapi_app: FastAPI application instance.

    Yields:
        Control back to FastAPI during application lifetime.
    """
    # Startup
    logger.info("Starting advice gateway...")

    # Load app
    _ = fastapi_app

    try:
        # Initialise database connection
        database.get_client()
        logger.info("MongoDB connection initialised")

        # Ensure key indexes exist
        database.ensure_indexes()
        logger.info("Database indexes verified")

        logger.info("Application startup complete")

    except Exception as e:
        logger.error("Failed to initialise application: %s", e, exc_info=True)
        raise

    yield

    # Shutdown
    logger.info("Shutting down application...")
    try:
        database.close_client()
        logger.info("MongoDB connection closed")
    except Exception as e:
        logger.error("Error during shutdown: %s", e, exc_info=True)

    logger.info("Application shutdown complete")


settings = get_settings()

# Create FastAPI application
app = FastAPI(
    title="Advice Gateway",
    description=(
        "API for registering users, counting their requests and proxying "
        "advice and translation requests"
    ),
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.app.cors_origins,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type", "Authorization"],
)


def endpoint_key(request: Request) -> tuple[str, str]:
    """Return the (route template, method) pair a request is counted under.

    Paths that match no route share one bucket and unusual methods are
    recorded as OTHER, so arbitrary client input cannot add new counters.
    """
    method = request.method if request.method in KNOWN_METHODS else "OTHER"
    partial = None
    for route in request.app.router.routes:
        match, _ = route.matches(request.scope)
        if match == Match.FULL:
            return route.path, method
        if match == Match.PARTIAL and partial is None:
            partial = route.path
    return partial or UNMATCHED_ENDPOINT, method


@app.middleware("http")
async def count_endpoint_request(request: Request, call_next):
    """Increment the endpoint counter for every request before dispatch.

    Store failures are logged and never affect the response.
    """
    try:
        endpoint, method = endpoint_key(request)
        store = get_endpoint_stat_store()
        await run_in_threadpool(store.increment, endpoint, method)
    except Exception as e:
        logger.error(
            "Failed to record stats for %s %s: %s",
            request.method,
            request.url.path,
            e,
            exc_info=True,
        )

    return await call_next(request)


@app.exception_handler(ApiError)
async def api_error_handler(request: Request, exc: ApiError):
    """Render application errors as ``{"error": message}``."""
    logger.debug(
        "%s %s -> %d %s", request.method, request.url.path, exc.status_code, exc.message
    )
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle uncaught exceptions globally.

    Args:
        request: FastAPI request object.
        exc: Exception that was raised.

    Returns:
        JSON response with a generic error message.
    """
    logger.error(
        "Unhandled exception for %s %s: %s",
        request.method,
        request.url,
        exc,
        exc_info=True,
    )

    return JSONResponse(
        status_code=500,
        content={"error": messages.SERVER_ERROR},
    )


# Register routers
app.include_router(health.router)
app.include_router(accounts.router)
app.include_router(inference.router)
app.include_router(admin.router)


# Root endpoint
@app.get("/")
async def root():
    """Root endpoint with API information.

    Returns:
        Dictionary with API details and links.
    """
    return {
        "service": "Advice Gateway",
        "version": "0.1.0",
        "status": "running",
        "endpoints": {
            "health": "/health",
            "readiness": "/health/ready",
            "register": "POST /register",
            "login": "POST /login",
            "request_count": "GET /requestCount",
            "update_request_count": "PUT /updateRequestCount",
            "delete_profile": "DELETE /deleteProfile",
            "advice": "POST /getAdvice",
            "translate": "POST /translate",
            "user_requests": "GET /userRequests",
            "api_stats": "GET /apiStats",
            "docs": "/docs",
        },
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=3000)
