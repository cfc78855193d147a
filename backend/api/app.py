"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.config import get_settings
from modules.billing.routes import router as subscription_router, webhook_router
from modules.onboarding.routes import router as onboarding_router
from modules.profile.routes import router as profile_router
from modules.ratelimit import current_time_ms
from modules.releases.routes import router as releases_router

from .dependencies import get_container
from .errors import register_exception_handlers
from .middleware.rate_limit import RateLimitMiddleware
from .routes import admin, health

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Starts the sweeper that evicts expired in-memory rate limit counters.
    """
    settings = get_settings()
    memory_store = get_container().rate_limit_memory
    memory_store.start_sweeper(settings.rate_limit_cleanup_interval_ms, current_time_ms)
    logger.info("Starting %s on %s:%s", settings.app_name, settings.host, settings.port)
    yield
    await memory_store.stop_sweeper()
    logger.info("Shutting down %s", settings.app_name)


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Subscription backend for the All Access Artist platform",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    register_exception_handlers(app)

    # Rate limiting sits inside CORS so 429 responses still carry CORS headers
    if settings.rate_limit_enabled:
        app.add_middleware(
            RateLimitMiddleware,
            limiter_provider=lambda: get_container().rate_limiter,
            auth_provider=lambda: get_container().auth,
        )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
        expose_headers=["X-RateLimit-Limit", "X-RateLimit-Remaining", "X-RateLimit-Reset", "Retry-After"],
    )

    # Register routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(subscription_router, prefix="/api/subscription", tags=["subscription"])
    app.include_router(webhook_router, prefix="/api/webhooks", tags=["webhooks"])
    app.include_router(onboarding_router, prefix="/api/onboarding", tags=["onboarding"])
    app.include_router(profile_router, prefix="/api/profile", tags=["profile"])
    app.include_router(releases_router, prefix="/api/releases", tags=["releases"])
    app.include_router(admin.router, prefix="/api/admin", tags=["admin"])

    return app


# Application instance for uvicorn
app = create_app()
