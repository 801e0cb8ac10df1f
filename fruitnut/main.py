"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from fruitnut.api.middleware.error_handler import error_handler_middleware
from fruitnut.api.middleware.latency_logging import latency_logging_middleware
from fruitnut.api.middleware.navigation_guard import navigation_guard_middleware
from fruitnut.api.routes import auth, center, farmer, health, home, session, volunteer
from fruitnut.core.auth_provider import SupabaseAuthProvider
from fruitnut.core.config import get_settings
from fruitnut.services.profile_service import ProfileService
from fruitnut.state.app_session import AppSession
from fruitnut.state.navigation import MemoryRouter, NavigationGuard

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Builds the app session of this instance, attaches the navigation
    guard to it and restores any persisted session.

    Args:
        app: FastAPI application instance.

    Yields:
        None: Control back to the application.
    """
    # Startup
    settings = get_settings()
    logger.info("Starting %s in %s mode", settings.app_name, settings.app_env)

    app_session = AppSession(SupabaseAuthProvider(), ProfileService())
    router = MemoryRouter()
    guard = NavigationGuard(app_session, router)
    guard.attach()

    app.state.app_session = app_session
    app.state.router = router
    app.state.navigation_guard = guard

    await app_session.bootstrap()
    logger.info("Session restored, current screen %s", router.current_path)

    yield
    # Shutdown
    guard.detach()
    app_session.close()
    logger.info("Shutting down %s", settings.app_name)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        FastAPI: Configured application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title="FruitNut API",
        description="Harvest sharing app connecting farms, volunteers and donation centers",
        version="0.1.0",
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Navigation guard (innermost - runs right before the screen handlers)
    app.add_middleware(BaseHTTPMiddleware, dispatch=navigation_guard_middleware)

    # Add error handler middleware (catches all errors from the guard and handlers)
    app.add_middleware(BaseHTTPMiddleware, dispatch=error_handler_middleware)

    # Add latency logging middleware (tracks request timing)
    app.add_middleware(BaseHTTPMiddleware, dispatch=latency_logging_middleware)

    # Health and session routes are not guarded
    app.include_router(health.router)
    app.include_router(session.router)

    # Screen routes, mounted at the root so the guard sees their top-level segment
    app.include_router(auth.router)
    app.include_router(home.router)
    app.include_router(farmer.router)
    app.include_router(volunteer.router)
    app.include_router(center.router)

    return app


# Create application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "fruitnut.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
