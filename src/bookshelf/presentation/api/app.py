"""FastAPI application factory.

Creates and configures the FastAPI application with all routers,
middleware, and exception handlers.

All resource endpoints live under the /api prefix. The welcome message
(/) and the health check (/health) are unprefixed.

Run with ``uvicorn --factory bookshelf.presentation.api.app:create_app``
or ``bookshelf serve``.
"""

import logging
import sys
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import AsyncGenerator

from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import AsyncEngine

from bookshelf import __version__
from bookshelf.infrastructure.persistence.sqlalchemy.database import create_tables
from bookshelf.presentation.api.container import AppContainer, build_container
from bookshelf.presentation.api.exception_handlers import setup_exception_handlers
from bookshelf.presentation.api.routers import (
    auth_router,
    authors_router,
    books_router,
    index_router,
    publishers_router,
    users_router,
)
from bookshelf.presentation.api.schemas.common import HealthResponse
from bookshelf_auth import SessionCacheError
from bookshelf_config.settings import Settings, get_settings


@lru_cache(maxsize=1)
def _configure_logging(log_level_name: str) -> None:
    """Configure application logging.

    Sets up logging for the bookshelf application with:
    - Console output with timestamps and module names
    - Configurable log level for bookshelf modules (from settings)
    - WARNING level for noisy third-party libraries
    """
    log_level = getattr(logging, log_level_name.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,  # Override any existing config
    )

    logging.getLogger("bookshelf").setLevel(log_level)
    logging.getLogger("bookshelf_auth").setLevel(log_level)

    # Quiet down noisy third-party loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("redis").setLevel(logging.WARNING)


logger = logging.getLogger(__name__)

API_VERSION = __version__
API_PREFIX = "/api"

OPENAPI_TAGS = [
    {
        "name": "Authentication",
        "description": """Account lifecycle and sessions.

**Flow:**
- `POST /signup` creates a *pending* account
- `PUT /activate` makes it *active*
- `POST /signin` returns an access and a refresh token
- `PUT /refresh` rotates both tokens
- `DELETE /signout` ends the session

**Tokens:**
- Send `Authorization: Bearer <access_token>` on protected endpoints
- Only the most recently issued refresh token of a user is accepted

**Limits:**
- All routes here share one allowance per client address (default 10 per
  15 minutes); beyond it they answer 429 with `Retry-After`
""",
    },
    {
        "name": "Users",
        "description": "Profile, email and password of the signed-in user.",
    },
    {
        "name": "Authors",
        "description": "Catalog authors. Changes require the admin role.",
    },
    {
        "name": "Publishers",
        "description": "Catalog publishers. Changes require the admin role.",
    },
    {
        "name": "Books",
        "description": """Catalog books. Changes require the admin role.

`GET /search/{isbn}` is public: 10 characters are looked up as ISBN-10,
anything else as ISBN-13.
""",
    },
    {
        "name": "Health",
        "description": "Service health monitoring endpoints.",
    },
    {
        "name": "Info",
        "description": "API information and discovery.",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    # Startup
    logger.info("Starting Bookshelf API v%s...", API_VERSION)
    container = build_container(app.state.settings)
    app.state.container = container

    await _init_database_schema(container.engine)
    await _check_session_cache(container)
    yield

    # Shutdown - dispose the shared engine and close the cache client
    logger.info("Shutting down Bookshelf API...")
    await container.close()


async def _init_database_schema(engine: AsyncEngine) -> None:
    """Initialize database schema (if not existent) and verify connectivity."""
    try:
        await create_tables(engine)
    except ConnectionRefusedError:
        logger.critical("Could not connect to the database.")
        raise SystemExit(1) from None


async def _cache_is_reachable(container: AppContainer) -> bool:
    try:
        return await container.session_cache.ping()
    except SessionCacheError:
        return False


async def _check_session_cache(container: AppContainer) -> None:
    """Report session cache availability on startup without failing it."""
    if await _cache_is_reachable(container):
        logger.info(
            "Session cache ready (%s)",
            container.settings.session_cache_backend,
        )
    else:
        logger.warning(
            "Session cache unavailable at startup (signin and refresh will fail)",
        )


def create_api_router() -> APIRouter:
    """Create the API router with all resource endpoints."""
    api_router = APIRouter()

    api_router.include_router(auth_router, prefix="/auth", tags=["Authentication"])
    api_router.include_router(users_router, prefix="/users", tags=["Users"])
    api_router.include_router(authors_router, prefix="/authors", tags=["Authors"])
    api_router.include_router(
        publishers_router,
        prefix="/publishers",
        tags=["Publishers"],
    )
    api_router.include_router(books_router, prefix="/books", tags=["Books"])

    return api_router


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Parameters
    ----------
    settings
        Optional settings override for testing.

    Returns
    -------
    Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    # Configure logging on first app creation (not on module import)
    _configure_logging(settings.log_level)

    app = FastAPI(
        title=f"{settings.app_name} API",
        description="A **book catalog** with JWT sessions and role-gated changes.",
        version=API_VERSION,
        docs_url="/docs" if settings.api_debug else None,
        redoc_url="/redoc" if settings.api_debug else None,
        openapi_url="/openapi.json" if settings.api_debug else None,
        lifespan=lifespan,
        openapi_tags=OPENAPI_TAGS,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register domain exception handlers for consistent error responses
    setup_exception_handlers(app)

    app.include_router(create_api_router(), prefix=API_PREFIX)
    app.include_router(index_router, tags=["Info"])

    @app.get("/health", tags=["Health"])
    async def health_check(request: Request) -> HealthResponse:
        """Health check endpoint.

        Reports ``degraded`` when the session cache does not answer.
        """
        container: AppContainer = request.app.state.container
        cache_ok = await _cache_is_reachable(container)
        return HealthResponse(
            status="healthy" if cache_ok else "degraded",
            version=API_VERSION,
            session_cache="ok" if cache_ok else "unavailable",
        )

    return app
