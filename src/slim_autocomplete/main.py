"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from slim_autocomplete import __version__
from slim_autocomplete.api.v1 import router as api_v1_router
from slim_autocomplete.core.app_config import get_app_config
from slim_autocomplete.core.config import get_settings
from slim_autocomplete.core.exceptions import AppException, app_exception_handler, http_exception_handler
from slim_autocomplete.middleware.logging import RequestLoggingMiddleware, setup_logging
from slim_autocomplete.schemas.common import HealthResponse

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    settings = get_settings()

    # Setup logging
    setup_logging(settings.log_level, settings.log_format)

    # Validate central configuration (fail fast on startup)
    try:
        app_config = get_app_config()
        logger.info(
            "Central configuration loaded: %d classpath entries, catalog=%s, documentation=%s",
            len(app_config.classpath),
            app_config.introspection.catalog,
            "on" if app_config.documentation.enabled else "off",
        )
    except Exception as e:
        logger.critical("Failed to load central configuration: %s", e)
        raise SystemExit(1) from e

    if not settings.pages_root_path.is_dir():
        logger.warning("Page root %s does not exist; page lookups will fail", settings.pages_root_path)

    yield


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Autocomplete metadata for FitNesse/Slim wiki pages",
        version=__version__,
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
        lifespan=lifespan,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add request logging middleware
    app.add_middleware(RequestLoggingMiddleware)

    # Register exception handlers
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)

    # Include API routers
    app.include_router(api_v1_router, prefix="/api/v1")

    # Health check endpoint
    @app.get("/health", response_model=HealthResponse)
    async def health_check() -> HealthResponse:
        """Health check endpoint for load balancers."""
        return HealthResponse(status="healthy", version=__version__)

    return app


# Create application instance
app = create_app()


def run() -> None:
    """Serve the application with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "slim_autocomplete.main:app",
        host=settings.server_host,
        port=settings.server_port,
        log_level=settings.log_level.lower(),
    )
