"""FastAPI application for the blog backend.

Run with:
    uvicorn blogapi.main:app --reload

Examples:
    >>> # Health check
    >>> curl http://localhost:8000/health

    >>> # API docs
    >>> # Open http://localhost:8000/docs

Tests:
    - tests/integration/test_api_blogs.py
    - tests/integration/test_api_auth.py
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel
from starlette.exceptions import HTTPException

from blogapi import __version__
from blogapi.api import router as api_router
from blogapi.auth.jwt_handler import TokenService
from blogapi.auth.passwords import Argon2PasswordHasher
from blogapi.config import Settings, get_settings
from blogapi.database import (
    check_db_connection,
    close_db,
    configure_database,
    get_session,
    init_db,
)
from blogapi.errors import BlogAPIError, Unauthenticated
from blogapi.seed import seed_database
from blogapi.storage.config import StorageConfig
from blogapi.storage.service import UploadService

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    database: bool


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager.

    Startup: create tables, create the upload directory, seed.
    Shutdown: close database connections.
    """
    settings: Settings = app.state.settings
    logger.info(f"Starting blogapi v{__version__}")

    await init_db()
    await app.state.upload_service.ensure_directory()

    if settings.SEED_ON_STARTUP:
        async with get_session() as session:
            await seed_database(session, settings, app.state.password_hasher)

    yield

    logger.info("Shutting down blogapi")
    await close_db()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application and its long-lived collaborators.

    The token service, password hasher and upload service are constructed
    here once and shared through ``app.state``.
    """
    settings = settings or get_settings()
    configure_database(settings)

    app = FastAPI(
        title="blogapi",
        description="Personal blog CRUD backend",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
    )

    upload_service = UploadService.from_config(StorageConfig.from_settings(settings))

    app.state.settings = settings
    app.state.token_service = TokenService.from_settings(settings)
    app.state.password_hasher = Argon2PasswordHasher()
    app.state.upload_service = upload_service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)
    app.mount(
        settings.UPLOAD_URL_PREFIX,
        StaticFiles(directory=upload_service.config.root, check_dir=False),
        name="uploads",
    )

    @app.exception_handler(BlogAPIError)
    async def blog_error_handler(request: Request, exc: BlogAPIError):
        """Map domain errors to their status code."""
        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthenticated) else None
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.message, "detail": exc.detail},
            headers=headers,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Malformed request bodies and parameters."""
        return JSONResponse(
            status_code=422,
            content={
                "error": "Request validation failed",
                "detail": jsonable_encoder(exc.errors()),
            },
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        """Handle HTTP exceptions with consistent response format."""
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail, "detail": None},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions."""
        logger.exception(f"Unexpected error: {exc}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "Internal server error",
                "detail": str(exc) if settings.DEBUG else None,
            },
        )

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check() -> HealthResponse:
        db_healthy = await check_db_connection()
        return HealthResponse(
            status="healthy" if db_healthy else "degraded",
            version=__version__,
            database=db_healthy,
        )

    @app.get("/", tags=["Root"])
    async def root() -> dict[str, str]:
        return {
            "name": "blogapi",
            "version": __version__,
            "docs": "/docs",
            "health": "/health",
        }

    return app


app = create_app()


# Entry point for development
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "blogapi.main:app",
        host="0.0.0.0",
        port=8000,
        reload=get_settings().DEBUG,
    )
