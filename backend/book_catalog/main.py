"""FastAPI application entry point."""
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from book_catalog import __version__
from book_catalog.api import api_router
from book_catalog.config import Settings, get_settings
from book_catalog.core.exceptions import AppException
from book_catalog.core.logging import get_logger, setup_logging
from book_catalog.core.security import PasswordHasher, TokenService
from book_catalog.dependencies import get_app_settings
from book_catalog.repositories.books import BookRepository
from book_catalog.repositories.users import UserRepository
from book_catalog.schemas.common import HealthResponse
from book_catalog.services.auth_service import AuthService
from book_catalog.storage import StorageBackend, build_storage

logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup and shutdown."""
    storage: StorageBackend = app.state.storage
    # Startup: refuse to serve traffic against an unusable store
    await storage.initialize()
    await storage.load()
    logger.info(f"Catalog storage ready (mode={getattr(storage, 'name', type(storage).__name__)})")
    yield
    # Shutdown
    await storage.close()
    logger.info("Catalog storage closed")


def create_app(
    settings: Optional[Settings] = None,
    storage: Optional[StorageBackend] = None,
) -> FastAPI:
    """Build the application and wire its components."""
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        description="Multi-tenant book catalog API",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )

    storage = storage if storage is not None else build_storage(settings)
    hasher = PasswordHasher(rounds=settings.password_hash_rounds)
    tokens = TokenService(
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        expiration_hours=settings.jwt_expiration_hours,
    )
    users = UserRepository(storage, hasher)

    app.state.settings = settings
    app.state.storage = storage
    app.state.token_service = tokens
    app.state.book_repository = BookRepository(storage)
    app.state.auth_service = AuthService(users, tokens)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app, settings)

    # Include API router
    app.include_router(api_router)

    # Health check endpoint
    @app.get("/health", response_model=HealthResponse)
    async def health_check(app_settings: Settings = Depends(get_app_settings)):
        """Health check endpoint."""
        return {"status": "healthy", "app": app_settings.app_name}

    # Root endpoint
    @app.get("/")
    async def root():
        """Root endpoint."""
        return {"name": settings.app_name, "version": __version__}

    return app


def register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException):
        """Handle application exceptions."""
        if exc.status_code >= 500:
            logger.error(f"{exc.error_code} on {request.method} {request.url.path}: {exc.message}")
            message = "Internal server error"
        else:
            message = exc.message
        headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": message, "error_code": exc.error_code},
            headers=headers,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Report malformed request bodies as 400."""
        errors = exc.errors()
        missing = any(error.get("type") == "missing" for error in errors)
        return JSONResponse(
            status_code=400,
            content={
                "message": "Missing required fields" if missing else "Invalid request body",
                "error_code": "VALIDATION_ERROR",
                "errors": jsonable_encoder(
                    [{"loc": e.get("loc"), "msg": e.get("msg"), "type": e.get("type")} for e in errors]
                ),
            },
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Handle HTTP exceptions."""
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions."""
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")

        content = {"message": "Internal server error"}
        if settings.debug:
            content["type"] = type(exc).__name__
        return JSONResponse(status_code=500, content=content)


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "book_catalog.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
