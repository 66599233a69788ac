"""FastAPI application entry point.

Askboard API - questions, answers and a cached question feed.
"""

from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator
import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from askboard.routes import api_router
from askboard.schemas import ErrorDetail, ErrorResponse
from askboard.services.errors import QuestionError, ValidationFailed
from askboard.settings import get_settings
from askboard.stores.postgres import init_db, close_db, ping_db
from askboard.stores.redis import init_redis, close_redis

logger = logging.getLogger("uvicorn.error")


def _error_response(status_code: int, code: str, message: str, detail: object = None) -> JSONResponse:
    body = ErrorResponse(error=ErrorDetail(code=code, message=message, detail=detail))
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Handles startup and shutdown events.
    """
    settings = get_settings()

    # Initialize database (skip in tests if no DB available)
    try:
        await init_db()
        await ping_db()
        logger.info("Postgres connected")
    except Exception:
        logger.exception("Postgres init failed")

    # Redis is only needed when it backs the question cache
    if settings.cache_backend == "redis":
        try:
            await init_redis()
        except Exception:
            logger.exception("Redis init failed")
    else:
        logger.info(f"Using {settings.cache_backend} cache backend")

    yield

    await close_redis()
    await close_db()


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Questions and answers API",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(QuestionError)
    async def question_error_handler(request: Request, exc: QuestionError) -> JSONResponse:
        """NotFound -> 404, Forbidden -> 403, ValidationFailed -> 422."""
        return _error_response(exc.status_code, exc.code, exc.message, exc.detail)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return _error_response(
            ValidationFailed.status_code,
            ValidationFailed.code,
            "Request validation failed",
            jsonable_encoder(exc.errors()),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Global exception handler returning structured error format."""
        return _error_response(
            500,
            "INTERNAL_ERROR",
            str(exc) if settings.debug else "Internal server error",
        )

    @app.get("/health", tags=["health"])
    async def health_check() -> dict[str, bool]:
        """Health check endpoint."""
        return {"ok": True}

    app.include_router(api_router)

    return app


# Application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "askboard.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
