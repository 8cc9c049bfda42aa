"""
User Management API

FastAPI application entry point.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, List

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.config import get_settings
from src.database import engine, init_db, close_db
from src.api.routes import router as api_router
from src.api.middleware.request_id import RequestIdMiddleware
from src.api.middleware.request_logging import RequestLoggingMiddleware
from src.kernel.errors import AppError
from src.schemas.common import ErrorResponse, HealthResponse
from src.logging_config import configure_logging, get_logger

settings = get_settings()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan handler.

    Runs startup and shutdown tasks.
    """
    configure_logging(
        log_level=settings.log_level,
        environment=settings.environment,
        debug=settings.debug,
    )

    logger.info("Starting %s v%s", settings.project_name, settings.version)
    if settings.environment == "production":
        for name in settings.insecure_defaults():
            logger.warning("%s is using its insecure development default", name)

    await init_db()
    logger.info("Database initialized")

    yield

    logger.info("Shutting down...")
    await close_db()
    logger.info("Database connections closed")


app = FastAPI(
    title=settings.project_name,
    description="""
    User management REST API.

    - **Auth**: register, login, refresh access tokens
    - **Users**: profile, paginated listing, update, delete
    """,
    version=settings.version,
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)

_cors_origins = settings.cors_origins

# add_middleware stacks innermost-first: the last one added is outermost.
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(RequestIdMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _cors_headers(request: Request) -> dict:
    """CORS headers for error responses (500s are produced outside CORSMiddleware)."""
    origin = request.headers.get("origin") or ""
    if "*" in _cors_origins:
        allow_origin = origin or "*"
    else:
        allow_origin = origin if origin in _cors_origins else _cors_origins[0]
    return {
        "Access-Control-Allow-Origin": allow_origin,
        "Access-Control-Allow-Credentials": "true",
    }


def _error_response(
    request: Request,
    status_code: int,
    messages: List[str],
    headers: dict | None = None,
) -> JSONResponse:
    """Render the standard error envelope."""
    all_headers = _cors_headers(request)
    if headers:
        all_headers.update(headers)
    req_id = getattr(request.state, "request_id", None)
    if req_id:
        all_headers["X-Request-ID"] = req_id

    body = ErrorResponse(status_code=status_code, message=messages)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", by_alias=True),
        headers=all_headers,
    )


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    """Render domain errors raised by the services."""
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return _error_response(request, exc.status_code, exc.messages, headers)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render 401/404/405 etc. raised by dependencies and routing."""
    detail = exc.detail
    messages = [str(d) for d in detail] if isinstance(detail, list) else [str(detail)]
    return _error_response(request, exc.status_code, messages, getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Request validation errors are 400s, one message per failing field."""
    messages = []
    for error in exc.errors():
        # Drop the "body"/"query"/"path" prefix
        loc = [str(part) for part in error["loc"][1:]] or [str(p) for p in error["loc"]]
        field = ".".join(loc)
        messages.append(f"{field}: {error['msg']}" if field else error["msg"])
    return _error_response(request, status.HTTP_400_BAD_REQUEST, messages)


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Log unexpected exceptions and hide their details unless debugging."""
    logger.exception("Unhandled exception: %s", exc)
    message = f"{type(exc).__name__}: {exc}" if settings.debug else "Internal server error"
    return _error_response(request, status.HTTP_500_INTERNAL_SERVER_ERROR, [message])


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    """Check application and database health."""
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        database = "connected"
    except (SQLAlchemyError, OSError):
        logger.warning("Health check could not reach the database", exc_info=True)
        database = "unavailable"

    return HealthResponse(
        status="ok" if database == "connected" else "degraded",
        version=settings.version,
        database=database,
    )


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information."""
    return {
        "name": settings.project_name,
        "version": settings.version,
        "docs": "/docs" if settings.debug else "disabled",
        "api": settings.api_prefix or "/",
    }


app.include_router(api_router, prefix=settings.api_prefix)


# Main entry point for development
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=settings.debug,
    )
