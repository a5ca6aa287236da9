from contextlib import asynccontextmanager
from datetime import datetime, timezone
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
import time
import uvicorn

from app.core.config import settings
from app.core.database import init_db
from app.core.exceptions import (
    LearnifyException,
    ValidationError,
    NotFoundError,
    ConflictError,
    ReferentialIntegrityError,
    AuthenticationError,
    AuthorizationError
)
from app.schemas.common import ErrorResponse

# Import models to register them with SQLModel
from app import models  # noqa: F401

# Import API router
from app.api import api_router

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

APP_VERSION = "1.0.0"
STARTED_AT = time.monotonic()

STATUS_BY_EXCEPTION = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    ConflictError: status.HTTP_400_BAD_REQUEST,
    ReferentialIntegrityError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    AuthenticationError: status.HTTP_401_UNAUTHORIZED,
    AuthorizationError: status.HTTP_403_FORBIDDEN,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize database on startup."""
    init_db()
    logger.info(f"Learnify API started ({settings.environment})")
    logger.info(f"CORS enabled for: {', '.join(settings.allowed_origins)}")
    yield


app = FastAPI(title="Learnify API", version=APP_VERSION, lifespan=lifespan)


def error_response(status_code: int, message: str, error: str | None = None, **extra) -> JSONResponse:
    content = ErrorResponse(message=message, error=error).model_dump(exclude_none=True)
    content.update(extra)
    return JSONResponse(status_code=status_code, content=content)


# Add exception handler for validation errors to log details
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report request validation failures as 400 with a readable message."""
    problems = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path"))
        problems.append(f"{location}: {err.get('msg')}" if location else str(err.get("msg")))
    message = "; ".join(problems) or "Invalid request"
    logger.warning(f"Validation error on {request.method} {request.url.path}: {message}")
    return error_response(status.HTTP_400_BAD_REQUEST, message)


# Add exception handler for custom application exceptions
@app.exception_handler(LearnifyException)
async def learnify_exception_handler(request: Request, exc: LearnifyException):
    """Handle custom application exceptions."""
    status_code = STATUS_BY_EXCEPTION.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
    logger.warning(f"Application exception on {request.method} {request.url.path}: {type(exc).__name__}: {exc.message}")
    response = error_response(status_code, exc.message)
    if isinstance(exc, AuthenticationError):
        response.headers["WWW-Authenticate"] = "Bearer"
    return response


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Wrap framework HTTP errors (unknown routes, bad methods) in the error envelope."""
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        return error_response(exc.status_code, "Route not found", path=request.url.path)
    return error_response(exc.status_code, str(exc.detail))


# Add global exception handler for unhandled errors
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Catch all unhandled exceptions and answer with a generic 500."""
    logger.error(f"Unhandled exception on {request.method} {request.url.path}", exc_info=exc)

    # Raw error detail only outside production
    if settings.is_production:
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Server error")
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Server error", error=str(exc))


if not settings.is_production:
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        response = await call_next(request)
        origin = request.headers.get("origin") or "No origin"
        logger.info(f"{request.method} {request.url.path} - Origin: {origin} - {response.status_code}")
        return response


# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-Requested-With", "Accept", "Origin"],
    max_age=600,
)


@app.get("/")
async def root():
    return {
        "success": True,
        "message": "Welcome to Learnify API",
        "version": APP_VERSION,
        "environment": settings.environment,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "endpoints": {
            "auth": f"{settings.api_prefix}/auth",
            "topics": f"{settings.api_prefix}/topics",
            "lessons": f"{settings.api_prefix}/lessons",
            "search": f"{settings.api_prefix}/search",
            "admin": {
                "topics": f"{settings.api_prefix}/admin/topics",
                "lessons": f"{settings.api_prefix}/admin/lessons",
                "stats": f"{settings.api_prefix}/admin/stats",
            },
        },
    }


@app.get(f"{settings.api_prefix}/health")
async def health():
    return {
        "success": True,
        "status": "healthy",
        "uptime": round(time.monotonic() - STARTED_AT, 3),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


# Include API router
app.include_router(api_router, prefix=settings.api_prefix)


def run():
    """Console entry point: serve the API with uvicorn."""
    uvicorn.run("app.main:app", host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    run()
