# src/blog_engine/main.py
"""Main entry point for the Blog Engine application."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from blog_engine.api import (
    comments_router,
    favorites_router,
    posts_router,
    system_router,
    users_router,
)
from blog_engine.core.errors import BlogError, StorageError
from blog_engine.core.logging import configure_logging
from blog_engine.core.settings import settings
from blog_engine.db.session import create_tables
from blog_engine.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Blog backend with users, posts, comments and favorites",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Include API routers
app.include_router(users_router, prefix="/api")
app.include_router(posts_router, prefix="/api")
app.include_router(comments_router, prefix="/api")
app.include_router(favorites_router, prefix="/api")
app.include_router(system_router)


def _error_response(status_code: int, message: str, errors: list[dict[str, Any]] | None = None) -> JSONResponse:
    body = ErrorResponse(message=message, errors=errors).model_dump(exclude_none=True)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


@app.exception_handler(BlogError)
async def blog_error_handler(request: Request, exc: BlogError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc, exc_info=exc)
    else:
        logger.debug("%s %s rejected (%d): %s", request.method, request.url.path, exc.status_code, exc)
    return _error_response(exc.status_code, exc.public_message)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {"field": ".".join(str(part) for part in error.get("loc", ())), "message": error.get("msg", "")}
        for error in exc.errors()
    ]
    return _error_response(400, "Validation failed", errors)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return _error_response(exc.status_code, message)


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("%s %s hit a database error", request.method, request.url.path, exc_info=exc)
    return _error_response(500, StorageError.default_message)


@app.on_event("startup")
async def on_startup() -> None:
    configure_logging(settings.log_level)
    settings.ensure_secure()
    create_tables()
    logger.info(
        "%s %s started (environment=%s, database=%s)",
        settings.app_name,
        settings.app_version,
        settings.environment,
        settings.database_url.split("://", 1)[0],
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("blog_engine.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
