"""Liveness and service information endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from blog_engine.api.dependencies import SessionDep
from blog_engine.core.settings import settings

logger = logging.getLogger(__name__)

router = APIRouter(tags=["system"])


@router.get("/health")
async def health_check(db: SessionDep) -> dict[str, object]:
    """Health check endpoint to verify the service and its database are reachable."""
    try:
        db.execute(text("SELECT 1"))
        database = "ok"
    except SQLAlchemyError as err:
        logger.warning("Database health check failed: %s", err)
        database = "unavailable"
    return {"success": database == "ok", "status": "ok", "database": database}


@router.get("/")
async def root() -> dict[str, object]:
    """Root endpoint with basic information about the API."""
    return {
        "success": True,
        "name": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc",
    }
