"""
Liveness and database readiness probes.

Routes: GET /health, GET /health/db
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ecocycle.boundary.db import get_async_db

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


class HealthResponse(BaseModel):
    status: str
    message: str


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    return HealthResponse(status="healthy", message="Server Healthy")


@router.get("/db", response_model=HealthResponse, responses={503: {"model": HealthResponse}})
async def health_check_db(db: AsyncSession = Depends(get_async_db)):
    """Round-trip ``SELECT 1``; 503 when the pool cannot reach Postgres."""
    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error("Database probe failed", extra={"error_type": type(e).__name__, "error": str(e)})
        unhealthy = HealthResponse(status="unhealthy", message="Database unreachable")
        return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=unhealthy.model_dump())
    return HealthResponse(status="healthy", message="Database connection OK")
