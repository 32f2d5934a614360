"""
Health checks para orquestadores (K8s, Docker, etc.)

- /health y /health/live: liveness, siempre 200 mientras el proceso corre
- /health/db: conectividad con la base de datos
- /health/ready: readiness; en modo in-memory no depende de la base
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from rentman.api.deps import get_db_session
from rentman.config import Settings, get_settings

logger = logging.getLogger(__name__)

router = APIRouter()

SERVICE_NAME = "rentman-reservations"


async def _database_ok(session: AsyncSession) -> bool:
    try:
        result = await session.execute(text("SELECT 1"))
        result.scalar()
        return True
    except Exception as e:
        logger.error("Database health check failed", exc_info=e)
        return False


@router.get("/health")
async def health_check():
    return {"status": "ok", "service": SERVICE_NAME}


@router.get("/health/live")
async def health_check_live():
    """Alias de /health para la convención de Kubernetes."""
    return {"status": "ok", "service": SERVICE_NAME}


@router.get("/health/db")
async def health_check_db(session: AsyncSession = Depends(get_db_session)):
    if await _database_ok(session):
        return {"status": "healthy", "component": "database"}
    return JSONResponse(
        status_code=503,
        content={
            "status": "unhealthy",
            "component": "database",
            "error": "Database connection failed",
        },
    )


@router.get("/health/ready")
async def health_check_ready(
    session: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_settings),
):
    health_status = {
        "status": "ready",
        "mode": "in_memory" if settings.use_in_memory else "sql",
        "checks": {},
    }
    if settings.use_in_memory:
        health_status["checks"]["database"] = "skipped"
        return health_status

    if not await _database_ok(session):
        health_status["status"] = "not_ready"
        health_status["checks"]["database"] = "unhealthy"
        return JSONResponse(status_code=503, content=health_status)

    health_status["checks"]["database"] = "healthy"
    return health_status
