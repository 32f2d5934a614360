import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from rentman import __version__
from rentman.api.deps import engine
from rentman.api.routers.health import router as health_router
from rentman.api.routers.reservations import router as reservations_router
from rentman.config import get_settings
from rentman.infrastructure.db.engine import create_tables

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if not settings.use_in_memory:
        # Crea tablas si no existen (dev/demo); en producción las maneja la migración
        await create_tables(engine)
    logger.info(
        "Rentman reservations started",
        extra={"use_in_memory": settings.use_in_memory, "pending_soft_hold": settings.pending_soft_hold},
    )
    yield
    await engine.dispose()


app = FastAPI(
    title="Rentman Reservations API",
    version=__version__,
    lifespan=lifespan,
)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Errores no controlados: se registran completos y al cliente solo se le da un error_id."""
    error_id = str(uuid.uuid4())

    logger.error(
        "Unhandled exception occurred",
        exc_info=exc,
        extra={
            "error_id": error_id,
            "path": request.url.path,
            "method": request.method,
            "client_host": request.client.host if request.client else None,
        },
    )

    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error",
            "error_id": error_id,
            "message": "An unexpected error occurred. Please contact support with the error_id if the issue persists.",
        },
    )


app.include_router(health_router, tags=["Health"])
app.include_router(reservations_router, prefix="/api/v1", tags=["Reservations"])
