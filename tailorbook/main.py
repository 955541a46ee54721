from fastapi import FastAPI, Depends, Request, Response, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from tailorbook.config import settings
from tailorbook.api import customers, orders, dashboard
from tailorbook.dependencies import get_order_repo, get_storage
from tailorbook.services.notifier import DueSoonNotifier
from tailorbook.storage.base import StorageBackend, StorageReadError, StorageWriteError
import time
import logging

# Configure logging
logger = logging.getLogger(__name__)


# Lifespan context manager
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.
    Starts the due-soon poller and stops it when the app goes down.
    """
    app.state.start_time = time.time()

    logger.info("=" * 80)
    logger.info("REGISTERED ROUTES AT STARTUP:")
    for route in app.routes:
        if hasattr(route, 'path') and hasattr(route, 'methods'):
            logger.info(f"  {sorted(route.methods)} {route.path}")
    logger.info("=" * 80)

    app.state.notifier.start()
    try:
        yield
    finally:
        await app.state.notifier.stop()


# Create FastAPI app
app = FastAPI(
    title="Tailorbook",
    description="Customers, measurements and garment orders for a tailoring studio",
    version="1.0.0",
    lifespan=lifespan
)

app.state.notifier = DueSoonNotifier(lambda: get_order_repo(get_storage()))


@app.exception_handler(StorageReadError)
async def storage_read_error_handler(request: Request, exc: StorageReadError):
    logger.error(f"STORAGE READ ERROR: {exc}")
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": str(exc), "type": type(exc).__name__, "status": "error"}
    )


@app.exception_handler(StorageWriteError)
async def storage_write_error_handler(request: Request, exc: StorageWriteError):
    logger.error(f"STORAGE WRITE ERROR: {exc}")
    return JSONResponse(
        status_code=status.HTTP_507_INSUFFICIENT_STORAGE,
        content={"detail": str(exc), "type": type(exc).__name__, "status": "error"}
    )


# Global Exception Handler to prevent raw text "Internal Server Error"
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"GLOBAL ERROR: {str(exc)}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": str(exc), "type": type(exc).__name__, "status": "error"}
    )


# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(customers.router)
app.include_router(orders.router)
app.include_router(dashboard.router)


@app.get("/api/v1/health")
def health_check(response: Response, storage: StorageBackend = Depends(get_storage)):
    """Report storage backend health"""
    healthy = storage.health()

    if not healthy:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return {
        "status": "healthy" if healthy else "unhealthy",
        "storage": storage.name,
        "uptime_seconds": round(time.time() - getattr(app.state, "start_time", time.time()), 1),
    }
