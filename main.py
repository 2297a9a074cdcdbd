"""
Packing Tracker — Main Application

FastAPI application entry point.
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import structlog
from datetime import datetime, timezone

from config import settings

# Configure structured logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.JSONRenderer() if settings.is_production
            else structlog.dev.ConsoleRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger(__name__)


def sheets_status() -> dict:
    """Which Google Sheets credentials are present."""
    return {
        "configured": settings.sheets_configured,
        "spreadsheet_id": bool(settings.spreadsheet_id),
        "api_key": bool(settings.google_sheets_api_key),
        "access_token": bool(settings.google_access_token),
    }


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup: Report Google Sheets and Telegram configuration
    """
    logger.info(
        "application_starting",
        environment=settings.environment,
        debug=settings.debug
    )

    if settings.sheets_configured:
        logger.info("google_sheets_configured", **sheets_status())
    else:
        logger.warning("google_sheets_not_configured", **sheets_status())

    if not settings.telegram_configured:
        logger.info("telegram_alerts_disabled")

    yield

    logger.info("application_shutting_down")


# Create FastAPI app
app = FastAPI(
    title="Packing Tracker",
    description="Finished goods stock levels, packet labels and packing material tracking",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)


# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://localhost:5173",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ===================
# ROUTES
# ===================

@app.get("/health")
async def health_check():
    """
    Health check endpoint.

    Returns:
        Basic health status and Google Sheets configuration
    """
    sheets = sheets_status()

    return {
        "status": "healthy" if sheets["configured"] else "degraded",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": settings.environment,
        "google_sheets": sheets,
        "telegram": settings.telegram_configured,
    }


@app.get("/")
async def root():
    """
    Root endpoint.

    Returns:
        API information and available endpoints
    """
    return {
        "name": "Packing Tracker API",
        "version": "0.1.0",
        "docs": "/docs" if settings.debug else "Disabled in production",
        "health": "/health",
        "endpoints": {
            "stock_levels": "/api/stock-levels",
            "packet_labels": "/api/packet-labels",
            "packing_materials": "/api/packing-materials",
            "priority_packing": "/api/priority-packing",
            "packing_transfers": "/api/packing-transfers",
        }
    }


# ===================
# ERROR HANDLERS
# ===================

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """
    Global exception handler.

    Catches unhandled exceptions and returns standard error format.
    """
    logger.error(
        "unhandled_exception",
        path=request.url.path,
        method=request.method,
        error=str(exc),
        error_type=type(exc).__name__
    )

    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred",
                "details": str(exc) if settings.debug else None,
                "timestamp": datetime.now(timezone.utc).isoformat()
            }
        }
    )


# ===================
# INCLUDE ROUTERS
# ===================
from routes.stock_levels import router as stock_levels_router
from routes.packet_labels import router as packet_labels_router
from routes.packing_materials import router as packing_materials_router
from routes.priority_packing import router as priority_packing_router
from routes.packing_transfers import router as packing_transfers_router

app.include_router(stock_levels_router, prefix="/api/stock-levels", tags=["Stock Levels"])
app.include_router(packet_labels_router, prefix="/api/packet-labels", tags=["Packet Labels"])
app.include_router(packing_materials_router, prefix="/api/packing-materials", tags=["Packing Materials"])
app.include_router(priority_packing_router, prefix="/api/priority-packing", tags=["Priority Packing"])
app.include_router(packing_transfers_router, prefix="/api/packing-transfers", tags=["Packing Transfers"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug
    )
