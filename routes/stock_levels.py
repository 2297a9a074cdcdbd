"""
Stock level API routes.

Classification, the finished goods dashboard, configured levels,
low stock alerts and the stock status export.
"""

from datetime import datetime

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse, Response
import structlog

from models.stock_level import (
    StockClassifyRequest,
    StockClassifyResponse,
    StockDashboardResponse,
    StockLevelSettings,
    StockRowStatus,
)
from services.stock_level_service import classify, percentage
from services.stock_dashboard_service import get_stock_dashboard_service
from services.stock_settings_service import get_stock_settings_service
from services.export_service import get_export_service
from exceptions import AppError

logger = structlog.get_logger(__name__)

router = APIRouter()

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


# ===================
# EXCEPTION HANDLER
# ===================

def handle_error(e: Exception) -> JSONResponse:
    """Convert exception to JSON response."""
    if isinstance(e, AppError):
        return JSONResponse(
            status_code=e.status_code,
            content=e.to_dict()
        )
    logger.error("unexpected_error", error=str(e), type=type(e).__name__)
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred"
            }
        }
    )


# ===================
# ROUTES
# ===================

@router.post("/classify", response_model=StockClassifyResponse)
async def classify_stock(request: StockClassifyRequest):
    """
    Classify one quantity against its min/max levels.

    Cells may be numbers or raw sheet text; blanks count as unset.
    """
    try:
        return StockClassifyResponse(
            status=classify(request.current_qty, request.min_level, request.max_level),
            percentage=percentage(request.current_qty, request.min_level, request.max_level),
        )
    except Exception as e:
        return handle_error(e)


@router.get("", response_model=StockDashboardResponse)
def get_stock_dashboard():
    """Every finished goods row classified, most urgent first."""
    try:
        return get_stock_dashboard_service().get_dashboard()
    except Exception as e:
        return handle_error(e)


@router.get("/alerts", response_model=list[StockRowStatus])
def get_stock_alerts():
    """Rows in the critical, low and below-min tiers."""
    try:
        return get_stock_dashboard_service().get_alert_rows()
    except Exception as e:
        return handle_error(e)


@router.post("/alerts/send")
def send_stock_alerts():
    """Send the low stock digest to Telegram."""
    try:
        sent = get_stock_dashboard_service().send_low_stock_digest()
        return {"sent": sent}
    except Exception as e:
        return handle_error(e)


@router.get("/settings", response_model=dict[str, StockLevelSettings])
def get_stock_settings(
    refresh: bool = Query(False, description="Bypass the settings cache")
):
    """Configured min/max/reorder levels per SKU."""
    try:
        return get_stock_settings_service().get_levels(force_refresh=refresh)
    except Exception as e:
        return handle_error(e)


@router.post("/settings/refresh", response_model=dict[str, StockLevelSettings])
def refresh_stock_settings():
    """Drop the cached levels and reload from the sheet."""
    try:
        service = get_stock_settings_service()
        service.clear_cache()
        return service.get_levels()
    except Exception as e:
        return handle_error(e)


@router.get("/export")
def export_stock_status():
    """Stock status as an Excel download."""
    try:
        rows = get_stock_dashboard_service().get_rows()
        generated_at = datetime.now()
        output = get_export_service().generate_stock_status_excel(rows, generated_at)

        filename = f"STOCK_STATUS_{generated_at.strftime('%Y%m%d')}.xlsx"
        return Response(
            content=output.getvalue(),
            media_type=XLSX_MEDIA_TYPE,
            headers={"Content-Disposition": f'attachment; filename="{filename}"'}
        )
    except Exception as e:
        return handle_error(e)
