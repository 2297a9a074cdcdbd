"""
Priority packing API routes.
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse, Response
import structlog

from models.priority_packing import PriorityPackingResponse
from services.priority_packing_service import get_priority_packing_service
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

@router.get("", response_model=PriorityPackingResponse)
def get_priority_packing(
    available_minutes: Optional[int] = Query(None, ge=0, description="Shift length in minutes")
):
    """
    Items below minimum, highest priority first, with a time estimate.
    """
    try:
        return get_priority_packing_service().get_priority_list(available_minutes)
    except Exception as e:
        return handle_error(e)


@router.get("/export")
def export_priority_packing(
    available_minutes: Optional[int] = Query(None, ge=0)
):
    """Priority packing list as an Excel download."""
    try:
        result = get_priority_packing_service().get_priority_list(available_minutes)
        output = get_export_service().generate_priority_packing_excel(result.data, result.estimate)

        filename = f"PRIORITY_PACKING_{datetime.now().strftime('%Y%m%d')}.xlsx"
        return Response(
            content=output.getvalue(),
            media_type=XLSX_MEDIA_TYPE,
            headers={"Content-Disposition": f'attachment; filename="{filename}"'}
        )
    except Exception as e:
        return handle_error(e)
