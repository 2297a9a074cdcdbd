"""
Packing material API routes.
"""

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse
import structlog

from models.packing_material import ConsumptionResponse
from services.packing_material_service import (
    consumption,
    for_deduction,
    format_consumption,
    normalize_package_size,
)
from exceptions import AppError

logger = structlog.get_logger(__name__)

router = APIRouter()


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

@router.get("/consumption", response_model=ConsumptionResponse)
async def get_consumption(
    package_size: str = Query(..., description="Package size like 25g or 200 g"),
    unit_count: int = Query(..., ge=0, description="Units packed")
):
    """
    Packing material used for a number of units.

    Sizes without packing material give an empty breakdown.
    """
    try:
        consumed = consumption(package_size, unit_count)
        return ConsumptionResponse(
            package_size=normalize_package_size(package_size),
            unit_count=unit_count,
            consumption=consumed,
            deductions=for_deduction(package_size, unit_count),
            summary=format_consumption(consumed),
        )
    except Exception as e:
        return handle_error(e)
