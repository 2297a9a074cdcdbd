"""
Packing transfer API routes.
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse
import structlog

from models.packing_transfer import PackingTransferCreate, PackingTransferResponse
from services.packing_transfer_service import get_packing_transfer_service
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

@router.post("", response_model=PackingTransferResponse, status_code=201)
def record_packing_transfer(request: PackingTransferCreate):
    """
    Record WIP packed into finished goods.

    Mints the packet label, appends the transfer to the ledger and
    deducts packing materials.
    """
    try:
        return get_packing_transfer_service().record_transfer(request)
    except Exception as e:
        return handle_error(e)
