"""
Packet label API routes.

Labels are minted from a WIP batch ID, a region and a packing date.
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse
import structlog

from models.packet_label import (
    PacketLabelCreate,
    PacketLabelParts,
    PacketLabelResponse,
    NextSequenceRequest,
    NextSequenceResponse,
)
from services.packet_label_service import (
    encode,
    decode,
    next_sequence,
    packing_day_of,
    resolve_region_code,
)
from exceptions import AppError, FormatError

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

@router.post("", response_model=PacketLabelResponse)
async def create_packet_label(request: PacketLabelCreate):
    """
    Build a packet label.

    Without an explicit sequence, the next free one is taken from
    existing_labels.
    """
    try:
        sequence = request.sequence
        if sequence is None:
            sequence = next_sequence(request.region, request.packing_date, request.existing_labels)

        label = encode(request.wip_batch_id, request.region, request.packing_date, sequence)

        return PacketLabelResponse(
            label=label,
            sequence=sequence,
            parts=decode(label),
        )
    except Exception as e:
        return handle_error(e)


@router.get("/{label}", response_model=PacketLabelParts)
async def decode_packet_label(label: str):
    """Split a packet label into its fragments."""
    try:
        parts = decode(label)
        if parts is None:
            raise FormatError(
                message=f"'{label}' is not a packet label",
                code="INVALID_PACKET_LABEL",
                details={"label": label}
            )
        return parts
    except Exception as e:
        return handle_error(e)


@router.post("/next-sequence", response_model=NextSequenceResponse)
async def get_next_sequence(request: NextSequenceRequest):
    """Next free sequence for a region on a packing day."""
    try:
        return NextSequenceResponse(
            region_code=resolve_region_code(request.region),
            packing_day=packing_day_of(request.packing_date),
            next_sequence=next_sequence(
                request.region, request.packing_date, request.existing_labels
            ),
        )
    except Exception as e:
        return handle_error(e)
