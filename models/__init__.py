"""
Pydantic models for validation and serialization.
"""

from models.base import BaseSchema
from models.stock_level import (
    StockTier,
    StockStatus,
    StockLevelSettings,
    StockClassifyRequest,
    StockClassifyResponse,
    StockRowStatus,
    StockDashboardResponse,
)
from models.packet_label import (
    PacketLabelParts,
    PacketLabelCreate,
    PacketLabelResponse,
    NextSequenceRequest,
    NextSequenceResponse,
)
from models.packing_material import (
    MaterialConsumption,
    DeductionLineItem,
    ConsumptionResponse,
)
from models.priority_packing import (
    PriorityBand,
    PriorityItem,
    PackingTimeEstimate,
    PriorityPackingResponse,
)
from models.packing_transfer import (
    PackingTransferCreate,
    PackingTransferResponse,
)

__all__ = [
    # Base
    "BaseSchema",

    # Stock levels
    "StockTier",
    "StockStatus",
    "StockLevelSettings",
    "StockClassifyRequest",
    "StockClassifyResponse",
    "StockRowStatus",
    "StockDashboardResponse",

    # Packet labels
    "PacketLabelParts",
    "PacketLabelCreate",
    "PacketLabelResponse",
    "NextSequenceRequest",
    "NextSequenceResponse",

    # Packing materials
    "MaterialConsumption",
    "DeductionLineItem",
    "ConsumptionResponse",

    # Priority packing
    "PriorityBand",
    "PriorityItem",
    "PackingTimeEstimate",
    "PriorityPackingResponse",

    # Packing transfers
    "PackingTransferCreate",
    "PackingTransferResponse",
]
