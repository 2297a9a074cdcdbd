"""
Stock level schemas for classification and dashboard display.
"""

from pydantic import Field
from typing import Optional, Union
from enum import Enum

from models.base import BaseSchema


class StockTier(str, Enum):
    """Urgency tiers, from most to least urgent."""
    CRITICAL = "critical"    # Below 20% of min
    LOW = "low"              # Below 50% of min
    BELOW_MIN = "below-min"  # Below min
    OVERSTOCK = "overstock"  # Above 150% of max
    HIGH = "high"            # Above max
    NORMAL = "normal"        # Within range
    UNKNOWN = "unknown"      # No limits set


class StockStatus(BaseSchema):
    """Classification result for one stock level."""

    status: StockTier
    color: str
    message: str
    icon: str
    bg_color: str
    text_color: str
    border_color: str
    severity: int = Field(
        ...,
        description="Sort rank, 0 = most urgent"
    )


class StockLevelSettings(BaseSchema):
    """Configured levels for one SKU."""

    min: float = 0
    max: float = 0
    reorder: float = 0


# Cell values as they arrive from the sheet or an API caller
CellValue = Optional[Union[float, str]]


class StockClassifyRequest(BaseSchema):
    """Classify a single quantity against its levels."""

    current_qty: CellValue = None
    min_level: CellValue = None
    max_level: CellValue = None


class StockClassifyResponse(BaseSchema):
    """Classification plus fill percentage."""

    status: StockStatus
    percentage: float = Field(..., ge=0, le=100)


class StockRowStatus(BaseSchema):
    """One finished-goods row after classification."""

    sku: str
    product_type: Optional[str] = None
    region: Optional[str] = None
    package_size: Optional[str] = None
    current_qty: float
    min_level: Optional[float] = None
    max_level: Optional[float] = None
    status: StockStatus
    percentage: float


class StockDashboardResponse(BaseSchema):
    """All rows sorted by urgency, with counts per tier."""

    data: list[StockRowStatus]
    total: int
    counts: dict[str, int]
