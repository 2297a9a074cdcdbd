"""
Priority packing schemas.

Items below minimum stock, ranked by how urgently they need packing.
"""

from pydantic import Field
from typing import Optional
from enum import Enum

from models.base import BaseSchema


class PriorityBand(str, Enum):
    """Badge shown next to a priority score."""
    URGENT = "URGENT"  # Out of stock
    HIGH = "HIGH"      # Below 25% of minimum
    MEDIUM = "MEDIUM"  # Below 50% of minimum
    LOW = "LOW"        # Below minimum


class PriorityItem(BaseSchema):
    """One SKU/region that needs packing."""

    sku: str
    product_type: Optional[str] = None
    region: Optional[str] = None
    package_size: Optional[str] = None
    current_stock: int
    min_stock: int
    shortage: int = Field(..., gt=0)
    status: Optional[str] = None
    packaging_type: str
    packaging_qty: int
    units_needed: int = Field(
        ...,
        ge=1,
        description="Packaging units to cover the shortage (rounded up)"
    )
    priority: int
    band: PriorityBand
    minutes_per_unit: Optional[float] = None
    time_needed: Optional[float] = Field(
        None,
        description="Minutes to pack the shortage"
    )


class PackingTimeEstimate(BaseSchema):
    """
    Time to clear all shortages.

    Machines run in parallel, so the total is the slowest item.
    """

    total_minutes: float
    bottleneck_sku: Optional[str] = None
    available_minutes: int
    fits_in_shift: bool
    items_with_time: int
    items_without_time: int


class PriorityPackingResponse(BaseSchema):
    data: list[PriorityItem]
    total: int
    estimate: PackingTimeEstimate
