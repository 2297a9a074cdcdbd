"""
Packing transfer schemas.

A transfer moves WIP into packed finished goods and is recorded as one
row in the packing ledger plus one raw material "Stock Out" row per
packing material consumed.
"""

from pydantic import Field, field_validator
from typing import Optional
from datetime import date

from models.base import BaseSchema
from models.packing_material import DeductionLineItem


class PackingTransferCreate(BaseSchema):
    """
    Record a new packing transfer.

    Required: wip_batch_id, region, packing_date, sku, units_packed
    """

    wip_batch_id: str = Field(..., min_length=1)
    region: str = Field(..., min_length=1)
    packing_date: date
    sku: str = Field(..., min_length=1)
    units_packed: int = Field(
        ...,
        gt=0,
        description="Bundles/cartons packed"
    )
    operator: Optional[str] = Field(None, max_length=100)
    shift: Optional[str] = Field(None, max_length=50)
    line: Optional[str] = Field(None, max_length=50)
    notes: Optional[str] = Field(None, max_length=500)

    @field_validator("sku")
    @classmethod
    def uppercase_sku(cls, v: str) -> str:
        """SKUs are stored uppercase."""
        return v.upper()


class PackingTransferResponse(BaseSchema):
    transfer_id: str
    packet_label: str
    sequence: int
    total_units: int
    weight_consumed_t: float = Field(..., description="WIP consumed in tonnes")
    deductions: list[DeductionLineItem]
