"""
Packing material consumption schemas.
"""

from pydantic import Field
from decimal import Decimal

from models.base import BaseSchema


class MaterialConsumption(BaseSchema):
    """Amount of one material consumed by a packing run."""

    grams: Decimal
    kilograms: Decimal


class DeductionLineItem(BaseSchema):
    """Raw material ledger line for a packing material."""

    material: str
    category: str = "Packing Material"
    quantity: Decimal = Field(..., description="Quantity in kg")
    unit: str = "KG"


class ConsumptionResponse(BaseSchema):
    package_size: str
    unit_count: int
    consumption: dict[str, MaterialConsumption]
    deductions: list[DeductionLineItem]
    summary: str
