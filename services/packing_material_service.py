"""
Packing material consumption.

Converts a packing run (package size × bundles/cartons) into grams of
secondary packing material, and into ledger lines for deducting that
material from raw material stock.
"""

import re
from decimal import Decimal
from typing import Union

from config.packing import (
    PACKING_MATERIAL_CONSUMPTION,
    PACKING_MATERIAL_CATEGORY,
    PACKING_MATERIAL_UNIT,
)
from models.packing_material import MaterialConsumption, DeductionLineItem

GRAMS_PER_KG = Decimal("1000")


def normalize_package_size(package_size: str) -> str:
    """
    Match catalog spellings to consumption table keys.

    "200 g" → "200g", "10 KG" → "10kg"
    """
    if not package_size:
        return ""
    return re.sub(r"\s+", "", package_size).lower()


def _as_decimal(value: Union[int, float, Decimal]) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def consumption(
    package_size: str,
    unit_count: Union[int, float, Decimal]
) -> dict[str, MaterialConsumption]:
    """
    Material used by a packing run.

    Unknown sizes and sizes without packing material give an empty
    dict. Amounts are not rounded.

    Example:
        consumption("25g", 100)["Packing Roll"]
        → grams=62.4000, kilograms=0.0624000
    """
    per_unit = PACKING_MATERIAL_CONSUMPTION.get(normalize_package_size(package_size))
    if not per_unit:
        return {}

    count = _as_decimal(unit_count)
    result = {}
    for material, grams_per_unit in per_unit.items():
        grams = grams_per_unit * count
        result[material] = MaterialConsumption(
            grams=grams,
            kilograms=grams / GRAMS_PER_KG,
        )
    return result


def for_deduction(
    package_size: str,
    unit_count: Union[int, float, Decimal]
) -> list[DeductionLineItem]:
    """
    Ledger lines for subtracting packing material from raw material stock.

    One line per material, in configuration order, quantity in kg.
    """
    return [
        DeductionLineItem(
            material=material,
            category=PACKING_MATERIAL_CATEGORY,
            quantity=amounts.kilograms,
            unit=PACKING_MATERIAL_UNIT,
        )
        for material, amounts in consumption(package_size, unit_count).items()
    ]


def format_consumption(consumed: dict[str, MaterialConsumption]) -> str:
    """
    Human-readable summary.

    Amounts of 1 kg or more show in kg (3 d.p.), smaller ones in g (2 d.p.).
    """
    lines = []
    for material, amounts in consumed.items():
        if amounts.kilograms >= 1:
            lines.append(f"{material}: {amounts.kilograms:.3f} kg")
        else:
            lines.append(f"{material}: {amounts.grams:.2f} g")
    return ", ".join(lines)


def uses_packing_materials(package_size: str) -> bool:
    """Whether the size consumes any packing material."""
    return bool(PACKING_MATERIAL_CONSUMPTION.get(normalize_package_size(package_size)))
