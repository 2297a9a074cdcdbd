"""
Priority packing: which finished goods to pack first.

Scores every SKU/region below its minimum stock, ranks them, and
estimates how long the packing floor needs to clear the shortages.
"""

import math
from typing import Iterable, Mapping, Optional

import structlog

from config import settings
from config.packing import (
    RETAIL_PRODUCTS,
    PACKING_TIME_MINUTES,
    PRIORITY_CRITICAL_PCT,
    PRIORITY_LOW_PCT,
    PRIORITY_SCORE_OUT,
    PRIORITY_SCORE_CRITICAL,
    PRIORITY_SCORE_LOW,
    PRIORITY_SCORE_BELOW_MIN,
)
from integrations.google_sheets import SheetsClient, get_sheets_client
from models.priority_packing import (
    PriorityBand,
    PriorityItem,
    PackingTimeEstimate,
    PriorityPackingResponse,
)
from utils.numbers import parse_int

logger = structlog.get_logger(__name__)


def calculate_priority(current: int, minimum: int) -> int:
    """
    Priority score for an item below minimum.

        stock ≤ 0          → 100 (out)
        < 25% of minimum   → 80
        < 50% of minimum   → 60
        otherwise          → 40
    """
    if current <= 0:
        return PRIORITY_SCORE_OUT
    if minimum <= 0:
        return PRIORITY_SCORE_BELOW_MIN

    pct = current / minimum * 100
    if pct < PRIORITY_CRITICAL_PCT:
        return PRIORITY_SCORE_CRITICAL
    if pct < PRIORITY_LOW_PCT:
        return PRIORITY_SCORE_LOW
    return PRIORITY_SCORE_BELOW_MIN


def priority_band(priority: int) -> PriorityBand:
    """Badge for a priority score."""
    if priority >= PRIORITY_SCORE_OUT:
        return PriorityBand.URGENT
    if priority >= PRIORITY_SCORE_CRITICAL:
        return PriorityBand.HIGH
    if priority >= PRIORITY_SCORE_LOW:
        return PriorityBand.MEDIUM
    return PriorityBand.LOW


def _build_item(row: Mapping[str, str]) -> Optional[PriorityItem]:
    sku = (row.get("SKU") or "").strip()
    product = RETAIL_PRODUCTS.get(sku)

    current = parse_int(row.get("Current Stock")) or 0
    minimum = parse_int(row.get("Minimum Stock")) or 0

    if not product or minimum <= 0:
        return None

    shortage = minimum - current
    if shortage <= 0:
        return None

    priority = calculate_priority(current, minimum)
    minutes_per_unit = PACKING_TIME_MINUTES.get(sku)

    return PriorityItem(
        sku=sku,
        product_type=row.get("Product Type") or product["product_type"],
        region=row.get("Region") or None,
        package_size=row.get("Package Size") or product["size"],
        current_stock=current,
        min_stock=minimum,
        shortage=shortage,
        status=row.get("Status") or None,
        packaging_type=product["packaging"]["type"],
        packaging_qty=product["packaging"]["quantity"],
        units_needed=math.ceil(shortage / product["packaging"]["quantity"]),
        priority=priority,
        band=priority_band(priority),
        minutes_per_unit=minutes_per_unit,
        time_needed=shortage * minutes_per_unit if minutes_per_unit else None,
    )


def build_priority_list(rows: Iterable[Mapping[str, str]]) -> list[PriorityItem]:
    """
    Items needing packing, highest priority first.

    Skips SKUs outside the retail catalog, rows with no minimum set,
    and rows already at or above minimum. Ties keep sheet order.
    """
    items = [item for item in (_build_item(row) for row in rows) if item]
    items.sort(key=lambda item: item.priority, reverse=True)

    logger.info(
        "priority_list_built",
        items=len(items),
        urgent=sum(1 for i in items if i.band == PriorityBand.URGENT)
    )

    return items


def estimate_packing_time(
    items: list[PriorityItem],
    available_minutes: int
) -> PackingTimeEstimate:
    """
    Time to pack every shortage.

    Each SKU runs on its own machine, so the slowest item sets the
    total. Items without a configured packing time are counted but
    not timed.
    """
    timed = [item for item in items if item.time_needed is not None]

    if not timed:
        return PackingTimeEstimate(
            total_minutes=0,
            bottleneck_sku=None,
            available_minutes=available_minutes,
            fits_in_shift=True,
            items_with_time=0,
            items_without_time=len(items),
        )

    bottleneck = max(timed, key=lambda item: item.time_needed)

    return PackingTimeEstimate(
        total_minutes=bottleneck.time_needed,
        bottleneck_sku=bottleneck.sku,
        available_minutes=available_minutes,
        fits_in_shift=bottleneck.time_needed <= available_minutes,
        items_with_time=len(timed),
        items_without_time=len(items) - len(timed),
    )


class PriorityPackingService:
    """Reads finished goods and builds the priority packing list."""

    def __init__(self, sheets: Optional[SheetsClient] = None):
        self.sheets = sheets or get_sheets_client()
        self.sheet_name = settings.finished_goods_sheet

    def get_priority_list(
        self,
        available_minutes: Optional[int] = None
    ) -> PriorityPackingResponse:
        """
        Priority list and time estimate.

        Args:
            available_minutes: Shift length (defaults to settings)
        """
        if available_minutes is None:
            available_minutes = settings.packing_available_minutes

        records = self.sheets.read_records(self.sheet_name, "A1:J1000")
        items = build_priority_list(records)

        return PriorityPackingResponse(
            data=items,
            total=len(items),
            estimate=estimate_packing_time(items, available_minutes),
        )


# Singleton instance
_priority_packing_service: Optional[PriorityPackingService] = None


def get_priority_packing_service() -> PriorityPackingService:
    """Get or create PriorityPackingService instance."""
    global _priority_packing_service
    if _priority_packing_service is None:
        _priority_packing_service = PriorityPackingService()
    return _priority_packing_service
