"""
Stock level classification: Core business logic.

Maps a (quantity, min, max) triple to an urgency tier used for badge
colour and sort order on the inventory dashboards.

Inputs come straight from sheet cells, so parsing is permissive:
missing or non-numeric values never raise, they degrade to "unknown"
or to the default bounds below.
"""

import math
from typing import Any, Mapping, Optional

from config.packing import STOCK_LEVEL_THRESHOLDS
from models.stock_level import (
    StockTier,
    StockStatus,
    StockLevelSettings,
    StockRowStatus,
)
from utils.numbers import parse_number, number_or


# Presentation constants per tier
_TIER_DISPLAY: dict[StockTier, dict[str, Any]] = {
    StockTier.CRITICAL: {
        "color": "red",
        "message": "🔴 Critical - Immediate reorder required",
        "icon": "⚠️",
        "severity": 0,
    },
    StockTier.LOW: {
        "color": "orange",
        "message": "🟠 Low Stock - Reorder soon",
        "icon": "⚡",
        "severity": 1,
    },
    StockTier.BELOW_MIN: {
        "color": "yellow",
        "message": "🟡 Below Minimum - Reorder recommended",
        "icon": "📉",
        "severity": 2,
    },
    StockTier.OVERSTOCK: {
        "color": "purple",
        "message": "🟣 Overstock - Consider redistribution",
        "icon": "📈",
        "severity": 3,
    },
    StockTier.HIGH: {
        "color": "blue",
        "message": "🔵 Above Maximum",
        "icon": "⬆️",
        "severity": 4,
    },
    StockTier.NORMAL: {
        "color": "green",
        "message": "🟢 Optimal Level",
        "icon": "✓",
        "severity": 5,
    },
    StockTier.UNKNOWN: {
        "color": "gray",
        "message": "No limits set",
        "icon": "?",
        "severity": 6,
    },
}


def build_status(tier: StockTier) -> StockStatus:
    """Status object with the fixed colours for a tier."""
    display = _TIER_DISPLAY[tier]
    color = display["color"]
    return StockStatus(
        status=tier,
        color=color,
        message=display["message"],
        icon=display["icon"],
        bg_color=f"bg-{color}-50",
        text_color=f"text-{color}-800",
        border_color=f"border-{color}-200",
        severity=display["severity"],
    )


def classify_tier(current_qty: Any, min_level: Any, max_level: Any) -> StockTier:
    """
    Classify a quantity against its min/max levels.

    Thresholds (first match wins):
        qty < min × 0.2  → CRITICAL
        qty < min × 0.5  → LOW
        qty < min        → BELOW_MIN
        qty > max × 1.5  → OVERSTOCK
        qty > max        → HIGH
        otherwise        → NORMAL

    A missing max means "no upper bound" here. Both bounds missing or
    zero gives UNKNOWN.
    """
    if not parse_number(min_level) and not parse_number(max_level):
        return StockTier.UNKNOWN

    min_qty = number_or(min_level, 0.0)
    max_qty = number_or(max_level, math.inf)
    qty = number_or(current_qty, 0.0)

    if qty < min_qty * STOCK_LEVEL_THRESHOLDS["CRITICAL"]:
        return StockTier.CRITICAL
    if qty < min_qty * STOCK_LEVEL_THRESHOLDS["LOW"]:
        return StockTier.LOW
    if qty < min_qty:
        return StockTier.BELOW_MIN
    if qty > max_qty * STOCK_LEVEL_THRESHOLDS["HIGH"]:
        return StockTier.OVERSTOCK
    if qty > max_qty:
        return StockTier.HIGH
    return StockTier.NORMAL


def classify(current_qty: Any, min_level: Any, max_level: Any) -> StockStatus:
    """Classify and attach display constants. Never raises."""
    return build_status(classify_tier(current_qty, min_level, max_level))


def percentage(current_qty: Any, min_level: Any, max_level: Any) -> float:
    """
    Position of qty between min and max, clamped to 0-100.

    A missing max defaults to min × 2 here, unlike classify() which
    treats it as unbounded.
    """
    min_qty = number_or(min_level, 0.0)
    max_qty = number_or(max_level, min_qty * 2)
    qty = number_or(current_qty, 0.0)

    if max_qty == min_qty:
        return 100.0

    pct = (qty - min_qty) / (max_qty - min_qty) * 100
    return max(0.0, min(100.0, pct))


def format_stock_levels(
    levels: Optional[Mapping[str, Mapping[str, Any]]]
) -> dict[str, StockLevelSettings]:
    """
    Normalise raw per-SKU levels.

    {"SS-200G": {"minLevel": "100", "maxLevel": "500", "reorderLevel": "200"}}
    → {"SS-200G": StockLevelSettings(min=100, max=500, reorder=200)}

    Invalid or missing values become 0.
    """
    if not levels:
        return {}

    return {
        sku: StockLevelSettings(
            min=number_or(raw.get("minLevel"), 0.0),
            max=number_or(raw.get("maxLevel"), 0.0),
            reorder=number_or(raw.get("reorderLevel"), 0.0),
        )
        for sku, raw in levels.items()
    }


def classify_row(
    row: Mapping[str, str],
    levels: Optional[Mapping[str, StockLevelSettings]] = None,
) -> StockRowStatus:
    """
    Classify one finished-goods sheet row.

    Uses the row's own Minimum/Maximum Stock cells when present,
    otherwise the configured levels for its SKU.
    """
    sku = (row.get("SKU") or "").strip()
    configured = (levels or {}).get(sku)

    min_level = parse_number(row.get("Minimum Stock"))
    max_level = parse_number(row.get("Maximum Stock"))
    if not min_level and configured:
        min_level = configured.min or None
    if not max_level and configured:
        max_level = configured.max or None

    current_qty = row.get("Current Stock")

    return StockRowStatus(
        sku=sku,
        product_type=row.get("Product Type") or None,
        region=row.get("Region") or None,
        package_size=row.get("Package Size") or None,
        current_qty=number_or(current_qty, 0.0),
        min_level=min_level,
        max_level=max_level,
        status=classify(current_qty, min_level, max_level),
        percentage=percentage(current_qty, min_level, max_level),
    )
