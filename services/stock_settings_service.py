"""
Stock level settings from the workbook.

The stock levels sheet is column-based, one SKU per column:

    | SKU       | SS-200G | SS-100G | PS-15G |
    | Min Level | 100     | 150     | 50     |
    | Max Level | 500     | 800     | 300    |
    | Reorder   | 200     | 300     | 100    |

Levels are cached in an explicit TTL cache owned by the service. If the
sheet cannot be read the built-in defaults are served instead.
"""

import threading
import time
from typing import Any, Callable, Generic, Optional, TypeVar

import structlog

from config import settings
from config.packing import DEFAULT_STOCK_LEVELS
from exceptions import AppError
from integrations.google_sheets import SheetsClient, get_sheets_client
from models.stock_level import StockLevelSettings
from utils.numbers import number_or

logger = structlog.get_logger(__name__)

T = TypeVar("T")

# Row labels in the first column, lowercased
_ROW_FIELDS = {
    "min level": "min",
    "minimum": "min",
    "min": "min",
    "max level": "max",
    "maximum": "max",
    "max": "max",
    "reorder": "reorder",
    "reorder level": "reorder",
}


class SettingsCache(Generic[T]):
    """
    Single-value cache with a time-to-live.

    get() returns the cached value while fresh and calls the loader
    otherwise. Safe to share between request threads.
    """

    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._value: Optional[T] = None
        self._loaded_at: Optional[float] = None

    def is_fresh(self) -> bool:
        if self._loaded_at is None:
            return False
        return self._clock() - self._loaded_at < self.ttl_seconds

    def get(self, loader: Callable[[], T], force_refresh: bool = False) -> T:
        with self._lock:
            if not force_refresh and self.is_fresh():
                return self._value
            self._value = loader()
            self._loaded_at = self._clock()
            return self._value

    def invalidate(self) -> None:
        with self._lock:
            self._value = None
            self._loaded_at = None


def parse_stock_level_sheet(rows: list[list[Any]]) -> dict[str, StockLevelSettings]:
    """
    Parse the column-based stock levels sheet.

    Unrecognised row labels and empty SKU headers are skipped.
    Missing or invalid cells become 0.
    """
    if not rows or len(rows) < 2:
        return {}

    skus = [str(cell).strip() for cell in rows[0][1:]]
    values: dict[str, dict[str, float]] = {sku: {} for sku in skus if sku}

    for row in rows[1:]:
        if not row:
            continue
        field = _ROW_FIELDS.get(str(row[0]).strip().lower())
        if not field:
            continue
        for i, sku in enumerate(skus, start=1):
            if not sku:
                continue
            cell = row[i] if i < len(row) else None
            values[sku][field] = number_or(cell, 0.0)

    return {sku: StockLevelSettings(**fields) for sku, fields in values.items()}


def default_stock_levels() -> dict[str, StockLevelSettings]:
    """Built-in levels used when the sheet is unavailable."""
    return {
        sku: StockLevelSettings(**levels)
        for sku, levels in DEFAULT_STOCK_LEVELS.items()
    }


class StockSettingsService:
    """Loads and caches per-SKU stock levels."""

    def __init__(
        self,
        sheets: Optional[SheetsClient] = None,
        cache: Optional[SettingsCache[dict[str, StockLevelSettings]]] = None
    ):
        self.sheets = sheets or get_sheets_client()
        self.cache = cache or SettingsCache(settings.settings_cache_ttl_seconds)
        self.sheet_name = settings.stock_levels_sheet

    def _load(self) -> dict[str, StockLevelSettings]:
        try:
            rows = self.sheets.read_range(self.sheet_name, "A1:AZ10")
        except AppError as e:
            logger.warning(
                "stock_levels_fallback_to_defaults",
                sheet=self.sheet_name,
                error=e.message
            )
            return default_stock_levels()

        levels = parse_stock_level_sheet(rows)
        if not levels:
            logger.warning("stock_levels_sheet_empty", sheet=self.sheet_name)
            return default_stock_levels()

        logger.info("stock_levels_loaded", skus=len(levels))
        return levels

    def get_levels(self, force_refresh: bool = False) -> dict[str, StockLevelSettings]:
        """Levels keyed by SKU, from cache when fresh."""
        return self.cache.get(self._load, force_refresh=force_refresh)

    def clear_cache(self) -> None:
        self.cache.invalidate()


# Singleton instance
_stock_settings_service: Optional[StockSettingsService] = None


def get_stock_settings_service() -> StockSettingsService:
    """Get or create StockSettingsService instance."""
    global _stock_settings_service
    if _stock_settings_service is None:
        _stock_settings_service = StockSettingsService()
    return _stock_settings_service
