"""
Stock dashboard: classify every finished goods row.

Reads the finished goods sheet, classifies each row against its levels,
and sorts most urgent first.
"""

from collections import Counter
from typing import Optional

import structlog

from config import settings
from integrations.google_sheets import SheetsClient, get_sheets_client
from integrations.telegram import format_low_stock_message, send_message, ALERT_TIERS
from models.stock_level import StockDashboardResponse, StockRowStatus, StockTier
from services.stock_level_service import classify_row
from services.stock_settings_service import (
    StockSettingsService,
    get_stock_settings_service,
)

logger = structlog.get_logger(__name__)


class StockDashboardService:
    """
    Stock dashboard business logic.

    Row levels come from the sheet's own Minimum/Maximum Stock columns,
    falling back to the configured levels per SKU.
    """

    def __init__(
        self,
        sheets: Optional[SheetsClient] = None,
        stock_settings: Optional[StockSettingsService] = None
    ):
        self.sheets = sheets or get_sheets_client()
        self.stock_settings = stock_settings or get_stock_settings_service()
        self.sheet_name = settings.finished_goods_sheet

    def get_rows(self) -> list[StockRowStatus]:
        """Classified rows, most urgent first, then by SKU."""
        logger.info("building_stock_dashboard", sheet=self.sheet_name)

        records = self.sheets.read_records(self.sheet_name, "A1:J1000")
        levels = self.stock_settings.get_levels()

        rows = [
            classify_row(record, levels)
            for record in records
            if (record.get("SKU") or "").strip()
        ]
        rows.sort(key=lambda r: (r.status.severity, r.sku))
        return rows

    def get_dashboard(self) -> StockDashboardResponse:
        """Rows plus counts per tier."""
        rows = self.get_rows()

        counter = Counter(r.status.status.value for r in rows)
        counts = {tier.value: counter.get(tier.value, 0) for tier in StockTier}

        logger.info("stock_dashboard_built", total=len(rows), counts=counts)

        return StockDashboardResponse(data=rows, total=len(rows), counts=counts)

    def get_alert_rows(self) -> list[StockRowStatus]:
        """Rows in the critical, low and below-min tiers."""
        return [r for r in self.get_rows() if r.status.status in ALERT_TIERS]

    def send_low_stock_digest(self) -> bool:
        """
        Send the low stock digest to Telegram.

        Returns:
            True if sent, False if nothing to send or Telegram not configured

        Raises:
            TelegramError: If the send fails
        """
        rows = self.get_alert_rows()
        message = format_low_stock_message(rows)

        if not message:
            logger.info("low_stock_digest_skipped", reason="no_alert_rows")
            return False

        return send_message(message)


# Singleton instance
_stock_dashboard_service: Optional[StockDashboardService] = None


def get_stock_dashboard_service() -> StockDashboardService:
    """Get or create StockDashboardService instance."""
    global _stock_dashboard_service
    if _stock_dashboard_service is None:
        _stock_dashboard_service = StockDashboardService()
    return _stock_dashboard_service
