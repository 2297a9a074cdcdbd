"""
Business logic services.

Each service handles one domain area.
"""

from services.stock_level_service import classify, classify_row, percentage
from services.packet_label_service import encode, decode, next_sequence
from services.packing_material_service import consumption, for_deduction, format_consumption
from services.stock_settings_service import (
    SettingsCache,
    StockSettingsService,
    get_stock_settings_service,
)
from services.stock_dashboard_service import StockDashboardService, get_stock_dashboard_service
from services.priority_packing_service import PriorityPackingService, get_priority_packing_service
from services.packing_transfer_service import PackingTransferService, get_packing_transfer_service
from services.export_service import ExportService, get_export_service

__all__ = [
    "classify",
    "classify_row",
    "percentage",
    "encode",
    "decode",
    "next_sequence",
    "consumption",
    "for_deduction",
    "format_consumption",
    "SettingsCache",
    "StockSettingsService",
    "get_stock_settings_service",
    "StockDashboardService",
    "get_stock_dashboard_service",
    "PriorityPackingService",
    "get_priority_packing_service",
    "PackingTransferService",
    "get_packing_transfer_service",
    "ExportService",
    "get_export_service",
]
