"""
Shared test fixtures.
"""

import sys
from pathlib import Path

# Add project directory to Python path
project_dir = Path(__file__).parent.parent
sys.path.insert(0, str(project_dir))

import pytest
from unittest.mock import patch
from typing import Any, Generator

from exceptions import SheetsError
from integrations.google_sheets import records_from_values
from tests.factories import FINISHED_GOODS_HEADER

# ===================
# MOCK SHEETS CLIENT
# ===================

class MockSheetsClient:
    """
    In-memory stand-in for SheetsClient.

    Appended rows are visible to later reads of the same sheet.
    """

    def __init__(self):
        self._sheets: dict[str, list[list[Any]]] = {}
        self._failing: set[str] = set()
        self.appended: list[tuple[str, list[Any]]] = []
        self.read_calls: list[tuple[str, str]] = []

    def set_sheet(self, name: str, values: list[list[Any]]):
        """Configure raw values for a sheet, header row first."""
        self._sheets[name] = [list(row) for row in values]

    def fail_sheet(self, name: str):
        """Make reads of a sheet raise SheetsError."""
        self._failing.add(name)

    def read_range(self, sheet: str, cell_range: str = "A1:Z1000") -> list[list[Any]]:
        self.read_calls.append((sheet, cell_range))
        if sheet in self._failing:
            raise SheetsError(f"Google Sheets returned HTTP 500 for {sheet}")
        return [list(row) for row in self._sheets.get(sheet, [])]

    def read_records(self, sheet: str, cell_range: str = "A1:Z1000") -> list[dict[str, str]]:
        return records_from_values(self.read_range(sheet, cell_range))

    def append_row(self, sheet: str, values: list[Any]) -> dict:
        self.appended.append((sheet, list(values)))
        self._sheets.setdefault(sheet, []).append(list(values))
        return {"updates": {"updatedRange": f"'{sheet}'!A1"}}

    def appended_to(self, sheet: str) -> list[list[Any]]:
        return [values for name, values in self.appended if name == sheet]


# ===================
# FIXTURES
# ===================

@pytest.fixture
def mock_sheets() -> MockSheetsClient:
    """
    Create an in-memory Sheets client.

    Usage:
        def test_something(mock_sheets):
            mock_sheets.set_sheet("Finished Goods Inventory", [
                ["SKU", "Current Stock", ...],
                ["SUN-4402", "10", ...],
            ])
    """
    return MockSheetsClient()


@pytest.fixture
def finished_goods_values() -> list[list[str]]:
    """Finished goods sheet with one row per urgency tier."""
    return [
        FINISHED_GOODS_HEADER,
        ["SUN-4402", "Sunflower Seeds", "Riyadh", "200 g", "0", "400", "1200", "Out"],
        ["SUN-4401", "Sunflower Seeds", "Riyadh", "100 g", "150", "400", "1200", "Low"],
        ["SUN-1116", "Sunflower Seeds", "Makkah", "800 g", "100", "150", "450", "Low"],
        ["SUN-1129", "Sunflower Seeds", "Eastern", "25 g", "700", "400", "1200", "OK"],
        ["PUM-8001", "Pumpkin Seeds", "Riyadh", "15 g", "900", "100", "300", "Over"],
        ["XYZ-0000", "Unknown", "", "", "5", "", "", ""],
    ]


@pytest.fixture
def stock_levels_values() -> list[list[str]]:
    """Column-based stock levels sheet."""
    return [
        ["SKU", "SUN-4402", "SUN-4401", "SUN-1116"],
        ["Min Level", "100", "150", "50"],
        ["Max Level", "500", "800", "300"],
        ["Reorder", "200", "300", "100"],
    ]


# ===================
# API TEST CLIENT
# ===================

@pytest.fixture
def test_client():
    """
    Create FastAPI test client.

    Usage:
        def test_endpoint(test_client):
            response = test_client.get("/health")
            assert response.status_code == 200
    """
    from fastapi.testclient import TestClient
    from main import app

    return TestClient(app)


@pytest.fixture
def test_client_with_mock_sheets(mock_sheets) -> Generator:
    """
    Create FastAPI test client whose services read the mock sheets.

    Usage:
        def test_endpoint(test_client_with_mock_sheets, mock_sheets):
            mock_sheets.set_sheet("Finished Goods Inventory", [...])
            response = test_client_with_mock_sheets.get("/api/stock-levels")
    """
    from fastapi.testclient import TestClient
    from main import app
    from services.stock_settings_service import StockSettingsService
    from services.stock_dashboard_service import StockDashboardService
    from services.priority_packing_service import PriorityPackingService
    from services.packing_transfer_service import PackingTransferService

    stock_settings = StockSettingsService(sheets=mock_sheets)
    dashboard = StockDashboardService(sheets=mock_sheets, stock_settings=stock_settings)
    priority = PriorityPackingService(sheets=mock_sheets)
    transfers = PackingTransferService(sheets=mock_sheets)

    with patch("routes.stock_levels.get_stock_settings_service", return_value=stock_settings):
        with patch("routes.stock_levels.get_stock_dashboard_service", return_value=dashboard):
            with patch("routes.priority_packing.get_priority_packing_service", return_value=priority):
                with patch("routes.packing_transfers.get_packing_transfer_service", return_value=transfers):
                    yield TestClient(app)
