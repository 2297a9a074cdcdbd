"""
API route tests using the FastAPI test client.
"""

import inspect

import pytest

import routes.packing_transfers
import routes.priority_packing
import routes.stock_levels
from tests.factories import PACKING_TRANSFERS_HEADER


class TestHealth:

    def test_health(self, test_client):
        response = test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] in ("healthy", "degraded")
        assert "google_sheets" in body

    def test_root_lists_endpoints(self, test_client):
        body = test_client.get("/").json()

        assert body["endpoints"]["packet_labels"] == "/api/packet-labels"


class TestStockLevelRoutes:

    def test_classify(self, test_client):
        response = test_client.post("/api/stock-levels/classify", json={
            "current_qty": "10",
            "min_level": 100,
            "max_level": 500,
        })

        assert response.status_code == 200
        body = response.json()
        assert body["status"]["status"] == "critical"
        assert body["percentage"] == 0.0

    def test_classify_without_limits(self, test_client):
        response = test_client.post("/api/stock-levels/classify", json={"current_qty": 10})

        assert response.json()["status"]["status"] == "unknown"

    def test_dashboard(self, test_client_with_mock_sheets, mock_sheets, finished_goods_values):
        mock_sheets.set_sheet("Finished Goods Inventory", finished_goods_values)

        response = test_client_with_mock_sheets.get("/api/stock-levels")

        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 6
        assert body["data"][0]["sku"] == "SUN-4402"
        assert body["counts"]["critical"] == 1

    def test_settings(self, test_client_with_mock_sheets, mock_sheets, stock_levels_values):
        mock_sheets.set_sheet("Stock Levels", stock_levels_values)

        response = test_client_with_mock_sheets.get("/api/stock-levels/settings")

        assert response.status_code == 200
        assert response.json()["SUN-4402"] == {"min": 100, "max": 500, "reorder": 200}

    def test_export(self, test_client_with_mock_sheets, mock_sheets, finished_goods_values):
        mock_sheets.set_sheet("Finished Goods Inventory", finished_goods_values)

        response = test_client_with_mock_sheets.get("/api/stock-levels/export")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith(
            "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
        )
        assert "STOCK_STATUS_" in response.headers["content-disposition"]

    def test_sheets_error(self, test_client_with_mock_sheets, mock_sheets):
        mock_sheets.fail_sheet("Finished Goods Inventory")

        response = test_client_with_mock_sheets.get("/api/stock-levels")

        assert response.status_code == 503
        assert response.json()["error"]["code"] == "GOOGLE_SHEETS_ERROR"


class TestPacketLabelRoutes:

    def test_create_with_next_sequence(self, test_client):
        response = test_client.post("/api/packet-labels", json={
            "wip_batch_id": "WIP-SUN-251030-001",
            "region": "Riyadh Region",
            "packing_date": "2025-10-31",
            "existing_labels": ["301031-RR-001"],
        })

        assert response.status_code == 200
        body = response.json()
        assert body["label"] == "301031-RR-002"
        assert body["parts"]["region_code"] == "RR"

    def test_create_bad_batch_id(self, test_client):
        response = test_client.post("/api/packet-labels", json={
            "wip_batch_id": "WIP-001",
            "region": "Riyadh",
            "packing_date": "2025-10-31",
        })

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "INVALID_BATCH_ID"

    def test_decode(self, test_client):
        response = test_client.get("/api/packet-labels/301031-RR-001")

        assert response.status_code == 200
        assert response.json()["sequence"] == 1

    def test_decode_invalid(self, test_client):
        response = test_client.get("/api/packet-labels/not-a-label")

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "INVALID_PACKET_LABEL"

    def test_next_sequence(self, test_client):
        response = test_client.post("/api/packet-labels/next-sequence", json={
            "region": "Makkah",
            "packing_date": "2025-10-31",
            "existing_labels": ["301031-MR-003", "301031-RR-009"],
        })

        assert response.json() == {"region_code": "MR", "packing_day": "31", "next_sequence": 4}


class TestPackingMaterialRoutes:

    def test_consumption(self, test_client):
        response = test_client.get(
            "/api/packing-materials/consumption",
            params={"package_size": "800 g", "unit_count": 10}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["package_size"] == "800g"
        assert len(body["deductions"]) == 1
        assert body["summary"] == "Packing Roll: 3.00 g"


class TestPriorityPackingRoutes:

    def test_list(self, test_client_with_mock_sheets, mock_sheets, finished_goods_values):
        mock_sheets.set_sheet("Finished Goods Inventory", finished_goods_values)

        response = test_client_with_mock_sheets.get("/api/priority-packing")

        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 3
        assert body["data"][0]["band"] == "URGENT"
        assert body["estimate"]["bottleneck_sku"] == "SUN-4402"
        assert body["data"][0]["units_needed"] >= 1


class TestPackingTransferRoutes:

    def test_record(self, test_client_with_mock_sheets, mock_sheets):
        mock_sheets.set_sheet("Packing Transfers", [PACKING_TRANSFERS_HEADER])

        response = test_client_with_mock_sheets.post("/api/packing-transfers", json={
            "wip_batch_id": "WIP-SUN-251030-001",
            "region": "Riyadh Region",
            "packing_date": "2025-10-31",
            "sku": "SUN-4402",
            "units_packed": 10,
        })

        assert response.status_code == 201
        body = response.json()
        assert body["packet_label"] == "301031-RR-001"
        assert body["total_units"] == 50

    def test_unknown_sku(self, test_client_with_mock_sheets):
        response = test_client_with_mock_sheets.post("/api/packing-transfers", json={
            "wip_batch_id": "WIP-SUN-251030-001",
            "region": "Riyadh Region",
            "packing_date": "2025-10-31",
            "sku": "XYZ-0000",
            "units_packed": 10,
        })

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "PRODUCT_NOT_FOUND"


class TestSheetsBackedHandlers:
    """Handlers that call Google Sheets run in the threadpool."""

    @pytest.mark.parametrize("handler", [
        routes.stock_levels.get_stock_dashboard,
        routes.stock_levels.get_stock_alerts,
        routes.stock_levels.send_stock_alerts,
        routes.stock_levels.get_stock_settings,
        routes.stock_levels.refresh_stock_settings,
        routes.stock_levels.export_stock_status,
        routes.priority_packing.get_priority_packing,
        routes.priority_packing.export_priority_packing,
        routes.packing_transfers.record_packing_transfer,
    ])
    def test_handler_is_not_a_coroutine(self, handler):
        assert not inspect.iscoroutinefunction(handler)
