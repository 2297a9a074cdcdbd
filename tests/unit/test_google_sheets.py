"""
Tests for the Google Sheets REST client.
"""

from unittest.mock import MagicMock, patch

import pytest
import requests

from exceptions import SheetsError, SheetsNotConfiguredError
from integrations.google_sheets import SheetsClient, records_from_values
from services.stock_settings_service import StockSettingsService, default_stock_levels


def make_response(status_code: int = 200, payload: dict = None) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.ok = status_code < 400
    response.json.return_value = payload or {}
    response.text = "error body"
    return response


def make_client(session: MagicMock, **overrides) -> SheetsClient:
    options = {
        "spreadsheet_id": "sheet-123",
        "api_key": "key-abc",
        "access_token": None,
        "timeout": 5,
        "max_retries": 2,
        "backoff": 0.01,
        "session": session,
    }
    options.update(overrides)
    client = SheetsClient(**options)
    # Constructor falls back to settings for empty credentials
    client.access_token = options["access_token"]
    return client


class TestRecordsFromValues:
    """Tests for mapping rows by header."""

    def test_maps_rows(self):
        records = records_from_values([
            ["SKU", "Current Stock"],
            ["SUN-4402", "10"],
        ])
        assert records == [{"SKU": "SUN-4402", "Current Stock": "10"}]

    def test_pads_short_rows(self):
        records = records_from_values([
            ["SKU", "Current Stock", "Region"],
            ["SUN-4402"],
        ])
        assert records == [{"SKU": "SUN-4402", "Current Stock": "", "Region": ""}]

    def test_strips_headers(self):
        records = records_from_values([[" SKU "], ["A"]])
        assert records == [{"SKU": "A"}]

    def test_empty(self):
        assert records_from_values([]) == []
        assert records_from_values([["SKU"]]) == []


class TestReadRange:
    """Tests for reading values."""

    def test_reads_with_api_key(self):
        session = MagicMock()
        session.request.return_value = make_response(200, {"values": [["SKU"], ["A"]]})
        client = make_client(session)

        values = client.read_range("Finished Goods Inventory", "A1:J1000")

        assert values == [["SKU"], ["A"]]
        method, url = session.request.call_args.args
        kwargs = session.request.call_args.kwargs
        assert method == "GET"
        assert "/sheet-123/values/" in url
        assert "Finished%20Goods%20Inventory" in url
        assert kwargs["params"] == {"key": "key-abc"}
        assert kwargs["timeout"] == 5

    def test_prefers_bearer_token(self):
        session = MagicMock()
        session.request.return_value = make_response(200, {"values": []})
        client = make_client(session, access_token="tok")

        client.read_range("Stock Levels")

        kwargs = session.request.call_args.kwargs
        assert kwargs["headers"] == {"Authorization": "Bearer tok"}
        assert kwargs["params"] == {}

    def test_missing_values_key_is_empty(self):
        session = MagicMock()
        session.request.return_value = make_response(200, {})

        assert make_client(session).read_range("Stock Levels") == []

    def test_read_records(self):
        session = MagicMock()
        session.request.return_value = make_response(200, {"values": [["SKU"], ["A"], ["B"]]})

        assert make_client(session).read_records("X") == [{"SKU": "A"}, {"SKU": "B"}]

    def test_requires_spreadsheet_id(self):
        client = make_client(MagicMock(), spreadsheet_id="")
        client.spreadsheet_id = None

        with pytest.raises(SheetsNotConfiguredError):
            client.read_range("X")

    def test_requires_credentials(self):
        client = make_client(MagicMock())
        client.api_key = None
        client.access_token = None

        with pytest.raises(SheetsNotConfiguredError) as exc_info:
            client.read_range("X")

        assert exc_info.value.status_code == 503


class TestNonJsonResponse:
    """Tests for 200 responses that carry no JSON."""

    def test_raises_sheets_error(self):
        session = MagicMock()
        response = make_response(200)
        response.json.side_effect = ValueError("Expecting value")
        response.text = "<html>sign in</html>"
        session.request.return_value = response

        with pytest.raises(SheetsError) as exc_info:
            make_client(session).read_range("X")

        assert exc_info.value.code == "GOOGLE_SHEETS_ERROR"
        assert exc_info.value.details["status"] == 200
        assert exc_info.value.details["body"] == "<html>sign in</html>"
        assert session.request.call_count == 1

    def test_stock_levels_fall_back_to_defaults(self):
        session = MagicMock()
        response = make_response(200)
        response.json.side_effect = ValueError("Expecting value")
        session.request.return_value = response

        service = StockSettingsService(sheets=make_client(session))

        assert service.get_levels() == default_stock_levels()


class TestRetries:
    """Tests for timeout and retry handling."""

    @patch("integrations.google_sheets.time.sleep")
    def test_retries_server_errors(self, mock_sleep):
        session = MagicMock()
        session.request.side_effect = [
            make_response(503),
            make_response(429),
            make_response(200, {"values": [["ok"]]}),
        ]

        values = make_client(session).read_range("X")

        assert values == [["ok"]]
        assert session.request.call_count == 3
        assert mock_sleep.call_count == 2

    @patch("integrations.google_sheets.time.sleep")
    def test_gives_up_after_retries(self, mock_sleep):
        session = MagicMock()
        session.request.return_value = make_response(500)

        with pytest.raises(SheetsError):
            make_client(session).read_range("X")

        assert session.request.call_count == 3

    @patch("integrations.google_sheets.time.sleep")
    def test_retries_timeouts(self, mock_sleep):
        session = MagicMock()
        session.request.side_effect = [
            requests.exceptions.Timeout("slow"),
            make_response(200, {"values": []}),
        ]

        assert make_client(session).read_range("X") == []
        assert session.request.call_count == 2

    @patch("integrations.google_sheets.time.sleep")
    def test_connection_errors_exhausted(self, mock_sleep):
        session = MagicMock()
        session.request.side_effect = requests.exceptions.ConnectionError("down")

        with pytest.raises(SheetsError) as exc_info:
            make_client(session).read_range("X")

        assert exc_info.value.code == "GOOGLE_SHEETS_ERROR"
        assert session.request.call_count == 3

    @patch("integrations.google_sheets.time.sleep")
    def test_client_errors_not_retried(self, mock_sleep):
        session = MagicMock()
        session.request.return_value = make_response(403)

        with pytest.raises(SheetsError):
            make_client(session).read_range("X")

        assert session.request.call_count == 1
        mock_sleep.assert_not_called()


class TestAppendRow:
    """Tests for appending rows."""

    def test_posts_values(self):
        session = MagicMock()
        session.request.return_value = make_response(200, {"updates": {"updatedRange": "'X'!A5:C5"}})
        client = make_client(session, access_token="tok")

        client.append_row("Packing Transfers", ["a", 1, None])

        method, url = session.request.call_args.args
        kwargs = session.request.call_args.kwargs
        assert method == "POST"
        assert url.endswith(":append")
        assert kwargs["params"] == {"valueInputOption": "USER_ENTERED"}
        assert kwargs["json"] == {"values": [["a", 1, None]]}

    def test_requires_access_token(self):
        client = make_client(MagicMock())

        with pytest.raises(SheetsNotConfiguredError):
            client.append_row("Packing Transfers", ["a"])
