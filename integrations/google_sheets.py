"""
Google Sheets REST integration.

Reads ranges and appends rows in the shared workbook. Reads work with an
API key or a bearer token; appends need the bearer token.
"""

import time
from typing import Any, Optional
from urllib.parse import quote

import requests
import structlog

from config import settings
from exceptions import SheetsError, SheetsNotConfiguredError

logger = structlog.get_logger(__name__)

SHEETS_API_BASE = "https://sheets.googleapis.com/v4/spreadsheets"

# Responses worth retrying
RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}


def records_from_values(values: list[list[Any]]) -> list[dict[str, str]]:
    """
    Convert raw sheet values to header → value mappings.

    First row is the header. Short rows are padded with "".
    """
    if not values:
        return []

    headers = [str(h).strip() for h in values[0]]
    records = []
    for row in values[1:]:
        records.append({
            header: (str(row[i]) if i < len(row) and row[i] is not None else "")
            for i, header in enumerate(headers)
        })
    return records


class SheetsClient:
    """
    Minimal Sheets API v4 client.

    Retries connection errors, timeouts, 429 and 5xx with exponential
    backoff. Anything else, or running out of retries, raises SheetsError.
    """

    def __init__(
        self,
        spreadsheet_id: Optional[str] = None,
        api_key: Optional[str] = None,
        access_token: Optional[str] = None,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        backoff: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.spreadsheet_id = spreadsheet_id or settings.spreadsheet_id
        self.api_key = api_key or settings.google_sheets_api_key
        self.access_token = access_token or settings.google_access_token
        self.timeout = timeout if timeout is not None else settings.sheets_timeout_seconds
        self.max_retries = max_retries if max_retries is not None else settings.sheets_max_retries
        self.backoff = backoff if backoff is not None else settings.sheets_retry_backoff_seconds
        self.session = session or requests.Session()

    # ===================
    # HELPERS
    # ===================

    def _values_url(self, sheet: str, cell_range: str, suffix: str = "") -> str:
        if not self.spreadsheet_id:
            raise SheetsNotConfiguredError("SPREADSHEET_ID")
        a1 = quote(f"'{sheet}'!{cell_range}", safe="")
        return f"{SHEETS_API_BASE}/{self.spreadsheet_id}/values/{a1}{suffix}"

    def _auth(self, write: bool = False) -> tuple[dict, dict]:
        """Headers and query params carrying credentials."""
        headers: dict[str, str] = {}
        params: dict[str, str] = {}

        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        elif write:
            raise SheetsNotConfiguredError("GOOGLE_ACCESS_TOKEN")
        elif self.api_key:
            params["key"] = self.api_key
        else:
            raise SheetsNotConfiguredError("GOOGLE_SHEETS_API_KEY")

        return headers, params

    def _request(self, method: str, url: str, **kwargs) -> dict:
        attempts = self.max_retries + 1

        for attempt in range(attempts):
            last = attempt == attempts - 1
            try:
                response = self.session.request(
                    method, url, timeout=self.timeout, **kwargs
                )
            except (requests.exceptions.ConnectionError, requests.exceptions.Timeout) as e:
                logger.warning(
                    "sheets_request_failed",
                    method=method,
                    attempt=attempt + 1,
                    error=str(e)
                )
                if last:
                    raise SheetsError(
                        f"Google Sheets unreachable after {attempts} attempts",
                        details={"error": str(e)}
                    ) from e
                time.sleep(self.backoff * (2 ** attempt))
                continue

            if response.status_code in RETRYABLE_STATUS_CODES and not last:
                logger.warning(
                    "sheets_request_retrying",
                    method=method,
                    status=response.status_code,
                    attempt=attempt + 1
                )
                time.sleep(self.backoff * (2 ** attempt))
                continue

            if not response.ok:
                logger.error(
                    "sheets_request_rejected",
                    method=method,
                    status=response.status_code
                )
                raise SheetsError(
                    f"Google Sheets returned HTTP {response.status_code}",
                    details={"status": response.status_code, "body": response.text[:500]}
                )

            try:
                return response.json()
            except ValueError as e:
                logger.error("sheets_response_not_json", method=method, status=response.status_code)
                raise SheetsError(
                    "Google Sheets returned a non-JSON response",
                    details={"status": response.status_code, "body": response.text[:500]}
                ) from e

        raise SheetsError("Google Sheets request was not attempted")

    # ===================
    # READ OPERATIONS
    # ===================

    def read_range(self, sheet: str, cell_range: str = "A1:Z1000") -> list[list[str]]:
        """
        Read raw values from a sheet range.

        Returns:
            Rows of cell values (empty list for an empty range)

        Raises:
            SheetsError: If the request fails
        """
        headers, params = self._auth()
        logger.debug("reading_sheet", sheet=sheet, range=cell_range)

        data = self._request(
            "GET",
            self._values_url(sheet, cell_range),
            headers=headers,
            params=params,
        )
        values = data.get("values", [])

        logger.info("sheet_read", sheet=sheet, rows=len(values))
        return values

    def read_records(self, sheet: str, cell_range: str = "A1:Z1000") -> list[dict[str, str]]:
        """Read a range and map each row by the header row."""
        return records_from_values(self.read_range(sheet, cell_range))

    # ===================
    # WRITE OPERATIONS
    # ===================

    def append_row(self, sheet: str, values: list[Any]) -> dict:
        """
        Append one row after the last row of a sheet.

        Raises:
            SheetsNotConfiguredError: If no access token is set
            SheetsError: If the request fails
        """
        headers, params = self._auth(write=True)
        params["valueInputOption"] = "USER_ENTERED"

        result = self._request(
            "POST",
            self._values_url(sheet, "A1", ":append"),
            headers=headers,
            params=params,
            json={"values": [values]},
        )

        logger.info(
            "sheet_row_appended",
            sheet=sheet,
            updated_range=result.get("updates", {}).get("updatedRange")
        )
        return result


# Singleton instance
_sheets_client: Optional[SheetsClient] = None


def get_sheets_client() -> SheetsClient:
    """Get or create SheetsClient instance."""
    global _sheets_client
    if _sheets_client is None:
        _sheets_client = SheetsClient()
    return _sheets_client
