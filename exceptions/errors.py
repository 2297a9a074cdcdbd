"""
Custom exception classes for the application.
"""

from typing import Optional, Any
from datetime import datetime, timezone


class AppError(Exception):
    """
    Base exception for all application errors.

    All custom exceptions inherit from this.

    Attributes:
        code: Error code (e.g., "INVALID_BATCH_ID")
        message: Human-readable message
        status_code: HTTP status code
        details: Additional context
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to API response format."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp
            }
        }


class NotFoundError(AppError):
    """Resource not found (404)."""

    def __init__(
        self,
        resource: str,
        identifier: str,
        code: Optional[str] = None
    ):
        super().__init__(
            code=code or f"{resource.upper()}_NOT_FOUND",
            message=f"{resource} not found",
            status_code=404,
            details={"id": identifier}
        )


class ValidationError(AppError):
    """Validation failed (422)."""

    def __init__(
        self,
        message: str,
        code: str = "VALIDATION_ERROR",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=422,
            details=details
        )


class ExternalServiceError(AppError):
    """External service failure (503)."""

    def __init__(
        self,
        service: str,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code=f"{service.upper()}_ERROR",
            message=message,
            status_code=503,
            details={"service": service, **(details or {})}
        )


# ===================
# PACKET LABEL ERRORS
# ===================

class FormatError(ValidationError):
    """Input string does not have the expected dash-delimited shape."""

    def __init__(
        self,
        message: str,
        code: str = "FORMAT_ERROR",
        details: Optional[dict] = None
    ):
        super().__init__(
            message=message,
            code=code,
            details=details
        )


class InvalidBatchIdError(FormatError):
    """Production batch ID has fewer than 3 segments."""

    def __init__(self, batch_id: str):
        super().__init__(
            code="INVALID_BATCH_ID",
            message="Invalid WIP batch ID format",
            details={"provided": batch_id, "expected": "WIP-<PRODUCT>-<YYMMDD>-<SEQ>"}
        )


class InvalidPackingDateError(FormatError):
    """Packing date is not YYYY-MM-DD."""

    def __init__(self, packing_date: str):
        super().__init__(
            code="INVALID_PACKING_DATE",
            message="Packing date must be YYYY-MM-DD",
            details={"provided": packing_date}
        )


class SequenceOverflowError(FormatError):
    """Sequence does not fit the 3-digit label field."""

    def __init__(self, sequence: int, maximum: int):
        super().__init__(
            code="SEQUENCE_OUT_OF_RANGE",
            message=f"Sequence must be between 1 and {maximum}",
            details={"provided": sequence, "max": maximum}
        )


# ===================
# GOOGLE SHEETS ERRORS
# ===================

class SheetsError(ExternalServiceError):
    """Google Sheets API request failed."""

    def __init__(
        self,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            service="google_sheets",
            message=message,
            details=details
        )


class SheetsNotConfiguredError(SheetsError):
    """Spreadsheet ID or credentials missing."""

    def __init__(self, missing: str):
        super().__init__(
            message=f"Google Sheets not configured: {missing} not set",
            details={"missing": missing}
        )


# ===================
# TELEGRAM ERRORS
# ===================

class TelegramError(ExternalServiceError):
    """Telegram API error."""

    def __init__(self, message: str):
        super().__init__(
            service="telegram",
            message=message
        )


# ===================
# PRODUCT ERRORS
# ===================

class ProductNotFoundError(NotFoundError):
    """SKU not in the retail product catalog."""

    def __init__(self, sku: str):
        super().__init__(
            resource="Product",
            identifier=sku,
            code="PRODUCT_NOT_FOUND"
        )
