"""
Custom exceptions module.
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    NotFoundError,
    ValidationError,
    ExternalServiceError,

    # Packet labels
    FormatError,
    InvalidBatchIdError,
    InvalidPackingDateError,
    SequenceOverflowError,

    # Google Sheets
    SheetsError,
    SheetsNotConfiguredError,

    # Products
    ProductNotFoundError,

    # Telegram
    TelegramError,
)

__all__ = [
    # Base
    "AppError",
    "NotFoundError",
    "ValidationError",
    "ExternalServiceError",

    # Packet labels
    "FormatError",
    "InvalidBatchIdError",
    "InvalidPackingDateError",
    "SequenceOverflowError",

    # Google Sheets
    "SheetsError",
    "SheetsNotConfiguredError",

    # Products
    "ProductNotFoundError",

    # Telegram
    "TelegramError",
]
