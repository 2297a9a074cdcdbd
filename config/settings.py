"""
Application settings loaded from environment variables.

Uses pydantic-settings for validation and type safety.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    """
    Application settings.

    All values loaded from .env file or environment variables.
    Validation happens automatically on startup.
    """

    model_config = SettingsConfigDict(
        env_file=(".env", "../.env"),  # Check current dir, then parent
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"  # Ignore extra env vars
    )

    # ===================
    # GOOGLE SHEETS
    # ===================
    spreadsheet_id: Optional[str] = Field(
        None,
        description="Google Sheets workbook ID"
    )
    google_sheets_api_key: Optional[str] = Field(
        None,
        description="API key for read-only access"
    )
    google_access_token: Optional[str] = Field(
        None,
        description="OAuth bearer token (required for appends)"
    )
    sheets_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        le=120,
        description="Per-request timeout for the Sheets API"
    )
    sheets_max_retries: int = Field(
        default=3,
        ge=0,
        le=10,
        description="Retries on connection errors and 5xx/429 responses"
    )
    sheets_retry_backoff_seconds: float = Field(
        default=0.5,
        ge=0,
        le=30,
        description="Base backoff between retries (doubles each attempt)"
    )

    # ===================
    # SHEET NAMES
    # ===================
    finished_goods_sheet: str = Field(
        default="Finished Goods Inventory",
        description="Sheet holding current/minimum stock per SKU"
    )
    packing_transfers_sheet: str = Field(
        default="Packing Transfers",
        description="Ledger of packing transfers with packet labels"
    )
    raw_material_transactions_sheet: str = Field(
        default="Raw Material Transactions",
        description="Ledger receiving packing material deductions"
    )
    stock_levels_sheet: str = Field(
        default="Stock Levels",
        description="Column-based min/max/reorder levels per SKU"
    )

    # ===================
    # CACHE
    # ===================
    settings_cache_ttl_seconds: int = Field(
        default=300,
        ge=0,
        le=86400,
        description="How long stock level settings stay cached"
    )

    # ===================
    # PACKING
    # ===================
    packing_available_minutes: int = Field(
        default=480,
        ge=0,
        le=1440,
        description="Default packing shift length in minutes"
    )

    # ===================
    # TELEGRAM
    # ===================
    telegram_bot_token: Optional[str] = Field(
        None,
        description="Telegram bot token from @BotFather"
    )
    telegram_chat_id: Optional[str] = Field(
        None,
        description="Telegram chat ID for low stock alerts"
    )

    # ===================
    # APP SETTINGS
    # ===================
    environment: str = Field(
        default="development",
        pattern="^(development|staging|production)$",
        description="Application environment"
    )
    debug: bool = Field(
        default=True,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Logging level"
    )
    api_host: str = Field(
        default="0.0.0.0",
        description="API host"
    )
    api_port: int = Field(
        default=8000,
        ge=1000,
        le=65535,
        description="API port"
    )

    # ===================
    # COMPUTED PROPERTIES
    # ===================
    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == "production"

    @property
    def sheets_configured(self) -> bool:
        """Check if a spreadsheet and some credential are set."""
        return bool(
            self.spreadsheet_id
            and (self.google_sheets_api_key or self.google_access_token)
        )

    @property
    def telegram_configured(self) -> bool:
        """Check if Telegram is properly configured."""
        return bool(self.telegram_bot_token and self.telegram_chat_id)


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload.

    Returns:
        Settings: Application settings

    Raises:
        ValidationError: If env vars are invalid
    """
    return Settings()


# For convenient imports: from config.settings import settings
settings = get_settings()
