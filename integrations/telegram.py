"""
Telegram bot integration for low stock alerts.

Sends a digest of finished goods below minimum to a Telegram chat.
"""

from datetime import datetime
from typing import Optional

import requests
import structlog

from config import settings
from exceptions import TelegramError
from models.stock_level import StockRowStatus, StockTier

logger = structlog.get_logger(__name__)

# Tiers included in the digest, most urgent first
ALERT_TIERS = (StockTier.CRITICAL, StockTier.LOW, StockTier.BELOW_MIN)

TIER_EMOJIS = {
    StockTier.CRITICAL: "🔴",
    StockTier.LOW: "🟠",
    StockTier.BELOW_MIN: "🟡",
}


def get_telegram_config() -> tuple[Optional[str], Optional[str]]:
    """
    Get Telegram configuration from settings.

    Returns:
        tuple: (bot_token, chat_id)
    """
    bot_token = settings.telegram_bot_token
    chat_id = settings.telegram_chat_id

    if not bot_token or not chat_id:
        logger.warning(
            "telegram_not_configured",
            has_token=bool(bot_token),
            has_chat_id=bool(chat_id)
        )

    return bot_token, chat_id


def format_low_stock_message(
    rows: list[StockRowStatus],
    generated_at: Optional[datetime] = None
) -> str:
    """
    Format low stock rows as a Telegram message.

    Rows outside the alert tiers are left out.

    Args:
        rows: Classified finished goods rows
        generated_at: Timestamp shown in the footer

    Returns:
        Markdown message, or "" if nothing needs attention
    """
    alert_rows = [r for r in rows if r.status.status in ALERT_TIERS]
    if not alert_rows:
        return ""

    lines = [f"📦 *Low Stock* ({len(alert_rows)} item{'s' if len(alert_rows) != 1 else ''})"]

    for tier in ALERT_TIERS:
        tier_rows = [r for r in alert_rows if r.status.status == tier]
        if not tier_rows:
            continue
        lines.append("")
        lines.append(f"{TIER_EMOJIS[tier]} *{tier.value.upper()}*")
        for r in tier_rows:
            region = f" ({r.region})" if r.region else ""
            min_text = f"{r.min_level:g}" if r.min_level is not None else "-"
            lines.append(f"• `{r.sku}`{region}: {r.current_qty:g} / min {min_text}")

    timestamp = (generated_at or datetime.now()).strftime("%Y-%m-%d %H:%M")
    lines.append("")
    lines.append(f"🕐 {timestamp}")

    return "\n".join(lines)


def send_message(message: str, parse_mode: str = "Markdown") -> bool:
    """
    Send message to Telegram.

    Args:
        message: Message text to send
        parse_mode: Telegram parse mode (Markdown or HTML)

    Returns:
        True if sent, False if Telegram is not configured

    Raises:
        TelegramError: If send fails
    """
    bot_token, chat_id = get_telegram_config()

    if not bot_token or not chat_id:
        logger.warning("telegram_not_configured_skipping_send")
        return False

    url = f"https://api.telegram.org/bot{bot_token}/sendMessage"

    payload = {
        "chat_id": chat_id,
        "text": message,
        "parse_mode": parse_mode,
        "disable_web_page_preview": True,
    }

    try:
        logger.info("sending_telegram_message", chat_id=chat_id)

        response = requests.post(url, json=payload, timeout=10)
        response.raise_for_status()

        result = response.json()

        if not result.get("ok"):
            error_msg = result.get("description", "Unknown error")
            logger.error("telegram_api_error", error=error_msg)
            raise TelegramError(f"Telegram API error: {error_msg}")

        logger.info("telegram_message_sent", message_id=result.get("result", {}).get("message_id"))
        return True

    except requests.exceptions.RequestException as e:
        logger.error("telegram_request_failed", error=str(e))
        raise TelegramError(f"Failed to send Telegram message: {str(e)}")
