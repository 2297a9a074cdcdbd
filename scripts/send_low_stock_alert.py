"""
Send the low stock digest to Telegram.

Meant to run from cron after the finished goods sheet is updated.

Usage:
    python scripts/send_low_stock_alert.py
    python scripts/send_low_stock_alert.py --dry-run
"""

import argparse
import os
import sys

# Allow imports from the project root when running as a script
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from exceptions import AppError
from integrations.telegram import format_low_stock_message
from services.stock_dashboard_service import get_stock_dashboard_service


def main():
    parser = argparse.ArgumentParser(
        description="Send finished goods below minimum to Telegram."
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the message instead of sending it",
    )
    args = parser.parse_args()

    service = get_stock_dashboard_service()

    try:
        if args.dry_run:
            message = format_low_stock_message(service.get_alert_rows())
            print(message or "Nothing below minimum.")
            return

        sent = service.send_low_stock_digest()
    except AppError as e:
        print(f"[ERROR] {e.code}: {e.message}")
        sys.exit(1)

    print("[OK] Digest sent" if sent else "[OK] Nothing sent")


if __name__ == "__main__":
    main()
