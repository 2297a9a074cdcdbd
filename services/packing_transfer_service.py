"""
Packing transfer recording.

A transfer is written as:
    1. One row in the packing transfers ledger, carrying the packet label
    2. One "Stock Out" row per packing material in the raw material ledger

Label sequences are allocated from the labels already in the ledger, so
allocation and the append are done under one lock. This only serialises
callers in this process; a second process writing the same sheet can
still race.
"""

import threading
from datetime import date, datetime
from typing import Callable, Iterable, Optional

import structlog

from config import settings
from config.packing import RETAIL_PRODUCTS
from exceptions import AppError, ProductNotFoundError
from integrations.google_sheets import SheetsClient, get_sheets_client
from models.packing_material import DeductionLineItem
from models.packing_transfer import PackingTransferCreate, PackingTransferResponse
from services.packet_label_service import encode, next_sequence
from services.packing_material_service import for_deduction

logger = structlog.get_logger(__name__)

TRANSFER_ID_PREFIX = "TRF"


def next_transfer_id(packing_date: date, existing_ids: Iterable[Optional[str]]) -> str:
    """
    Next transfer ID for a day: TRF-YYMMDD-NNN.

    Example:
        next_transfer_id(date(2025, 10, 31), ["TRF-251031-002"]) → "TRF-251031-003"
    """
    prefix = f"{TRANSFER_ID_PREFIX}-{packing_date.strftime('%y%m%d')}-"

    max_seq = 0
    for transfer_id in existing_ids:
        if not transfer_id or not transfer_id.startswith(prefix):
            continue
        seq = transfer_id[len(prefix):]
        if seq.isascii() and seq.isdigit():
            max_seq = max(max_seq, int(seq))

    return f"{prefix}{max_seq + 1:03d}"


def packed_weight_tonnes(sku: str, units_packed: int) -> float:
    """WIP consumed by a packing run, in tonnes."""
    product = RETAIL_PRODUCTS[sku]
    total_units = units_packed * product["packaging"]["quantity"]
    return total_units * product["weight_per_unit"] / 1000


class PackingTransferService:
    """
    Packing transfer business logic.

    Mints the packet label and deducts packing materials.
    """

    def __init__(
        self,
        sheets: Optional[SheetsClient] = None,
        clock: Callable[[], datetime] = datetime.now
    ):
        self.sheets = sheets or get_sheets_client()
        self.clock = clock
        self.transfers_sheet = settings.packing_transfers_sheet
        self.materials_sheet = settings.raw_material_transactions_sheet
        self._lock = threading.Lock()

    def _material_row(
        self,
        now: datetime,
        data: PackingTransferCreate,
        transfer_id: str,
        deduction: DeductionLineItem
    ) -> list:
        return [
            now.isoformat(),
            data.packing_date.isoformat(),
            "Stock Out",
            deduction.material,
            deduction.category,
            deduction.unit,
            "0",  # Stock in
            f"{deduction.quantity:.4f}",
            "N/A",  # Supplier
            "N/A",  # Batch number
            "0",  # Unit price
            "0",  # Total cost
            f"Used for packing transfer {transfer_id}",
            data.operator or "System",
        ]

    def record_transfer(self, data: PackingTransferCreate) -> PackingTransferResponse:
        """
        Record a packing transfer.

        Args:
            data: Transfer details

        Returns:
            Transfer ID, packet label and the deductions written

        Raises:
            ProductNotFoundError: If SKU is not in the retail catalog
            FormatError: If the WIP batch ID is malformed
            SheetsError: If reading or writing the ledger fails
        """
        product = RETAIL_PRODUCTS.get(data.sku)
        if not product:
            raise ProductNotFoundError(data.sku)

        packing_date = data.packing_date.isoformat()
        total_units = data.units_packed * product["packaging"]["quantity"]
        weight = packed_weight_tonnes(data.sku, data.units_packed)
        deductions = for_deduction(product["size"], data.units_packed)

        logger.info(
            "recording_packing_transfer",
            wip_batch_id=data.wip_batch_id,
            region=data.region,
            sku=data.sku,
            units_packed=data.units_packed
        )

        with self._lock:
            records = self.sheets.read_records(self.transfers_sheet, "A1:R1000")
            existing_labels = [r.get("Packet Label") for r in records if r.get("Packet Label")]
            existing_ids = [r.get("Transfer ID") for r in records]

            sequence = next_sequence(data.region, packing_date, existing_labels)
            label = encode(data.wip_batch_id, data.region, packing_date, sequence)
            transfer_id = next_transfer_id(data.packing_date, existing_ids)

            now = self.clock()
            self.sheets.append_row(self.transfers_sheet, [
                transfer_id,
                packing_date,
                now.strftime("%H:%M"),
                data.wip_batch_id,
                data.region,
                data.sku,
                product["product_type"],
                product["size"],
                product["packaging"]["type"],
                str(data.units_packed),
                str(total_units),
                f"{weight:.3f}",
                data.operator or "Unknown",
                data.shift or "-",
                data.line or "-",
                data.notes or "-",
                now.isoformat(),
                label,
            ])

        for i, deduction in enumerate(deductions):
            try:
                self.sheets.append_row(
                    self.materials_sheet,
                    self._material_row(now, data, transfer_id, deduction)
                )
            except AppError as e:
                logger.error(
                    "packing_material_deduction_failed",
                    transfer_id=transfer_id,
                    packet_label=label,
                    missing=[
                        {"material": d.material, "quantity": f"{d.quantity:.4f}"}
                        for d in deductions[i:]
                    ],
                    error=e.message
                )
                raise

        logger.info(
            "packing_transfer_recorded",
            transfer_id=transfer_id,
            packet_label=label,
            deductions=len(deductions)
        )

        return PackingTransferResponse(
            transfer_id=transfer_id,
            packet_label=label,
            sequence=sequence,
            total_units=total_units,
            weight_consumed_t=weight,
            deductions=deductions,
        )


# Singleton instance
_packing_transfer_service: Optional[PackingTransferService] = None


def get_packing_transfer_service() -> PackingTransferService:
    """Get or create PackingTransferService instance."""
    global _packing_transfer_service
    if _packing_transfer_service is None:
        _packing_transfer_service = PackingTransferService()
    return _packing_transfer_service
