"""
Export service: Excel reports for the packing floor.

Stock status by SKU, and the priority packing list.
"""

from datetime import datetime
from io import BytesIO
from typing import Optional

from openpyxl import Workbook
from openpyxl.styles import Font, Border, Side, PatternFill
import structlog

from models.priority_packing import PriorityItem, PackingTimeEstimate
from models.stock_level import StockRowStatus, StockTier

logger = structlog.get_logger(__name__)

# Cell fills per tier (light tints of the badge colours)
TIER_FILLS = {
    StockTier.CRITICAL: "FFE0E0",
    StockTier.LOW: "FFF0E0",
    StockTier.BELOW_MIN: "FFFBE0",
    StockTier.NORMAL: "E0FFE0",
    StockTier.HIGH: "E0E8FF",
    StockTier.OVERSTOCK: "F0E0FF",
    StockTier.UNKNOWN: "F0F0F0",
}


def _fill(hex_color: str) -> PatternFill:
    return PatternFill(start_color=hex_color, end_color=hex_color, fill_type="solid")


def format_minutes(minutes: float) -> str:
    """90 → '1h 30m', 45 → '45m'."""
    hours = int(minutes // 60)
    mins = round(minutes % 60)
    return f"{hours}h {mins}m" if hours > 0 else f"{mins}m"


class ExportService:
    """Service for generating Excel exports."""

    def generate_stock_status_excel(
        self,
        rows: list[StockRowStatus],
        generated_at: Optional[datetime] = None,
    ) -> BytesIO:
        """
        Generate stock status workbook.

        Args:
            rows: Classified rows, already in display order
            generated_at: Timestamp for the title block (defaults to now)

        Returns:
            BytesIO containing the Excel file
        """
        generated_at = generated_at or datetime.now()

        logger.info("generating_stock_status_excel", rows=len(rows))

        wb = Workbook()
        ws = wb.active
        ws.title = "Stock Status"

        bold_font = Font(bold=True)
        title_font = Font(bold=True, size=14)
        thin_border = Border(bottom=Side(style="thin", color="000000"))

        widths = {"A": 14, "B": 20, "C": 18, "D": 12, "E": 12, "F": 10, "G": 10, "H": 12, "I": 40}
        for col, width in widths.items():
            ws.column_dimensions[col].width = width

        ws["A1"] = "STOCK STATUS"
        ws["A1"].font = title_font
        ws["A2"] = "Generated:"
        ws["B2"] = generated_at.strftime("%Y-%m-%d %H:%M")

        headers = ["SKU", "Product", "Region", "Size", "Current", "Min", "Max", "Status", "Message"]
        header_row = 4
        for i, header in enumerate(headers):
            cell = ws.cell(row=header_row, column=i + 1, value=header)
            cell.font = bold_font
            cell.border = thin_border

        row = header_row + 1
        for r in rows:
            ws.cell(row=row, column=1, value=r.sku)
            ws.cell(row=row, column=2, value=r.product_type or "")
            ws.cell(row=row, column=3, value=r.region or "")
            ws.cell(row=row, column=4, value=r.package_size or "")
            ws.cell(row=row, column=5, value=r.current_qty)
            ws.cell(row=row, column=6, value=r.min_level)
            ws.cell(row=row, column=7, value=r.max_level)
            status_cell = ws.cell(row=row, column=8, value=r.status.status.value)
            status_cell.fill = _fill(TIER_FILLS[r.status.status])
            ws.cell(row=row, column=9, value=r.status.message)
            row += 1

        logger.info("stock_status_excel_generated", rows=len(rows))

        # Save to BytesIO
        output = BytesIO()
        wb.save(output)
        output.seek(0)

        return output

    def generate_priority_packing_excel(
        self,
        items: list[PriorityItem],
        estimate: PackingTimeEstimate,
    ) -> BytesIO:
        """
        Generate priority packing workbook.

        Returns:
            BytesIO containing the Excel file
        """
        logger.info("generating_priority_packing_excel", items=len(items))

        wb = Workbook()
        ws = wb.active
        ws.title = "Priority Packing"

        bold_font = Font(bold=True)
        title_font = Font(bold=True, size=14)
        thin_border = Border(bottom=Side(style="thin", color="000000"))
        urgent_fill = _fill("FFE0E0")

        ws.column_dimensions["A"].width = 12
        ws.column_dimensions["B"].width = 12
        ws.column_dimensions["C"].width = 20
        ws.column_dimensions["D"].width = 18

        ws["A1"] = "PRIORITY PACKING"
        ws["A1"].font = title_font

        ws["A3"] = "Time needed:"
        ws["B3"] = format_minutes(estimate.total_minutes)
        ws["A4"] = "Available:"
        ws["B4"] = format_minutes(estimate.available_minutes)
        ws["A5"] = "Bottleneck:"
        ws["B5"] = estimate.bottleneck_sku or "-"
        if not estimate.fits_in_shift:
            ws["B3"].font = Font(bold=True, color="CC0000")

        headers = ["Priority", "SKU", "Product", "Region", "Size", "Current", "Minimum", "Need to Pack", "Time"]
        header_row = 7
        for i, header in enumerate(headers):
            cell = ws.cell(row=header_row, column=i + 1, value=header)
            cell.font = bold_font
            cell.border = thin_border

        row = header_row + 1
        for item in items:
            band_cell = ws.cell(row=row, column=1, value=item.band.value)
            if item.priority >= 100:
                band_cell.fill = urgent_fill
            ws.cell(row=row, column=2, value=item.sku)
            ws.cell(row=row, column=3, value=item.product_type or "")
            ws.cell(row=row, column=4, value=item.region or "")
            ws.cell(row=row, column=5, value=item.package_size or "")
            ws.cell(row=row, column=6, value=item.current_stock)
            ws.cell(row=row, column=7, value=item.min_stock)
            ws.cell(row=row, column=8, value=f"{item.shortage} {item.packaging_type}s")
            ws.cell(
                row=row,
                column=9,
                value=format_minutes(item.time_needed) if item.time_needed is not None else "-"
            )
            row += 1

        # Save to BytesIO
        output = BytesIO()
        wb.save(output)
        output.seek(0)

        return output


# Singleton instance
_export_service: Optional[ExportService] = None


def get_export_service() -> ExportService:
    """Get or create ExportService instance."""
    global _export_service
    if _export_service is None:
        _export_service = ExportService()
    return _export_service
