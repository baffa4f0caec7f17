"""
Excel exporter for imported transactions.

The workbook has two sheets:
    Transactions: one row per transaction, expenses shaded, totals underneath
    Import Log: source, method, confidence, warnings and timing
"""
import logging
from pathlib import Path

import openpyxl
from openpyxl.styles import Font, PatternFill, Alignment
from openpyxl.utils import get_column_letter

from ..config.settings import CURRENCY_SYMBOLS, DEFAULT_CURRENCY
from ..models import ExtractionResult, TransactionType

logger = logging.getLogger(__name__)

# (header, width) in sheet order
TRANSACTION_COLUMNS = [
    ("Date", 12),
    ("Description", 50),
    ("Category", 16),
    ("Type", 10),
    ("Amount", 15),
]

BOLD = Font(bold=True)


def _solid(color: str) -> PatternFill:
    return PatternFill(start_color=color, end_color=color, fill_type="solid")


class ExcelExporter:
    """Write an ExtractionResult to a formatted .xlsx workbook."""

    HEADER_FILL = _solid("366092")
    EXPENSE_FILL = _solid("FFC7CE")
    SUCCESS_FILL = _solid("C6EFCE")
    NOTE_FILL = _solid("FFEB9C")

    def __init__(self, currency: str = DEFAULT_CURRENCY):
        symbol = CURRENCY_SYMBOLS.get(currency, "")
        self.number_format = f'"{symbol}"#,##0.00' if symbol else '#,##0.00'

    def export(self, result: ExtractionResult, output_path: Path) -> Path:
        """
        Build the workbook and save it.

        Args:
            result: Import outcome to write
            output_path: Destination .xlsx path (parent directories are created)

        Returns:
            The path written
        """
        output_path = Path(output_path)
        logger.info(f"Writing workbook: {output_path}")

        wb = openpyxl.Workbook()
        wb.remove(wb.active)

        self._write_transactions(wb.create_sheet("Transactions"), result)
        self._write_log(wb.create_sheet("Import Log"), result)

        output_path.parent.mkdir(parents=True, exist_ok=True)
        wb.save(output_path)
        logger.info(f"Wrote {result.transaction_count} transactions to {output_path.name}")

        return output_path

    def _write_transactions(self, ws, result: ExtractionResult) -> None:
        amount_col = len(TRANSACTION_COLUMNS)

        for col, (header, width) in enumerate(TRANSACTION_COLUMNS, start=1):
            cell = ws.cell(row=1, column=col, value=header)
            cell.font = Font(bold=True, color="FFFFFF")
            cell.fill = self.HEADER_FILL
            cell.alignment = Alignment(horizontal="center", vertical="center")
            ws.column_dimensions[get_column_letter(col)].width = width

        for row, txn in enumerate(result.transactions, start=2):
            values = (
                txn.date.strftime("%Y-%m-%d"),
                txn.description,
                txn.category,
                txn.type.value,
                txn.amount,
            )
            for col, value in enumerate(values, start=1):
                cell = ws.cell(row=row, column=col, value=value)
                if txn.type is TransactionType.EXPENSE:
                    cell.fill = self.EXPENSE_FILL
            ws.cell(row=row, column=amount_col).number_format = self.number_format

        # One blank row between the data and the totals
        first_total_row = result.transaction_count + 3
        totals = (
            ("TOTAL INCOME", result.total_income),
            ("TOTAL EXPENSE", result.total_expense),
            ("NET", result.net_amount),
        )
        for row, (label, value) in enumerate(totals, start=first_total_row):
            ws.cell(row=row, column=1, value=label).font = BOLD
            cell = ws.cell(row=row, column=amount_col, value=value)
            cell.font = BOLD
            cell.fill = self.NOTE_FILL
            cell.number_format = self.number_format

        ws.freeze_panes = "A2"

    def _write_log(self, ws, result: ExtractionResult) -> None:
        ws.cell(row=1, column=1, value="Import Log").font = Font(bold=True, size=14)

        entries = [
            ("Status:", "SUCCESS" if result.success else "FAILED"),
            ("Source:", result.source or ""),
            ("Extraction Method:", result.extraction_method),
            ("Transactions:", result.transaction_count),
            ("Text Confidence:", f"{result.text_confidence:.0f}%"),
            ("Total Income:", result.total_income),
            ("Total Expense:", result.total_expense),
            ("Processing Time:", f"{result.processing_time:.2f} seconds"),
            ("Extracted At:", result.extracted_at.strftime("%Y-%m-%d %H:%M:%S")),
        ]
        for row, (label, value) in enumerate(entries, start=3):
            ws.cell(row=row, column=1, value=label)
            ws.cell(row=row, column=2, value=value)

        ws["B3"].fill = self.SUCCESS_FILL if result.success else self.EXPENSE_FILL

        row = 3 + len(entries) + 1
        if result.warnings:
            ws.cell(row=row, column=1, value="Warnings:").font = BOLD
            for row, warning in enumerate(result.warnings, start=row + 1):
                ws.cell(row=row, column=2, value=warning).fill = self.NOTE_FILL
            row += 2

        if result.error_message:
            ws.cell(row=row, column=1, value="Error:").font = BOLD
            ws.cell(row=row, column=2, value=result.error_message)

        ws.column_dimensions['A'].width = 25
        ws.column_dimensions['B'].width = 60
