"""Extraction of categorized payroll records from report rows."""

from collections.abc import Sequence

from insurance_summary.config import InputConfig
from insurance_summary.models.record import ExtractionResult, TransactionRecord
from insurance_summary.parsers.base import RawRow
from insurance_summary.parsers.cells import cell_amount, cell_text, safe_get
from insurance_summary.processing.categorizer import categorize
from insurance_summary.utils.logging_config import get_logger

logger = get_logger(__name__)


class RecordExtractor:
    """Filters report rows down to categorized payroll records.

    A row becomes a record when:
    1. Its transaction type equals the configured type ("Payroll Check")
    2. Its amount is non-zero and its memo is non-blank
    3. Its memo maps to a category

    Rows failing any check are skipped silently; a bad row never aborts
    the extraction.
    """

    def __init__(self, settings: InputConfig):
        """Initialize extractor with report settings.

        Args:
            settings: Input configuration (header margin, columns, type).
        """
        self.settings = settings
        self._type_col = settings.column_index("transaction_type")
        self._date_col = settings.column_index("date")
        self._employee_col = settings.column_index("employee")
        self._memo_col = settings.column_index("memo")
        self._amount_col = settings.column_index("amount")

    def extract(self, rows: Sequence[RawRow]) -> ExtractionResult:
        """Scan rows and collect matching records.

        Args:
            rows: Worksheet rows, header rows included.

        Returns:
            ExtractionResult with records plus the ordered employee and
            date sets seen across all records.
        """
        result = ExtractionResult()

        for idx in range(self.settings.header_rows, len(rows)):
            row = rows[idx]
            result.rows_scanned += 1
            record = self._extract_row(row, idx + 1)
            if record is None:
                result.rows_skipped += 1
                continue
            result.add(record)

        logger.info(
            f"Extracted {len(result.records)} records from {result.rows_scanned} rows "
            f"({len(result.employees)} employees, {len(result.dates)} dates)"
        )
        return result

    def _extract_row(self, row: RawRow | None, row_number: int) -> TransactionRecord | None:
        """Turn a single row into a record.

        Args:
            row: Worksheet row (may be None or short).
            row_number: 1-based row number for logging.

        Returns:
            TransactionRecord, or None if the row is filtered out.
        """
        if not row:
            return None

        txn_type = cell_text(safe_get(row, self._type_col))
        if txn_type != self.settings.transaction_type:
            return None

        date_format = self.settings.date_format
        txn_date = cell_text(safe_get(row, self._date_col), date_format)
        employee = cell_text(safe_get(row, self._employee_col), date_format)
        memo = cell_text(safe_get(row, self._memo_col), date_format)
        amount = cell_amount(safe_get(row, self._amount_col))

        if amount == 0 or not memo:
            logger.debug(f"Row {row_number}: skipped (zero amount or blank memo)")
            return None

        category = categorize(memo)
        if category is None:
            return None

        return TransactionRecord(
            employee_name=employee,
            date=txn_date,
            category=category,
            amount=amount,
            source_row=row_number,
        )


def extract_records(rows: Sequence[RawRow], settings: InputConfig) -> ExtractionResult:
    """Convenience function to extract records from report rows.

    Args:
        rows: Worksheet rows.
        settings: Input configuration.

    Returns:
        ExtractionResult.
    """
    return RecordExtractor(settings).extract(rows)
