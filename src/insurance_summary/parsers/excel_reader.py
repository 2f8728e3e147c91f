"""Payroll report reader using openpyxl library."""

from contextlib import closing
from pathlib import Path

from openpyxl import load_workbook

from insurance_summary.parsers.base import ParseError, RawRow
from insurance_summary.utils.logging_config import get_logger

logger = get_logger(__name__)

# Maximum Excel file size to prevent memory exhaustion (50 MB)
MAX_EXCEL_FILE_SIZE = 50 * 1024 * 1024


class ExcelReportReader:
    """Reads the rows of a payroll transaction report.

    Only the first worksheet is read. Cell values keep their types
    (str, int/float, datetime, None) so date cells can be told apart
    from plain numbers downstream.
    """

    @property
    def supported_extensions(self) -> list[str]:
        """Return supported file extensions."""
        return [".xlsx", ".xlsm"]

    def can_read(self, file_path: Path) -> bool:
        """Check if the file extension is supported.

        Args:
            file_path: Path to the file.

        Returns:
            True if the extension is supported.
        """
        return file_path.suffix.lower() in self.supported_extensions

    def read_rows(self, file_path: Path) -> list[RawRow]:
        """Read all rows of the first worksheet.

        Args:
            file_path: Path to the report workbook.

        Returns:
            List of rows, each a tuple of cell values.

        Raises:
            FileNotFoundError: If the file doesn't exist.
            ParseError: If the file is unsupported, too large or unreadable.
        """
        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        if file_path.suffix.lower() == ".xls":
            raise ParseError(
                "Legacy .xls workbooks are not supported; save the report as .xlsx",
                file_path,
            )

        if not self.can_read(file_path):
            raise ParseError(f"Unsupported file type: {file_path.suffix}", file_path)

        # Check file size to prevent memory exhaustion
        file_size = file_path.stat().st_size
        if file_size > MAX_EXCEL_FILE_SIZE:
            raise ParseError(
                f"File too large ({file_size / 1024 / 1024:.1f} MB). "
                f"Maximum allowed is {MAX_EXCEL_FILE_SIZE / 1024 / 1024:.0f} MB",
                file_path,
            )

        logger.info(f"Reading report: {file_path.name}")

        try:
            with closing(load_workbook(file_path, read_only=True, data_only=True)) as wb:
                if not wb.sheetnames:
                    return []
                sheet = wb[wb.sheetnames[0]]
                rows = [tuple(row) for row in sheet.iter_rows(values_only=True)]
        except Exception as e:
            raise ParseError(f"Failed to read Excel file: {e}", file_path) from e

        logger.info(f"Read {len(rows)} rows from {file_path.name}")
        return rows
