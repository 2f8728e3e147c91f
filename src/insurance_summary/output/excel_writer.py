"""Excel workbook writer for insurance summary output."""

from pathlib import Path

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from insurance_summary.config import OutputConfig
from insurance_summary.models.grid import CellRef, CellValue, Grid, Literal, RangeSum, Sum, Text
from insurance_summary.models.report import SheetFailure
from insurance_summary.utils.decimal_utils import format_term
from insurance_summary.utils.logging_config import get_logger
from insurance_summary.utils.sanitize import sanitize_cell_text

logger = get_logger(__name__)

# Bounds for content-fitted column widths
MIN_FIT_WIDTH = 8
MAX_FIT_WIDTH = 60


def ensure_xlsx_suffix(path: Path) -> Path:
    """Append .xlsx to a path that lacks it.

    Args:
        path: Requested output path.

    Returns:
        Path ending in .xlsx.
    """
    if path.name.lower().endswith(".xlsx"):
        return path
    return path.with_name(path.name + ".xlsx")


def cell_address(ref: CellRef) -> str:
    """Convert a 0-based CellRef to an A1 reference."""
    return f"{get_column_letter(ref.column + 1)}{ref.row + 1}"


def render_formula(value: Sum | RangeSum) -> str:
    """Render a formula cell value as Excel formula text.

    Args:
        value: Additive or range-sum cell value.

    Returns:
        Formula string starting with "=".
    """
    if isinstance(value, RangeSum):
        return f"=SUM({cell_address(value.start)}:{cell_address(value.end)})"

    if not value.terms:
        return "=0"

    parts = [format_term(value.terms[0])]
    for term in value.terms[1:]:
        if term < 0:
            parts.append(f"-{format_term(-term)}")
        else:
            parts.append(f"+{format_term(term)}")
    return "=" + "".join(parts)


class ExcelSummaryWriter:
    """Writes category grids to a workbook, one sheet per grid.

    Each sheet is rendered independently; a sheet that fails to render is
    dropped and reported while the remaining sheets are still written.
    """

    def __init__(self, output_config: OutputConfig):
        """Initialize Excel writer.

        Args:
            output_config: Output configuration (number format, widths).
        """
        self.output_config = output_config

        # Style definitions
        self.title_font = Font(bold=True, size=12)
        self.total_font = Font(bold=True)

    def write(self, output_path: Path, grids: list[Grid]) -> list[SheetFailure]:
        """Render grids and save the workbook.

        Args:
            output_path: Path for output file (.xlsx appended if missing).
            grids: Grids to render, in sheet order.

        Returns:
            Sheets that could not be rendered. When no sheet renders, no
            workbook is saved.

        Raises:
            OSError: If the workbook cannot be saved.
        """
        output_path = ensure_xlsx_suffix(output_path)
        logger.info(f"Writing Excel workbook to {output_path}")

        failures: list[SheetFailure] = []
        wb = self.build_workbook(grids, failures)

        if not wb.worksheets:
            logger.error(f"No sheets rendered; {output_path} not written")
            return failures

        output_path.parent.mkdir(parents=True, exist_ok=True)
        wb.save(output_path)
        logger.info(f"Excel workbook saved: {output_path}")
        return failures

    def build_workbook(
        self, grids: list[Grid], failures: list[SheetFailure] | None = None
    ) -> Workbook:
        """Render grids into a new in-memory workbook.

        Args:
            grids: Grids to render.
            failures: Optional list collecting sheets that failed.

        Returns:
            Workbook with one sheet per successfully rendered grid.
        """
        wb = Workbook()
        # Remove default sheet
        if wb.active:
            wb.remove(wb.active)

        for grid in grids:
            ws = wb.create_sheet(grid.sheet_name)
            try:
                self._render_grid(ws, grid)
            except Exception as e:
                logger.exception(f"Failed to render sheet '{grid.sheet_name}'")
                wb.remove(ws)
                if failures is not None:
                    failures.append(SheetFailure(grid.title, "write", str(e)))
                continue
            logger.debug(f"Rendered sheet '{ws.title}' with {len(grid.rows)} rows")

        return wb

    def _render_grid(self, ws: Worksheet, grid: Grid) -> None:
        """Write a grid's cells, styles and column widths to a sheet.

        Args:
            ws: Target worksheet.
            grid: Grid to render.
        """
        money_fmt = self.output_config.number_format

        for row_idx, row in enumerate(grid.rows):
            for col_idx, value in row:
                cell = ws.cell(row=row_idx + 1, column=col_idx + 1, value=self._cell_content(value))
                if not isinstance(value, Text):
                    cell.number_format = money_fmt
                if row_idx == grid.total_row:
                    cell.font = self.total_font

        ws.cell(row=1, column=1).font = self.title_font
        self._set_column_widths(ws, grid)

    def _cell_content(self, value: CellValue) -> object:
        if isinstance(value, Literal):
            return value.value
        if isinstance(value, Text):
            return sanitize_cell_text(value.value)
        if isinstance(value, (Sum, RangeSum)):
            return render_formula(value)
        raise TypeError(f"Unsupported cell value: {value!r}")

    def _set_column_widths(self, ws: Worksheet, grid: Grid) -> None:
        """Apply width hints, fitting auto columns to their text."""
        for col_idx, width in grid.column_widths.items():
            if width is None:
                width = self._fit_width(grid, col_idx)
            ws.column_dimensions[get_column_letter(col_idx + 1)].width = width

    def _fit_width(self, grid: Grid, col_idx: int) -> float:
        longest = 0
        for row in grid.rows:
            for col, value in row:
                if col == col_idx and isinstance(value, Text):
                    longest = max(longest, len(value.value))
        return float(min(max(longest + 2, MIN_FIT_WIDTH), MAX_FIT_WIDTH))
