"""Grid layout engine for per-category summary sheets."""

from collections.abc import Sequence
from decimal import Decimal
from enum import Enum

from insurance_summary.models.category import Category
from insurance_summary.models.grid import (
    CellRef,
    CellValue,
    Grid,
    Literal,
    RangeSum,
    Row,
    Sum,
    Text,
)
from insurance_summary.models.record import TransactionRecord
from insurance_summary.processing.aggregator import Buckets, bucket_amounts
from insurance_summary.processing.geometry import DEFAULT_GEOMETRY, SheetGeometry
from insurance_summary.utils.decimal_utils import ZERO, sum_amounts
from insurance_summary.utils.logging_config import get_logger
from insurance_summary.utils.sanitize import sanitize_sheet_name

logger = get_logger(__name__)

TOTAL_LABEL = "Total"


class LayoutMode(Enum):
    """How much structure a category sheet carries."""

    FULL = "full"  # Additive formulas, row totals, grand-total row
    SIMPLE = "simple"  # Pre-summed literals only, no totals


class GridLayoutEngine:
    """Lays out one category's records as a positional grid.

    Rows are employees in global first-seen order, so every sheet lists
    employees in the same order even when some have no entries. Columns
    are one group per date that has at least one amount in the category.
    """

    def __init__(
        self,
        geometry: SheetGeometry = DEFAULT_GEOMETRY,
        mode: LayoutMode = LayoutMode.FULL,
        total_column_width: float = 15.9,
        amount_column_width: float = 13.3,
    ):
        """Initialize layout engine.

        Args:
            geometry: Fixed sheet positions.
            mode: Full or simple layout.
            total_column_width: Width hint for the row-total column.
            amount_column_width: Width hint for each amount column.
        """
        self.geometry = geometry
        self.mode = mode
        self.total_column_width = total_column_width
        self.amount_column_width = amount_column_width

    def layout(
        self,
        category: Category,
        records: Sequence[TransactionRecord],
        employees: Sequence[str],
        dates: Sequence[str],
    ) -> Grid:
        """Build the grid for one category.

        Args:
            category: Category the sheet summarizes.
            records: Records to place (others' categories are ignored).
            employees: Global employee set.
            dates: Global date set.

        Returns:
            Grid ready for the sheet writer.
        """
        geo = self.geometry
        buckets, relevant_dates = bucket_amounts(category, records, employees, dates)
        employee_order = list(buckets)

        grid = Grid(
            title=category.label,
            sheet_name=sanitize_sheet_name(category.label),
            date_count=len(relevant_dates),
        )

        # Rows before the first data row hold only the title
        while len(grid.rows) < geo.first_data_row:
            grid.add_row()
        grid.rows[geo.title_row].append((geo.title_column, Text(category.label)))

        for employee in employee_order:
            row_idx = len(grid.rows)
            row = grid.add_row()
            self._fill_employee_row(row, row_idx, employee, buckets, relevant_dates)

        if employee_order:
            grid.employee_rows = (geo.first_data_row, len(grid.rows) - 1)

        if self.mode is LayoutMode.FULL:
            grid.total_row = len(grid.rows)
            self._fill_total_row(grid.add_row(), grid, len(relevant_dates))

        for row in grid.rows:
            row.sort(key=lambda pair: pair[0])

        self._set_column_widths(grid, len(relevant_dates))

        logger.debug(
            f"Laid out '{category.label}': {len(employee_order)} employees, "
            f"{len(relevant_dates)} date groups"
        )
        return grid

    def _fill_employee_row(
        self,
        row: Row,
        row_idx: int,
        employee: str,
        buckets: Buckets,
        relevant_dates: list[str],
    ) -> None:
        """Populate one employee's row.

        Args:
            row: Row to fill.
            row_idx: Index of the row on the sheet.
            employee: Employee name.
            buckets: Amount buckets per employee and date.
            relevant_dates: Dates that get a column group.
        """
        geo = self.geometry
        row.append((geo.label_column, Text(employee)))

        employee_buckets = buckets.get(employee, {})
        for i, txn_date in enumerate(relevant_dates):
            amounts = employee_buckets.get(txn_date, [])
            if not amounts:
                continue
            row.append((geo.amount_column(i), self._amount_cell(amounts)))
            row.append((geo.name_column(i), Text(employee)))
            row.append((geo.date_column(i), Text(txn_date)))

        if self.mode is LayoutMode.SIMPLE:
            return

        if relevant_dates:
            row.append((
                geo.total_column,
                RangeSum(
                    CellRef(row_idx, geo.amount_column(0)),
                    CellRef(row_idx, geo.last_amount_column(len(relevant_dates))),
                ),
            ))
        else:
            row.append((geo.total_column, Literal(ZERO)))

    def _amount_cell(self, amounts: list[Decimal]) -> CellValue:
        """Render a bucket: single value as-is, several as visible terms."""
        if len(amounts) == 1:
            return Literal(amounts[0])
        if self.mode is LayoutMode.SIMPLE:
            return Literal(sum_amounts(amounts))
        return Sum(tuple(amounts))

    def _fill_total_row(self, row: Row, grid: Grid, date_count: int) -> None:
        """Populate the grand-total row below the employees.

        Args:
            row: Row to fill.
            grid: Grid being built (employee rows already placed).
            date_count: Number of date groups.
        """
        geo = self.geometry
        row.append((geo.label_column, Text(TOTAL_LABEL)))

        if grid.employee_rows is None:
            row.append((geo.total_column, Literal(ZERO)))
            return

        first, last = grid.employee_rows
        for i in range(date_count):
            col = geo.amount_column(i)
            row.append((col, RangeSum(CellRef(first, col), CellRef(last, col))))

        row.append((
            geo.total_column,
            RangeSum(CellRef(first, geo.total_column), CellRef(last, geo.total_column)),
        ))

    def _set_column_widths(self, grid: Grid, date_count: int) -> None:
        geo = self.geometry
        grid.column_widths[geo.label_column] = None
        if self.mode is LayoutMode.FULL:
            grid.column_widths[geo.total_column] = self.total_column_width
        for i in range(date_count):
            grid.column_widths[geo.amount_column(i)] = self.amount_column_width
            grid.column_widths[geo.name_column(i)] = None
            grid.column_widths[geo.date_column(i)] = None


def layout_category(
    category: Category,
    records: Sequence[TransactionRecord],
    employees: Sequence[str],
    dates: Sequence[str],
    mode: LayoutMode = LayoutMode.FULL,
) -> Grid:
    """Convenience function to lay out one category with default geometry.

    Args:
        category: Category the sheet summarizes.
        records: Records to place.
        employees: Global employee set.
        dates: Global date set.
        mode: Full or simple layout.

    Returns:
        Grid for the category.
    """
    return GridLayoutEngine(mode=mode).layout(category, records, employees, dates)


def sheet_total(grid: Grid, geometry: SheetGeometry = DEFAULT_GEOMETRY) -> Decimal:
    """Grand total shown on a sheet.

    Uses the grand-total cell when the grid has one, otherwise adds up
    every amount cell on the employee rows.

    Args:
        grid: Laid-out grid.
        geometry: Geometry the grid was laid out with.

    Returns:
        Total of all amounts on the sheet.
    """
    if grid.total_row is not None:
        return grid.evaluate(grid.total_row, geometry.total_column)

    if grid.employee_rows is None:
        return ZERO

    first, last = grid.employee_rows
    total = ZERO
    for row_idx in range(first, last + 1):
        for i in range(grid.date_count):
            total += grid.evaluate(row_idx, geometry.amount_column(i))
    return total
