"""Positional grid model for one category sheet.

A grid is the laid-out content of a worksheet before rendering. Cells are
addressed by 0-based (row, column) pairs; the writer turns them into A1
references and formulas.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Union

from insurance_summary.utils.decimal_utils import ZERO, sum_amounts


@dataclass(frozen=True)
class CellRef:
    """0-based cell position on a sheet."""

    row: int
    column: int


@dataclass(frozen=True)
class Literal:
    """A monetary number written as-is."""

    value: Decimal


@dataclass(frozen=True)
class Text:
    """A label cell."""

    value: str


@dataclass(frozen=True)
class Sum:
    """An additive formula whose individual terms stay visible.

    Attributes:
        terms: Amounts in the order they were recorded.
    """

    terms: tuple[Decimal, ...]

    @property
    def total(self) -> Decimal:
        """Arithmetic total of the terms."""
        return sum_amounts(list(self.terms))


@dataclass(frozen=True)
class RangeSum:
    """A SUM over a rectangular range of the same sheet (inclusive)."""

    start: CellRef
    end: CellRef

    def contains(self, row: int, column: int) -> bool:
        """Check whether a position lies inside the range."""
        return (
            self.start.row <= row <= self.end.row
            and self.start.column <= column <= self.end.column
        )


CellValue = Union[Literal, Text, Sum, RangeSum]

Row = list[tuple[int, CellValue]]


@dataclass
class Grid:
    """Laid-out content of one category sheet.

    Attributes:
        title: Category name written in the title cell.
        sheet_name: Worksheet title (already sanitized).
        rows: Sheet rows by 0-based index; each row holds
            (column, value) pairs in ascending column order.
        employee_rows: Inclusive (first, last) index of the employee rows,
            or None when the sheet has no employees.
        total_row: Index of the grand-total row, or None when the layout
            has no totals.
        date_count: Number of date column groups emitted.
        column_widths: Width hints per column; None means fit to content.
    """

    title: str
    sheet_name: str
    rows: list[Row] = field(default_factory=list)
    employee_rows: tuple[int, int] | None = None
    total_row: int | None = None
    date_count: int = 0
    column_widths: dict[int, float | None] = field(default_factory=dict)

    def add_row(self) -> Row:
        """Append an empty row and return it."""
        row: Row = []
        self.rows.append(row)
        return row

    def cell(self, row: int, column: int) -> CellValue | None:
        """Return the value at a position, or None for an empty cell."""
        if row < 0 or row >= len(self.rows):
            return None
        for col, value in self.rows[row]:
            if col == column:
                return value
        return None

    def evaluate(self, row: int, column: int) -> Decimal:
        """Compute the numeric value shown at a position.

        Text and empty cells count as zero, matching spreadsheet SUM
        semantics.
        """
        return self._evaluate(self.cell(row, column), set())

    def _evaluate(self, value: CellValue | None, visiting: set[CellRef]) -> Decimal:
        if value is None or isinstance(value, Text):
            return ZERO
        if isinstance(value, Literal):
            return value.value
        if isinstance(value, Sum):
            return value.total

        total = ZERO
        for row_idx in range(value.start.row, value.end.row + 1):
            if row_idx >= len(self.rows):
                break
            for col, inner in self.rows[row_idx]:
                if not value.contains(row_idx, col):
                    continue
                ref = CellRef(row_idx, col)
                if ref in visiting:
                    raise ValueError(f"Circular reference at {ref}")
                visiting.add(ref)
                total += self._evaluate(inner, visiting)
                visiting.discard(ref)
        return total
