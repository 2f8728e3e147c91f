"""Normalized payroll transaction records."""

from dataclasses import dataclass, field
from decimal import Decimal

from insurance_summary.models.category import Category


@dataclass(frozen=True)
class TransactionRecord:
    """A payroll transaction that matched an insurance category.

    Attributes:
        employee_name: Employee the transaction was paid for.
        date: Transaction date label as shown in the report.
        category: Category derived from the transaction memo.
        amount: Non-zero transaction amount.
        source_row: 1-based worksheet row the record was read from.
    """

    employee_name: str
    date: str
    category: Category
    amount: Decimal
    source_row: int | None = None


@dataclass
class ExtractionResult:
    """Output of scanning a report: records plus the ordered universes.

    Attributes:
        records: Records in report order.
        employees: Distinct employee names in order of first appearance.
        dates: Distinct dates in order of first appearance.
        rows_scanned: Number of rows examined after the header margin.
        rows_skipped: Number of scanned rows that produced no record.
    """

    records: list[TransactionRecord] = field(default_factory=list)
    employees: list[str] = field(default_factory=list)
    dates: list[str] = field(default_factory=list)
    rows_scanned: int = 0
    rows_skipped: int = 0

    def __post_init__(self) -> None:
        self._employee_index: set[str] = set(self.employees)
        self._date_index: set[str] = set(self.dates)

    @property
    def is_empty(self) -> bool:
        """True when no row matched any category."""
        return not self.records

    def add(self, record: TransactionRecord) -> None:
        """Append a record and register its employee and date."""
        self.records.append(record)
        if record.employee_name not in self._employee_index:
            self._employee_index.add(record.employee_name)
            self.employees.append(record.employee_name)
        if record.date not in self._date_index:
            self._date_index.add(record.date)
            self.dates.append(record.date)
