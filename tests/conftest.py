"""Shared fixtures for building payroll report workbooks."""

from pathlib import Path
from typing import Callable

import pytest
from openpyxl import Workbook

# Report preamble occupying the three skipped rows
REPORT_HEADER = [
    ["Transaction Report"],
    ["January 2024"],
    [None, "Date", "Transaction Type", "Num", "Name", "Memo/Description", "Account", "Split", "Amount"],
]

ReportEntry = tuple[object, object, object, object, object]


@pytest.fixture
def make_report(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing a report workbook from (date, type, employee, memo, amount) tuples."""

    def _make(entries: list[ReportEntry], name: str = "report.xlsx") -> Path:
        wb = Workbook()
        ws = wb.active
        ws.title = "Transactions"
        for header_row in REPORT_HEADER:
            ws.append(header_row)
        for txn_date, txn_type, employee, memo, amount in entries:
            ws.append([None, txn_date, txn_type, None, employee, memo, None, None, amount])
        path = tmp_path / name
        wb.save(path)
        return path

    return _make
