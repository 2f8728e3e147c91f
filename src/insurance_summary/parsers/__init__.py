"""Readers for payroll transaction reports."""

from insurance_summary.parsers.base import ParseError, RawRow
from insurance_summary.parsers.cells import cell_amount, cell_text, safe_get
from insurance_summary.parsers.excel_reader import ExcelReportReader

__all__ = [
    "ParseError",
    "RawRow",
    "ExcelReportReader",
    "cell_text",
    "cell_amount",
    "safe_get",
]
