"""Data models for payroll records, categories, and sheet grids."""

from insurance_summary.models.category import CATEGORY_RULES, Category, CategoryRule
from insurance_summary.models.grid import (
    CellRef,
    CellValue,
    Grid,
    Literal,
    RangeSum,
    Sum,
    Text,
)
from insurance_summary.models.record import ExtractionResult, TransactionRecord
from insurance_summary.models.report import SheetFailure, SummaryResult

__all__ = [
    "Category",
    "CategoryRule",
    "CATEGORY_RULES",
    "TransactionRecord",
    "ExtractionResult",
    "Grid",
    "CellRef",
    "CellValue",
    "Literal",
    "Text",
    "Sum",
    "RangeSum",
    "SheetFailure",
    "SummaryResult",
]
