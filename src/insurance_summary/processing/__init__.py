"""Payroll record processing pipeline components."""

from insurance_summary.processing.aggregator import bucket_amounts, group_by_category
from insurance_summary.processing.categorizer import categorize
from insurance_summary.processing.extractor import RecordExtractor, extract_records
from insurance_summary.processing.geometry import DEFAULT_GEOMETRY, SheetGeometry
from insurance_summary.processing.layout import (
    GridLayoutEngine,
    LayoutMode,
    layout_category,
    sheet_total,
)
from insurance_summary.processing.summary import build_grids, generate_summary

__all__ = [
    "categorize",
    "RecordExtractor",
    "extract_records",
    "group_by_category",
    "bucket_amounts",
    "SheetGeometry",
    "DEFAULT_GEOMETRY",
    "GridLayoutEngine",
    "LayoutMode",
    "layout_category",
    "sheet_total",
    "build_grids",
    "generate_summary",
]
