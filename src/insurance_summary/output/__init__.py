"""Output generation for summary workbooks."""

from insurance_summary.output.excel_writer import ExcelSummaryWriter, ensure_xlsx_suffix

__all__ = ["ExcelSummaryWriter", "ensure_xlsx_suffix"]
