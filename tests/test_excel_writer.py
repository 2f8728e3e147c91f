"""Tests for the Excel summary writer."""

from decimal import Decimal
from pathlib import Path

import pytest
from openpyxl import load_workbook

from insurance_summary.config import ACCOUNTING_FORMAT, OutputConfig
from insurance_summary.models.category import Category
from insurance_summary.models.grid import CellRef, Grid, RangeSum, Sum, Text
from insurance_summary.models.record import TransactionRecord
from insurance_summary.output.excel_writer import (
    ExcelSummaryWriter,
    cell_address,
    ensure_xlsx_suffix,
    render_formula,
)
from insurance_summary.processing.layout import LayoutMode, layout_category


def create_record(employee: str, txn_date: str, amount: str) -> TransactionRecord:
    """Helper to create a health insurance record."""
    return TransactionRecord(
        employee_name=employee,
        date=txn_date,
        category=Category.HEALTH_INSURANCE,
        amount=Decimal(amount),
    )


@pytest.fixture
def writer() -> ExcelSummaryWriter:
    """Writer with default output settings."""
    return ExcelSummaryWriter(OutputConfig())


@pytest.fixture
def scenario_grid() -> Grid:
    """Grid for one employee with 100.0 and 50.0 on the same day."""
    records = [
        create_record("Jane Doe", "2024-01-15", "100.0"),
        create_record("Jane Doe", "2024-01-15", "50.0"),
    ]
    return layout_category(Category.HEALTH_INSURANCE, records, ["Jane Doe"], ["2024-01-15"])


class TestEnsureXlsxSuffix:
    """Tests for ensure_xlsx_suffix function."""

    def test_appends_suffix(self) -> None:
        assert ensure_xlsx_suffix(Path("out/summary")) == Path("out/summary.xlsx")

    def test_keeps_existing_suffix(self) -> None:
        assert ensure_xlsx_suffix(Path("summary.xlsx")) == Path("summary.xlsx")
        assert ensure_xlsx_suffix(Path("SUMMARY.XLSX")) == Path("SUMMARY.XLSX")

    def test_other_suffix_kept_and_extended(self) -> None:
        """Test that a foreign extension is not replaced."""
        assert ensure_xlsx_suffix(Path("summary.v2")) == Path("summary.v2.xlsx")


class TestRenderFormula:
    """Tests for formula rendering."""

    def test_cell_address(self) -> None:
        assert cell_address(CellRef(0, 0)) == "A1"
        assert cell_address(CellRef(1, 5)) == "F2"
        assert cell_address(CellRef(9, 27)) == "AB10"

    def test_additive_formula(self) -> None:
        """Test that each term stays visible."""
        assert render_formula(Sum((Decimal("100.0"), Decimal("50.0")))) == "=100.0+50.0"

    def test_negative_terms(self) -> None:
        assert render_formula(Sum((Decimal("100"), Decimal("-25.5")))) == "=100.0-25.5"
        assert render_formula(Sum((Decimal("-10"), Decimal("4")))) == "=-10.0+4.0"

    def test_no_exponent_notation(self) -> None:
        assert render_formula(Sum((Decimal("1E+2"), Decimal("0.5")))) == "=100.0+0.5"

    def test_empty_sum(self) -> None:
        assert render_formula(Sum(())) == "=0"

    def test_range_sum(self) -> None:
        formula = render_formula(RangeSum(CellRef(1, 5), CellRef(3, 5)))
        assert formula == "=SUM(F2:F4)"


class TestExcelSummaryWriter:
    """Tests for ExcelSummaryWriter."""

    def test_scenario_cells(self, writer: ExcelSummaryWriter, scenario_grid: Grid) -> None:
        """Test the sheet content for two same-day amounts."""
        wb = writer.build_workbook([scenario_grid])
        ws = wb["Health Insurance"]

        assert ws["A1"].value == "Health Insurance"
        assert ws["C2"].value == "Jane Doe"
        assert ws["F2"].value == "=100.0+50.0"
        assert ws["G2"].value == "Jane Doe"
        assert ws["H2"].value == "2024-01-15"
        assert ws["D2"].value == "=SUM(F2:F2)"
        assert ws["C3"].value == "Total"
        assert ws["F3"].value == "=SUM(F2:F2)"
        assert ws["D3"].value == "=SUM(D2:D2)"

    def test_formulas_survive_save(
        self, writer: ExcelSummaryWriter, scenario_grid: Grid, tmp_path: Path
    ) -> None:
        """Test that formulas are written as formulas, not values."""
        output = tmp_path / "summary.xlsx"
        failures = writer.write(output, [scenario_grid])

        assert failures == []
        wb = load_workbook(output)
        ws = wb["Health Insurance"]
        assert ws["F2"].value == "=100.0+50.0"
        assert ws["D3"].value == "=SUM(D2:D2)"

    def test_number_format(self, writer: ExcelSummaryWriter, scenario_grid: Grid) -> None:
        """Test the accounting format on amount and total cells only."""
        ws = writer.build_workbook([scenario_grid])["Health Insurance"]

        assert ws["F2"].number_format == ACCOUNTING_FORMAT
        assert ws["D2"].number_format == ACCOUNTING_FORMAT
        assert ws["D3"].number_format == ACCOUNTING_FORMAT
        assert ws["C2"].number_format == "General"

    def test_literal_amount(self, writer: ExcelSummaryWriter) -> None:
        records = [create_record("Jane Doe", "2024-01-15", "75.25")]
        grid = layout_category(Category.HEALTH_INSURANCE, records, ["Jane Doe"], ["2024-01-15"])

        ws = writer.build_workbook([grid])["Health Insurance"]

        assert ws["F2"].value == Decimal("75.25")

    def test_total_row_bold(self, writer: ExcelSummaryWriter, scenario_grid: Grid) -> None:
        ws = writer.build_workbook([scenario_grid])["Health Insurance"]

        assert ws["C3"].font.bold
        assert ws["D3"].font.bold
        assert not ws["C2"].font.bold

    def test_column_widths(self, writer: ExcelSummaryWriter, scenario_grid: Grid) -> None:
        """Test fixed widths and content-fitted label columns."""
        ws = writer.build_workbook([scenario_grid])["Health Insurance"]

        assert ws.column_dimensions["D"].width == pytest.approx(15.9)
        assert ws.column_dimensions["F"].width == pytest.approx(13.3)
        assert ws.column_dimensions["C"].width == pytest.approx(10.0)
        assert ws.column_dimensions["H"].width == pytest.approx(12.0)

    def test_text_sanitized(self, writer: ExcelSummaryWriter) -> None:
        """Test that label text cannot inject a formula."""
        records = [create_record("=HYPERLINK(\"x\")", "2024-01-15", "10.00")]
        grid = layout_category(
            Category.HEALTH_INSURANCE, records, ["=HYPERLINK(\"x\")"], ["2024-01-15"]
        )

        ws = writer.build_workbook([grid])["Health Insurance"]

        assert ws["C2"].value == "'=HYPERLINK(\"x\")"
        assert ws["G2"].value == "'=HYPERLINK(\"x\")"

    def test_sheet_order(self, writer: ExcelSummaryWriter) -> None:
        grids = [Grid(title="B", sheet_name="B"), Grid(title="A", sheet_name="A")]

        wb = writer.build_workbook(grids)

        assert wb.sheetnames == ["B", "A"]

    def test_simple_layout_sheet(self, writer: ExcelSummaryWriter) -> None:
        records = [
            create_record("Jane Doe", "2024-01-15", "100.0"),
            create_record("Jane Doe", "2024-01-15", "50.0"),
        ]
        grid = layout_category(
            Category.HEALTH_INSURANCE, records, ["Jane Doe"], ["2024-01-15"],
            mode=LayoutMode.SIMPLE,
        )

        ws = writer.build_workbook([grid])["Health Insurance"]

        assert ws["F2"].value == Decimal("150.0")
        assert ws["D2"].value is None
        assert ws.max_row == 2

    def test_failing_sheet_contained(
        self, writer: ExcelSummaryWriter, scenario_grid: Grid, tmp_path: Path
    ) -> None:
        """Test that a sheet that fails to render is dropped and reported."""
        broken = Grid(title="Broken", sheet_name="Broken", rows=[[(0, "not a cell value")]])  # type: ignore[list-item]
        output = tmp_path / "summary.xlsx"

        failures = writer.write(output, [broken, scenario_grid])

        assert len(failures) == 1
        assert failures[0].category == "Broken"
        assert failures[0].stage == "write"
        assert load_workbook(output).sheetnames == ["Health Insurance"]

    def test_nothing_saved_when_every_sheet_fails(
        self, writer: ExcelSummaryWriter, tmp_path: Path
    ) -> None:
        broken = Grid(title="Broken", sheet_name="Broken", rows=[[(0, object())]])  # type: ignore[list-item]
        output = tmp_path / "summary.xlsx"

        failures = writer.write(output, [broken])

        assert len(failures) == 1
        assert not output.exists()

    def test_write_appends_suffix_and_creates_dirs(
        self, writer: ExcelSummaryWriter, scenario_grid: Grid, tmp_path: Path
    ) -> None:
        writer.write(tmp_path / "nested" / "summary", [scenario_grid])

        assert (tmp_path / "nested" / "summary.xlsx").exists()

    def test_custom_number_format(self, scenario_grid: Grid) -> None:
        writer = ExcelSummaryWriter(OutputConfig(number_format="#,##0.00"))

        ws = writer.build_workbook([scenario_grid])["Health Insurance"]

        assert ws["F2"].number_format == "#,##0.00"

    def test_text_only_grid(self, writer: ExcelSummaryWriter) -> None:
        grid = Grid(title="Notes", sheet_name="Notes", rows=[[(0, Text("Notes"))]])

        ws = writer.build_workbook([grid])["Notes"]

        assert ws["A1"].value == "Notes"
