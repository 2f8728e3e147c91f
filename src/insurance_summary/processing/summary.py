"""End-to-end summary pipeline: read, extract, group, lay out, write."""

from pathlib import Path

from insurance_summary.config import Config
from insurance_summary.models.record import ExtractionResult
from insurance_summary.models.report import SheetFailure, SummaryResult
from insurance_summary.output.excel_writer import ExcelSummaryWriter, ensure_xlsx_suffix
from insurance_summary.parsers.excel_reader import ExcelReportReader
from insurance_summary.processing.aggregator import group_by_category
from insurance_summary.processing.extractor import extract_records
from insurance_summary.processing.layout import GridLayoutEngine, LayoutMode
from insurance_summary.utils.logging_config import LogContext, get_logger

logger = get_logger(__name__)


def create_layout_engine(config: Config) -> GridLayoutEngine:
    """Build a layout engine from output settings.

    Args:
        config: Application configuration.

    Returns:
        Configured GridLayoutEngine.
    """
    return GridLayoutEngine(
        mode=LayoutMode(config.output.layout),
        total_column_width=config.output.total_column_width,
        amount_column_width=config.output.amount_column_width,
    )


def build_grids(extraction: ExtractionResult, engine: GridLayoutEngine) -> SummaryResult:
    """Lay out one grid per category found in the extraction.

    A category whose layout fails is logged and recorded; the remaining
    categories are still laid out.

    Args:
        extraction: Records and ordered employee/date sets.
        engine: Layout engine.

    Returns:
        SummaryResult with grids and any per-sheet failures.
    """
    result = SummaryResult(extraction=extraction)
    grouped = group_by_category(extraction.records)

    logger.info(f"Found {len(grouped)} insurance types: {[c.label for c in grouped]}")

    for category, records in grouped.items():
        try:
            with LogContext(
                logger, "layout", category=category.label, entries=len(records)
            ) as ctx:
                grid = engine.layout(category, records, extraction.employees, extraction.dates)
                ctx.record(rows=len(grid.rows), date_groups=grid.date_count)
        except Exception as e:
            # LogContext has already logged the traceback
            result.failures.append(SheetFailure(category.label, "layout", str(e)))
            continue
        result.grids.append(grid)

    return result


def generate_summary(
    input_path: Path,
    output_path: Path,
    config: Config,
    reader: ExcelReportReader | None = None,
    writer: ExcelSummaryWriter | None = None,
    dry_run: bool = False,
) -> SummaryResult:
    """Produce the insurance summary workbook for a payroll report.

    No workbook is written when nothing in the report matches a category.

    Args:
        input_path: Payroll transaction report.
        output_path: Destination workbook (.xlsx appended if missing).
        config: Application configuration.
        reader: Report reader (default ExcelReportReader).
        writer: Workbook writer (default ExcelSummaryWriter).
        dry_run: Lay out the sheets without saving a workbook.

    Returns:
        SummaryResult describing what was produced.

    Raises:
        FileNotFoundError: If the report doesn't exist.
        ParseError: If the report cannot be read.
        OSError: If the workbook cannot be saved.
    """
    reader = reader or ExcelReportReader()
    writer = writer or ExcelSummaryWriter(config.output)

    with LogContext(
        logger, "generate_summary", input=input_path.name, output=output_path.name
    ) as ctx:
        rows = reader.read_rows(input_path)
        extraction = extract_records(rows, config.input)
        ctx.record(rows=extraction.rows_scanned, records=len(extraction.records))

        if extraction.is_empty:
            logger.warning("No insurance data found; workbook not created")
            ctx.record(written=False)
            return SummaryResult(extraction=extraction)

        result = build_grids(extraction, create_layout_engine(config))
        ctx.record(sheets=len(result.grids), failures=len(result.failures))

        if dry_run:
            ctx.record(written=False)
            return result

        write_failures = writer.write(output_path, result.grids)
        result.failures.extend(write_failures)
        if len(write_failures) < len(result.grids):
            result.output_path = ensure_xlsx_suffix(output_path)
        ctx.record(failures=len(result.failures), written=result.written)

    return result
