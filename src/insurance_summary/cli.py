"""Command-line interface for the insurance summary generator."""

import argparse
import sys
from collections import Counter
from pathlib import Path

from rich.console import Console
from rich.table import Table

from insurance_summary import __version__
from insurance_summary.config import LAYOUT_MODES, Config, ConfigError, load_config
from insurance_summary.interactive import (
    ConsoleNotifier,
    DialogNotifier,
    select_input_file,
    select_output_file,
)
from insurance_summary.models.report import SummaryResult
from insurance_summary.output.excel_writer import ensure_xlsx_suffix
from insurance_summary.processing.layout import sheet_total
from insurance_summary.processing.summary import generate_summary
from insurance_summary.utils.logging_config import setup_logging

console = Console()

NO_DATA_MESSAGE = "WARNING: No insurance data found! Workbook not created."


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser.

    Returns:
        Configured ArgumentParser.
    """
    parser = argparse.ArgumentParser(
        prog="insurance-summary",
        description=(
            "Summarize payroll insurance and unemployment lines from a "
            "transaction report into one sheet per insurance type"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s
  %(prog)s -i transactions.xlsx -o Insurance_Summary.xlsx
  %(prog)s -i transactions.xlsx -o summary.xlsx --layout simple
  %(prog)s -i transactions.xlsx --dry-run --no-dialogs
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "-i", "--input",
        type=Path,
        default=None,
        help="Transaction report workbook (prompted for if omitted)",
    )

    parser.add_argument(
        "-o", "--output",
        type=Path,
        default=None,
        help="Summary workbook to write (prompted for if omitted)",
    )

    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to settings.yaml (default: config/settings.yaml)",
    )

    parser.add_argument(
        "--config-dir",
        type=Path,
        default=Path("config"),
        help="Base config directory (default: ./config)",
    )

    parser.add_argument(
        "--layout",
        choices=LAYOUT_MODES,
        default=None,
        help="Sheet layout: full (formulas and totals) or simple (amounts only)",
    )

    parser.add_argument(
        "--no-dialogs",
        action="store_true",
        help="Never open file dialogs; --input and --output become required",
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Read and lay out the report but do not write a workbook",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase output verbosity (-v, -vv)",
    )

    return parser


def get_log_level(verbosity: int, configured: str) -> str:
    """Convert verbosity count to log level.

    Args:
        verbosity: Number of -v flags.
        configured: Level from settings, used when no -v is given.

    Returns:
        Log level string.
    """
    if verbosity >= 2:
        return "DEBUG"
    elif verbosity >= 1:
        return "INFO"
    else:
        return configured


def display_summary(result: SummaryResult) -> None:
    """Display per-sheet summary table and any sheet failures.

    Args:
        result: Outcome of the summary run.
    """
    extraction = result.extraction
    entries = Counter(record.category.label for record in extraction.records)

    console.print(
        f"\nRead {extraction.rows_scanned} rows: {len(extraction.records)} insurance entries, "
        f"{len(extraction.employees)} employees, {len(extraction.dates)} dates, "
        f"{result.category_count} insurance types"
    )

    table = Table(title="Insurance Summary")
    table.add_column("Sheet")
    table.add_column("Entries", justify="right")
    table.add_column("Date groups", justify="right")
    table.add_column("Total", justify="right")

    for grid in result.grids:
        table.add_row(
            grid.sheet_name,
            str(entries.get(grid.title, 0)),
            str(grid.date_count),
            f"{sheet_total(grid):,.2f}",
        )

    console.print(table)

    if result.failures:
        console.print(f"\n[red]Sheets not created ({len(result.failures)}):[/red]")
        for failure in result.failures:
            console.print(f"  - {failure}")


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Command-line arguments (default: sys.argv).

    Returns:
        Exit code (0 for success or cancellation, 1 for errors).
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    # Load configuration
    try:
        config: Config = load_config(settings_path=args.config, config_dir=args.config_dir)
    except (FileNotFoundError, ConfigError) as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1

    if args.layout:
        config.output.layout = args.layout

    setup_logging(
        level=get_log_level(args.verbose, config.logging.level),
        log_file=config.logging.file,
        console_output=args.verbose > 0,
    )

    notifier: ConsoleNotifier = ConsoleNotifier(console)

    # Resolve input path
    input_path = args.input
    if input_path is None:
        if args.no_dialogs:
            console.print("[red]Error: --input is required with --no-dialogs[/red]")
            parser.print_usage()
            return 1
        notifier = DialogNotifier(console)
        input_path = select_input_file()
        if input_path is None:
            notifier.warning("Input file selection cancelled.")
            return 0
    console.print(f"Selected input file: {input_path}")

    # Resolve output path
    output_path = args.output
    if output_path is None and not args.dry_run:
        if args.no_dialogs:
            console.print("[red]Error: --output is required with --no-dialogs[/red]")
            parser.print_usage()
            return 1
        notifier = DialogNotifier(console)
        output_path = select_output_file(config.output.default_filename)
        if output_path is None:
            notifier.warning("Save location selection cancelled.")
            return 0
    if output_path is None:
        output_path = Path(config.output.default_filename)
    output_path = ensure_xlsx_suffix(output_path)

    if not args.dry_run:
        console.print(f"Output file will be saved to: {output_path}")

    try:
        with console.status("[bold green]Generating insurance summary..."):
            result = generate_summary(input_path, output_path, config, dry_run=args.dry_run)
    except Exception as e:
        notifier.error(str(e))
        return 1

    if not result.has_data:
        notifier.warning(NO_DATA_MESSAGE)
        return 0

    display_summary(result)

    if args.dry_run:
        console.print("\n[yellow]Dry run - no output generated[/yellow]")
        return 0

    if not result.written:
        notifier.error("No sheets could be created; workbook not written.")
        return 1

    notifier.info(f"Data successfully written to {result.output_path}!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
