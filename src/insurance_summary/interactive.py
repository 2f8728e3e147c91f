"""File-selection dialogs and user notification sinks."""

from pathlib import Path

from rich.console import Console

from insurance_summary.utils.logging_config import get_logger

logger = get_logger(__name__)

INPUT_DIALOG_TITLE = "Select Transaction Report Excel File"
OUTPUT_DIALOG_TITLE = "Save Insurance Summary As"
NOTIFICATION_TITLE = "Insurance Summary"


def _hidden_root():
    """Create a withdrawn Tk root so dialogs open without a main window."""
    import tkinter as tk

    root = tk.Tk()
    root.withdraw()
    root.attributes("-topmost", True)
    return root


def select_input_file() -> Path | None:
    """Ask the user for the payroll report to summarize.

    Returns:
        Selected path, or None if the dialog was cancelled.
    """
    from tkinter import filedialog

    root = _hidden_root()
    try:
        path = filedialog.askopenfilename(
            parent=root,
            title=INPUT_DIALOG_TITLE,
            filetypes=[("Excel workbooks", "*.xlsx *.xlsm"), ("All files", "*.*")],
        )
    finally:
        root.destroy()

    return Path(path) if path else None


def select_output_file(default_filename: str = "Insurance_Summary.xlsx") -> Path | None:
    """Ask the user where to save the summary workbook.

    Args:
        default_filename: File name suggested in the dialog.

    Returns:
        Selected path, or None if the dialog was cancelled.
    """
    from tkinter import filedialog

    root = _hidden_root()
    try:
        path = filedialog.asksaveasfilename(
            parent=root,
            title=OUTPUT_DIALOG_TITLE,
            defaultextension=".xlsx",
            filetypes=[("Excel", "*.xlsx")],
            initialfile=default_filename,
        )
    finally:
        root.destroy()

    return Path(path) if path else None


class ConsoleNotifier:
    """Reports outcomes to the terminal."""

    def __init__(self, console: Console):
        self.console = console

    def info(self, message: str) -> None:
        self.console.print(f"[green]{message}[/green]")

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]{message}[/yellow]")

    def error(self, message: str) -> None:
        self.console.print(f"[red]Error: {message}[/red]")


class DialogNotifier(ConsoleNotifier):
    """Reports outcomes to the terminal and in a message box.

    Used when the run was started through the file dialogs, so the user
    sees the result even without a visible terminal.
    """

    def info(self, message: str) -> None:
        super().info(message)
        self._show("showinfo", message)

    def warning(self, message: str) -> None:
        super().warning(message)
        self._show("showwarning", message)

    def error(self, message: str) -> None:
        super().error(message)
        self._show("showerror", message)

    def _show(self, kind: str, message: str) -> None:
        from tkinter import TclError, messagebox

        try:
            root = _hidden_root()
        except TclError as e:
            logger.warning(f"Cannot open message box: {e}")
            return
        try:
            getattr(messagebox, kind)(NOTIFICATION_TITLE, message, parent=root)
        finally:
            root.destroy()
