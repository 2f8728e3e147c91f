"""Logging setup for the insurance summary generator.

Everything logs under the ``insurance_summary`` logger namespace. The CLI
configures a file handler (and a stderr handler when verbose) once per run.
"""

import logging
import sys
import time
from pathlib import Path

PACKAGE_LOGGER = "insurance_summary"

DEFAULT_LOG_FILE = "insurance_summary.log"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    level: str = "INFO",
    log_file: str | Path | None = None,
    console_output: bool = True,
) -> logging.Logger:
    """Configure the package logger for a run.

    Handlers from an earlier call are closed and replaced, so calling this
    twice never duplicates output or leaks file handles.

    Args:
        level: Log level name; unknown names fall back to INFO.
        log_file: Log file path (parent directories are created). If None,
            uses DEFAULT_LOG_FILE in the working directory.
        console_output: Also log to stderr.

    Returns:
        The package logger.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(numeric_level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    log_path = Path(log_file) if log_file is not None else Path(DEFAULT_LOG_FILE)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(log_path, encoding="utf-8")
    file_handler.setLevel(numeric_level)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    if console_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(numeric_level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger inside the package namespace.

    Args:
        name: Module name (typically __name__).

    Returns:
        Logger named ``insurance_summary.<name>``, or ``name`` itself when it
        already lives in the namespace.
    """
    if name == PACKAGE_LOGGER or name.startswith(PACKAGE_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")


def _format_fields(fields: dict[str, object]) -> str:
    return ", ".join(f"{k}={v}" for k, v in fields.items())


class LogContext:
    """Logs the start, outcome and duration of one pipeline step.

    Results noted with ``record()`` while the step runs are added to the
    completion line:

        with LogContext(logger, "layout", category="Dental Insurance") as ctx:
            grid = engine.layout(...)
            ctx.record(rows=len(grid.rows))

    A failure is logged once, with its traceback, and re-raised.
    """

    def __init__(self, logger: logging.Logger, operation: str, **context: object):
        """Initialize log context.

        Args:
            logger: Logger instance to use.
            operation: Name of the step.
            **context: Inputs identifying the step, logged on every line.
        """
        self.logger = logger
        self.operation = operation
        self.context = context
        self.results: dict[str, object] = {}
        self._started = 0.0

    def record(self, **results: object) -> None:
        """Note outcome values for the completion line."""
        self.results.update(results)

    @property
    def elapsed(self) -> float:
        """Seconds since the step started."""
        return time.perf_counter() - self._started

    def __enter__(self) -> "LogContext":
        self._started = time.perf_counter()
        self.logger.debug(f"Starting {self.operation}: {_format_fields(self.context)}")
        return self

    def __exit__(
        self,
        exc_type: type | None,
        exc_val: BaseException | None,
        exc_tb: object | None,
    ) -> bool:
        label = f"{self.operation} ({_format_fields(self.context)})"
        if exc_type is not None:
            self.logger.error(
                f"Failed {label} after {self.elapsed:.2f}s: {exc_type.__name__}: {exc_val}",
                exc_info=(exc_type, exc_val, exc_tb),
            )
        else:
            outcome = _format_fields(self.results) or "done"
            self.logger.info(f"Completed {label} in {self.elapsed:.2f}s: {outcome}")
        return False
