"""Configuration loading and validation for the insurance summary generator."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml
from openpyxl.utils import column_index_from_string

from insurance_summary.utils.logging_config import get_logger

logger = get_logger(__name__)


class ConfigError(Exception):
    """Exception raised for configuration errors."""

    pass


# Accounting format: thousands separator, parenthesized negatives, 2 places
ACCOUNTING_FORMAT = '_($* #,##0.00_);_($* (#,##0.00);_($* "-"??_);_(@_)'

LAYOUT_MODES = ("full", "simple")

# Default report column letters
DEFAULT_COLUMNS = {
    "date": "B",
    "transaction_type": "C",
    "employee": "E",
    "memo": "F",
    "amount": "I",
}


def _column_index(letter: str, field_name: str) -> int:
    """Convert a column letter to a 0-based index.

    Raises:
        ConfigError: If the letter is not a valid column reference.
    """
    try:
        return column_index_from_string(letter.strip().upper()) - 1
    except ValueError as e:
        raise ConfigError(f"Invalid column '{letter}' for {field_name}: {e}") from e


def _as_int(data: dict[str, object], key: str, default: int) -> int:
    """Read an integer setting.

    Raises:
        ConfigError: If the value is not a whole number.
    """
    value = data.get(key, default)
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ConfigError(f"'{key}' must be an integer, got {value!r}")
    try:
        return int(value)  # type: ignore[call-overload]
    except (TypeError, ValueError) as e:
        raise ConfigError(f"'{key}' must be an integer, got {value!r}") from e


def _as_float(data: dict[str, object], key: str, default: float) -> float:
    """Read a numeric setting.

    Raises:
        ConfigError: If the value is not a number.
    """
    value = data.get(key, default)
    if isinstance(value, bool):
        raise ConfigError(f"'{key}' must be a number, got {value!r}")
    try:
        return float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as e:
        raise ConfigError(f"'{key}' must be a number, got {value!r}") from e


@dataclass
class InputConfig:
    """Configuration for reading the payroll transaction report.

    Attributes:
        header_rows: Leading rows skipped before data is scanned.
        transaction_type: Type value a row must carry to be considered.
        columns: Column letter per field (date, transaction_type,
            employee, memo, amount).
        date_format: strftime format for date cells rendered as labels.
    """

    header_rows: int = 3
    transaction_type: str = "Payroll Check"
    columns: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_COLUMNS))
    date_format: str = "%Y-%m-%d"

    def __post_init__(self) -> None:
        if self.header_rows < 0:
            raise ConfigError(f"header_rows must be >= 0, got {self.header_rows}")
        missing = set(DEFAULT_COLUMNS) - set(self.columns)
        if missing:
            raise ConfigError(f"Missing column mapping for: {', '.join(sorted(missing))}")
        self._indexes = {
            name: _column_index(letter, name) for name, letter in self.columns.items()
        }

    def column_index(self, name: str) -> int:
        """Return the 0-based index of a mapped column."""
        return self._indexes[name]

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> "InputConfig":
        """Create from dictionary."""
        columns = dict(DEFAULT_COLUMNS)
        raw_columns = data.get("columns") or {}
        if not isinstance(raw_columns, dict):
            raise ConfigError(f"'columns' must be a mapping, got {type(raw_columns).__name__}")
        columns.update({str(k): str(v) for k, v in raw_columns.items()})

        return cls(
            header_rows=_as_int(data, "header_rows", 3),
            transaction_type=str(data.get("transaction_type", "Payroll Check")),
            columns=columns,
            date_format=str(data.get("date_format", "%Y-%m-%d")),
        )


@dataclass
class OutputConfig:
    """Configuration for summary workbook generation.

    Attributes:
        layout: Sheet layout mode ("full" with totals and formulas, or
            "simple" with pre-summed literals only).
        number_format: Excel number format for monetary cells.
        total_column_width: Width of the row-total column.
        amount_column_width: Width of each date group's amount column.
        default_filename: Suggested name for the output workbook.
    """

    layout: str = "full"
    number_format: str = ACCOUNTING_FORMAT
    total_column_width: float = 15.9
    amount_column_width: float = 13.3
    default_filename: str = "Insurance_Summary.xlsx"

    def __post_init__(self) -> None:
        if self.layout not in LAYOUT_MODES:
            raise ConfigError(
                f"Unknown layout '{self.layout}', expected one of {', '.join(LAYOUT_MODES)}"
            )
        for name in ("total_column_width", "amount_column_width"):
            if getattr(self, name) <= 0:
                raise ConfigError(f"{name} must be positive, got {getattr(self, name)}")

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> "OutputConfig":
        """Create from dictionary."""
        return cls(
            layout=str(data.get("layout", "full")),
            number_format=str(data.get("number_format", ACCOUNTING_FORMAT)),
            total_column_width=_as_float(data, "total_column_width", 15.9),
            amount_column_width=_as_float(data, "amount_column_width", 13.3),
            default_filename=str(data.get("default_filename", "Insurance_Summary.xlsx")),
        )


@dataclass
class LoggingConfig:
    """Configuration for logging.

    Attributes:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        file: Path to log file.
    """

    level: str = "INFO"
    file: str = "insurance_summary.log"

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> "LoggingConfig":
        """Create from dictionary."""
        return cls(
            level=str(data.get("level", "INFO")),
            file=str(data.get("file", "insurance_summary.log")),
        )


@dataclass
class Config:
    """Main configuration container.

    Attributes:
        input: Report reading configuration.
        output: Workbook generation configuration.
        logging: Logging configuration.
    """

    input: InputConfig = field(default_factory=InputConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_yaml_file(path: Path) -> dict[str, object]:
    """Load a YAML file.

    Args:
        path: Path to the YAML file.

    Returns:
        Parsed YAML content.

    Raises:
        FileNotFoundError: If file doesn't exist.
        ConfigError: If the file is not valid YAML or not a mapping.
    """
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, encoding="utf-8") as f:
        try:
            content = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ConfigError(f"{path} must contain a mapping, got {type(content).__name__}")
    return content


def _section(data: dict[str, object], name: str) -> dict[str, object]:
    section = data.get(name)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigError(f"'{name}' must be a mapping, got {type(section).__name__}")
    return section


def load_settings(path: Path) -> Config:
    """Load settings from settings.yaml.

    Args:
        path: Path to settings.yaml.

    Returns:
        Config built from the file, with defaults for missing sections.
    """
    data = load_yaml_file(path)

    return Config(
        input=InputConfig.from_dict(_section(data, "input")),
        output=OutputConfig.from_dict(_section(data, "output")),
        logging=LoggingConfig.from_dict(_section(data, "logging")),
    )


def load_config(
    settings_path: Optional[Path] = None,
    config_dir: Optional[Path] = None,
) -> Config:
    """Load configuration, falling back to defaults when no file exists.

    Args:
        settings_path: Path to settings.yaml (or None to use default).
        config_dir: Base config directory (default: ./config).

    Returns:
        Complete Config object.

    Raises:
        FileNotFoundError: If an explicitly given settings file is missing.
        ConfigError: If the settings are invalid.
    """
    if settings_path is not None:
        config = load_settings(settings_path)
        logger.info(f"Loaded settings from {settings_path}")
        return config

    if config_dir is None:
        config_dir = Path("config")

    default_path = config_dir / "settings.yaml"
    if default_path.exists():
        config = load_settings(default_path)
        logger.info(f"Loaded settings from {default_path}")
        return config

    logger.warning(f"Settings file not found: {default_path}, using defaults")
    return Config()
