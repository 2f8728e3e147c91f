"""Report data models for summary workbook generation."""

from dataclasses import dataclass, field
from pathlib import Path

from insurance_summary.models.grid import Grid
from insurance_summary.models.record import ExtractionResult


@dataclass
class SheetFailure:
    """A category sheet that could not be produced.

    Attributes:
        category: Name of the category whose sheet failed.
        stage: Pipeline stage that failed ("layout" or "write").
        message: Error description.
    """

    category: str
    stage: str
    message: str

    def __str__(self) -> str:
        return f"{self.category} ({self.stage}): {self.message}"


@dataclass
class SummaryResult:
    """Outcome of one summary run.

    Attributes:
        extraction: Records and ordered sets read from the report.
        grids: Laid-out sheets, in category first-seen order.
        failures: Sheets that failed to lay out or render.
        output_path: Workbook path, once written.
    """

    extraction: ExtractionResult
    grids: list[Grid] = field(default_factory=list)
    failures: list[SheetFailure] = field(default_factory=list)
    output_path: Path | None = None

    @property
    def has_data(self) -> bool:
        """True when at least one record matched a category."""
        return not self.extraction.is_empty

    @property
    def written(self) -> bool:
        """True when a workbook was saved."""
        return self.output_path is not None

    @property
    def category_count(self) -> int:
        """Number of categories found in the report."""
        return len({record.category for record in self.extraction.records})
