"""Shared parser types."""

from pathlib import Path
from typing import Optional, Sequence

# A worksheet row as a tuple of typed cell values
RawRow = Sequence[object]


class ParseError(Exception):
    """Exception raised when a report cannot be read."""

    def __init__(self, message: str, file_path: Optional[Path] = None):
        """Initialize ParseError.

        Args:
            message: Error message.
            file_path: Optional path to the file that failed to parse.
        """
        self.file_path = file_path
        super().__init__(message)
