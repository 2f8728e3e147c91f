"""Column and row positions of a category sheet.

Every date occupies a group of columns: amount, employee name, date and a
spacer. Both the employee rows and the total row place cells through
SheetGeometry so the two can never drift apart.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SheetGeometry:
    """Fixed 0-based positions used by the layout engine."""

    title_row: int = 0
    first_data_row: int = 1
    title_column: int = 0
    label_column: int = 2
    total_column: int = 3
    data_start_column: int = 5
    group_width: int = 4

    def group_start(self, date_index: int) -> int:
        """First column of the group for the date at ``date_index``."""
        return self.data_start_column + date_index * self.group_width

    def amount_column(self, date_index: int) -> int:
        return self.group_start(date_index)

    def name_column(self, date_index: int) -> int:
        return self.group_start(date_index) + 1

    def date_column(self, date_index: int) -> int:
        return self.group_start(date_index) + 2

    def last_amount_column(self, date_count: int) -> int:
        """Amount column of the final date group.

        Raises:
            ValueError: If there are no date groups.
        """
        if date_count < 1:
            raise ValueError("Sheet has no date groups")
        return self.amount_column(date_count - 1)


DEFAULT_GEOMETRY = SheetGeometry()
