"""Grouping of records by category and by (employee, date)."""

from collections.abc import Iterable, Sequence
from decimal import Decimal

from insurance_summary.models.category import Category
from insurance_summary.models.record import TransactionRecord

# employee -> date -> amounts in report order
Buckets = dict[str, dict[str, list[Decimal]]]


def group_by_category(
    records: Iterable[TransactionRecord],
) -> dict[Category, list[TransactionRecord]]:
    """Partition records by category.

    Categories appear in the order they were first seen. Amounts are not
    summed here; the layout needs the individual values.

    Args:
        records: Extracted records.

    Returns:
        Mapping of category to its records, in report order.
    """
    grouped: dict[Category, list[TransactionRecord]] = {}
    for record in records:
        grouped.setdefault(record.category, []).append(record)
    return grouped


def bucket_amounts(
    category: Category,
    records: Iterable[TransactionRecord],
    employees: Sequence[str],
    dates: Sequence[str],
) -> tuple[Buckets, list[str]]:
    """Collect amounts per (employee, date) for one category.

    Every employee x date pair from the global sets starts with an empty
    bucket. Records belonging to other categories are ignored.

    Args:
        category: Category being laid out.
        records: Records to bucket.
        employees: Global employee set, in first-seen order.
        dates: Global date set, in first-seen order.

    Returns:
        Tuple of (buckets, relevant dates). Relevant dates are those that
        received at least one amount, in first-seen order within the
        category.
    """
    buckets: Buckets = {emp: {d: [] for d in dates} for emp in employees}
    relevant: dict[str, None] = {}

    for record in records:
        if record.category is not category:
            continue
        by_date = buckets.setdefault(record.employee_name, {})
        by_date.setdefault(record.date, []).append(record.amount)
        relevant.setdefault(record.date, None)

    return buckets, list(relevant)
