"""Insurance category definitions and memo matching rules."""

from dataclasses import dataclass
from enum import Enum


class Category(Enum):
    """Insurance or payroll-tax classification of a transaction memo.

    Declaration order is the matching priority used by the categorizer.
    """

    HEALTH_INSURANCE = "Health Insurance"
    DENTAL_INSURANCE = "Dental Insurance"
    ADVANTAGE_GROUP_INSURANCE = "Advantage Group Insurance"
    FEDERAL_UNEMPLOYMENT = "Federal Unemployment"
    WI_SUI_EMPLOYER = "WI SUI Employer"

    @property
    def label(self) -> str:
        """Human-readable category name."""
        return self.value


@dataclass(frozen=True)
class CategoryRule:
    """Substring rule mapping a memo to a category.

    Attributes:
        category: Category assigned when the rule matches.
        contains: Text the memo must contain (case-sensitive).
        excludes: Text that disqualifies the memo, even when it contains
            the required text. A disqualified memo is not passed to
            later rules.
    """

    category: Category
    contains: str
    excludes: str | None = None

    def applies_to(self, memo: str) -> bool:
        """Check whether the memo mentions this rule's text at all."""
        return self.contains in memo

    def is_excluded(self, memo: str) -> bool:
        """Check whether the memo carries the disqualifying text."""
        return self.excludes is not None and self.excludes in memo


# Evaluated top to bottom; first applicable rule decides.
CATEGORY_RULES: tuple[CategoryRule, ...] = (
    CategoryRule(Category.HEALTH_INSURANCE, "Health Insurance", excludes="S-Corp"),
    CategoryRule(Category.DENTAL_INSURANCE, "Dental Insurance"),
    CategoryRule(Category.ADVANTAGE_GROUP_INSURANCE, "Insurance - Advantage Group"),
    CategoryRule(Category.FEDERAL_UNEMPLOYMENT, "Federal Unemployment"),
    CategoryRule(Category.WI_SUI_EMPLOYER, "WI SUI Employer"),
)
