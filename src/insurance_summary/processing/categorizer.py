"""Memo categorizer for payroll insurance lines."""

from insurance_summary.models.category import CATEGORY_RULES, Category, CategoryRule


def categorize(
    memo: str,
    rules: tuple[CategoryRule, ...] = CATEGORY_RULES,
) -> Category | None:
    """Map a transaction memo to its insurance category.

    Rules are tried in order and the first rule whose text appears in the
    memo decides the outcome. If that rule's exclusion text is also
    present the memo is rejected outright; it is never handed on to a
    later rule. Matching is case-sensitive.

    Args:
        memo: Memo/description text from the report.
        rules: Ordered rules to apply.

    Returns:
        The matching Category, or None if the memo is not relevant.
    """
    for rule in rules:
        if rule.applies_to(memo):
            if rule.is_excluded(memo):
                return None
            return rule.category
    return None
