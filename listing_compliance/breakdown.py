"""Violation breakdown by category, severity and rule."""
from typing import Optional

from listing_compliance.models import RuleCount, ScanResult, Severity, ViolationBreakdown
from listing_compliance.rules import category_code

TOP_VIOLATIONS_LIMIT = 10


def violation_breakdown(result: ScanResult, limit: Optional[int] = TOP_VIOLATIONS_LIMIT) -> ViolationBreakdown:
    """Count violations per category code ("PI", "PDP", ...), per severity, and per rule.

    ``top_violations`` is ordered by count, descending; equal counts keep the
    order in which the rules were first encountered in the scan.
    """
    by_category: dict[str, int] = {}
    rules: dict[str, list] = {}  # rule_id -> [count, severity]
    for violation in result.iter_violations():
        code = category_code(violation.rule_id)
        by_category[code] = by_category.get(code, 0) + 1
        entry = rules.setdefault(violation.rule_id, [0, violation.severity])
        entry[0] += 1

    ranked = sorted(rules.items(), key=lambda item: -item[1][0])
    if limit is not None:
        ranked = ranked[:limit]

    return ViolationBreakdown(
        by_category=by_category,
        by_severity={
            Severity.CRITICAL.value: result.critical_count,
            Severity.WARNING.value: result.warning_count,
            Severity.INFO.value: result.info_count,
        },
        top_violations=tuple(
            RuleCount(rule_id=rule_id, count=count, severity=severity)
            for rule_id, (count, severity) in ranked
        ),
    )
