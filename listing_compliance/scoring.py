"""Compliance scoring.

score = healthy share of listings (0-100), minus 10 points per critical and
5 points per warning averaged over all listings, clamped to 0-100 and
rounded half up. Computed with exact fractions so equal inputs always give
equal scores.
"""
import math
from collections import Counter
from fractions import Fraction
from typing import Optional

from listing_compliance.catalog import get_catalog
from listing_compliance.models import ComplianceSummary, ScanResult

CRITICAL_PENALTY = 10
WARNING_PENALTY = 5

GRADE_THRESHOLDS = (
    (90, "A"),
    (80, "B"),
    (70, "C"),
    (60, "D"),
)


def compliance_score(result: ScanResult) -> int:
    """0-100 health score. An empty scan scores 100."""
    total = result.total_listings
    if total == 0:
        return 100
    healthy = total - result.flagged_listings
    raw = Fraction(
        100 * healthy
        - CRITICAL_PENALTY * result.critical_count
        - WARNING_PENALTY * result.warning_count,
        total,
    )
    clamped = min(Fraction(100), max(Fraction(0), raw))
    return math.floor(clamped + Fraction(1, 2))


def grade_for(score: int) -> str:
    for threshold, grade in GRADE_THRESHOLDS:
        if score >= threshold:
            return grade
    return "F"


def most_common_rule(result: ScanResult, catalog=None) -> Optional[str]:
    """Rule ID with the most violations; ties go to the rule declared first."""
    counts = Counter(v.rule_id for v in result.iter_violations())
    if not counts:
        return None
    if catalog is None:
        catalog = get_catalog()
    return min(counts, key=lambda rule_id: (-counts[rule_id], catalog.position(rule_id), rule_id))


def recommendation_for(result: ScanResult) -> str:
    if result.critical_count:
        return (f"Address {result.critical_count} critical violation(s) immediately "
                "to avoid account suspension.")
    if result.warning_count:
        return (f"Fix {result.warning_count} warning(s) to improve listing quality "
                "and visibility.")
    if result.info_count:
        return (f"Review {result.info_count} optimization suggestion(s) "
                "to maximize performance.")
    return "All listings are fully compliant. Continue monitoring for new violations."


def summarize(result: ScanResult, catalog=None) -> ComplianceSummary:
    score = compliance_score(result)
    return ComplianceSummary(
        score=score,
        grade=grade_for(score),
        healthy_listings=result.healthy_listings,
        listings_with_issues=result.flagged_listings,
        most_common_issue=most_common_rule(result, catalog),
        recommendation=recommendation_for(result),
    )
