"""Tests for compliance scoring."""
import pytest

from conftest import TIMESTAMP, flagged, violation
from listing_compliance.catalog import RuleCatalog
from listing_compliance.models import Platform, ScanResult
from listing_compliance.scoring import (
    compliance_score, grade_for, most_common_rule, recommendation_for, summarize,
)


def scan(total, *sets):
    return ScanResult.build(Platform.ETSY, total, sets, timestamp=TIMESTAMP)


class TestComplianceScore:
    def test_empty_scan(self):
        assert compliance_score(scan(0)) == 100

    def test_all_healthy(self):
        assert compliance_score(scan(10)) == 100

    def test_penalties(self):
        result = scan(4, flagged(1, violation("ETSY-PI-001", "critical")),
                      flagged(2, violation("ETSY-TD-001", "warning")))
        # (200 - 10 - 5) / 4 = 46.25
        assert compliance_score(result) == 46

    def test_info_only_costs_health(self):
        result = scan(10, *[flagged(i, violation("ETSY-TD-002", "info")) for i in range(3)])
        assert compliance_score(result) == 70

    def test_rounds_half_up(self):
        result = scan(2, flagged(1, violation("ETSY-TD-001", "warning")))
        assert compliance_score(result) == 48

    def test_clamped_at_zero(self):
        result = scan(1, flagged(1, *[violation(f"ETSY-PI-{i:03d}", "critical") for i in range(1, 12)]))
        assert compliance_score(result) == 0

    @pytest.mark.parametrize("total", [1, 3, 7, 50])
    def test_bounds(self, total):
        sets = [flagged(i, violation("ETSY-PI-001", "critical"), violation("ETSY-TD-001", "warning"))
                for i in range(total)]
        assert 0 <= compliance_score(scan(total, *sets)) <= 100


class TestGrade:
    @pytest.mark.parametrize("score,grade", [
        (100, "A"), (90, "A"), (89, "B"), (80, "B"), (79, "C"),
        (70, "C"), (60, "D"), (59, "F"), (0, "F"),
    ])
    def test_thresholds(self, score, grade):
        assert grade_for(score) == grade


class TestMostCommonRule:
    def test_highest_count(self, catalog):
        result = scan(3, flagged(1, violation("ETSY-TD-001")),
                      flagged(2, violation("ETSY-TD-001"), violation("ETSY-PI-001")))
        assert most_common_rule(result, catalog) == "ETSY-TD-001"

    def test_tie_goes_to_catalog_order(self, catalog):
        result = scan(2, flagged(1, violation("ETSY-SS-008")), flagged(2, violation("ETSY-PI-003")))
        assert most_common_rule(result, catalog) == "ETSY-PI-003"

    def test_tie_on_unknown_rules(self):
        empty = RuleCatalog.from_rules([])
        result = scan(2, flagged(1, violation("ETSY-ZZ-002")), flagged(2, violation("ETSY-ZZ-001")))
        assert most_common_rule(result, empty) == "ETSY-ZZ-001"

    def test_no_violations(self, catalog):
        assert most_common_rule(scan(3), catalog) is None


class TestSummary:
    def test_recommendation_priorities(self):
        assert recommendation_for(scan(1, flagged(1, violation("X-Y-001", "critical")))) == (
            "Address 1 critical violation(s) immediately to avoid account suspension.")
        assert recommendation_for(scan(1, flagged(1, violation("X-Y-001", "warning")))) == (
            "Fix 1 warning(s) to improve listing quality and visibility.")
        assert recommendation_for(scan(1, flagged(1, violation("X-Y-001", "info")))) == (
            "Review 1 optimization suggestion(s) to maximize performance.")
        assert recommendation_for(scan(1)) == (
            "All listings are fully compliant. Continue monitoring for new violations.")

    def test_summarize(self, catalog):
        result = scan(10, *[flagged(i, violation("ETSY-TD-002", "info")) for i in range(3)])
        summary = summarize(result, catalog)
        assert summary.score == 70
        assert summary.grade == "C"
        assert summary.healthy_listings == 7
        assert summary.listings_with_issues == 3
        assert summary.most_common_issue == "ETSY-TD-002"
        assert summary.to_dict()["mostCommonIssue"] == "ETSY-TD-002"
