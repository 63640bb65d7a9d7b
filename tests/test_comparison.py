"""Tests for scan comparison."""
import pytest

from conftest import TIMESTAMP, flagged, violation
from listing_compliance.comparison import compare_scans
from listing_compliance.errors import PlatformMismatchError
from listing_compliance.models import Platform, ScanResult
from listing_compliance.scoring import compliance_score


def scan(total, flagged_count, severity="info", platform=Platform.ETSY):
    sets = [flagged(i, violation("ETSY-TD-002", severity)) for i in range(flagged_count)]
    return ScanResult.build(platform, total, sets, timestamp=TIMESTAMP)


class TestCompareScans:
    def setup_method(self):
        self.previous = scan(10, 3)
        self.current = scan(20, 3)

    def test_scores(self):
        assert compliance_score(self.previous) == 70
        assert compliance_score(self.current) == 85

    def test_improvement(self):
        c = compare_scans(self.previous, self.current)
        assert c.previous_score == 70
        assert c.current_score == 85
        assert c.score_change == 15
        assert c.improved is True

    def test_regression(self):
        c = compare_scans(self.current, self.previous)
        assert c.score_change == -15
        assert c.improved is False

    def test_unchanged_is_not_improved(self):
        assert compare_scans(self.previous, self.previous).improved is False

    def test_count_deltas(self):
        previous = scan(5, 2, "warning")
        current = scan(5, 1, "critical")
        c = compare_scans(previous, current)
        assert c.violation_change == -1
        assert c.critical_change == 1
        assert c.warning_change == -2

    def test_platform_mismatch(self):
        with pytest.raises(PlatformMismatchError) as exc:
            compare_scans(self.previous, scan(10, 3, platform=Platform.AMAZON))
        assert exc.value.expected == "etsy"
        assert exc.value.actual == "amazon"
        assert isinstance(exc.value, ValueError)
