"""Trend comparison between two scans of the same platform."""
from listing_compliance.errors import PlatformMismatchError
from listing_compliance.models import ScanComparison, ScanResult
from listing_compliance.scoring import compliance_score


def compare_scans(previous: ScanResult, current: ScanResult) -> ScanComparison:
    """Deltas are ``current - previous``; ``improved`` means the score went up."""
    if previous.platform != current.platform:
        raise PlatformMismatchError(previous.platform.value, current.platform.value,
                                    "scan comparison")
    previous_score = compliance_score(previous)
    current_score = compliance_score(current)
    return ScanComparison(
        previous_score=previous_score,
        current_score=current_score,
        score_change=current_score - previous_score,
        violation_change=current.violation_count - previous.violation_count,
        critical_change=current.critical_count - previous.critical_count,
        warning_change=current.warning_count - previous.warning_count,
        improved=current_score > previous_score,
    )
