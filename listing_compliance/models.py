"""Result types shared by the scanner, scorer and exporters.

Everything here is immutable once built. ``to_dict`` produces the camelCase
shape used by the JSON export; ``from_dict`` reads it back.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Iterable, Iterator, Optional


class Severity(str, Enum):
    CRITICAL = "critical"  # Listing may be removed / account at risk
    WARNING = "warning"    # Should fix - hurts visibility or policy standing
    INFO = "info"          # Optimization suggestion


class Platform(str, Enum):
    ETSY = "etsy"
    AMAZON = "amazon"


SEVERITY_ORDER = (Severity.CRITICAL, Severity.WARNING, Severity.INFO)


def utc_timestamp(moment: Optional[datetime] = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a trailing Z."""
    moment = moment or datetime.now(timezone.utc)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    text = moment.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return text.replace("+00:00", "Z")


@dataclass(frozen=True)
class Violation:
    """One rule firing against one listing."""
    rule_id: str
    severity: Severity
    message: str
    field: Optional[str] = None
    matched_value: Optional[str] = None
    recommendation: Optional[str] = None

    def __str__(self) -> str:
        icon = {"critical": "🔴", "warning": "⚠️", "info": "💡"}[self.severity.value]
        s = f"{icon} [{self.rule_id}] {self.message}"
        if self.matched_value:
            s += f" (matched: '{self.matched_value}')"
        if self.recommendation:
            s += f"\n   → {self.recommendation}"
        return s

    def to_dict(self) -> dict:
        data = {
            "ruleId": self.rule_id,
            "severity": self.severity.value,
            "message": self.message,
        }
        if self.field is not None:
            data["field"] = self.field
        if self.matched_value is not None:
            data["matchedValue"] = self.matched_value
        if self.recommendation is not None:
            data["recommendation"] = self.recommendation
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Violation":
        return cls(
            rule_id=data["ruleId"],
            severity=Severity(data["severity"]),
            message=data["message"],
            field=data.get("field"),
            matched_value=data.get("matchedValue"),
            recommendation=data.get("recommendation"),
        )


def _count(violations: Iterable[Violation], severity: Severity) -> int:
    return sum(1 for v in violations if v.severity == severity)


@dataclass(frozen=True)
class ListingViolationSet:
    """All violations found on a single listing, in catalog order."""
    listing_id: str
    listing_title: str
    violations: tuple[Violation, ...] = ()
    listing_url: Optional[str] = None

    @property
    def critical_count(self) -> int:
        return _count(self.violations, Severity.CRITICAL)

    @property
    def warning_count(self) -> int:
        return _count(self.violations, Severity.WARNING)

    @property
    def info_count(self) -> int:
        return _count(self.violations, Severity.INFO)

    @property
    def has_violations(self) -> bool:
        return len(self.violations) > 0

    def to_dict(self) -> dict:
        data = {
            "listingId": self.listing_id,
            "listingTitle": self.listing_title,
        }
        if self.listing_url is not None:
            data["listingUrl"] = self.listing_url
        data.update({
            "violations": [v.to_dict() for v in self.violations],
            "criticalCount": self.critical_count,
            "warningCount": self.warning_count,
            "infoCount": self.info_count,
        })
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "ListingViolationSet":
        return cls(
            listing_id=str(data["listingId"]),
            listing_title=data.get("listingTitle", ""),
            violations=tuple(Violation.from_dict(v) for v in data.get("violations", [])),
            listing_url=data.get("listingUrl"),
        )


@dataclass(frozen=True)
class ScanResult:
    """Complete output of one scan over one platform's listings.

    Build through :meth:`build` so the aggregate counts always agree with the
    detail list.
    """
    platform: Platform
    timestamp: str
    total_listings: int
    violation_count: int
    critical_count: int
    warning_count: int
    info_count: int
    listings: tuple[ListingViolationSet, ...] = ()
    catalog_version: str = ""

    @classmethod
    def build(
        cls,
        platform: Platform,
        total_listings: int,
        listing_sets: Iterable[ListingViolationSet],
        timestamp: Optional[str] = None,
        catalog_version: str = "",
    ) -> "ScanResult":
        flagged = tuple(s for s in listing_sets if s.has_violations)
        all_violations = [v for s in flagged for v in s.violations]
        return cls(
            platform=Platform(platform),
            timestamp=timestamp or utc_timestamp(),
            total_listings=total_listings,
            violation_count=len(all_violations),
            critical_count=_count(all_violations, Severity.CRITICAL),
            warning_count=_count(all_violations, Severity.WARNING),
            info_count=_count(all_violations, Severity.INFO),
            listings=flagged,
            catalog_version=catalog_version,
        )

    @property
    def flagged_listings(self) -> int:
        return len(self.listings)

    @property
    def healthy_listings(self) -> int:
        return self.total_listings - len(self.listings)

    def iter_violations(self) -> Iterator[Violation]:
        for listing in self.listings:
            yield from listing.violations

    def to_dict(self) -> dict:
        return {
            "platform": self.platform.value,
            "timestamp": self.timestamp,
            "catalogVersion": self.catalog_version,
            "totalListings": self.total_listings,
            "violationCount": self.violation_count,
            "criticalCount": self.critical_count,
            "warningCount": self.warning_count,
            "infoCount": self.info_count,
            "violations": [s.to_dict() for s in self.listings],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ScanResult":
        """Rebuild from an export document; counts are re-derived, not trusted."""
        return cls.build(
            platform=Platform(data["platform"]),
            total_listings=int(data["totalListings"]),
            listing_sets=[ListingViolationSet.from_dict(s) for s in data.get("violations", [])],
            timestamp=data.get("timestamp"),
            catalog_version=data.get("catalogVersion", ""),
        )


@dataclass(frozen=True)
class ComplianceSummary:
    """Score breakdown derived from a ScanResult."""
    score: int
    grade: str
    healthy_listings: int
    listings_with_issues: int
    most_common_issue: Optional[str]
    recommendation: str

    def to_dict(self) -> dict:
        return {
            "score": self.score,
            "grade": self.grade,
            "healthyListings": self.healthy_listings,
            "listingsWithIssues": self.listings_with_issues,
            "mostCommonIssue": self.most_common_issue,
            "recommendation": self.recommendation,
        }


@dataclass(frozen=True)
class RuleCount:
    rule_id: str
    count: int
    severity: Severity

    def to_dict(self) -> dict:
        return {"ruleId": self.rule_id, "count": self.count, "severity": self.severity.value}


@dataclass(frozen=True)
class ViolationBreakdown:
    by_category: dict[str, int] = field(default_factory=dict)
    by_severity: dict[str, int] = field(default_factory=dict)
    top_violations: tuple[RuleCount, ...] = ()

    def to_dict(self) -> dict:
        return {
            "byCategory": dict(self.by_category),
            "bySeverity": dict(self.by_severity),
            "topViolations": [r.to_dict() for r in self.top_violations],
        }


@dataclass(frozen=True)
class ScanComparison:
    previous_score: int
    current_score: int
    score_change: int
    violation_change: int
    critical_change: int
    warning_change: int
    improved: bool

    def summary(self) -> str:
        arrow = "📈" if self.improved else ("📉" if self.score_change < 0 else "➡️")
        sign = "+" if self.score_change > 0 else ""
        return (
            f"{arrow} Score: {self.previous_score} → {self.current_score} ({sign}{self.score_change}) | "
            f"Violations: {self.violation_change:+d} | "
            f"Critical: {self.critical_change:+d} | Warnings: {self.warning_change:+d}"
        )

    def to_dict(self) -> dict:
        return {
            "previousScore": self.previous_score,
            "currentScore": self.current_score,
            "scoreChange": self.score_change,
            "violationChange": self.violation_change,
            "criticalChange": self.critical_change,
            "warningChange": self.warning_change,
            "improved": self.improved,
        }


@dataclass(frozen=True)
class MultiPlatformReport:
    """Side-by-side scan of an Etsy shop and an Amazon catalog."""
    etsy: ScanResult
    amazon: ScanResult
    etsy_score: int
    amazon_score: int

    @property
    def total_listings(self) -> int:
        return self.etsy.total_listings + self.amazon.total_listings

    @property
    def total_violations(self) -> int:
        return self.etsy.violation_count + self.amazon.violation_count

    @property
    def average_score(self) -> int:
        return int((self.etsy_score + self.amazon_score) / 2 + 0.5)

    @property
    def better_platform(self) -> Platform:
        return Platform.ETSY if self.etsy_score >= self.amazon_score else Platform.AMAZON

    def to_dict(self) -> dict:
        return {
            "etsy": self.etsy.to_dict(),
            "amazon": self.amazon.to_dict(),
            "combined": {
                "totalListings": self.total_listings,
                "totalViolations": self.total_violations,
                "avgComplianceScore": self.average_score,
                "platformComparison": {
                    "etsyScore": self.etsy_score,
                    "amazonScore": self.amazon_score,
                    "betterPlatform": self.better_platform.value,
                },
            },
        }
