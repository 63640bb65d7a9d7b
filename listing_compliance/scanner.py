"""Listing and batch scanning.

- ListingScanner: every applicable rule against one listing
- BatchScanner: a listing collection into one ScanResult, optionally on a
  thread pool (output order always equals input order)
- filter_by_severity / filter_by_category: restrict a ScanResult
- scan_platforms: Etsy and Amazon side by side
- listings_by_severity / fix_suggestions: display helpers
"""
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from typing import Iterable, Optional, Sequence

from listing_compliance.catalog import RuleCatalog, get_catalog
from listing_compliance.errors import PlatformMismatchError
from listing_compliance.models import (
    ListingViolationSet, MultiPlatformReport, Platform, ScanResult, Severity,
)
from listing_compliance.rules import category_code, evaluate_rule
from listing_compliance.scoring import compliance_score


class ListingScanner:
    """Evaluates catalog rules against single listings."""

    def __init__(self, catalog: Optional[RuleCatalog] = None,
                 categories: Optional[Iterable[str]] = None):
        self.catalog = catalog or get_catalog()
        self.categories = tuple(categories) if categories else None

    def rules_for(self, platform):
        return self.catalog.rules(platform, self.categories)

    def scan(self, listing) -> ListingViolationSet:
        violations = []
        for rule in self.rules_for(listing.platform_tag):
            violation = evaluate_rule(rule, listing)
            if violation is not None:
                violations.append(violation)
        return ListingViolationSet(
            listing_id=listing.identifier,
            listing_title=listing.title,
            violations=tuple(violations),
            listing_url=listing.listing_url,
        )


class BatchScanner:
    """Scans a collection of one platform's listings into a ScanResult."""

    def __init__(
        self,
        catalog: Optional[RuleCatalog] = None,
        workers: int = 1,
        max_listings: Optional[int] = None,
        categories: Optional[Iterable[str]] = None,
    ):
        if workers < 1:
            raise ValueError(f"workers must be >= 1, got {workers}")
        self.scanner = ListingScanner(catalog, categories)
        self.workers = workers
        self.max_listings = max_listings or None

    @property
    def catalog(self) -> RuleCatalog:
        return self.scanner.catalog

    def scan_all(self, listings: Sequence, platform, timestamp: Optional[str] = None) -> ScanResult:
        platform = Platform(platform)
        listings = list(listings)
        if self.max_listings is not None:
            listings = listings[:self.max_listings]
        for listing in listings:
            if listing.platform_tag != platform:
                raise PlatformMismatchError(platform.value, listing.platform_tag.value,
                                            f"listing {listing.identifier}")

        if self.workers > 1 and len(listings) > 1:
            with ThreadPoolExecutor(max_workers=self.workers) as pool:
                sets = list(pool.map(self.scanner.scan, listings))
        else:
            sets = [self.scanner.scan(listing) for listing in listings]

        return ScanResult.build(
            platform=platform,
            total_listings=len(listings),
            listing_sets=sets,
            timestamp=timestamp,
            catalog_version=self.catalog.version,
        )


def scan_listings(listings: Sequence, platform, timestamp: Optional[str] = None,
                  catalog: Optional[RuleCatalog] = None) -> ScanResult:
    """Convenience wrapper: sequential scan with the default catalog."""
    return BatchScanner(catalog).scan_all(listings, platform, timestamp)


# ── Filters ───────────────────────────────────────────────────

def _restrict(result: ScanResult, keep) -> ScanResult:
    sets = [replace(s, violations=tuple(v for v in s.violations if keep(v)))
            for s in result.listings]
    return ScanResult.build(
        platform=result.platform,
        total_listings=result.total_listings,
        listing_sets=sets,
        timestamp=result.timestamp,
        catalog_version=result.catalog_version,
    )


def filter_by_severity(result: ScanResult, severities: Iterable) -> ScanResult:
    """Keep only violations whose severity is in ``severities``; counts are recomputed."""
    wanted = {Severity(s) for s in severities}
    return _restrict(result, lambda v: v.severity in wanted)


def filter_by_category(result: ScanResult, categories: Iterable[str]) -> ScanResult:
    """Keep only violations whose rule-ID category segment is in ``categories``."""
    wanted = set(categories)
    return _restrict(result, lambda v: category_code(v.rule_id) in wanted)


# ── Multi-platform ────────────────────────────────────────────

def scan_platforms(
    etsy_listings: Sequence,
    amazon_listings: Sequence,
    catalog: Optional[RuleCatalog] = None,
    timestamp: Optional[str] = None,
    workers: int = 1,
) -> MultiPlatformReport:
    scanner = BatchScanner(catalog, workers=workers)
    etsy = scanner.scan_all(etsy_listings, Platform.ETSY, timestamp)
    amazon = scanner.scan_all(amazon_listings, Platform.AMAZON, timestamp)
    return MultiPlatformReport(
        etsy=etsy,
        amazon=amazon,
        etsy_score=compliance_score(etsy),
        amazon_score=compliance_score(amazon),
    )


# ── Display helpers ───────────────────────────────────────────

def listings_by_severity(result: ScanResult) -> list[ListingViolationSet]:
    """Flagged listings, worst first: by critical, then warning, then info count."""
    return sorted(
        result.listings,
        key=lambda s: (-s.critical_count, -s.warning_count, -s.info_count),
    )


_FIELD_HINTS = {
    "title": "Edit your listing title to fix this issue",
    "description": "Update your listing description",
    "materials": "Add materials information to your listing",
    "tags": "Add more tags to improve discoverability",
}


def fix_suggestions(violation) -> list[str]:
    suggestions = []
    if violation.matched_value:
        suggestions.append(f'Remove the keyword "{violation.matched_value}" from your listing')
    if violation.field in _FIELD_HINTS:
        suggestions.append(_FIELD_HINTS[violation.field])
    if violation.severity == Severity.CRITICAL:
        suggestions.append("⚠️ This is a critical issue - fix immediately to avoid shop suspension")
    return suggestions
