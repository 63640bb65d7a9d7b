"""Versioned, immutable rule catalog.

Rules are validated once at build time:
- ID format ``<PLATFORM>-<CATEGORY>-<NNN>``
- ID prefix agrees with the rule's platform
- category segment agrees with the declared category
- category is known for the platform
- IDs are unique across the whole catalog

Use :func:`get_catalog` for the shared default instance; :func:`build_catalog`
builds a fresh one (e.g. with a different seasonal reference month).
"""
import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Iterable, Optional

from listing_compliance.amazon_rules import amazon_rules
from listing_compliance.errors import CatalogError
from listing_compliance.etsy_rules import etsy_rules
from listing_compliance.models import SEVERITY_ORDER, Platform
from listing_compliance.rules import Rule

CATALOG_VERSION = "2024.1"

RULE_ID_PATTERN = re.compile(r"^(?P<prefix>[A-Z]+)-(?P<code>[A-Z]+)-(?P<number>\d{3})$")

PLATFORM_PREFIXES = {
    Platform.ETSY: "ETSY",
    Platform.AMAZON: "AMZN",
}

# Category name -> ID segment, per platform, in catalog order
CATEGORY_CODES = {
    Platform.ETSY: {
        "prohibited_items": "PI",
        "title_description": "TD",
        "policy_compliance": "PC",
        "pricing_fees": "PF",
        "shop_standards": "SS",
    },
    Platform.AMAZON: {
        "product_detail_page": "PDP",
        "brand_trademarks": "BT",
        "restricted_categories": "RC",
        "fba_requirements": "FBA",
        "content_policy": "CP",
        "technical_requirements": "TR",
    },
}


def validate_rule(rule: Rule) -> None:
    """Raise CatalogError if the rule's ID disagrees with its declared fields."""
    m = RULE_ID_PATTERN.match(rule.id)
    if not m:
        raise CatalogError(f"Malformed rule ID '{rule.id}' (expected PLATFORM-CATEGORY-NNN)")
    platform = Platform(rule.platform)
    expected_prefix = PLATFORM_PREFIXES[platform]
    if m.group("prefix") != expected_prefix:
        raise CatalogError(
            f"Rule '{rule.id}' has prefix '{m.group('prefix')}' "
            f"but platform '{platform.value}' expects '{expected_prefix}'"
        )
    codes = CATEGORY_CODES[platform]
    if rule.category not in codes:
        raise CatalogError(f"Rule '{rule.id}' has unknown {platform.value} category '{rule.category}'")
    if m.group("code") != codes[rule.category]:
        raise CatalogError(
            f"Rule '{rule.id}' category segment '{m.group('code')}' "
            f"does not match category '{rule.category}' ({codes[rule.category]})"
        )


@dataclass(frozen=True)
class RuleCatalog:
    """Ordered rules for every platform. Build through :func:`build_catalog`."""
    version: str
    all_rules: tuple[Rule, ...]
    _index: dict = field(repr=False, compare=False, default_factory=dict)

    @classmethod
    def from_rules(cls, rules: Iterable[Rule], version: str = CATALOG_VERSION) -> "RuleCatalog":
        ordered = tuple(rules)
        index = {}
        for position, rule in enumerate(ordered):
            validate_rule(rule)
            if rule.id in index:
                raise CatalogError(f"Duplicate rule ID '{rule.id}'")
            index[rule.id] = position
        return cls(version=version, all_rules=ordered, _index=index)

    def __len__(self) -> int:
        return len(self.all_rules)

    def __contains__(self, rule_id: str) -> bool:
        return rule_id in self._index

    def rules(self, platform=None, categories: Optional[Iterable[str]] = None) -> tuple[Rule, ...]:
        """Rules in catalog order, optionally restricted to a platform and categories.

        ``categories`` accepts category names ("pricing_fees") or ID codes ("PF").
        """
        selected = self.all_rules
        if platform is not None:
            platform = Platform(platform)
            selected = tuple(r for r in selected if r.platform == platform)
        if categories is not None:
            wanted = set(categories)
            selected = tuple(r for r in selected
                             if r.category in wanted or r.category_code in wanted)
        return selected

    def by_category(self, platform) -> dict[str, tuple[Rule, ...]]:
        platform = Platform(platform)
        groups = {}
        for category in CATEGORY_CODES[platform]:
            groups[category] = tuple(r for r in self.rules(platform) if r.category == category)
        return groups

    def get(self, rule_id: str) -> Optional[Rule]:
        position = self._index.get(rule_id)
        return None if position is None else self.all_rules[position]

    def position(self, rule_id: str) -> int:
        """Declaration index of a rule; unknown IDs sort after every known one."""
        return self._index.get(rule_id, len(self.all_rules))

    def summary(self, platform) -> dict:
        """Rule totals for a platform: overall, by category and by severity."""
        rules = self.rules(platform)
        return {
            "total": len(rules),
            "byCategory": {cat: len(group) for cat, group in self.by_category(platform).items()},
            "bySeverity": {
                sev.value: sum(1 for r in rules if r.severity == sev) for sev in SEVERITY_ORDER
            },
        }


def build_catalog(season_month: Optional[int] = None, version: str = CATALOG_VERSION) -> RuleCatalog:
    """Build and validate the full catalog.

    ``season_month`` (1-12) is the reference month for the Etsy seasonal
    relevance rule; with ``None`` that rule never fires.
    """
    if season_month is not None and not 1 <= season_month <= 12:
        raise CatalogError(f"season_month must be 1-12, got {season_month}")
    return RuleCatalog.from_rules(etsy_rules(season_month) + amazon_rules(), version=version)


@lru_cache(maxsize=None)
def get_catalog(season_month: Optional[int] = None) -> RuleCatalog:
    """Shared, process-wide catalog instance."""
    return build_catalog(season_month)
