"""Rule definitions and the reusable evaluation templates behind them.

A rule is data: identity, category, declared severity and a ``check``.
Checks are built from a handful of templates so the catalog reads as a
table rather than a hundred hand-written predicates:

- KeywordMatch   any of a keyword list, word-boundary aware, first match wins
- PatternMatch   first of a list of regexes against given fields
- Threshold      numeric measure against a minimum and/or maximum
- Presence       attribute missing, blank, or below a minimum count
- CrossField     a term appears without a required qualifier
- FirstOf / When combinators

A check returns a :class:`Finding` or ``None``. :func:`evaluate_rule` stamps
the rule's ID and declared severity onto the finding, so a violation can
never carry a severity its rule did not declare.

Checks must be pure: no I/O, no clock, no randomness, no shared state.
"""
from __future__ import annotations

import dataclasses
import re
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence, Union

from listing_compliance.models import Platform, Severity, Violation

DEFAULT_TEXT_FIELDS = ("title", "description")


@dataclass(frozen=True)
class Finding:
    message: str
    field: Optional[str] = None
    matched_value: Optional[str] = None
    recommendation: Optional[str] = None


Check = Callable[[Any], Optional[Finding]]
Condition = Callable[[Any], bool]
Message = Union[str, Callable[[Any], str]]


def keyword_pattern(keyword: str, word_boundary: bool = True) -> re.Pattern:
    """Case-insensitive pattern for a literal keyword.

    Word boundaries are lookarounds rather than ``\\b`` so keywords that start
    or end with punctuation ("#1", "5 star", "AR-15") still match.
    """
    escaped = re.escape(keyword)
    if word_boundary:
        escaped = rf"(?<!\w){escaped}(?!\w)"
    return re.compile(escaped, re.IGNORECASE)


def contains_any(text: str, terms: Sequence[str], word_boundary: bool = True) -> bool:
    return any(keyword_pattern(t, word_boundary).search(text) for t in terms)


def has_terms(
    terms: Sequence[str],
    fields: Sequence[str] = DEFAULT_TEXT_FIELDS,
    word_boundary: bool = True,
) -> Condition:
    """Condition: any of ``terms`` appears in the listing's ``fields``."""
    patterns = tuple(keyword_pattern(t, word_boundary) for t in terms)
    fields = tuple(fields)

    def condition(listing) -> bool:
        text = listing.text(*fields)
        return any(p.search(text) for p in patterns)

    return condition


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, bool):
        return False
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (int, float)):
        return value == 0
    if hasattr(value, "__len__"):
        return len(value) == 0
    return False


def _render(message: Message, **values: Any) -> str:
    if callable(message):
        return message(**values)
    return message.format(**values)


# ── Templates ─────────────────────────────────────────────────

@dataclass(frozen=True)
class KeywordMatch:
    keywords: Sequence[str]
    message: str
    recommendation: Optional[str] = None
    fields: Sequence[str] = DEFAULT_TEXT_FIELDS
    field: Optional[str] = None
    word_boundary: bool = True
    _patterns: tuple = dataclasses.field(init=False, repr=False, compare=False, default=())

    def __post_init__(self):
        object.__setattr__(self, "keywords", tuple(self.keywords))
        object.__setattr__(self, "fields", tuple(self.fields))
        object.__setattr__(self, "_patterns", tuple(
            keyword_pattern(k, self.word_boundary) for k in self.keywords
        ))

    def first_match(self, listing) -> Optional[str]:
        text = listing.text(*self.fields)
        if not text:
            return None
        for keyword, pattern in zip(self.keywords, self._patterns):
            if pattern.search(text):
                return keyword
        return None

    def __call__(self, listing) -> Optional[Finding]:
        matched = self.first_match(listing)
        if matched is None:
            return None
        return Finding(self.message, field=self.field, matched_value=matched,
                       recommendation=self.recommendation)


@dataclass(frozen=True)
class PatternMatch:
    patterns: Sequence[str]
    message: str
    recommendation: Optional[str] = None
    fields: Sequence[str] = ("description",)
    field: Optional[str] = None
    ignore_case: bool = True
    report_match: bool = False
    _compiled: tuple = dataclasses.field(init=False, repr=False, compare=False, default=())

    def __post_init__(self):
        patterns = (self.patterns,) if isinstance(self.patterns, str) else tuple(self.patterns)
        flags = re.IGNORECASE if self.ignore_case else 0
        object.__setattr__(self, "patterns", patterns)
        object.__setattr__(self, "fields", tuple(self.fields))
        object.__setattr__(self, "_compiled", tuple(re.compile(p, flags) for p in patterns))

    def __call__(self, listing) -> Optional[Finding]:
        text = listing.text(*self.fields)
        if not text:
            return None
        for pattern in self._compiled:
            m = pattern.search(text)
            if m:
                return Finding(self.message, field=self.field,
                               matched_value=m.group(0) if self.report_match else None,
                               recommendation=self.recommendation)
        return None


@dataclass(frozen=True)
class Threshold:
    """Fires when ``measure(listing)`` is below ``minimum`` or above ``maximum``.

    ``message`` is formatted with ``value``. A measure of ``None`` means the
    input is absent and the check passes.
    """
    measure: Callable[[Any], Optional[float]]
    message: Message
    recommendation: Optional[str] = None
    field: Optional[str] = None
    minimum: Optional[float] = None
    maximum: Optional[float] = None

    def __call__(self, listing) -> Optional[Finding]:
        value = self.measure(listing)
        if value is None:
            return None
        below = self.minimum is not None and value < self.minimum
        above = self.maximum is not None and value > self.maximum
        if not (below or above):
            return None
        return Finding(_render(self.message, value=value), field=self.field,
                       recommendation=self.recommendation)


@dataclass(frozen=True)
class Presence:
    """Fires when ``attribute`` is missing/blank or has fewer than ``minimum`` items.

    ``message`` may use ``{count}`` for sequence attributes.
    """
    attribute: str
    message: str
    recommendation: Optional[str] = None
    field: Optional[str] = None
    minimum: int = 1

    def __call__(self, listing) -> Optional[Finding]:
        value = listing.attribute(self.attribute)
        report_field = self.field or self.attribute
        if isinstance(value, (list, tuple)):
            count = len(value)
            if count >= self.minimum:
                return None
            return Finding(self.message.format(count=count), field=report_field,
                           recommendation=self.recommendation)
        if not _is_blank(value):
            return None
        return Finding(self.message.format(count=0), field=report_field,
                       recommendation=self.recommendation)


@dataclass(frozen=True)
class CrossField:
    """A trigger term appears but none of the qualifiers accompany it.

    Qualifiers may reference the matched term as ``{match}``; ``exempt`` can
    waive the finding for a given (listing, match).
    """
    trigger: KeywordMatch
    qualifiers: Sequence[str]
    message: str
    recommendation: Optional[str] = None
    field: Optional[str] = None
    exempt: Optional[Callable[[Any, str], bool]] = None

    def __post_init__(self):
        object.__setattr__(self, "qualifiers", tuple(self.qualifiers))

    def __call__(self, listing) -> Optional[Finding]:
        matched = self.trigger.first_match(listing)
        if matched is None:
            return None
        if self.exempt is not None and self.exempt(listing, matched):
            return None
        text = listing.text(*self.trigger.fields)
        qualifiers = [q.format(match=matched) for q in self.qualifiers]
        if contains_any(text, qualifiers):
            return None
        return Finding(self.message, field=self.field, matched_value=matched,
                       recommendation=self.recommendation)


@dataclass(frozen=True)
class FirstOf:
    """First non-null finding among ``checks``, in order."""
    checks: Sequence[Check]

    def __post_init__(self):
        object.__setattr__(self, "checks", tuple(self.checks))

    def __call__(self, listing) -> Optional[Finding]:
        for check in self.checks:
            finding = check(listing)
            if finding is not None:
                return finding
        return None


@dataclass(frozen=True)
class When:
    """Run ``check`` only when ``condition`` holds (or fails, if ``negate``)."""
    condition: Condition
    check: Check
    negate: bool = False

    def __call__(self, listing) -> Optional[Finding]:
        if bool(self.condition(listing)) == self.negate:
            return None
        return self.check(listing)


def first_of(*checks: Check) -> FirstOf:
    return FirstOf(checks)


def when(condition: Condition, check: Check) -> When:
    return When(condition, check)


def unless(condition: Condition, check: Check) -> When:
    return When(condition, check, negate=True)


# ── Rules ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class Rule:
    id: str
    platform: Platform
    category: str
    severity: Severity
    name: str
    description: str
    check: Check = dataclasses.field(repr=False, compare=False)

    @property
    def category_code(self) -> str:
        """Category segment of the ID: "ETSY-PI-004" -> "PI"."""
        return category_code(self.id)

    def evaluate(self, listing) -> Optional[Violation]:
        return evaluate_rule(self, listing)


def category_code(rule_id: str) -> str:
    parts = rule_id.split("-")
    return parts[1] if len(parts) >= 3 else "UNKNOWN"


def evaluate_rule(rule: Rule, listing) -> Optional[Violation]:
    """Run one rule against one listing. Pure: same inputs, same output."""
    finding = rule.check(listing)
    if finding is None:
        return None
    return Violation(
        rule_id=rule.id,
        severity=rule.severity,
        message=finding.message,
        field=finding.field,
        matched_value=finding.matched_value,
        recommendation=finding.recommendation,
    )
