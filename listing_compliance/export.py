"""Export scan results to multiple formats (JSON, CSV, TXT, Markdown)."""
import json
from typing import Optional

from listing_compliance.breakdown import violation_breakdown
from listing_compliance.errors import ExportError
from listing_compliance.models import ScanResult, utc_timestamp
from listing_compliance.scanner import listings_by_severity
from listing_compliance.scoring import summarize

CSV_HEADER = "Listing ID,Listing Title,Severity,Rule ID,Message,Field,Recommendation"


def to_json(result: ScanResult, catalog=None, exported_at: Optional[str] = None,
            pretty: bool = True) -> str:
    """ScanResult plus its score summary, breakdown and an export timestamp."""
    data = result.to_dict()
    data["summary"] = summarize(result, catalog).to_dict()
    data["breakdown"] = violation_breakdown(result).to_dict()
    data["exportedAt"] = exported_at or utc_timestamp()
    try:
        return json.dumps(data, ensure_ascii=False, indent=2 if pretty else None)
    except (TypeError, ValueError) as e:
        raise ExportError(f"Scan result is not JSON-serializable: {e}") from e


def from_json(text: str) -> ScanResult:
    """Load a ScanResult back from a :func:`to_json` document."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ExportError(f"Export document is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ExportError("Export document must be a JSON object")
    try:
        return ScanResult.from_dict(data)
    except (KeyError, TypeError, ValueError) as e:
        raise ExportError(f"Malformed export document: {e!r}") from e


def _quoted(value: str) -> str:
    return '"' + value.replace('"', '""') + '"'


def _cell(value) -> str:
    text = "" if value is None else str(value)
    if any(c in text for c in ',"\n\r'):
        return _quoted(text)
    return text


def to_csv(result: ScanResult) -> str:
    """One row per violation.

    Title, message and recommendation are always quoted; other columns only
    when they contain a comma, quote or newline. ``csv.writer`` applies one
    quoting policy to every column, so rows are assembled by hand.
    """
    rows = [CSV_HEADER]
    for listing in result.listings:
        for v in listing.violations:
            rows.append(",".join([
                _cell(listing.listing_id),
                _quoted(listing.listing_title),
                _cell(v.severity.value),
                _cell(v.rule_id),
                _quoted(v.message),
                _cell(v.field),
                _quoted(v.recommendation or ""),
            ]))
    return "\n".join(rows)


def format_report(result: ScanResult, catalog=None, limit: int = 20) -> str:
    """Plain-text console report, worst listings first."""
    summary = summarize(result, catalog)
    breakdown = violation_breakdown(result)
    lines = [
        f"📋 Compliance Scan: {result.platform.value.upper()}",
        f"Score: {summary.score}/100 | Grade: {summary.grade}",
        f"Listings: {result.total_listings} | Healthy: {summary.healthy_listings} "
        f"| With issues: {summary.listings_with_issues}",
        f"🔴 Critical: {result.critical_count} | ⚠️ Warnings: {result.warning_count} "
        f"| 💡 Info: {result.info_count}",
        "",
    ]
    if breakdown.top_violations:
        lines.append("📊 Top issues:")
        for rc in breakdown.top_violations:
            lines.append(f"  {rc.rule_id} ({rc.severity.value}): {rc.count}")
        lines.append("")

    flagged = listings_by_severity(result)
    for listing in flagged[:limit]:
        lines.append(f"📦 {listing.listing_title} [{listing.listing_id}]")
        for v in listing.violations:
            lines.append(f"  {v}")
        lines.append("")
    if len(flagged) > limit:
        lines.append(f"... and {len(flagged) - limit} more listing(s) with issues")
        lines.append("")

    lines.append(f"💡 {summary.recommendation}")
    return "\n".join(lines)


def _md_escape(s: str) -> str:
    return s.replace("|", "\\|").replace("\n", " ")


def to_markdown(result: ScanResult, catalog=None) -> str:
    summary = summarize(result, catalog)
    breakdown = violation_breakdown(result)
    lines = [
        f"# Compliance Report: {result.platform.value.capitalize()}",
        "",
        f"- **Score:** {summary.score}/100 (Grade {summary.grade})",
        f"- **Listings scanned:** {result.total_listings}",
        f"- **Listings with issues:** {summary.listings_with_issues}",
        f"- **Violations:** {result.violation_count} "
        f"({result.critical_count} critical, {result.warning_count} warning, "
        f"{result.info_count} info)",
        f"- **Scanned at:** {result.timestamp}",
        "",
        f"> {summary.recommendation}",
        "",
    ]
    if breakdown.by_category:
        lines += ["## By category", "", "| Category | Violations |", "|---|---|"]
        for code, count in sorted(breakdown.by_category.items(), key=lambda kv: -kv[1]):
            lines.append(f"| {code} | {count} |")
        lines.append("")
    if result.listings:
        lines += ["## Violations", "",
                  "| Listing | Severity | Rule | Message |", "|---|---|---|---|"]
        for listing in listings_by_severity(result):
            for v in listing.violations:
                lines.append(
                    f"| {_md_escape(listing.listing_title)} | {v.severity.value} "
                    f"| {v.rule_id} | {_md_escape(v.message)} |"
                )
        lines.append("")
    return "\n".join(lines)


EXPORTERS = {
    "json": to_json,
    "csv": lambda result, catalog=None: to_csv(result),
    "txt": format_report,
    "md": to_markdown,
}


def export_scan(result: ScanResult, fmt: str = "json", catalog=None) -> Optional[str]:
    """Export a scan in the given format. Returns None if format unknown."""
    fn = EXPORTERS.get(fmt.lower())
    if fn is None:
        return None
    return fn(result, catalog=catalog)
