"""CLI tool for Listing Compliance.

Usage:
    python -m listing_compliance.cli scan --file listings.json --platform etsy [--format txt]
    python -m listing_compliance.cli scan --file listings.json --severity critical,warning
    python -m listing_compliance.cli report --file scan.json [--format md]
    python -m listing_compliance.cli compare --previous old.json --current new.json
    python -m listing_compliance.cli rules [--platform amazon]
"""
import argparse
import json
import logging
import sys
from typing import Any

from listing_compliance.config import config
from listing_compliance.errors import ComplianceError

logger = logging.getLogger("listing_compliance")

FORMATS = ("txt", "json", "csv", "md")


def log_event(log: logging.Logger, level: int, event: str, **fields: Any) -> None:
    """Emit one structured log line as compact JSON."""
    payload = {"event": event, **fields}
    log.log(level, json.dumps(payload, default=str, sort_keys=True))


def _split(value):
    if not value:
        return None
    return [part.strip() for part in value.split(",") if part.strip()]


def _write_output(content: str, output=None):
    if output:
        with open(output, "w", encoding="utf-8") as f:
            f.write(content)
        print(f"💾 Saved to {output}")
    else:
        print(content)


def cmd_scan(args):
    """Scan a listings file against the rule catalog."""
    from listing_compliance.catalog import get_catalog
    from listing_compliance.export import export_scan
    from listing_compliance.listings import load_listings
    from listing_compliance.scanner import BatchScanner, filter_by_severity

    text = _read_input(args.file)
    if not text:
        print("❌ No input. Use --file or pipe JSON on stdin")
        sys.exit(1)

    platform = (args.platform or config.DEFAULT_PLATFORM).lower()
    listings = load_listings(text, platform)
    catalog = get_catalog(config.SEASON_MONTH)
    workers = args.workers or config.SCAN_WORKERS
    max_listings = args.max if args.max is not None else config.MAX_LISTINGS

    print(f"🔄 Scanning {len(listings)} {platform} listing(s)...", file=sys.stderr)
    log_event(logger, logging.INFO, "scan_started", platform=platform,
              listings=len(listings), workers=workers, catalog_version=catalog.version)

    scanner = BatchScanner(catalog, workers=workers, max_listings=max_listings,
                           categories=_split(args.category))
    result = scanner.scan_all(listings, platform)
    severities = _split(args.severity)
    if severities:
        result = filter_by_severity(result, severities)

    log_event(logger, logging.INFO, "scan_finished", platform=platform,
              scanned=result.total_listings, violations=result.violation_count,
              critical=result.critical_count)

    _write_output(export_scan(result, args.format, catalog), args.output)


def cmd_report(args):
    """Render a saved JSON scan in another format."""
    from listing_compliance.export import export_scan, from_json

    text = _read_input(args.file)
    if not text:
        print("❌ No input. Use --file or pipe JSON on stdin")
        sys.exit(1)

    result = from_json(text)
    log_event(logger, logging.DEBUG, "report_loaded", platform=result.platform.value,
              violations=result.violation_count)
    _write_output(export_scan(result, args.format), args.output)


def cmd_compare(args):
    """Compare two saved JSON scans of the same platform."""
    from listing_compliance.comparison import compare_scans
    from listing_compliance.export import from_json

    previous = from_json(_read_input(args.previous))
    current = from_json(_read_input(args.current))
    comparison = compare_scans(previous, current)
    log_event(logger, logging.INFO, "scans_compared", platform=current.platform.value,
              score_change=comparison.score_change)

    if args.json:
        print(json.dumps(comparison.to_dict(), indent=2))
    else:
        print(comparison.summary())


def cmd_rules(args):
    """List catalog rules."""
    from listing_compliance.catalog import get_catalog
    from listing_compliance.models import Platform

    catalog = get_catalog(config.SEASON_MONTH)
    platforms = [Platform(args.platform.lower())] if args.platform else list(Platform)

    print(f"📋 Rule catalog {catalog.version}")
    for platform in platforms:
        summary = catalog.summary(platform)
        counts = ", ".join(f"{k}: {v}" for k, v in summary["bySeverity"].items())
        print(f"\n{platform.value.upper()} ({summary['total']} rules; {counts})")
        for category, rules in catalog.by_category(platform).items():
            print(f"  {category} ({len(rules)})")
            for rule in rules:
                print(f"    {rule.id:<14} {rule.severity.value:<8} {rule.name}")


def _read_input(file_path=None):
    """Read input from a file, or from stdin when piped."""
    if file_path:
        with open(file_path, encoding="utf-8") as f:
            return f.read()
    if not sys.stdin.isatty():
        return sys.stdin.read()
    return None


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="listing-compliance",
        description="Listing Compliance CLI: scan Etsy and Amazon listings against marketplace policy rules",
    )
    sub = parser.add_subparsers(dest="command", help="Command")

    # scan
    p = sub.add_parser("scan", help="Scan listings for policy violations")
    p.add_argument("--file", "-f", help="Listings JSON file")
    p.add_argument("--platform", "-p", choices=["etsy", "amazon"], help="Platform")
    p.add_argument("--severity", "-s", help="Keep only these severities (comma-separated)")
    p.add_argument("--category", "-c", help="Only run these categories (comma-separated codes or names)")
    p.add_argument("--format", default="txt", choices=FORMATS, help="Output format")
    p.add_argument("--output", "-o", help="Output file")
    p.add_argument("--workers", "-w", type=int, help="Worker threads")
    p.add_argument("--max", type=int, help="Max listings to scan (0 = unlimited)")

    # report
    p = sub.add_parser("report", help="Render a saved JSON scan")
    p.add_argument("--file", "-f", help="Scan JSON file")
    p.add_argument("--format", default="txt", choices=FORMATS, help="Output format")
    p.add_argument("--output", "-o", help="Output file")

    # compare
    p = sub.add_parser("compare", help="Compare two saved scans")
    p.add_argument("--previous", required=True, help="Earlier scan JSON file")
    p.add_argument("--current", required=True, help="Later scan JSON file")
    p.add_argument("--json", action="store_true", help="Print comparison as JSON")

    # rules
    p = sub.add_parser("rules", help="List catalog rules")
    p.add_argument("--platform", "-p", choices=["etsy", "amazon"], help="Platform")

    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        sys.exit(1)

    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    commands = {
        "scan": cmd_scan,
        "report": cmd_report,
        "compare": cmd_compare,
        "rules": cmd_rules,
    }
    try:
        config.validate()
        commands[args.command](args)
    except (ComplianceError, ValueError) as e:
        log_event(logger, logging.ERROR, "command_failed", command=args.command,
                  error=type(e).__name__)
        print(f"❌ {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
