"""Tests for scan export."""
import csv
import io
import json

import pytest

from conftest import TIMESTAMP, flagged, violation
from listing_compliance.errors import ExportError
from listing_compliance.export import (
    CSV_HEADER, EXPORTERS, export_scan, format_report, from_json, to_csv, to_json, to_markdown,
)
from listing_compliance.models import Platform, ScanResult


@pytest.fixture
def result():
    return ScanResult.build(Platform.ETSY, 3, [
        flagged(
            101,
            violation("ETSY-PI-001", "critical", message="Weapons are prohibited",
                      field="title", matched_value="rifle", recommendation="Remove it"),
            violation("ETSY-TD-002", "info", message='Title is "short", add detail'),
            title='Leather "Rifle" Sling, Brown',
        ),
        flagged(102, violation("ETSY-PC-001", "warning", message="Only 2 tags",
                               field="tags,extra")),
    ], timestamp=TIMESTAMP, catalog_version="2024.1")


class TestExportCSV:
    def test_header(self, result):
        assert to_csv(result).split("\n")[0] == CSV_HEADER

    def test_rows_parse(self, result):
        rows = list(csv.reader(io.StringIO(to_csv(result))))
        assert len(rows) == 4
        assert rows[1] == ["101", 'Leather "Rifle" Sling, Brown', "critical", "ETSY-PI-001",
                           "Weapons are prohibited", "title", "Remove it"]
        assert rows[2][4] == 'Title is "short", add detail'
        assert rows[2][5] == ""
        assert rows[3][5] == "tags,extra"

    def test_quoting(self, result):
        lines = to_csv(result).split("\n")
        assert lines[1].startswith('101,"Leather ""Rifle"" Sling, Brown",critical,')
        assert lines[1].endswith(',title,"Remove it"')
        assert ',"tags,extra",' in lines[3]

    def test_empty(self):
        empty = ScanResult.build(Platform.AMAZON, 2, [], timestamp=TIMESTAMP)
        assert to_csv(empty) == CSV_HEADER


class TestExportJSON:
    def test_document_shape(self, result):
        data = json.loads(to_json(result, exported_at="2024-03-02T00:00:00.000Z"))
        assert data["platform"] == "etsy"
        assert data["violationCount"] == 3
        assert data["exportedAt"] == "2024-03-02T00:00:00.000Z"
        assert data["summary"]["score"] == 28
        assert data["summary"]["grade"] == "F"
        assert data["breakdown"]["byCategory"] == {"PI": 1, "TD": 1, "PC": 1}
        assert data["violations"][0]["violations"][0]["matchedValue"] == "rifle"

    def test_round_trip(self, result):
        assert from_json(to_json(result)) == result

    def test_compact(self, result):
        assert "\n" not in to_json(result, pretty=False)

    def test_invalid_json(self):
        with pytest.raises(ExportError):
            from_json("{not json")

    def test_not_an_object(self):
        with pytest.raises(ExportError):
            from_json("[1, 2]")

    def test_missing_fields(self):
        with pytest.raises(ExportError):
            from_json('{"platform": "etsy"}')

    def test_unknown_platform(self):
        with pytest.raises(ExportError):
            from_json('{"platform": "ebay", "totalListings": 1}')


class TestReports:
    def test_text_report(self, result):
        text = format_report(result)
        assert "📋 Compliance Scan: ETSY" in text
        assert "Score: 28/100 | Grade: F" in text
        assert "ETSY-PI-001" in text
        assert text.strip().endswith("to avoid account suspension.")

    def test_text_report_limit(self, result):
        text = format_report(result, limit=1)
        assert "... and 1 more listing(s) with issues" in text

    def test_markdown(self, result):
        md = to_markdown(result)
        assert md.startswith("# Compliance Report: Etsy")
        assert "| PI | 1 |" in md
        assert "Only 2 tags" in md


class TestExportScan:
    def test_formats(self, result):
        assert set(EXPORTERS) == {"json", "csv", "txt", "md"}
        assert export_scan(result, "csv") == to_csv(result)
        assert export_scan(result, "MD").startswith("# Compliance Report")

    def test_unknown_format(self, result):
        assert export_scan(result, "xml") is None
