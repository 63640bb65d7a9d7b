"""Tests for the command-line interface."""
import json
import logging

import pytest

from conftest import BASE_AMAZON, CLEAN_ETSY, TIMESTAMP, flagged, violation
from listing_compliance.cli import log_event, main
from listing_compliance.config import Config
from listing_compliance.export import to_json
from listing_compliance.models import Platform, ScanResult


@pytest.fixture
def etsy_file(tmp_path):
    risky = {**CLEAN_ETSY, "listing_id": 2, "title": "Handmade rifle sling for hunters", "quantity": 0}
    path = tmp_path / "etsy.json"
    path.write_text(json.dumps({"listings": [CLEAN_ETSY, risky]}))
    return str(path)


def scan_file(tmp_path, name, total, flagged_count):
    sets = [flagged(i, violation("ETSY-TD-002", "info")) for i in range(flagged_count)]
    result = ScanResult.build(Platform.ETSY, total, sets, timestamp=TIMESTAMP)
    path = tmp_path / name
    path.write_text(to_json(result))
    return str(path)


class TestScanCommand:
    def test_json_output(self, etsy_file, capsys):
        main(["scan", "--file", etsy_file, "--platform", "etsy", "--format", "json"])
        data = json.loads(capsys.readouterr().out)
        assert data["totalListings"] == 2
        assert [s["listingId"] for s in data["violations"]] == ["2"]
        assert data["summary"]["healthyListings"] == 1

    def test_severity_filter(self, etsy_file, capsys):
        main(["scan", "--file", etsy_file, "--platform", "etsy", "--format", "json",
              "--severity", "critical"])
        data = json.loads(capsys.readouterr().out)
        assert data["warningCount"] == 0
        assert data["infoCount"] == 0
        assert data["criticalCount"] >= 1

    def test_text_report_to_file(self, etsy_file, tmp_path, capsys):
        out = tmp_path / "report.txt"
        main(["scan", "--file", etsy_file, "--platform", "etsy", "--output", str(out)])
        assert "💾 Saved to" in capsys.readouterr().out
        assert "ETSY-PI-001" in out.read_text()

    def test_csv_category(self, tmp_path, capsys):
        path = tmp_path / "amazon.json"
        path.write_text(json.dumps([BASE_AMAZON]))
        main(["scan", "--file", str(path), "--platform", "amazon", "--format", "csv",
              "--category", "TR"])
        lines = capsys.readouterr().out.strip().split("\n")
        assert len(lines) == 3
        assert "AMZN-TR-008" in lines[1]

    def test_bad_input_exits(self, tmp_path, capsys):
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(SystemExit) as exc:
            main(["scan", "--file", str(path), "--platform", "etsy"])
        assert exc.value.code == 1
        assert "❌" in capsys.readouterr().out

    def test_platform_mismatch_exits(self, tmp_path, capsys):
        path = tmp_path / "mixed.json"
        path.write_text(json.dumps([BASE_AMAZON]))
        with pytest.raises(SystemExit):
            main(["scan", "--file", str(path), "--platform", "etsy"])
        assert "Platform mismatch" in capsys.readouterr().out


class TestOtherCommands:
    def test_report_markdown(self, tmp_path, capsys):
        path = scan_file(tmp_path, "scan.json", 10, 3)
        main(["report", "--file", path, "--format", "md"])
        assert capsys.readouterr().out.startswith("# Compliance Report: Etsy")

    def test_compare(self, tmp_path, capsys):
        previous = scan_file(tmp_path, "old.json", 10, 3)
        current = scan_file(tmp_path, "new.json", 20, 3)
        main(["compare", "--previous", previous, "--current", current])
        assert "70 → 85 (+15)" in capsys.readouterr().out

    def test_compare_json(self, tmp_path, capsys):
        previous = scan_file(tmp_path, "old.json", 10, 3)
        current = scan_file(tmp_path, "new.json", 20, 3)
        main(["compare", "--previous", previous, "--current", current, "--json"])
        data = json.loads(capsys.readouterr().out)
        assert data == {
            "previousScore": 70, "currentScore": 85, "scoreChange": 15,
            "violationChange": 0, "criticalChange": 0, "warningChange": 0, "improved": True,
        }

    def test_rules(self, capsys):
        main(["rules", "--platform", "amazon"])
        out = capsys.readouterr().out
        assert "AMAZON (60 rules" in out
        assert "AMZN-TR-010" in out
        assert "ETSY-PI-001" not in out

    def test_no_command(self):
        with pytest.raises(SystemExit) as exc:
            main([])
        assert exc.value.code == 1

    def test_bad_environment_exits(self, monkeypatch, capsys):
        monkeypatch.setenv("MAX_LISTINGS", "lots")
        monkeypatch.setattr("listing_compliance.cli.config", Config())
        with pytest.raises(SystemExit) as exc:
            main(["rules"])
        assert exc.value.code == 1
        assert "❌ MAX_LISTINGS must be an integer" in capsys.readouterr().out


class TestLogEvent:
    def test_structured_line(self, caplog):
        logger = logging.getLogger("listing_compliance.test")
        with caplog.at_level(logging.INFO, logger="listing_compliance.test"):
            log_event(logger, logging.INFO, "scan_started", platform="etsy", listings=2)
        assert json.loads(caplog.records[0].getMessage()) == {
            "event": "scan_started", "listings": 2, "platform": "etsy",
        }
