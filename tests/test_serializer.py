"""Tests for serializer.py."""

import json

import pytest

from i18n_scout.pipeline import ScanReport
from i18n_scout.resolution.platform_resolver import REASON_NOT_FOUND, Resolution
from i18n_scout.serializer import report_to_dict, report_to_json, report_to_text


@pytest.fixture
def report():
    return ScanReport(
        reachable_files=["/app/index.js", "/app/B.ios.js", "/app/broken.js"],
        error_files=["/app/broken.js"],
        strings_found=["Hello", "Grüße", "Hello"],
        strings_by_file={"/app/index.js": ["Hello", "Grüße"], "/app/B.ios.js": ["Hello"]},
        failures={"/app/broken.js": "parse failed"},
        unresolved=[Resolution("./gone", "/app/index.js", "js", reason=REASON_NOT_FOUND)],
    )


class TestReportToDict:
    def test_relative_paths(self, report):
        data = report_to_dict(report, "/app")
        assert data["reachable_files"] == ["index.js", "B.ios.js", "broken.js"]
        assert data["error_files"] == [{"path": "broken.js", "reason": "parse failed"}]
        assert data["unresolved"] == [
            {"specifier": "./gone", "from_file": "index.js", "reason": REASON_NOT_FOUND},
        ]

    def test_paths_outside_base_stay_absolute(self, report):
        data = report_to_dict(report, "/elsewhere")
        assert data["reachable_files"][0] == "/app/index.js"

    def test_no_base(self, report):
        assert report_to_dict(report)["reachable_files"] == report.reachable_files

    def test_counts_and_strings(self, report):
        data = report_to_dict(report, "/app")
        assert data["reachable_file_count"] == 3
        assert data["strings_found"] == ["Hello", "Grüße", "Hello"]
        assert data["unique_strings"] == ["Grüße", "Hello"]


class TestReportToJson:
    def test_valid_json_keeps_unicode(self, report):
        rendered = report_to_json(report, "/app")
        assert "Grüße" in rendered
        assert json.loads(rendered)["strings_by_file"]["B.ios.js"] == ["Hello"]


class TestReportToText:
    def test_summary_lines(self, report):
        text = report_to_text(report, "/app")
        lines = text.splitlines()
        assert lines[0] == "Found 3 files"
        assert "1 files failed to parse" in lines
        assert "  broken.js (parse failed)" in lines
        assert "1 imports could not be resolved" in lines
        assert "  ./gone <- index.js" in lines
        assert "Found 3 strings out of which 2 are unique" in lines
        assert '  "Hello"' in lines

    def test_hide_strings(self, report):
        text = report_to_text(report, "/app", show_strings=False)
        assert '"Hello"' not in text
        assert text.splitlines()[-1] == "Found 3 strings out of which 2 are unique"

    def test_no_unresolved_section_when_empty(self):
        empty = ScanReport(reachable_files=[], error_files=[], strings_found=[])
        text = report_to_text(empty)
        assert "could not be resolved" not in text
        assert text.splitlines() == [
            "Found 0 files",
            "0 files failed to parse",
            "Found 0 strings out of which 0 are unique",
        ]
