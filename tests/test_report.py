"""Tests for report files and console rendering."""

import json
from datetime import datetime, timezone

import yaml

from rvtools_analyzer.analysis import analyze, compare
from rvtools_analyzer.report import (
    format_comparison_table,
    format_console_report,
    report_filename,
    write_report,
)

NOW = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


class TestReportFilename:
    def test_analysis_uses_file_stem(self, full_sheets):
        result = analyze(full_sheets, "cluster-a.xlsx", now=NOW)
        assert report_filename(result) == "cluster-a_analysis.json"
        assert report_filename(result, "yaml") == "cluster-a_analysis.yaml"

    def test_comparison_uses_timestamp(self, full_sheets):
        result = compare([("a.xlsx", full_sheets), ("b.xlsx", full_sheets)], now=NOW)
        assert report_filename(result) == "comparison_20240501T120000Z.json"


class TestWriteReport:
    def test_json_report(self, tmp_path, full_sheets):
        result = analyze(full_sheets, "export.xlsx", now=NOW)
        path = write_report(result, tmp_path)
        assert path == tmp_path / "export_analysis.json"
        payload = json.loads(path.read_text())
        assert payload["sourceLabel"] == "export.xlsx"
        assert payload["vmSummary"]["total"] == 2
        assert payload["storageSummary"]["utilizationPercent"] == 50.0

    def test_yaml_report_creates_directory(self, tmp_path, full_sheets):
        result = analyze(full_sheets, "export.xlsx", now=NOW)
        path = write_report(result, tmp_path / "out" / "reports", fmt="yaml")
        payload = yaml.safe_load(path.read_text())
        assert payload["hostSummary"]["totalCores"] == 64

    def test_comparison_report_lists_files(self, tmp_path, full_sheets):
        result = compare([("a.xlsx", full_sheets), ("b.xlsx", {"vInfo": []})], now=NOW)
        payload = json.loads(write_report(result, tmp_path).read_text())
        assert payload["files"] == ["a.xlsx", "b.xlsx"]
        assert len(payload["analyses"]) == 2
        assert "hostSummary" not in payload["analyses"][1]


class TestConsoleReport:
    def test_sections(self, full_sheets):
        text = format_console_report(analyze(full_sheets, "export.xlsx", now=NOW))
        assert "RVTools Analysis Report: export.xlsx" in text
        assert "Total VMs: 2" in text
        assert "Powered On: 1 (50.0%)" in text
        assert "Total vCPUs: 12" in text
        assert "Total Memory: 24.0 GB" in text
        assert "Connected: 1" in text
        assert "Total Capacity: 8.0 TB" in text
        assert "Utilization: 50.0%" in text

    def test_absent_sections_omitted(self, vinfo_rows):
        text = format_console_report(analyze({"vInfo": vinfo_rows}, "vms.xlsx", now=NOW))
        assert "VIRTUAL MACHINES" in text
        assert "HOSTS" not in text
        assert "STORAGE" not in text

    def test_zero_vms(self):
        text = format_console_report(analyze({"vInfo": []}, "empty.xlsx", now=NOW))
        assert "Powered On: 0 (0.0%)" in text


def test_comparison_table(full_sheets, vinfo_rows):
    result = compare([("prod.xlsx", full_sheets), ("vms-only.xlsx", {"vInfo": vinfo_rows})], now=NOW)
    lines = format_comparison_table(result).splitlines()
    assert lines[0].split() == ["File", "VMs", "Hosts", "Storage", "(TB)"]
    assert lines[2].split() == ["prod.xlsx", "2", "2", "8.0"]
    assert lines[3].split() == ["vms-only.xlsx", "2", "0", "0"]
