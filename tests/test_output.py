"""Tests for the JSON and terminal reporters."""

import io
import json

from rich.console import Console

from secretguard.findings.models import BatchResult, Finding, ScanReport, ScanStats
from secretguard.output import json_report, terminal


def _make_report(findings=None, errors=None) -> ScanReport:
    """Build a ScanReport with sample data."""
    if findings is None:
        findings = [
            Finding(
                type="aws-access-key",
                match="AKIAZ7QK3LM9PX2RTV4B",
                file="config/deploy.py",
                line_start=42,
                line_end=42,
                start_column=9,
                end_column=28,
                confidence=0.87,
                entropy=3.92,
                severity="high",
                description="AWS Access Key ID",
            ),
        ]
    results = [BatchResult(file="config/deploy.py", findings=findings)]
    for path, message in errors or []:
        results.append(BatchResult(file=path, error=message))
    stats = ScanStats(files_scanned=5, findings_total=len(findings), findings_suppressed=2,
                      scan_time_ms=[10.0, 20.0])
    return ScanReport(results=results, stats=stats)


def _console() -> Console:
    return Console(file=io.StringIO(), width=200, color_system=None)


class TestJsonReport:
    def test_valid_json(self):
        data = json.loads(json_report.render(_make_report()))
        assert data["version"] == "1.0"
        assert data["total_findings"] == 1
        assert data["scanned_files"] == 5
        assert data["suppressed"] == 2
        assert data["avg_scan_time_ms"] == 15.0

    def test_finding_fields(self):
        finding = json_report.to_dict(_make_report())["findings"][0]
        assert finding["rule"] == "aws-access-key"
        assert finding["severity"] == "high"
        assert (finding["line"], finding["column"]) == (42, 9)
        assert (finding["end_line"], finding["end_column"]) == (42, 28)
        assert finding["confidence"] == 0.87
        assert finding["source"] == "internal"

    def test_values_masked(self):
        output = json_report.render(_make_report())
        assert "AKIAZ7QK3LM9PX2RTV4B" not in output
        assert json.loads(output)["findings"][0]["value"] == "[REDACTED]"

    def test_partial_reveal_when_requested(self):
        data = json_report.to_dict(_make_report(), full_redaction=False)
        assert data["findings"][0]["value"] == "AKIA...4B"

    def test_errors_listed(self):
        data = json_report.to_dict(_make_report(errors=[("big.bin", "File too large to scan")]))
        assert data["errors"] == [{"file": "big.bin", "error": "File too large to scan"}]

    def test_empty_report(self):
        data = json_report.to_dict(ScanReport())
        assert data["findings"] == []
        assert data["total_findings"] == 0


class TestTerminalReport:
    def test_findings_table(self):
        console = _console()
        terminal.render(_make_report(), console=console)
        out = console.file.getvalue()
        assert "SecretGuard Findings" in out
        assert "aws-access-key" in out
        assert "config/deploy.py" in out
        assert "42:9" in out
        assert "AKIA...4B" in out
        assert "AKIAZ7QK3LM9PX2RTV4B" not in out
        assert "1 potential secret(s) detected" in out

    def test_full_redaction(self):
        console = _console()
        terminal.render(_make_report(), console=console, full_redaction=True)
        assert "AKIA...4B" not in console.file.getvalue()

    def test_clean_report(self):
        console = _console()
        terminal.render(_make_report(findings=[]), console=console)
        out = console.file.getvalue()
        assert "No secrets detected" in out
        assert "Files scanned:" in out

    def test_summary_can_be_hidden(self):
        console = _console()
        terminal.render(_make_report(findings=[]), console=console, show_summary=False)
        assert "Files scanned:" not in console.file.getvalue()

    def test_errors_printed(self):
        console = _console()
        terminal.render(_make_report(findings=[], errors=[("big.bin", "too large")]), console=console)
        assert "big.bin: too large" in console.file.getvalue()
