"""JSON reporter for CI pipelines and tooling."""

from __future__ import annotations

import json
from typing import Any, Dict, List

from secretguard.findings.models import ScanReport
from secretguard.findings.redactor import mask


def to_dict(report: ScanReport, *, full_redaction: bool = True) -> Dict[str, Any]:
    """Convert a ScanReport to a JSON-serialisable dict. Values are always masked."""
    findings_list: List[Dict[str, Any]] = []
    for f in report.findings:
        findings_list.append({
            "rule": f.type,
            "severity": f.severity,
            "file": f.file,
            "line": f.line_start,
            "column": f.start_column,
            "end_line": f.line_end,
            "end_column": f.end_column,
            "value": mask(f.match, full=full_redaction),
            "confidence": f.confidence,
            "entropy": f.entropy,
            "description": f.description,
            "source": f.source,
        })

    return {
        "version": "1.0",
        "scanned_files": report.stats.files_scanned,
        "total_findings": report.total_findings,
        "suppressed": report.stats.findings_suppressed,
        "findings": findings_list,
        "errors": [{"file": r.file, "error": r.error} for r in report.errors],
        "avg_scan_time_ms": round(report.stats.avg_scan_time_ms, 2),
    }


def render(report: ScanReport, *, full_redaction: bool = True) -> str:
    """Return formatted JSON string."""
    return json.dumps(to_dict(report, full_redaction=full_redaction), indent=2)
