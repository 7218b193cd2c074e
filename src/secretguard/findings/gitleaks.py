"""Adapter for gitleaks JSON report entries."""

from __future__ import annotations

from typing import Any, Mapping

from secretguard.findings.models import Finding


def _int(value: Any, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def normalize_gitleaks_finding(raw: Mapping[str, Any]) -> Finding:
    """Convert one gitleaks result into a Finding.

    Missing fields get fixed defaults. External findings are trusted as-is:
    confidence 1.0, severity high.
    """
    line_start = _int(raw.get("StartLine"))
    return Finding(
        type=raw.get("RuleID") or "unknown",
        match=raw.get("Match") or "",
        file=raw.get("File") or "<unknown>",
        line_start=line_start,
        line_end=_int(raw.get("EndLine"), line_start),
        start_column=_int(raw.get("StartColumn")),
        end_column=_int(raw.get("EndColumn")),
        start=_int(raw.get("Start"), -1),
        end=_int(raw.get("End"), -1),
        confidence=1.0,
        entropy=float(raw.get("Entropy") or 0.0),
        severity="high",
        source="external",
        description=raw.get("Description") or "",
    )
