"""Configuration schema — dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional

Severity = Literal["low", "medium", "high"]
PatternSource = Literal["builtin", "custom", "denylist"]
RedactionMode = Literal["typed", "generic", "hash"]

SEVERITIES: tuple[str, ...] = ("low", "medium", "high")

SEVERITY_ORDER: dict[str, int] = {
    "low": 0,
    "medium": 1,
    "high": 2,
}


def severity_at_or_above(finding_sev: str, threshold: str) -> bool:
    """Return True if *finding_sev* is at or above *threshold*."""
    return SEVERITY_ORDER.get(finding_sev, 0) >= SEVERITY_ORDER.get(threshold, 0)


@dataclass
class DetectorConfig:
    aggressive: bool = False  # bypass entropy thresholds, favour recall
    max_file_bytes: int = 10_000_000
    chunk_size: int = 65_536
    chunk_overlap: int = 8_192  # must cover the longest multi-line secret (PEM blocks)
    max_workers: Optional[int] = None  # None = os.cpu_count()


@dataclass
class AllowlistConfig:
    rules: List[Any] = field(default_factory=list)  # str | {type, pattern, reason}


@dataclass
class RedactionConfig:
    enabled: bool = True  # False = drop files with findings instead of rewriting them
    mode: RedactionMode = "typed"


@dataclass
class GuardConfig:
    exclude: Optional[List[str]] = None  # None = built-in high-risk file globs
    allowlist: List[str] = field(default_factory=list)  # path globs passed through unscanned
    fail_on_secrets: bool = False


@dataclass
class OutputConfig:
    format: Literal["terminal", "json"] = "terminal"
    show_summary: bool = True


@dataclass
class SecretGuardConfig:
    version: str = "1.0"
    detector: DetectorConfig = field(default_factory=DetectorConfig)
    allowlist: AllowlistConfig = field(default_factory=AllowlistConfig)
    redaction: RedactionConfig = field(default_factory=RedactionConfig)
    guard: GuardConfig = field(default_factory=GuardConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    custom_patterns: List[Dict[str, Any]] = field(default_factory=list)
    denylist: List[Dict[str, Any]] = field(default_factory=list)
