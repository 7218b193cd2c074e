"""Finding data models."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from typing import Any, Dict, List, Literal, Optional

FindingSource = Literal["internal", "external"]


@dataclass(frozen=True)
class Finding:
    """A single detected candidate secret.

    Immutable: filtering and redaction produce new values or new content,
    never modify a Finding in place.
    """

    type: str  # pattern name, e.g. aws-access-key
    match: str
    file: str
    line_start: int
    line_end: int
    start_column: int
    end_column: int  # column of the last matched character
    start: int = -1  # absolute offsets, end exclusive; -1 when unknown
    end: int = -1
    confidence: float = 0.0
    entropy: float = 0.0
    severity: str = "medium"
    source: FindingSource = "internal"
    description: str = ""
    redaction_label: Optional[str] = None
    suppressed_reason: Optional[str] = None

    @property
    def span_key(self) -> tuple:
        return (self.file, self.start, self.end)

    def suppressed(self, reason: str) -> "Finding":
        return replace(self, suppressed_reason=reason)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ScanStats:
    """Running counters owned by one detector."""

    files_scanned: int = 0
    findings_total: int = 0
    findings_suppressed: int = 0
    scan_time_ms: List[float] = field(default_factory=list)

    @property
    def avg_scan_time_ms(self) -> float:
        if not self.scan_time_ms:
            return 0.0
        return sum(self.scan_time_ms) / len(self.scan_time_ms)

    def merge(self, other: "ScanStats") -> None:
        self.files_scanned += other.files_scanned
        self.findings_total += other.findings_total
        self.findings_suppressed += other.findings_suppressed
        self.scan_time_ms.extend(other.scan_time_ms)

    def copy(self) -> "ScanStats":
        return ScanStats(
            files_scanned=self.files_scanned,
            findings_total=self.findings_total,
            findings_suppressed=self.findings_suppressed,
            scan_time_ms=list(self.scan_time_ms),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "files_scanned": self.files_scanned,
            "findings_total": self.findings_total,
            "findings_suppressed": self.findings_suppressed,
            "avg_scan_time_ms": round(self.avg_scan_time_ms, 2),
        }


@dataclass
class BatchResult:
    """Outcome of scanning one file in a batch."""

    file: str
    findings: List[Finding] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class ScanReport:
    """Complete result of scanning a set of files, as handed to reporters."""

    results: List[BatchResult] = field(default_factory=list)
    stats: ScanStats = field(default_factory=ScanStats)

    @property
    def findings(self) -> List[Finding]:
        return [f for r in self.results for f in r.findings]

    @property
    def errors(self) -> List[BatchResult]:
        return [r for r in self.results if r.error is not None]

    @property
    def total_findings(self) -> int:
        return sum(len(r.findings) for r in self.results)
