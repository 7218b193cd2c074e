"""Finding models, deduplication, redaction and external-format adapters."""

from secretguard.findings.aggregator import deduplicate, remove_overlapping
from secretguard.findings.gitleaks import normalize_gitleaks_finding
from secretguard.findings.models import BatchResult, Finding, ScanReport, ScanStats
from secretguard.findings.redactor import RedactionResult, SecretRedactor, mask

__all__ = [
    "BatchResult",
    "Finding",
    "RedactionResult",
    "ScanReport",
    "ScanStats",
    "SecretRedactor",
    "deduplicate",
    "mask",
    "normalize_gitleaks_finding",
    "remove_overlapping",
]
