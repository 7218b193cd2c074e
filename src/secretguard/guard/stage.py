"""Secrets guard — the pipeline step that sits between file discovery and output.

For each ``{path, content, ...}`` record:

  1. High-risk files (``.env``, private keys, credential stores, ...) are
     dropped entirely, unscanned.
  2. Path-allowlisted files pass through unscanned.
  3. Everything else is scanned as one batch. Files with findings are
     rewritten with redaction markers, or dropped when inline redaction is
     off. Files that cannot be scanned are dropped.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from pathspec import PathSpec

from secretguard.config.schema import RedactionMode, SecretGuardConfig
from secretguard.errors import SecretsDetectedError
from secretguard.findings.models import Finding
from secretguard.findings.redactor import SecretRedactor
from secretguard.scanner.engine import SecretDetector, create_detector_from_config
from secretguard.utils.logger import get_logger

logger = get_logger(__name__)

SECRET_FILE_PATTERNS: List[str] = [
    # Environment files
    ".env",
    ".env.*",
    # Private keys
    "*.pem",
    "*.key",
    "*.p12",
    "*.pfx",
    "*.p8",
    "*.asc",
    "id_rsa",
    "id_dsa",
    "id_ecdsa",
    "id_ed25519",
    # Credentials
    "credentials.json",
    "credentials.yml",
    "credentials.yaml",
    "secrets.json",
    "secrets.yml",
    "secrets.yaml",
    "secrets.*.json",
    "secrets.*.yml",
    "secrets.*.yaml",
    "auth.json",
    "*-credentials.json",
    "*-secrets.json",
    # Service accounts
    "service-account-*.json",
    "firebase-adminsdk-*.json",
    "google-credentials.json",
    "gcloud-service-key.json",
    # Keystores and signing
    "*.jks",
    "*.keystore",
    "*.keystore.properties",
    "*.mobileprovision",
    "gradle.properties",
    # Package registries
    ".npmrc",
    ".pypirc",
    ".gem/credentials",
    # Cloud / CLI config
    ".aws/credentials",
    ".kube/config",
    ".config/gcloud/**",
    ".docker/config.json",
    # Terraform state
    "*.tfstate",
    "*.tfstate.backup",
    # Misc
    "*.ovpn",
    "*.htpasswd",
]


def _normalise_path(path: str) -> str:
    path = path.replace("\\", "/")
    while path.startswith("./"):
        path = path[2:]
    return path


@dataclass
class GuardResult:
    """Outcome of one guard pass. ``findings`` may hold raw matches; never log them."""

    files: List[Dict[str, Any]] = field(default_factory=list)
    excluded: List[str] = field(default_factory=list)
    findings: List[Finding] = field(default_factory=list)
    stats: Dict[str, int] = field(default_factory=dict)

    def summary(self) -> Dict[str, Any]:
        """Sanitised summary: locations and rule names, no matched values."""
        return {
            **self.stats,
            "findings": [
                {"file": f.file, "line": f.line_start, "rule": f.type} for f in self.findings
            ],
        }


class SecretsGuard:
    """Exclude, scan and redact a batch of file records."""

    def __init__(
        self,
        detector: Optional[SecretDetector] = None,
        exclude_globs: Optional[Sequence[str]] = None,
        path_allowlist: Optional[Sequence[str]] = None,
        redact_inline: bool = True,
        redaction_mode: RedactionMode = "typed",
        fail_on_secrets: bool = False,
        redactor: Optional[SecretRedactor] = None,
    ) -> None:
        self.detector = detector or SecretDetector()
        self.redactor = redactor or SecretRedactor()
        self.exclude_globs = list(SECRET_FILE_PATTERNS if exclude_globs is None else exclude_globs)
        self.path_allowlist = list(path_allowlist or [])
        self.redact_inline = redact_inline
        self.redaction_mode = redaction_mode
        self.fail_on_secrets = fail_on_secrets

        self._exclude_spec = PathSpec.from_lines("gitwildmatch", self.exclude_globs)
        self._allow_spec = PathSpec.from_lines("gitwildmatch", self.path_allowlist)

    @classmethod
    def from_config(cls, config: SecretGuardConfig) -> "SecretsGuard":
        return cls(
            detector=create_detector_from_config(config),
            exclude_globs=config.guard.exclude,
            path_allowlist=config.guard.allowlist,
            redact_inline=config.redaction.enabled,
            redaction_mode=config.redaction.mode,
            fail_on_secrets=config.guard.fail_on_secrets,
        )

    def should_exclude(self, path: str) -> bool:
        """True for high-risk files that must never reach the output."""
        return bool(self.exclude_globs) and self._exclude_spec.match_file(_normalise_path(path))

    def is_path_allowlisted(self, path: str) -> bool:
        return bool(self.path_allowlist) and self._allow_spec.match_file(_normalise_path(path))

    def process(self, files: Iterable[Mapping[str, Any]]) -> GuardResult:
        """Run the guard over *files* and return the records safe to emit.

        Raises SecretsDetectedError when ``fail_on_secrets`` is set and any
        finding remains after the allowlist.
        """
        records = [dict(f) for f in files]
        result = GuardResult()
        secrets_redacted = 0

        kept: List[Optional[Dict[str, Any]]] = [None] * len(records)
        to_scan: List[int] = []
        for i, record in enumerate(records):
            path = str(record.get("path", ""))
            if self.should_exclude(path):
                result.excluded.append(path)
                logger.info("high-risk file excluded", file=path)
                continue
            if self.is_path_allowlisted(path) or record.get("is_binary") or not record.get("content"):
                kept[i] = record
                continue
            to_scan.append(i)

        batch = self.detector.scan_batch(
            {"path": records[i].get("path", ""), "content": records[i]["content"]} for i in to_scan
        )
        for i, scanned in zip(to_scan, batch):
            record = records[i]
            if scanned.error is not None:
                result.excluded.append(scanned.file)
                continue
            if not scanned.findings:
                kept[i] = record
                continue
            result.findings.extend(scanned.findings)
            if not self.redact_inline:
                result.excluded.append(scanned.file)
                continue
            redacted = self.redactor.redact(record["content"], scanned.findings, self.redaction_mode)
            secrets_redacted += redacted.count
            record["content"] = redacted.content
            record["secrets_redacted"] = True
            record["secrets_count"] = len(scanned.findings)
            kept[i] = record

        result.files = [r for r in kept if r is not None]
        result.stats = {
            "files_excluded": len(result.excluded),
            "secrets_found": len(result.findings),
            "secrets_redacted": secrets_redacted,
            "files_scanned": len(to_scan),
        }
        logger.info("secrets guard finished", **result.stats)

        if self.fail_on_secrets and result.findings:
            summary = result.summary()
            raise SecretsDetectedError(
                len(result.findings),
                summary["findings"],
                {
                    "files_excluded": result.stats["files_excluded"],
                    "secrets_redacted": secrets_redacted,
                },
            )
        return result
