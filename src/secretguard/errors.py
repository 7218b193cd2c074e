"""Exception hierarchy — every error raised by secretguard derives from SecretGuardError.

Messages never carry matched secret values; only rule names, paths and counts.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional


class SecretGuardError(Exception):
    """Base class for all secretguard errors."""


class PatternError(SecretGuardError):
    """Raised when a detection pattern (built-in, custom or denylist) is invalid.

    Always raised at construction time, never while scanning.
    """

    def __init__(self, message: str, pattern_name: Optional[str] = None) -> None:
        super().__init__(message)
        self.pattern_name = pattern_name


class ConfigError(SecretGuardError):
    """Raised when config is malformed or unreadable."""


class FileTooLargeError(SecretGuardError):
    """Raised when content exceeds the detector's ``max_file_bytes`` limit."""

    def __init__(self, size_bytes: int, max_bytes: int, file_path: str = "<text>") -> None:
        super().__init__(
            f"File too large to scan: {file_path} is {size_bytes} bytes (max: {max_bytes})"
        )
        self.size_bytes = size_bytes
        self.max_bytes = max_bytes
        self.file_path = file_path


class ScanCancelledError(SecretGuardError):
    """Raised when a batch scan is cancelled between files.

    ``completed`` holds the results of the files finished before cancellation.
    """

    def __init__(self, completed: List[Any]) -> None:
        super().__init__(f"Batch scan cancelled after {len(completed)} file(s)")
        self.completed = completed


class SecretsDetectedError(SecretGuardError):
    """Raised by the guard when secrets are found and ``fail_on_secrets`` is set.

    ``findings`` holds sanitised ``{file, line, rule}`` records only.
    """

    def __init__(
        self,
        secrets_count: int,
        findings: Optional[List[Dict[str, Any]]] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(f"Secrets detected: {secrets_count} secret(s) found")
        self.secrets_count = secrets_count
        self.findings = findings or []
        self.details = details or {}
