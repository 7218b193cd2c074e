"""Secrets guard — exclude high-risk files, scan and redact the rest."""

from secretguard.errors import SecretsDetectedError
from secretguard.guard.stage import SECRET_FILE_PATTERNS, GuardResult, SecretsGuard

__all__ = ["SECRET_FILE_PATTERNS", "GuardResult", "SecretsDetectedError", "SecretsGuard"]
