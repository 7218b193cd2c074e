"""secretguard — detect, score, filter and redact secrets in text before it leaves the machine."""

__version__ = "0.1.0"

from secretguard.errors import (  # noqa: E402
    ConfigError,
    FileTooLargeError,
    PatternError,
    ScanCancelledError,
    SecretGuardError,
    SecretsDetectedError,
)
from secretguard.findings import (  # noqa: E402
    Finding,
    SecretRedactor,
    normalize_gitleaks_finding,
)
from secretguard.scanner import (  # noqa: E402
    SecretDetector,
    SecretFilters,
    create_detector_from_config,
    create_filters_from_config,
    validate_allowlist,
    validate_denylist,
)

__all__ = [
    "ConfigError",
    "FileTooLargeError",
    "Finding",
    "PatternError",
    "ScanCancelledError",
    "SecretDetector",
    "SecretFilters",
    "SecretGuardError",
    "SecretRedactor",
    "SecretsDetectedError",
    "__version__",
    "create_detector_from_config",
    "create_filters_from_config",
    "normalize_gitleaks_finding",
    "validate_allowlist",
    "validate_denylist",
]
