"""Scanner — detector engine, entropy scoring, filters, position mapping."""

from secretguard.scanner.engine import SecretDetector, create_detector_from_config
from secretguard.scanner.entropy import (
    EntropyScore,
    classify_entropy,
    is_likely_false_positive,
    looks_like_base64,
    looks_like_hex,
    score_match,
    shannon_entropy,
)
from secretguard.scanner.filters import (
    FilterResult,
    SecretFilters,
    ValidationResult,
    create_filters_from_config,
    validate_allowlist,
    validate_denylist,
)
from secretguard.scanner.positions import LineIndex, Position

__all__ = [
    "EntropyScore",
    "FilterResult",
    "LineIndex",
    "Position",
    "SecretDetector",
    "SecretFilters",
    "ValidationResult",
    "classify_entropy",
    "create_detector_from_config",
    "create_filters_from_config",
    "is_likely_false_positive",
    "looks_like_base64",
    "looks_like_hex",
    "score_match",
    "shannon_entropy",
    "validate_allowlist",
    "validate_denylist",
]
