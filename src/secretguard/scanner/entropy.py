"""Shannon entropy, encoding heuristics, confidence scoring and placeholder detection.

Pure functions only; nothing here touches detector state.
"""

from __future__ import annotations

import math
from collections import Counter
from dataclasses import dataclass
from typing import Literal, Optional

import re2

#: Entropy (bits/char) at which confidence saturates at 1.0.
ENTROPY_SATURATION = 4.5
ENCODING_BOOST = 0.15
BELOW_THRESHOLD_PENALTY = 0.3

#: Soft placeholder words only count for short values. Longer values that
#: merely contain "test" or "demo" are still reported.
SOFT_PLACEHOLDER_MAX_LENGTH = 16

MIN_ENCODED_LENGTH = 16

_BASE64_RE = re2.compile(r"^[A-Za-z0-9+/]+={0,2}$")
_HEX_CHARS = frozenset("0123456789abcdefABCDEF")
_NON_ALNUM_RE = re2.compile(r"[^a-z0-9]")

# Matched exactly against the normalised value, at any length.
PLACEHOLDER_WORDS = frozenset({
    "example",
    "placeholder",
    "yourkeyhere",
    "yourapikey",
    "yoursecrethere",
    "xxx",
    "yyy",
    "zzz",
    "12345",
    "abcdef",
    "qwerty",
    "changeme",
    "password",
    "redacted",
    "todo",
})

# Matched as substrings, only when the normalised value is short.
SOFT_PLACEHOLDER_WORDS = (
    "insert",
    "replace",
    "test",
    "sample",
    "demo",
    "fake",
    "dummy",
    "mock",
    "secret",
)

SEQUENTIAL_RUNS = (
    "abcdefgh",
    "bcdefghi",
    "12345678",
    "23456789",
    "01234567",
    "87654321",
    "98765432",
    "qwertyui",
    "asdfghjk",
    "poiuytre",
)

EntropyClass = Literal["low", "medium", "high"]


@dataclass(frozen=True)
class EntropyScore:
    entropy: float
    confidence: float
    meets_threshold: bool


def shannon_entropy(s: str) -> float:
    """Compute Shannon entropy (bits per character) of string *s*.

    H = -Σ p(c) · log₂(p(c))  over unique characters c.
    """
    if not s:
        return 0.0
    counts = Counter(s)
    total = len(s)
    return -sum((c / total) * math.log2(c / total) for c in counts.values())


def looks_like_base64(s: str) -> bool:
    """Return True if *s* plausibly is Base64-encoded data.

    Padding is only allowed as one run of at most two ``=`` at the very end,
    and the value must not be built from a tiny alphabet (e.g. all ``A``).
    """
    if len(s) < MIN_ENCODED_LENGTH:
        return False
    if _BASE64_RE.match(s) is None:
        return False
    body = s.rstrip("=")
    if not body:
        return False
    variety = len(set(body)) / min(len(body), 64)
    return variety > 0.2


def looks_like_hex(s: str) -> bool:
    """Return True if at least 90% of *s* is hex digits and it is long enough."""
    if len(s) < MIN_ENCODED_LENGTH:
        return False
    hex_count = sum(1 for ch in s if ch in _HEX_CHARS)
    return hex_count / len(s) > 0.9


def score_match(s: str, min_entropy: Optional[float] = None) -> EntropyScore:
    """Score a matched value.

    Confidence grows with entropy, saturating at ``ENTROPY_SATURATION`` bits,
    gets a flat boost for Base64- or hex-looking values and is cut sharply
    when the value falls below the pattern's *min_entropy*.
    """
    entropy = shannon_entropy(s)
    confidence = min(entropy / ENTROPY_SATURATION, 1.0)
    if looks_like_base64(s) or looks_like_hex(s):
        confidence += ENCODING_BOOST

    meets_threshold = min_entropy is None or entropy >= min_entropy
    if not meets_threshold:
        confidence *= BELOW_THRESHOLD_PENALTY

    confidence = max(0.0, min(confidence, 1.0))
    return EntropyScore(
        entropy=round(entropy, 2),
        confidence=round(confidence, 2),
        meets_threshold=meets_threshold,
    )


def _normalise(s: str) -> str:
    return _NON_ALNUM_RE.sub("", s.lower())


def is_likely_false_positive(
    s: Optional[str],
    soft_max_length: int = SOFT_PLACEHOLDER_MAX_LENGTH,
) -> bool:
    """Return True if *s* looks like a placeholder rather than a real secret.

    Pass ``soft_max_length=0`` to disable the soft placeholder check.
    """
    if not s:
        return True

    normalised = _normalise(s)
    if normalised in PLACEHOLDER_WORDS:
        return True

    if 0 < len(normalised) <= soft_max_length:
        if any(word in normalised for word in SOFT_PLACEHOLDER_WORDS):
            return True

    if len(set(s)) == 1:
        return True

    lowered = s.lower()
    return any(run in lowered for run in SEQUENTIAL_RUNS)


def classify_entropy(bits: float) -> EntropyClass:
    if bits < 3.0:
        return "low"
    if bits < 4.5:
        return "medium"
    return "high"
