"""Built-in patterns — aggregate all categories.

Order matters: when two patterns report the same span with the same
confidence the one registered first wins, so prefixed token formats come
before context-keyed and generic assignment patterns.
"""

from secretguard.rules.builtin.cloud import ALL_CLOUD_PATTERNS, CONTEXT_CLOUD_PATTERNS
from secretguard.rules.builtin.credentials import ALL_CREDENTIAL_PATTERNS
from secretguard.rules.builtin.keys import ALL_KEY_PATTERNS
from secretguard.rules.builtin.services import ALL_SERVICE_PATTERNS
from secretguard.rules.builtin.tokens import ALL_TOKEN_PATTERNS
from secretguard.rules.models import Pattern

ALL_BUILTIN_PATTERNS: list[Pattern] = [
    *ALL_CLOUD_PATTERNS,
    *ALL_TOKEN_PATTERNS,
    *ALL_SERVICE_PATTERNS,
    *ALL_KEY_PATTERNS,
    *CONTEXT_CLOUD_PATTERNS,
    *ALL_CREDENTIAL_PATTERNS,
]

__all__ = ["ALL_BUILTIN_PATTERNS"]
