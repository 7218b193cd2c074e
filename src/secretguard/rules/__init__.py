"""Detection patterns: model, built-in catalog and registry."""

from secretguard.rules.models import Pattern, pattern_from_spec
from secretguard.rules.registry import PatternRegistry, build_registry, load_custom_patterns

__all__ = [
    "Pattern",
    "PatternRegistry",
    "build_registry",
    "load_custom_patterns",
    "pattern_from_spec",
]
