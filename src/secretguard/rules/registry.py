"""Pattern registry — merges built-in and custom patterns, rejects bad ones up front."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence

import yaml

from secretguard.config.schema import PatternSource
from secretguard.errors import PatternError
from secretguard.rules.models import Pattern, pattern_from_spec
from secretguard.utils.logger import get_logger

logger = get_logger(__name__)


class PatternRegistry:
    """Central store for all detection patterns.

    Every pattern is compiled on registration, so an invalid expression fails
    when the registry is built rather than in the middle of a scan.
    """

    def __init__(self, include_builtin: bool = True) -> None:
        self._patterns: Dict[str, Pattern] = {}
        if include_builtin:
            from secretguard.rules.builtin import ALL_BUILTIN_PATTERNS

            self.register_many(ALL_BUILTIN_PATTERNS)

    # ---- registration ----

    def register(self, pattern: Pattern) -> None:
        if pattern.name in self._patterns:
            raise PatternError(f'Duplicate pattern name "{pattern.name}"', pattern.name)
        pattern.compile()
        self._patterns[pattern.name] = pattern

    def register_many(self, patterns: Iterable[Pattern]) -> None:
        for p in patterns:
            self.register(p)

    def compile(
        self,
        custom_patterns: Optional[Sequence[Any]] = None,
        source: PatternSource = "custom",
    ) -> List[Pattern]:
        """Validate and register *custom_patterns*, returning the full table.

        Raises PatternError naming the first invalid or duplicate entry.
        """
        for spec in custom_patterns or []:
            self.register(pattern_from_spec(spec, source=source))
        return self.all_patterns

    # ---- queries ----

    @property
    def all_patterns(self) -> List[Pattern]:
        return list(self._patterns.values())

    def get_by_name(self, name: str) -> Optional[Pattern]:
        return self._patterns.get(name)

    def get_high_severity(self) -> List[Pattern]:
        return self.get_by_severity("high")

    def get_by_severity(self, severity: str) -> List[Pattern]:
        return [p for p in self._patterns.values() if p.severity == severity]

    def __len__(self) -> int:
        return len(self._patterns)

    def __contains__(self, name: object) -> bool:
        return name in self._patterns


# ---- custom pattern files ----


def load_custom_patterns(directory: Path) -> List[Dict[str, Any]]:
    """Read YAML pattern files from *directory* into custom pattern specs.

    Each ``*.yaml`` / ``*.yml`` file holds a list of mappings or a single
    mapping. Specs are validated later, when the registry compiles them.
    """
    specs: List[Dict[str, Any]] = []
    if not directory.is_dir():
        return specs
    for path in sorted(directory.iterdir()):
        if path.suffix not in (".yaml", ".yml"):
            continue
        specs.extend(_load_yaml_patterns(path))
    if specs:
        logger.debug("custom patterns loaded", directory=str(directory), count=len(specs))
    return specs


def _load_yaml_patterns(path: Path) -> List[Dict[str, Any]]:
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as exc:
        raise PatternError(f"Failed to read pattern file {path}: {exc}") from exc
    if data is None:
        return []
    if not isinstance(data, list):
        data = [data]
    entries: List[Dict[str, Any]] = []
    for entry in data:
        if not isinstance(entry, dict):
            raise PatternError(f"Pattern file {path} must contain mappings")
        entries.append(dict(entry))
    return entries


def build_registry(
    custom_patterns: Optional[Sequence[Any]] = None,
    denylist: Optional[Sequence[Any]] = None,
) -> PatternRegistry:
    """Create a fully populated registry: built-ins, then custom, then denylist."""
    registry = PatternRegistry()
    registry.compile(custom_patterns, source="custom")
    registry.compile(denylist, source="denylist")
    return registry
