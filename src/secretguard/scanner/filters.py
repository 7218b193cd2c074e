"""Allowlist / denylist compilation and application.

Allowlist entries come in several shapes and are resolved once, at
construction, into one of three rule classes:

  - ``"AKIA..."``                     plain string, case-insensitive substring
  - ``"/^sk_test_/"``                 regular expression (flags only in the spelled-out form)
  - ``"*.example.com"`` / ``"tests/**"`` glob (``*`` or ``?`` present)
  - ``{type, pattern, reason}``       any of the above, spelled out

Glob rules are also tested against file paths using gitignore-style
wildcard semantics. Bad allowlist entries are skipped with a warning; bad
denylist entries raise PatternError.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from fnmatch import fnmatchcase
from typing import Any, ClassVar, Dict, Iterable, List, Mapping, Optional, Sequence, Union

import re2
from pathspec import PathSpec

from secretguard.config.schema import SecretGuardConfig
from secretguard.errors import PatternError
from secretguard.findings.models import Finding
from secretguard.rules.models import Pattern, inline_flags, pattern_from_spec, split_delimited
from secretguard.utils.logger import get_logger

logger = get_logger(__name__)

RULE_TYPES = ("string", "regex", "glob")
SUPPRESSED_BY_ALLOWLIST = "allowlist"


@dataclass(frozen=True)
class StringRule:
    kind: ClassVar[str] = "string"

    pattern: str
    reason: Optional[str] = None

    def matches(self, value: str) -> bool:
        return self.pattern.lower() in value.lower()


@dataclass(frozen=True)
class RegexRule:
    kind: ClassVar[str] = "regex"

    pattern: str
    reason: Optional[str] = None
    _compiled: Any = field(default=None, repr=False, compare=False)

    def matches(self, value: str) -> bool:
        return self._compiled.search(value) is not None


@dataclass(frozen=True)
class GlobRule:
    kind: ClassVar[str] = "glob"

    pattern: str
    reason: Optional[str] = None
    _pathspec: Any = field(default=None, repr=False, compare=False)

    def matches(self, value: str) -> bool:
        return fnmatchcase(value.lower(), self.pattern.lower())

    def matches_path(self, path: str) -> bool:
        return self._pathspec.match_file(path.replace("\\", "/").lower())


AllowlistRule = Union[StringRule, RegexRule, GlobRule]


def _regex_rule(body: str, flags: str, pattern: str, reason: Optional[str]) -> RegexRule:
    # Allowlist regexes are always case-insensitive.
    source = inline_flags("allowlist", flags + "i") + body
    try:
        compiled = re2.compile(source)
    except re2.error as exc:
        raise ValueError(f"invalid regular expression: {exc}") from exc
    return RegexRule(pattern=pattern, reason=reason, _compiled=compiled)


def _glob_rule(pattern: str, reason: Optional[str]) -> GlobRule:
    spec = PathSpec.from_lines("gitwildmatch", [pattern.lower()])
    return GlobRule(pattern=pattern, reason=reason, _pathspec=spec)


def compile_allowlist_rule(entry: Any) -> AllowlistRule:
    """Resolve one allowlist entry into a rule. Raises ValueError when unusable."""
    if isinstance(entry, str):
        if not entry:
            raise ValueError("empty pattern")
        # Bare strings take no flags: "/api/v1/keys" stays a literal path.
        if len(entry) > 2 and entry.startswith("/") and entry.endswith("/"):
            return _regex_rule(entry[1:-1], "", entry, None)
        if "*" in entry or "?" in entry:
            return _glob_rule(entry, None)
        return StringRule(pattern=entry)

    if isinstance(entry, Mapping):
        kind = entry.get("type")
        pattern = entry.get("pattern")
        reason = entry.get("reason")
        if kind not in RULE_TYPES:
            raise ValueError(f"unknown rule type {kind!r} (expected string, regex or glob)")
        if not pattern or not isinstance(pattern, str):
            raise ValueError("rule must have a non-empty string pattern")
        if kind == "regex":
            body, flags = split_delimited(pattern)
            return _regex_rule(body, flags, pattern, reason)
        if kind == "glob":
            return _glob_rule(pattern, reason)
        return StringRule(pattern=pattern, reason=reason)

    raise ValueError(f"unsupported rule of type {type(entry).__name__}")


def compile_denylist(rules: Optional[Iterable[Any]]) -> List[Pattern]:
    """Compile denylist specs into patterns. Raises PatternError on any bad entry."""
    patterns: List[Pattern] = []
    seen: set[str] = set()
    for spec in rules or []:
        pattern = pattern_from_spec(spec, source="denylist")
        if pattern.name in seen:
            raise PatternError(f'Duplicate pattern name "{pattern.name}"', pattern.name)
        seen.add(pattern.name)
        patterns.append(pattern)
    return patterns


@dataclass
class FilterResult:
    filtered: List[Finding] = field(default_factory=list)
    suppressed: List[Finding] = field(default_factory=list)


@dataclass
class ValidationResult:
    valid: bool
    errors: List[str] = field(default_factory=list)


class SecretFilters:
    """Compiled allowlist and denylist."""

    def __init__(
        self,
        allowlist: Optional[Sequence[Any]] = None,
        denylist: Optional[Sequence[Any]] = None,
    ) -> None:
        self.allowlist: List[AllowlistRule] = []
        for i, entry in enumerate(allowlist or []):
            try:
                self.allowlist.append(compile_allowlist_rule(entry))
            except (ValueError, PatternError) as exc:
                logger.warning("allowlist rule skipped", index=i, reason=str(exc))
        self._glob_rules = [r for r in self.allowlist if isinstance(r, GlobRule)]
        self.denylist: List[Pattern] = compile_denylist(denylist)

    def is_allowlisted(self, value: str, file_path: Optional[str] = None) -> bool:
        if any(rule.matches(value) for rule in self.allowlist):
            return True
        if file_path:
            return any(rule.matches_path(file_path) for rule in self._glob_rules)
        return False

    def filter_findings(self, findings: Iterable[Finding]) -> FilterResult:
        """Partition *findings* into kept and allowlist-suppressed."""
        result = FilterResult()
        for f in findings:
            if self.is_allowlisted(f.match, f.file):
                result.suppressed.append(f.suppressed(SUPPRESSED_BY_ALLOWLIST))
            else:
                result.filtered.append(f)
        return result

    def get_stats(self) -> Dict[str, Any]:
        rule_types = {kind: 0 for kind in RULE_TYPES}
        for rule in self.allowlist:
            rule_types[rule.kind] += 1
        return {
            "allowlist_rules": len(self.allowlist),
            "denylist_patterns": len(self.denylist),
            "rule_types": rule_types,
        }


def validate_allowlist(rules: Optional[Iterable[Any]]) -> ValidationResult:
    """Check allowlist entries without building a filter."""
    errors: List[str] = []
    for i, entry in enumerate(rules or []):
        try:
            compile_allowlist_rule(entry)
        except (ValueError, PatternError) as exc:
            errors.append(f"allowlist[{i}]: {exc}")
    return ValidationResult(valid=not errors, errors=errors)


def validate_denylist(rules: Optional[Iterable[Any]]) -> ValidationResult:
    """Check denylist entries: names, expressions, severities, duplicates."""
    errors: List[str] = []
    seen: set[str] = set()
    for i, spec in enumerate(rules or []):
        try:
            pattern = pattern_from_spec(spec, source="denylist")
        except PatternError as exc:
            errors.append(f"denylist[{i}]: {exc}")
            continue
        if pattern.name in seen:
            errors.append(f'denylist[{i}]: Duplicate pattern name "{pattern.name}"')
        seen.add(pattern.name)
    return ValidationResult(valid=not errors, errors=errors)


def create_filters_from_config(config: Union[SecretGuardConfig, Mapping[str, Any], None]) -> SecretFilters:
    """Build filters from a SecretGuardConfig or a plain ``{allowlist, denylist}`` mapping."""
    if config is None:
        return SecretFilters()
    if isinstance(config, SecretGuardConfig):
        return SecretFilters(allowlist=config.allowlist.rules, denylist=config.denylist)
    return SecretFilters(
        allowlist=config.get("allowlist") or [],
        denylist=config.get("denylist") or [],
    )
