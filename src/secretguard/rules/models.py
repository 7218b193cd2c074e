"""Pattern data model — regex stored as a string, compiled with RE2 at registry build.

All matching goes through google-re2, whose automata run in linear time, so
attacker-controlled file content cannot trigger catastrophic backtracking.
Constructs RE2 rejects (backreferences, lookaround) are rejected here too.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Mapping, Optional, Tuple

import re2

from secretguard.config.schema import SEVERITIES, PatternSource, Severity
from secretguard.errors import PatternError

#: Flags accepted on custom patterns. ``g`` (find-all) is always implied.
_INLINE_FLAGS = {"i": "i", "m": "m", "s": "s"}
_IGNORED_FLAGS = {"g", "u"}

_DELIMITED = re2.compile(r"^/(.+)/([A-Za-z]*)$")

SECRET_GROUP = "secret"


@dataclass
class Pattern:
    """A single detection pattern.

    ``regex`` is stored as a raw string so the pattern remains serialisable.
    The compiled matcher is built by :meth:`compile`, which the registry calls
    for every pattern before the first scan. When the expression has a
    ``(?P<secret>...)`` group, only that group is reported as the match.
    """

    name: str
    regex: str
    description: str
    severity: Severity = "medium"
    source: PatternSource = "builtin"
    redaction_label: Optional[str] = None
    min_entropy: Optional[float] = None

    # --- cached compiled objects (not serialised) ---
    _compiled_pattern: Any = field(default=None, init=False, repr=False, compare=False)
    _secret_group: int = field(default=0, init=False, repr=False, compare=False)

    def compile(self) -> Any:
        """Compile the expression with RE2. Raises PatternError on failure."""
        if self._compiled_pattern is None:
            try:
                compiled = re2.compile(self.regex)
            except re2.error as exc:
                raise PatternError(
                    f'Pattern "{self.name}" has an invalid expression: {exc}', self.name
                ) from exc
            if SECRET_GROUP in compiled.groupindex:
                self._secret_group = compiled.groupindex[SECRET_GROUP]
            elif compiled.groups > 0:
                self._secret_group = 1
            self._compiled_pattern = compiled
        return self._compiled_pattern

    @property
    def compiled_pattern(self) -> Any:
        return self.compile()

    @property
    def label(self) -> str:
        return self.redaction_label or self.name.upper()

    def iter_spans(self, text: str) -> Iterator[Tuple[int, int]]:
        """Yield ``(start, end)`` of every non-empty match in *text*.

        Uses the secret group when it participated in the match, else the
        whole match.
        """
        compiled = self.compile()
        group = self._secret_group
        for m in compiled.finditer(text):
            start, end = m.span(group)
            if group and (start < 0 or end <= start):
                start, end = m.span(0)
            if end > start:
                yield start, end


def split_delimited(expression: str) -> Tuple[str, str]:
    """Split ``/expr/flags`` into ``(expr, flags)``; plain strings have no flags."""
    m = _DELIMITED.match(expression)
    if m is None:
        return expression, ""
    return m.group(1), m.group(2)


def inline_flags(name: str, flags: str) -> str:
    inline = []
    for flag in flags:
        if flag in _IGNORED_FLAGS:
            continue
        if flag not in _INLINE_FLAGS:
            raise PatternError(f'Pattern "{name}" has unsupported flag "{flag}"', name)
        if _INLINE_FLAGS[flag] not in inline:
            inline.append(_INLINE_FLAGS[flag])
    return f"(?{''.join(inline)})" if inline else ""


def pattern_from_spec(spec: Any, source: PatternSource = "custom") -> Pattern:
    """Normalise a caller-supplied pattern definition into a compiled Pattern.

    *spec* is a mapping with ``name`` and ``pattern`` (a string, a
    ``/expr/flags`` string or a compiled regex object), plus optional
    ``flags``, ``description``, ``severity``, ``redaction_label`` and
    ``min_entropy``. Missing find-all flags are added rather than rejected.
    """
    if isinstance(spec, Pattern):
        spec = {
            "name": spec.name,
            "pattern": spec.regex,
            "description": spec.description,
            "severity": spec.severity,
            "redaction_label": spec.redaction_label,
            "min_entropy": spec.min_entropy,
        }
    if not isinstance(spec, Mapping):
        raise PatternError(f"Pattern must be a mapping, got {type(spec).__name__}")

    name = spec.get("name")
    if not name or not isinstance(name, str):
        raise PatternError("Pattern must have a valid name")

    raw = spec.get("pattern", spec.get("regex"))
    if raw is not None and not isinstance(raw, str):
        # Compiled regex objects (stdlib or RE2) expose their source as .pattern
        raw = getattr(raw, "pattern", None)
    if not raw or not isinstance(raw, str):
        raise PatternError(f'Pattern "{name}" must have a string expression', name)

    expression, delimited_flags = split_delimited(raw)
    flags = delimited_flags + (spec.get("flags") or "")
    expression = inline_flags(name, flags) + expression

    severity = spec.get("severity") or "medium"
    if severity not in SEVERITIES:
        raise PatternError(
            f'Pattern "{name}" must have severity: low, medium, or high', name
        )

    min_entropy = spec.get("min_entropy")
    if min_entropy is not None:
        if isinstance(min_entropy, bool) or not isinstance(min_entropy, (int, float)) or min_entropy < 0:
            raise PatternError(f'Pattern "{name}" min_entropy must be a positive number', name)
        min_entropy = float(min_entropy)

    pattern = Pattern(
        name=name,
        regex=expression,
        description=spec.get("description") or f"Custom pattern: {name}",
        severity=severity,
        source=source,
        redaction_label=spec.get("redaction_label") or name.upper(),
        min_entropy=min_entropy,
    )
    pattern.compile()
    return pattern
