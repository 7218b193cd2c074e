"""Content redaction — replace each finding's span with a marker.

Findings carry line/column coordinates; the shared LineIndex turns them back
into offsets, so detector and redactor agree on every span.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Sequence, Tuple

from secretguard.scanner.positions import LineIndex
from secretguard.utils.logger import get_logger

logger = get_logger(__name__)

REDACTION_MODES = ("typed", "generic", "hash")
GENERIC_MARKER = "***REDACTED***"


@dataclass(frozen=True)
class RedactionResult:
    content: str
    count: int


def mask(value: str, full: bool = False) -> str:
    """Partial reveal for terminal reports: first 4 + last 2 chars.

    Example: ``ghp_Abc123xyz9`` → ``ghp_...z9``. With *full* (CI logs,
    JSON reports) nothing of the value is revealed.
    """
    if full or len(value) <= 6:
        return "[REDACTED]"
    return f"{value[:4]}...{value[-2:]}"


def _field(finding: Any, name: str, default: Any = None) -> Any:
    if isinstance(finding, Mapping):
        return finding.get(name, default)
    return getattr(finding, name, default)


class SecretRedactor:
    """Rewrite content so that no finding's matched text survives."""

    def get_marker(self, finding: Any, mode: str = "typed") -> str:
        """Return the marker text that replaces *finding* in *mode*."""
        rule = str(_field(finding, "type") or "unknown").upper()
        if mode == "typed":
            return f"***REDACTED:{rule}***"
        if mode == "hash":
            match = _field(finding, "match")
            if not match:
                match = "{}:{}:{}".format(
                    _field(finding, "file", ""),
                    _field(finding, "line_start", 0),
                    _field(finding, "start_column", 0),
                )
            digest = hashlib.sha256(match.encode("utf-8")).hexdigest()[:8]
            return f"***REDACTED:{rule}:{digest}***"
        return GENERIC_MARKER

    def _spans(self, index: LineIndex, findings: Iterable[Any]) -> List[Tuple[int, int, Any]]:
        spans: List[Tuple[int, int, Any]] = []
        for f in findings:
            span = index.position_to_span(
                int(_field(f, "line_start", 0) or 0),
                int(_field(f, "start_column", 0) or 0),
                int(_field(f, "line_end", 0) or 0),
                int(_field(f, "end_column", 0) or 0),
            )
            if span is None:
                logger.debug(
                    "redaction span out of range",
                    file=_field(f, "file"),
                    line=_field(f, "line_start"),
                )
                continue
            spans.append((span[0], span[1], f))
        spans.sort(key=lambda s: (s[0], -s[1]))
        return spans

    def redact(
        self,
        content: str,
        findings: Sequence[Any],
        mode: str = "typed",
    ) -> RedactionResult:
        """Replace every in-range finding with its marker.

        Overlapping spans collapse into the marker of the span that starts
        first. Findings on lines that do not exist are skipped and not counted.
        """
        if not content or not findings:
            return RedactionResult(content=content or "", count=0)

        index = LineIndex(content)
        parts: List[str] = []
        cursor = 0
        count = 0
        for start, end, finding in self._spans(index, findings):
            if start < cursor:
                # Overlaps the previous marker: extend the removed region.
                if end > cursor:
                    cursor = end
                count += 1
                continue
            parts.append(content[cursor:start])
            parts.append(self.get_marker(finding, mode))
            cursor = end
            count += 1
        parts.append(content[cursor:])
        return RedactionResult(content="".join(parts), count=count)

    def redact_batch(
        self,
        files: Iterable[Mapping[str, Any]],
        mode: str = "typed",
    ) -> List[Dict[str, Any]]:
        """Redact a batch of ``{path, content, findings, ...}`` records.

        Returns copies with ``content`` and ``redaction_count`` set; other
        keys pass through untouched.
        """
        results: List[Dict[str, Any]] = []
        for record in files:
            out = dict(record)
            result = self.redact(record.get("content") or "", record.get("findings") or [], mode)
            out["content"] = result.content
            out["redaction_count"] = result.count
            results.append(out)
        return results
