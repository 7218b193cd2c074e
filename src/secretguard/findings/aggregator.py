"""Finding deduplication across patterns and scan windows."""

from __future__ import annotations

from typing import Dict, Iterable, List, Tuple

from secretguard.findings.models import Finding


def remove_overlapping(findings: Iterable[Finding]) -> List[Finding]:
    """Drop window artefacts: matches overlapping an earlier match of the same pattern.

    Overlapping scan windows can cut a secret at a window edge, producing a
    truncated match next to the complete one, and a window starting inside a
    long run can realign a fixed-width pattern, producing matches that
    straddle the ones the previous window found. A single pass over the whole
    buffer never reports overlapping spans for one pattern, so within each
    ``(file, type)`` group the leftmost (then longest) match is kept and
    anything overlapping it is dropped. Input order is preserved.
    """
    items = list(findings)
    by_group: Dict[Tuple[str, str], List[Finding]] = {}
    for f in items:
        by_group.setdefault((f.file, f.type), []).append(f)

    dropped: set[int] = set()
    for group in by_group.values():
        if len(group) < 2:
            continue
        group.sort(key=lambda f: (f.start, -f.end))
        kept_end = group[0].end
        for f in group[1:]:
            if f.start < kept_end:
                dropped.add(id(f))
            else:
                kept_end = f.end

    return [f for f in items if id(f) not in dropped]


def deduplicate(findings: Iterable[Finding]) -> List[Finding]:
    """Keep one finding per ``(file, start, end)`` span: the most confident.

    On equal confidence the earlier finding wins, so built-in patterns take
    precedence over custom ones registered after them. Output is ordered by
    position.
    """
    best: Dict[tuple, Finding] = {}
    for f in findings:
        key = f.span_key
        current = best.get(key)
        if current is None or f.confidence > current.confidence:
            best[key] = f
    return sorted(best.values(), key=lambda f: (f.file, f.start, f.end))
