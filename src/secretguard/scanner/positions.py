"""Line/column <-> offset mapping shared by the detector and the redactor.

Lines and columns are 1-based. A span's end column is the column of its last
character; offsets are 0-based with an exclusive end.
"""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class Position:
    line_start: int
    line_end: int
    start_column: int
    end_column: int


class LineIndex:
    """Table of line-start offsets for one piece of text, built in a single pass."""

    def __init__(self, text: str) -> None:
        self._length = len(text)
        starts: List[int] = [0]
        pos = text.find("\n")
        while pos != -1:
            starts.append(pos + 1)
            pos = text.find("\n", pos + 1)
        self._starts = starts

    @property
    def line_count(self) -> int:
        return len(self._starts)

    def offset_to_position(self, offset: int) -> Tuple[int, int]:
        """Return ``(line, column)`` for the character at *offset*."""
        line = bisect_right(self._starts, offset)
        return line, offset - self._starts[line - 1] + 1

    def span_to_position(self, start: int, end: int) -> Position:
        """Map an offset span to line/column coordinates.

        The end coordinates come from the span's last character, so a span
        ending right after a newline stays on the line it started on.
        """
        line_start, start_column = self.offset_to_position(start)
        line_end, end_column = self.offset_to_position(max(start, end - 1))
        return Position(line_start, line_end, start_column, end_column)

    def position_to_span(
        self,
        line_start: int,
        start_column: int,
        line_end: int,
        end_column: int,
    ) -> Optional[Tuple[int, int]]:
        """Inverse of :meth:`span_to_position`; None when the lines do not exist."""
        if not (1 <= line_start <= self.line_count and 1 <= line_end <= self.line_count):
            return None
        if start_column < 1 or end_column < 1:
            return None
        start = self._starts[line_start - 1] + start_column - 1
        end = min(self._starts[line_end - 1] + end_column, self._length)
        if start >= end:
            return None
        return start, end
