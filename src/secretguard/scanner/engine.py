"""Core scan engine — runs every pattern over a buffer and turns matches into findings.

Pipeline per buffer: size check, pattern matching (in overlapping windows for
large buffers), line/column mapping, false-positive and entropy gating,
span deduplication, allowlist filtering, stats.

Matched values never appear in log events or error messages.
"""

from __future__ import annotations

import os
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from secretguard.config.schema import SecretGuardConfig
from secretguard.errors import FileTooLargeError, ScanCancelledError
from secretguard.findings.aggregator import deduplicate, remove_overlapping
from secretguard.findings.models import BatchResult, Finding, ScanStats
from secretguard.rules.models import Pattern
from secretguard.rules.registry import PatternRegistry
from secretguard.scanner.entropy import (
    SOFT_PLACEHOLDER_MAX_LENGTH,
    is_likely_false_positive,
    score_match,
)
from secretguard.scanner.filters import SecretFilters
from secretguard.scanner.positions import LineIndex
from secretguard.utils.logger import ScanTimer, get_logger

logger = get_logger(__name__)

DEFAULT_MAX_FILE_BYTES = 10_000_000
DEFAULT_CHUNK_SIZE = 65_536
DEFAULT_CHUNK_OVERLAP = 8_192

FileEntry = Union[Mapping[str, Any], Tuple[str, Optional[str]]]


def _entry(item: FileEntry) -> Tuple[str, Optional[str]]:
    """Accept ``{path, content}`` mappings or ``(path, content)`` pairs."""
    if isinstance(item, Mapping):
        return str(item.get("path") or item.get("file") or "<text>"), item.get("content")
    path, content = item
    return str(path), content


class SecretDetector:
    """Scan text buffers for secrets.

    The detector owns its pattern registry, its filters and its stats. It is
    safe to call :meth:`scan` from several threads; stats updates are
    serialised.
    """

    def __init__(
        self,
        aggressive: bool = False,
        max_file_bytes: int = DEFAULT_MAX_FILE_BYTES,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        chunk_overlap: int = DEFAULT_CHUNK_OVERLAP,
        allowlist: Optional[Sequence[Any]] = None,
        patterns: Optional[Sequence[Any]] = None,
        denylist: Optional[Sequence[Any]] = None,
        max_workers: Optional[int] = None,
    ) -> None:
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        if not 0 <= chunk_overlap < chunk_size:
            raise ValueError("chunk_overlap must be smaller than chunk_size")

        self.aggressive = aggressive
        self.max_file_bytes = max_file_bytes
        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap
        self.max_workers = max_workers or os.cpu_count() or 1

        self.filters = SecretFilters(allowlist=allowlist, denylist=denylist)
        self.registry = PatternRegistry()
        self.registry.compile(patterns, source="custom")
        self.registry.register_many(self.filters.denylist)

        self._soft_max_length = 0 if aggressive else SOFT_PLACEHOLDER_MAX_LENGTH
        self._stats = ScanStats()
        self._lock = threading.Lock()

    @property
    def patterns(self) -> List[Pattern]:
        return self.registry.all_patterns

    # ---- single buffer ----

    def scan(
        self,
        content: Optional[str],
        file_path: str = "<text>",
        apply_filters: bool = True,
    ) -> List[Finding]:
        """Return the findings in *content*, ordered by position.

        Raises FileTooLargeError when the UTF-8 size exceeds ``max_file_bytes``.
        """
        findings, stats = self._scan(content, file_path, apply_filters)
        with self._lock:
            self._stats.merge(stats)
        return findings

    def _scan(
        self,
        content: Optional[str],
        file_path: str,
        apply_filters: bool,
    ) -> Tuple[List[Finding], ScanStats]:
        content = content or ""
        self._check_size(content, file_path)

        stats = ScanStats(files_scanned=1)
        findings: List[Finding] = []
        with ScanTimer("scan", logger, file=file_path) as timer:
            if content:
                findings = self._detect(content, file_path)
                if apply_filters and self.filters.allowlist:
                    result = self.filters.filter_findings(findings)
                    findings = result.filtered
                    stats.findings_suppressed = len(result.suppressed)
        stats.findings_total = len(findings)
        stats.scan_time_ms.append(timer.duration_ms)
        return findings, stats

    def _check_size(self, content: str, file_path: str) -> None:
        # A str can never take more than 4 bytes per character in UTF-8.
        if len(content) * 4 <= self.max_file_bytes:
            return
        size = len(content.encode("utf-8", errors="surrogatepass"))
        if size > self.max_file_bytes:
            raise FileTooLargeError(size, self.max_file_bytes, file_path)

    def _windows(self, length: int) -> Iterator[Tuple[int, int]]:
        if length <= self.chunk_size:
            yield 0, length
            return
        step = self.chunk_size - self.chunk_overlap
        start = 0
        while True:
            end = min(start + self.chunk_size, length)
            yield start, end
            if end >= length:
                return
            start += step

    def _detect(self, content: str, file_path: str) -> List[Finding]:
        index = LineIndex(content)
        patterns = self.registry.all_patterns
        windows = list(self._windows(len(content)))

        candidates: List[Finding] = []
        passed: Dict[int, bool] = {}
        seen: set[Tuple[str, int, int]] = set()

        for window_start, window_end in windows:
            window = content if len(windows) == 1 else content[window_start:window_end]
            for pattern in patterns:
                for start, end in pattern.iter_spans(window):
                    start += window_start
                    end += window_start
                    key = (pattern.name, start, end)
                    if key in seen:
                        continue
                    seen.add(key)
                    finding, ok = self._candidate(pattern, content, start, end, index, file_path)
                    candidates.append(finding)
                    passed[id(finding)] = ok

        if len(windows) > 1:
            candidates = remove_overlapping(candidates)

        return deduplicate(f for f in candidates if passed[id(f)])

    def _candidate(
        self,
        pattern: Pattern,
        content: str,
        start: int,
        end: int,
        index: LineIndex,
        file_path: str,
    ) -> Tuple[Finding, bool]:
        """Build the finding for one span and decide whether it survives gating."""
        match = content[start:end]
        score = score_match(match, pattern.min_entropy)
        pos = index.span_to_position(start, end)
        finding = Finding(
            type=pattern.name,
            match=match,
            file=file_path,
            line_start=pos.line_start,
            line_end=pos.line_end,
            start_column=pos.start_column,
            end_column=pos.end_column,
            start=start,
            end=end,
            confidence=score.confidence,
            entropy=score.entropy,
            severity=pattern.severity,
            source="internal",
            description=pattern.description,
            redaction_label=pattern.label,
        )
        if is_likely_false_positive(match, self._soft_max_length):
            return finding, False
        return finding, self.aggressive or score.meets_threshold

    # ---- batches ----

    def scan_batch(
        self,
        files: Iterable[FileEntry],
        cancel_event: Optional[threading.Event] = None,
    ) -> List[BatchResult]:
        """Scan many files across a thread pool.

        A failing file yields ``BatchResult(file, [], error)`` and does not
        stop the others. When *cancel_event* is set, files not yet started
        are skipped and ScanCancelledError carries the completed results.
        """
        entries = [_entry(item) for item in files]
        results: List[Optional[BatchResult]] = [None] * len(entries)
        partials: List[Optional[ScanStats]] = [None] * len(entries)

        def work(i: int) -> None:
            if cancel_event is not None and cancel_event.is_set():
                return
            path, content = entries[i]
            try:
                findings, stats = self._scan(content, path, True)
            except Exception as exc:  # per-file isolation
                logger.warning("batch entry failed", file=path, error_type=type(exc).__name__)
                results[i] = BatchResult(file=path, findings=[], error=str(exc))
                return
            results[i] = BatchResult(file=path, findings=findings)
            partials[i] = stats

        if entries:
            workers = min(self.max_workers, len(entries))
            with ThreadPoolExecutor(max_workers=workers) as pool:
                for future in [pool.submit(work, i) for i in range(len(entries))]:
                    future.result()

        with self._lock:
            for stats in partials:
                if stats is not None:
                    self._stats.merge(stats)

        completed = [r for r in results if r is not None]
        if len(completed) < len(entries):
            raise ScanCancelledError(completed)

        logger.debug(
            "batch scan finished",
            files=len(entries),
            findings=sum(len(r.findings) for r in completed),
            errors=sum(1 for r in completed if r.error),
        )
        return completed

    # ---- stats ----

    def get_stats(self) -> ScanStats:
        with self._lock:
            return self._stats.copy()

    def reset_stats(self) -> None:
        with self._lock:
            self._stats = ScanStats()


def create_detector_from_config(
    config: Union[SecretGuardConfig, Mapping[str, Any], None] = None,
) -> SecretDetector:
    """Build a detector from a SecretGuardConfig or a flat mapping.

    Mapping keys: ``aggressive``, ``max_file_bytes``, ``chunk_size``,
    ``chunk_overlap``, ``max_workers``, ``allowlist``, ``custom_patterns``,
    ``denylist``.
    """
    if config is None:
        return SecretDetector()
    if isinstance(config, SecretGuardConfig):
        det = config.detector
        return SecretDetector(
            aggressive=det.aggressive,
            max_file_bytes=det.max_file_bytes,
            chunk_size=det.chunk_size,
            chunk_overlap=det.chunk_overlap,
            max_workers=det.max_workers,
            allowlist=config.allowlist.rules,
            patterns=config.custom_patterns,
            denylist=config.denylist,
        )
    return SecretDetector(
        aggressive=bool(config.get("aggressive", False)),
        max_file_bytes=int(config.get("max_file_bytes") or DEFAULT_MAX_FILE_BYTES),
        chunk_size=int(config.get("chunk_size") or DEFAULT_CHUNK_SIZE),
        chunk_overlap=int(config.get("chunk_overlap", DEFAULT_CHUNK_OVERLAP)),
        max_workers=config.get("max_workers"),
        allowlist=config.get("allowlist") or [],
        patterns=config.get("custom_patterns") or [],
        denylist=config.get("denylist") or [],
    )
