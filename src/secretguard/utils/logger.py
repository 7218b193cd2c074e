"""Structured logging for secretguard.

Logs go to stderr so that reports printed on stdout stay machine-readable.
Log events never include matched secret values.
"""

import logging
import sys
import time
from typing import Any, Optional

import structlog
from structlog.types import EventDict, Processor


def add_timestamp(logger: logging.Logger, method_name: str, event_dict: EventDict) -> EventDict:
    """Add epoch timestamp to log entries."""
    event_dict["timestamp"] = time.time()
    return event_dict


def configure_logging(
    log_level: str = "WARNING",
    json_output: bool = False,
) -> None:
    """Configure structured logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_output: If True, output JSON lines. If False, use console format.
    """
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        add_timestamp,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_output:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, log_level.upper())
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str = "secretguard") -> Any:
    """Get a configured logger instance.

    Args:
        name: Logger name (typically module name)
    """
    return structlog.get_logger(name)


class ScanTimer:
    """Context manager timing a scan and logging the duration at debug level."""

    def __init__(self, operation: str, logger: Optional[Any] = None, **context: Any) -> None:
        self.operation = operation
        self.logger = logger or get_logger()
        self.context = context
        self.start_time: float = 0
        self.end_time: float = 0

    def __enter__(self) -> "ScanTimer":
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.end_time = time.perf_counter()
        if exc_type is not None:
            self.logger.debug(
                f"{self.operation} failed",
                duration_ms=self.duration_ms,
                error_type=exc_type.__name__,
                **self.context,
            )
        else:
            self.logger.debug(
                f"{self.operation} completed",
                duration_ms=self.duration_ms,
                **self.context,
            )

    @property
    def duration_ms(self) -> float:
        """Elapsed time in milliseconds (running total while inside the block)."""
        end = self.end_time or time.perf_counter()
        return (end - self.start_time) * 1000


# Library default: warnings and above on stderr. The CLI reconfigures this.
configure_logging()
