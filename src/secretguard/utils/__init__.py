"""Shared utilities — structured logging."""

from secretguard.utils.logger import ScanTimer, configure_logging, get_logger

__all__ = ["ScanTimer", "configure_logging", "get_logger"]
