"""Configuration loading, schema, and defaults."""

from secretguard.config.loader import load_config
from secretguard.config.schema import SecretGuardConfig, Severity, severity_at_or_above
from secretguard.errors import ConfigError

__all__ = [
    "ConfigError",
    "SecretGuardConfig",
    "Severity",
    "load_config",
    "severity_at_or_above",
]
