"""Load and merge configuration from .secretguard.toml, pattern files, and env vars."""

from __future__ import annotations

import dataclasses
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from secretguard.config.schema import (
    AllowlistConfig,
    DetectorConfig,
    GuardConfig,
    OutputConfig,
    RedactionConfig,
    SecretGuardConfig,
)
from secretguard.errors import ConfigError, PatternError

CONFIG_FILENAME = ".secretguard.toml"
PATTERNS_DIRNAME = ".secretguard-patterns"

_TRUTHY = ("1", "true", "yes", "on")


def find_config_file(root: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = root / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _merge_env_overrides(cfg: SecretGuardConfig) -> None:
    """Apply SECRETGUARD_* environment variable overrides."""
    if val := os.environ.get("SECRETGUARD_AGGRESSIVE"):
        cfg.detector.aggressive = val.lower() in _TRUTHY
    if val := os.environ.get("SECRETGUARD_MAX_FILE_BYTES"):
        try:
            cfg.detector.max_file_bytes = int(val)
        except ValueError:
            pass
    if val := os.environ.get("SECRETGUARD_REDACTION_MODE"):
        if val in ("typed", "generic", "hash"):
            cfg.redaction.mode = val  # type: ignore[assignment]
    if val := os.environ.get("SECRETGUARD_FORMAT"):
        if val in ("terminal", "json"):
            cfg.output.format = val  # type: ignore[assignment]
    if val := os.environ.get("SECRETGUARD_FAIL_ON_SECRETS"):
        cfg.guard.fail_on_secrets = val.lower() in _TRUTHY


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    raw = data.get(section, {})
    if not isinstance(raw, dict):
        raise ConfigError(f"Section [{section}] must be a table")
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in raw.items() if k in valid_fields}
    return cls(**filtered)


def _pattern_list(data: Dict[str, Any], key: str) -> list:
    entries = data.get(key, [])
    if not isinstance(entries, list):
        raise ConfigError(f"'{key}' must be an array of tables")
    return list(entries)


def load_config(
    root: Path,
    config_override: Optional[str] = None,
) -> SecretGuardConfig:
    """Load, validate, and return a SecretGuardConfig.

    Custom pattern files in ``<root>/.secretguard-patterns/`` are appended to
    ``custom_patterns``.
    """
    from secretguard.rules.registry import load_custom_patterns

    config_path = find_config_file(root, config_override)

    if config_path is None:
        cfg = SecretGuardConfig()
    else:
        raw = _parse_toml(config_path)
        cfg = SecretGuardConfig(
            version=raw.get("version", "1.0"),
            detector=_build_section(raw, DetectorConfig, "detector"),
            allowlist=_build_section(raw, AllowlistConfig, "allowlist"),
            redaction=_build_section(raw, RedactionConfig, "redaction"),
            guard=_build_section(raw, GuardConfig, "guard"),
            output=_build_section(raw, OutputConfig, "output"),
            custom_patterns=_pattern_list(raw, "custom_patterns"),
            denylist=_pattern_list(raw, "denylist"),
        )

    try:
        cfg.custom_patterns.extend(load_custom_patterns(root / PATTERNS_DIRNAME))
    except PatternError as exc:
        raise ConfigError(str(exc)) from exc

    _merge_env_overrides(cfg)
    return cfg
