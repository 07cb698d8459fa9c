"""
Privacy Guard Configuration Management

Loads and manages configuration from .privacyguard.yaml files.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from privacyguard.core.errors import ConfigError
from privacyguard.core.rules import DEFAULT_RULESET, RuleSet
from privacyguard.utils.logger import get_logger

logger = get_logger(__name__)

CONFIG_FILENAME = ".privacyguard.yaml"

DEFAULT_SCAN_DIRS = ["src", "tests", "scripts", "docs"]


@dataclass
class OutputConfig:
    format: str = "console"
    file: Optional[str] = None


@dataclass
class PrivacyGuardConfig:
    """Root configuration object for Privacy Guard."""

    enabled: bool = True
    block_on_detection: bool = True
    scan_dirs: list[str] = field(default_factory=lambda: list(DEFAULT_SCAN_DIRS))
    workers: int = 1
    output: OutputConfig = field(default_factory=OutputConfig)
    whitelist: dict[str, str] = field(default_factory=dict)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "PrivacyGuardConfig":
        """Load configuration from a YAML file, falling back to defaults."""
        if config_path is None:
            config_path = Path.cwd() / CONFIG_FILENAME

        if not config_path.exists():
            return cls()

        try:
            with open(config_path, encoding="utf-8") as f:
                raw = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as exc:
            logger.warning("config.load_failed", path=str(config_path), error=str(exc))
            return cls()

        if not isinstance(raw, dict):
            logger.warning("config.load_failed", path=str(config_path), error="not a mapping")
            return cls()

        return cls._from_dict(raw)

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> "PrivacyGuardConfig":
        """Build config from a parsed YAML dictionary."""
        output_data = _mapping(data, "output")
        output = OutputConfig(
            format=output_data.get("format", "console"),
            file=output_data.get("file"),
        )

        whitelist = {str(k): str(v) for k, v in _mapping(data, "whitelist").items()}
        for name, pattern in whitelist.items():
            try:
                re.compile(pattern)
            except re.error as exc:
                raise ConfigError(f"Invalid whitelist pattern '{name}': {exc}") from exc

        # bool is a subclass of int
        workers = data.get("workers", 1)
        if isinstance(workers, bool) or not isinstance(workers, int) or workers < 1:
            raise ConfigError(f"workers must be a positive integer, got {workers!r}")

        return cls(
            enabled=_flag(data, "enabled"),
            block_on_detection=_flag(data, "block_on_detection"),
            scan_dirs=list(data.get("scan_dirs") or DEFAULT_SCAN_DIRS),
            workers=workers,
            output=output,
            whitelist=whitelist,
        )

    def ruleset(self) -> RuleSet:
        """Default rule tables plus any whitelist entries from this config."""
        return DEFAULT_RULESET.with_whitelist(self.whitelist)


def _mapping(data: dict[str, Any], key: str) -> dict[str, Any]:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"{key} must be a mapping, got {type(value).__name__}")
    return value


def _flag(data: dict[str, Any], key: str) -> bool:
    value = data.get(key, True)
    if not isinstance(value, bool):
        raise ConfigError(f"{key} must be true or false, got {value!r}")
    return value


def generate_default_config() -> str:
    """Generate a default .privacyguard.yaml configuration file content."""
    return """\
# Privacy Guard Configuration

# Turn scanning off entirely
enabled: true

# When false, CRITICAL and PII findings are reported but do not fail
block_on_detection: true

# Directories walked by 'privacy-guard full'
scan_dirs:
  - src
  - tests
  - scripts
  - docs

# Files scanned in parallel by 'full' and 'check'
workers: 1

# Output settings
output:
  format: console  # console, json, sarif
  # file: privacy-report.json

# Extra whitelist patterns (name: regex), matched case-insensitively
whitelist: {}
#  internal_host: "intranet\\\\.corp"
"""
