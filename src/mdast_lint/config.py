"""Configuration management with environment variable overrides."""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
import logging
import os

import yaml

logger = logging.getLogger(__name__)

CONFIG_FILENAMES = (".mdast-lint.yaml", ".mdast-lint.yml")


class ConfigError(Exception):
    """Raised when a config file cannot be read or has the wrong shape."""


@dataclass
class Config:
    """Configuration for the mdast-lint CLI."""

    # Rule name -> setting (False/"off", "warn", "error", options, or [level, options])
    rules: dict[str, Any] = field(default_factory=dict)

    # Where the settings came from (None: defaults only)
    config_path: Path | None = None

    # Output
    output_format: str = "text"   # "text" or "json"
    color: bool = True

    @classmethod
    def load(cls, path: Path | None = None, search_dir: Path | None = None) -> "Config":
        """
        Load config from a YAML file, then apply environment overrides.

        Args:
            path: Explicit config file (default: $MDAST_LINT_CONFIG, then
                the first of CONFIG_FILENAMES in search_dir)
            search_dir: Directory to look for a config file (default: cwd)

        Raises:
            ConfigError: If the config file is unreadable or malformed
        """
        config = cls()

        if path is None and (val := os.environ.get("MDAST_LINT_CONFIG")):
            path = Path(val).expanduser()

        if path is None:
            base = search_dir or Path.cwd()
            for name in CONFIG_FILENAMES:
                if (base / name).is_file():
                    path = base / name
                    break

        if path is not None:
            config.rules = _read_rules(path)
            config.config_path = path
            logger.debug(f"Loaded {len(config.rules)} rule settings from {path}")

        # Override output settings from env
        if val := os.environ.get("MDAST_LINT_FORMAT"):
            if val in ("text", "json"):
                config.output_format = val
            else:
                logger.warning(f"Ignoring MDAST_LINT_FORMAT={val!r} (use text or json)")
        if os.environ.get("NO_COLOR"):
            config.color = False
        if val := os.environ.get("MDAST_LINT_COLOR"):
            config.color = val.lower() in ("true", "1", "yes")

        return config


def _read_rules(path: Path) -> dict[str, Any]:
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigError(f"Cannot read config {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse YAML config {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config {path} must be a mapping")

    rules = data.get("rules", {}) or {}
    if not isinstance(rules, dict):
        raise ConfigError(f"`rules` in {path} must map rule names to settings")

    return rules
