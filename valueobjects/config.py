"""Load and validate .valueobjects/config.yaml."""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any

import yaml


CHECK_NAMES = ("reflexive", "symmetric", "transitive", "none", "hashcode", "consistent")

# Default config values
DEFAULTS: dict[str, Any] = {
    "checks": list(CHECK_NAMES),
    "consistency_rounds": 3,
    "allow_unhashable": False,
}

CONFIG_DIR = ".valueobjects"
CONFIG_FILE = "config.yaml"


class ConfigError(Exception):
    """Raised when config is invalid or missing."""


def _deep_merge(base: dict, override: dict) -> dict:
    """Merge override into base recursively. Override wins on conflicts."""
    result = base.copy()
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _validate(config: dict) -> None:
    """Validate field types and check names."""
    checks = config.get("checks")
    if not isinstance(checks, list) or not checks:
        raise ConfigError("'checks' must be a non-empty list")
    if not all(isinstance(name, str) for name in checks):
        raise ConfigError(f"'checks' entries must be check names, got {checks!r}")
    unknown = sorted(set(checks) - set(CHECK_NAMES))
    if unknown:
        raise ConfigError(
            f"'checks' has unknown names: {unknown}. Known: {', '.join(CHECK_NAMES)}."
        )

    rounds = config.get("consistency_rounds")
    # bool is an int subclass
    if isinstance(rounds, bool) or not isinstance(rounds, int) or rounds < 1:
        raise ConfigError(f"'consistency_rounds' must be a positive integer, got {rounds!r}")

    if not isinstance(config.get("allow_unhashable"), bool):
        raise ConfigError("'allow_unhashable' must be true or false")


def config_path(project_root: Path | None = None) -> Path:
    root = Path(project_root) if project_root else Path.cwd()
    return root / CONFIG_DIR / CONFIG_FILE


def load_config(project_root: Path | None = None) -> dict:
    """Load config from .valueobjects/config.yaml under project_root.

    Falls back to cwd if project_root is None. Merges with DEFAULTS
    so callers always get a full config dict.
    """
    path = config_path(project_root)

    if not path.exists():
        raise ConfigError(f"Config not found: {path}")

    with open(path) as f:
        try:
            raw = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Config is not valid YAML: {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigError(f"Config must be a YAML mapping, got {type(raw).__name__}")

    config = _deep_merge(copy.deepcopy(DEFAULTS), raw)
    _validate(config)
    return config


def load_config_or_defaults(project_root: Path | None = None) -> dict:
    """Like load_config, but a missing file yields DEFAULTS."""
    if not config_path(project_root).exists():
        return copy.deepcopy(DEFAULTS)
    return load_config(project_root)
