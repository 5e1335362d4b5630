"""Installer settings loading (defaults + optional YAML overrides)"""

from dataclasses import fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from n8n_provision.exceptions import ConfigurationError
from n8n_provision.models.config import InstallerSettings


def _coerce(name: str, default: Any, value: Any) -> Any:
    if isinstance(default, Path):
        return Path(value)
    if isinstance(default, int):
        try:
            return int(value)
        except (TypeError, ValueError):
            raise ConfigurationError(f"Setting '{name}' must be an integer, got {value!r}")
    if isinstance(default, list):
        if not isinstance(value, list):
            raise ConfigurationError(f"Setting '{name}' must be a list")
        return list(value)
    return str(value)


def settings_from_dict(overrides: Dict[str, Any]) -> InstallerSettings:
    """
    Build settings from defaults plus overrides.

    Raises:
        ConfigurationError: On unknown keys or values of the wrong type
    """
    defaults = InstallerSettings()
    known = {f.name for f in fields(InstallerSettings)}

    unknown = sorted(set(overrides) - known)
    if unknown:
        raise ConfigurationError(
            f"Unknown setting(s): {', '.join(unknown)}",
            context=f"Valid settings: {', '.join(sorted(known))}",
        )

    values = {
        name: _coerce(name, getattr(defaults, name), value) for name, value in overrides.items()
    }
    return InstallerSettings(**values)


def load_settings(path: Optional[Path] = None) -> InstallerSettings:
    """
    Load installer settings.

    Args:
        path: Optional YAML file with overrides

    Returns:
        InstallerSettings instance
    """
    if path is None:
        return InstallerSettings()

    path = Path(path)
    if not path.exists():
        raise ConfigurationError(f"Settings file not found: {path}")

    try:
        with open(path) as f:
            raw = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}", context=str(e))

    if not isinstance(raw, dict):
        raise ConfigurationError(f"Settings file {path} must contain a mapping")

    return settings_from_dict(raw)
