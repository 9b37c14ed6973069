"""Settings manager for jsprobe using TOML files."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import toml

from . import config
from .errors import ConfigError

logger = logging.getLogger(__name__)


@dataclass
class ProbeSettings:
    """Detector settings read from ``config.toml``."""
    tolerate_errors: bool = False
    load_events: List[str] = field(default_factory=lambda: list(config.DEFAULT_LOAD_EVENTS))
    debug_object: str = config.DEFAULT_DEBUG_OBJECT
    debug_method: str = config.DEFAULT_DEBUG_METHOD
    annotations: List[str] = field(default_factory=lambda: list(config.DEFAULT_ANNOTATIONS))

    def to_toml_dict(self) -> Dict[str, Any]:
        return {
            "parser": {"tolerate_errors": self.tolerate_errors},
            "onload": {"events": list(self.load_events)},
            "debug": {"object": self.debug_object, "method": self.debug_method},
            "comments": {"annotations": list(self.annotations)},
        }


def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    value = data.get(name, {})
    if not isinstance(value, dict):
        raise ConfigError(f"[{name}] must be a table")
    return value


def _string_list(section: Dict[str, Any], key: str, default: List[str]) -> List[str]:
    value = section.get(key, default)
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"'{key}' must be a list of strings")
    return list(value)


def _string(section: Dict[str, Any], key: str, default: str) -> str:
    value = section.get(key, default)
    if not isinstance(value, str) or not value:
        raise ConfigError(f"'{key}' must be a non-empty string")
    return value


def settings_from_dict(data: Dict[str, Any]) -> ProbeSettings:
    """Build settings from a parsed TOML document, validating every field."""
    defaults = ProbeSettings()

    parser_section = _section(data, "parser")
    tolerate = parser_section.get("tolerate_errors", defaults.tolerate_errors)
    if not isinstance(tolerate, bool):
        raise ConfigError("'tolerate_errors' must be true or false")

    onload_section = _section(data, "onload")
    debug_section = _section(data, "debug")
    comments_section = _section(data, "comments")

    return ProbeSettings(
        tolerate_errors=tolerate,
        load_events=_string_list(onload_section, "events", defaults.load_events),
        debug_object=_string(debug_section, "object", defaults.debug_object),
        debug_method=_string(debug_section, "method", defaults.debug_method),
        annotations=_string_list(comments_section, "annotations", defaults.annotations),
    )


def load_settings(path: Optional[Path] = None) -> ProbeSettings:
    """Load settings from TOML file.

    Args:
        path: Explicit config file; defaults to ``config.CONFIG_FILE``.

    Returns:
        Parsed settings, or defaults when the file does not exist.

    Raises:
        ConfigError: If the file cannot be read or holds invalid values.
    """
    config_file = path or config.CONFIG_FILE
    if not config_file.exists():
        logger.debug("No config file at %s, using defaults", config_file)
        return ProbeSettings()

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = toml.load(f)
    except (OSError, UnicodeDecodeError, toml.TomlDecodeError) as exc:
        raise ConfigError(f"Cannot read {config_file}: {exc}") from exc

    settings = settings_from_dict(data)
    logger.debug("Loaded settings from %s", config_file)
    return settings


def save_settings(settings: ProbeSettings, path: Optional[Path] = None) -> Path:
    """Write *settings* to TOML file and return the path written."""
    config_file = path or config.CONFIG_FILE
    config_file.parent.mkdir(parents=True, exist_ok=True)

    try:
        with open(config_file, "w", encoding="utf-8") as f:
            toml.dump(settings.to_toml_dict(), f)
    except OSError as exc:
        raise ConfigError(f"Cannot write {config_file}: {exc}") from exc
    return config_file
