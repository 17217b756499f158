"""
Converter Settings
Defaults for naming, attribute spellings and engine selection, optionally loaded from JSON.
"""

import json
import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Tuple, Union

from .errors import SettingsError

ENGINE_NAMES = ('uno', 'mapping')


@dataclass(frozen=True)
class ConverterSettings:
    style_token: str = 'styles'
    plain_prefix: str = 'node'
    class_attributes: Tuple[str, ...] = ('class', 'className')
    default_layer: str = 'default'
    engine: str = 'uno'
    disambiguate_components: bool = False
    header_comment: str = 'Generated CSS Modules from utility classes'
    stylesheet_suffix: str = '.module.css'

    def override(self, **changes: Any) -> 'ConverterSettings':
        """Return a copy with the non-None values of `changes` applied."""
        changes = {key: value for key, value in changes.items() if value is not None}
        return _validated(replace(self, **changes)) if changes else self


def _validated(settings: ConverterSettings) -> ConverterSettings:
    if settings.engine not in ENGINE_NAMES:
        raise SettingsError(f"Unknown engine '{settings.engine}', expected one of {', '.join(ENGINE_NAMES)}")
    if not settings.class_attributes:
        raise SettingsError("class_attributes must name at least one attribute")
    if not settings.style_token.isidentifier():
        raise SettingsError(f"style_token '{settings.style_token}' is not a valid identifier")
    return settings


def settings_from_dict(data: Dict[str, Any]) -> ConverterSettings:
    """Build settings from a plain dict, rejecting unknown keys and mistyped values."""
    known = {f.name: f for f in fields(ConverterSettings)}
    unknown = set(data) - set(known)
    if unknown:
        raise SettingsError(f"Unknown settings: {', '.join(sorted(unknown))}")
    values = {}
    for key, value in data.items():
        default = getattr(ConverterSettings, key)
        if isinstance(default, tuple):
            if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
                raise SettingsError(f"Setting '{key}' must be a list of strings")
            value = tuple(value)
        elif not isinstance(value, type(default)):
            raise SettingsError(f"Setting '{key}' must be of type {type(default).__name__}")
        values[key] = value
    return _validated(ConverterSettings(**values))


def load_settings(path: Union[str, Path, None] = None) -> ConverterSettings:
    """Load settings from a JSON file; with no path, return the defaults."""
    if path is None:
        return ConverterSettings()
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise SettingsError(f"Cannot read settings file {path}: {e}") from e
    if not isinstance(data, dict):
        raise SettingsError(f"Settings file {path} must contain a JSON object")
    return settings_from_dict(data)


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(levelname)s %(name)s: %(message)s',
    )
