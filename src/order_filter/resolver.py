"""Resolve the authoritative settings for a run.

Settings come from exactly one source: either the CLI flags as given, or a
JSON config file that replaces them wholesale. The two are never merged.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from pydantic import ValidationError

from order_filter.config import Settings
from order_filter.validation import ensure_valid

logger = logging.getLogger(__name__)


class ResolutionError(Exception):
    """Raised when a declared config file is missing or malformed."""


@dataclass(frozen=True, slots=True)
class CliProvided:
    settings: Settings


@dataclass(frozen=True, slots=True)
class ConfigFile:
    path: Path


SettingsSource = CliProvided | ConfigFile


def source_from_cli(settings: Settings) -> SettingsSource:
    """Pick the settings source implied by CLI-supplied settings."""

    if settings.config_file_path is not None:
        return ConfigFile(settings.config_file_path)
    return CliProvided(settings)


def load_config_file(path: Path) -> Settings:
    """Read a settings object from a JSON config file.

    The `configFilePath` key inside the file, if any, is ignored.

    Raises:
        ResolutionError: if the file is missing, unreadable or malformed.
    """

    if not path.is_file():
        raise ResolutionError(f"The config file '{path}' does not exist.")

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as exc:
        raise ResolutionError(f"Failed to read the config file '{path}': {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ResolutionError(f"Failed to parse the config file '{path}': {exc}") from exc

    if not isinstance(raw, dict):
        raise ResolutionError(f"Failed to parse the config file '{path}': expected a JSON object")

    for key in ("configFilePath", "config_file_path"):
        raw.pop(key, None)

    try:
        return Settings.model_validate(raw)
    except ValidationError as exc:
        raise ResolutionError(f"Failed to parse the config file '{path}': {exc}") from exc


def resolve(source: SettingsSource) -> Settings:
    """Turn a settings source into one concrete :class:`Settings` value.

    File-supplied settings are validated here, since the file path check
    short-circuits validation of the run settings.

    Raises:
        ResolutionError: if the config file is missing or malformed.
        SettingsValidationError: if the config file contents are invalid.
    """

    if isinstance(source, CliProvided):
        return source.settings

    loaded = load_config_file(source.path)
    ensure_valid(loaded)
    logger.info("Settings loaded from config file", extra={"path": str(source.path)})
    return loaded.model_copy(update={"config_file_path": source.path, "has_config": True})
