"""
Configuration loader — reads blogger.yml into BloggerSettings.

Reads YAML, validates against the Pydantic schema, and returns a
typed settings object.  Relative paths in the file are resolved
against the directory the file lives in.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

import yaml

from mdblogger.core.models.settings import BloggerSettings

logger = logging.getLogger(__name__)

# Default config filename
SETTINGS_FILE = "blogger.yml"


class ConfigError(Exception):
    """Raised when blogger settings are invalid or missing."""


def find_settings_file(start_dir: Path | None = None) -> Path | None:
    """Search for blogger.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to blogger.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / SETTINGS_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_settings(path: Path | None = None) -> BloggerSettings:
    """Load and validate blogger settings.

    Args:
        path: Explicit path to blogger.yml. If None, searches upward.

    Returns:
        Validated BloggerSettings with absolute vault and project paths.

    Raises:
        ConfigError: If the file is missing or invalid.
    """
    if path is None:
        path = find_settings_file()

    if path is None:
        raise ConfigError(
            f"No {SETTINGS_FILE} found. "
            "Run 'mdblogger config init' to create one, or specify --config."
        )

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading settings from %s", path)

    settings_data = _settings_section(_read_mapping(path))

    try:
        settings = BloggerSettings.model_validate(settings_data)
    except Exception as e:
        raise ConfigError(f"Invalid blogger settings: {e}") from e

    base = path.parent.resolve()
    settings.vault_root = _anchor(settings.vault_root, base) if settings.vault_root else base
    settings.project_folder = _anchor(settings.project_folder, base)

    logger.info(
        "Loaded settings: vault=%s project=%s mode=%s",
        settings.vault_root, settings.project_folder, settings.asset_mode.value,
    )
    return settings


def save_settings(settings: BloggerSettings, path: Path) -> None:
    """Write settings to YAML (atomic write)."""
    _write_mapping(settings.model_dump(mode="json"), path)


def update_setting(path: Path, key: str, value: object) -> BloggerSettings:
    """Change one key in blogger.yml, leaving every other key as written.

    The file is re-read as plain YAML rather than through
    ``load_settings`` so relative paths and unset keys stay untouched.
    A ``blogger:`` wrapper, if present, is kept.

    Raises:
        ConfigError: If the file cannot be read or ``key`` is unknown.
        pydantic.ValidationError: If ``value`` is invalid for ``key``.
    """
    if key not in BloggerSettings.model_fields:
        raise ConfigError(
            f"Unknown setting '{key}'. Valid: {', '.join(BloggerSettings.model_fields)}"
        )

    data = _read_mapping(path)
    section = _settings_section(data)

    candidate = {**section, key: value}
    validated = BloggerSettings.model_validate(candidate)
    section[key] = validated.model_dump(mode="json")[key]

    _write_mapping(data, path)
    logger.info("Set %s in %s", key, path)
    return validated


def _read_mapping(path: Path) -> dict:
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")
    return data


def _settings_section(data: dict) -> dict:
    # The YAML may wrap everything under a "blogger" key or be flat
    return data["blogger"] if isinstance(data.get("blogger"), dict) else data


def _write_mapping(data: dict, path: Path) -> None:
    """Dump ``data`` to ``path`` via write-to-temp-then-rename.

    A crash never leaves a half-written blogger.yml behind.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    content = yaml.safe_dump(data, sort_keys=False, allow_unicode=True)

    try:
        fd, tmp_path = tempfile.mkstemp(
            dir=path.parent,
            prefix=".blogger_",
            suffix=".tmp",
        )
        os.close(fd)
        tmp = Path(tmp_path)
        try:
            tmp.write_text(content, encoding="utf-8")
            tmp.replace(path)
            logger.debug("Settings saved to %s", path)
        except Exception:
            tmp.unlink(missing_ok=True)
            raise
    except Exception as e:
        logger.error("Failed to save settings to %s: %s", path, e)
        raise


def _anchor(value: Path, base: Path) -> Path:
    """Resolve ``value`` against ``base`` unless it is already absolute."""
    expanded = value.expanduser()
    return expanded if expanded.is_absolute() else (base / expanded).resolve()
