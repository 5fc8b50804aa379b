"""
Config check use case — validate blogger.yml and report issues.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from mdblogger.core.config.loader import ConfigError, find_settings_file, load_settings
from mdblogger.core.models.settings import AssetMode, BloggerSettings
from mdblogger.core.services.note_sync import MISSING_PROJECT_MESSAGE


@dataclass
class ConfigCheckResult:
    """Result of settings validation."""

    valid: bool = False
    settings: BloggerSettings | None = None
    config_path: Path | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "config_path": str(self.config_path) if self.config_path else None,
            "errors": self.errors,
            "warnings": self.warnings,
            "project_folder": str(self.settings.project_folder) if self.settings else None,
            "asset_mode": self.settings.asset_mode.value if self.settings else None,
        }


def check_config(config_path: Path | None = None) -> ConfigCheckResult:
    """Validate blogger settings and report issues.

    Errors make the settings unusable for push/pull; warnings do not.
    """
    result = ConfigCheckResult()

    if config_path is None:
        config_path = find_settings_file()

    if config_path is None:
        result.errors.append("No blogger.yml found.")
        return result

    result.config_path = config_path

    try:
        settings = load_settings(config_path)
        result.settings = settings
    except ConfigError as e:
        result.errors.append(str(e))
        return result

    if not settings.project_folder.is_dir():
        result.errors.append(MISSING_PROJECT_MESSAGE)

    if settings.vault_root is not None and not settings.vault_root.is_dir():
        result.warnings.append(f"Vault root does not exist: {settings.vault_root}")

    if settings.asset_mode == AssetMode.FLAT and not settings.images_folder:
        result.warnings.append(
            "Flat asset mode with no images_folder: images land in the project root."
        )

    if settings.posts_folder and not settings.posts_dir.is_dir():
        result.warnings.append(
            f"Posts folder does not exist yet (created on push): {settings.posts_folder}"
        )

    result.valid = len(result.errors) == 0
    return result
