"""
Settings model — how notes are pushed into the blog project.

Loaded from blogger.yml.  The vault side (where notes live) and the
project side (where posts and images are written) are both plain
directories; nothing here talks to the authoring app itself.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, field_validator


class AssetMode(str, Enum):
    """Where relocated images are written and how they are referenced."""

    COLOCATED = "colocated"  # <post dir>/attachments/, relative links
    FLAT = "flat"            # <project>/<images_folder>/, site-root links


class BloggerSettings(BaseModel):
    """User-configured settings for push / pull."""

    vault_root: Path | None = None
    project_folder: Path
    posts_folder: str = ""
    images_folder: str = ""
    show_hidden_folders: bool = False
    asset_mode: AssetMode = AssetMode.COLOCATED
    warn_missing_images: bool = True

    @field_validator("posts_folder", "images_folder")
    @classmethod
    def _strip_slashes(cls, value: str) -> str:
        return value.strip().strip("/")

    @property
    def posts_dir(self) -> Path:
        """Folder that receives one sub-folder per pushed note."""
        return self.project_folder / self.posts_folder

    def resolved_vault_root(self) -> Path:
        """The vault root, falling back to the current directory."""
        return (self.vault_root or Path.cwd()).resolve()
