"""
Asset strategies — where relocated images go and how they are linked.

Two addressing schemes share one skeleton (resolve source → copy →
rewrite reference) and differ only in path computation:

  colocated  — source:  <vault>/<note dir>/attachments/<file>
               dest:    <post dir>/attachments/<file>
                        <post dir>/attachments/cover-image/<file>
               link:    ./attachments/<file>

  flat       — source:  <vault>/<embed path>
               dest:    <project>/<images_folder>/<file>
               link:    /<images_folder>/<file>

Transforms receive a strategy; they never look at settings directly.
"""

from __future__ import annotations

import logging
import shutil
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from mdblogger.core.models.settings import AssetMode, BloggerSettings

logger = logging.getLogger(__name__)

ATTACHMENTS_DIR = "attachments"
COVER_IMAGE_DIR = "cover-image"


# ── Data Models ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class TransformContext:
    """Locations for one transform call.

    ``source_path`` is the note's path relative to ``vault_root``;
    ``destination_path`` is the file the rewritten note is written to.
    """

    source_path: str
    destination_path: Path
    vault_root: Path

    @property
    def note_dir(self) -> Path:
        return self.vault_root / PurePosixPath(self.source_path).parent

    @property
    def post_dir(self) -> Path:
        return self.destination_path.parent


def image_filename(raw_path: str) -> str:
    """Filename component of an embed or frontmatter path."""
    return PurePosixPath(raw_path.strip()).name


# ── Strategy Interface ──────────────────────────────────────────────


class AssetStrategy(ABC):
    """Abstract addressing scheme for relocated images."""

    @property
    @abstractmethod
    def mode(self) -> AssetMode:
        """The settings value that selects this strategy."""

    @abstractmethod
    def embed_source(self, ctx: TransformContext, raw_path: str) -> Path:
        """Absolute source path of a ``![[...]]`` image."""

    @abstractmethod
    def embed_folder(self, ctx: TransformContext) -> Path:
        """Folder body images are copied into."""

    @abstractmethod
    def embed_link(self, filename: str) -> str:
        """Link target written into the rewritten body reference."""

    @abstractmethod
    def cover_source(self, ctx: TransformContext, raw_path: str) -> Path:
        """Absolute source path of the frontmatter cover image."""

    @abstractmethod
    def cover_folder(self, ctx: TransformContext) -> Path:
        """Folder the cover image is copied into."""

    @abstractmethod
    def cover_link(self, filename: str) -> str:
        """Value written back into the ``image:`` frontmatter key."""


class ColocatedStrategy(AssetStrategy):
    """Images sit in ``attachments/`` next to the note and the post."""

    @property
    def mode(self) -> AssetMode:
        return AssetMode.COLOCATED

    def embed_source(self, ctx: TransformContext, raw_path: str) -> Path:
        return ctx.note_dir / ATTACHMENTS_DIR / image_filename(raw_path)

    def embed_folder(self, ctx: TransformContext) -> Path:
        return ctx.post_dir / ATTACHMENTS_DIR

    def embed_link(self, filename: str) -> str:
        return f"./{ATTACHMENTS_DIR}/{filename}"

    def cover_source(self, ctx: TransformContext, raw_path: str) -> Path:
        return ctx.note_dir / ATTACHMENTS_DIR / image_filename(raw_path)

    def cover_folder(self, ctx: TransformContext) -> Path:
        return ctx.post_dir / ATTACHMENTS_DIR / COVER_IMAGE_DIR

    def cover_link(self, filename: str) -> str:
        return f"./{ATTACHMENTS_DIR}/{COVER_IMAGE_DIR}/{filename}"


class FlatStrategy(AssetStrategy):
    """All images go to one project folder, linked from the site root."""

    def __init__(self, project_folder: Path, images_folder: str) -> None:
        self.project_folder = project_folder
        self.images_folder = images_folder.strip().strip("/")

    @property
    def mode(self) -> AssetMode:
        return AssetMode.FLAT

    def _site_path(self, filename: str) -> str:
        if self.images_folder:
            return f"/{self.images_folder}/{filename}"
        return f"/{filename}"

    def _vault_path(self, ctx: TransformContext, raw_path: str) -> Path:
        rel = PurePosixPath(raw_path.strip())
        if rel.is_absolute():
            rel = rel.relative_to("/")
        return ctx.vault_root / rel

    def embed_source(self, ctx: TransformContext, raw_path: str) -> Path:
        return self._vault_path(ctx, raw_path)

    def embed_folder(self, ctx: TransformContext) -> Path:
        return self.project_folder / self.images_folder

    def embed_link(self, filename: str) -> str:
        return self._site_path(filename)

    def cover_source(self, ctx: TransformContext, raw_path: str) -> Path:
        return self._vault_path(ctx, raw_path)

    def cover_folder(self, ctx: TransformContext) -> Path:
        return self.project_folder / self.images_folder

    def cover_link(self, filename: str) -> str:
        return self._site_path(filename)


def strategy_for(settings: BloggerSettings) -> AssetStrategy:
    """Pick the strategy selected by ``settings.asset_mode``."""
    if settings.asset_mode == AssetMode.FLAT:
        return FlatStrategy(settings.project_folder, settings.images_folder)
    return ColocatedStrategy()


# ── Copy Helper ─────────────────────────────────────────────────────


def copy_asset(source: Path, dest_folder: Path) -> Path | None:
    """Copy ``source`` into ``dest_folder``, creating it if needed.

    Returns the destination path, or None if ``source`` does not exist.
    Filesystem errors propagate; callers decide how to fall back.
    """
    if not source.is_file():
        return None

    dest_folder.mkdir(parents=True, exist_ok=True)
    dest = dest_folder / source.name

    if dest.exists() and dest.resolve() == source.resolve():
        logger.debug("Asset already in place: %s", dest)
        return dest

    shutil.copyfile(source, dest)
    logger.debug("Copied %s → %s", source, dest)
    return dest
