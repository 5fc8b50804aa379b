"""
Push use case — rewrite a vault note and write it into the blog project.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from mdblogger.core.models.settings import BloggerSettings
from mdblogger.core.services.asset_strategies import TransformContext, strategy_for
from mdblogger.core.services.md_transforms import Notify, transform_document
from mdblogger.core.services.note_sync import (
    NoteNotFoundError,
    ProjectFolderError,
    ensure_project_folder,
    post_destination,
    vault_relative,
)

logger = logging.getLogger(__name__)


@dataclass
class PushResult:
    """Outcome of pushing one note."""

    note: Path
    destination: Path | None = None
    copied: list[Path] = field(default_factory=list)
    missing: list[Path] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        if self.error:
            return {"ok": False, "note": str(self.note), "error": self.error}
        return {
            "ok": True,
            "note": str(self.note),
            "destination": str(self.destination),
            "copied": [str(p) for p in self.copied],
            "missing": [str(p) for p in self.missing],
            "failed": self.failed,
        }


def push_note(
    note: Path,
    settings: BloggerSettings,
    target_dir: Path | None = None,
    notify: Notify | None = None,
) -> PushResult:
    """Push ``note`` into the project (or into ``target_dir``).

    The note's images are copied and its references rewritten for the
    destination layout selected by ``settings.asset_mode``.

    Args:
        note: Path to the note inside the vault.
        settings: Loaded blogger settings.
        target_dir: Optional custom folder instead of the posts folder.
        notify: Sink for user-facing warnings (missing images).

    Returns:
        PushResult with the destination and per-image outcome.
    """
    result = PushResult(note=note)
    vault_root = settings.resolved_vault_root()

    try:
        if target_dir is None:
            ensure_project_folder(settings)
        source_path = vault_relative(note, vault_root)
        destination = post_destination(note, settings, target_dir)
    except (ProjectFolderError, NoteNotFoundError) as e:
        result.error = str(e)
        return result

    try:
        text = note.read_text(encoding="utf-8")
        destination.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        result.error = str(e)
        return result

    ctx = TransformContext(
        source_path=source_path,
        destination_path=destination,
        vault_root=vault_root,
    )
    transformed = transform_document(
        text,
        ctx,
        strategy_for(settings),
        warn_missing=settings.warn_missing_images,
        notify=notify,
    )

    try:
        destination.write_text(transformed.text, encoding="utf-8")
    except OSError as e:
        result.error = str(e)
        return result

    result.destination = destination
    result.copied = transformed.copied
    result.missing = transformed.missing
    result.failed = transformed.failed
    logger.info("Pushed %s → %s (%d images)", source_path, destination, len(result.copied))
    return result
