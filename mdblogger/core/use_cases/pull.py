"""
Pull use case — copy a note's project version back into the vault.

The text is written verbatim; links are not un-rewritten.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from mdblogger.core.models.settings import BloggerSettings
from mdblogger.core.services.note_sync import (
    NoteNotFoundError,
    ProjectFolderError,
    ensure_project_folder,
    pull_source,
)

logger = logging.getLogger(__name__)


@dataclass
class PullResult:
    """Outcome of pulling one note."""

    note: Path
    source: Path | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        if self.error:
            return {"ok": False, "note": str(self.note), "error": self.error}
        return {"ok": True, "note": str(self.note), "source": str(self.source)}


def pull_note(
    note: Path,
    settings: BloggerSettings,
    source_dir: Path | None = None,
) -> PullResult:
    """Overwrite ``note`` with its copy from the project (or ``source_dir``)."""
    result = PullResult(note=note)

    try:
        if source_dir is None:
            ensure_project_folder(settings)
        source = pull_source(note, settings, source_dir)
    except (ProjectFolderError, NoteNotFoundError) as e:
        result.error = str(e)
        return result

    try:
        text = source.read_text(encoding="utf-8")
        note.write_text(text, encoding="utf-8")
    except OSError as e:
        result.error = str(e)
        return result

    result.source = source
    logger.info("Pulled %s ← %s", note, source)
    return result
