"""
Note sync operations — path rules for push, pull and folder browsing.

Channel-independent: no click dependency.  Raises typed errors that the
use cases turn into one-line messages.
"""

from __future__ import annotations

import logging
from pathlib import Path

from mdblogger.core.models.settings import BloggerSettings

logger = logging.getLogger(__name__)

MISSING_PROJECT_MESSAGE = (
    "The project folder does not exist. "
    "Please create the path or update the current path in settings."
)


class ProjectFolderError(Exception):
    """Raised when the destination project folder is missing."""


class NoteNotFoundError(Exception):
    """Raised when a note to push or pull cannot be located."""


# ── Project folder ──────────────────────────────────────────────


def ensure_project_folder(settings: BloggerSettings) -> Path:
    """Return the project folder, or raise if it does not exist."""
    folder = settings.project_folder
    if not folder.is_dir():
        logger.debug("Project folder missing: %s", folder)
        raise ProjectFolderError(MISSING_PROJECT_MESSAGE)
    return folder


# ── Vault paths ─────────────────────────────────────────────────


def vault_relative(note: Path, vault_root: Path) -> str:
    """Path of ``note`` relative to the vault root, POSIX style.

    Raises:
        NoteNotFoundError: If the note is missing or outside the vault.
    """
    note = note.resolve()
    if not note.is_file():
        raise NoteNotFoundError(f"Note not found: {note}")
    try:
        return note.relative_to(vault_root.resolve()).as_posix()
    except ValueError:
        raise NoteNotFoundError(
            f"Note {note} is not inside the vault {vault_root}"
        ) from None


# ── Destinations ────────────────────────────────────────────────


def post_destination(note: Path, settings: BloggerSettings, target_dir: Path | None = None) -> Path:
    """Where a pushed note is written.

    Default:      <project>/<posts_folder>/<note stem>/<note name>
    Custom path:  <target_dir>/<note name>
    """
    if target_dir is not None:
        if not target_dir.is_dir():
            raise ProjectFolderError(f"Target folder does not exist: {target_dir}")
        return target_dir / note.name
    return settings.posts_dir / note.stem / note.name


def pull_source(note: Path, settings: BloggerSettings, source_dir: Path | None = None) -> Path:
    """Find the project copy of ``note`` to pull back into the vault.

    Looks in the pushed post folder first, then the project root.

    Raises:
        NoteNotFoundError: If no candidate file exists.
    """
    if source_dir is not None:
        candidates = [source_dir / note.name]
    else:
        candidates = [
            post_destination(note, settings),
            settings.project_folder / note.name,
        ]

    for candidate in candidates:
        if candidate.is_file():
            return candidate

    raise NoteNotFoundError(
        f"No project copy of {note.name} found (looked in: "
        + ", ".join(str(c) for c in candidates) + ")"
    )


# ── Folder listing ──────────────────────────────────────────────


def list_folders(path: Path, note_name: str | None = None, show_hidden: bool = False) -> list[str]:
    """List pickable entries in ``path``.

    Sub-directories plus a file named ``note_name`` if present.
    Dot-entries are hidden unless ``show_hidden``.  ``..`` is appended
    so callers can navigate up.
    """
    entries = []
    for child in sorted(path.iterdir(), key=lambda p: p.name.lower()):
        if child.name.startswith(".") and not show_hidden:
            continue
        try:
            is_dir = child.is_dir()
        except OSError:
            continue
        if is_dir or (note_name and child.name == note_name):
            entries.append(child.name)

    entries.append("..")
    return entries
