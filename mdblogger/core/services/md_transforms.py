"""
Markdown transforms — rewrite a vault note for its place in the blog project.

Two passes over immutable text, each returning a new string:
  - Frontmatter normalization (cover image relocation, tag list flattening)
  - Inline image relocation (``![[file]]`` → ``![file](link)``)

Only the matched spans change.  Everything else, including the ``---``
delimiters, is passed through untouched.  A reference whose image cannot
be found or copied is left exactly as written.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from mdblogger.core.services.asset_strategies import (
    AssetStrategy,
    ColocatedStrategy,
    TransformContext,
    copy_asset,
    image_filename,
)

logger = logging.getLogger(__name__)

Notify = Callable[[str], None]


@dataclass
class TransformResult:
    """Rewritten text plus what happened to each image reference."""

    text: str
    copied: list[Path] = field(default_factory=list)
    missing: list[Path] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "copied": [str(p) for p in self.copied],
            "missing": [str(p) for p in self.missing],
            "failed": self.failed,
        }


# ── Frontmatter ─────────────────────────────────────────────────────

# Opening line is exactly ---, closing line is exactly ---.
# Group 1 holds the block body including its last newline (or None
# for an empty block).
_FRONTMATTER_RE = re.compile(r"\A---\n(.*?\n)?---(?=\n|\Z)", re.DOTALL)

_COVER_IMAGE_RE = re.compile(
    r"^image:[ \t]*(\./[^\n]*?\.(?:png|jpe?g|gif))[ \t]*$",
    re.IGNORECASE | re.MULTILINE,
)

_TAGS_RE = re.compile(r"^tags:[ \t]*\n((?:  - .*\n)*)", re.MULTILINE)


def split_frontmatter(text: str) -> tuple[str, str]:
    """Split ``text`` into (frontmatter incl. delimiters, body)."""
    m = _FRONTMATTER_RE.match(text)
    if not m:
        return "", text
    return text[:m.end()], text[m.end():]


def format_tags(tags_block: str) -> str:
    """Render bullet lines as ``tags: ["a", "b"]`` plus a newline."""
    tags = []
    for line in tags_block.split("\n"):
        item = line.strip()
        if not item.startswith("- "):
            continue
        tag = item[2:].strip()
        if tag.startswith("#"):
            tag = tag[1:]
        if not tag:
            continue
        escaped = tag.replace("\\", "\\\\").replace('"', '\\"')
        tags.append(f'"{escaped}"')
    return f"tags: [{', '.join(tags)}]\n"


def _relocate_cover_image(
    block: str,
    ctx: TransformContext,
    strategy: AssetStrategy,
    result: TransformResult,
) -> str:
    def _replace(m: re.Match) -> str:
        image_path = m.group(1)
        filename = image_filename(image_path)
        try:
            source = strategy.cover_source(ctx, image_path)
            copied = copy_asset(source, strategy.cover_folder(ctx))
        except OSError as e:
            logger.error("Error processing frontmatter image %s: %s", image_path, e)
            result.failed.append(image_path)
            return m.group(0)

        if copied is None:
            # Missing cover images are skipped without a user notice
            logger.info("Cover image not found at: %s", source)
            result.missing.append(source)
            return m.group(0)

        result.copied.append(copied)
        return f"image: {strategy.cover_link(filename)}"

    return _COVER_IMAGE_RE.sub(_replace, block, count=1)


def normalize_frontmatter(
    text: str,
    ctx: TransformContext,
    strategy: AssetStrategy,
    result: TransformResult | None = None,
) -> str:
    """Relocate the cover image and flatten the tag list.

    Returns ``text`` unchanged when there is no frontmatter block.
    """
    m = _FRONTMATTER_RE.match(text)
    if not m or m.group(1) is None:
        return text

    if result is None:
        result = TransformResult(text=text)

    block = m.group(1)
    new_block = _relocate_cover_image(block, ctx, strategy, result)
    new_block = _TAGS_RE.sub(lambda t: format_tags(t.group(1)), new_block, count=1)

    if new_block == block:
        return text
    return text[:m.start(1)] + new_block + text[m.end(1):]


# ── Inline Images ───────────────────────────────────────────────────

_EMBED_RE = re.compile(r"!\[\[(.*?)\]\]")


def relocate_inline_images(
    text: str,
    ctx: TransformContext,
    strategy: AssetStrategy,
    result: TransformResult | None = None,
    *,
    warn_missing: bool = True,
    notify: Notify | None = None,
) -> str:
    """Copy every ``![[...]]`` image and rewrite it as a markdown image.

    Each embed is handled on its own: a missing or uncopyable image keeps
    its original token and the rest of the text is still processed.
    """
    if result is None:
        result = TransformResult(text=text)

    def _replace(m: re.Match) -> str:
        image_path = m.group(1).strip()
        filename = image_filename(image_path)
        if not filename:
            return m.group(0)

        try:
            source = strategy.embed_source(ctx, image_path)
            copied = copy_asset(source, strategy.embed_folder(ctx))
        except OSError as e:
            logger.error("Error processing image %s: %s", image_path, e)
            result.failed.append(image_path)
            return m.group(0)

        if copied is None:
            result.missing.append(source)
            if not warn_missing:
                logger.info("Image not found at: %s", source)
            elif notify is not None:
                notify(f"Image not found: {source}")
            else:
                logger.warning("Image not found at: %s", source)
            return m.group(0)

        result.copied.append(copied)
        return f"![{filename}]({strategy.embed_link(filename)})"

    return _EMBED_RE.sub(_replace, text)


# ── Whole Document ──────────────────────────────────────────────────


def transform_document(
    text: str,
    ctx: TransformContext,
    strategy: AssetStrategy | None = None,
    *,
    warn_missing: bool = True,
    notify: Notify | None = None,
) -> TransformResult:
    """Run both passes and report copied, missing and failed images.

    Args:
        text: Full note text.
        ctx: Vault root, note path and destination file.
        strategy: Asset addressing scheme (default: colocated).
        warn_missing: Call ``notify`` for body images that are not found.
        notify: User-facing warning sink (e.g. the CLI's stderr).

    Returns:
        TransformResult with the rewritten text.
    """
    strategy = strategy or ColocatedStrategy()
    result = TransformResult(text=text)

    normalized = normalize_frontmatter(text, ctx, strategy, result)
    head, body = split_frontmatter(normalized)
    body = relocate_inline_images(
        body, ctx, strategy, result,
        warn_missing=warn_missing, notify=notify,
    )

    result.text = head + body
    logger.debug(
        "Transformed %s (%s): %d copied, %d missing, %d failed",
        ctx.source_path, strategy.mode.value, len(result.copied), len(result.missing), len(result.failed),
    )
    return result


def process_images(
    text: str,
    source_path: str,
    destination_path: Path,
    vault_root: Path,
    strategy: AssetStrategy | None = None,
    *,
    warn_missing: bool = True,
    notify: Notify | None = None,
) -> str:
    """Rewrite a note for ``destination_path`` and return the new text."""
    ctx = TransformContext(
        source_path=source_path,
        destination_path=Path(destination_path),
        vault_root=Path(vault_root),
    )
    return transform_document(
        text, ctx, strategy, warn_missing=warn_missing, notify=notify,
    ).text
