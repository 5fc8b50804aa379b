"""
Markdown Blogger — CLI entrypoint.

Usage:
    python -m mdblogger.main --help
    python -m mdblogger.main push notes/post.md
    python -m mdblogger.main config check
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click

from mdblogger import __version__
from mdblogger.core.observability.logging_config import (
    ENV_FILE,
    ENV_FILE_LEVEL,
    resolve_level,
    setup_logging,
)

if TYPE_CHECKING:
    from mdblogger.core.models.settings import BloggerSettings


@click.group()
@click.version_option(version=__version__, prog_name="mdblogger")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to blogger.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """Markdown Blogger — push vault notes and their images into a blog project."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    setup_logging(
        level=resolve_level(debug=debug, verbose=verbose, quiet=quiet),
        log_file=os.environ.get(ENV_FILE),
        log_file_level=os.environ.get(ENV_FILE_LEVEL),
    )


def _load_settings(ctx: click.Context) -> BloggerSettings:
    """Load settings or exit with a one-line error."""
    from mdblogger.core.config.loader import ConfigError, load_settings

    try:
        return load_settings(ctx.obj.get("config_path"))
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)


def _warn(message: str) -> None:
    click.secho(f"⚠️  {message}", fg="yellow", err=True)


@cli.command()
@click.argument("note", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--to", "destination", required=True, type=click.Path(dir_okay=False),
    help="File path the rewritten note is meant for.",
)
@click.option("--output", "-o", is_flag=True, help="Write the result to --to instead of stdout.")
@click.pass_context
def transform(ctx: click.Context, note: str, destination: str, output: bool) -> None:
    """Rewrite a note's images and frontmatter for DESTINATION."""
    from mdblogger.core.services.asset_strategies import strategy_for
    from mdblogger.core.services.md_transforms import process_images
    from mdblogger.core.services.note_sync import NoteNotFoundError, vault_relative

    settings = _load_settings(ctx)
    vault_root = settings.resolved_vault_root()
    note_path = Path(note)
    dest = Path(destination).resolve()

    try:
        source_path = vault_relative(note_path, vault_root)
    except NoteNotFoundError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    text = process_images(
        note_path.read_text(encoding="utf-8"),
        source_path,
        dest,
        vault_root,
        strategy_for(settings),
        warn_missing=settings.warn_missing_images,
        notify=_warn,
    )

    if output:
        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_text(text, encoding="utf-8")
        click.secho(f"✅ Written: {dest}", fg="green")
    else:
        click.echo(text, nl=False)


@cli.command()
@click.argument("note", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--to", "target_dir", type=click.Path(file_okay=False), default=None,
    help="Push into this folder instead of the posts folder.",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def push(ctx: click.Context, note: str, target_dir: str | None, as_json: bool) -> None:
    """Push a note (and its images) into the blog project."""
    from mdblogger.core.use_cases.push import push_note

    settings = _load_settings(ctx)
    result = push_note(
        Path(note),
        settings,
        target_dir=Path(target_dir).resolve() if target_dir else None,
        notify=None if as_json else _warn,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.ok else 1)

    if not result.ok:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    click.secho(f"✅ File and images pushed successfully to {result.destination}", fg="green", bold=True)
    if not ctx.obj.get("quiet"):
        for path in result.copied:
            click.echo(f"   📎 {path}")
        for ref in result.failed:
            click.secho(f"   ✗ {ref}", fg="red")


@cli.command()
@click.argument("note", type=click.Path(dir_okay=False))
@click.option(
    "--from", "source_dir", type=click.Path(exists=True, file_okay=False), default=None,
    help="Pull from this folder instead of the project.",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def pull(ctx: click.Context, note: str, source_dir: str | None, as_json: bool) -> None:
    """Overwrite a note with its copy from the blog project."""
    from mdblogger.core.use_cases.pull import pull_note

    settings = _load_settings(ctx)
    result = pull_note(
        Path(note),
        settings,
        source_dir=Path(source_dir).resolve() if source_dir else None,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.ok else 1)

    if not result.ok:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    click.secho(f"✅ Your file has been pulled! From {result.source}", fg="green", bold=True)


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def validate(ctx: click.Context, as_json: bool) -> None:
    """Check that the project folder exists."""
    from mdblogger.core.services.note_sync import ProjectFolderError, ensure_project_folder

    settings = _load_settings(ctx)
    try:
        folder = ensure_project_folder(settings)
    except ProjectFolderError as e:
        if as_json:
            click.echo(json.dumps({"valid": False, "error": str(e)}, indent=2))
        else:
            click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    if as_json:
        click.echo(json.dumps({"valid": True, "project_folder": str(folder)}, indent=2))
    else:
        click.secho(f"✅ Valid path: {folder}", fg="green")


@cli.command()
@click.argument("path", type=click.Path(exists=True, file_okay=False), default=".")
@click.option("--note", "note_name", default=None, help="Also list a file with this name.")
@click.pass_context
def folders(ctx: click.Context, path: str, note_name: str | None) -> None:
    """List folders under PATH that a note can be pushed to."""
    from mdblogger.core.services.note_sync import list_folders

    settings = _load_settings(ctx)
    for entry in list_folders(Path(path), note_name, settings.show_hidden_folders):
        click.echo(entry)


from mdblogger.ui.cli.config import config

cli.add_command(config)


if __name__ == "__main__":
    cli()
