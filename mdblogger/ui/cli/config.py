"""
CLI commands for blogger settings.

Thin wrappers over ``mdblogger.core.config.loader`` and
``mdblogger.core.use_cases.config_check``.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click
import yaml


def _settings_path(ctx: click.Context) -> Path | None:
    """Resolve blogger.yml from context or by searching upward."""
    config_path: Path | None = ctx.obj.get("config_path")
    if config_path is None:
        from mdblogger.core.config.loader import find_settings_file

        config_path = find_settings_file()
    return config_path


@click.group()
def config() -> None:
    """Blogger settings commands."""


@config.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_check(ctx: click.Context, as_json: bool) -> None:
    """Validate blogger.yml."""
    from mdblogger.core.use_cases.config_check import check_config

    result = check_config(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)

    if result.valid:
        assert result.settings is not None  # guaranteed when valid
        click.secho("✅ Configuration is valid", fg="green", bold=True)
        click.echo(f"   Vault: {result.settings.vault_root}")
        click.echo(f"   Project: {result.settings.project_folder}")
        click.echo(f"   Asset mode: {result.settings.asset_mode.value}")
    else:
        click.secho("❌ Configuration errors:", fg="red", bold=True)
        for err in result.errors:
            click.echo(f"   • {err}")

    if result.warnings:
        click.echo()
        click.secho("⚠️  Warnings:", fg="yellow")
        for warn in result.warnings:
            click.echo(f"   • {warn}")

    if not result.valid:
        sys.exit(1)


@config.command("show")
@click.pass_context
def config_show(ctx: click.Context) -> None:
    """Print the effective settings."""
    from mdblogger.core.config.loader import ConfigError, load_settings

    try:
        settings = load_settings(ctx.obj.get("config_path"))
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    click.echo(yaml.safe_dump(settings.model_dump(mode="json"), sort_keys=False), nl=False)


@config.command("set")
@click.argument("key")
@click.argument("value")
@click.pass_context
def config_set(ctx: click.Context, key: str, value: str) -> None:
    """Change one setting and save blogger.yml."""
    from pydantic import ValidationError

    from mdblogger.core.config.loader import SETTINGS_FILE, ConfigError, update_setting

    path = _settings_path(ctx)
    if path is None or not path.is_file():
        click.secho(f"❌ No {SETTINGS_FILE} found (run 'mdblogger config init')", fg="red")
        sys.exit(1)

    try:
        update_setting(path, key, value)
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)
    except ValidationError as e:
        click.secho(f"❌ Invalid value for {key}: {e.errors()[0]['msg']}", fg="red")
        sys.exit(1)

    click.secho(f"✅ {key} = {value}", fg="green")


@config.command("init")
@click.option("--project-folder", required=True, help="Blog project folder (absolute path).")
@click.option("--posts-folder", default="", help="Posts folder, relative to the project.")
@click.option("--images-folder", default="", help="Images folder, relative to the project.")
@click.option(
    "--mode", "asset_mode", type=click.Choice(["colocated", "flat"]), default="colocated",
    help="Where copied images go.",
)
@click.option("--force", is_flag=True, help="Overwrite an existing blogger.yml.")
@click.pass_context
def config_init(
    ctx: click.Context,
    project_folder: str,
    posts_folder: str,
    images_folder: str,
    asset_mode: str,
    force: bool,
) -> None:
    """Create blogger.yml in the current directory."""
    from mdblogger.core.config.loader import SETTINGS_FILE, save_settings
    from mdblogger.core.models.settings import BloggerSettings

    path: Path = ctx.obj.get("config_path") or Path.cwd() / SETTINGS_FILE
    if path.exists() and not force:
        click.secho(f"❌ {path} already exists (use --force to overwrite)", fg="red")
        sys.exit(1)

    settings = BloggerSettings(
        project_folder=Path(project_folder),
        posts_folder=posts_folder,
        images_folder=images_folder,
        asset_mode=asset_mode,
    )
    save_settings(settings, path)
    click.secho(f"✅ Created {path}", fg="green", bold=True)
