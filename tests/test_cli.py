"""
Tests for CLI commands — push, pull, transform, validate, folders, config.
"""

import json
from pathlib import Path

import yaml
from click.testing import CliRunner

from mdblogger.main import cli


class TestCLIGlobal:
    """Tests for global CLI behavior."""

    def test_help(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "Markdown Blogger" in result.output

    def test_version(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_missing_config(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        runner = CliRunner()
        result = runner.invoke(cli, ["validate"])
        assert result.exit_code == 1
        assert "No blogger.yml" in result.output


class TestValidateCommand:
    def test_valid(self, settings_file: Path, project: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(settings_file), "validate"])
        assert result.exit_code == 0
        assert f"Valid path: {project}" in result.output

    def test_missing_project(self, tmp_path: Path):
        config = tmp_path / "blogger.yml"
        config.write_text("project_folder: nowhere\n")
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(config), "validate", "--json"])
        assert result.exit_code == 1
        data = json.loads(result.stdout)
        assert data["valid"] is False


class TestPushCommand:
    def test_push(self, settings_file: Path, note: Path, write_image, project: Path):
        write_image("diagram.png")
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(settings_file), "push", str(note)])
        assert result.exit_code == 0
        assert "pushed successfully" in result.output
        assert (project / "posts" / "post" / "attachments" / "diagram.png").is_file()

    def test_push_json(self, settings_file: Path, note: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(settings_file), "push", str(note), "--json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["ok"] is True
        assert len(data["missing"]) == 1

    def test_missing_image_warned_on_stderr(self, settings_file: Path, note: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(settings_file), "push", str(note)])
        assert result.exit_code == 0
        assert "Image not found" in result.stderr
        assert "diagram.png" in result.stderr
        assert "Image not found" not in result.stdout
        assert "pushed successfully" in result.stdout

    def test_push_to_custom_folder(self, settings_file: Path, note: Path, tmp_path: Path):
        target = tmp_path / "custom"
        target.mkdir()
        runner = CliRunner()
        result = runner.invoke(
            cli, ["--config", str(settings_file), "push", str(note), "--to", str(target)]
        )
        assert result.exit_code == 0
        assert (target / "post.md").is_file()

    def test_push_missing_project(self, tmp_path: Path, note: Path, vault: Path):
        config = tmp_path / "blogger.yml"
        config.write_text(f"vault_root: {vault}\nproject_folder: nowhere\n")
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(config), "push", str(note)])
        assert result.exit_code == 1
        assert "project folder does not exist" in result.output


class TestPullCommand:
    def test_pull(self, settings_file: Path, note: Path, project: Path):
        pushed = project / "posts" / "post" / "post.md"
        pushed.parent.mkdir(parents=True)
        pushed.write_text("remote edit\n")
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(settings_file), "pull", str(note)])
        assert result.exit_code == 0
        assert "pulled" in result.output
        assert note.read_text() == "remote edit\n"

    def test_pull_nothing(self, settings_file: Path, note: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(settings_file), "pull", str(note), "--json"])
        assert result.exit_code == 1
        assert json.loads(result.stdout)["ok"] is False


class TestTransformCommand:
    def test_prints_rewritten_text(self, settings_file: Path, note: Path, write_image, tmp_path: Path):
        write_image("diagram.png")
        dest = tmp_path / "out" / "post.md"
        runner = CliRunner()
        result = runner.invoke(
            cli, ["--config", str(settings_file), "transform", str(note), "--to", str(dest)]
        )
        assert result.exit_code == 0
        assert "![diagram.png](./attachments/diagram.png)" in result.output
        assert not dest.exists()
        assert (dest.parent / "attachments" / "diagram.png").is_file()

    def test_writes_output(self, settings_file: Path, note: Path, tmp_path: Path):
        dest = tmp_path / "out" / "post.md"
        runner = CliRunner()
        result = runner.invoke(
            cli, ["--config", str(settings_file), "transform", str(note), "--to", str(dest), "-o"]
        )
        assert result.exit_code == 0
        assert 'tags: ["python", "notes"]' in dest.read_text()


class TestFoldersCommand:
    def test_lists_folders(self, settings_file: Path, project: Path):
        (project / "posts").mkdir()
        (project / ".hidden").mkdir()
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(settings_file), "folders", str(project)])
        assert result.exit_code == 0
        lines = result.stdout.splitlines()
        assert "posts" in lines
        assert ".hidden" not in lines
        assert lines[-1] == ".."


class TestConfigCommands:
    def test_check_valid(self, settings_file: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(settings_file), "config", "check"])
        assert result.exit_code == 0
        assert "valid" in result.output.lower()

    def test_check_json_with_errors(self, tmp_path: Path):
        config = tmp_path / "blogger.yml"
        config.write_text("project_folder: nowhere\n")
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(config), "config", "check", "--json"])
        assert result.exit_code == 1
        data = json.loads(result.stdout)
        assert data["valid"] is False
        assert len(data["errors"]) > 0

    def test_show(self, settings_file: Path, project: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(settings_file), "config", "show"])
        assert result.exit_code == 0
        data = yaml.safe_load(result.stdout)
        assert data["project_folder"] == str(project)

    def test_set(self, settings_file: Path):
        runner = CliRunner()
        result = runner.invoke(
            cli, ["--config", str(settings_file), "config", "set", "show_hidden_folders", "true"]
        )
        assert result.exit_code == 0
        assert yaml.safe_load(settings_file.read_text())["show_hidden_folders"] is True

    def test_set_keeps_relative_paths(self, tmp_path: Path):
        config = tmp_path / "blogger.yml"
        config.write_text("project_folder: site\nposts_folder: posts\n")
        runner = CliRunner()
        result = runner.invoke(
            cli, ["--config", str(config), "config", "set", "show_hidden_folders", "true"]
        )
        assert result.exit_code == 0
        assert yaml.safe_load(config.read_text()) == {
            "project_folder": "site",
            "posts_folder": "posts",
            "show_hidden_folders": True,
        }

    def test_set_unknown_key(self, settings_file: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(settings_file), "config", "set", "colour", "red"])
        assert result.exit_code == 1
        assert "Unknown setting" in result.output

    def test_set_invalid_value(self, settings_file: Path):
        runner = CliRunner()
        result = runner.invoke(
            cli, ["--config", str(settings_file), "config", "set", "asset_mode", "scattered"]
        )
        assert result.exit_code == 1
        assert "Invalid value" in result.output

    def test_init(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        runner = CliRunner()
        result = runner.invoke(cli, ["config", "init", "--project-folder", "/srv/blog", "--mode", "flat"])
        assert result.exit_code == 0
        data = yaml.safe_load((tmp_path / "blogger.yml").read_text())
        assert data["project_folder"] == "/srv/blog"
        assert data["asset_mode"] == "flat"

    def test_init_refuses_overwrite(self, settings_file: Path):
        runner = CliRunner()
        result = runner.invoke(
            cli, ["--config", str(settings_file), "config", "init", "--project-folder", "/x"]
        )
        assert result.exit_code == 1
        assert "already exists" in result.output
