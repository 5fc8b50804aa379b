"""
Shared test fixtures and configuration.
"""

import textwrap
from pathlib import Path

import pytest

from mdblogger.core.services.asset_strategies import TransformContext

PNG_BYTES = b"\x89PNG\r\n\x1a\n fake image payload"


@pytest.fixture
def vault(tmp_path: Path) -> Path:
    """A vault with one note folder and its attachments folder."""
    root = tmp_path / "vault"
    (root / "blog" / "attachments").mkdir(parents=True)
    return root


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """An empty blog project folder."""
    root = tmp_path / "site"
    root.mkdir()
    return root


@pytest.fixture
def write_image(vault: Path):
    """Write a fake image under the vault and return its path."""

    def _write(name: str, folder: str = "blog/attachments", data: bytes = PNG_BYTES) -> Path:
        path = vault / folder / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        return path

    return _write


@pytest.fixture
def ctx(vault: Path, project: Path) -> TransformContext:
    """Transform context for vault/blog/post.md → site/posts/post/post.md."""
    return TransformContext(
        source_path="blog/post.md",
        destination_path=project / "posts" / "post" / "post.md",
        vault_root=vault,
    )


@pytest.fixture
def note(vault: Path) -> Path:
    """A note with frontmatter and one embedded image."""
    path = vault / "blog" / "post.md"
    path.write_text(textwrap.dedent("""\
        ---
        title: Hello
        tags:
          - #python
          - notes
        ---
        Intro text.

        ![[diagram.png]]
    """), encoding="utf-8")
    return path


@pytest.fixture
def settings_file(tmp_path: Path, vault: Path, project: Path) -> Path:
    """A blogger.yml pointing at the vault and project fixtures."""
    path = tmp_path / "blogger.yml"
    path.write_text(textwrap.dedent(f"""\
        vault_root: {vault}
        project_folder: {project}
        posts_folder: posts
        images_folder: public/images
    """), encoding="utf-8")
    return path
