"""Shared fixtures: a small on-disk site with every collection populated."""

import os
from pathlib import Path
from textwrap import dedent

import pytest

from quire.core.config import PathsSettings, QuireConfig


def write_file(root: Path, relative: str, content: str = "") -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dedent(content).lstrip(), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _clear_quire_env(monkeypatch):
    """Keep developer QUIRE_* variables out of config tests."""
    for key in list(os.environ):
        if key.startswith("QUIRE_"):
            monkeypatch.delenv(key)


@pytest.fixture
def write():
    return write_file


@pytest.fixture
def content_root(tmp_path: Path) -> Path:
    root = tmp_path / "src" / "content"

    write_file(
        root,
        "events/laracon-eu.yaml",
        """
        name: Laracon EU
        year: 2023
        location: Amsterdam
        """,
    )
    write_file(root, "events/phpuk.json", '{"name": "PHP UK", "year": 2024, "location": "London"}')
    write_file(
        root,
        "hardware/laptop.yaml",
        """
        title: Laptop
        spec: M2 Pro, 32GB
        description: Daily driver.
        """,
    )
    write_file(root, "services/consulting.yaml", "title: Consulting\ndescription: API design reviews.\n")
    write_file(root, "software/editor.yaml", "title: PhpStorm\ndescription: IDE.\n")
    (root / "sponsors").mkdir(parents=True)
    (root / "sponsors" / "treblle.png").write_bytes(b"\x89PNG")
    write_file(
        root,
        "sponsors/treblle.yaml",
        """
        name: Treblle
        logo: ./treblle.png
        website: https://www.treblle.com/
        """,
    )
    write_file(
        root,
        "testimonials/jane.yaml",
        """
        name: Jane Doe
        role: CTO
        company: Acme
        avatar: /avatars/jane.png
        content: Steve knows APIs.
        """,
    )
    write_file(
        root,
        "posts/hello-world.md",
        """
        ---
        title: Hello World
        description: The first post.
        pubDate: 2024-01-01
        ---
        # Hello

        Some *markdown* body.
        """,
    )
    write_file(
        root,
        "posts/api-versioning.md",
        """
        ---
        title: API Versioning
        description: How to version an API.
        pubDate: 2024-02-01
        partner: Treblle
        ---
        Body.
        """,
    )
    write_file(
        root,
        "talks/building-apis.md",
        """
        ---
        title: Building APIs
        description: A talk about APIs.
        type: Conference
        image: /images/building-apis.png
        events:
          - phpuk
          - laracon-eu
        ---
        Slides and notes.
        """,
    )
    return root


@pytest.fixture
def site_config(tmp_path: Path, content_root: Path) -> QuireConfig:
    return QuireConfig(
        paths=PathsSettings(site_root=tmp_path, content_dirs=[content_root], output_dir=Path("dist")),
    )
