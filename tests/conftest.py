"""Shared fixtures for docsmith tests."""

from __future__ import annotations

import typing as typ

import pytest

if typ.TYPE_CHECKING:
    from pathlib import Path

SAMPLE_DOCS: dict[str, str] = {
    "index.md": (
        "---\ntitle: Home\n---\n# Home\n"
        "Start with the [setup guide](guide/setup.md). Old links like "
        "[this one](/docs/missing) are flagged, while [logos](/images/logo.png) "
        "and [the site](https://example.com) are not.\n"
    ),
    "guide/setup.md": (
        "---\ntitle: Setup\n---\n# Setup\nInstall the tool.\n\n## Install\n"
        "Back to [home](../index.md).\n"
    ),
    "guide/notitle.mdx": "# Untitled\n\n<Card />\n",
}


def _write_docs(root: Path, files: typ.Mapping[str, str]) -> Path:
    """Write ``files`` below ``root`` and return ``root``."""
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def write_docs() -> typ.Callable[[Path, typ.Mapping[str, str]], Path]:
    """Return a helper that writes a mapping of relative paths to files."""
    return _write_docs


@pytest.fixture
def docs_root(tmp_path: Path) -> Path:
    """Return a docs directory holding a home page and a small guide."""
    return _write_docs(tmp_path / "docs", SAMPLE_DOCS)
