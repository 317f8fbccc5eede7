"""Shared fixtures for content collection tests.

The fixtures build throwaway content trees under ``tmp_path`` so loader,
accessor and CLI tests read real files without touching the repository's own
``src/content`` directory.
"""

from __future__ import annotations

import typing as typ
from textwrap import dedent

import pytest

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

VALID_PROJECT = """
---
title: {title}
description: A project used in tests.
image:
  url: /images/{slug}.png
  alt: Screenshot of {title}
technologies: [Python, pytest]
completed: {completed}
category: {category}
---

Body of {title}.
"""


@pytest.fixture
def content_root(tmp_path: Path) -> Path:
    """Return an empty content root directory."""
    root = tmp_path / "content"
    root.mkdir()
    return root


@pytest.fixture
def write_document(content_root: Path) -> cabc.Callable[[str, str], Path]:
    """Return a helper that writes ``text`` to ``relative`` under the content root."""

    def _write(relative: str, text: str) -> Path:
        path = content_root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(dedent(text).lstrip("\n"), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def write_project(
    write_document: cabc.Callable[[str, str], Path],
) -> cabc.Callable[..., Path]:
    """Return a helper that writes a projects document with sensible defaults."""

    def _write(
        slug: str,
        *,
        title: str | None = None,
        completed: str = "2024-01-05",
        category: str = "testing",
    ) -> Path:
        return write_document(
            f"projects/{slug}.md",
            VALID_PROJECT.format(
                title=title or slug.replace("-", " ").title(),
                slug=slug,
                completed=completed,
                category=category,
            ),
        )

    return _write
