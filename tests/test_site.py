"""Tests for the website's collection registry and bundled content.

The registry must list every collection the site publishes (including
``projects``), and the repository's own content must validate against it.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from portfolio_content.accessor import ContentCollections
from portfolio_content.config import load_content_config
from portfolio_content.errors import RegistryFrozenError
from portfolio_content.loader import DocumentLoader
from portfolio_content.schema import Schema, string
from portfolio_content.site import PROJECT_CATEGORIES, build_site_registry

REPO_ROOT = Path(__file__).resolve().parents[1]
CONFIG_PATH = REPO_ROOT / "config" / "content.yaml"


def test_registry_declares_every_collection() -> None:
    """All four collections are registered in one place."""
    registry = build_site_registry()
    assert registry.names() == ["blog", "experience", "skills", "projects"]
    assert registry.frozen


def test_site_registry_is_frozen() -> None:
    """Build code cannot register collections after startup."""
    with pytest.raises(RegistryFrozenError):
        build_site_registry().register("photos", Schema(title=string()))


def test_project_categories() -> None:
    """Project categories match the ones the site filters on."""
    schema = build_site_registry().resolve("projects")
    assert schema["category"].describe() == "one of: " + ", ".join(PROJECT_CATEGORIES)


def test_bundled_content_validates() -> None:
    """The repository's sample content passes the site's schemas."""
    registry = build_site_registry()
    loader = DocumentLoader.from_config(load_content_config(CONFIG_PATH), registry)
    report = ContentCollections(registry, loader).check()
    assert report.ok, "\n".join(report.format_lines())
    assert {name: len(result.entries) for name, result in report.results.items()} == {
        "blog": 1,
        "experience": 1,
        "skills": 1,
        "projects": 1,
    }
