"""Schema-checked content collections for the personal website build.

This package declares the site's content collections (blog posts, work
experience, skills, projects), loads their Markdown and data documents, and
validates every document against its collection schema before pages are
rendered. The ``content`` console script runs the same checks in CI.

Exports
-------
- ``ContentCollections``: query surface used by templates and build scripts.
- ``DocumentLoader``: enumerates raw documents per collection.
- ``SchemaRegistry`` / ``Schema``: collection schema declarations.
- ``validate``: validate a single document against a schema.
- ``build_site_registry``: the website's frozen collection registry.
- ``app`` / ``main``: Cyclopts application entry points.

Examples
--------
>>> from portfolio_content import build_site_registry
>>> "projects" in build_site_registry()
True
"""

from __future__ import annotations

from .schema import Schema, SchemaRegistry
from .validator import validate
from .models import ContentEntry, RawDocument
from .loader import DocumentLoader
from .accessor import BuildReport, ContentCollections
from .site import build_site_registry
from .cli import app, main

__all__ = [
    "BuildReport",
    "ContentCollections",
    "ContentEntry",
    "DocumentLoader",
    "RawDocument",
    "Schema",
    "SchemaRegistry",
    "app",
    "build_site_registry",
    "main",
    "validate",
]
