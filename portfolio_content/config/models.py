"""Typed dataclasses describing where content collections live on disk."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from .._constants import DEFAULT_CONTENT_ROOT
from ..errors import ContentConfigError

DEFAULT_PATTERNS: tuple[str, ...] = ("**/*",)


@dc.dataclass(frozen=True, slots=True)
class CollectionSource:
    """Directory and glob patterns that enumerate one collection's documents."""

    directory: Path
    patterns: tuple[str, ...] = DEFAULT_PATTERNS


@dc.dataclass(slots=True)
class ContentConfig:
    """Content root alongside the per-collection source overrides."""

    content_root: Path = DEFAULT_CONTENT_ROOT
    collections: dict[str, CollectionSource] = dc.field(default_factory=dict)

    def source_for(self, name: str) -> CollectionSource:
        """Return the configured source or ``<content_root>/<name>``."""
        try:
            return self.collections[name]
        except KeyError:
            return CollectionSource(directory=self.content_root / name)


__all__ = [
    "DEFAULT_PATTERNS",
    "CollectionSource",
    "ContentConfig",
    "ContentConfigError",
]
