"""Utility helpers shared by the content configuration loader."""

from __future__ import annotations

import collections.abc as cabc
import typing as typ
from pathlib import Path

from .models import DEFAULT_PATTERNS, CollectionSource, ContentConfigError


def _normalize_patterns(
    value: str | list[object] | None, *, name: str
) -> tuple[str, ...]:
    """Normalize glob patterns into a tuple of non-empty strings."""
    if value is None:
        return DEFAULT_PATTERNS
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        msg = f"Collection '{name}' patterns must be a string or a list of strings."
        raise ContentConfigError(msg)
    normalized: list[str] = []
    for segment in value:
        text = str(segment).strip()
        if text:
            normalized.append(text)
    if not normalized:
        msg = f"Collection '{name}' declares no usable patterns."
        raise ContentConfigError(msg)
    return tuple(normalized)


def _resolve_path(base: Path, value: object) -> Path:
    """Resolve ``value`` against ``base`` unless it is already absolute."""
    path = Path(str(value))
    return path if path.is_absolute() else base / path


def _build_collection_source(
    name: str, payload: cabc.Mapping[str, typ.Any] | None, *, content_root: Path
) -> CollectionSource:
    """Build a CollectionSource from a ``collections.<name>`` mapping."""
    match payload:
        case None:
            payload = {}
        case dict():
            pass
        case _:
            msg = f"Collection '{name}' configuration must be a mapping."
            raise ContentConfigError(msg)
    directory = _resolve_path(content_root, payload.get("directory", name))
    patterns = _normalize_patterns(payload.get("patterns"), name=name)
    return CollectionSource(directory=directory, patterns=patterns)


__all__ = ["_build_collection_source", "_normalize_patterns", "_resolve_path"]
