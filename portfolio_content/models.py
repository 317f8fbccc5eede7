"""Dataclasses describing raw and validated content documents."""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path  # noqa: TC003 - used for runtime type metadata


@dc.dataclass(frozen=True, slots=True)
class RawDocument:
    """A document as parsed from disk, before schema validation.

    Attributes
    ----------
    collection : str
        Name of the collection the document was enumerated for.
    id : str
        Identifier unique within the collection.
    data : dict[str, Any]
        Untyped front-matter or data-file fields.
    body : str or None
        Markdown body following the front-matter; ``None`` for data files.
    source : Path or None
        File the document was read from.
    """

    collection: str
    id: str
    data: dict[str, typ.Any]
    body: str | None = None
    source: Path | None = None


@dc.dataclass(frozen=True, slots=True)
class ContentEntry:
    """A document whose fields conform to its collection schema.

    Optional fields that were absent hold ``None``; defaulted fields hold
    their declared default.
    """

    collection: str
    id: str
    data: dict[str, typ.Any]
    body: str | None = None
    source: Path | None = None

    def __getitem__(self, field: str) -> typ.Any:
        return self.data[field]

    def get(self, field: str, default: typ.Any = None) -> typ.Any:
        """Return a field value, or ``default`` when the schema lacks it."""
        return self.data.get(field, default)


__all__ = ["ContentEntry", "RawDocument"]
