"""Exception hierarchy shared by the content collection layer.

Registry errors are raised eagerly because they signal a broken schema
declaration. Document and field errors are instances that get *collected*:
the loader and the validator return them as values so a single build pass can
report every defect, and :class:`CollectionValidationError` bundles them when
the accessor refuses to hand out a collection.

Examples
--------
>>> from portfolio_content.errors import MISSING, ValidationError
>>> error = ValidationError(
...     "title", expected="string", actual=MISSING, collection="blog", document_id="hello"
... )
>>> str(error)
'blog/hello: title: expected string, got missing'
"""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path


class _Missing:
    """Marker for a required value that was not supplied."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()


class ContentError(Exception):
    """Base class for every error raised by ``portfolio_content``."""


class UnknownCollectionError(ContentError, KeyError):
    """Raised when a collection name has no registered schema."""

    def __init__(self, name: str, known: cabc.Iterable[str] = ()) -> None:
        self.name = name
        self.known = sorted(known)
        available = ", ".join(self.known) or "none"
        super().__init__(f"Unknown collection '{name}'. Known collections: {available}")

    def __str__(self) -> str:
        return str(self.args[0])


class DuplicateCollectionError(ContentError):
    """Raised when a collection name is registered twice."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Collection '{name}' is already registered.")


class SchemaCycleError(ContentError):
    """Raised when a schema references itself directly or transitively."""

    def __init__(self, collection: str, path: str) -> None:
        self.collection = collection
        self.path = path
        super().__init__(
            f"Schema for collection '{collection}' contains a cycle at '{path}'."
        )


class SchemaDefinitionError(ContentError, ValueError):
    """Raised when a schema or field type is declared incorrectly."""


class RegistryFrozenError(ContentError):
    """Raised when registering into a registry that has been frozen."""


class ContentConfigError(ContentError, ValueError):
    """Raised when the content configuration file is invalid."""


class DocumentLoadError(ContentError):
    """A per-document failure produced while enumerating a collection."""

    def __init__(
        self,
        message: str,
        *,
        collection: str,
        document_id: str,
        source: Path | None = None,
    ) -> None:
        self.message = message
        self.collection = collection
        self.document_id = document_id
        self.source = source
        super().__init__(f"{collection}/{document_id}: {message}")


class DocumentParseError(DocumentLoadError):
    """Raised for documents whose front-matter or data cannot be parsed.

    ``line`` and ``column`` are 1-based positions within the source file when
    the underlying parser reports them.
    """

    def __init__(
        self,
        message: str,
        *,
        collection: str,
        document_id: str,
        source: Path | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        self.line = line
        self.column = column
        if line is not None:
            position = f"line {line}"
            if column is not None:
                position = f"{position}, column {column}"
            message = f"{message} ({position})"
        super().__init__(
            message, collection=collection, document_id=document_id, source=source
        )


class DuplicateDocumentError(DocumentLoadError):
    """Raised when two documents of one collection resolve to the same id."""

    def __init__(
        self,
        *,
        collection: str,
        document_id: str,
        source: Path | None = None,
        first_source: Path | None = None,
    ) -> None:
        self.first_source = first_source
        message = f"duplicate document id (also defined by {first_source})"
        super().__init__(
            message, collection=collection, document_id=document_id, source=source
        )


class ValidationError(ContentError):
    """A single field-level validation failure.

    Attributes
    ----------
    path : str
        Fully qualified field path such as ``experiences[2].company``.
    expected : str
        Description of the expected type or allowed values.
    actual : object
        The offending raw value, or :data:`MISSING`.
    collection : str or None
        Name of the collection the document belongs to.
    document_id : str or None
        Identifier of the offending document.
    """

    def __init__(
        self,
        path: str,
        *,
        expected: str,
        actual: object,
        collection: str | None = None,
        document_id: str | None = None,
    ) -> None:
        self.path = path
        self.expected = expected
        self.actual = actual
        self.collection = collection
        self.document_id = document_id
        super().__init__(path, expected, actual)

    @property
    def is_missing(self) -> bool:
        """Return True when the field was absent rather than malformed."""
        return self.actual is MISSING

    def __str__(self) -> str:
        got = "missing" if self.is_missing else repr(self.actual)
        location = self.path or "<document>"
        detail = f"{location}: expected {self.expected}, got {got}"
        if self.collection is None and self.document_id is None:
            return detail
        return f"{self.collection or '?'}/{self.document_id or '?'}: {detail}"


class CollectionValidationError(ContentError):
    """Raised when any document of a collection failed to load or validate."""

    def __init__(
        self,
        collection: str,
        errors: cabc.Sequence[DocumentLoadError | ValidationError],
    ) -> None:
        self.collection = collection
        self.errors = list(errors)
        lines = [
            f"Collection '{collection}' has {len(self.errors)} invalid "
            f"{'entry' if len(self.errors) == 1 else 'entries'}:"
        ]
        lines.extend(f"  - {error}" for error in self.errors)
        super().__init__("\n".join(lines))


class NotFoundError(ContentError, KeyError):
    """Raised when a document id is not present in a collection."""

    def __init__(self, collection: str, document_id: str) -> None:
        self.collection = collection
        self.document_id = document_id
        super().__init__(f"No entry '{document_id}' in collection '{collection}'.")

    def __str__(self) -> str:
        return str(self.args[0])


class UnknownFieldError(ContentError, KeyError):
    """Raised when sorting by a field that the collection schema lacks."""

    def __init__(self, collection: str, field: str) -> None:
        self.collection = collection
        self.field = field
        super().__init__(f"Collection '{collection}' has no field '{field}'.")

    def __str__(self) -> str:
        return str(self.args[0])


__all__ = [
    "MISSING",
    "CollectionValidationError",
    "ContentConfigError",
    "ContentError",
    "DocumentLoadError",
    "DocumentParseError",
    "DuplicateCollectionError",
    "DuplicateDocumentError",
    "NotFoundError",
    "RegistryFrozenError",
    "SchemaCycleError",
    "SchemaDefinitionError",
    "UnknownCollectionError",
    "UnknownFieldError",
    "ValidationError",
]
