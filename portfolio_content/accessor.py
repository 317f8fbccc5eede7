"""Query surface page templates and build scripts use to read content.

:class:`ContentCollections` loads, validates and memoises one collection at a
time. It never hands out partial data: if any document of a collection failed
to parse or validate, :meth:`ContentCollections.get_all` and
:meth:`ContentCollections.get_by_id` raise a
:class:`~portfolio_content.errors.CollectionValidationError` listing every
defect. :meth:`ContentCollections.check` gathers the same information for all
collections without raising, for build logs.
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import functools
import typing as typ
from concurrent.futures import ThreadPoolExecutor

from ._logging import get_logger
from .errors import (
    CollectionValidationError,
    DocumentLoadError,
    NotFoundError,
    UnknownFieldError,
    ValidationError,
)
from .models import ContentEntry, RawDocument
from .schema import DefaultType, EnumType, OptionalType, Primitive, PrimitiveType
from .validator import validate

if typ.TYPE_CHECKING:
    from .loader import DocumentLoader
    from .schema import FieldType, SchemaRegistry

log = get_logger(__name__)

ContentIssue = DocumentLoadError | ValidationError


@dc.dataclass(slots=True)
class CollectionResult:
    """Validated entries and collected errors for one collection."""

    name: str
    entries: list[ContentEntry] = dc.field(default_factory=list)
    errors: list[ContentIssue] = dc.field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


@dc.dataclass(slots=True)
class BuildReport:
    """Outcome of checking several collections in one pass."""

    results: dict[str, CollectionResult] = dc.field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return all(result.ok for result in self.results.values())

    @property
    def errors(self) -> list[ContentIssue]:
        return [error for result in self.results.values() for error in result.errors]

    def format_lines(self) -> list[str]:
        """Render one line per healthy collection and one per defect."""
        lines: list[str] = []
        for name, result in self.results.items():
            if result.ok:
                lines.append(f"ok {name}: {len(result.entries)} entries")
                continue
            lines.append(f"error {name}: {len(result.errors)} problems")
            lines.extend(f"  {error}" for error in result.errors)
        return lines


class ContentCollections:
    """Validated, memoised access to every registered collection.

    Parameters
    ----------
    registry : SchemaRegistry
        Frozen registry of collection schemas.
    loader : DocumentLoader
        Source of raw documents.
    max_workers : int or None, optional
        When greater than one, documents are validated on a thread pool.
        Results are gathered in enumeration order either way.

    Examples
    --------
    >>> from portfolio_content import ContentCollections, DocumentLoader
    >>> from portfolio_content.site import build_site_registry
    >>> registry = build_site_registry()
    >>> content = ContentCollections(registry, DocumentLoader(registry))
    >>> posts = content.get_all("blog", sort_by="date")  # doctest: +SKIP
    """

    def __init__(
        self,
        registry: SchemaRegistry,
        loader: DocumentLoader,
        *,
        max_workers: int | None = None,
    ) -> None:
        self._registry = registry
        self._loader = loader
        self._max_workers = max_workers
        self._cache: dict[str, CollectionResult] = {}

    def get_all(
        self,
        name: str,
        *,
        sort_by: str | None = None,
        descending: bool | None = None,
    ) -> list[ContentEntry]:
        """Return every entry of ``name`` in enumeration or requested order.

        Parameters
        ----------
        name : str
            Registered collection name.
        sort_by : str or None, optional
            Top-level scalar field to sort on. The sort is stable; entries
            whose field is absent come last.
        descending : bool or None, optional
            Sort direction. Defaults to newest-first for date fields and
            ascending for everything else.

        Raises
        ------
        UnknownCollectionError
            If ``name`` is not registered.
        CollectionValidationError
            If any document of the collection failed to load or validate.
        UnknownFieldError
            If ``sort_by`` is not declared by the collection schema.
        """
        entries = list(self._require_valid(name).entries)
        if sort_by is None:
            return entries
        return self._sorted(name, entries, sort_by, descending)

    def get_by_id(self, name: str, document_id: str) -> ContentEntry:
        """Return the entry ``document_id`` of collection ``name``."""
        for entry in self._require_valid(name).entries:
            if entry.id == document_id:
                return entry
        raise NotFoundError(name, document_id)

    def check(self, names: cabc.Iterable[str] | None = None) -> BuildReport:
        """Validate ``names`` (default: every registered collection)."""
        selected = list(names) if names is not None else self._registry.names()
        return BuildReport({name: self.collect(name) for name in selected})

    def collect(self, name: str) -> CollectionResult:
        """Load and validate ``name`` once per build, without raising on defects."""
        if name not in self._cache:
            self._cache[name] = self._validate_collection(name)
        return self._cache[name]

    def reset(self) -> None:
        """Forget memoised results so the next query re-reads the sources."""
        self._cache.clear()

    def _require_valid(self, name: str) -> CollectionResult:
        result = self.collect(name)
        if not result.ok:
            raise CollectionValidationError(name, result.errors)
        return result

    def _validate_collection(self, name: str) -> CollectionResult:
        schema = self._registry.resolve(name)
        items = list(self._loader.load(name))
        documents = [item for item in items if isinstance(item, RawDocument)]

        check = functools.partial(validate, schema)
        if self._max_workers and self._max_workers > 1 and len(documents) > 1:
            with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
                outcomes = list(executor.map(check, documents))
        else:
            outcomes = [check(document) for document in documents]

        result = CollectionResult(name)
        pending = iter(outcomes)
        for item in items:
            if not isinstance(item, RawDocument):
                result.errors.append(item)
                continue
            outcome = next(pending)
            if isinstance(outcome, ContentEntry):
                result.entries.append(outcome)
            else:
                result.errors.extend(outcome)

        if result.ok:
            log.info(
                "collection_validated", collection=name, entries=len(result.entries)
            )
        else:
            log.error("collection_invalid", collection=name, errors=len(result.errors))
        return result

    def _sorted(
        self,
        name: str,
        entries: list[ContentEntry],
        field: str,
        descending: bool | None,
    ) -> list[ContentEntry]:
        schema = self._registry.resolve(name)
        if field not in schema:
            raise UnknownFieldError(name, field)
        field_type = _unwrap(schema[field])
        if not isinstance(field_type, (PrimitiveType, EnumType)):
            msg = f"Cannot sort collection '{name}' by non-scalar field '{field}'."
            raise TypeError(msg)
        if descending is None:
            descending = (
                isinstance(field_type, PrimitiveType)
                and field_type.kind is Primitive.DATE
            )
        present = [entry for entry in entries if entry.data.get(field) is not None]
        absent = [entry for entry in entries if entry.data.get(field) is None]
        present.sort(key=lambda entry: entry.data[field], reverse=descending)
        return present + absent


def _unwrap(field_type: FieldType) -> FieldType:
    while isinstance(field_type, (OptionalType, DefaultType)):
        field_type = field_type.inner
    return field_type


__all__ = ["BuildReport", "CollectionResult", "ContentCollections"]
