"""Enumerate and parse the documents that belong to a content collection.

:class:`DocumentLoader` walks a collection's source directory in sorted path
order and yields one :class:`~portfolio_content.models.RawDocument` per
document. Per-document failures (unparsable YAML/JSON, duplicate ids) are
yielded as :class:`~portfolio_content.errors.DocumentLoadError` values instead
of being raised, so one broken file never hides its siblings.

Examples
--------
>>> from pathlib import Path
>>> from portfolio_content.loader import DocumentLoader
>>> from portfolio_content.site import build_site_registry
>>> loader = DocumentLoader(build_site_registry(), content_root=Path("src/content"))
>>> [item.id for item in loader.load("blog")]  # doctest: +SKIP
['first-post', 'notes/pytest-tips']
"""

from __future__ import annotations

import collections.abc as cabc
import re
import typing as typ
from pathlib import Path

from ._constants import DEFAULT_CONTENT_ROOT
from ._logging import get_logger
from .config import CollectionSource, ContentConfig
from .errors import (
    DocumentLoadError,
    DocumentParseError,
    DuplicateDocumentError,
    UnknownCollectionError,
)
from .frontmatter import FrontMatterError, parse_data, parse_markdown
from .models import RawDocument

if typ.TYPE_CHECKING:
    from .schema import SchemaRegistry

MARKDOWN_SUFFIXES = frozenset({".md", ".mdx", ".markdown"})
DATA_SUFFIXES = frozenset({".yaml", ".yml", ".json"})
SLUG_KEY = "slug"

log = get_logger(__name__)


def _slugify(segment: str) -> str:
    slug = re.sub(r"[^\w-]+", "-", segment.strip().lower())
    return slug.strip("-") or segment


def document_id_for(path: Path, directory: Path) -> str:
    """Derive a document id from ``path`` relative to the collection directory."""
    relative = path.relative_to(directory).with_suffix("")
    return "/".join(_slugify(part) for part in relative.parts)


def _is_ignored(relative: Path) -> bool:
    """Skip hidden files and ``_``-prefixed drafts or partials."""
    return any(part.startswith((".", "_")) for part in relative.parts)


class DocumentLoader:
    """Produce raw documents for registered collections.

    Parameters
    ----------
    registry : SchemaRegistry
        Registry used to reject collections without a schema.
    sources : Mapping[str, CollectionSource], optional
        Per-collection source overrides.
    content_root : Path, optional
        Directory under which collections without an override live, as
        ``<content_root>/<name>``.
    """

    def __init__(
        self,
        registry: SchemaRegistry,
        sources: cabc.Mapping[str, CollectionSource] | None = None,
        *,
        content_root: Path = DEFAULT_CONTENT_ROOT,
    ) -> None:
        self._registry = registry
        self._config = ContentConfig(
            content_root=content_root, collections=dict(sources or {})
        )
        unknown = [name for name in self._config.collections if name not in registry]
        if unknown:
            raise UnknownCollectionError(unknown[0], registry.names())

    @classmethod
    def from_config(
        cls, config: ContentConfig, registry: SchemaRegistry
    ) -> DocumentLoader:
        """Build a loader from a parsed content configuration.

        Every configured collection must be registered; registered collections
        without configuration fall back to ``<content_root>/<name>``.
        """
        loader = cls(registry, config.collections, content_root=config.content_root)
        for name in registry:
            if name not in config.collections:
                log.debug(
                    "collection_default_source",
                    collection=name,
                    directory=str(config.source_for(name).directory),
                )
        return loader

    @property
    def registry(self) -> SchemaRegistry:
        return self._registry

    def source_for(self, name: str) -> CollectionSource:
        return self._config.source_for(name)

    def load(self, name: str) -> cabc.Iterator[RawDocument | DocumentLoadError]:
        """Enumerate the documents of collection ``name``.

        Each call re-reads the source. Items are yielded in sorted path order.

        Raises
        ------
        UnknownCollectionError
            If ``name`` has no registered schema (raised immediately).
        """
        self._registry.resolve(name)
        return self._iter_documents(name, self.source_for(name))

    def _iter_documents(
        self, name: str, source: CollectionSource
    ) -> cabc.Iterator[RawDocument | DocumentLoadError]:
        seen: dict[str, Path | None] = {}
        for path in self._enumerate(name, source):
            item = self._read(name, source, path)
            if isinstance(item, RawDocument):
                if item.id in seen:
                    yield DuplicateDocumentError(
                        collection=name,
                        document_id=item.id,
                        source=path,
                        first_source=seen[item.id],
                    )
                    continue
                seen[item.id] = path
                log.debug("document_loaded", collection=name, document=item.id)
            yield item

    def _enumerate(self, name: str, source: CollectionSource) -> list[Path]:
        directory = source.directory
        if not directory.is_dir():
            log.warning(
                "collection_directory_missing",
                collection=name,
                directory=str(directory),
            )
            return []
        found: set[Path] = set()
        for pattern in source.patterns:
            for path in directory.glob(pattern):
                suffix = path.suffix.lower()
                if suffix not in MARKDOWN_SUFFIXES and suffix not in DATA_SUFFIXES:
                    continue
                if not path.is_file() or _is_ignored(path.relative_to(directory)):
                    continue
                found.add(path)
        return sorted(found, key=lambda path: path.relative_to(directory).as_posix())

    def _read(
        self, name: str, source: CollectionSource, path: Path
    ) -> RawDocument | DocumentParseError:
        document_id = document_id_for(path, source.directory)
        suffix = path.suffix.lower()
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            return DocumentParseError(
                f"cannot read document: {exc}",
                collection=name,
                document_id=document_id,
                source=path,
            )

        body: str | None = None
        try:
            if suffix in MARKDOWN_SUFFIXES:
                data, body = parse_markdown(text)
            else:
                data = parse_data(text, suffix=suffix)
        except FrontMatterError as exc:
            return DocumentParseError(
                exc.message,
                collection=name,
                document_id=document_id,
                source=path,
                line=exc.line,
                column=exc.column,
            )

        if body is not None and SLUG_KEY in data:
            slug = data.pop(SLUG_KEY)
            if not isinstance(slug, str) or not slug.strip():
                return DocumentParseError(
                    f"'{SLUG_KEY}' must be a non-empty string, got {slug!r}",
                    collection=name,
                    document_id=document_id,
                    source=path,
                )
            document_id = slug.strip().strip("/")

        return RawDocument(
            collection=name, id=document_id, data=data, body=body, source=path
        )


__all__ = ["DATA_SUFFIXES", "MARKDOWN_SUFFIXES", "DocumentLoader", "document_id_for"]
