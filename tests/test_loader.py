"""Unit tests for front-matter parsing and the document loader.

The loader enumerates a collection directory in sorted order, derives document
ids from paths (or an explicit ``slug``), and reports malformed or duplicate
documents as values so their siblings still load.
"""

from __future__ import annotations

import datetime as dt
import typing as typ

import pytest

from portfolio_content.config import CollectionSource
from portfolio_content.errors import (
    DocumentParseError,
    DuplicateDocumentError,
    UnknownCollectionError,
)
from portfolio_content.frontmatter import FrontMatterError, parse_data, parse_markdown
from portfolio_content.loader import DocumentLoader
from portfolio_content.models import RawDocument
from portfolio_content.site import build_site_registry

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

WriteDocument = typ.Callable[[str, str], "Path"]


def _loader(content_root: Path, **sources: CollectionSource) -> DocumentLoader:
    return DocumentLoader(build_site_registry(), sources, content_root=content_root)


def _documents(items: cabc.Iterable[object]) -> list[RawDocument]:
    return [item for item in items if isinstance(item, RawDocument)]


def test_parse_markdown_splits_front_matter_and_body() -> None:
    """Front-matter becomes a mapping and the remainder the body."""
    data, body = parse_markdown("---\ntitle: Hello\ntags: [a, b]\n---\n\nBody\n")
    assert data == {"title": "Hello", "tags": ["a", "b"]}
    assert body == "\nBody\n"


def test_parse_markdown_without_front_matter() -> None:
    """Plain Markdown yields empty data and the full text as body."""
    assert parse_markdown("# Title\n") == ({}, "# Title\n")


def test_unclosed_front_matter_is_reported() -> None:
    """An opening fence without a closing fence is a parse error on line 1."""
    with pytest.raises(FrontMatterError) as excinfo:
        parse_markdown("---\ntitle: Hello\n\nBody\n")
    assert excinfo.value.line == 1


def test_yaml_error_position_is_relative_to_file() -> None:
    """YAML error lines account for the opening fence."""
    with pytest.raises(FrontMatterError) as excinfo:
        parse_markdown("---\ntitle: Hello\ntags: [a, b\n---\n")
    assert excinfo.value.line is not None
    assert excinfo.value.line >= 3, f"expected line >= 3, got {excinfo.value.line}"


def test_parse_data_rejects_non_mapping() -> None:
    """Data documents must be mappings at the top level."""
    with pytest.raises(FrontMatterError):
        parse_data("- a\n- b\n", suffix=".yaml")


def test_parse_json_reports_position() -> None:
    """JSON decode errors keep their 1-based line and column."""
    with pytest.raises(FrontMatterError) as excinfo:
        parse_data('{\n  "title": }\n', suffix=".json")
    assert excinfo.value.line == 2


def test_load_enumerates_in_sorted_path_order(
    content_root: Path, write_document: WriteDocument
) -> None:
    """Documents are yielded by sorted relative path with slugified ids."""
    write_document("blog/zebra.md", "---\ntitle: Z\n---\n")
    write_document("blog/Alpha Post.md", "---\ntitle: A\n---\n")
    write_document("blog/notes/tips.mdx", "---\ntitle: T\n---\n")
    write_document("blog/_draft.md", "---\ntitle: D\n---\n")
    write_document("blog/cover.png", "binary")

    documents = _documents(_loader(content_root).load("blog"))

    assert [document.id for document in documents] == [
        "alpha-post",
        "notes/tips",
        "zebra",
    ]
    assert documents[0].body == ""


def test_load_is_restartable(content_root: Path, write_document: WriteDocument) -> None:
    """Each load() call re-reads the source directory."""
    loader = _loader(content_root)
    write_document("blog/one.md", "---\ntitle: One\n---\n")
    assert [item.id for item in _documents(loader.load("blog"))] == ["one"]
    write_document("blog/two.md", "---\ntitle: Two\n---\n")
    assert [item.id for item in _documents(loader.load("blog"))] == ["one", "two"]


def test_data_documents_have_no_body(
    content_root: Path, write_document: WriteDocument
) -> None:
    """YAML and JSON documents expose their mapping without a body."""
    write_document("skills/tools.yaml", "title: Tools\nskills: []\n")
    write_document("skills/langs.json", '{"title": "Languages", "skills": []}')
    documents = _documents(_loader(content_root).load("skills"))
    assert [(document.id, document.body) for document in documents] == [
        ("langs", None),
        ("tools", None),
    ]


def test_yaml_dates_survive_loading(
    content_root: Path, write_document: WriteDocument
) -> None:
    """Unquoted dates are passed through as date values or ISO text."""
    write_document("blog/post.md", "---\ntitle: P\ndate: 2024-01-05\n---\n")
    (document,) = _documents(_loader(content_root).load("blog"))
    assert document.data["date"] in (dt.date(2024, 1, 5), "2024-01-05")


def test_slug_overrides_document_id(
    content_root: Path, write_document: WriteDocument
) -> None:
    """An explicit front-matter slug becomes the id and leaves the data."""
    write_document("blog/2024-01-05-hello.md", "---\ntitle: Hi\nslug: hello\n---\n")
    (document,) = _documents(_loader(content_root).load("blog"))
    assert document.id == "hello"
    assert "slug" not in document.data


def test_parse_error_does_not_abort_siblings(
    content_root: Path, write_document: WriteDocument
) -> None:
    """A malformed document is reported while the others still load."""
    write_document("blog/a.md", "---\ntitle: A\n---\n")
    write_document("blog/b.md", "---\ntitle: [unclosed\n---\n")
    write_document("blog/c.md", "---\ntitle: C\n---\n")

    items = list(_loader(content_root).load("blog"))

    assert [type(item).__name__ for item in items] == [
        "RawDocument",
        "DocumentParseError",
        "RawDocument",
    ]
    error = items[1]
    assert isinstance(error, DocumentParseError)
    assert error.document_id == "b"
    assert error.line is not None
    assert error.source is not None
    assert error.source.name == "b.md"


def test_duplicate_ids_are_reported(
    content_root: Path, write_document: WriteDocument
) -> None:
    """Two files resolving to the same id produce a DuplicateDocumentError."""
    write_document("skills/tools.json", '{"title": "Tools", "skills": []}')
    write_document("skills/tools.yaml", "title: Tools\nskills: []\n")

    items = list(_loader(content_root).load("skills"))

    assert isinstance(items[0], RawDocument)
    duplicate = items[1]
    assert isinstance(duplicate, DuplicateDocumentError)
    assert duplicate.document_id == "tools"
    assert duplicate.first_source is not None
    assert duplicate.first_source.name == "tools.json"


def test_configured_source_patterns(
    content_root: Path, write_document: WriteDocument
) -> None:
    """A collection can be a single file picked out by a pattern."""
    write_document("experience.md", "---\ntitle: Experience\n---\n")
    write_document("other.md", "---\ntitle: Other\n---\n")
    source = CollectionSource(directory=content_root, patterns=("experience.md",))
    documents = _documents(_loader(content_root, experience=source).load("experience"))
    assert [document.id for document in documents] == ["experience"]


def test_unknown_collection_fails_eagerly(content_root: Path) -> None:
    """Loading an unregistered collection raises before iteration starts."""
    with pytest.raises(UnknownCollectionError):
        _loader(content_root).load("photos")


def test_configured_unknown_collection_rejected(content_root: Path) -> None:
    """Sources for unregistered collections are a startup error."""
    with pytest.raises(UnknownCollectionError):
        _loader(content_root, photos=CollectionSource(directory=content_root))


def test_missing_directory_yields_nothing(content_root: Path) -> None:
    """A collection without a directory is simply empty."""
    assert list(_loader(content_root).load("projects")) == []
