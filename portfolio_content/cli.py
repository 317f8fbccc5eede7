"""Cyclopts CLI entrypoint for checking the site's content collections.

The ``content`` console script validates every registered collection against
its schema and prints each defect (collection, document, field path, expected
type and actual value) so the content can be fixed in one pass. Typical usage
is ``content check`` locally or in CI before the static site build, and
``content list blog --sort-by date`` to inspect what a page will receive.

Examples
--------
Check every collection using the default configuration:

>>> from portfolio_content.cli import main
>>> main()  # doctest: +SKIP

Check only the projects collection with a custom configuration file:

>>> from portfolio_content.cli import app
>>> app(["check", "--collection", "projects", "--config", "site/content.yaml"])  # doctest: +SKIP
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from ._constants import DEFAULT_CONFIG_PATH
from ._logging import configure_logging
from .accessor import ContentCollections
from .config import ContentConfig, load_content_config
from .errors import CollectionValidationError, UnknownCollectionError
from .loader import DocumentLoader
from .site import build_site_registry

app = App(name="content", config=cyclopts.config.Env("CONTENT_", command=False))  # type: ignore[unknown-argument]


def _build_collections(config: Path, workers: int | None) -> ContentCollections:
    """Wire the site registry, configured loader and accessor together."""
    registry = build_site_registry()
    content_config = load_content_config(config) if config.exists() else ContentConfig()
    loader = DocumentLoader.from_config(content_config, registry)
    return ContentCollections(registry, loader, max_workers=workers)


@app.command(help="Validate content collections and report every defect.")
def check(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to the content configuration file")
    ] = DEFAULT_CONFIG_PATH,
    collection: typ.Annotated[
        list[str] | None,
        Parameter(help="Collection to check; repeat for several (default: all)"),
    ] = None,
    workers: typ.Annotated[
        int | None, Parameter(help="Validate documents on this many threads")
    ] = None,
    log_level: typ.Annotated[str, Parameter(help="Log level")] = "WARNING",
    json_logs: typ.Annotated[bool, Parameter(help="Emit JSON log lines")] = False,
) -> None:
    """Validate the requested collections and exit non-zero on any defect.

    Parameters
    ----------
    config : Path, optional
        Content configuration file; when it does not exist every collection
        is read from ``src/content/<name>``.
    collection : list[str] or None, optional
        Collections to check; every registered collection when ``None``.
    workers : int or None, optional
        Thread count for document validation.
    log_level : str, optional
        Minimum structlog level written to stderr.
    json_logs : bool, optional
        Render logs as JSON instead of console text.

    Raises
    ------
    SystemExit
        With status 1 when any collection has errors, status 2 when an
        unknown collection was requested.
    """
    configure_logging(log_level, json_output=json_logs)
    content = _build_collections(config, workers)
    try:
        report = content.check(collection)
    except UnknownCollectionError as exc:
        print(exc)
        raise SystemExit(2) from exc
    for line in report.format_lines():
        print(line)
    if not report.ok:
        print(f"{len(report.errors)} content error(s) found.")
        raise SystemExit(1)


@app.command(name="list", help="Print the ids of one collection's entries.")
def list_entries(
    collection: str,
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to the content configuration file")
    ] = DEFAULT_CONFIG_PATH,
    sort_by: typ.Annotated[
        str | None, Parameter(help="Field to sort entries by")
    ] = None,
    ascending: typ.Annotated[
        bool, Parameter(help="Sort oldest/smallest first")
    ] = False,
) -> None:
    """Print entry ids of ``collection``, one per line."""
    configure_logging("WARNING")
    content = _build_collections(config, None)
    try:
        entries = content.get_all(
            collection, sort_by=sort_by, descending=False if ascending else None
        )
    except UnknownCollectionError as exc:
        print(exc)
        raise SystemExit(2) from exc
    except CollectionValidationError as exc:
        print(exc)
        raise SystemExit(1) from exc
    for entry in entries:
        print(entry.id)


def main() -> None:
    """Invoke the Cyclopts application that powers the ``content`` command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
