"""Load the content configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .._constants import DEFAULT_CONTENT_ROOT
from .helpers import _build_collection_source, _resolve_path
from .models import CollectionSource, ContentConfig, ContentConfigError


def load_content_config(path: Path) -> ContentConfig:
    """Load the YAML file describing where each collection's documents live.

    Parameters
    ----------
    path : Path
        Filesystem path to the configuration file (for example,
        ``config/content.yaml``). A relative ``content_root`` is resolved
        against the directory containing this file.

    Returns
    -------
    ContentConfig
        Content root plus the collection sources declared in the file.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    ContentConfigError
        If the ``collections`` section or one of its entries is malformed.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from portfolio_content.config import load_content_config
    >>> config = load_content_config(Path("config/content.yaml"))  # doctest: +SKIP
    >>> config.source_for("experience").patterns  # doctest: +SKIP
    ('experience.md',)
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)

    content_root = _resolve_path(
        path.parent, raw.get("content_root", DEFAULT_CONTENT_ROOT)
    )
    collections_raw = raw.get("collections") or {}
    if not isinstance(collections_raw, dict):
        msg = "'collections' must be a mapping of collection names to sources."
        raise ContentConfigError(msg)

    collections: dict[str, CollectionSource] = {}
    for name, payload in collections_raw.items():
        collections[str(name)] = _build_collection_source(
            str(name), payload, content_root=content_root
        )

    return ContentConfig(content_root=content_root, collections=collections)


__all__ = ["load_content_config"]
