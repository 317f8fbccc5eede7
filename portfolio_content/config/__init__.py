"""Load the content configuration that locates each collection on disk.

The build configuration owns the naming convention for content files; this
subpackage parses its ``content.yaml`` into a :class:`ContentConfig` holding
the content root and one :class:`CollectionSource` (directory plus glob
patterns) per overridden collection. Collections without an entry live in
``<content_root>/<name>``.

Examples
--------
>>> from pathlib import Path
>>> from portfolio_content.config import ContentConfig
>>> ContentConfig(content_root=Path("src/content")).source_for("blog").directory
PosixPath('src/content/blog')
"""

from .loader import load_content_config
from .models import CollectionSource, ContentConfig, ContentConfigError

__all__ = [
    "CollectionSource",
    "ContentConfig",
    "ContentConfigError",
    "load_content_config",
]
