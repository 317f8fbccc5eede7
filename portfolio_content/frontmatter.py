r"""Split content documents into front-matter and body, and parse their data.

Markdown documents may open with a YAML block fenced by ``---`` lines; the
remainder is the body. Data documents (``.yaml``, ``.yml``, ``.json``) are a
single structured mapping. Parse failures raise :class:`FrontMatterError`
carrying the 1-based line and column within the original file.

Example
-------
>>> from portfolio_content.frontmatter import parse_markdown
>>> data, body = parse_markdown("---\ntitle: Hello\n---\nBody text\n")
>>> data["title"], body
('Hello', 'Body text\n')
"""

from __future__ import annotations

import json
import re
import typing as typ

from ruamel.yaml import YAML
from ruamel.yaml.error import MarkedYAMLError, YAMLError

FRONT_MATTER_PATTERN = re.compile(
    r"\A\ufeff?---[ \t]*\r?\n(?P<yaml>.*?)^---[ \t]*(?:\r?\n|\Z)",
    re.DOTALL | re.MULTILINE,
)
OPENING_FENCE_PATTERN = re.compile(r"\A\ufeff?---[ \t]*\r?$", re.MULTILINE)


class FrontMatterError(ValueError):
    """Raised when a document's structured data cannot be parsed."""

    def __init__(
        self, message: str, *, line: int | None = None, column: int | None = None
    ) -> None:
        self.message = message
        self.line = line
        self.column = column
        super().__init__(message)


def _build_yaml() -> YAML:
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    return loader


def _load_yaml(text: str, *, line_offset: int = 0) -> typ.Any:
    """Parse YAML, shifting reported positions by ``line_offset`` lines."""
    try:
        return _build_yaml().load(text)
    except MarkedYAMLError as exc:
        mark = exc.problem_mark or exc.context_mark
        problem = exc.problem or exc.context or "invalid YAML"
        if mark is None:  # pragma: no cover - ruamel always marks parse errors
            raise FrontMatterError(problem) from exc
        raise FrontMatterError(
            problem, line=mark.line + 1 + line_offset, column=mark.column + 1
        ) from exc
    except YAMLError as exc:
        raise FrontMatterError(str(exc)) from exc


def _require_mapping(loaded: typ.Any, *, what: str) -> dict[str, typ.Any]:
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        msg = f"{what} must be a mapping, got {type(loaded).__name__}"
        raise FrontMatterError(msg, line=1)
    return dict(loaded)


def split_front_matter(text: str) -> tuple[str | None, str]:
    """Return the raw front-matter text (or ``None``) and the body.

    Raises
    ------
    FrontMatterError
        If an opening ``---`` fence has no closing fence.
    """
    match = FRONT_MATTER_PATTERN.match(text)
    if match:
        return match.group("yaml"), text[match.end() :]
    if OPENING_FENCE_PATTERN.match(text):
        msg = "front-matter block is missing its closing '---'"
        raise FrontMatterError(msg, line=1, column=1)
    return None, text


def parse_markdown(text: str) -> tuple[dict[str, typ.Any], str]:
    """Parse a Markdown/MDX document into its front-matter mapping and body."""
    front_matter, body = split_front_matter(text)
    if front_matter is None:
        return {}, body
    # The YAML block starts on the line after the opening fence.
    loaded = _load_yaml(front_matter, line_offset=1)
    return _require_mapping(loaded, what="front-matter"), body


def parse_data(text: str, *, suffix: str) -> dict[str, typ.Any]:
    """Parse a pure data document; ``suffix`` selects JSON or YAML."""
    if suffix == ".json":
        try:
            loaded = json.loads(text)
        except json.JSONDecodeError as exc:
            raise FrontMatterError(exc.msg, line=exc.lineno, column=exc.colno) from exc
    else:
        loaded = _load_yaml(text)
    return _require_mapping(loaded, what="data document")


__all__ = [
    "FRONT_MATTER_PATTERN",
    "FrontMatterError",
    "parse_data",
    "parse_markdown",
    "split_front_matter",
]
