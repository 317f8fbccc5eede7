"""Common literal values used across portfolio_content.

These constants keep default locations centralized so the CLI, the
configuration loader, and tests can import the same values without drifting.
Intended for internal use within the portfolio_content package.

Examples
--------
>>> from portfolio_content import _constants
>>> _constants.DEFAULT_CONFIG_PATH.as_posix()
'config/content.yaml'
>>> _constants.DEFAULT_CONTENT_ROOT.name
'content'
"""

from pathlib import Path

DEFAULT_CONFIG_PATH = Path("config/content.yaml")
DEFAULT_CONTENT_ROOT = Path("src/content")
