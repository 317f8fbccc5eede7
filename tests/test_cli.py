"""Tests for the ``content`` command-line interface.

The commands are invoked as plain functions with a temporary configuration so
the printed report and exit status can be asserted directly.
"""

from __future__ import annotations

import typing as typ

import pytest

from portfolio_content.cli import check, list_entries

if typ.TYPE_CHECKING:
    from pathlib import Path

WriteProject = typ.Callable[..., "Path"]


def _config(tmp_path: Path, content_root: Path) -> Path:
    path = tmp_path / "content.yaml"
    path.write_text(f"content_root: {content_root}\n", encoding="utf-8")
    return path


def test_check_succeeds_for_valid_content(
    tmp_path: Path,
    content_root: Path,
    write_project: WriteProject,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Healthy collections are summarised and the command returns normally."""
    write_project("alpha")
    check(config=_config(tmp_path, content_root), collection=["projects"])
    assert "ok projects: 1 entries" in capsys.readouterr().out


def test_check_exits_non_zero_and_prints_every_error(
    tmp_path: Path,
    content_root: Path,
    write_project: WriteProject,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Every defect is printed before the command exits with status 1."""
    write_project("alpha", category="design")
    write_project("beta", completed="soon")

    with pytest.raises(SystemExit) as excinfo:
        check(config=_config(tmp_path, content_root), collection=["projects"])

    assert excinfo.value.code == 1
    out = capsys.readouterr().out
    assert "projects/alpha: category: expected one of: automation" in out
    assert "projects/beta: completed: expected date, got 'soon'" in out
    assert "2 content error(s) found." in out


def test_check_rejects_unknown_collection(
    tmp_path: Path, content_root: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """An unknown collection name exits with status 2."""
    with pytest.raises(SystemExit) as excinfo:
        check(config=_config(tmp_path, content_root), collection=["photos"])
    assert excinfo.value.code == 2
    assert "Unknown collection 'photos'" in capsys.readouterr().out


def test_list_prints_sorted_ids(
    tmp_path: Path,
    content_root: Path,
    write_project: WriteProject,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """The list command prints ids newest first when sorting by date."""
    write_project("older", completed="2022-01-01")
    write_project("newer", completed="2024-01-01")

    config = _config(tmp_path, content_root)
    list_entries("projects", config=config, sort_by="completed")

    lines = capsys.readouterr().out.splitlines()
    assert lines[-2:] == ["newer", "older"]


def test_list_fails_on_invalid_collection(
    tmp_path: Path,
    content_root: Path,
    write_project: WriteProject,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Listing an invalid collection prints the aggregated report and exits 1."""
    write_project("alpha", category="design")
    with pytest.raises(SystemExit) as excinfo:
        list_entries("projects", config=_config(tmp_path, content_root))
    assert excinfo.value.code == 1
    assert "Collection 'projects' has 1 invalid entry" in capsys.readouterr().out
