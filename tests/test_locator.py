"""Unit tests for locating documentation files on the search path."""

from __future__ import annotations

import os
import typing as typ

import pytest

from docviewer.locator import ModuleLocator
from docviewer.modules import ModuleIdentifier

if typ.TYPE_CHECKING:
    from pathlib import Path


def _module(name: str) -> ModuleIdentifier:
    return ModuleIdentifier.from_canonical(name)


def test_finds_module_in_root(docs_root: Path) -> None:
    """Modules directly under a root resolve to their Markdown file."""
    found = ModuleLocator([docs_root]).find(_module("Foo::Bar"))
    assert found == docs_root / "Foo" / "Bar.md"


def test_finds_module_in_pods_subdirectory(docs_root: Path) -> None:
    """Each root's ``pods`` directory is searched as well."""
    found = ModuleLocator([docs_root]).find(_module("Foo::Baz"))
    assert found == docs_root / "pods" / "Foo" / "Baz.md"


def test_missing_module_returns_none(docs_root: Path) -> None:
    """Unknown modules resolve to None."""
    assert ModuleLocator([docs_root]).find(_module("Foo::Missing")) is None


def test_earlier_roots_win(tmp_path: Path, docs_root: Path) -> None:
    """Search order follows the configured roots."""
    override = tmp_path / "override"
    (override / "Foo").mkdir(parents=True)
    (override / "Foo" / "Bar.markdown").write_text("# Override\n", encoding="utf-8")
    found = ModuleLocator([override, docs_root]).find(_module("Foo::Bar"))
    assert found == override / "Foo" / "Bar.markdown"


def test_candidates_follow_search_order(tmp_path: Path) -> None:
    """Candidates list roots, then their pods directories, per extension."""
    locator = ModuleLocator([tmp_path], extensions=(".md",))
    assert locator.candidates(_module("A::B")) == [
        tmp_path / "A" / "B.md",
        tmp_path / "pods" / "A" / "B.md",
    ]


@pytest.mark.skipif(
    hasattr(os, "geteuid") and os.geteuid() == 0,
    reason="root can read files regardless of permissions",
)
def test_unreadable_files_are_skipped(docs_root: Path) -> None:
    """Files the process cannot read are treated as missing."""
    path = docs_root / "Foo" / "Bar.md"
    path.chmod(0)
    try:
        assert ModuleLocator([docs_root]).find(_module("Foo::Bar")) is None
    finally:
        path.chmod(0o644)
