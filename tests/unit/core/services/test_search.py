from __future__ import annotations

"""
Unit tests for the Content Line Search.
"""

from pathlib import Path
from typing import List

from codeatlas.core.indexing.tree_builder import build_file_tree
from codeatlas.core.services.search import SearchMatch, search_project
from codeatlas.domain.index_models import FileNode
from codeatlas.infra.fs import ProjectRoot


def test_search_is_case_insensitive(sample_project: Path, sample_rel_paths: List[str]) -> None:
    """TC-01: Matches report full path, 1-based line and trimmed snippet."""
    root = ProjectRoot.open(str(sample_project))
    tree = build_file_tree(root, sample_rel_paths)

    matches = search_project(root, tree, "needle")

    assert matches == [SearchMatch(path="README.md", line=3, snippet="Search target: Needle here")]


def test_search_multiple_files_in_tree_order(sample_project: Path, sample_rel_paths: List[str]) -> None:
    root = ProjectRoot.open(str(sample_project))
    tree = build_file_tree(root, sample_rel_paths)

    matches = search_project(root, tree, "helper")

    assert [(m.path, m.line) for m in matches] == [
        ("src/App.tsx", 2),
        ("src/App.tsx", 6),
        ("src/utils/helper.ts", 2),
    ]


def test_empty_query_returns_nothing(sample_project: Path, sample_rel_paths: List[str]) -> None:
    root = ProjectRoot.open(str(sample_project))
    tree = build_file_tree(root, sample_rel_paths)

    assert search_project(root, tree, "") == []


def test_unreadable_files_are_skipped(tmp_path: Path) -> None:
    (tmp_path / "a.js").write_text("const token = 1;\n", encoding="utf-8")
    tree = [
        FileNode(name="gone.js", full_path="gone.js"),
        FileNode(name="a.js", full_path="a.js"),
    ]

    matches = search_project(ProjectRoot.open(str(tmp_path)), tree, "TOKEN")

    assert [m.to_dict() for m in matches] == [{"path": "a.js", "line": 1, "snippet": "const token = 1;"}]
