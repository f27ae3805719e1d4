from __future__ import annotations

"""
Unit tests for the Technology Tag Detector.
"""

from pathlib import Path
from typing import List

from codeatlas.core.indexing.tags import detect_tags
from codeatlas.core.indexing.tree_builder import build_file_tree
from codeatlas.core.services.manifest import read_package_info
from codeatlas.domain.index_models import FileNode, FolderNode, Node, PackageInfo
from codeatlas.infra.fs import ProjectRoot


def _tree(*paths: str) -> List[Node]:
    """Flat helper tree: every path becomes a root-level FileNode."""
    return [FileNode(name=p.rsplit("/", 1)[-1], full_path=p) for p in paths]


def test_dependency_and_extension_tags() -> None:
    """TC-01: A `next` dependency plus a .tsx file yields nextjs and typescript."""
    pkg = PackageInfo(dependencies={"next": "14.0.0"})
    tags = detect_tags(pkg, _tree("pages/index.tsx"))

    assert {"nextjs", "typescript"} <= tags


def test_dev_dependencies_are_merged() -> None:
    pkg = PackageInfo(dependencies={"express": "4"}, dev_dependencies={"eslint": "8", "prisma": "5"})

    assert detect_tags(pkg, []) == {"express", "eslint", "prisma"}


def test_tags_from_file_names_without_manifest() -> None:
    tree = [
        FolderNode(name="config", children=[
            FileNode(name="tailwind.config.js", full_path="config/tailwind.config.js"),
            FileNode(name=".eslintrc", full_path="config/.eslintrc"),
        ]),
    ]

    assert detect_tags(None, tree) == {"tailwind", "eslint"}


def test_substring_matching_is_case_insensitive() -> None:
    pkg = PackageInfo(dependencies={"@types/React-Dom": "18"})

    assert "react" in detect_tags(pkg, [])


def test_no_signals_no_tags() -> None:
    assert detect_tags(PackageInfo(), _tree("main.py", "README.md")) == set()


def test_sample_project_tags(sample_project: Path, sample_rel_paths: List[str]) -> None:
    tree = build_file_tree(ProjectRoot.open(str(sample_project)), sample_rel_paths)
    tags = detect_tags(read_package_info(str(sample_project)), tree)

    assert tags == {"react", "nextjs", "eslint", "typescript"}
