from __future__ import annotations

"""
Unit tests for the Index Build Orchestrator.

Runs the full build over the shared sample project and checks the
project-level facts and the document shape.
"""

from pathlib import Path
from typing import List

import pytest

from codeatlas.core.indexing.engine import build_index
from codeatlas.core.services.manifest import read_package_info
from codeatlas.domain.errors import ProjectRootError


@pytest.fixture
def sample_index(sample_project: Path, sample_rel_paths: List[str]):
    return build_index(
        str(sample_project),
        sample_rel_paths,
        package_info=read_package_info(str(sample_project)),
        name="sample",
    )


def test_index_project_facts(sample_index) -> None:
    """TC-01: Entry points, tags, stats and manifest summary."""
    assert sample_index.name == "sample"
    assert sample_index.entry_points == ["server.js"]
    assert sample_index.tags == {"react", "nextjs", "eslint", "typescript"}
    assert sample_index.stats.total_files == 8
    assert sample_index.stats.total_folders == 2
    assert sample_index.stats.top_languages[0].ext == "js"
    assert sample_index.stats.top_languages[0].count == 3
    assert sample_index.package_info.manager == "yarn"


def test_index_records_parse_diagnostics(sample_index) -> None:
    assert [(d.rel_path, d.stage) for d in sample_index.diagnostics] == [("src/broken.js", "parse")]


def test_find_file(sample_index) -> None:
    helper = sample_index.find_file("src/utils/helper.ts")

    assert helper is not None
    assert helper.exports == ["helper", "Options"]
    assert helper.highlights.fixmes == ["FIXME: handle empty input"]
    assert sample_index.find_file("missing.js") is None


def test_index_document_shape(sample_index) -> None:
    doc = sample_index.to_dict()

    assert set(doc.keys()) == {"projectName", "fileTree", "entryPoints", "tags", "stats", "packageInfo"}
    assert doc["tags"] == ["eslint", "nextjs", "react", "typescript"]
    assert doc["packageInfo"]["devDependencies"] == {"eslint": "8.0.0"}

    server = doc["fileTree"][2]
    assert server["type"] == "file"
    assert server["fullPath"] == "server.js"
    assert server["entry"] is True
    assert set(server["highlights"].keys()) == {"todos", "fixmes", "notes"}


def test_index_is_deterministic(sample_project: Path, sample_rel_paths: List[str]) -> None:
    """TC-02: Rebuilding the same project yields the same document."""
    first = build_index(str(sample_project), sample_rel_paths, name="x").to_dict()
    second = build_index(str(sample_project), sample_rel_paths, name="x").to_dict()

    assert first == second


def test_missing_root_is_fatal(tmp_path: Path) -> None:
    with pytest.raises(ProjectRootError):
        build_index(str(tmp_path / "nope"), ["a.js"])
