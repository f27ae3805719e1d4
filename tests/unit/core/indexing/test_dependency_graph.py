from __future__ import annotations

"""
Unit tests for the Dependency Graph Builder.
"""

import pytest

from codeatlas.core.indexing.dependency_graph import build_dependency_graph, resolve_import
from codeatlas.domain.index_models import FileNode, FolderNode


def test_local_imports_become_edges() -> None:
    """TC-01: `src/a.ts` importing "./b" yields the edge (src/a.ts, src/b)."""
    tree = [
        FolderNode(name="src", children=[
            FileNode(name="a.ts", full_path="src/a.ts", imports=["(local) ./b", "react"]),
            FileNode(name="b.ts", full_path="src/b.ts"),
        ]),
    ]

    graph = build_dependency_graph(tree)

    assert graph.nodes == ("src/a.ts", "src/b.ts")
    assert graph.edges == (("src/a.ts", "src/b"),)


def test_package_imports_are_not_edges() -> None:
    tree = [FileNode(name="a.js", full_path="a.js", imports=["lodash", "@scope/pkg"])]

    assert build_dependency_graph(tree).edges == ()


@pytest.mark.parametrize("importer, reference, expected", [
    ("src/a.ts", "(local) ./b", "src/b"),
    ("src/pages/x.tsx", "(local) ../lib/y", "src/lib/y"),
    ("index.js", "(local) ./server", "server"),
    ("src/a.js", "(local) /abs/mod", "src/abs/mod"),
    ("src/a.js", "(local) ./util.js", "src/util.js"),
])
def test_resolve_import(importer: str, reference: str, expected: str) -> None:
    assert resolve_import(importer, reference) == expected


def test_graph_serialization() -> None:
    tree = [FileNode(name="a.js", full_path="a.js", imports=["(local) ./b"])]

    assert build_dependency_graph(tree).to_dict() == {"nodes": ["a.js"], "edges": [["a.js", "b"]]}
