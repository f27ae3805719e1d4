from __future__ import annotations

"""
Dependency Graph Builder.

Turns the local imports of every indexed file into directed edges. Targets
are joined lexically against the importer's directory and never checked
against the tree, so an edge may point at an extension-less or missing path.
"""

import posixpath
from typing import List, Sequence, Tuple

from codeatlas.core.analysis.imports import is_local_reference, strip_local_prefix
from codeatlas.domain.index_models import DependencyGraph, Node, iter_file_nodes


def build_dependency_graph(tree: Sequence[Node]) -> DependencyGraph:
    """
    Build the local module graph of an indexed tree.

    Args:
        tree: Root-level nodes of the indexed tree.

    Returns:
        DependencyGraph: Every file as a node, one edge per local import.
    """
    nodes: List[str] = []
    edges: List[Tuple[str, str]] = []

    for file_node in iter_file_nodes(tree):
        nodes.append(file_node.full_path)
        for reference in file_node.imports:
            if is_local_reference(reference):
                edges.append((file_node.full_path, resolve_import(file_node.full_path, reference)))

    return DependencyGraph(nodes=tuple(nodes), edges=tuple(edges))


def resolve_import(importer: str, reference: str) -> str:
    """Join a local specifier with the importer's directory and normalize it."""
    specifier = strip_local_prefix(reference).replace("\\", "/")
    # Concatenate rather than posixpath.join so "/x" stays under the importer's directory
    joined = "/".join(part for part in (posixpath.dirname(importer), specifier) if part)
    return posixpath.normpath(joined)
