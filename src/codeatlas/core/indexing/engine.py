from __future__ import annotations

"""
Index Build Orchestrator.

Coordinates one synchronous project ingestion:
1. Validates the project root (the only fatal failure).
2. Builds the indexed tree file by file.
3. Collects entry points.
4. Derives technology tags and project statistics from the tree.
"""

import logging
from typing import List, Optional, Sequence

from codeatlas.core.indexing.stats import compute_stats
from codeatlas.core.indexing.tags import detect_tags
from codeatlas.core.indexing.tree_builder import build_file_tree
from codeatlas.domain.errors import Diagnostic
from codeatlas.domain.index_models import PackageInfo, ProjectIndex, iter_file_nodes
from codeatlas.infra.fs import ProjectRoot

logger = logging.getLogger(__name__)


def build_index(
        root_path: str,
        rel_paths: Sequence[str],
        package_info: Optional[PackageInfo] = None,
        name: str = "",
) -> ProjectIndex:
    """
    Build the complete index of an extracted project.

    Args:
        root_path: Directory the project was extracted to.
        rel_paths: Root-relative file paths (no directory entries).
        package_info: Manifest summary supplied by the manifest reader.
        name: Display name of the project.

    Returns:
        ProjectIndex: The aggregate root of the analysis.

    Raises:
        ProjectRootError: If the root is missing or unreadable.
    """
    root = ProjectRoot.open(root_path)
    logger.info(f"Indexing {len(rel_paths)} files under {root.path}")

    diagnostics: List[Diagnostic] = []
    tree = build_file_tree(root, rel_paths, diagnostics)

    entry_points = [node.full_path for node in iter_file_nodes(tree) if node.entry]

    index = ProjectIndex(
        tree=tree,
        entry_points=entry_points,
        tags=detect_tags(package_info, tree),
        stats=compute_stats(tree),
        package_info=package_info,
        name=name,
        diagnostics=diagnostics,
    )

    logger.info(
        f"Index built: {index.stats.total_files} files, {index.stats.total_folders} folders, "
        f"{len(entry_points)} entry points, {len(diagnostics)} diagnostics"
    )
    return index
