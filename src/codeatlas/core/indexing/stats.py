from __future__ import annotations

"""
Project Statistics Aggregator.
"""

from collections import Counter
from typing import Sequence, Tuple

from codeatlas.domain.constants import TOP_LANGUAGES_LIMIT
from codeatlas.domain.index_models import FileNode, LanguageCount, Node, ProjectStats


def compute_stats(tree: Sequence[Node], limit: int = TOP_LANGUAGES_LIMIT) -> ProjectStats:
    """
    Count files and folders and keep the most frequent extensions.

    Args:
        tree: Root-level nodes of the indexed tree.
        limit: Number of extensions to keep.

    Returns:
        ProjectStats: Totals and the top extensions by descending file count.
    """
    langs: Counter = Counter()
    total_files, total_folders = _count(tree, langs)
    # most_common keeps first-seen order among equal counts
    top = tuple(LanguageCount(ext=ext, count=count) for ext, count in langs.most_common(limit))
    return ProjectStats(total_files=total_files, total_folders=total_folders, top_languages=top)


def _count(nodes: Sequence[Node], langs: Counter) -> Tuple[int, int]:
    files = folders = 0
    for node in nodes:
        if isinstance(node, FileNode):
            files += 1
            if node.extension:
                langs[node.extension] += 1
        else:
            folders += 1
            sub_files, sub_folders = _count(node.children, langs)
            files += sub_files
            folders += sub_folders
    return files, folders
