from __future__ import annotations

"""
Content Line Search.

Re-reads indexed files by their full path and reports every line that
contains the query, case-insensitively.
"""

import logging
from dataclasses import dataclass
from typing import List, Sequence

from codeatlas.domain.errors import ReadError
from codeatlas.domain.index_models import Node, iter_file_nodes
from codeatlas.infra.fs import ProjectRoot, read_project_file

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchMatch:
    """
    One matching line.

    Attributes:
        path: Full path of the file, as stored in the index.
        line: 1-based line number.
        snippet: The matching line, trimmed.
    """
    path: str
    line: int
    snippet: str

    def to_dict(self) -> dict:
        return {"path": self.path, "line": self.line, "snippet": self.snippet}


def search_project(root: ProjectRoot, tree: Sequence[Node], query: str) -> List[SearchMatch]:
    """
    Search the content of every indexed file.

    Args:
        root: Project root the files are read from.
        tree: Indexed tree whose full paths select the files.
        query: Text to look for.

    Returns:
        List[SearchMatch]: Matches in tree order, then line order.
    """
    if not query:
        return []

    needle = query.lower()
    matches: List[SearchMatch] = []

    for node in iter_file_nodes(tree):
        try:
            content = read_project_file(root, node.full_path)
        except ReadError as e:
            logger.warning(f"Failed to read file: {node.full_path} ({e})")
            continue

        for idx, line in enumerate(content.text.split("\n")):
            if needle in line.lower():
                matches.append(SearchMatch(path=node.full_path, line=idx + 1, snippet=line.strip()))

    logger.debug(f"Search '{query}' produced {len(matches)} matches")
    return matches
