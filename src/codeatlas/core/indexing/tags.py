from __future__ import annotations

"""
Technology Tag Detector.

Assigns project-level technology tags by substring-matching a fixed
keyword table against declared dependency names and lowercase file
names. Any `.ts`/`.tsx` file adds the typescript tag on its own.
"""

from typing import List, Optional, Sequence, Set

from codeatlas.domain.constants import TECH_KEYWORDS, TYPESCRIPT_FILE_SUFFIXES, TYPESCRIPT_TAG
from codeatlas.domain.index_models import Node, PackageInfo, iter_file_nodes


def detect_tags(package_info: Optional[PackageInfo], tree: Sequence[Node]) -> Set[str]:
    """
    Infer technology tags for an indexed project.

    Args:
        package_info: Manifest summary, or None when no manifest exists.
        tree: Root-level nodes of the indexed tree.

    Returns:
        Set[str]: Tag identifiers.
    """
    tags: Set[str] = set()
    deps = [d.lower() for d in package_info.dependency_names()] if package_info else []

    filenames: List[str] = []
    for node in iter_file_nodes(tree):
        filenames.append(node.name.lower())
        if node.full_path.endswith(TYPESCRIPT_FILE_SUFFIXES):
            tags.add(TYPESCRIPT_TAG)

    for tag, matchers in TECH_KEYWORDS.items():
        for keyword in matchers:
            kw = keyword.lower()
            if any(kw in d for d in deps) or any(kw in f for f in filenames):
                tags.add(tag)
                break

    return tags
