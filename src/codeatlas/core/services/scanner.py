from __future__ import annotations

"""
Project File Discovery Service.

Walks an extracted project and produces the flat, root-relative file list
the indexing engine ingests. Excluded directories are pruned during the
walk; excluded file names are skipped.
"""

import logging
import os
import re
from typing import List, Optional

from codeatlas.domain.errors import ProjectRootError
from codeatlas.infra.fs import to_posix

logger = logging.getLogger(__name__)

# ==============================================================================
# PATTERN HELPERS
# ==============================================================================

def default_exclude_patterns() -> List[str]:
    """Version control metadata and installed dependencies are skipped by default."""
    return [r"^(\.git|node_modules)$"]


def compile_patterns(patterns: List[str]) -> List[re.Pattern]:
    """
    Transform raw regex strings into compiled Pattern objects.

    Malformed expressions are discarded with a warning.
    """
    compiled: List[re.Pattern] = []
    for p in patterns:
        try:
            compiled.append(re.compile(p))
        except re.error as e:
            logger.warning(f"Ignoring invalid exclude pattern '{p}': {e}")
    return compiled


def matches_any(name: str, compiled_patterns: List[re.Pattern]) -> bool:
    return any(rx.search(name) for rx in compiled_patterns)

# ==============================================================================
# PUBLIC API
# ==============================================================================

def list_project_files(root_path: str, exclude_patterns: Optional[List[str]] = None) -> List[str]:
    """
    Collect every file below a project root.

    Args:
        root_path: Directory to walk.
        exclude_patterns: Regexes matched against directory and file names.
                          Defaults to `default_exclude_patterns()`.

    Returns:
        List[str]: Slash-separated paths relative to the root, in sorted
                   walk order.

    Raises:
        ProjectRootError: If the root is not a directory.
    """
    root_abs = os.path.abspath(root_path)
    if not os.path.isdir(root_abs):
        raise ProjectRootError(f"Project root does not exist or is not a directory: {root_abs}")

    exclude_rx = compile_patterns(
        exclude_patterns if exclude_patterns is not None else default_exclude_patterns()
    )
    results: List[str] = []

    def _on_error(err: OSError) -> None:
        logger.warning(f"Skipping unreadable directory: {err}")

    for current, dirs, files in os.walk(root_abs, onerror=_on_error):
        # In-place pruning keeps os.walk out of excluded directories
        dirs[:] = sorted(d for d in dirs if not matches_any(d, exclude_rx))

        for file_name in sorted(files):
            if matches_any(file_name, exclude_rx):
                continue
            rel_path = os.path.relpath(os.path.join(current, file_name), root_abs)
            results.append(to_posix(rel_path))

    logger.debug(f"Discovered {len(results)} files under {root_abs}")
    return results
