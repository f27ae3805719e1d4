from __future__ import annotations

"""
Package Manifest Reader.

Locates the project's `package.json`, summarizes it as PackageInfo and
detects the package manager from the lock file next to it. A malformed
manifest is not fatal: the project is simply indexed without PackageInfo.
"""

import json
import logging
import os
from typing import Any, Dict, List, Optional

from codeatlas.core.services.scanner import compile_patterns, default_exclude_patterns, matches_any
from codeatlas.domain.constants import LOCK_FILES, MANIFEST_FILE_NAME, UNKNOWN_MANAGER
from codeatlas.domain.errors import ManifestError
from codeatlas.domain.index_models import PackageInfo
from codeatlas.infra.fs import to_posix

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def read_package_info(
        root_path: str,
        exclude_patterns: Optional[List[str]] = None,
) -> Optional[PackageInfo]:
    """
    Summarize the project manifest, if any.

    Args:
        root_path: Extracted project directory.
        exclude_patterns: Directory names to skip while searching.

    Returns:
        Optional[PackageInfo]: None when no manifest exists or it is malformed.
    """
    manifest_path = find_manifest(root_path, exclude_patterns)
    if manifest_path is None:
        logger.debug(f"No {MANIFEST_FILE_NAME} found under {root_path}")
        return None

    try:
        return parse_manifest(root_path, manifest_path)
    except ManifestError as e:
        logger.warning(f"Failed to parse {MANIFEST_FILE_NAME}: {e}")
        return None


def find_manifest(root_path: str, exclude_patterns: Optional[List[str]] = None) -> Optional[str]:
    """
    Breadth-first search for the shallowest manifest below the root.

    Returns:
        Optional[str]: Absolute manifest path, or None.
    """
    exclude_rx = compile_patterns(
        exclude_patterns if exclude_patterns is not None else default_exclude_patterns()
    )
    queue: List[str] = [os.path.abspath(root_path)]

    while queue:
        current = queue.pop(0)
        try:
            entries = sorted(os.listdir(current))
        except OSError as e:
            logger.debug(f"Cannot list {current}: {e}")
            continue

        if MANIFEST_FILE_NAME in entries and os.path.isfile(os.path.join(current, MANIFEST_FILE_NAME)):
            return os.path.join(current, MANIFEST_FILE_NAME)

        for entry in entries:
            full = os.path.join(current, entry)
            if os.path.isdir(full) and not matches_any(entry, exclude_rx):
                queue.append(full)

    return None


def parse_manifest(root_path: str, manifest_path: str) -> PackageInfo:
    """
    Load one manifest file into PackageInfo.

    Raises:
        ManifestError: If the file is unreadable, not JSON, or not an object.
    """
    try:
        with open(manifest_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise ManifestError(f"{manifest_path}: {e}") from e

    if not isinstance(data, dict):
        raise ManifestError(f"{manifest_path}: root is not a JSON object")

    return PackageInfo(
        name=data.get("name"),
        version=data.get("version"),
        scripts=_as_map(data.get("scripts")),
        dependencies=_as_map(data.get("dependencies")),
        dev_dependencies=_as_map(data.get("devDependencies")),
        manager=detect_package_manager(os.path.dirname(manifest_path)),
        path=to_posix(os.path.relpath(manifest_path, os.path.abspath(root_path))),
    )


def detect_package_manager(directory: str) -> str:
    for lock_file, manager in LOCK_FILES:
        if os.path.exists(os.path.join(directory, lock_file)):
            return manager
    return UNKNOWN_MANAGER

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _as_map(value: Any) -> Dict[str, str]:
    if not isinstance(value, dict):
        return {}
    return {str(k): str(v) for k, v in value.items()}
