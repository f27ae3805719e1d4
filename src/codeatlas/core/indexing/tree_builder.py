from __future__ import annotations

"""
Indexed Tree Builder.

Folds a flat list of root-relative file paths into a nested folder/file
structure. Folders are inferred from path prefixes and created once;
siblings keep first-encounter order. Each file is read once, classified
as entry point or not, and, when its extension is parseable, analyzed for
imports, symbols and comment highlights.

Per-file failures never abort the build: an unreadable file is left out
of the tree, a file that fails to parse keeps only its metadata. Both
outcomes are logged and recorded as Diagnostic entries.
"""

import logging
from typing import List, Optional, Sequence

from codeatlas.core.analysis.entrypoints import is_entry_file
from codeatlas.core.analysis.source_analyzer import analyze_source, is_supported_source
from codeatlas.domain.errors import Diagnostic, ParseError, ReadError
from codeatlas.domain.index_models import FileNode, FolderNode, Tree
from codeatlas.infra.fs import ProjectRoot, read_project_file, to_posix

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def build_file_tree(
        root: ProjectRoot,
        rel_paths: Sequence[str],
        diagnostics: Optional[List[Diagnostic]] = None,
) -> Tree:
    """
    Build the indexed tree for a list of project files.

    Args:
        root: Project root every relative path is resolved against.
        rel_paths: Root-relative file paths, in ingestion order. Directory
                   entries must not be listed.
        diagnostics: Optional accumulator for per-file degradations.

    Returns:
        Tree: Root-level nodes in first-encounter order.
    """
    top = FolderNode(name="")
    seen_files = set()

    for raw_path in rel_paths:
        rel_path = to_posix(raw_path).strip("/")
        parts = [p for p in rel_path.split("/") if p]
        if not parts:
            continue

        full_path = "/".join(parts)
        if full_path in seen_files:
            logger.debug(f"Skipping duplicate path: {full_path}")
            continue
        seen_files.add(full_path)

        # Folder navigation and creation
        parent = top
        for segment in parts[:-1]:
            parent = _get_or_create_folder(parent, segment)

        file_node = build_file_node(root, full_path, diagnostics)
        if file_node is not None:
            parent.children.append(file_node)

    return top.children


def build_file_node(
        root: ProjectRoot,
        full_path: str,
        diagnostics: Optional[List[Diagnostic]] = None,
) -> Optional[FileNode]:
    """
    Read and analyze one file.

    Returns:
        Optional[FileNode]: The populated node, or None if the file could
                            not be read.
    """
    name = full_path.rsplit("/", 1)[-1]

    try:
        content = read_project_file(root, full_path)
    except ReadError as e:
        logger.warning(f"Failed to read file: {full_path} ({e})")
        _record(diagnostics, full_path, "read", str(e))
        return None

    node = FileNode(
        name=name,
        full_path=full_path,
        size=content.size,
        loc=len(content.text.split("\n")),
        entry=is_entry_file(name, content.text),
    )

    if is_supported_source(name):
        try:
            node.apply_analysis(analyze_source(content.text, name))
        except ParseError as e:
            logger.info(f"Syntax analysis skipped for {full_path}: {e}")
            _record(diagnostics, full_path, "parse", str(e))

    return node

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _get_or_create_folder(parent: FolderNode, name: str) -> FolderNode:
    folder = parent._folders.get(name)
    if folder is None:
        folder = FolderNode(name=name)
        parent._folders[name] = folder
        parent.children.append(folder)
    return folder


def _record(diagnostics: Optional[List[Diagnostic]], rel_path: str, stage: str, error: str) -> None:
    if diagnostics is not None:
        diagnostics.append(Diagnostic(rel_path=rel_path, stage=stage, error=error))
