from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, configuration merging
(defaults, stored configuration and CLI overrides), project discovery
(directory or archive), index construction, optional derived views and
publication, and result rendering.
"""

import json
import os
import shutil
import sys
import tempfile
from typing import Any, Dict, List, Optional, Tuple

from codeatlas.core.indexing.dependency_graph import build_dependency_graph
from codeatlas.core.indexing.engine import build_index
from codeatlas.core.services.manifest import read_package_info
from codeatlas.core.services.scanner import list_project_files
from codeatlas.core.services.search import search_project
from codeatlas.domain.config import (
    get_config_path,
    get_default_config,
    load_config,
    save_config,
    validate_config,
)
from codeatlas.domain.errors import ArchiveError, ProjectRootError
from codeatlas.domain.index_models import ProjectIndex
from codeatlas.infra.archive import extract_archive
from codeatlas.infra.fs import ProjectRoot, normalize_path
from codeatlas.infra.logging import LoggingConfig, configure_logging, get_logger
from codeatlas.infra.network import new_project_id, publish_index
from codeatlas.interface.cli import args as cli_args

logger = get_logger(__name__)

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: 0 on success, 1 on indexing/publishing failure, 2 on invalid
             input, 130 on interruption.
    """
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 1. Configuration hierarchy
    base_conf = get_default_config() if args.use_defaults else load_config()
    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))
    clean_conf, warnings = validate_config(raw_conf)

    # 2. Logging bootstrap
    configure_logging(LoggingConfig(
        level=clean_conf["log_level"],
        console=True,
        log_file=clean_conf["log_file"] or None,
    ))
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return 0

    if args.save_config:
        if not save_config(clean_conf):
            print(f"ERROR: Could not save configuration to {get_config_path()}", file=sys.stderr)
            return 1
        print(f"Configuration saved to {get_config_path()}")
        return 0

    # 3. Project source resolution
    try:
        root_path, default_name, scratch_dir = _resolve_project_root(args)
    except ArchiveError as e:
        logger.error(str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    try:
        return _index_and_render(args, clean_conf, root_path, args.project_name or default_name)
    finally:
        if scratch_dir:
            shutil.rmtree(scratch_dir, ignore_errors=True)
            logger.debug(f"Removed extraction directory {scratch_dir}")


def _index_and_render(args: Any, clean_conf: Dict[str, Any], root_path: str, project_name: str) -> int:
    """Run steps 4-7 of the workflow against a resolved project root."""
    # 4. Indexing
    try:
        rel_paths = list_project_files(root_path, clean_conf["exclude_patterns"])
        package_info = (
            read_package_info(root_path, clean_conf["exclude_patterns"])
            if clean_conf["read_manifest"] else None
        )
        index = build_index(root_path, rel_paths, package_info=package_info, name=project_name)
    except ProjectRootError as e:
        logger.error(str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return 2
    except KeyboardInterrupt:
        logger.warning("Indexing interrupted by user.")
        return 130
    except Exception as e:
        logger.critical(f"Indexing failed: {e}", exc_info=True)
        print(f"ERROR: Indexing failed: {e}", file=sys.stderr)
        return 1

    # 5. Derived views
    document = index.to_dict()
    if args.graph:
        document["dependencyGraph"] = build_dependency_graph(index.tree).to_dict()
    if args.search_query:
        matches = search_project(ProjectRoot(root_path), index.tree, args.search_query)
        document["searchResults"] = [m.to_dict() for m in matches]

    # 6. Publication
    exit_code = 0
    if clean_conf["sink_url"]:
        ok, msg = publish_index(
            clean_conf["sink_url"],
            index,
            args.project_id or new_project_id(),
            owner=args.owner,
            timeout=clean_conf["sink_timeout"],
        )
        if not ok:
            print(f"ERROR: {msg}", file=sys.stderr)
            exit_code = 1

    # 7. Output rendering
    if args.output_file:
        _write_document(args.output_file, document)
    if args.json_output:
        print(json.dumps(document, ensure_ascii=False, indent=2))
    else:
        _print_human_summary(index, document)

    return exit_code

# -----------------------------------------------------------------------------
# CONFIGURATION AND SOURCE RESOLUTION
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Shallow merge of known, non-None override values into the base configuration."""
    out = dict(base)
    for k, v in overrides.items():
        if k in base and v is not None:
            out[k] = v
    return out


def _resolve_project_root(args: Any) -> Tuple[str, str, Optional[str]]:
    """
    Determine the directory to index and its default display name.

    Returns:
        Tuple[str, str, Optional[str]]: (absolute root path, default project
            name, temporary extraction directory to remove afterwards or None).

    Raises:
        ArchiveError: If the archive cannot be extracted.
    """
    if args.zip_path:
        zip_path = os.path.abspath(args.zip_path)
        scratch_dir = None if args.extract_to else tempfile.mkdtemp(prefix="codeatlas_")
        try:
            root = extract_archive(zip_path, args.extract_to or scratch_dir)
        except ArchiveError:
            if scratch_dir:
                shutil.rmtree(scratch_dir, ignore_errors=True)
            raise
        name = os.path.basename(zip_path)
        if name.lower().endswith(".zip"):
            name = name[:-4]
        return root, name, scratch_dir

    root = normalize_path(args.input_path, os.getcwd())
    return root, os.path.basename(root.rstrip(os.sep)) or root, None


def _write_document(path: str, document: Dict[str, Any]) -> None:
    try:
        os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(document, f, ensure_ascii=False, indent=2)
        logger.info(f"Index document saved to: {path}")
    except OSError as e:
        logger.error(f"Failed to save index document to '{path}': {e}")

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _print_human_summary(index: ProjectIndex, document: Dict[str, Any]) -> None:
    stats = index.stats
    print(f"Project: {index.name}")
    print(f"Files: {stats.total_files}  Folders: {stats.total_folders}")

    if stats.top_languages:
        langs = ", ".join(f"{lc.ext} ({lc.count})" for lc in stats.top_languages)
        print(f"Top languages: {langs}")

    if index.tags:
        print(f"Tags: {', '.join(sorted(index.tags))}")

    if index.package_info:
        pkg = index.package_info
        print(f"Package: {pkg.name or '?'}@{pkg.version or '?'} ({pkg.manager}, {pkg.path})")

    if index.entry_points:
        print("Entry points:")
        for path in index.entry_points:
            print(f"  - {path}")

    graph = document.get("dependencyGraph")
    if graph:
        print(f"Dependency graph: {len(graph['nodes'])} nodes, {len(graph['edges'])} edges")

    results = document.get("searchResults")
    if results is not None:
        print(f"Search matches: {len(results)}")
        for match in results:
            print(f"  {match['path']}:{match['line']}: {match['snippet']}")

    if index.diagnostics:
        print(f"Diagnostics: {len(index.diagnostics)} file(s) degraded (see log)")


if __name__ == "__main__":
    sys.exit(main())
