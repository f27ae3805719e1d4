from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema and translates the parsed namespace into
configuration overrides.
"""

import argparse
from typing import Any, Dict, List, Optional

from codeatlas.infra.logging import get_default_log_path

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the codeatlas CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="codeatlas",
        description="Index a JavaScript/TypeScript project: file tree, symbols, imports, tags and stats.",
    )

    # --- Project Source ---
    source = p.add_mutually_exclusive_group()
    source.add_argument(
        "-i", "--input",
        dest="input_path",
        default=None,
        help="Project directory to index (defaults to the current directory).",
    )
    source.add_argument(
        "--zip",
        dest="zip_path",
        default=None,
        help="Project archive (.zip) to extract and index.",
    )
    p.add_argument(
        "--extract-to",
        dest="extract_to",
        default=None,
        help="Directory to extract --zip into (defaults to a new temporary directory).",
    )
    p.add_argument(
        "--name",
        dest="project_name",
        default=None,
        help="Display name of the project (defaults to the directory or archive name).",
    )

    # --- Discovery ---
    p.add_argument(
        "--exclude",
        dest="exclude_patterns",
        default=None,
        help="Comma-separated regexes for directory/file names to skip.",
    )
    p.add_argument(
        "--no-manifest",
        action="store_true",
        help="Do not read package.json.",
    )

    # --- Derived Views ---
    p.add_argument(
        "--graph",
        action="store_true",
        help="Include the local dependency graph in the output.",
    )
    p.add_argument(
        "--search",
        dest="search_query",
        default=None,
        help="Search file contents for a case-insensitive substring.",
    )

    # --- Persistence Sink ---
    p.add_argument(
        "--publish",
        dest="sink_url",
        default=None,
        help="POST the finished index to this URL.",
    )
    p.add_argument(
        "--owner",
        dest="owner",
        default=None,
        help="Owner identifier sent with --publish.",
    )
    p.add_argument(
        "--project-id",
        dest="project_id",
        default=None,
        help="Project identifier sent with --publish (defaults to a new UUID).",
    )

    # --- Output ---
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the index document as JSON.",
    )
    p.add_argument(
        "-o", "--output",
        dest="output_file",
        default=None,
        help="Write the JSON index document to this file.",
    )

    # --- Configuration and Diagnostics ---
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help="Ignore the stored configuration.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the effective configuration and exit.",
    )
    p.add_argument(
        "--save-config",
        action="store_true",
        help="Store the effective configuration (including these flags) and exit.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        nargs="?",
        const="",
        default=None,
        help="Also write logs to this file (the user data directory log when no path is given).",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    if args.exclude_patterns is not None:
        overrides["exclude_patterns"] = _split_csv(args.exclude_patterns)
    if args.no_manifest:
        overrides["read_manifest"] = False
    if args.debug:
        overrides["log_level"] = "DEBUG"
    if args.log_file is not None:
        overrides["log_file"] = args.log_file or get_default_log_path()
    if args.sink_url:
        overrides["sink_url"] = args.sink_url

    return overrides

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _split_csv(value: Optional[str]) -> List[str]:
    """Convert a comma-separated string into a list of trimmed, non-empty items."""
    if value is None:
        return []
    return [x.strip() for x in value.split(",") if x.strip()]
