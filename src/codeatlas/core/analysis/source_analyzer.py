from __future__ import annotations

"""
Per-File Source Analysis Facade.

Parses a source text once and runs the import, symbol and comment
analyzers over the same tree.
"""

import logging
from typing import Optional

from codeatlas.core.analysis.comments import extract_highlights
from codeatlas.core.analysis.imports import extract_imports
from codeatlas.core.analysis.symbols import extract_symbols
from codeatlas.core.analysis.syntax import parse_source
from codeatlas.domain.constants import SUPPORTED_EXTENSIONS
from codeatlas.domain.index_models import SourceAnalysis

logger = logging.getLogger(__name__)


def analyze_source(text: str, filename: Optional[str] = None) -> SourceAnalysis:
    """
    Extract imports, symbols and comment highlights from one source text.

    Args:
        text: Raw JS/JSX/TS/TSX source.
        filename: Optional file name used for grammar ordering and messages.

    Returns:
        SourceAnalysis: Results of the three analyzers.

    Raises:
        ParseError: If the text cannot be parsed.
    """
    tree = parse_source(text, filename)
    logger.debug(f"Parsed {filename or '<source>'} with the '{tree.dialect}' grammar")

    return SourceAnalysis(
        imports=extract_imports(tree),
        symbols=extract_symbols(tree),
        highlights=extract_highlights(tree),
    )


def is_supported_source(name: str) -> bool:
    """Check whether a file name carries one of the parseable extensions."""
    if "." not in name:
        return False
    return name.rsplit(".", 1)[-1].lower() in SUPPORTED_EXTENSIONS
