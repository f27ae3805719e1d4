from __future__ import annotations

"""
Indexing Error Taxonomy.

Defines the exception hierarchy raised by the analysis engine and its
boundary adapters, plus the diagnostic record used to keep track of
per-file degradations without aborting an index build.
"""

from dataclasses import dataclass
from typing import Optional

# -----------------------------------------------------------------------------
# EXCEPTIONS
# -----------------------------------------------------------------------------

class CodeAtlasError(Exception):
    """Base class for every error raised by the indexing engine."""


class ParseError(CodeAtlasError):
    """
    Raised when a source file cannot be turned into a syntax tree.

    Attributes:
        filename: Optional name of the offending file.
        line: 1-based line of the first syntax error, if known.
        column: 0-based column of the first syntax error, if known.
    """

    def __init__(
            self,
            message: str,
            filename: Optional[str] = None,
            line: Optional[int] = None,
            column: Optional[int] = None,
    ) -> None:
        self.filename = filename
        self.line = line
        self.column = column
        location = f" (line {line}, column {column})" if line is not None else ""
        prefix = f"{filename}: " if filename else ""
        super().__init__(f"{prefix}{message}{location}")


class ReadError(CodeAtlasError):
    """Raised when a project file cannot be read from disk."""


class ProjectRootError(ReadError):
    """Raised when the project root itself is missing or unreadable."""


class ManifestError(CodeAtlasError):
    """Raised when a package manifest exists but is not valid JSON."""


class ArchiveError(CodeAtlasError):
    """Raised when an uploaded archive is corrupt or tries to escape its target."""

# -----------------------------------------------------------------------------
# DIAGNOSTIC RECORDS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Diagnostic:
    """
    Describes a non-fatal degradation of one file during an index build.

    Attributes:
        rel_path: File path identifier relative to the project root.
        stage: Processing stage that failed ("read" or "parse").
        error: Descriptive exception or error message.
    """
    rel_path: str
    stage: str
    error: str
