from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides user data directory resolution, path normalization and the
scoped file reads used by the indexing engine. Every read is bound to an
explicit project root; nothing here depends on the working directory
except the fallback of `normalize_path`.
"""

import os
from dataclasses import dataclass
from typing import Optional

from codeatlas.domain.errors import ProjectRootError, ReadError

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "CodeAtlas"
UNIX_APP_DIR_NAME = ".codeatlas"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the OS-specific directory for persistent application data.

    Standards:
    - Windows: %LOCALAPPDATA%/CodeAtlas
    - Linux/Mac: ~/.codeatlas

    Returns:
        str: Absolute path to the application data directory.
    """
    path = ""

    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    if not path:
        path = os.path.join(os.path.expanduser("~"), UNIX_APP_DIR_NAME)

    try:
        os.makedirs(path, exist_ok=True)
    except OSError:
        pass

    return os.path.abspath(path)


def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a path string into an absolute filesystem path.

    Expands environment variables and `~`. Reverts to fallback if the
    input is empty.
    """
    p = (path or "").strip() or fallback
    return os.path.abspath(os.path.expandvars(os.path.expanduser(p)))


def to_posix(rel_path: str) -> str:
    """
    Convert an OS-specific relative path into the slash-separated form.

    Only the platform separator is rewritten: on POSIX a backslash is an
    ordinary file name character.
    """
    if os.sep == "/":
        return rel_path
    return rel_path.replace(os.sep, "/")

# -----------------------------------------------------------------------------
# PROJECT ROOT AND FILE ACCESS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ProjectRoot:
    """
    Explicit handle on the directory an index is built from.

    Attributes:
        path: Absolute path of the extracted project.
    """
    path: str

    @classmethod
    def open(cls, path: str) -> "ProjectRoot":
        """
        Validate a project directory.

        Raises:
            ProjectRootError: If the path is missing, not a directory,
                              or not listable.
        """
        abs_path = os.path.abspath(path)
        if not os.path.isdir(abs_path):
            raise ProjectRootError(f"Project root does not exist or is not a directory: {abs_path}")
        if not os.access(abs_path, os.R_OK | os.X_OK):
            raise ProjectRootError(f"Project root is not readable: {abs_path}")
        return cls(abs_path)

    def resolve(self, rel_path: str) -> str:
        """Map a slash-separated relative path onto the filesystem."""
        return os.path.join(self.path, *rel_path.split("/"))


@dataclass(frozen=True)
class FileContent:
    text: str
    size: int


def read_project_file(root: ProjectRoot, rel_path: str) -> FileContent:
    """
    Read one project file's size and text in a single scoped access.

    Undecodable bytes are replaced rather than rejected so binary assets
    still contribute size and line metadata.

    Raises:
        ReadError: On any I/O failure.
    """
    abs_path = root.resolve(rel_path)
    try:
        size = os.stat(abs_path).st_size
        with open(abs_path, "r", encoding="utf-8", errors="replace", newline="") as f:
            text = f.read()
    except OSError as e:
        raise ReadError(f"Could not read '{rel_path}': {e}") from e
    return FileContent(text=text, size=size)
