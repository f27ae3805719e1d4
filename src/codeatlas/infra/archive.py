from __future__ import annotations

"""
Archive Extraction Infrastructure.

Unpacks an uploaded project archive into a dedicated directory. Member
paths are validated before anything is written so an archive can never
place files outside its extraction root.
"""

import logging
import os
import zipfile

from codeatlas.domain.errors import ArchiveError

logger = logging.getLogger(__name__)


def extract_archive(zip_path: str, dest_dir: str) -> str:
    """
    Extract a zip archive into a directory.

    Args:
        zip_path: Path to the uploaded archive.
        dest_dir: Target directory, created if missing.

    Returns:
        str: Absolute path of the extraction root.

    Raises:
        ArchiveError: If the archive is missing, corrupt, or contains
                      absolute or escaping member paths.
    """
    dest_abs = os.path.abspath(dest_dir)

    try:
        with zipfile.ZipFile(zip_path, "r") as zf:
            members = zf.namelist()
            for member in members:
                _check_member(dest_abs, member)

            os.makedirs(dest_abs, exist_ok=True)
            zf.extractall(dest_abs)
    except zipfile.BadZipFile as e:
        raise ArchiveError(f"Invalid ZIP file '{zip_path}': {e}") from e
    except OSError as e:
        raise ArchiveError(f"Could not extract '{zip_path}': {e}") from e

    logger.info(f"Extracted {len(members)} archive entries into {dest_abs}")
    return dest_abs


def _check_member(dest_abs: str, member: str) -> None:
    normalized = member.replace("\\", "/")
    if normalized.startswith("/") or (len(normalized) > 1 and normalized[1] == ":"):
        raise ArchiveError(f"Archive member uses an absolute path: {member}")

    target = os.path.abspath(os.path.join(dest_abs, normalized))
    if os.path.commonpath([dest_abs, target]) != dest_abs:
        raise ArchiveError(f"Archive member escapes the extraction root: {member}")
