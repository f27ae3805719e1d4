from __future__ import annotations

"""
Entry-Point Classifier.

Decides whether a file is likely an application bootstrap target from two
independent signals: a conventional base name, or the presence of a
bootstrap call anywhere in the raw text (comments and strings included).
"""

import posixpath

from codeatlas.domain.constants import BOOT_KEYWORDS, ENTRY_FILE_NAMES


def is_entry_file(name: str, content: str) -> bool:
    """
    Classify a file as an entry point.

    Args:
        name: File name or slash-separated path; only the base name counts.
        content: Raw file text.

    Returns:
        bool: True if the name is on the allow-list or the text contains
              a bootstrap keyword.
    """
    if has_entry_name(name):
        return True
    return any(keyword in content for keyword in BOOT_KEYWORDS)


def has_entry_name(name: str) -> bool:
    base = posixpath.basename(name).lower()
    return base in ENTRY_FILE_NAMES
