from __future__ import annotations

"""
Comment Annotator.

Files every comment of a parsed source under the todo/fixme/note
categories whose marker it contains (case-insensitive). A comment that
mentions several markers lands in each matching category with its full
text.
"""

from typing import List

from tree_sitter import Node

from codeatlas.core.analysis.syntax import SyntaxTree, SyntaxVisitor
from codeatlas.domain.constants import HIGHLIGHT_MARKERS
from codeatlas.domain.index_models import Highlights


def extract_highlights(tree: SyntaxTree) -> Highlights:
    """
    Scan every comment of a parsed file for highlight markers.

    Args:
        tree: A successfully parsed source file.

    Returns:
        Highlights: Trimmed comment bodies per category, in source order.
    """
    visitor = _CommentVisitor(tree)
    visitor.visit()

    highlights = Highlights()
    for comment in visitor.comments:
        lowered = comment.lower()
        for category, marker in HIGHLIGHT_MARKERS.items():
            if marker in lowered:
                getattr(highlights, category).append(comment)
    return highlights


def comment_body(raw: str) -> str:
    """Strip the `//` or `/* */` delimiters of a comment and trim the rest."""
    if raw.startswith("//"):
        raw = raw[2:]
    elif raw.startswith("/*"):
        raw = raw[2:-2] if raw.endswith("*/") and len(raw) >= 4 else raw[2:]
    return raw.strip()


class _CommentVisitor(SyntaxVisitor):

    def __init__(self, tree: SyntaxTree) -> None:
        super().__init__(tree)
        self.comments: List[str] = []

    def visit_comment(self, node: Node) -> None:
        self.comments.append(comment_body(self.text(node)))
