from __future__ import annotations

"""
Lexical Import Resolver.

Collects the module references a file declares: static `import`
statements and single-argument `require("...")` calls. References are
tagged as local when the specifier starts with "." or "/"; nothing is
resolved against the filesystem at this stage.
"""

from typing import Dict, List

from tree_sitter import Node

from codeatlas.core.analysis.syntax import (
    NodeKind,
    SyntaxTree,
    SyntaxVisitor,
    node_kind,
    string_value,
)
from codeatlas.domain.constants import LOCAL_IMPORT_PREFIX, LOCAL_SPECIFIER_STARTS

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def extract_imports(tree: SyntaxTree) -> List[str]:
    """
    Return the deduplicated import references of one parsed file.

    Args:
        tree: A successfully parsed source file.

    Returns:
        List[str]: "(local) <specifier>" for relative/absolute paths,
                   the bare specifier for packages.
    """
    visitor = _ImportVisitor(tree)
    visitor.visit()
    return list(visitor.imports)


def normalize_specifier(specifier: str) -> str:
    """Tag a raw module specifier as local or external."""
    if specifier.startswith(LOCAL_SPECIFIER_STARTS):
        return f"{LOCAL_IMPORT_PREFIX}{specifier}"
    return specifier


def is_local_reference(reference: str) -> bool:
    return reference.startswith(LOCAL_IMPORT_PREFIX)


def strip_local_prefix(reference: str) -> str:
    """Recover the raw specifier from a local import reference."""
    if is_local_reference(reference):
        return reference[len(LOCAL_IMPORT_PREFIX):]
    return reference

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

class _ImportVisitor(SyntaxVisitor):

    def __init__(self, tree: SyntaxTree) -> None:
        super().__init__(tree)
        # dict keeps first-seen order while deduplicating
        self.imports: Dict[str, None] = {}

    def _add(self, specifier: str) -> None:
        self.imports.setdefault(normalize_specifier(specifier), None)

    def visit_import(self, node: Node) -> None:
        # `import x = require("y")` keeps its source on the clause, not the statement
        specifier = string_value(self.tree, node.child_by_field_name("source"))
        if specifier:
            self._add(specifier)

    def visit_call(self, node: Node) -> None:
        callee = node.child_by_field_name("function")
        if node_kind(callee) is not NodeKind.IDENTIFIER or self.text(callee) != "require":
            return

        arguments = node.child_by_field_name("arguments")
        if arguments is None:
            return
        args = [child for child in arguments.named_children if child.type != "comment"]
        if len(args) != 1:
            return

        specifier = string_value(self.tree, args[0])
        if specifier is not None:
            self._add(specifier)
