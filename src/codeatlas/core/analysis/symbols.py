from __future__ import annotations

"""
Symbol Extraction Service.

Collects declared functions, classes, interfaces/type aliases, UI
component candidates and exported names from one parsed file. The rules
are declaration-shape heuristics, not type information:

- A name becomes a component when it is declared as a function or class,
  starts with an uppercase letter, and the file contains `return <`
  anywhere (a file-global JSX proxy).
- Exports are the union of ES module export forms and CommonJS
  assignments (`exports.K`, `module.exports.K`, `module.exports = {K}`).
  An export by bare reference only marks the name as exported.
"""

import re
from typing import Dict, Optional

from tree_sitter import Node

from codeatlas.core.analysis.syntax import (
    NodeKind,
    SyntaxTree,
    SyntaxVisitor,
    node_kind,
    string_value,
    unwrap_parentheses,
)
from codeatlas.domain.constants import COMPONENT_JSX_MARKER
from codeatlas.domain.index_models import SymbolTable

FUNCTION = "function"
CLASS = "class"
INTERFACE = "interface"

_UPPERCASE_START = re.compile(r"^[A-Z]")

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def extract_symbols(tree: SyntaxTree) -> SymbolTable:
    """
    Collect the symbol table of one parsed file.

    Args:
        tree: A successfully parsed source file.

    Returns:
        SymbolTable: Deduplicated functions, classes, interfaces,
                     components and exports.
    """
    visitor = _SymbolVisitor(tree)
    visitor.visit()
    return SymbolTable(
        functions=list(visitor.functions),
        classes=list(visitor.classes),
        interfaces=list(visitor.interfaces),
        components=list(visitor.components),
        exports=list(visitor.exports),
    )


def classify_value(node: Optional[Node]) -> Optional[str]:
    """Return FUNCTION or CLASS when an expression is a function/class literal."""
    kind = node_kind(unwrap_parentheses(node))
    if kind in (NodeKind.FUNCTION_EXPRESSION, NodeKind.ARROW_FUNCTION):
        return FUNCTION
    if kind is NodeKind.CLASS_EXPRESSION:
        return CLASS
    return None

# -----------------------------------------------------------------------------
# VISITOR
# -----------------------------------------------------------------------------

class _SymbolVisitor(SyntaxVisitor):

    def __init__(self, tree: SyntaxTree) -> None:
        super().__init__(tree)
        self.functions: Dict[str, None] = {}
        self.classes: Dict[str, None] = {}
        self.interfaces: Dict[str, None] = {}
        self.components: Dict[str, None] = {}
        self.exports: Dict[str, None] = {}
        self.renders_jsx = COMPONENT_JSX_MARKER in tree.source

    def add_symbol(self, name: Optional[str], kind: Optional[str] = None, exported: bool = False) -> None:
        if not name:
            return

        if kind == FUNCTION:
            self.functions.setdefault(name, None)
        elif kind == CLASS:
            self.classes.setdefault(name, None)
        elif kind == INTERFACE:
            self.interfaces.setdefault(name, None)

        if kind in (FUNCTION, CLASS) and self.renders_jsx and _UPPERCASE_START.match(name):
            self.components.setdefault(name, None)

        if exported:
            self.exports.setdefault(name, None)

    def name_of(self, node: Optional[Node]) -> Optional[str]:
        if node is None:
            return None
        name_node = node.child_by_field_name("name")
        return self.text(name_node) if name_node is not None else None

    # -- Declarations --

    def visit_function_declaration(self, node: Node) -> None:
        self.add_symbol(self.name_of(node), FUNCTION)

    def visit_variable_declarator(self, node: Node) -> None:
        name_node = node.child_by_field_name("name")
        if node_kind(name_node) is not NodeKind.IDENTIFIER:
            return
        if classify_value(node.child_by_field_name("value")) == FUNCTION:
            self.add_symbol(self.text(name_node), FUNCTION)

    def visit_class_declaration(self, node: Node) -> None:
        self.add_symbol(self.name_of(node), CLASS)

    def visit_interface_declaration(self, node: Node) -> None:
        self.add_symbol(self.name_of(node), INTERFACE)

    def visit_type_alias_declaration(self, node: Node) -> None:
        self.add_symbol(self.name_of(node), INTERFACE)

    # -- ES module exports --

    def visit_export(self, node: Node) -> None:
        is_default = any(child.type == "default" for child in node.children)
        declaration = node.child_by_field_name("declaration")

        if is_default:
            self._export_default(declaration or node.child_by_field_name("value"))
        elif declaration is not None:
            self._export_declaration(declaration)

        for child in node.named_children:
            if node_kind(child) is NodeKind.EXPORT_CLAUSE:
                self._export_clause(child)

    def _export_default(self, target: Optional[Node]) -> None:
        kind = node_kind(target)
        if kind is NodeKind.IDENTIFIER:
            self.add_symbol(self.text(target), exported=True)
        elif kind in (NodeKind.FUNCTION_DECLARATION, NodeKind.FUNCTION_EXPRESSION):
            self.add_symbol(self.name_of(target), FUNCTION, exported=True)
        elif kind in (NodeKind.CLASS_DECLARATION, NodeKind.CLASS_EXPRESSION):
            self.add_symbol(self.name_of(target), CLASS, exported=True)
        elif target is not None:
            self.add_symbol(self.name_of(target), exported=True)

    def _export_declaration(self, declaration: Node) -> None:
        kind = node_kind(declaration)
        if kind is NodeKind.FUNCTION_DECLARATION:
            self.add_symbol(self.name_of(declaration), FUNCTION, exported=True)
        elif kind is NodeKind.CLASS_DECLARATION:
            self.add_symbol(self.name_of(declaration), CLASS, exported=True)
        elif kind in (NodeKind.INTERFACE_DECLARATION, NodeKind.TYPE_ALIAS_DECLARATION):
            self.add_symbol(self.name_of(declaration), INTERFACE, exported=True)
        elif kind is NodeKind.VARIABLE_DECLARATION:
            for declarator in declaration.named_children:
                if node_kind(declarator) is not NodeKind.VARIABLE_DECLARATOR:
                    continue
                name_node = declarator.child_by_field_name("name")
                if node_kind(name_node) is not NodeKind.IDENTIFIER:
                    continue
                name = self.text(name_node)
                self.add_symbol(name, exported=True)
                self.add_symbol(name, classify_value(declarator.child_by_field_name("value")))

    def _export_clause(self, clause: Node) -> None:
        for spec in clause.named_children:
            if node_kind(spec) is not NodeKind.EXPORT_SPECIFIER:
                continue
            exported = spec.child_by_field_name("alias") or spec.child_by_field_name("name")
            # `export { a as "b-c" }` has no identifier to record
            if exported is None or node_kind(exported) is NodeKind.STRING:
                continue
            self.add_symbol(self.text(exported), exported=True)

    # -- CommonJS exports --

    def visit_assignment(self, node: Node) -> None:
        left = node.child_by_field_name("left")
        right = unwrap_parentheses(node.child_by_field_name("right"))
        kind = node_kind(left)

        if kind is NodeKind.MEMBER_EXPRESSION:
            target = left.child_by_field_name("object")
            key_node = left.child_by_field_name("property")
            key = self.text(key_node) if key_node is not None else None
        elif kind is NodeKind.SUBSCRIPT_EXPRESSION:
            target = left.child_by_field_name("object")
            key = string_value(self.tree, left.child_by_field_name("index"))
        else:
            return

        if self._is_identifier(target, "exports") or self._is_module_exports(target):
            # exports.K = ... / module.exports.K = ...
            self._export_assignment(key, right)
        elif self._is_identifier(target, "module") and key == "exports":
            if node_kind(right) is NodeKind.OBJECT:
                self._export_object(right)

    def _export_assignment(self, key: Optional[str], value: Optional[Node]) -> None:
        if not key:
            return
        self.add_symbol(key, exported=True)
        self.add_symbol(key, classify_value(value))

    def _export_object(self, obj: Node) -> None:
        for prop in obj.named_children:
            kind = node_kind(prop)
            if kind is NodeKind.PAIR:
                self._export_assignment(self._property_key(prop), prop.child_by_field_name("value"))
            elif kind is NodeKind.SHORTHAND_PROPERTY:
                self.add_symbol(self.text(prop), exported=True)
            elif kind is NodeKind.METHOD_DEFINITION:
                self.add_symbol(self.name_of(prop), FUNCTION, exported=True)

    def _property_key(self, pair: Node) -> Optional[str]:
        key_node = pair.child_by_field_name("key")
        kind = node_kind(key_node)
        if key_node is None or kind is NodeKind.COMPUTED_PROPERTY_NAME:
            return None
        if kind is NodeKind.STRING:
            return string_value(self.tree, key_node)
        return self.text(key_node)

    def _is_identifier(self, node: Optional[Node], name: str) -> bool:
        return node_kind(node) is NodeKind.IDENTIFIER and self.text(node) == name

    def _is_module_exports(self, node: Optional[Node]) -> bool:
        if node_kind(node) is not NodeKind.MEMBER_EXPRESSION:
            return False
        prop = node.child_by_field_name("property")
        return (
            self._is_identifier(node.child_by_field_name("object"), "module")
            and prop is not None
            and self.text(prop) == "exports"
        )
