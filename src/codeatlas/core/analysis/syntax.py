from __future__ import annotations

"""
Syntax Extraction Service.

Parses JavaScript-family source text (JS, JSX, TS, TSX) into a concrete
syntax tree using tree-sitter. The caller never declares a dialect: the
TSX grammar (a superset of JS and JSX) and the TypeScript grammar (which
accepts angle-bracket casts) are tried in turn and the first clean parse
wins. Comments are kept in the tree as regular nodes.

Analyzers consume the tree through `SyntaxVisitor`, which maps the raw
grammar node types onto the closed `NodeKind` enumeration and dispatches
each node to a `visit_<kind>` handler, in the manner of `ast.NodeVisitor`.
"""

import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple

import tree_sitter_typescript as tsts
from tree_sitter import Language, Node, Parser

from codeatlas.domain.errors import ParseError

logger = logging.getLogger(__name__)

TSX_LANGUAGE = Language(tsts.language_tsx())
TYPESCRIPT_LANGUAGE = Language(tsts.language_typescript())

_DIALECTS: Dict[str, Language] = {
    "tsx": TSX_LANGUAGE,
    "typescript": TYPESCRIPT_LANGUAGE,
}

_parsers: Dict[str, Parser] = {}

# -----------------------------------------------------------------------------
# NODE KINDS
# -----------------------------------------------------------------------------

class NodeKind(Enum):
    """Grammar node kinds relevant to import, symbol and comment extraction."""
    IMPORT = "import"
    CALL = "call"
    FUNCTION_DECLARATION = "function_declaration"
    VARIABLE_DECLARATOR = "variable_declarator"
    CLASS_DECLARATION = "class_declaration"
    INTERFACE_DECLARATION = "interface_declaration"
    TYPE_ALIAS_DECLARATION = "type_alias_declaration"
    EXPORT = "export"
    ASSIGNMENT = "assignment"
    COMMENT = "comment"

    # Expression shapes, inspected by handlers rather than dispatched
    FUNCTION_EXPRESSION = "function_expression"
    ARROW_FUNCTION = "arrow_function"
    CLASS_EXPRESSION = "class_expression"
    OBJECT = "object"
    STRING = "string"
    IDENTIFIER = "identifier"
    MEMBER_EXPRESSION = "member_expression"
    SUBSCRIPT_EXPRESSION = "subscript_expression"
    PARENTHESIZED = "parenthesized"
    VARIABLE_DECLARATION = "variable_declaration"
    EXPORT_CLAUSE = "export_clause"
    EXPORT_SPECIFIER = "export_specifier"
    PAIR = "pair"
    SHORTHAND_PROPERTY = "shorthand_property"
    METHOD_DEFINITION = "method_definition"
    COMPUTED_PROPERTY_NAME = "computed_property_name"

    OTHER = "other"


_KIND_BY_TYPE: Dict[str, NodeKind] = {
    "import_statement": NodeKind.IMPORT,
    "call_expression": NodeKind.CALL,
    "function_declaration": NodeKind.FUNCTION_DECLARATION,
    "generator_function_declaration": NodeKind.FUNCTION_DECLARATION,
    "variable_declarator": NodeKind.VARIABLE_DECLARATOR,
    "class_declaration": NodeKind.CLASS_DECLARATION,
    "abstract_class_declaration": NodeKind.CLASS_DECLARATION,
    "interface_declaration": NodeKind.INTERFACE_DECLARATION,
    "type_alias_declaration": NodeKind.TYPE_ALIAS_DECLARATION,
    "export_statement": NodeKind.EXPORT,
    "assignment_expression": NodeKind.ASSIGNMENT,
    "comment": NodeKind.COMMENT,
    "function_expression": NodeKind.FUNCTION_EXPRESSION,
    "function": NodeKind.FUNCTION_EXPRESSION,
    "generator_function": NodeKind.FUNCTION_EXPRESSION,
    "arrow_function": NodeKind.ARROW_FUNCTION,
    "class": NodeKind.CLASS_EXPRESSION,
    "object": NodeKind.OBJECT,
    "string": NodeKind.STRING,
    "identifier": NodeKind.IDENTIFIER,
    "member_expression": NodeKind.MEMBER_EXPRESSION,
    "subscript_expression": NodeKind.SUBSCRIPT_EXPRESSION,
    "parenthesized_expression": NodeKind.PARENTHESIZED,
    "lexical_declaration": NodeKind.VARIABLE_DECLARATION,
    "variable_declaration": NodeKind.VARIABLE_DECLARATION,
    "export_clause": NodeKind.EXPORT_CLAUSE,
    "export_specifier": NodeKind.EXPORT_SPECIFIER,
    "pair": NodeKind.PAIR,
    "shorthand_property_identifier": NodeKind.SHORTHAND_PROPERTY,
    "method_definition": NodeKind.METHOD_DEFINITION,
    "computed_property_name": NodeKind.COMPUTED_PROPERTY_NAME,
}

# Kinds that SyntaxVisitor dispatches to visit_<kind> handlers
DISPATCHED_KINDS: Tuple[NodeKind, ...] = (
    NodeKind.IMPORT,
    NodeKind.CALL,
    NodeKind.FUNCTION_DECLARATION,
    NodeKind.VARIABLE_DECLARATOR,
    NodeKind.CLASS_DECLARATION,
    NodeKind.INTERFACE_DECLARATION,
    NodeKind.TYPE_ALIAS_DECLARATION,
    NodeKind.EXPORT,
    NodeKind.ASSIGNMENT,
    NodeKind.COMMENT,
)


def node_kind(node: Optional[Node]) -> NodeKind:
    """Classify a raw tree-sitter node into the closed NodeKind set."""
    if node is None:
        return NodeKind.OTHER
    return _KIND_BY_TYPE.get(node.type, NodeKind.OTHER)

# -----------------------------------------------------------------------------
# SYNTAX TREE
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class SyntaxTree:
    """
    A parsed source file.

    Attributes:
        root: Root node of the concrete syntax tree.
        source: Raw UTF-8 source text.
        dialect: Grammar that produced the tree ("tsx" or "typescript").
        filename: Optional originating file name.
    """
    root: Node
    source: str
    dialect: str
    filename: Optional[str] = None

    def text_of(self, node: Node) -> str:
        """Return the source text covered by a node."""
        return (node.text or b"").decode("utf-8", errors="replace")

    def walk(self) -> Iterator[Node]:
        return walk(self.root)


def parse_source(text: str, filename: Optional[str] = None) -> SyntaxTree:
    """
    Parse JS/JSX/TS/TSX source text into a SyntaxTree.

    Args:
        text: Source text of one file.
        filename: Optional file name, used only to order grammar attempts
                  and to label errors.

    Returns:
        SyntaxTree: The first error-free parse.

    Raises:
        ParseError: If every grammar reports a syntax error.

    Note:
        Both grammars treat `type` as a keyword inside an export clause, so
        valid code such as `let type = 1; export { type };` is rejected and
        the file is indexed with metadata only.
    """
    source_bytes = text.encode("utf-8")
    first_error: Optional[Tuple[int, int]] = None

    for dialect in _dialect_order(filename):
        tree = _get_parser(dialect).parse(source_bytes)
        root = tree.root_node
        if not root.has_error:
            return SyntaxTree(root=root, source=text, dialect=dialect, filename=filename)

        location = _first_error_location(root)
        logger.debug(f"Grammar '{dialect}' rejected {filename or '<source>'} at {location}")
        if first_error is None:
            first_error = location

    line, column = first_error if first_error else (None, None)
    raise ParseError("Invalid syntax", filename=filename, line=line, column=column)


def walk(node: Node) -> Iterator[Node]:
    """Yield a node and all of its descendants in pre-order."""
    stack: List[Node] = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def string_value(tree: SyntaxTree, node: Optional[Node]) -> Optional[str]:
    """Return the literal value of a quoted string node, or None for other nodes."""
    if node_kind(node) is not NodeKind.STRING:
        return None
    raw = tree.text_of(node)
    if len(raw) >= 2 and raw[0] == raw[-1] and raw[0] in ("'", '"'):
        return raw[1:-1]
    return None


def unwrap_parentheses(node: Optional[Node]) -> Optional[Node]:
    """Strip any number of wrapping parentheses around an expression."""
    while node is not None and node_kind(node) is NodeKind.PARENTHESIZED:
        inner = [child for child in node.named_children if child.type != "comment"]
        node = inner[0] if inner else None
    return node

# -----------------------------------------------------------------------------
# VISITOR
# -----------------------------------------------------------------------------

class SyntaxVisitor:
    """
    Base class for analyzers walking a SyntaxTree.

    `visit()` walks every node once and dispatches on its NodeKind to the
    matching `visit_<kind>` method. Subclasses override only the handlers
    they need; all dispatched kinds have a no-op default.
    """

    def __init__(self, tree: SyntaxTree) -> None:
        self.tree = tree

    def visit(self) -> None:
        handlers = {kind: getattr(self, f"visit_{kind.value}") for kind in DISPATCHED_KINDS}
        for node in self.tree.walk():
            handler = handlers.get(node_kind(node))
            if handler is not None:
                handler(node)

    def text(self, node: Node) -> str:
        return self.tree.text_of(node)

    def visit_import(self, node: Node) -> None:
        pass

    def visit_call(self, node: Node) -> None:
        pass

    def visit_function_declaration(self, node: Node) -> None:
        pass

    def visit_variable_declarator(self, node: Node) -> None:
        pass

    def visit_class_declaration(self, node: Node) -> None:
        pass

    def visit_interface_declaration(self, node: Node) -> None:
        pass

    def visit_type_alias_declaration(self, node: Node) -> None:
        pass

    def visit_export(self, node: Node) -> None:
        pass

    def visit_assignment(self, node: Node) -> None:
        pass

    def visit_comment(self, node: Node) -> None:
        pass

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _dialect_order(filename: Optional[str]) -> List[str]:
    """Plain .ts files try the TypeScript grammar first; everything else starts with TSX."""
    ext = os.path.splitext(filename or "")[1].lower()
    if ext in (".ts", ".mts", ".cts"):
        return ["typescript", "tsx"]
    return ["tsx", "typescript"]


def _get_parser(dialect: str) -> Parser:
    parser = _parsers.get(dialect)
    if parser is None:
        parser = Parser(_DIALECTS[dialect])
        _parsers[dialect] = parser
    return parser


def _first_error_location(root: Node) -> Tuple[int, int]:
    """Locate the first ERROR or MISSING node as a (1-based line, column) pair."""
    for node in walk(root):
        if node.is_error or node.is_missing:
            return node.start_point[0] + 1, node.start_point[1]
    return root.start_point[0] + 1, root.start_point[1]
