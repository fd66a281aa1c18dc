"""Lexical scope analysis over a JavaScript/TypeScript tree-sitter tree.

The resolver answers one question: which declaration(s) does an identifier
use refer to? Declarations are collected per scope node in a single walk and
lookups climb from the innermost enclosing scope to the program root.

``var`` declarations and parameters belong to the nearest function scope;
``let``/``const``/``class``/``function`` declarations belong to the nearest
block scope. Lookups ignore declaration order, so hoisting and temporal dead
zones are not distinguished.
"""

import logging
from collections.abc import Iterator

from tree_sitter import Node

logger = logging.getLogger(__name__)

_FUNCTION_SCOPE_TYPES = frozenset(
    {
        "program",
        "function_declaration",
        "function_expression",
        "function",
        "generator_function_declaration",
        "generator_function",
        "arrow_function",
        "method_definition",
    }
)

_SCOPE_TYPES = _FUNCTION_SCOPE_TYPES | frozenset(
    {
        "statement_block",
        "for_statement",
        "for_in_statement",
        "catch_clause",
        "switch_body",
        "class",
    }
)

_HOISTED_DECLARATIONS = frozenset(
    {
        "function_declaration",
        "generator_function_declaration",
        "function_signature",
        "class_declaration",
        "abstract_class_declaration",
        "enum_declaration",
    }
)

_NAMED_EXPRESSIONS = frozenset({"function_expression", "function", "generator_function", "class"})


def node_name(node: Node) -> str:
    return (node.text or b"").decode("utf-8")


def pattern_identifiers(node: Node) -> Iterator[Node]:
    """Yield the identifier nodes a binding pattern introduces."""
    node_type = node.type
    if node_type in ("identifier", "shorthand_property_identifier_pattern"):
        yield node
    elif node_type == "pair_pattern":
        value = node.child_by_field_name("value")
        if value is not None:
            yield from pattern_identifiers(value)
    elif node_type in ("assignment_pattern", "object_assignment_pattern"):
        left = node.child_by_field_name("left")
        if left is not None:
            yield from pattern_identifiers(left)
    elif node_type in ("required_parameter", "optional_parameter"):
        pattern = node.child_by_field_name("pattern")
        if pattern is not None:
            yield from pattern_identifiers(pattern)
    elif node_type in ("object_pattern", "array_pattern", "rest_pattern"):
        for child in node.named_children:
            yield from pattern_identifiers(child)


class ScopeResolver:
    """Map identifier uses to the nodes that declare them."""

    def __init__(self, root: Node) -> None:
        self._root = root
        self._declarations: dict[int, dict[str, list[Node]]] = {}
        self._collect()

    def resolve(self, identifier: Node) -> list[Node]:
        """Return the declaring nodes for ``identifier``, or an empty list."""
        name = node_name(identifier)
        scope = self._enclosing_scope(identifier, _SCOPE_TYPES)
        while scope is not None:
            found = self._declarations.get(scope.id, {}).get(name)
            if found:
                return list(found)
            scope = self._enclosing_scope(scope, _SCOPE_TYPES)
        logger.debug("Identifier %r at byte %d is unresolved", name, identifier.start_byte)
        return []

    def declarations(self, scope: Node) -> dict[str, list[Node]]:
        return {name: list(nodes) for name, nodes in self._declarations.get(scope.id, {}).items()}

    def _enclosing_scope(self, node: Node, scope_types: frozenset[str]) -> Node | None:
        parent = node.parent
        while parent is not None and parent.type not in scope_types:
            parent = parent.parent
        return parent

    def _declare(self, scope: Node | None, name_node: Node, declaration: Node) -> None:
        if scope is None:
            scope = self._root
        names = self._declarations.setdefault(scope.id, {})
        names.setdefault(node_name(name_node), []).append(declaration)

    def _collect(self) -> None:
        stack = [self._root]
        while stack:
            node = stack.pop()
            self._visit(node)
            stack.extend(reversed(node.children))

    def _visit(self, node: Node) -> None:
        if not node.is_named:
            return
        node_type = node.type

        if node_type == "import_specifier":
            local = node.child_by_field_name("alias")
            if local is None:
                local = node.child_by_field_name("name")
            if local is not None:
                self._declare(self._root, local, node)
        elif node_type == "import_clause":
            for child in node.named_children:
                if child.type == "identifier":
                    self._declare(self._root, child, child)
        elif node_type == "namespace_import":
            for child in node.named_children:
                if child.type == "identifier":
                    self._declare(self._root, child, node)
        elif node_type == "variable_declarator":
            self._visit_declarator(node)
        elif node_type == "for_in_statement":
            self._visit_for_in(node)
        elif node_type in _HOISTED_DECLARATIONS:
            name = node.child_by_field_name("name")
            if name is not None:
                self._declare(self._enclosing_scope(node, _SCOPE_TYPES), name, node)
        elif node_type in _NAMED_EXPRESSIONS:
            name = node.child_by_field_name("name")
            if name is not None:
                self._declare(node, name, node)

        if node_type == "formal_parameters" and node.parent is not None:
            for parameter in node.named_children:
                for identifier in pattern_identifiers(parameter):
                    self._declare(node.parent, identifier, identifier)
        elif node_type == "arrow_function":
            parameter = node.child_by_field_name("parameter")
            if parameter is not None:
                self._declare(node, parameter, parameter)
        elif node_type == "catch_clause":
            parameter = node.child_by_field_name("parameter")
            if parameter is not None:
                for identifier in pattern_identifiers(parameter):
                    self._declare(node, identifier, identifier)

    def _visit_declarator(self, declarator: Node) -> None:
        name = declarator.child_by_field_name("name")
        declaration = declarator.parent
        if name is None or declaration is None:
            return
        if declaration.type == "variable_declaration":
            scope = self._enclosing_scope(declaration, _FUNCTION_SCOPE_TYPES)
        else:
            scope = self._enclosing_scope(declaration, _SCOPE_TYPES)
        for identifier in pattern_identifiers(name):
            self._declare(scope, identifier, declarator)

    def _visit_for_in(self, statement: Node) -> None:
        kind = statement.child_by_field_name("kind")
        left = statement.child_by_field_name("left")
        if kind is None or left is None:
            return
        if node_name(kind) == "var":
            scope = self._enclosing_scope(statement, _FUNCTION_SCOPE_TYPES)
        else:
            scope = statement
        for identifier in pattern_identifiers(left):
            self._declare(scope, identifier, statement)
