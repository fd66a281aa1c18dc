import logging
from dataclasses import dataclass

from tree_sitter import Node

from ngstrip.core.ast import is_trivia, significant_children
from ngstrip.core.errors import expect_type
from ngstrip.core.imports import BindingSet
from ngstrip.core.scopes import ScopeResolver, node_name

logger = logging.getLogger(__name__)

DECORATORS_PROPERTY = "decorators"
TYPE_PROPERTY = "type"


@dataclass(frozen=True)
class DecoratorStatement:
    """A top-level ``<identifier>.decorators = [ ... ]`` statement.

    ``elements`` holds one entry per array slot; ``None`` marks a hole.
    """

    statement: Node
    array: Node
    elements: tuple[Node | None, ...]

    @property
    def target(self) -> str:
        assignment = expect_type(_assignment_of(self.statement), "assignment_expression")
        member = expect_type(assignment.child_by_field_name("left"), "member_expression")
        return node_name(expect_type(member.child_by_field_name("object"), "identifier"))


def _assignment_of(statement: Node) -> Node | None:
    if statement.type != "expression_statement":
        return None
    expressions = significant_children(statement)
    if len(expressions) != 1 or expressions[0].type != "assignment_expression":
        return None
    return expressions[0]


def is_decorator_assignment(statement: Node) -> bool:
    """True for ``<identifier>.decorators = [ ... ]`` and nothing else."""
    assignment = _assignment_of(statement)
    if assignment is None:
        return False
    left = assignment.child_by_field_name("left")
    if left is None or left.type != "member_expression":
        return False
    base = left.child_by_field_name("object")
    if base is None or base.type != "identifier":
        return False
    member = left.child_by_field_name("property")
    if member is None or node_name(member) != DECORATORS_PROPERTY:
        return False
    if any(child.type == "optional_chain" for child in left.children):
        return False
    operator = assignment.child_by_field_name("operator")
    if operator is not None and operator.type != "=":
        return False
    right = assignment.child_by_field_name("right")
    return right is not None and right.type == "array"


def _array_slots(array: Node) -> tuple[Node | None, ...]:
    slots: list[Node | None] = []
    pending: Node | None = None
    seen_value = False
    for child in array.children:
        if is_trivia(child) or child.type == "[":
            continue
        if child.type in (",", "]"):
            if seen_value:
                slots.append(pending)
            elif child.type == ",":
                slots.append(None)
            pending = None
            seen_value = False
            continue
        pending = child
        seen_value = True
    return tuple(slots)


def read_decorator_statement(statement: Node) -> DecoratorStatement:
    """Unpack a statement that already passed ``is_decorator_assignment``."""
    expect_type(statement, "expression_statement")
    assignment = expect_type(_assignment_of(statement), "assignment_expression")
    array = expect_type(assignment.child_by_field_name("right"), "array")
    return DecoratorStatement(statement=statement, array=array, elements=_array_slots(array))


def find_decorator_statements(root: Node) -> list[DecoratorStatement]:
    return [read_decorator_statement(child) for child in root.named_children if is_decorator_assignment(child)]


def _is_type_property(prop: Node) -> bool:
    if prop.type != "pair":
        return False
    key = prop.child_by_field_name("key")
    return key is not None and key.type == "property_identifier" and node_name(key) == TYPE_PROPERTY


def decorator_type_identifier(entry: Node) -> Node | None:
    """Return the ``type`` value identifier of a classifiable entry."""
    if entry.type != "object":
        return None
    type_properties = [prop for prop in significant_children(entry) if _is_type_property(prop)]
    if len(type_properties) != 1:
        return None
    assign = expect_type(type_properties[0], "pair")
    value = assign.child_by_field_name("value")
    if value is None or value.type != "identifier":
        return None
    return value


def is_framework_decorator(entry: Node, bindings: BindingSet, resolver: ScopeResolver) -> bool:
    identifier = decorator_type_identifier(entry)
    if identifier is None:
        return False
    declarations = resolver.resolve(identifier)
    if not declarations:
        return False
    matched = all(bindings.contains(declaration) for declaration in declarations)
    if not matched:
        logger.debug(
            "Decorator type %r at byte %d does not resolve to a collected import",
            node_name(identifier),
            identifier.start_byte,
        )
    return matched
