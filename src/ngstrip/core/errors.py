from tree_sitter import Node


class SourceParseError(ValueError):
    """The front end could not produce an error-free tree for the input."""

    def __init__(self, message: str, line: int, column: int) -> None:
        super().__init__(f"{message} at line {line}, column {column}")
        self.line = line
        self.column = column


class InvariantViolation(RuntimeError):
    """A node did not have the shape an upstream check already established."""


def expect_type(node: Node | None, *node_types: str) -> Node:
    if node is None or node.type not in node_types:
        found = "nothing" if node is None else repr(node.type)
        raise InvariantViolation(f"Expected node of type {' | '.join(node_types)}, found {found}")
    return node
