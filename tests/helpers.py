"""Tree helpers shared by the unit tests."""

from collections.abc import Iterator

from tree_sitter import Node


def iter_nodes(node: Node) -> Iterator[Node]:
    yield node
    for child in node.children:
        yield from iter_nodes(child)


def find_nodes(node: Node, node_type: str) -> list[Node]:
    return [candidate for candidate in iter_nodes(node) if candidate.type == node_type]


def find_identifier(node: Node, name: str, occurrence: int = -1) -> Node:
    """Return an ``identifier`` node spelled ``name`` (the last one by default)."""
    matches = [candidate for candidate in find_nodes(node, "identifier") if candidate.text == name.encode()]
    assert matches, f"identifier {name!r} not found"
    return matches[occurrence]
