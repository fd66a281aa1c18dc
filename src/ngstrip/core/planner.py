import logging

from tree_sitter import Node

from ngstrip.core.ast import ParsedSource, is_trivia
from ngstrip.core.classify import DecoratorStatement, is_framework_decorator
from ngstrip.core.errors import expect_type
from ngstrip.core.imports import BindingSet
from ngstrip.core.scopes import ScopeResolver
from ngstrip.models import RemovalSpan, SpanKind

logger = logging.getLogger(__name__)


def _span(parsed: ParsedSource, node: Node, kind: SpanKind) -> RemovalSpan:
    return RemovalSpan(
        start=parsed.char_offset(node.start_byte),
        end=parsed.char_offset(node.end_byte),
        kind=kind,
    )


def _adjacent_separator(element: Node) -> Node | None:
    """The comma after ``element``, or the one before it when it is last."""
    sibling = element.next_sibling
    while sibling is not None and is_trivia(sibling):
        sibling = sibling.next_sibling
    if sibling is not None and sibling.type == ",":
        return sibling
    sibling = element.prev_sibling
    while sibling is not None and is_trivia(sibling):
        sibling = sibling.prev_sibling
    if sibling is not None and sibling.type == ",":
        return sibling
    return None


def pick_decoration_nodes(
    decorator: DecoratorStatement,
    bindings: BindingSet,
    resolver: ScopeResolver,
) -> tuple[list[Node], SpanKind]:
    """Choose the nodes to blank for one decorator statement.

    Returns ``([statement], "statement")`` when every element is a framework
    decorator, the matching elements when only some are, and nothing when none
    are or when any slot is not an object literal.
    """
    if not all(element is not None and element.type == "object" for element in decorator.elements):
        logger.debug("Skipping %s.decorators: array holds a non-literal entry", decorator.target)
        return [], "entry"

    elements = [expect_type(element, "object") for element in decorator.elements]
    matching = [element for element in elements if is_framework_decorator(element, bindings, resolver)]

    if len(matching) == len(elements):
        return [decorator.statement], "statement"
    return matching, "entry"


def plan_removals(
    parsed: ParsedSource,
    decorators: list[DecoratorStatement],
    bindings: BindingSet,
    resolver: ScopeResolver,
    strip_separators: bool = False,
) -> list[RemovalSpan]:
    """Return every span to blank, in discovery order."""
    spans: list[RemovalSpan] = []
    for decorator in decorators:
        nodes, kind = pick_decoration_nodes(decorator, bindings, resolver)
        if not nodes:
            continue
        logger.info(
            "Removing %d %s node(s) from %s.decorators",
            len(nodes),
            kind,
            decorator.target,
        )
        claimed: set[int] = set()
        for node in nodes:
            spans.append(_span(parsed, node, kind))
            if kind != "entry" or not strip_separators:
                continue
            separator = _adjacent_separator(node)
            if separator is None or separator.id in claimed:
                continue
            claimed.add(separator.id)
            spans.append(_span(parsed, separator, "separator"))
    return spans
