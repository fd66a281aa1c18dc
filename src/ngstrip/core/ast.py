import logging
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import cast

from tree_sitter import Node, Query, Tree
from tree_sitter_language_pack import SupportedLanguage, get_language, get_parser

from ngstrip.core.errors import SourceParseError
from ngstrip.core.languages import resolve_language

logger = logging.getLogger(__name__)

# Extras that may appear among named children without being syntax.
_TRIVIA_TYPES = frozenset({"comment", "html_comment"})


def _load_query(language: str, query_type: str) -> Query:
    queries_dir = Path(__file__).parent.parent / "queries"
    query_path = queries_dir / f"{language}_{query_type}.scm"
    if not query_path.exists():
        raise FileNotFoundError(f"Query file not found: {query_path}")
    query_text = query_path.read_text(encoding="utf-8")
    return Query(get_language(cast(SupportedLanguage, language)), query_text)


@dataclass(frozen=True)
class ParsedSource:
    """Original text plus its tree. Offsets from the tree are UTF-8 byte offsets."""

    text: str
    source_bytes: bytes
    tree: Tree
    language: str

    @property
    def root(self) -> Node:
        return self.tree.root_node

    def char_offset(self, byte_offset: int) -> int:
        if len(self.source_bytes) == len(self.text):
            return byte_offset
        return len(self.source_bytes[:byte_offset].decode("utf-8"))

    def node_text(self, node: Node) -> str:
        return self.source_bytes[node.start_byte : node.end_byte].decode("utf-8")


def significant_children(node: Node) -> list[Node]:
    """Named children of ``node`` with comments filtered out."""
    return [child for child in node.named_children if child.type not in _TRIVIA_TYPES]


def is_trivia(node: Node) -> bool:
    return node.type in _TRIVIA_TYPES


def _iter_problem_nodes(node: Node) -> Iterator[Node]:
    if node.is_error or node.is_missing:
        yield node
        return
    if not node.has_error:
        return
    for child in node.children:
        yield from _iter_problem_nodes(child)


def parse_source(text: str, language: str) -> ParsedSource:
    source_bytes = text.encode("utf-8")
    parser = get_parser(cast(SupportedLanguage, language))
    tree = parser.parse(source_bytes)

    root = tree.root_node
    if root.has_error:
        problem = next(_iter_problem_nodes(root), root)
        row, column = problem.start_point
        kind = f"missing {problem.type!r}" if problem.is_missing else "syntax error"
        raise SourceParseError(f"Failed to parse {language} source: {kind}", row + 1, column + 1)

    logger.debug("Parsed %d bytes of %s into %d top-level nodes", len(source_bytes), language, root.named_child_count)
    return ParsedSource(text=text, source_bytes=source_bytes, tree=tree, language=language)


def read_source_file(path: str | Path) -> str:
    file_path = Path(path)
    try:
        source_bytes = file_path.read_bytes()
    except FileNotFoundError:
        raise FileNotFoundError(f"File not found: {path}") from None
    return source_bytes.decode("utf-8")


def parse_file(path: str | Path, language: str | None = None) -> ParsedSource:
    file_path = Path(path)
    resolved_language = resolve_language(language, file_path)
    return parse_source(read_source_file(file_path), resolved_language)
