import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from tree_sitter import Node, QueryCursor

from ngstrip.core.ast import ParsedSource, _load_query
from ngstrip.core.scopes import node_name

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImportBinding:
    local_name: str
    module: str
    specifier: Node

    @property
    def node_id(self) -> int:
        return self.specifier.id


class BindingSet:
    """Import bindings compared by declaring node, never by name."""

    def __init__(self, bindings: Iterable[ImportBinding] = ()) -> None:
        self._bindings = {binding.node_id: binding for binding in bindings}

    def __len__(self) -> int:
        return len(self._bindings)

    def __iter__(self) -> Iterator[ImportBinding]:
        return iter(self._bindings.values())

    def __bool__(self) -> bool:
        return bool(self._bindings)

    def contains(self, declaration: Node) -> bool:
        return declaration.type == "import_specifier" and declaration.id in self._bindings

    @property
    def names(self) -> list[str]:
        return sorted({binding.local_name for binding in self._bindings.values()})


def _module_text(source: Node) -> str:
    return node_name(source)[1:-1]


def _is_target_import(statement: Node, target_module: str) -> bool:
    if statement.parent is None or statement.parent.type != "program":
        return False
    source = statement.child_by_field_name("source")
    return source is not None and source.type == "string" and _module_text(source) == target_module


def _local_name(specifier: Node) -> Node | None:
    alias = specifier.child_by_field_name("alias")
    return alias if alias is not None else specifier.child_by_field_name("name")


def _owning_module(specifier: Node) -> str:
    parent = specifier.parent
    while parent is not None and parent.type != "import_statement":
        parent = parent.parent
    if parent is None:
        return ""
    source = parent.child_by_field_name("source")
    return _module_text(source) if source is not None else ""


def find_framework_imports(
    parsed: ParsedSource,
    target_module: str,
    factory_names: Iterable[str],
) -> BindingSet:
    """Collect allow-listed import specifiers once ``target_module`` is imported.

    Any top-level import from ``target_module`` activates collection, and then
    every specifier in the file whose local name is allow-listed is collected,
    whichever module it belongs to.
    """
    allowed = frozenset(factory_names)
    captures = QueryCursor(_load_query(parsed.language, "imports")).captures(parsed.root)

    statements = captures.get("import.statement", [])
    activating = [statement for statement in statements if _is_target_import(statement, target_module)]
    if not activating:
        logger.debug("No top-level import from %s", target_module)
        return BindingSet()

    bindings: list[ImportBinding] = []
    for specifier in sorted(captures.get("import.specifier", []), key=lambda node: node.start_byte):
        local = _local_name(specifier)
        if local is None:
            continue
        name = node_name(local)
        if name in allowed:
            bindings.append(ImportBinding(local_name=name, module=_owning_module(specifier), specifier=specifier))

    logger.debug(
        "Found %d import(s) from %s; collected bindings: %s",
        len(activating),
        target_module,
        ", ".join(binding.local_name for binding in bindings) or "(none)",
    )
    return BindingSet(bindings)
