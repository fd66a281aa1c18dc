import json
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from ngstrip.cli.common import (
    FactoryOption,
    LanguageOption,
    ModuleOption,
    PathArgument,
    SeparatorsOption,
    factory_names,
    load_or_exit,
)
from ngstrip.core.strip import strip_parsed
from ngstrip.models import DEFAULT_TARGET_MODULE, RemovalSpan, StripConfig

console = Console()

_EXCERPT_WIDTH = 60


def _excerpt(text: str, span: RemovalSpan) -> str:
    removed = " ".join(text[span.start : span.end].split())
    if len(removed) > _EXCERPT_WIDTH:
        return removed[: _EXCERPT_WIDTH - 3] + "..."
    return removed


def _plan_rows(text: str, spans: list[RemovalSpan]) -> list[dict[str, object]]:
    return [
        {
            "kind": span.kind,
            "start": span.start,
            "end": span.end,
            "line": text.count("\n", 0, span.start) + 1,
            "text": _excerpt(text, span),
        }
        for span in spans
    ]


def plan(
    path: PathArgument,
    language: LanguageOption = None,
    module: ModuleOption = DEFAULT_TARGET_MODULE,
    factory: FactoryOption = None,
    strip_separators: SeparatorsOption = False,
    as_json: Annotated[bool, typer.Option("--json", help="Print the plan as JSON.")] = False,
) -> None:
    """Show which spans would be removed, without rewriting anything."""
    config = StripConfig(target_module=module, factory_names=factory_names(factory), strip_separators=strip_separators)
    parsed = load_or_exit(path, language)
    result = strip_parsed(parsed, config)
    rows = _plan_rows(parsed.text, result.spans)

    if as_json:
        typer.echo(json.dumps({"bindings": result.bindings, "removals": rows}, indent=2))
        return

    console.print(f"Bindings: {', '.join(result.bindings) or '(none)'}")
    table = Table(show_lines=False)
    for header in ("kind", "line", "start", "end", "text"):
        table.add_column(header, no_wrap=header != "text")
    for row in rows:
        table.add_row(*(str(row[key]) for key in ("kind", "line", "start", "end", "text")))
    console.print(table)
    console.print(f"({len(rows)} rows)")
