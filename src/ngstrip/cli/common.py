from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from ngstrip.core.ast import ParsedSource, parse_file
from ngstrip.models import DEFAULT_FACTORY_NAMES

err_console = Console(stderr=True)

PathArgument = Annotated[Path, typer.Argument(help="Compiled JavaScript/TypeScript file to process.")]
LanguageOption = Annotated[
    str | None,
    typer.Option("--language", "-l", help="Force the language (javascript, typescript, tsx)."),
]
ModuleOption = Annotated[
    str,
    typer.Option("--module", "-m", help="Module whose import activates decorator removal."),
]
FactoryOption = Annotated[
    list[str] | None,
    typer.Option("--factory", "-f", help="Decorator factory name to strip. Repeat for several."),
]
SeparatorsOption = Annotated[
    bool,
    typer.Option("--strip-separators", help="Also blank the comma next to each removed array entry."),
]


def factory_names(factories: list[str] | None) -> tuple[str, ...]:
    return tuple(factories) if factories else DEFAULT_FACTORY_NAMES


def load_or_exit(path: Path, language: str | None) -> ParsedSource:
    """Parse ``path``, turning input errors into a clean exit status 1."""
    try:
        return parse_file(path, language)
    except (FileNotFoundError, ValueError) as exc:
        err_console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1) from None
