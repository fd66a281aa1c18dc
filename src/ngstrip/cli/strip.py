import sys
from pathlib import Path
from typing import Annotated

import typer

from ngstrip.cli.common import (
    FactoryOption,
    LanguageOption,
    ModuleOption,
    PathArgument,
    SeparatorsOption,
    err_console,
    factory_names,
    load_or_exit,
)
from ngstrip.core.strip import strip_parsed
from ngstrip.models import DEFAULT_TARGET_MODULE, StripConfig


def strip(
    path: PathArgument,
    language: LanguageOption = None,
    module: ModuleOption = DEFAULT_TARGET_MODULE,
    factory: FactoryOption = None,
    preserve_lines: Annotated[
        bool,
        typer.Option("--preserve-lines", help="Keep every line break inside removed code so line numbers stay put."),
    ] = False,
    strip_separators: SeparatorsOption = False,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the result to this file instead of stdout."),
    ] = None,
) -> None:
    """Strip framework decorator metadata and print the rewritten source."""
    config = StripConfig(
        target_module=module,
        factory_names=factory_names(factory),
        line_mode="preserve" if preserve_lines else "collapse",
        strip_separators=strip_separators,
    )
    result = strip_parsed(load_or_exit(path, language), config)

    if output is None:
        sys.stdout.write(result.text)
        sys.stdout.flush()
        return

    output.write_text(result.text, encoding="utf-8", newline="")
    err_console.print(f"[green]Wrote[/green] {output} ({len(result.spans)} span(s) removed)")
