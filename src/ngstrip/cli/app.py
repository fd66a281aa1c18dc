import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from ngstrip.cli.common import err_console
from ngstrip.cli.plan import plan
from ngstrip.cli.strip import strip

app = typer.Typer(
    name="ngstrip",
    help="ngstrip: remove downleveled Angular decorator metadata from compiled scripts.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
    )


@app.callback()
def _root(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log decisions to stderr.")] = False,
) -> None:
    configure_logging(verbose)


app.command("strip")(strip)
app.command("plan")(plan)


def main() -> None:
    app()
