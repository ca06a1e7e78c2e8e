"""CLI entry point: registers all subcommands."""

from typing import Optional

import typer

from .. import __version__
from ._common import console

app = typer.Typer(
    name="archmap",
    help="archmap - Implicit Module Structure Recovery",
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool):
    if value:
        console.print(f"[bold cyan]archmap[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit(0)


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
):
    """
    Recover module structure from a source tree: per-directory coupling
    metrics and directory communities.
    """


# Import subcommands to register them
from .analyze import analyze as _analyze  # noqa: F401, E402
from .communities import communities as _communities  # noqa: F401, E402
