"""Community detection command over a saved analysis."""

from pathlib import Path
from typing import Optional

import typer

from ..api import detect
from ..exceptions import ArchmapError
from ..graph.models import CommunityResult
from ..logging_config import setup_logging
from ..persistence import dumps_communities, find_latest_analysis, read_analysis, write_communities
from . import app
from ._common import console, resolve_settings

DEFAULT_RESULTS_FILE = Path("results.json")


@app.command()
def communities(
    analysis_file: Optional[Path] = typer.Argument(
        None,
        help="Analysis JSON (default: most recent analysis_*.json in the current directory)",
    ),
    output: Path = typer.Option(
        DEFAULT_RESULTS_FILE,
        "--output",
        "-o",
        help="File receiving the community JSON",
    ),
    no_save: bool = typer.Option(
        False,
        "--no-save",
        help="Do not write the community JSON",
    ),
    fmt: str = typer.Option(
        "rich",
        "--format",
        "-f",
        help="Output format: rich (human-readable) or json",
    ),
    max_passes: Optional[int] = typer.Option(
        None,
        "--max-passes",
        help="Upper bound on local-moving passes (0 = unbounded)",
        min=0,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show debug logging",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress logging",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Also append log records (DEBUG and up) to this file",
        dir_okay=False,
    ),
):
    """
    Cluster the directories of an analysis into communities.

    [bold cyan]Examples:[/bold cyan]

      archmap communities

      archmap communities analysis_shop_root_src_2024-01-01_12-00-00.json

      archmap communities --format json --no-save
    """
    try:
        settings = resolve_settings(
            config=config,
            verbose=verbose,
            quiet=quiet,
            log_file=log_file,
            community_max_passes=max_passes,
        )
        logger = setup_logging(settings.verbosity, settings.log_file)

        if analysis_file is None:
            analysis_file = find_latest_analysis(Path.cwd())
            if analysis_file is None:
                console.print(
                    "[red]Error:[/red] no analysis_*.json file in the current directory"
                )
                raise typer.Exit(1)
            logger.info(f"Using {analysis_file}")

        records = read_analysis(analysis_file)
        result = detect(records, settings=settings)

        if not no_save:
            write_communities(result, output)
            logger.info(f"Communities written to {output}")

        if fmt == "json":
            print(dumps_communities(result))
        else:
            _output_rich(result)
            if not no_save and settings.verbosity != "quiet":
                console.print(f"  Results saved to [cyan]{output}[/cyan]")

    except typer.Exit:
        raise
    except ArchmapError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


def _output_rich(result: CommunityResult):
    numbers = result.display_numbers()

    console.print()
    console.print("[bold cyan]COMMUNITIES[/bold cyan]")
    for label, members in result.groups.items():
        console.print(
            f"  [bold]#{numbers[label]}[/bold] (representative: {label}) "
            f"[dim]{len(members)} directories[/dim]"
        )
        for member in members:
            console.print(f"      {member}")

    console.print()
    console.print("[bold cyan]INTER-COMMUNITY DEPENDENCIES[/bold cyan]")
    found = False
    for source, row in result.community_dependencies.items():
        for target, count in row.items():
            if source == target or count == 0:
                continue
            found = True
            console.print(f"  #{numbers[source]} → #{numbers[target]}: {count} edges")
    if not found:
        console.print("  [green]No dependencies between communities[/green]")

    console.print()
    console.print("[bold cyan]COMMUNITY GRAPH[/bold cyan]")
    for label, targets in result.community_graph.items():
        linked = ", ".join(f"#{numbers[t]}" for t in targets) or "-"
        console.print(f"  Community #{numbers[label]} → {linked}")

    console.print()
    console.print(
        f"  {result.total_nodes} directories, {result.total_edges:g} edges, "
        f"modularity {result.modularity:.4f}, {result.passes} passes"
        + ("" if result.converged else " [yellow](pass bound reached)[/yellow]")
    )

