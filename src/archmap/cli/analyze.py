"""Extraction command: per-directory metrics and relations."""

from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from ..api import analyze_tree
from ..architecture.models import DirectoryRecord
from ..exceptions import ArchmapError
from ..logging_config import setup_logging
from ..persistence import analysis_filename, dumps_records, write_analysis
from . import app
from ._common import console, resolve_settings


@app.command()
def analyze(
    source: Path = typer.Argument(
        ...,
        help="Project directory to analyze",
    ),
    root_dir: Optional[str] = typer.Argument(
        None,
        help="Sub-directory of SOURCE to use as the analysis root (e.g. src)",
    ),
    fmt: str = typer.Option(
        "rich",
        "--format",
        "-f",
        help="Output format: rich (table) or json",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Also write the analysis JSON to this file",
    ),
    save: bool = typer.Option(
        False,
        "--save",
        help="Write analysis_<project>_<timestamp>.json in the current directory",
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
    Extract per-directory type counts, LOC, complexity, relations and
    coupling metrics.

    [bold cyan]Examples:[/bold cyan]

      archmap analyze /path/to/project src

      archmap analyze . --format json > analysis.json

      archmap analyze . src --save
    """
    try:
        settings = resolve_settings(
            config=config, verbose=verbose, quiet=quiet, log_file=log_file
        )
        logger = setup_logging(settings.verbosity, settings.log_file)

        records = analyze_tree(source, root_dir=root_dir, settings=settings)

        if output is not None:
            write_analysis(records, output)
            logger.info(f"Analysis written to {output}")
        if save:
            saved = write_analysis(records, Path.cwd() / analysis_filename(source, root_dir))
            if fmt != "json" and settings.verbosity != "quiet":
                console.print(f"[green]Saved[/green] {saved}")

        if fmt == "json":
            _output_json(records)
        else:
            _output_rich(records)

    except typer.Exit:
        raise
    except ArchmapError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


def _output_json(records: dict[str, DirectoryRecord]):
    """Machine-readable output, same shape as the saved analysis file."""
    print(dumps_records(records))


def _output_rich(records: dict[str, DirectoryRecord]):
    if not records:
        console.print("[yellow]No source files found[/yellow]")
        return

    table = Table(title="Directories", show_lines=False)
    table.add_column("Directory", style="cyan")
    table.add_column("Types", justify="right")
    table.add_column("Files", justify="right")
    table.add_column("LOC", justify="right")
    table.add_column("CCN", justify="right")
    table.add_column("Ce", justify="right")
    table.add_column("Ca", justify="right")
    table.add_column("I", justify="right")
    table.add_column("Depends on")

    for key in sorted(records):
        record = records[key]
        metrics = record.metrics
        table.add_row(
            key,
            str(record.total),
            str(record.file_count),
            str(record.loc_total),
            str(record.ccn_total),
            str(metrics.efferent_coupling),
            str(metrics.afferent_coupling),
            f"{metrics.instability:.3f}",
            ", ".join(sorted(record.relations)) or "-",
        )

    console.print(table)
    console.print(
        f"  [green]{len(records)}[/green] directories, "
        f"[green]{sum(r.file_count for r in records.values())}[/green] files"
    )
