"""
Materialize command for writing a dataset's audio into the cache.
"""

import click
from pathlib import Path
from rich.console import Console
from rich.table import Table

from audiolake.cli import cli, common_options, load_or_abort, prepare_run


console = Console(legacy_windows=False)


@cli.command()
@common_options
@click.argument(
    'dataset',
    type=click.Path(exists=False, file_okay=True, dir_okay=False, path_type=Path),
)
@click.option(
    '--show-skipped',
    is_flag=True,
    help='List every skipped row with its error',
)
def materialize(dataset, show_skipped, cache_root, config_dir, log_level):
    """
    Write each row's audio of DATASET to <cache-root>/<file name>/<index>.wav.

    Files that already exist are left untouched, so running the command
    again only fills in what is missing.

    Examples:

        audiolake materialize data/train-00000.parquet

        audiolake materialize data/train-00000.parquet --cache-root /tmp/audio
    """
    config, cache_root = prepare_run(config_dir, cache_root, log_level)

    console.print("\n[bold blue]Audio Lake - Materialize[/bold blue]\n")
    console.print(f"[cyan]Dataset:[/cyan] {dataset}")
    console.print(f"[cyan]Cache root:[/cyan] {cache_root}\n")

    loaded = load_or_abort(console, dataset, cache_root)
    result = loaded.result

    table = Table(title=f"Materialization of {loaded.dataset_id}", show_header=True, header_style="bold magenta")
    table.add_column("Metric", style="cyan")
    table.add_column("Count", justify="right", style="green")
    table.add_row("Records", str(len(result.records)))
    table.add_row("Files written", str(result.written))
    table.add_row("Files reused", str(result.reused))
    table.add_row("Rows skipped (metadata)", str(result.metadata_errors))
    table.add_row("Rows skipped (write errors)", str(result.write_errors))
    console.print(table)

    if show_skipped and result.skipped_rows:
        console.print("\n[yellow]Skipped rows:[/yellow]")
        for row in result.skipped_rows:
            console.print(f"  - row {row.index}: {row.error_type}: {row.message}", markup=False)
