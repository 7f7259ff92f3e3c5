"""
Stats command for duration and transcription length distributions.
"""

import click
from pathlib import Path
from rich.console import Console
from rich.table import Table

from audiolake.cli import cli, common_options, load_or_abort, prepare_run
from audiolake.stats.summary import summarize_records


console = Console(legacy_windows=False)


@cli.command()
@common_options
@click.argument(
    'dataset',
    type=click.Path(exists=False, file_okay=True, dir_okay=False, path_type=Path),
)
@click.option('--bins', 'num_bins', type=click.IntRange(min=1), default=None, help='Number of histogram bins')
@click.option('--bar-width', type=click.IntRange(min=0), default=None, help='Width of the longest bar')
def stats(dataset, num_bins, bar_width, cache_root, config_dir, log_level):
    """
    Print duration statistics and histograms for DATASET.
    """
    config, cache_root = prepare_run(config_dir, cache_root, log_level)

    histogram_settings = dict(config.get("histogram", default={}))
    if num_bins is not None:
        histogram_settings["num_bins"] = num_bins
    if bar_width is not None:
        histogram_settings["bar_width"] = bar_width

    loaded = load_or_abort(console, dataset, cache_root)
    summary = summarize_records(loaded.view, histogram_settings)
    duration_stats = summary.duration_statistics

    table = Table(title=f"Durations of {loaded.dataset_id}", show_header=True, header_style="bold magenta")
    table.add_column("Statistic", style="cyan")
    table.add_column("Value", justify="right", style="green")
    for key, value in duration_stats.items():
        table.add_row(key.replace('_', ' ').title(), "-" if value is None else str(value))
    console.print(table)

    if summary.duration_histogram is None:
        console.print("[yellow]No records to summarize[/yellow]")
        return

    click.echo("\nDuration distribution (seconds):")
    click.echo(summary.duration_histogram.render())
    click.echo("\nTranscription length distribution (words):")
    click.echo(summary.word_count_histogram.render())
