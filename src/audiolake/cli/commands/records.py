"""
Records command for paging through a materialized dataset.
"""

import click
from pathlib import Path
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from audiolake.cli import cli, common_options, load_or_abort, prepare_run
from audiolake.errors import PreconditionError


console = Console(legacy_windows=False)


@cli.command()
@common_options
@click.argument(
    'dataset',
    type=click.Path(exists=False, file_okay=True, dir_okay=False, path_type=Path),
)
@click.option('--page', type=int, default=1, help='Page number, 1-indexed (default: 1)')
@click.option('--page-size', type=int, default=None, help='Records per page (default: from config, 10)')
def records(dataset, page, page_size, cache_root, config_dir, log_level):
    """
    Show one page of DATASET's records: file, duration and transcription.
    """
    config, cache_root = prepare_run(config_dir, cache_root, log_level)
    page_size = page_size if page_size is not None else config.page_size

    loaded = load_or_abort(console, dataset, cache_root)

    try:
        page_records, total_pages = loaded.view.page(page, page_size)
    except PreconditionError as e:
        raise click.BadParameter(str(e), param_hint="--page-size")

    table = Table(title=loaded.dataset_id, show_header=True, header_style="bold magenta")
    table.add_column("Index", justify="right", style="cyan")
    table.add_column("File")
    table.add_column("Duration (s)", justify="right", style="green")
    table.add_column("Transcription")

    for record in page_records:
        table.add_row(
            str(record.index),
            record.relative_path.as_posix(),
            f"{record.duration:.2f}",
            escape(record.transcription),
        )

    console.print(table)
    console.print(f"Page {max(page, 1)} of {total_pages} ({len(loaded.view)} records)")
