"""
Command-line interface for the audiolake package.

Thin operator commands over the core: materialize a dataset, page through its
records and print distribution summaries.
"""

import click
from pathlib import Path
from typing import Optional
from rich.markup import escape

from audiolake import __version__
from audiolake.config import Config
from audiolake.errors import AudioLakeError
from audiolake.logger import configure_logging
from audiolake.pipeline import DatasetLoad, load_dataset


# Common options that can be reused across commands
def common_options(func):
    """Decorator to add common CLI options."""
    func = click.option(
        '--cache-root',
        type=click.Path(exists=False, file_okay=False, dir_okay=True, path_type=Path),
        default=None,
        help='Directory for materialized audio files (default: from config, ./cache)',
    )(func)
    func = click.option(
        '--config-dir',
        type=click.Path(exists=False, file_okay=False, dir_okay=True, path_type=Path),
        default=Path('config'),
        help='Path to configuration directory (default: ./config)',
    )(func)
    func = click.option(
        '--log-level',
        type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'], case_sensitive=False),
        default=None,
        help='Logging level (default: from config, INFO)',
    )(func)
    return func


def prepare_run(config_dir: Path, cache_root: Optional[Path], log_level: Optional[str]):
    """
    Load configuration, configure logging and resolve the cache root.

    Returns:
        Tuple of (Config, cache root path)
    """
    config = Config(config_dir)
    log_file = config.get("logging", "log_file")
    configure_logging(
        level=log_level or config.get("logging", "level", default="INFO"),
        log_file=Path(log_file) if log_file else None,
        console_output=True,
    )
    return config, cache_root if cache_root is not None else config.cache_root


def load_or_abort(console, dataset: Path, cache_root: Path) -> DatasetLoad:
    """Load a dataset, printing dataset-level failures and aborting the command."""
    try:
        return load_dataset(dataset, cache_root)
    except AudioLakeError as e:
        console.print(f"[red]Error loading {dataset}: {type(e).__name__}: {escape(str(e))}[/red]")
        raise click.Abort()


@click.group()
@click.version_option(version=__version__, prog_name='audiolake')
@click.pass_context
def cli(ctx):
    """
    Audio Lake CLI.

    Materializes audio embedded in Parquet datasets into a file cache and
    summarizes durations and transcriptions.
    """
    ctx.ensure_object(dict)


@cli.command()
def version():
    """Display version information."""
    click.echo(f"Audio Lake v{__version__}")


def main():
    """Main entry point for the CLI."""
    # Import commands to register them
    from audiolake.cli.commands import materialize, records, stats

    cli()


if __name__ == '__main__':
    main()
