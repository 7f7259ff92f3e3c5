"""
Tests for the audiolake command-line interface.
"""

import pytest
from click.testing import CliRunner

from audiolake import __version__
from audiolake.cli import cli
# Import commands to register them
from audiolake.cli.commands import materialize, records, stats  # noqa: F401


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def base_args(tmp_path, cache_root):
    """Options pointing at an empty config directory and the test cache root."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    return ['--config-dir', str(config_dir), '--cache-root', str(cache_root), '--log-level', 'WARNING']


class TestMaterializeCommand:
    """Test the materialize command."""

    def test_materialize_writes_files(self, runner, sample_dataset, cache_root, base_args):
        result = runner.invoke(cli, ['materialize', str(sample_dataset)] + base_args, catch_exceptions=False)

        assert result.exit_code == 0
        assert "Files written" in result.output
        for index in range(3):
            assert (cache_root / "train.parquet" / f"{index}.wav").is_file()

    def test_materialize_is_repeatable(self, runner, sample_dataset, cache_root, base_args):
        runner.invoke(cli, ['materialize', str(sample_dataset)] + base_args, catch_exceptions=False)
        before = (cache_root / "train.parquet" / "0.wav").stat().st_mtime_ns

        result = runner.invoke(cli, ['materialize', str(sample_dataset)] + base_args, catch_exceptions=False)

        assert result.exit_code == 0
        assert (cache_root / "train.parquet" / "0.wav").stat().st_mtime_ns == before

    def test_missing_dataset_aborts(self, runner, tmp_path, base_args):
        result = runner.invoke(cli, ['materialize', str(tmp_path / "missing.parquet")] + base_args)

        assert result.exit_code != 0
        assert "SourceReadError" in result.output


class TestRecordsCommand:
    """Test the records command."""

    def test_first_page(self, runner, sample_dataset, base_args):
        result = runner.invoke(
            cli,
            ['records', str(sample_dataset), '--page-size', '2'] + base_args,
            catch_exceptions=False,
        )

        assert result.exit_code == 0
        assert "hello" in result.output
        assert "Page 1 of 2 (3 records)" in result.output

    def test_page_past_end(self, runner, sample_dataset, base_args):
        result = runner.invoke(
            cli,
            ['records', str(sample_dataset), '--page', '5', '--page-size', '2'] + base_args,
            catch_exceptions=False,
        )

        assert result.exit_code == 0
        assert "Page 5 of 2 (3 records)" in result.output

    def test_invalid_page_size(self, runner, sample_dataset, base_args):
        result = runner.invoke(cli, ['records', str(sample_dataset), '--page-size', '0'] + base_args)

        assert result.exit_code == 2
        assert "page_size" in result.output


class TestStatsCommand:
    """Test the stats command."""

    def test_prints_histograms(self, runner, sample_dataset, base_args):
        result = runner.invoke(
            cli,
            ['stats', str(sample_dataset), '--bins', '3', '--bar-width', '10'] + base_args,
            catch_exceptions=False,
        )

        assert result.exit_code == 0
        assert "Duration distribution (seconds):" in result.output
        assert "Transcription length distribution (words):" in result.output
        assert "[1.50 - 2.33) 2" in result.output

    def test_rejects_zero_bins(self, runner, sample_dataset, base_args):
        result = runner.invoke(cli, ['stats', str(sample_dataset), '--bins', '0'] + base_args)

        assert result.exit_code == 2


class TestVersionCommand:
    """Test version output."""

    def test_version_command(self, runner):
        result = runner.invoke(cli, ['version'])

        assert result.exit_code == 0
        assert f"Audio Lake v{__version__}" in result.output
