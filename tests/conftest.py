"""
Shared fixtures: small source datasets written as Parquet files.
"""

from pathlib import Path
from typing import Any, Dict, List

import pytest

from tests.fixtures.audio_datasets import make_row, write_source_parquet


@pytest.fixture
def sample_rows() -> List[Dict[str, Any]]:
    """Three valid rows; row 0 carries a RIFF header payload."""
    return [
        make_row(b"RIFF....WAVEfmt ", 1.5, "hello", path="a.wav"),
        make_row(b"RIFF\x00\x01\x02\x03second", 2.25, "good morning everyone", path="b.wav"),
        make_row(b"RIFF\xff\xfe third payload", 4.0, "", path="c.wav"),
    ]


@pytest.fixture
def sample_dataset(tmp_path, sample_rows) -> Path:
    """A valid three-row dataset on disk."""
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    return write_source_parquet(data_dir / "train.parquet", sample_rows)


@pytest.fixture
def cache_root(tmp_path) -> Path:
    """An empty cache root directory (not yet created)."""
    return tmp_path / "cache"
