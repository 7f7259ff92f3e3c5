"""
Schema normalization for source audio datasets.

Reads a Parquet file, flattens the nested audio struct into sibling columns
and renames them to the canonical normalized layout.
"""

from pathlib import Path
from typing import Any, List, Optional, Union

import pyarrow as pa
import pyarrow.parquet as pq

from audiolake.errors import SchemaError, SourceReadError
from audiolake.logger import get_default_logger
from audiolake.schemas import (
    AUDIO_BYTES_COLUMN,
    AUDIO_COLUMN,
    AUDIO_FIELD_RENAMES,
    REQUIRED_NORMALIZED_COLUMNS,
)


logger = get_default_logger()


class NormalizedBatch:
    """
    Ordered, column-indexed rows of a normalized dataset.

    Row order and row count are those of the source file.
    """

    def __init__(self, table: pa.Table, source_path: Optional[Path] = None):
        self.table = table
        self.source_path = source_path

    def __len__(self) -> int:
        return self.table.num_rows

    def __repr__(self) -> str:
        return f"NormalizedBatch(rows={self.num_rows}, columns={self.column_names})"

    @property
    def num_rows(self) -> int:
        return self.table.num_rows

    @property
    def column_names(self) -> List[str]:
        return list(self.table.column_names)

    @property
    def schema(self) -> pa.Schema:
        return self.table.schema

    def column(self, name: str) -> pa.ChunkedArray:
        """
        Get a column by name.

        Raises:
            SchemaError: If the column does not exist
        """
        if name not in self.table.column_names:
            raise SchemaError(f"Column '{name}' not found in normalized batch")
        return self.table.column(name)

    def values(self, name: str) -> List[Any]:
        """Get a column's values as Python objects, in row order."""
        return self.column(name).to_pylist()

    def payload(self, index: int) -> Optional[bytes]:
        """
        Get the binary audio payload of a single row.

        Only the requested row is converted to a Python object, so callers can
        walk a batch without copying every blob at once.
        """
        return self.column(AUDIO_BYTES_COLUMN)[index].as_py()


def dataset_id_for(path: Union[str, Path]) -> str:
    """
    Derive the dataset identifier from a source file path.

    Example:
        >>> dataset_id_for("data/train-00000.parquet")
        'train-00000.parquet'
    """
    return Path(path).name


def read_source_table(path: Union[str, Path]) -> pa.Table:
    """
    Read a source Parquet file into an Arrow table.

    Raises:
        SourceReadError: If the file is missing, unreadable, or not valid Parquet
    """
    path = Path(path)

    if not path.is_file():
        raise SourceReadError(f"Source dataset not found: {path}")

    try:
        table = pq.read_table(path)
    except (OSError, pa.ArrowException) as e:
        logger.error(f"Failed to read {path}: {e}")
        raise SourceReadError(f"Could not read source dataset {path}: {e}") from e

    logger.debug(f"Read {table.num_rows} rows from {path}")
    return table


def flatten_audio_column(table: pa.Table, column: str = AUDIO_COLUMN) -> pa.Table:
    """
    Replace a struct column with one renamed column per struct field.

    The new columns take the struct's position. Fields without an entry in
    AUDIO_FIELD_RENAMES keep a "<column>_<field>" name.

    Raises:
        SchemaError: If the column is absent, is not a struct, or a flattened
            name is already taken by another column
    """
    if column not in table.column_names:
        raise SchemaError(
            f"Expected nested column '{column}' not found. "
            f"Available columns: {table.column_names}"
        )

    position = table.column_names.index(column)
    nested = table.column(column)

    if not pa.types.is_struct(nested.type):
        raise SchemaError(f"Column '{column}' must be a struct, got {nested.type}")

    field_names = [nested.type.field(i).name for i in range(nested.type.num_fields)]
    children = nested.flatten()

    flattened = table.remove_column(position)
    for offset, (field_name, child) in enumerate(zip(field_names, children)):
        new_name = AUDIO_FIELD_RENAMES.get(field_name, f"{column}_{field_name}")
        if new_name in flattened.column_names:
            raise SchemaError(
                f"Flattening '{column}.{field_name}' would duplicate existing column '{new_name}'"
            )
        flattened = flattened.add_column(position + offset, new_name, child)

    return flattened


def validate_normalized_table(table: pa.Table) -> None:
    """
    Check a flattened table carries every required column.

    Raises:
        SchemaError: If a required column is missing or the payload column is not binary
    """
    missing = [name for name in REQUIRED_NORMALIZED_COLUMNS if name not in table.column_names]
    if missing:
        raise SchemaError(
            f"Missing required columns after flattening: {missing}. "
            f"Available columns: {table.column_names}"
        )

    payload_type = table.schema.field(AUDIO_BYTES_COLUMN).type
    if not (pa.types.is_binary(payload_type) or pa.types.is_large_binary(payload_type)):
        raise SchemaError(f"Column '{AUDIO_BYTES_COLUMN}' must be binary, got {payload_type}")


def normalize(path: Union[str, Path]) -> NormalizedBatch:
    """
    Read a source dataset and return its normalized batch.

    Args:
        path: Path to the source Parquet file

    Returns:
        NormalizedBatch with audio_bytes, audio_sampling_rate, audio_path,
        duration and transcription columns

    Raises:
        SourceReadError: If the file cannot be opened or decoded
        SchemaError: If the expected columns are absent

    Example:
        >>> batch = normalize("data/train-00000.parquet")
        >>> batch.num_rows
        120
    """
    path = Path(path)
    table = read_source_table(path)

    try:
        normalized = flatten_audio_column(table)
        validate_normalized_table(normalized)
    except SchemaError as e:
        logger.error(f"Dataset {path} does not match the expected layout: {e}")
        raise

    logger.info(f"Normalized {normalized.num_rows} rows from {path.name}")
    return NormalizedBatch(normalized, source_path=path)
