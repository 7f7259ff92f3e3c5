"""
Materialization of embedded audio payloads into the on-disk cache.

Each row of a normalized batch is written once to
``<cache_root>/<dataset_id>/<index>.wav``. Existing files are never rewritten;
existence is the only freshness signal. Writes go through a temporary file and
an atomic rename, and a per-(dataset, index) lock makes the
check-then-write step atomic for concurrent callers in the same process.
"""

import math
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from audiolake.cache.locks import KeyedLock
from audiolake.errors import CacheWriteError, MetadataError, PreconditionError
from audiolake.ingestion.normalizer import NormalizedBatch
from audiolake.logger import get_default_logger
from audiolake.records import AudioRecord
from audiolake.schemas import DURATION_COLUMN, TRANSCRIPTION_COLUMN


logger = get_default_logger()

AUDIO_EXTENSION = "wav"

# Shared by every caller in the process
_write_locks = KeyedLock()


class SkippedRow:
    """A row dropped from a materialization pass."""

    def __init__(self, index: int, error: Exception):
        self.index = index
        self.error_class = type(error)
        self.error_type = self.error_class.__name__
        self.message = str(error)

    def __repr__(self) -> str:
        return f"SkippedRow(index={self.index}, type={self.error_type}, message={self.message})"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "index": self.index,
            "error_type": self.error_type,
            "message": self.message,
        }


class MaterializationResult:
    """Records produced by one materialization pass, with row accounting."""

    def __init__(self, dataset_id: str):
        self.dataset_id = dataset_id
        self.records: List[AudioRecord] = []
        self.skipped_rows: List[SkippedRow] = []
        self.written = 0
        self.reused = 0

    @property
    def skipped(self) -> int:
        return len(self.skipped_rows)

    @property
    def metadata_errors(self) -> int:
        return sum(1 for row in self.skipped_rows if issubclass(row.error_class, MetadataError))

    @property
    def write_errors(self) -> int:
        return sum(1 for row in self.skipped_rows if issubclass(row.error_class, CacheWriteError))

    def add_record(self, record: AudioRecord, written: bool) -> None:
        self.records.append(record)
        if written:
            self.written += 1
        else:
            self.reused += 1

    def add_skipped(self, index: int, error: Exception) -> None:
        self.skipped_rows.append(SkippedRow(index, error))

    def summary(self) -> str:
        """Get human-readable summary."""
        lines = [
            f"Materialization Summary ({self.dataset_id}):",
            f"  Records: {len(self.records)}",
            f"  Files written: {self.written}",
            f"  Files reused: {self.reused}",
            f"  Rows skipped: {self.skipped}",
        ]
        for row in self.skipped_rows[:5]:
            lines.append(f"    - row {row.index}: {row.error_type}: {row.message}")
        return "\n".join(lines)


def validate_dataset_id(dataset_id: str) -> str:
    """
    Check a dataset identifier names a single directory under the cache root.

    Raises:
        PreconditionError: If the identifier is empty, a relative marker, or
            contains a path separator
    """
    if not dataset_id or dataset_id in (".", ".."):
        raise PreconditionError(f"Invalid dataset identifier: {dataset_id!r}")
    separators = {"/", "\\", os.sep}
    if os.altsep:
        separators.add(os.altsep)
    if any(sep in dataset_id for sep in separators):
        raise PreconditionError(f"Dataset identifier must not contain path separators: {dataset_id!r}")
    return dataset_id


def audio_file_name(index: int) -> str:
    return f"{index}.{AUDIO_EXTENSION}"


def audio_path_for(cache_root: Union[str, Path], dataset_id: str, index: int) -> Path:
    """
    Build the cache path of a row's audio file.

    Example:
        >>> audio_path_for("cache", "train.parquet", 3)
        PosixPath('cache/train.parquet/3.wav')
    """
    return Path(cache_root) / validate_dataset_id(dataset_id) / audio_file_name(index)


def resolve_audio_path(cache_root: Union[str, Path], dataset_id: str, index: Union[int, str]) -> Path:
    """
    Look up an already materialized audio file.

    Args:
        cache_root: Cache root directory
        dataset_id: Dataset identifier
        index: Row index, as an int or a decimal string

    Returns:
        Path of the existing file

    Raises:
        ValueError: If the index or dataset identifier is malformed
        FileNotFoundError: If the row has not been materialized
    """
    if isinstance(index, str):
        if not index.isdigit():
            raise ValueError(f"Row index must be a non-negative integer, got {index!r}")
        index = int(index)
    elif isinstance(index, bool) or not isinstance(index, int) or index < 0:
        raise ValueError(f"Row index must be a non-negative integer, got {index!r}")

    path = audio_path_for(cache_root, dataset_id, index)
    if not path.is_file():
        raise FileNotFoundError(f"Audio file not materialized: {path}")
    return path


def extract_duration(value: Any) -> float:
    """
    Extract a duration in seconds from a decoded cell.

    Raises:
        MetadataError: If the value is absent, not a real number, non-finite,
            or negative
    """
    if value is None:
        raise MetadataError("duration is missing")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MetadataError(f"duration must be numeric, got {type(value).__name__}")

    duration = float(value)
    if not math.isfinite(duration):
        raise MetadataError(f"duration must be finite, got {duration}")
    if duration < 0:
        raise MetadataError(f"duration must be non-negative, got {duration}")
    return duration


def extract_transcription(value: Any) -> str:
    """
    Extract transcription text from a decoded cell.

    Strings pass through, UTF-8 bytes are decoded and plain numbers use their
    str() form.

    Raises:
        MetadataError: If the value is absent or of an unsupported type
    """
    if value is None:
        raise MetadataError("transcription is missing")
    if isinstance(value, str):
        return value
    if isinstance(value, bytes):
        try:
            return value.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MetadataError(f"transcription is not valid UTF-8: {e}") from e
    if isinstance(value, (int, float)):
        return str(value)
    raise MetadataError(f"transcription has unsupported type {type(value).__name__}")


def write_atomic(path: Path, payload: bytes) -> None:
    """
    Write payload to path so readers never observe a partial file.

    The payload goes to a temporary file in the target directory, is synced,
    then renamed over the target.

    Raises:
        CacheWriteError: If any filesystem step fails
    """
    try:
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    except OSError as e:
        raise CacheWriteError(f"Could not create temporary file for {path}: {e}") from e

    try:
        with os.fdopen(fd, "wb") as f:
            f.write(payload)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    except OSError as e:
        _discard(tmp_name)
        raise CacheWriteError(f"Could not write {path}: {e}") from e
    except BaseException:
        _discard(tmp_name)
        raise


def _discard(tmp_name: str) -> None:
    try:
        os.unlink(tmp_name)
    except FileNotFoundError:
        pass


def _materialize_file(
    batch: NormalizedBatch,
    index: int,
    path: Path,
    locks: KeyedLock,
) -> bool:
    """Write a row's payload unless its file exists. Returns True if written."""
    with locks.hold((str(path.parent), index)):
        if path.exists():
            logger.debug(f"Cache hit for {path}")
            return False

        payload = batch.payload(index)
        if payload is None:
            raise MetadataError("audio payload is missing")

        write_atomic(path, payload)
        logger.debug(f"Wrote {len(payload)} bytes to {path}")
        return True


def materialize(
    dataset_id: str,
    batch: NormalizedBatch,
    cache_root: Union[str, Path],
    locks: Optional[KeyedLock] = None,
) -> MaterializationResult:
    """
    Materialize every row of a batch into the cache.

    Rows whose metadata cannot be extracted (MetadataError) or whose file
    cannot be written (CacheWriteError) are dropped and recorded in the
    result; every other row yields an AudioRecord, in row order.

    Args:
        dataset_id: Name of the dataset's cache subdirectory
        batch: Normalized batch to materialize
        cache_root: Cache root directory
        locks: Lock family to serialize writers (default: process-wide)

    Returns:
        MaterializationResult with records and row accounting

    Raises:
        PreconditionError: If dataset_id is not a single path component
        CacheWriteError: If the dataset directory cannot be created

    Example:
        >>> result = materialize("train.parquet", normalize("data/train.parquet"), "cache")
        >>> result.records[0].relative_path
        PosixPath('train.parquet/0.wav')
    """
    dataset_id = validate_dataset_id(dataset_id)
    cache_root = Path(cache_root)
    locks = _write_locks if locks is None else locks

    dataset_dir = cache_root / dataset_id
    try:
        dataset_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.error(f"Could not create cache directory {dataset_dir}: {e}")
        raise CacheWriteError(f"Could not create cache directory {dataset_dir}: {e}") from e
    dataset_dir = dataset_dir.resolve()

    durations = batch.values(DURATION_COLUMN)
    transcriptions = batch.values(TRANSCRIPTION_COLUMN)

    result = MaterializationResult(dataset_id)

    for index in range(batch.num_rows):
        path = dataset_dir / audio_file_name(index)
        try:
            duration = extract_duration(durations[index])
            transcription = extract_transcription(transcriptions[index])
            written = _materialize_file(batch, index, path, locks)
        except (MetadataError, CacheWriteError) as e:
            logger.warning(f"Skipping row {index} of {dataset_id}: {type(e).__name__}: {e}")
            result.add_skipped(index, e)
            continue

        record = AudioRecord(
            index=index,
            path=path,
            relative_path=Path(dataset_id) / audio_file_name(index),
            duration=duration,
            transcription=transcription,
        )
        result.add_record(record, written)

    logger.info(
        f"Materialized {len(result.records)} records for {dataset_id} "
        f"({result.written} written, {result.reused} reused, {result.skipped} skipped)"
    )
    return result
