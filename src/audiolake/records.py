"""
Materialized audio records and paginated views over them.
"""

import math
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Sequence, Tuple, TypeVar, Union

import pandas as pd

from audiolake.errors import PreconditionError


T = TypeVar("T")

DEFAULT_PAGE_SIZE = 10


@dataclass(frozen=True)
class AudioRecord:
    """
    One materialized row of a dataset.

    Attributes:
        index: 0-based row position in the source dataset (the join key
            between metadata and the file on disk)
        path: Absolute path of the materialized audio file
        relative_path: Path of the file relative to the cache root
        duration: Duration in seconds
        transcription: Transcription text (possibly empty)
    """
    index: int
    path: Path
    relative_path: Path
    duration: float
    transcription: str

    @property
    def file_stem(self) -> str:
        """File name without extension, i.e. the row index as text."""
        return self.path.stem

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "index": self.index,
            "path": str(self.path),
            "relative_path": self.relative_path.as_posix(),
            "duration": self.duration,
            "transcription": self.transcription,
        }


def paginate(records: Sequence[T], page: int, page_size: int) -> Tuple[List[T], int]:
    """
    Slice one page out of an ordered sequence.

    Args:
        records: Ordered records (not modified)
        page: 1-indexed page number; values below 1 are treated as 1
        page_size: Items per page, at least 1

    Returns:
        Tuple of (records on the page, total number of pages). Pages past the
        end are empty.

    Raises:
        PreconditionError: If page_size is below 1

    Example:
        >>> paginate(list(range(5)), page=2, page_size=2)
        ([2, 3], 3)
    """
    if page_size < 1:
        raise PreconditionError(f"page_size must be >= 1, got {page_size}")

    page = max(page, 1)
    total_items = len(records)
    total_pages = math.ceil(total_items / page_size)

    start = (page - 1) * page_size
    if start >= total_items:
        return [], total_pages

    end = min(start + page_size, total_items)
    return list(records[start:end]), total_pages


class RecordView:
    """
    Immutable, ordered view over the records of one dataset.
    """

    def __init__(self, records: Sequence[AudioRecord]):
        self._records: Tuple[AudioRecord, ...] = tuple(records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[AudioRecord]:
        return iter(self._records)

    def __getitem__(self, item: Union[int, slice]):
        return self._records[item]

    def __repr__(self) -> str:
        return f"RecordView(records={len(self._records)})"

    @property
    def records(self) -> Tuple[AudioRecord, ...]:
        return self._records

    def page(self, page: int = 1, page_size: int = DEFAULT_PAGE_SIZE) -> Tuple[List[AudioRecord], int]:
        """Return one page of records and the total page count."""
        return paginate(self._records, page, page_size)

    def durations(self) -> List[float]:
        return [record.duration for record in self._records]

    def transcription_lengths(self) -> List[int]:
        """Word counts of each record's transcription."""
        return [len(record.transcription.split()) for record in self._records]

    def to_dataframe(self) -> pd.DataFrame:
        """
        Convert the records to a DataFrame, one row per record in order.
        """
        columns = ["index", "path", "relative_path", "duration", "transcription"]
        if not self._records:
            return pd.DataFrame(columns=columns)
        return pd.DataFrame([record.to_dict() for record in self._records], columns=columns)
