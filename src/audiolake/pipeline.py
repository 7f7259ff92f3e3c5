"""
End-to-end loading of a dataset into the audio cache.

Orchestrates normalize → materialize → record view for a single source file.
"""

from pathlib import Path
from typing import Tuple, Union

from audiolake.cache.materializer import MaterializationResult, materialize
from audiolake.errors import SourceReadError
from audiolake.ingestion.normalizer import dataset_id_for, normalize
from audiolake.logger import get_default_logger
from audiolake.records import AudioRecord, RecordView


logger = get_default_logger()

DATASET_SUFFIX = ".parquet"


class DatasetLoad:
    """Outcome of loading one dataset: its records and the materialization accounting."""

    def __init__(self, dataset_id: str, result: MaterializationResult):
        self.dataset_id = dataset_id
        self.result = result
        self.view = RecordView(result.records)

    def __repr__(self) -> str:
        return f"DatasetLoad(dataset_id={self.dataset_id!r}, records={len(self.view)})"

    def audio_url_key(self, record: AudioRecord) -> Tuple[str, str]:
        """
        Key a transport uses to address a record's audio file.

        Returns:
            (dataset identifier, file stem), e.g. ("train.parquet", "3")
        """
        return self.dataset_id, record.file_stem


def load_dataset(dataset_path: Union[str, Path], cache_root: Union[str, Path]) -> DatasetLoad:
    """
    Normalize a source file and materialize it into the cache.

    Args:
        dataset_path: Path to the source Parquet file
        cache_root: Cache root directory

    Returns:
        DatasetLoad with the record view and materialization result

    Raises:
        SourceReadError: If the file cannot be read
        SchemaError: If the file does not have the expected layout
        CacheWriteError: If the dataset's cache directory cannot be created

    Example:
        >>> loaded = load_dataset("data/train.parquet", "cache")
        >>> page, total_pages = loaded.view.page(1, 10)
    """
    dataset_path = Path(dataset_path)
    dataset_id = dataset_id_for(dataset_path)

    logger.info(f"Loading dataset {dataset_id} from {dataset_path}")

    batch = normalize(dataset_path)
    result = materialize(dataset_id, batch, cache_root)

    return DatasetLoad(dataset_id, result)


def load_dataset_from_folder(
    folder: Union[str, Path],
    filename: str,
    cache_root: Union[str, Path],
) -> DatasetLoad:
    """
    Load a dataset addressed by file name inside a data folder.

    Raises:
        ValueError: If filename is not a bare .parquet file name
        SourceReadError: If the file does not exist in the folder
    """
    if not filename.endswith(DATASET_SUFFIX):
        raise ValueError(f"Invalid file type: {filename} (expected {DATASET_SUFFIX})")
    if Path(filename).name != filename or "\\" in filename:
        raise ValueError(f"Dataset file name must not contain path separators: {filename}")

    dataset_path = Path(folder) / filename
    if not dataset_path.is_file():
        raise SourceReadError(f"File not found: {dataset_path}")

    return load_dataset(dataset_path, cache_root)
