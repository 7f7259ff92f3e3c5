"""Reading and normalizing source audio datasets."""

from audiolake.ingestion.normalizer import NormalizedBatch, dataset_id_for, normalize

__all__ = ["NormalizedBatch", "dataset_id_for", "normalize"]
