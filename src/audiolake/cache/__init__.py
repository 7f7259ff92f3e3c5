"""
On-disk cache of materialized audio files.
"""

from audiolake.cache.locks import KeyedLock
from audiolake.cache.materializer import (
    MaterializationResult,
    SkippedRow,
    audio_path_for,
    materialize,
    resolve_audio_path,
)

__all__ = [
    "KeyedLock",
    "MaterializationResult",
    "SkippedRow",
    "audio_path_for",
    "materialize",
    "resolve_audio_path",
]
