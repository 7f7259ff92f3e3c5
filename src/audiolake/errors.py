"""
Error taxonomy for the audiolake package.

Dataset-level errors (SourceReadError, SchemaError) abort the whole call.
Row-level errors (MetadataError, CacheWriteError) drop a single row and are
accounted for in the materialization result.
"""


class AudioLakeError(Exception):
    """Base error for audiolake."""


class SourceReadError(AudioLakeError):
    """Raised when a source dataset file is missing, unreadable, or corrupt."""


class SchemaError(AudioLakeError):
    """Raised when a dataset does not have the expected column layout."""


class MetadataError(AudioLakeError):
    """Raised when a row's duration, transcription, or payload cannot be extracted."""


class CacheWriteError(AudioLakeError):
    """Raised when a materialized file cannot be written to the cache."""


class PreconditionError(AudioLakeError, ValueError):
    """Raised when a caller passes arguments outside an operation's domain."""
