"""
Audio Lake

Materializes audio blobs embedded in Parquet datasets into addressable files
on disk, pairs each file with its duration and transcription, and computes
distribution summaries over the materialized records.
"""

__version__ = "0.1.0"
