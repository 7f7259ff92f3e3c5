"""
Statistics over materialized records: fixed-bin histograms and summaries.
"""

from audiolake.stats.histogram import (
    Histogram,
    HistogramBin,
    build_continuous_histogram,
    build_integer_histogram,
)
from audiolake.stats.summary import RecordSummary, calculate_duration_statistics, summarize_records

__all__ = [
    "Histogram",
    "HistogramBin",
    "RecordSummary",
    "build_continuous_histogram",
    "build_integer_histogram",
    "calculate_duration_statistics",
    "summarize_records",
]
