"""
Summary statistics over materialized audio records.

Combines descriptive duration statistics with duration and transcription
length histograms.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

import pandas as pd

from audiolake.logger import get_default_logger
from audiolake.records import AudioRecord, RecordView
from audiolake.stats.histogram import (
    Histogram,
    build_continuous_histogram,
    build_integer_histogram,
)


logger = get_default_logger()

DEFAULT_HISTOGRAM_SETTINGS = {
    "num_bins": 10,
    "bar_width": 40,
    "bar_char": "#",
}


def calculate_duration_statistics(records: Sequence[AudioRecord]) -> Dict[str, Any]:
    """
    Calculate duration statistics for records.

    Computes count, min, max, mean, median, 5th and 95th percentile and
    standard deviation, in seconds rounded to 2 decimals.

    Args:
        records: Materialized records

    Returns:
        Dictionary of statistics; every value except count is None when
        there are no records

    Example:
        >>> stats = calculate_duration_statistics(view)
        >>> stats['mean']
        4.25
    """
    if len(records) == 0:
        logger.warning("No records provided for duration statistics")
        return {
            'count': 0,
            'min': None,
            'max': None,
            'mean': None,
            'median': None,
            'p5': None,
            'p95': None,
            'std': None,
        }

    durations = pd.Series([record.duration for record in records], dtype="float64")

    # Sample std of one value is NaN
    std = durations.std() if len(durations) > 1 else 0.0

    stats = {
        'count': len(durations),
        'min': round(float(durations.min()), 2),
        'max': round(float(durations.max()), 2),
        'mean': round(float(durations.mean()), 2),
        'median': round(float(durations.median()), 2),
        'p5': round(float(durations.quantile(0.05)), 2),
        'p95': round(float(durations.quantile(0.95)), 2),
        'std': round(float(std), 2),
    }

    logger.debug(
        f"Duration statistics for {len(durations)} records: "
        f"mean={stats['mean']}s, median={stats['median']}s, "
        f"range=[{stats['min']}-{stats['max']}]s"
    )

    return stats


@dataclass(frozen=True)
class RecordSummary:
    """Statistics and histograms for one record set."""
    duration_statistics: Dict[str, Any]
    duration_histogram: Optional[Histogram]
    word_count_histogram: Optional[Histogram]

    def render(self) -> str:
        """Render the summary as plain text."""
        stats = self.duration_statistics
        lines = [f"Records: {stats['count']}"]
        if stats['count'] == 0:
            return "\n".join(lines + ["(No data available)"])

        lines.append(
            f"Duration (s): min={stats['min']} max={stats['max']} mean={stats['mean']} "
            f"median={stats['median']} p5={stats['p5']} p95={stats['p95']} std={stats['std']}"
        )
        lines.append("")
        lines.append("Duration distribution (seconds):")
        lines.append(self.duration_histogram.render())
        lines.append("")
        lines.append("Transcription length distribution (words):")
        lines.append(self.word_count_histogram.render())
        return "\n".join(lines)


def summarize_records(
    records: Sequence[AudioRecord],
    histogram_settings: Optional[Dict[str, Any]] = None,
) -> RecordSummary:
    """
    Summarize a record set.

    Args:
        records: Materialized records (a RecordView or any sequence)
        histogram_settings: num_bins, bar_width and bar_char overrides,
            usually the "histogram" section of the configuration

    Returns:
        RecordSummary; histograms are None when there are no records
    """
    settings = dict(DEFAULT_HISTOGRAM_SETTINGS)
    if histogram_settings:
        settings.update(histogram_settings)

    view = records if isinstance(records, RecordView) else RecordView(records)
    stats = calculate_duration_statistics(view)

    if len(view) == 0:
        return RecordSummary(stats, None, None)

    duration_histogram = build_continuous_histogram(
        view.durations(),
        num_bins=int(settings["num_bins"]),
        bar_width=int(settings["bar_width"]),
        bar_char=str(settings["bar_char"]),
    )
    word_count_histogram = build_integer_histogram(
        view.transcription_lengths(),
        num_bins=int(settings["num_bins"]),
        bar_width=int(settings["bar_width"]),
        bar_char=str(settings["bar_char"]),
    )

    logger.info(
        f"Summarized {len(view)} records into {settings['num_bins']}-bin histograms"
    )
    return RecordSummary(stats, duration_histogram, word_count_histogram)
