"""
Unit tests for record summaries.
"""

from pathlib import Path

import pytest

from audiolake.records import AudioRecord, RecordView
from audiolake.stats.summary import calculate_duration_statistics, summarize_records


def make_records(durations, transcriptions=None):
    transcriptions = transcriptions or ["word"] * len(durations)
    records = []
    for i, (duration, text) in enumerate(zip(durations, transcriptions)):
        relative = Path("ds.parquet") / f"{i}.wav"
        records.append(AudioRecord(i, Path("/cache") / relative, relative, duration, text))
    return records


class TestDurationStatistics:
    """Test calculate_duration_statistics."""

    def test_basic_statistics(self):
        stats = calculate_duration_statistics(make_records([1.0, 2.0, 3.0, 4.0]))

        assert stats['count'] == 4
        assert stats['min'] == 1.0
        assert stats['max'] == 4.0
        assert stats['mean'] == 2.5
        assert stats['median'] == 2.5
        assert stats['std'] == pytest.approx(1.29, abs=0.01)

    def test_single_record_has_zero_std(self):
        stats = calculate_duration_statistics(make_records([3.333]))

        assert stats['count'] == 1
        assert stats['mean'] == 3.33
        assert stats['std'] == 0.0

    def test_empty(self):
        stats = calculate_duration_statistics([])

        assert stats['count'] == 0
        assert stats['mean'] is None
        assert stats['p95'] is None


class TestSummarizeRecords:
    """Test summarize_records."""

    def test_builds_both_histograms(self):
        records = make_records([1.0, 2.0, 3.0], ["hello", "good morning", ""])

        summary = summarize_records(records, {"num_bins": 2, "bar_width": 5})

        assert summary.duration_histogram.total == 3
        assert len(summary.duration_histogram.bins) == 2
        assert summary.word_count_histogram.total == 3
        assert summary.word_count_histogram.bins[0].start == 0

    def test_accepts_record_view(self):
        view = RecordView(make_records([1.0, 1.0]))

        summary = summarize_records(view)

        assert summary.duration_statistics['count'] == 2
        assert len(summary.duration_histogram.bins) == 10

    def test_empty_records(self):
        summary = summarize_records([])

        assert summary.duration_histogram is None
        assert summary.word_count_histogram is None
        assert "(No data available)" in summary.render()

    def test_render_includes_histograms(self):
        summary = summarize_records(make_records([1.0, 2.0]), {"num_bins": 2, "bar_char": "*"})

        text = summary.render()

        assert "Records: 2" in text
        assert "Duration distribution (seconds):" in text
        assert "Transcription length distribution (words):" in text
        assert "[1.00 - 1.50)" in text
