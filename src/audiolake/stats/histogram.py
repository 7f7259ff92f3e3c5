"""
Fixed-bin histograms with a text bar-chart rendering.

One binning routine serves both numeric domains. A domain decides how the
bin width is derived, how a value maps to a bin offset and how edges are
computed and labelled:

- continuous: width (max - min) / num_bins (1.0 when all values are equal),
  the last bin ends exactly at max, edges shown with 2 decimals
- integer: width ceil((max - min) / num_bins), at least 1, edges shown as
  integers
"""

import math
from dataclasses import dataclass
from typing import Callable, List, Sequence, Tuple, Union

import numpy as np

from audiolake.errors import PreconditionError


Number = Union[int, float]

# Largest value an unsigned 64-bit count can hold
MAX_INTEGER_VALUE = 2 ** 64 - 1


@dataclass(frozen=True)
class HistogramBin:
    """Half-open range [start, end) and the number of values in it."""
    start: Number
    end: Number
    count: int


@dataclass(frozen=True)
class NumericDomain:
    """How a numeric type is binned and labelled."""
    name: str
    dtype: type
    bin_width: Callable[[Number, Number, int], Number]
    bin_offsets: Callable[[np.ndarray, Number, Number], np.ndarray]
    bin_edges: Callable[[Number, Number, int], Tuple[Number, Number]]
    edge_format: str
    last_edge_is_max: bool


# Continuous arithmetic runs on half-scaled values so that max - min stays
# finite for any pair of finite float64 values. Halving is exact, so edges
# and offsets match the unscaled formulas.

def _continuous_half_width(lo: float, hi: float, num_bins: int) -> float:
    if hi == lo:
        return 0.5
    half_width = (hi * 0.5 - lo * 0.5) / num_bins
    # Subnormal ranges can round to zero
    return half_width if half_width > 0 else float(np.nextafter(0.0, 1.0))


def _continuous_offsets(values: np.ndarray, lo: float, half_width: float) -> np.ndarray:
    return np.floor((values * 0.5 - lo * 0.5) / half_width)


def _continuous_edges(lo: float, half_width: float, i: int) -> Tuple[float, float]:
    half_start = lo * 0.5 + i * half_width
    return half_start * 2.0, (half_start + half_width) * 2.0


def _integer_width(lo: int, hi: int, num_bins: int) -> int:
    return max(1, -(-(hi - lo) // num_bins))


def _integer_offsets(values: np.ndarray, lo: int, width: int) -> np.ndarray:
    return (values - np.uint64(lo)) // np.uint64(width)


def _integer_edges(lo: int, width: int, i: int) -> Tuple[int, int]:
    return lo + i * width, lo + (i + 1) * width


CONTINUOUS = NumericDomain(
    name="continuous",
    dtype=np.float64,
    bin_width=_continuous_half_width,
    bin_offsets=_continuous_offsets,
    bin_edges=_continuous_edges,
    edge_format="{:.2f}",
    last_edge_is_max=True,
)

INTEGER = NumericDomain(
    name="integer",
    dtype=np.uint64,
    bin_width=_integer_width,
    bin_offsets=_integer_offsets,
    bin_edges=_integer_edges,
    edge_format="{:d}",
    last_edge_is_max=False,
)


@dataclass(frozen=True)
class Histogram:
    """
    Built histogram, ready to render.

    Attributes:
        bins: Bins in ascending order
        max_count: Largest bin count
        bar_width: Length of the bar for the fullest bin
        bar_char: Character repeated to draw bars
        domain: Domain used to build and label the bins
    """
    bins: Tuple[HistogramBin, ...]
    max_count: int
    bar_width: int
    bar_char: str
    domain: NumericDomain = CONTINUOUS

    @property
    def total(self) -> int:
        return sum(b.count for b in self.bins)

    @property
    def counts(self) -> List[int]:
        return [b.count for b in self.bins]

    def bar_length(self, count: int) -> int:
        """Bar length for a count, rounded half up; 0 when every bin is empty."""
        if self.max_count == 0:
            return 0
        return int(math.floor(count / self.max_count * self.bar_width + 0.5))

    def label(self, histogram_bin: HistogramBin) -> str:
        fmt = self.domain.edge_format
        return f"[{fmt.format(histogram_bin.start)} - {fmt.format(histogram_bin.end)})"

    def render_lines(self) -> List[str]:
        """One line per bin: range label, count, then the bar."""
        labels = [self.label(b) for b in self.bins]
        label_width = max(len(label) for label in labels)
        count_width = max(len(str(b.count)) for b in self.bins)

        lines = []
        for label, histogram_bin in zip(labels, self.bins):
            bar = self.bar_char * self.bar_length(histogram_bin.count)
            line = f"{label:<{label_width}} {histogram_bin.count:>{count_width}} {bar}"
            lines.append(line.rstrip())
        return lines

    def render(self) -> str:
        return "\n".join(self.render_lines())

    def __str__(self) -> str:
        return self.render()


def _check_parameters(values: Sequence[Number], num_bins: int, bar_width: int, bar_char: str) -> None:
    if len(values) == 0:
        raise PreconditionError("Cannot build a histogram from an empty sequence")
    if num_bins < 1:
        raise PreconditionError(f"num_bins must be >= 1, got {num_bins}")
    if bar_width < 0:
        raise PreconditionError(f"bar_width must be >= 0, got {bar_width}")
    if not bar_char:
        raise PreconditionError("bar_char must be a non-empty string")


def _bin_counts(
    values: np.ndarray,
    lo: Number,
    hi: Number,
    width: Number,
    num_bins: int,
    domain: NumericDomain,
) -> np.ndarray:
    """
    Count values per bin.

    Offsets outside [0, num_bins - 1] (the maximum on the upper edge) are
    clamped into range. Values outside [lo, hi] are ignored.
    """
    in_range = values[(values >= lo) & (values <= hi)]
    offsets = np.clip(domain.bin_offsets(in_range, lo, width), 0, num_bins - 1)
    return np.bincount(offsets.astype(np.int64), minlength=num_bins)


def build_histogram(
    values: Sequence[Number],
    num_bins: int,
    bar_width: int,
    bar_char: str,
    domain: NumericDomain = CONTINUOUS,
) -> Histogram:
    """
    Build a fixed-bin histogram over values in the given domain.

    Raises:
        PreconditionError: If values is empty or a parameter is out of range
    """
    _check_parameters(values, num_bins, bar_width, bar_char)

    array = np.asarray(values, dtype=domain.dtype)
    lo = array.min().item()
    hi = array.max().item()
    width = domain.bin_width(lo, hi, num_bins)

    counts = _bin_counts(array, lo, hi, width, num_bins, domain)

    bins = []
    for i, count in enumerate(counts):
        start, end = domain.bin_edges(lo, width, i)
        if domain.last_edge_is_max and i == num_bins - 1 and hi != lo:
            end = hi
        bins.append(HistogramBin(start=start, end=end, count=int(count)))

    return Histogram(
        bins=tuple(bins),
        max_count=int(counts.max()),
        bar_width=bar_width,
        bar_char=bar_char,
        domain=domain,
    )


def build_continuous_histogram(
    values: Sequence[float],
    num_bins: int = 10,
    bar_width: int = 40,
    bar_char: str = "#",
) -> Histogram:
    """
    Build a histogram over real-valued data.

    Every value must be finite; NaN is rejected along with the infinities.

    Raises:
        PreconditionError: If a value is not a finite real number, or for the
            same reasons as build_histogram

    Example:
        >>> print(build_continuous_histogram([1.0, 2.0, 2.5, 4.0], num_bins=3, bar_width=4))
        [1.00 - 2.00) 1 ##
        [2.00 - 3.00) 2 ####
        [3.00 - 4.00) 1 ##
    """
    for value in values:
        try:
            finite = math.isfinite(value)
        except (TypeError, OverflowError) as e:
            raise PreconditionError(f"Continuous histogram values must be real numbers, got {value!r}") from e
        if not finite:
            raise PreconditionError(f"Continuous histogram values must be finite, got {value!r}")
    return build_histogram(values, num_bins, bar_width, bar_char, CONTINUOUS)


def build_integer_histogram(
    values: Sequence[int],
    num_bins: int = 10,
    bar_width: int = 40,
    bar_char: str = "#",
) -> Histogram:
    """
    Build a histogram over non-negative integers up to 2**64 - 1.

    Raises:
        PreconditionError: If a value is not an integer in that range, or for
            the same reasons as build_histogram
    """
    for value in values:
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
            raise PreconditionError(f"Integer histogram values must be integers, got {value!r}")
        if value < 0:
            raise PreconditionError(f"Integer histogram values must be non-negative, got {value}")
        if int(value) > MAX_INTEGER_VALUE:
            raise PreconditionError(f"Integer histogram values must not exceed {MAX_INTEGER_VALUE}, got {value}")
    return build_histogram(values, num_bins, bar_width, bar_char, INTEGER)
