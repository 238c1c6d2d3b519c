from __future__ import annotations

from dataclasses import dataclass
import math

import numpy as np

from gnuexplore.errors import PlotDataError


HISTOGRAM_BINS = 20
KDENSITY_WIDENING = 5


@dataclass(frozen=True)
class HistogramStats:
    minimum: float
    maximum: float
    count: int
    bins: int = HISTOGRAM_BINS

    @property
    def width(self) -> float:
        return abs(self.maximum - self.minimum) / self.bins


def histogram_stats(realizations: np.ndarray, bins: int = HISTOGRAM_BINS) -> HistogramStats:
    if bins <= 0:
        raise ValueError("bins must be > 0")
    if realizations.size == 0:
        raise PlotDataError("cannot build a histogram from an empty distribution")
    finite = np.isfinite(realizations)
    if not finite.all():
        # gnuplot skips these when binning but len_i would still count them.
        missing = int(realizations.size - np.count_nonzero(finite))
        raise PlotDataError(f"histogram realizations are not finite: {missing} of {realizations.size} values")

    minimum = math.inf
    maximum = -math.inf
    count = 0
    for value in realizations.tolist():
        if value < minimum:
            minimum = value
        if value > maximum:
            maximum = value
        count += 1

    stats = HistogramStats(minimum=float(minimum), maximum=float(maximum), count=count, bins=bins)
    if not math.isfinite(stats.width):
        raise PlotDataError(f"histogram range is not finite: [{stats.minimum}, {stats.maximum}]")
    if stats.width == 0.0:
        raise PlotDataError(f"histogram range is degenerate: all realizations equal {stats.minimum}")
    return stats


def group_offsets(group_counts: list[int]) -> list[int]:
    """Horizontal position of the first violin of each series, laid out side by side."""
    offsets: list[int] = []
    running = 0
    for count in group_counts:
        if count <= 0:
            raise PlotDataError("every binned series needs at least one group")
        offsets.append(running)
        running += count
    return offsets
