"""
backtesting/rolling_stats.py — Fixed-size rolling window statistics.

Keeps the running sum and sum of squares of one asset's last `window_size`
returns so the window's population standard deviation is available in O(1)
per day. The caller rolls the window by adding the day that enters and
removing the day that leaves.
"""

import math
from typing import Iterable, Optional

import numpy as np

# Fraction of the largest E[X^2] the window has held below which a variance is
# floating-point noise
ROUNDOFF_TOLERANCE = 1e-12


class RollingWindowStats:
    """Running first and second moments over a fixed-size trailing window."""

    def __init__(self, window_size: int) -> None:
        if window_size < 1:
            raise ValueError("Window size must be at least 1")
        self.window_size = window_size
        self.sum = 0.0
        self.sum_sq = 0.0
        self.peak_sum_sq = 0.0
        self.count = 0

    @property
    def is_initialized(self) -> bool:
        return self.count == self.window_size

    def initialize(self, values: Iterable[float]) -> None:
        """Fill the window with its first `window_size` values.

        Args:
            values: Exactly `window_size` returns, oldest first.
        """
        if self.is_initialized:
            raise ValueError("Rolling window is already initialized")
        values = [float(v) for v in values]
        if len(values) != self.window_size:
            raise ValueError(
                f"Expected {self.window_size} values to initialize, got {len(values)}"
            )
        for v in values:
            self.sum += v
            self.sum_sq += v * v
        self.peak_sum_sq = self.sum_sq
        self.count = self.window_size

    def add_and_remove(self, incoming: float, outgoing: Optional[float] = None) -> None:
        """Roll the window forward by one day.

        `outgoing` is the value leaving the window. None skips the removal,
        which only happens if the leaving day would fall before the series start.
        """
        self._check_initialized()
        # Outgoing first, then incoming; the order affects the last bits of the sums.
        if outgoing is not None:
            outgoing = float(outgoing)
            self.sum -= outgoing
            self.sum_sq -= outgoing * outgoing
        incoming = float(incoming)
        self.sum += incoming
        self.sum_sq += incoming * incoming
        self.peak_sum_sq = max(self.peak_sum_sq, self.sum_sq)

    def mean(self) -> float:
        self._check_initialized()
        return self.sum / self.count

    def variance(self) -> float:
        """Population variance E[X^2] - E[X]^2, clamped at zero.

        Cancellation in the identity leaves a residue of a few ulps (of either
        sign) when the true variance is zero, e.g. a constant 0.01 series.
        The residue scales with the largest values that have passed through
        the running sums, not only the current window, so anything at or
        below ROUNDOFF_TOLERANCE * (largest E[X^2] held so far) is returned
        as exactly 0.0.
        """
        self._check_initialized()
        mean = self.sum / self.count
        mean_sq = self.sum_sq / self.count
        var = mean_sq - mean * mean
        scale = max(mean_sq, self.peak_sum_sq / self.count)
        if var <= ROUNDOFF_TOLERANCE * scale:
            return 0.0
        return var

    def standard_deviation(self) -> float:
        return math.sqrt(self.variance())

    def _check_initialized(self) -> None:
        if not self.is_initialized:
            raise RuntimeError("RollingWindowStats used before initialize()")

    def __repr__(self) -> str:
        return (
            f"RollingWindowStats(window_size={self.window_size}, "
            f"sum={self.sum!r}, sum_sq={self.sum_sq!r}, count={self.count})"
        )


def naive_standard_deviation(values: Iterable[float]) -> float:
    """Population standard deviation recomputed from the raw window values."""
    arr = np.asarray(list(values), dtype=float)
    if arr.size == 0:
        return 0.0
    return float(arr.std(ddof=0))
