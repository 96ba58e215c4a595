"""
Dual-Band Filter.

Smooths every channel of the Resampled Grid with two zero-phase Butterworth
low-pass filters: a short cutoff period for near-term movement and a long
one for the underlying trend.
"""

import logging
from dataclasses import dataclass
from typing import Tuple

import numpy as np
import pandas as pd
from scipy.signal import butter, lfilter, lfilter_zi

from pulsetrend.exceptions import InsufficientDataError
import config.settings as settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FilteredSeries:
    """Short- and long-band outputs, both aligned to the Resampled Grid index."""
    short: pd.DataFrame
    long: pd.DataFrame


def design_lowpass(period: float, order: int = settings.FILTER_ORDER) -> Tuple[np.ndarray, np.ndarray]:
    """
    Butterworth low-pass coefficients for a cutoff period.

    Args:
        period: Cutoff period in grid units (normalized cutoff = 1 / period)
        order: Filter order

    Returns:
        (b, a) transfer function coefficients

    Raises:
        ValueError: If the period does not give a cutoff below Nyquist
    """
    if period <= 1:
        raise ValueError(f"Cutoff period must exceed 1 grid unit, got {period}")
    return butter(order, 1.0 / period, btype="low")


def padding_length(b: np.ndarray, a: np.ndarray) -> int:
    """Samples of odd-extension padding added at each end before filtering."""
    return 3 * max(len(a), len(b))


def zero_phase_filter(b: np.ndarray, a: np.ndarray, x: np.ndarray) -> np.ndarray:
    """
    Filter forward then backward so the output has no phase lag.

    The signal is padded at both ends with its odd reflection, filtered
    forward with the initial state set to the steady state for the first
    sample, reversed, filtered again the same way and reversed back. The
    padding is then trimmed. Matches scipy.signal.filtfilt with its
    default padding.

    Raises:
        InsufficientDataError: If x is not longer than the padding
    """
    x = np.asarray(x, dtype=float)
    padlen = padding_length(b, a)
    if len(x) <= padlen:
        raise InsufficientDataError("Dual-band filter", required=padlen + 1, actual=len(x))

    head = 2 * x[0] - x[padlen:0:-1]
    tail = 2 * x[-1] - x[-2:-(padlen + 2):-1]
    extended = np.concatenate((head, x, tail))

    zi = lfilter_zi(b, a)

    forward, _ = lfilter(b, a, extended, zi=zi * extended[0])
    backward = forward[::-1]
    backward, _ = lfilter(b, a, backward, zi=zi * backward[0])

    return backward[::-1][padlen:-padlen]


class DualBandFilter:
    """
    Applies the short and long low-pass filters to every grid channel.
    """

    def __init__(
        self,
        short_period: float = settings.SHORT_PERIOD,
        long_period: float = settings.LONG_PERIOD,
        order: int = settings.FILTER_ORDER
    ):
        """
        Initialize filter pair.

        Args:
            short_period: Cutoff period of the short band, in grid units
            long_period: Cutoff period of the long band, in grid units
            order: Butterworth order
        """
        self.short_period = short_period
        self.long_period = long_period
        self.order = order
        self.short_coefficients = design_lowpass(short_period, order)
        self.long_coefficients = design_lowpass(long_period, order)

        logger.debug(
            f"Initialized DualBandFilter with short={short_period}, "
            f"long={long_period}, order={order}"
        )

    @property
    def minimum_length(self) -> int:
        """Fewest grid points both bands can filter."""
        return max(
            padding_length(*self.short_coefficients),
            padding_length(*self.long_coefficients)
        ) + 1

    def apply(self, grid: pd.DataFrame) -> FilteredSeries:
        """
        Filter every channel with both bands.

        Args:
            grid: Resampled Grid

        Returns:
            FilteredSeries with the grid's index and columns

        Raises:
            InsufficientDataError: If the grid is shorter than minimum_length
        """
        if len(grid) < self.minimum_length:
            raise InsufficientDataError(
                "Dual-band filter", required=self.minimum_length, actual=len(grid)
            )

        short = self._filter_frame(grid, *self.short_coefficients)
        long = self._filter_frame(grid, *self.long_coefficients)

        logger.info(
            f"Filtered {len(grid.columns)} channels x {len(grid)} points "
            f"(short={self.short_period}, long={self.long_period})"
        )
        return FilteredSeries(short=short, long=long)

    def _filter_frame(self, grid: pd.DataFrame, b: np.ndarray, a: np.ndarray) -> pd.DataFrame:
        columns = {}
        for channel in grid.columns:
            values = grid[channel].to_numpy(dtype=float)
            if np.isnan(values).all():
                columns[channel] = values.copy()
            else:
                columns[channel] = zero_phase_filter(b, a, values)
        return pd.DataFrame(columns, index=grid.index.copy())
