"""
Resampler.

Linearly interpolates each numeric channel of the disambiguated series
onto a uniform time grid.
"""

import logging
from datetime import timedelta
from typing import Sequence

import numpy as np
import pandas as pd

from pulsetrend.exceptions import InsufficientDataError
from pulsetrend.models.review import CHANNELS, ReviewRecord

logger = logging.getLogger(__name__)


class Resampler:
    """
    Builds the Resampled Grid.

    The grid runs from the first to the last record timestamp inclusive,
    one row per step. Values outside the observed range clamp to the
    nearest observation.
    """

    def __init__(self, step: timedelta = timedelta(hours=1), channels: Sequence[str] = CHANNELS):
        """
        Initialize resampler.

        Args:
            step: Grid unit (same as the disambiguation step)
            channels: Record fields to resample
        """
        self.step = pd.Timedelta(step)
        if self.step <= pd.Timedelta(0):
            raise ValueError(f"Grid step {step} must be positive")
        self.channels = tuple(channels)

    def resample(self, records: Sequence[ReviewRecord]) -> pd.DataFrame:
        """
        Interpolate records onto the uniform grid.

        Args:
            records: Disambiguated records, strictly ascending

        Returns:
            DataFrame indexed by `timestamp`, one float column per channel

        Raises:
            InsufficientDataError: If there are no records
        """
        if len(records) == 0:
            raise InsufficientDataError("Resampler", required=1, actual=0)

        origin = pd.Timestamp(records[0].timestamp)
        offsets = np.array(
            [(pd.Timestamp(r.timestamp) - origin) / self.step for r in records],
            dtype=float
        )
        target = np.arange(0, int(np.floor(offsets[-1])) + 1, dtype=float)
        index = pd.date_range(origin, periods=len(target), freq=self.step, name="timestamp")

        columns = {}
        for channel in self.channels:
            values = np.array(
                [np.nan if r.channel_value(channel) is None else r.channel_value(channel) for r in records],
                dtype=float
            )
            observed = ~np.isnan(values)
            if not observed.any():
                logger.warning(f"Channel '{channel}' has no observations, resampled as NaN")
                columns[channel] = np.full(len(target), np.nan)
                continue
            # np.interp clamps to the end values outside the observed range
            columns[channel] = np.interp(target, offsets[observed], values[observed])

        grid = pd.DataFrame(columns, index=index)
        logger.info(
            f"Resampled {len(records)} records onto {len(grid)} points "
            f"({index[0]} to {index[-1]}, step {self.step})"
        )
        return grid
