"""
Timestamp Disambiguator.

Spreads reviews that share a calendar date across distinct grid slots so
every record ends up with a unique instant.
"""

import logging
from dataclasses import replace
from datetime import timedelta
from itertools import groupby
from typing import Iterable, Tuple

import pandas as pd

from pulsetrend.exceptions import CapacityError
from pulsetrend.models.review import ReviewRecord

logger = logging.getLogger(__name__)

ONE_DAY = timedelta(days=1)


class TimestampDisambiguator:
    """
    Resolves same-day timestamp collisions.

    A day with n > 1 records gets instants day+0, day+step, ... day+(n-1)*step
    in the records' existing order. Single-record days are left alone.
    """

    def __init__(self, step: timedelta = timedelta(hours=1)):
        """
        Initialize disambiguator.

        Args:
            step: Grid unit; must be positive and divide a day evenly

        Raises:
            ValueError: If step is not a positive divisor of one day
        """
        step = pd.Timedelta(step).to_pytimedelta()
        if step <= timedelta(0) or ONE_DAY % step:
            raise ValueError(f"Grid step {step} must be positive and divide one day evenly")
        self.step = step
        self.capacity = ONE_DAY // step

    def disambiguate(self, records: Iterable[ReviewRecord]) -> Tuple[ReviewRecord, ...]:
        """
        Assign unique, ascending timestamps.

        Args:
            records: Cleaned records in ascending date order

        Returns:
            New records with strictly increasing timestamps

        Raises:
            CapacityError: If a day holds more records than grid slots
        """
        output = []
        spread_days = 0

        for day, group in groupby(records, key=lambda r: pd.Timestamp(r.timestamp).normalize()):
            group = list(group)
            if len(group) == 1:
                output.append(group[0])
                continue

            if len(group) > self.capacity:
                logger.error(f"{day.date()} has {len(group)} records, capacity is {self.capacity}")
                raise CapacityError(day.date(), len(group), self.capacity)

            spread_days += 1
            for slot, record in enumerate(group):
                output.append(replace(record, timestamp=day + slot * self.step))

        logger.info(
            f"Disambiguated {len(output)} records "
            f"({spread_days} days spread across {self.step} slots)"
        )
        return tuple(output)
