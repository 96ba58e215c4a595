"""
Date-of-interest and sub-period models.

DOIs are labelled calendar dates used for annotation and for looking up
window boundaries. They carry no numeric role in filtering or statistics.
"""

from dataclasses import dataclass
from typing import Iterable

import pandas as pd


@dataclass(frozen=True)
class DateOfInterest:
    """A labelled date with a display color (e.g. "CEO change", "#d62728")."""
    label: str
    date: pd.Timestamp
    color: str = "black"

    def __post_init__(self):
        if not self.label:
            raise ValueError("DateOfInterest label must not be empty")
        object.__setattr__(self, "date", pd.Timestamp(self.date).normalize())


@dataclass(frozen=True)
class SubPeriod:
    """
    Named half-open window [start, end).
    Used to scope a statistic, e.g. the tenure of one role-holder.
    """
    name: str
    start: pd.Timestamp
    end: pd.Timestamp

    def __post_init__(self):
        object.__setattr__(self, "start", pd.Timestamp(self.start))
        object.__setattr__(self, "end", pd.Timestamp(self.end))
        if self.start >= self.end:
            raise ValueError(
                f"SubPeriod '{self.name}' is empty: start {self.start} is not before end {self.end}"
            )

    def contains(self, timestamp) -> bool:
        return self.start <= pd.Timestamp(timestamp) < self.end

    @classmethod
    def between(
        cls,
        name: str,
        dois: Iterable[DateOfInterest],
        start_label: str,
        end_label: str
    ) -> "SubPeriod":
        """Build a window bounded by two labelled dates."""
        dois = list(dois)
        return cls(
            name=name,
            start=find_doi(dois, start_label).date,
            end=find_doi(dois, end_label).date
        )


def find_doi(dois: Iterable[DateOfInterest], label: str) -> DateOfInterest:
    """
    Look up a date of interest by label.

    Raises:
        KeyError: If no DOI carries the label
    """
    for doi in dois:
        if doi.label == label:
            return doi
    raise KeyError(f"No date of interest labelled '{label}'")
