"""
Statistic data model.

Definitions of boolean questions asked of every review, and the
per-group fractions produced by the statistics engine.
"""

from dataclasses import dataclass
from typing import Callable, NamedTuple, Optional

from pulsetrend.models.doi import SubPeriod
from pulsetrend.models.review import ReviewRecord
import config.settings as settings


@dataclass(frozen=True)
class StatisticDefinition:
    """
    A boolean question over a review.
    `high_is_good` says whether a large fraction is desirable.
    """
    predicate: Callable[[ReviewRecord], bool]
    label: str
    high_is_good: bool = True
    window: Optional[SubPeriod] = None  # Restricts the records considered


class GroupFractions(NamedTuple):
    """
    One value per respondent sub-group.
    None marks an undefined value (the group had no records).
    """
    overall: Optional[float]
    technical: Optional[float]
    non_technical: Optional[float]
    employed: Optional[float]
    ex_employee: Optional[float]


class GroupClasses(NamedTuple):
    overall: Optional[str]
    technical: Optional[str]
    non_technical: Optional[str]
    employed: Optional[str]
    ex_employee: Optional[str]


@dataclass(frozen=True)
class StatisticResult:
    """Fractions and classifications for one StatisticDefinition."""
    label: str
    count: int  # Records in scope
    fractions: GroupFractions
    classes: GroupClasses

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        return {
            "label": self.label,
            "count": self.count,
            "fractions": self.fractions._asdict(),
            "classes": self.classes._asdict()
        }


def classify(fraction: Optional[float], high_is_good: bool = True) -> Optional[str]:
    """
    Classify a fraction as "good", "ok" or "bad".

    Args:
        fraction: Value in [0, 1], or None if undefined
        high_is_good: Polarity; when False the good/bad labels swap

    Returns:
        Class name, or None for an undefined fraction
    """
    if fraction is None:
        return None

    if fraction >= settings.GOOD_THRESHOLD:
        return "good" if high_is_good else "bad"
    if fraction >= settings.OK_THRESHOLD:
        return "ok"
    return "bad" if high_is_good else "good"
