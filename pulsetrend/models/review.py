"""
Review data model.

Represents one respondent entry from an employee review table.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union

# Numeric channels carried through resampling and filtering, in output order
CHANNELS = (
    "stars",
    "employed",
    "technical",
    "recommends",
    "outlook",
    "ceo_opinion",
    "years_employed",
)

TRI_STATE = (-1, 0, 1)


@dataclass(frozen=True)
class ReviewRecord:
    """
    A single review.
    Only timestamp and stars are required; every other field may be missing.
    """
    timestamp: datetime  # Day-granular until disambiguated
    stars: int  # 1-5 star rating
    employed: Optional[bool] = None  # False for ex-employees
    technical: Optional[bool] = None  # Technical vs non-technical role
    recommends: Union[bool, float, None] = None  # 0.5 once imputed as undecided
    outlook: Optional[int] = None  # -1, 0 or 1
    ceo_opinion: Optional[int] = None  # -1, 0 or 1
    years_employed: Optional[int] = None

    def __post_init__(self):
        # Validate stars
        if isinstance(self.stars, bool) or not (1 <= self.stars <= 5):
            raise ValueError(f"Invalid stars: {self.stars}. Must be 1-5")

        for name in ("outlook", "ceo_opinion"):
            value = getattr(self, name)
            if value is not None and value not in TRI_STATE:
                raise ValueError(f"Invalid {name}: {value}. Must be -1, 0 or 1")

        if self.recommends is not None and not (0.0 <= self.recommends <= 1.0):
            raise ValueError(f"Invalid recommends: {self.recommends}. Must be within [0, 1]")

        if self.years_employed is not None and self.years_employed < 0:
            raise ValueError(f"Invalid years_employed: {self.years_employed}. Must be >= 0")

    def channel_value(self, channel: str) -> Optional[float]:
        """Numeric value of a channel, or None when the field is missing."""
        value = getattr(self, channel)
        if value is None:
            return None
        return float(value)
