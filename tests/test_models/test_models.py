"""
Basic unit tests for the data models.
"""

import pandas as pd
import pytest

from pulsetrend.models.doi import DateOfInterest, SubPeriod, find_doi
from pulsetrend.models.review import ReviewRecord
from pulsetrend.models.statistic import (
    GroupClasses,
    GroupFractions,
    StatisticResult,
    classify,
)


def test_review_record_validation():
    """Test ReviewRecord range checks."""
    record = ReviewRecord(timestamp=pd.Timestamp("2024-01-01"), stars=3)
    assert record.recommends is None

    with pytest.raises(ValueError):
        ReviewRecord(timestamp=pd.Timestamp("2024-01-01"), stars=0)
    with pytest.raises(ValueError):
        ReviewRecord(timestamp=pd.Timestamp("2024-01-01"), stars=3, outlook=2)
    with pytest.raises(ValueError):
        ReviewRecord(timestamp=pd.Timestamp("2024-01-01"), stars=3, ceo_opinion=-2)
    with pytest.raises(ValueError):
        ReviewRecord(timestamp=pd.Timestamp("2024-01-01"), stars=3, years_employed=-1)
    with pytest.raises(ValueError):
        ReviewRecord(timestamp=pd.Timestamp("2024-01-01"), stars=3, recommends=1.5)


def test_review_record_is_immutable():
    record = ReviewRecord(timestamp=pd.Timestamp("2024-01-01"), stars=3)

    with pytest.raises(AttributeError):
        record.stars = 4


def test_channel_value():
    """Test numeric conversion of channels."""
    record = ReviewRecord(timestamp=pd.Timestamp("2024-01-01"), stars=4, employed=True, recommends=0.5)

    assert record.channel_value("stars") == 4.0
    assert record.channel_value("employed") == 1.0
    assert record.channel_value("recommends") == 0.5
    assert record.channel_value("technical") is None


@pytest.mark.parametrize("fraction, high_is_good, expected", [
    (1.0, True, "good"),
    (2 / 3, True, "good"),
    (0.5, True, "ok"),
    (1 / 3, True, "ok"),
    (0.2, True, "bad"),
    (0.0, True, "bad"),
    (0.75, False, "bad"),
    (0.5, False, "ok"),
    (0.2, False, "good"),
    (None, True, None),
    (None, False, None),
])
def test_classify(fraction, high_is_good, expected):
    assert classify(fraction, high_is_good) == expected


def test_statistic_result_to_dict():
    result = StatisticResult(
        label="Recommend",
        count=3,
        fractions=GroupFractions(0.5, 1.0, None, 0.5, None),
        classes=GroupClasses("ok", "good", None, "ok", None)
    )

    data = result.to_dict()

    assert data["label"] == "Recommend"
    assert data["fractions"]["non_technical"] is None
    assert data["classes"]["technical"] == "good"


def test_doi_lookup_and_sub_period():
    """Test building a tenure window from two dates of interest."""
    dois = [
        DateOfInterest("Alice becomes CEO", "2020-03-15 10:30", "#1f77b4"),
        DateOfInterest("Bob becomes CEO", "2022-07-01", "#d62728"),
    ]

    assert find_doi(dois, "Bob becomes CEO").date == pd.Timestamp("2022-07-01")
    assert dois[0].date == pd.Timestamp("2020-03-15")

    tenure = SubPeriod.between("Alice", dois, "Alice becomes CEO", "Bob becomes CEO")

    assert tenure.contains("2020-03-15")
    assert tenure.contains("2022-06-30")
    assert not tenure.contains("2022-07-01")

    with pytest.raises(KeyError):
        find_doi(dois, "Carol becomes CEO")


def test_sub_period_must_not_be_empty():
    with pytest.raises(ValueError):
        SubPeriod("Nobody", "2024-01-01", "2024-01-01")


# Run tests if executed directly
if __name__ == "__main__":
    pytest.main([__file__, "-v"])
