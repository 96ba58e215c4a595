"""
Unit tests for the Imputer.
Each rule is checked on its own, then the neutral fallbacks.
"""

import pandas as pd
import pytest

from pulsetrend.models.review import ReviewRecord
from pulsetrend.stages.imputation import DEFAULT_RULES, ImputationRule, Imputer


def record(stars, **fields):
    return ReviewRecord(timestamp=pd.Timestamp("2024-05-01"), stars=stars, **fields)


@pytest.fixture
def imputer():
    return Imputer()


@pytest.mark.parametrize("stars", [4, 5])
def test_high_stars_infer_recommends_and_positive_outlook(imputer, stars):
    """Test the stars >= 4 rules."""
    (result,) = imputer.impute([record(stars)])

    assert result.recommends is True
    assert result.outlook == 1
    assert result.ceo_opinion == 0


@pytest.mark.parametrize("stars", [1, 2])
def test_low_stars_infer_negative_outlook_only(imputer, stars):
    """Test that low ratings infer outlook but leave recommends undecided."""
    (result,) = imputer.impute([record(stars)])

    assert result.outlook == -1
    assert result.recommends == 0.5
    assert result.ceo_opinion == 0


def test_middle_rating_gets_neutral_fills(imputer):
    """Test that 3 stars triggers no rule, only the neutral constants."""
    (result,) = imputer.impute([record(3)])

    assert result.recommends == 0.5
    assert result.outlook == 0
    assert result.ceo_opinion == 0


def test_present_fields_are_never_overwritten(imputer):
    """Test that rules only fill missing fields."""
    original = record(5, recommends=False, outlook=-1, ceo_opinion=-1)

    (result,) = imputer.impute([original])

    assert result == original


def test_untouched_optional_fields_stay_missing(imputer):
    """Test that employed, technical and years are not imputed."""
    (result,) = imputer.impute([record(4)])

    assert result.employed is None
    assert result.technical is None
    assert result.years_employed is None


def test_input_records_are_not_mutated(imputer):
    """Test that imputation returns new records."""
    original = record(5)

    imputer.impute([original])

    assert original.recommends is None
    assert original.outlook is None


def test_order_independent(imputer):
    """Test that reversing the input reverses the output and nothing else."""
    records = [record(s) for s in (1, 2, 3, 4, 5)]

    forward = imputer.impute(records)
    backward = imputer.impute(list(reversed(records)))

    assert list(forward) == list(reversed(backward))


def test_first_matching_rule_wins():
    """Test that a later rule does not overwrite a field set by an earlier one."""
    rules = DEFAULT_RULES + (
        ImputationRule("recommends", False, lambda r: r.stars >= 1),
    )
    imputer = Imputer(rules=rules)

    (high,) = imputer.impute([record(5)])
    (low,) = imputer.impute([record(1)])

    assert high.recommends is True
    assert low.recommends is False


# Run tests if executed directly
if __name__ == "__main__":
    pytest.main([__file__, "-v"])
