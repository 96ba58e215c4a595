"""
Statistics Engine.

Evaluates boolean questions over the cleaned (not resampled) records and
reports the fraction answering yes, overall and per respondent group.
"""

import logging
from typing import Callable, Iterable, List, Optional, Sequence

from pulsetrend.models.doi import SubPeriod
from pulsetrend.models.review import ReviewRecord
from pulsetrend.models.statistic import (
    GroupClasses,
    GroupFractions,
    StatisticDefinition,
    StatisticResult,
    classify,
)

logger = logging.getLogger(__name__)

# Sub-group membership, in GroupFractions field order
GROUPS = (
    ("overall", lambda r: True),
    ("technical", lambda r: r.technical is True),
    ("non_technical", lambda r: r.technical is False),
    ("employed", lambda r: r.employed is True),
    ("ex_employee", lambda r: r.employed is False),
)


def _fraction(answers: List[bool]) -> Optional[float]:
    if not answers:
        return None
    return sum(answers) / len(answers)


class StatisticsEngine:
    """
    Computes one StatisticResult per StatisticDefinition.
    """

    def evaluate(
        self,
        records: Sequence[ReviewRecord],
        definitions: Iterable[StatisticDefinition]
    ) -> List[StatisticResult]:
        """
        Evaluate definitions in order.

        Args:
            records: Cleaned records
            definitions: Ordered statistic definitions

        Returns:
            Results in the same order as definitions
        """
        results = [self._evaluate_one(records, definition) for definition in definitions]
        logger.info(f"Computed {len(results)} statistics over {len(records)} records")
        return results

    def _evaluate_one(
        self,
        records: Sequence[ReviewRecord],
        definition: StatisticDefinition
    ) -> StatisticResult:
        if definition.window is not None:
            records = [r for r in records if definition.window.contains(r.timestamp)]

        answers = [(record, bool(definition.predicate(record))) for record in records]

        fractions = GroupFractions(*(
            _fraction([answer for record, answer in answers if member(record)])
            for _, member in GROUPS
        ))
        classes = GroupClasses(*(classify(f, definition.high_is_good) for f in fractions))

        undefined = [name for (name, _), f in zip(GROUPS, fractions) if f is None]
        if undefined:
            logger.warning(f"'{definition.label}': no records for {', '.join(undefined)}")

        return StatisticResult(
            label=definition.label,
            count=len(records),
            fractions=fractions,
            classes=classes
        )


def _answer_equals(field: str, value) -> Callable[[ReviewRecord], bool]:
    return lambda record: getattr(record, field) == value


def default_statistics(sub_periods: Iterable[SubPeriod] = ()) -> List[StatisticDefinition]:
    """
    Standard question set for an employee review table.

    Args:
        sub_periods: Role-holder tenures; each adds a CEO approval question
            scoped to that window

    Returns:
        Ordered statistic definitions
    """
    definitions = [
        StatisticDefinition(_answer_equals("recommends", True), "Recommend to a friend", True),
        StatisticDefinition(_answer_equals("outlook", 1), "Positive business outlook", True),
        StatisticDefinition(_answer_equals("outlook", -1), "Negative business outlook", False),
        StatisticDefinition(_answer_equals("stars", 5), "Five stars", True),
        StatisticDefinition(_answer_equals("stars", 1), "One star", False),
        StatisticDefinition(_answer_equals("ceo_opinion", 1), "Approves of CEO", True),
    ]
    for period in sub_periods:
        definitions.append(StatisticDefinition(
            _answer_equals("ceo_opinion", 1),
            f"Approves of CEO ({period.name})",
            True,
            window=period
        ))
    return definitions
