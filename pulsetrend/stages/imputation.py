"""
Imputer.

Fills missing optional fields from the star rating, then falls back to
neutral constants for anything still missing.
"""

import logging
from collections import Counter
from dataclasses import dataclass, replace
from typing import Callable, Dict, Iterable, Optional, Tuple

from pulsetrend.models.review import ReviewRecord
import config.settings as settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImputationRule:
    """Set `field` to `value` when it is missing and `condition` holds."""
    field: str
    value: object
    condition: Callable[[ReviewRecord], bool]
    description: str = ""

    def applies_to(self, record: ReviewRecord) -> bool:
        return getattr(record, self.field) is None and self.condition(record)


# Evaluated in order; a rule only fires on a field that is still missing
DEFAULT_RULES = (
    ImputationRule("recommends", True, lambda r: r.stars >= 4, "recommends if stars >= 4"),
    ImputationRule("outlook", 1, lambda r: r.stars >= 4, "positive outlook if stars >= 4"),
    ImputationRule("outlook", -1, lambda r: r.stars <= 2, "negative outlook if stars <= 2"),
)

NEUTRAL_FILLS = {
    "recommends": settings.NEUTRAL_RECOMMENDS,
    "outlook": settings.NEUTRAL_OUTLOOK,
    "ceo_opinion": settings.NEUTRAL_CEO_OPINION,
}


class Imputer:
    """
    Replaces missing optional fields record by record.

    Each record's result depends only on its own fields, so the output
    does not depend on record order.
    """

    def __init__(
        self,
        rules: Iterable[ImputationRule] = DEFAULT_RULES,
        neutral_fills: Optional[Dict[str, object]] = None
    ):
        """
        Initialize imputer.

        Args:
            rules: Ordered inference rules
            neutral_fills: Field -> constant used once rules are exhausted
        """
        self.rules = tuple(rules)
        self.neutral_fills = dict(NEUTRAL_FILLS if neutral_fills is None else neutral_fills)

    def impute(self, records: Iterable[ReviewRecord]) -> Tuple[ReviewRecord, ...]:
        """
        Impute every record.

        Args:
            records: Validated, sorted records

        Returns:
            New records with no missing recommends/outlook/ceo_opinion
        """
        fills = Counter()
        imputed = tuple(self._impute_record(record, fills) for record in records)

        if fills:
            summary = ", ".join(f"{k}={v}" for k, v in sorted(fills.items()))
            logger.info(f"Imputed {sum(fills.values())} fields across {len(imputed)} records ({summary})")
        else:
            logger.info(f"No fields needed imputation across {len(imputed)} records")

        return imputed

    def _impute_record(self, record: ReviewRecord, fills: Counter) -> ReviewRecord:
        updates = {}
        for rule in self.rules:
            if rule.field not in updates and rule.applies_to(record):
                updates[rule.field] = rule.value
                fills[f"{rule.field}:rule"] += 1

        for field, value in self.neutral_fills.items():
            if field not in updates and getattr(record, field) is None:
                updates[field] = value
                fills[f"{field}:neutral"] += 1

        if not updates:
            return record
        return replace(record, **updates)
