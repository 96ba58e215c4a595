"""
Record Loader & Validator.

Parses a raw review table into typed records, enforces the ordering and
required-field invariants, and restricts the result to a date window.
"""

import logging
from typing import Iterable, List, Mapping, Optional, Tuple, Union

import numpy as np
import pandas as pd

from pulsetrend.exceptions import ValidationError
from pulsetrend.models.review import ReviewRecord, TRI_STATE
import config.settings as settings

logger = logging.getLogger(__name__)

TRUE_STRINGS = {"true", "yes", "y", "1"}
FALSE_STRINGS = {"false", "no", "n", "0"}


def _is_missing(value) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return bool(pd.isna(value))


def _parse_flag(value, column: str, row: int) -> Optional[bool]:
    """Parse a yes/no cell. Accepts bools, 0/1 and common spellings."""
    if _is_missing(value):
        return None
    if isinstance(value, str):
        text = value.strip().lower()
        if text in TRUE_STRINGS:
            return True
        if text in FALSE_STRINGS:
            return False
    elif value in (0, 1):
        return bool(value)
    raise ValidationError(f"Row {row}: cannot parse {column}={value!r} as a boolean", rows=[row])


def _parse_int(value, column: str, row: int) -> Optional[int]:
    if _is_missing(value):
        return None
    if isinstance(value, (bool, np.bool_)):
        raise ValidationError(f"Row {row}: {column}={value!r} is a boolean, not a number", rows=[row])
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Row {row}: {column}={value!r} is not a number", rows=[row])
    if not number.is_integer():
        raise ValidationError(f"Row {row}: {column}={value!r} is not an integer", rows=[row])
    return int(number)


def _parse_tri_state(value, column: str, row: int) -> Optional[int]:
    number = _parse_int(value, column, row)
    if number is not None and number not in TRI_STATE:
        raise ValidationError(f"Row {row}: {column}={value!r} must be -1, 0 or 1", rows=[row])
    return number


class RecordLoader:
    """
    Converts raw tabular rows into validated, sorted ReviewRecords.

    Raw tables come newest-first (dates non-increasing). Rows that violate
    this, or that lack a star rating, abort the load.
    """

    def __init__(self, columns: Optional[List[str]] = None):
        """
        Initialize loader.

        Args:
            columns: Required raw columns (defaults to settings.RAW_COLUMNS)
        """
        self.columns = columns or settings.RAW_COLUMNS

    def load(
        self,
        table: Union[pd.DataFrame, Iterable[Mapping]],
        start_date,
        end_date
    ) -> Tuple[ReviewRecord, ...]:
        """
        Parse, validate, sort and window raw rows.

        Args:
            table: DataFrame or iterable of row mappings
            start_date: First date to keep (inclusive)
            end_date: Last date to keep (inclusive)

        Returns:
            Records in ascending timestamp order; same-day rows keep their raw order

        Raises:
            ValidationError: On missing columns, bad dates, ordering violations,
                missing stars or unparseable field values
        """
        if not isinstance(table, pd.DataFrame):
            table = pd.DataFrame(list(table))

        start = pd.Timestamp(start_date).normalize()
        end = pd.Timestamp(end_date).normalize()
        if start > end:
            raise ValidationError(f"Window start {start.date()} is after end {end.date()}")

        missing_columns = [c for c in self.columns if c not in table.columns]
        if missing_columns:
            raise ValidationError(f"Missing required columns: {missing_columns}")

        table = table.reset_index(drop=True)
        dates = self._parse_dates(table["date"])
        self._check_stars_present(table["stars"])
        self._check_order(dates)

        records = []
        for row, raw in enumerate(table.to_dict("records")):
            records.append(self._parse_row(raw, dates.iloc[row], row))

        # sorted() is stable, so same-day rows keep their raw relative order
        records = sorted(records, key=lambda r: r.timestamp)
        in_window = tuple(r for r in records if start <= r.timestamp <= end)

        dropped = len(records) - len(in_window)
        if dropped:
            logger.debug(f"Dropped {dropped} rows outside {start.date()}..{end.date()}")

        logger.info(
            f"Loaded {len(in_window)} records from {len(table)} rows "
            f"({start.date()} to {end.date()})"
        )
        return in_window

    def _parse_dates(self, column: pd.Series) -> pd.Series:
        # Each cell is parsed on its own; scraped tables mix date formats
        dates = pd.to_datetime(column, format="mixed", errors="coerce")
        bad_rows = [int(i) for i in dates.index[dates.isna()]]
        if bad_rows:
            raise ValidationError(f"Unparseable or missing dates in rows {bad_rows}", rows=bad_rows)
        return dates.dt.normalize()

    def _check_stars_present(self, column: pd.Series) -> None:
        missing = column.map(_is_missing)
        bad_rows = [int(i) for i in column.index[missing]]
        if bad_rows:
            raise ValidationError(f"Missing stars in rows {bad_rows}", rows=bad_rows)

    def _check_order(self, dates: pd.Series) -> None:
        """Raw dates must be monotonically non-increasing."""
        increases = dates.diff() > pd.Timedelta(0)
        if increases.any():
            row = int(increases.idxmax())
            raise ValidationError(
                f"Dates not in descending order: row {row} ({dates.iloc[row].date()}) "
                f"follows {dates.iloc[row - 1].date()}",
                rows=[row]
            )

    def _parse_row(self, raw: Mapping, timestamp: pd.Timestamp, row: int) -> ReviewRecord:
        try:
            return ReviewRecord(
                timestamp=timestamp,
                stars=_parse_int(raw["stars"], "stars", row),
                employed=_parse_flag(raw["employed"], "employed", row),
                technical=_parse_flag(raw["technical"], "technical", row),
                recommends=_parse_flag(raw["recommends"], "recommends", row),
                outlook=_parse_tri_state(raw["outlook"], "outlook", row),
                ceo_opinion=_parse_tri_state(raw["ceo_opinion"], "ceo_opinion", row),
                years_employed=_parse_int(raw["years"], "years", row)
            )
        except ValidationError:
            raise
        except ValueError as e:
            raise ValidationError(f"Row {row}: {e}", rows=[row]) from e
