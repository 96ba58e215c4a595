"""
Pipeline Orchestrator.

Coordinates sequential execution of all stages over one review table.
"""

import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Dict, Iterable, List, Optional, Tuple

import pandas as pd

from pulsetrend.exceptions import PipelineError
from pulsetrend.models.doi import SubPeriod
from pulsetrend.models.review import ReviewRecord
from pulsetrend.models.statistic import StatisticDefinition, StatisticResult
from pulsetrend.stages.disambiguation import TimestampDisambiguator
from pulsetrend.stages.filtering import DualBandFilter, FilteredSeries
from pulsetrend.stages.imputation import Imputer
from pulsetrend.stages.loader import RecordLoader
from pulsetrend.stages.resampling import Resampler
from pulsetrend.stages.statistics import StatisticsEngine, default_statistics
import config.settings as settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineResult:
    """Everything the pipeline exposes to reporting collaborators."""
    cleaned: Tuple[ReviewRecord, ...]  # Imputed, not resampled (raw-point overlay)
    grid: pd.DataFrame
    filtered: FilteredSeries
    statistics: Tuple[StatisticResult, ...]

    def frame(self, name: str) -> pd.DataFrame:
        """Look up "grid", "short" or "long"."""
        frames = {
            "grid": self.grid,
            "short": self.filtered.short,
            "long": self.filtered.long
        }
        if name not in frames:
            raise KeyError(f"Unknown series '{name}'. Expected one of {sorted(frames)}")
        return frames[name]

    def rows(self, name: str) -> List[Tuple[pd.Timestamp, Dict[str, float]]]:
        """Ordered (timestamp, channel -> value) rows of a series."""
        frame = self.frame(name)
        return [(timestamp, row.to_dict()) for timestamp, row in frame.iterrows()]


class PipelineOrchestrator:
    """
    Orchestrates the batch pipeline.

    Series path:     Load -> Impute -> Disambiguate -> Resample -> Filter
    Statistics path: Load -> Impute -> Statistics
    """

    def __init__(
        self,
        grid_step: timedelta = timedelta(hours=settings.GRID_STEP_HOURS),
        short_period: float = settings.SHORT_PERIOD,
        long_period: float = settings.LONG_PERIOD,
        filter_order: int = settings.FILTER_ORDER
    ):
        """
        Initialize pipeline stages.

        Args:
            grid_step: Disambiguation and resampling granularity
            short_period: Short-band cutoff period, in grid units
            long_period: Long-band cutoff period, in grid units
            filter_order: Butterworth order
        """
        logger.info("Initializing pipeline stages...")

        self.loader = RecordLoader()
        self.imputer = Imputer()
        self.disambiguator = TimestampDisambiguator(grid_step)
        self.resampler = Resampler(grid_step)
        self.filter = DualBandFilter(short_period, long_period, filter_order)
        self.statistics_engine = StatisticsEngine()

        logger.info(
            f"Pipeline initialized (step={grid_step}, short={short_period}, "
            f"long={long_period}, order={filter_order})"
        )

    def run(
        self,
        table,
        start_date,
        end_date,
        definitions: Optional[Iterable[StatisticDefinition]] = None,
        sub_periods: Iterable[SubPeriod] = ()
    ) -> PipelineResult:
        """
        Run the complete pipeline.

        Args:
            table: Raw review table (DataFrame or row mappings)
            start_date: Window start (inclusive)
            end_date: Window end (inclusive)
            definitions: Statistic definitions; defaults to default_statistics()
            sub_periods: Windows for the default CEO approval questions

        Returns:
            PipelineResult

        Raises:
            PipelineError: Any stage failure, re-raised after logging
        """
        if definitions is None:
            definitions = default_statistics(sub_periods)

        try:
            # STAGE 1: Load & validate
            records = self.loader.load(table, start_date, end_date)

            # STAGE 2: Impute
            cleaned = self.imputer.impute(records)

            # STAGE 3-5: Series path
            disambiguated = self.disambiguator.disambiguate(cleaned)
            grid = self.resampler.resample(disambiguated)
            filtered = self.filter.apply(grid)

            # STAGE 6: Statistics path (cleaned records, not the grid)
            statistics = tuple(self.statistics_engine.evaluate(cleaned, definitions))

        except PipelineError as e:
            logger.error(f"Pipeline failed: {type(e).__name__}: {e}")
            raise

        logger.info(
            f"Pipeline complete: {len(cleaned)} records -> {len(grid)} grid points, "
            f"{len(statistics)} statistics"
        )
        return PipelineResult(
            cleaned=cleaned,
            grid=grid,
            filtered=filtered,
            statistics=statistics
        )
