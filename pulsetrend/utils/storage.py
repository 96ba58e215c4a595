"""
Storage utility.

File I/O helpers for raw review tables and pipeline outputs.
"""

import json
import os
import logging
from typing import List, Optional

import pandas as pd

from pulsetrend.models.statistic import StatisticResult
import config.settings as settings

logger = logging.getLogger(__name__)


class StorageManager:
    """
    Manages file I/O around the pipeline.

    Handles:
    - Raw review tables (data/raw/<name>.csv)
    - Series outputs (data/series/<name>.csv)
    - Statistic results (data/statistics/<name>.json)
    """

    def __init__(self, data_root: Optional[str] = None):
        """
        Initialize storage manager.

        Args:
            data_root: Root data directory (defaults to settings.DATA_ROOT)
        """
        data_root = data_root or str(settings.DATA_ROOT)
        self.data_root = data_root
        self.raw_dir = os.path.join(data_root, "raw")
        self.series_dir = os.path.join(data_root, "series")
        self.statistics_dir = os.path.join(data_root, "statistics")

        # Create directories if they don't exist
        os.makedirs(self.raw_dir, exist_ok=True)
        os.makedirs(self.series_dir, exist_ok=True)
        os.makedirs(self.statistics_dir, exist_ok=True)

        logger.info(f"Initialized StorageManager with data_root={data_root}")

    def load_raw_table(self, name: str) -> Optional[pd.DataFrame]:
        """
        Load a raw review table.

        Args:
            name: Table name, without the .csv extension

        Returns:
            DataFrame in file order, or None if the file doesn't exist
        """
        filepath = os.path.join(self.raw_dir, f"{name}.csv")

        if not os.path.exists(filepath):
            logger.warning(f"No raw table found at {filepath}")
            return None

        table = pd.read_csv(filepath)
        logger.debug(f"Loaded {len(table)} raw rows from {filepath}")
        return table

    def save_frame(self, frame: pd.DataFrame, name: str) -> str:
        """
        Save a grid or filtered series as CSV.

        Returns:
            Path of the written file
        """
        filepath = os.path.join(self.series_dir, f"{name}.csv")

        try:
            frame.to_csv(filepath, index=True)
            logger.info(f"Saved {len(frame)} rows to {filepath}")
        except Exception as e:
            logger.error(f"Failed to save series {name}: {e}")
            raise
        return filepath

    def save_statistics(self, results: List[StatisticResult], name: str) -> str:
        """
        Save statistic results as JSON.

        Returns:
            Path of the written file
        """
        filepath = os.path.join(self.statistics_dir, f"{name}.json")

        try:
            with open(filepath, 'w') as f:
                json.dump([r.to_dict() for r in results], f, indent=2)
            logger.info(f"Saved {len(results)} statistics to {filepath}")
        except Exception as e:
            logger.error(f"Failed to save statistics {name}: {e}")
            raise
        return filepath
