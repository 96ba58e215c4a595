"""
Unit tests for storage and logging utilities.
"""

import json
import logging
import os
import tempfile
from pathlib import Path

import pandas as pd
import pytest

import config.settings as settings
from pulsetrend.models.statistic import GroupClasses, GroupFractions, StatisticResult
from pulsetrend.stages.loader import RecordLoader
from pulsetrend.utils.logging_setup import setup_logging
from pulsetrend.utils.storage import StorageManager


RAW_CSV = """date,stars,employed,technical,recommends,outlook,ceo_opinion,years
2024-06-03,5,1,1,,1,,2
2024-06-02,2,0,,0,-1,-1,
2024-06-02,4,,0,1,,1,7
"""


def test_load_raw_table_feeds_loader():
    """Test that a CSV read from disk passes validation."""
    with tempfile.TemporaryDirectory() as tmpdir:
        storage = StorageManager(tmpdir)
        with open(os.path.join(storage.raw_dir, "reviews.csv"), "w") as f:
            f.write(RAW_CSV)

        table = storage.load_raw_table("reviews")
        records = RecordLoader().load(table, "2024-06-01", "2024-06-30")

        assert len(table) == 3
        assert [r.stars for r in records] == [2, 4, 5]
        assert records[0].technical is None
        assert records[1].years_employed == 7


def test_default_data_root_comes_from_settings(monkeypatch):
    """Test that an unset data root resolves to settings.DATA_ROOT."""
    with tempfile.TemporaryDirectory() as tmpdir:
        monkeypatch.setattr(settings, "DATA_ROOT", Path(tmpdir) / "data")

        storage = StorageManager()

        assert storage.data_root == str(Path(tmpdir) / "data")
        assert os.path.isdir(os.path.join(tmpdir, "data", "raw"))


def test_load_missing_table_returns_none():
    with tempfile.TemporaryDirectory() as tmpdir:
        storage = StorageManager(tmpdir)

        assert storage.load_raw_table("nothing") is None


def test_save_frame_round_trip():
    """Test that a series keeps its timestamp index on disk."""
    with tempfile.TemporaryDirectory() as tmpdir:
        storage = StorageManager(tmpdir)
        index = pd.date_range("2024-06-01", periods=3, freq=pd.Timedelta(hours=1), name="timestamp")
        frame = pd.DataFrame({"stars": [1.0, 2.0, 3.0]}, index=index)

        path = storage.save_frame(frame, "short")
        loaded = pd.read_csv(path, index_col="timestamp", parse_dates=True)

        assert list(loaded["stars"]) == [1.0, 2.0, 3.0]
        assert loaded.index[1] == pd.Timestamp("2024-06-01 01:00")


def test_save_statistics_keeps_undefined_as_null():
    """Test that undefined fractions serialize as null, not 0."""
    with tempfile.TemporaryDirectory() as tmpdir:
        storage = StorageManager(tmpdir)
        result = StatisticResult(
            label="Recommend",
            count=2,
            fractions=GroupFractions(0.5, 1.0, 0.0, 0.5, None),
            classes=GroupClasses("ok", "good", "bad", "ok", None)
        )

        path = storage.save_statistics([result], "stats")
        with open(path) as f:
            data = json.load(f)

        assert data[0]["fractions"]["ex_employee"] is None
        assert data[0]["classes"]["non_technical"] == "bad"


def test_setup_logging_writes_file():
    """Test stdout + file logging configuration."""
    with tempfile.TemporaryDirectory() as tmpdir:
        log_file = os.path.join(tmpdir, "pulsetrend.log")

        setup_logging("DEBUG", log_file=log_file)
        logging.getLogger("pulsetrend.test").debug("hello from test")
        for handler in logging.getLogger().handlers:
            handler.flush()

        with open(log_file) as f:
            assert "hello from test" in f.read()

        root = logging.getLogger()
        for handler in list(root.handlers):
            if isinstance(handler, logging.FileHandler):
                root.removeHandler(handler)
                handler.close()


# Run tests if executed directly
if __name__ == "__main__":
    pytest.main([__file__, "-v"])
