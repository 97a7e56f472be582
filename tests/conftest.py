from __future__ import annotations

import os

os.environ.setdefault("MPLBACKEND", "Agg")

from pathlib import Path
from typing import Sequence

import pandas as pd
import pytest

from activity_report.intervals import CANONICAL_INTERVALS


def make_day(date: str, steps) -> pd.DataFrame:
    """One day of observations; steps is a scalar, None (all missing) or 288 values."""
    if steps is None:
        values = [pd.NA] * len(CANONICAL_INTERVALS)
    elif isinstance(steps, Sequence):
        values = list(steps)
    else:
        values = [steps] * len(CANONICAL_INTERVALS)
    return pd.DataFrame(
        {
            "steps": pd.array(values, dtype="Int64"),
            "date": pd.Timestamp(date),
            "interval": CANONICAL_INTERVALS,
        }
    )


def make_obs(*days: pd.DataFrame) -> pd.DataFrame:
    return pd.concat(days, ignore_index=True)


def write_activity_csv(obs: pd.DataFrame, path: Path) -> Path:
    obs[["steps", "date", "interval"]].to_csv(
        path, index=False, na_rep="NA", date_format="%Y-%m-%d"
    )
    return path


@pytest.fixture
def two_day_obs() -> pd.DataFrame:
    # Day 1: 100 intervals of 10 steps (total 1000), day 2 entirely missing.
    day1 = [10] * 100 + [0] * (len(CANONICAL_INTERVALS) - 100)
    return make_obs(make_day("2012-10-01", day1), make_day("2012-10-02", None))


@pytest.fixture
def three_day_obs() -> pd.DataFrame:
    return make_obs(
        make_day("2012-10-01", 1),
        make_day("2012-10-02", 2),
        make_day("2012-10-03", None),
    )


@pytest.fixture
def week_obs() -> pd.DataFrame:
    # Fri 2012-10-05 .. Mon 2012-10-08, weekend days walk more.
    return make_obs(
        make_day("2012-10-05", 4),
        make_day("2012-10-06", 10),
        make_day("2012-10-07", None),
        make_day("2012-10-08", 2),
    )


@pytest.fixture
def activity_csv(tmp_path: Path, week_obs: pd.DataFrame) -> Path:
    return write_activity_csv(week_obs, tmp_path / "activity.csv")
