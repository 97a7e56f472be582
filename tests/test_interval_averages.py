from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest

from activity_report.config import Step3Config
from activity_report.intervals import CANONICAL_INTERVALS
from activity_report.step3_interval_averages import (
    interval_averages,
    load_interval_averages,
    peak_interval,
    peak_or_missing,
    run_step3,
)

from conftest import make_day, make_obs, write_activity_csv


def test_interval_averages_shape(week_obs: pd.DataFrame) -> None:
    avg = interval_averages(week_obs)
    assert len(avg) == 288
    assert avg["interval"].tolist() == CANONICAL_INTERVALS
    assert avg["interval"].is_unique


def test_interval_averages_ignore_missing(three_day_obs: pd.DataFrame) -> None:
    avg = interval_averages(three_day_obs)
    # Mean of 1 and 2; the missing day is excluded, not counted as zero.
    assert avg["mean_steps"].astype(float).tolist() == [1.5] * 288


def test_interval_averages_undefined_interval_is_missing() -> None:
    day1 = [pd.NA] + [4] * 287
    obs = make_obs(make_day("2012-10-01", day1), make_day("2012-10-02", None))
    avg = interval_averages(obs)

    assert pd.isna(avg.loc[0, "mean_steps"])
    assert avg.loc[1, "mean_steps"] == 4.0
    assert len(avg) == 288


def test_interval_averages_partial_input_is_reindexed() -> None:
    obs = pd.DataFrame(
        {
            "steps": pd.array([3, 5], dtype="Int64"),
            "date": pd.Timestamp("2012-10-01"),
            "interval": [805, 805],
        }
    )
    avg = interval_averages(obs)
    assert len(avg) == 288
    assert avg.set_index("interval").loc[805, "mean_steps"] == 4.0
    assert avg["mean_steps"].isna().sum() == 287


def test_peak_interval() -> None:
    steps = [0] * 288
    steps[CANONICAL_INTERVALS.index(835)] = 200
    avg = interval_averages(make_obs(make_day("2012-10-01", steps)))

    peak = peak_interval(avg)
    assert peak["interval"] == 835
    assert peak["label"] == "8:35"
    assert peak["mean_steps"] == pytest.approx(200.0)


def test_peak_interval_all_missing() -> None:
    avg = interval_averages(make_obs(make_day("2012-10-01", None)))
    with pytest.raises(ValueError):
        peak_interval(avg)


def test_run_step3_round_trip(tmp_path: Path, three_day_obs: pd.DataFrame) -> None:
    csv = write_activity_csv(three_day_obs, tmp_path / "activity.csv")
    averages, peak = run_step3(Step3Config(input_csv=csv, outdir=tmp_path / "out"))

    assert len(averages) == 288
    assert peak.loc[0, "interval"] == 0

    reloaded = load_interval_averages(tmp_path / "out" / "interval_averages.csv")
    assert reloaded["interval"].tolist() == CANONICAL_INTERVALS
    assert reloaded["mean_steps"].astype(float).tolist() == [1.5] * 288


def test_load_interval_averages_rejects_incomplete_grid(tmp_path: Path) -> None:
    csv = tmp_path / "avg.csv"
    csv.write_text("interval,mean_steps\n0,1.0\n5,NA\n", encoding="utf-8")
    with pytest.raises(ValueError, match="canonical interval"):
        load_interval_averages(csv)


def test_peak_or_missing() -> None:
    all_missing = interval_averages(make_obs(make_day("2012-10-01", None)))
    peak = peak_or_missing(all_missing)
    assert all(pd.isna(v) for v in peak.values())

    observed = interval_averages(make_obs(make_day("2012-10-01", 3)))
    assert peak_or_missing(observed) == peak_interval(observed)
