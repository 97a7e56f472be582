from __future__ import annotations

import zipfile
from pathlib import Path

import pandas as pd
import pytest

from activity_report.config import Step1Config
from activity_report.step1_load_activity import (
    load_activity,
    missing_summary,
    parse_steps,
    run_step1,
)
from activity_report.utils import ensure_input_csv

from conftest import make_day, make_obs, write_activity_csv


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


def test_load_activity_types_and_order(tmp_path: Path) -> None:
    csv = _write(
        tmp_path / "a.csv",
        '"steps","date","interval"\n'
        "NA,2012-10-02,5\n"
        "12,2012-10-01,0\n"
        ",2012-10-01,2355\n",
    )
    df = load_activity(csv)

    assert len(df) == 3
    assert str(df["steps"].dtype) == "Int64"
    assert pd.api.types.is_datetime64_any_dtype(df["date"])
    assert df["interval"].tolist() == [5, 0, 2355]
    assert df["steps"].isna().tolist() == [True, False, True]
    assert df.loc[1, "steps"] == 12
    assert df.loc[0, "date"] == pd.Timestamp("2012-10-02")


def test_load_activity_header_is_case_insensitive(tmp_path: Path) -> None:
    csv = _write(tmp_path / "a.csv", "Steps, Date ,INTERVAL\n3,2012-10-01,0\n")
    df = load_activity(csv)
    assert df.loc[0, "steps"] == 3


def test_load_activity_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_activity(tmp_path / "nope.csv")


def test_load_activity_missing_column(tmp_path: Path) -> None:
    csv = _write(tmp_path / "a.csv", "steps,date\n1,2012-10-01\n")
    with pytest.raises(ValueError, match="missing required columns"):
        load_activity(csv)


@pytest.mark.parametrize(
    "bad_date", ["10/01/2012", "2012-13-01", "yesterday", "", "2012-10-1", "2012-1-01"]
)
def test_load_activity_bad_date_is_fatal(tmp_path: Path, bad_date: str) -> None:
    csv = _write(tmp_path / "a.csv", f"steps,date,interval\n1,2012-10-01,0\n2,{bad_date},5\n")
    with pytest.raises(ValueError, match="Unparsable dates"):
        load_activity(csv)


def test_load_activity_non_numeric_steps_is_fatal(tmp_path: Path) -> None:
    csv = _write(tmp_path / "a.csv", "steps,date,interval\nabc,2012-10-01,0\n")
    with pytest.raises(ValueError, match="row 1: 'abc'"):
        load_activity(csv)


@pytest.mark.parametrize("bad_steps", ["inf", "-inf", "1e30", "-5"])
def test_load_activity_out_of_range_steps_is_fatal(tmp_path: Path, bad_steps: str) -> None:
    csv = _write(tmp_path / "a.csv", f"steps,date,interval\n3,2012-10-01,0\n{bad_steps},2012-10-01,5\n")
    with pytest.raises(ValueError, match="Negative, infinite or oversized"):
        load_activity(csv)
    with pytest.raises(ValueError, match="row 2"):
        load_activity(csv, allow_fractional=True)


def test_load_activity_fractional_steps(tmp_path: Path) -> None:
    csv = _write(tmp_path / "a.csv", "steps,date,interval\n1.5,2012-10-01,0\nNA,2012-10-01,5\n")
    with pytest.raises(ValueError, match="Non-integer steps"):
        load_activity(csv)

    df = load_activity(csv, allow_fractional=True)
    assert str(df["steps"].dtype) == "Float64"
    assert df.loc[0, "steps"] == 1.5
    assert pd.isna(df.loc[1, "steps"])


@pytest.mark.parametrize("bad_interval", ["2360", "803", "abc", "", "5.5", "1e3", "805.0"])
def test_load_activity_bad_interval_is_fatal(tmp_path: Path, bad_interval: str) -> None:
    csv = _write(tmp_path / "a.csv", f"steps,date,interval\n1,2012-10-01,{bad_interval}\n")
    with pytest.raises(ValueError, match="interval"):
        load_activity(csv)


def test_parse_steps_keeps_missing_markers() -> None:
    out = parse_steps(pd.Series(["1", "NA", None, " 7 "]))
    assert out.isna().tolist() == [False, True, True, False]
    assert out.iloc[3] == 7


def test_missing_summary(two_day_obs: pd.DataFrame) -> None:
    row = missing_summary(two_day_obs).iloc[0]
    assert row["n_observations"] == 576
    assert row["n_missing"] == 288
    assert row["missing_rate"] == pytest.approx(0.5)
    assert row["n_days"] == 2
    assert row["n_fully_missing_days"] == 1


def test_missing_summary_partial_day_is_not_fully_missing() -> None:
    steps = [pd.NA] + [1] * 287
    obs = make_obs(make_day("2012-10-01", steps))
    row = missing_summary(obs).iloc[0]
    assert row["n_missing"] == 1
    assert row["n_fully_missing_days"] == 0


def test_ensure_input_csv_is_idempotent(tmp_path: Path) -> None:
    csv = _write(tmp_path / "activity.csv", "steps,date,interval\n")
    assert ensure_input_csv(csv, tmp_path / "missing.zip") == csv
    assert csv.read_text(encoding="utf-8") == "steps,date,interval\n"


def test_ensure_input_csv_extracts_from_zip(tmp_path: Path) -> None:
    archive = tmp_path / "activity.zip"
    with zipfile.ZipFile(archive, "w") as zf:
        zf.writestr("activity.csv", "steps,date,interval\n5,2012-10-01,0\n")

    csv = ensure_input_csv(tmp_path / "data" / "activity.csv", archive)
    assert csv.exists()
    assert load_activity(csv).loc[0, "steps"] == 5


def test_ensure_input_csv_without_sources(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        ensure_input_csv(tmp_path / "activity.csv")

    archive = tmp_path / "other.zip"
    with zipfile.ZipFile(archive, "w") as zf:
        zf.writestr("readme.txt", "nothing here")
    with pytest.raises(FileNotFoundError, match="not found in archive"):
        ensure_input_csv(tmp_path / "activity.csv", archive)


def test_run_step1_writes_outputs(tmp_path: Path, two_day_obs: pd.DataFrame) -> None:
    csv = write_activity_csv(two_day_obs, tmp_path / "activity.csv")
    obs, summary = run_step1(Step1Config(input_csv=csv, outdir=tmp_path / "out"))

    assert len(obs) == 576
    assert summary.loc[0, "n_fully_missing_days"] == 1

    clean = load_activity(tmp_path / "out" / "activity_clean.csv")
    assert clean["steps"].isna().sum() == 288
    assert clean["interval"].tolist() == obs["interval"].tolist()
    assert (tmp_path / "out" / "missing_summary.csv").exists()
