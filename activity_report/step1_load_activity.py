"""
Step 1: Load Activity Data

This module loads the raw activity CSV (steps, date, interval), coerces
column types and reports how much of the data is missing.

Parsing is strict:
    - steps: integer or missing (empty / NA marker)
    - date: YYYY-MM-DD
    - interval: one of the 288 canonical hhmm codes
Any row violating these rules aborts the run.
"""

from __future__ import annotations
from pathlib import Path
from typing import Tuple
import numpy as np
import pandas as pd

from .config import Step1Config, REQUIRED_COLS, DATE_FORMAT, NA_VALUES, INTERVALS_PER_DAY
from .intervals import CANONICAL_INTERVALS
from .utils import (
    ensure_dir,
    ensure_input_csv,
    load_csv_safe,
    validate_required_columns,
    describe_bad_rows,
    save_dataframe,
    print_summary_stats
)


def parse_steps(steps: pd.Series, allow_fractional: bool = False) -> pd.Series:
    """
    Parse the steps column into a nullable numeric Series.

    Args:
        steps: Raw steps strings
        allow_fractional: If True, accept non-integer values (imputed data)

    Returns:
        Int64 Series (Float64 if allow_fractional) with pd.NA for missing values

    Raises:
        ValueError: If a present value is not numeric, negative, infinite,
            too large for int64, or not integral when
            allow_fractional is False
    """
    s_str = steps.astype(str).str.strip()
    is_missing = steps.isna() | s_str.isin(NA_VALUES)

    num = pd.to_numeric(s_str.mask(is_missing), errors="coerce").astype(float)
    bad = num.isna() & ~is_missing
    if bad.any():
        raise ValueError(f"Non-numeric steps values: {describe_bad_rows(steps, bad)}")

    out_of_range = ~is_missing & (~np.isfinite(num) | (num < 0) | (num >= 2.0 ** 63))
    if out_of_range.any():
        raise ValueError(f"Negative, infinite or oversized steps values: {describe_bad_rows(steps, out_of_range)}")

    num = num.astype("Float64")
    if allow_fractional:
        return num

    fractional = (num != num.round()).fillna(False)
    if fractional.any():
        raise ValueError(f"Non-integer steps values: {describe_bad_rows(steps, fractional)}")

    return num.astype("Int64")


def parse_dates(dates: pd.Series) -> pd.Series:
    """
    Parse the date column with the fixed YYYY-MM-DD format.

    Raises:
        ValueError: If any date is missing or does not match the format
    """
    s_str = dates.astype(str).str.strip()
    parsed = pd.to_datetime(s_str, format=DATE_FORMAT, errors="coerce")

    # to_datetime accepts unpadded month/day
    bad = parsed.isna() | ~s_str.str.fullmatch(r"\d{4}-\d{2}-\d{2}").astype(bool)
    if bad.any():
        raise ValueError(f"Unparsable dates (expected {DATE_FORMAT}): {describe_bad_rows(dates, bad)}")

    return parsed


def parse_intervals(intervals: pd.Series) -> pd.Series:
    """
    Parse the interval column and check every code is canonical.

    Raises:
        ValueError: If any interval is missing, non-integer or not a 5-minute slot code
    """
    s_str = intervals.astype(str).str.strip()
    num = pd.to_numeric(s_str, errors="coerce")

    bad = num.isna() | ~s_str.str.fullmatch(r"\d+").astype(bool)
    if bad.any():
        raise ValueError(f"Non-integer interval values: {describe_bad_rows(intervals, bad)}")

    num = num.astype(np.int64)
    not_canonical = ~num.isin(CANONICAL_INTERVALS)
    if not_canonical.any():
        raise ValueError(f"Non-canonical interval codes: {describe_bad_rows(intervals, not_canonical)}")

    return num


def load_activity(csv_path: Path, allow_fractional: bool = False) -> pd.DataFrame:
    """
    Load and type-coerce an activity CSV.

    Row order and row count of the file are preserved. Extra columns in the
    file (e.g. the imputed flag written by Step 4) are carried through.

    Args:
        csv_path: Path to CSV with columns steps, date, interval
        allow_fractional: If True, steps may be non-integer (imputed data)

    Returns:
        DataFrame with steps (Int64 or Float64), date (datetime64), interval (int64)

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If required columns are missing or any row is malformed
    """
    df = load_csv_safe(csv_path, dtype="str")
    validate_required_columns(df, REQUIRED_COLS, str(csv_path))

    df["steps"] = parse_steps(df["steps"], allow_fractional)
    df["date"] = parse_dates(df["date"])
    df["interval"] = parse_intervals(df["interval"])

    if "imputed" in df.columns:
        df["imputed"] = df["imputed"].astype(str).str.lower().isin(["true", "1"])

    return df


def missing_summary(obs: pd.DataFrame) -> pd.DataFrame:
    """
    Summarize missing step observations.

    Args:
        obs: Observation table from load_activity

    Returns:
        Single-row DataFrame with n_observations, n_missing, missing_rate,
        n_days, n_fully_missing_days
    """
    is_na = obs["steps"].isna()
    n_obs = len(obs)
    n_missing = int(is_na.sum())

    per_day = is_na.groupby(obs["date"]).agg(["sum", "size"])
    n_fully_missing = int((per_day["sum"] == per_day["size"]).sum())

    return pd.DataFrame([{
        "n_observations": n_obs,
        "n_missing": n_missing,
        "missing_rate": n_missing / n_obs if n_obs > 0 else 0.0,
        "n_days": len(per_day),
        "n_fully_missing_days": n_fully_missing
    }])


def run_step1(cfg: Step1Config) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """
    Execute Step 1: Load and validate activity data.

    This step:
    1. Makes sure the input CSV exists (extracting it from the zip if needed)
    2. Loads the CSV and coerces column types
    3. Counts missing observations and fully-missing days
    4. Exports the cleaned observations and the missingness summary

    Args:
        cfg: Step1Config with input/output paths

    Returns:
        Tuple of (observations, missing_summary)
    """
    print("\n" + "=" * 70)
    print("STEP 1: Load Activity Data")
    print("=" * 70)

    ensure_dir(cfg.outdir)

    print(f"\nLoading input: {cfg.input_csv}")
    ensure_input_csv(cfg.input_csv, cfg.input_zip)
    obs = load_activity(cfg.input_csv)
    print(f"  Total rows: {len(obs):,}")
    print(f"  Dates: {obs['date'].min():%Y-%m-%d} .. {obs['date'].max():%Y-%m-%d}")

    rows_per_day = obs.groupby("date").size()
    irregular = rows_per_day[rows_per_day != INTERVALS_PER_DAY]
    if len(irregular) > 0:
        print(f"  Warning: {len(irregular):,} day(s) do not have {INTERVALS_PER_DAY} intervals")

    print("\nCounting missing observations...")
    summary = missing_summary(obs)
    row = summary.iloc[0]

    print("\n" + "-" * 70)
    print("Summary Statistics:")
    print("-" * 70)
    print_summary_stats("Missing observations", int(row["n_observations"]), int(row["n_missing"]))
    print_summary_stats("Fully missing days", int(row["n_days"]), int(row["n_fully_missing_days"]))

    print("\nSaving outputs...")
    save_dataframe(obs[REQUIRED_COLS], cfg.outdir / "activity_clean.csv")
    save_dataframe(summary, cfg.outdir / "missing_summary.csv")

    print("\n" + "=" * 70)
    print("STEP 1 COMPLETED")
    print("=" * 70)

    return obs, summary


def main():
    """
    Example usage of Step 1.

    This is a template for running Step 1. Modify the paths below to match
    your data location before running.
    """
    # =========================================================================
    # CONFIGURATION - Modify these paths for your environment
    # =========================================================================
    input_csv = Path("data/activity.csv")    # Input: 5-minute step counts
    input_zip = Path("data/activity.zip")    # Archive to extract from if CSV is absent
    outdir = Path("output/step1")            # Output directory
    # =========================================================================

    config = Step1Config(
        input_csv=input_csv,
        outdir=outdir,
        input_zip=input_zip
    )

    obs, summary = run_step1(config)
    return obs, summary


if __name__ == "__main__":
    main()
