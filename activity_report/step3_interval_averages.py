"""
Step 3: Average Steps per Interval

This module averages step counts for each 5-minute interval across all
days, ignoring missing observations, and finds the most active interval.

The output always has one row per canonical interval (288 rows); an interval
with no observed value gets a missing average rather than zero.
"""

from __future__ import annotations
from pathlib import Path
from typing import Dict, Tuple
import pandas as pd

from .config import Step3Config, NA_VALUES
from .intervals import CANONICAL_INTERVALS, interval_id_to_time
from .step1_load_activity import load_activity
from .utils import (
    ensure_dir,
    load_csv_safe,
    validate_required_columns,
    save_dataframe
)


def interval_averages(obs: pd.DataFrame) -> pd.DataFrame:
    """
    Mean step count per interval over present observations.

    Args:
        obs: Observation table

    Returns:
        DataFrame with interval and mean_steps (Float64), 288 rows
        sorted by interval ascending
    """
    means = (
        obs["steps"].astype("Float64")
        .groupby(obs["interval"])
        .mean()
        .reindex(CANONICAL_INTERVALS)
    )
    means.index.name = "interval"

    return means.rename("mean_steps").reset_index()


def load_interval_averages(csv_path: Path) -> pd.DataFrame:
    """
    Load interval averages written by Step 3.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If columns are missing or intervals are not the canonical grid
    """
    df = load_csv_safe(csv_path, dtype="str")
    validate_required_columns(df, ["interval", "mean_steps"], str(csv_path))

    df["interval"] = pd.to_numeric(df["interval"], errors="raise").astype("int64")
    means = df["mean_steps"]
    df["mean_steps"] = pd.to_numeric(means.mask(means.isin(NA_VALUES)), errors="raise").astype("Float64")

    if df["interval"].tolist() != CANONICAL_INTERVALS:
        raise ValueError(f"{csv_path} does not hold one row per canonical interval")

    return df[["interval", "mean_steps"]]


def peak_interval(averages: pd.DataFrame) -> Dict[str, object]:
    """
    Find the interval with the highest average step count.

    Args:
        averages: Output of interval_averages

    Returns:
        Dict with interval, label (h:mm) and mean_steps

    Raises:
        ValueError: If no interval has a defined average
    """
    defined = averages.dropna(subset=["mean_steps"])
    if defined.empty:
        raise ValueError("No interval has a defined average")

    row = defined.loc[defined["mean_steps"].astype(float).idxmax()]
    interval = int(row["interval"])

    return {
        "interval": interval,
        "label": interval_id_to_time(interval),
        "mean_steps": float(row["mean_steps"]),
    }


def peak_or_missing(averages: pd.DataFrame) -> Dict[str, object]:
    """Like peak_interval, but every field is NA when no interval has a defined average."""
    if averages["mean_steps"].notna().any():
        return peak_interval(averages)
    return {"interval": pd.NA, "label": pd.NA, "mean_steps": pd.NA}


def run_step3(cfg: Step3Config) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """
    Execute Step 3: Average steps per interval.

    This step:
    1. Loads the cleaned observations from Step 1
    2. Averages present step counts per interval across days
    3. Flags intervals without any observation
    4. Finds the peak-activity interval
    5. Exports interval averages and the peak interval

    Args:
        cfg: Step3Config with input/output paths

    Returns:
        Tuple of (interval_averages, peak)
    """
    print("\n" + "=" * 70)
    print("STEP 3: Average Steps per Interval")
    print("=" * 70)

    ensure_dir(cfg.outdir)

    print(f"\nLoading input: {cfg.input_csv}")
    obs = load_activity(cfg.input_csv)
    print(f"  Total rows: {len(obs):,}")

    print("\nAveraging steps per interval...")
    averages = interval_averages(obs)
    print(f"  Intervals: {len(averages):,}")

    undefined = averages[averages["mean_steps"].isna()]
    if len(undefined) > 0:
        print(f"  Warning: {len(undefined):,} interval(s) have no observations; their average is NA")

    peak = pd.DataFrame([peak_or_missing(averages)])
    row = peak.iloc[0]

    print("\n" + "-" * 70)
    print("Summary Statistics:")
    print("-" * 70)
    if pd.isna(row["interval"]):
        print("  Warning: no interval has observations; peak interval is NA")
    else:
        print(f"  Peak interval: {row['interval']} ({row['label']})")
        print(f"  Peak mean steps: {row['mean_steps']:.2f}")

    print("\nSaving outputs...")
    save_dataframe(averages, cfg.outdir / "interval_averages.csv")
    save_dataframe(peak, cfg.outdir / "peak_interval.csv")

    print("\n" + "=" * 70)
    print("STEP 3 COMPLETED")
    print("=" * 70)

    return averages, peak


def main():
    """
    Example usage of Step 3.

    This is a template for running Step 3. Modify the paths below to match
    your data location before running.
    """
    # =========================================================================
    # CONFIGURATION - Modify these paths for your environment
    # =========================================================================
    input_csv = Path("output/step1/activity_clean.csv")   # Cleaned data from Step 1
    outdir = Path("output/step3")                         # Output directory
    # =========================================================================

    config = Step3Config(input_csv=input_csv, outdir=outdir)

    averages, peak = run_step3(config)
    return averages, peak


if __name__ == "__main__":
    main()
