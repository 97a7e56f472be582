"""
Step 2: Daily Step Totals

This module sums step counts per date.

A day containing any missing interval has a missing total: partial sums
are never reported, so whole-day gaps stay visible. The number of missing
observations per day is tracked alongside every total.
"""

from __future__ import annotations
from pathlib import Path
from typing import Dict, Tuple
import pandas as pd

from .config import Step2Config, DATE_FORMAT, NA_VALUES
from .step1_load_activity import load_activity
from .utils import (
    ensure_dir,
    load_csv_safe,
    validate_required_columns,
    save_dataframe,
    print_summary_stats
)


def daily_totals(obs: pd.DataFrame) -> pd.DataFrame:
    """
    Sum steps per date, reporting a missing total for incomplete days.

    Args:
        obs: Observation (or imputed observation) table

    Returns:
        DataFrame with date, total_steps, n_missing, n_intervals,
        sorted by date ascending
    """
    daily = (
        obs.assign(is_missing=obs["steps"].isna())
        .groupby("date", sort=True)
        .agg(
            total_steps=("steps", "sum"),
            n_missing=("is_missing", "sum"),
            n_intervals=("interval", "size"),
        )
        .reset_index()
    )

    daily["total_steps"] = daily["total_steps"].astype(obs["steps"].dtype)
    daily.loc[daily["n_missing"] > 0, "total_steps"] = pd.NA
    daily["n_missing"] = daily["n_missing"].astype(int)

    return daily


def missing_per_day(obs: pd.DataFrame) -> pd.DataFrame:
    """Count missing step observations per date."""
    return daily_totals(obs)[["date", "n_missing"]]


def fully_missing_days(daily: pd.DataFrame) -> pd.DataFrame:
    """Select the days where every interval is missing."""
    mask = (daily["n_missing"] == daily["n_intervals"]) & (daily["n_intervals"] > 0)
    return daily[mask].reset_index(drop=True)


def load_daily_totals(csv_path: Path) -> pd.DataFrame:
    """
    Load daily totals written by Step 2 or Step 4.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If required columns are missing
    """
    df = load_csv_safe(csv_path, dtype="str")
    validate_required_columns(df, ["date", "total_steps", "n_missing", "n_intervals"], str(csv_path))

    totals = df["total_steps"]
    df["date"] = pd.to_datetime(df["date"], format=DATE_FORMAT)
    df["total_steps"] = pd.to_numeric(totals.mask(totals.isin(NA_VALUES)), errors="raise").astype("Float64")
    df["n_missing"] = pd.to_numeric(df["n_missing"], errors="raise").astype(int)
    df["n_intervals"] = pd.to_numeric(df["n_intervals"], errors="raise").astype(int)

    return df


def describe_daily_totals(daily: pd.DataFrame) -> Dict[str, float]:
    """
    Mean and median of the defined daily totals.

    Days with a missing total are ignored. Mean and median are NaN when
    no day has a defined total.

    Args:
        daily: Output of daily_totals

    Returns:
        Dict with mean, median, n_days, n_days_with_total
    """
    totals = daily["total_steps"].dropna().astype(float)

    return {
        "mean": float(totals.mean()) if len(totals) else float("nan"),
        "median": float(totals.median()) if len(totals) else float("nan"),
        "n_days": int(len(daily)),
        "n_days_with_total": int(len(totals)),
    }


def run_step2(cfg: Step2Config) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """
    Execute Step 2: Compute daily step totals.

    This step:
    1. Loads the cleaned observations from Step 1
    2. Sums steps per date (missing total for incomplete days)
    3. Identifies days without any observation
    4. Computes mean and median of the daily totals
    5. Exports daily totals and their summary

    Args:
        cfg: Step2Config with input/output paths

    Returns:
        Tuple of (daily_totals, summary)
    """
    print("\n" + "=" * 70)
    print("STEP 2: Daily Step Totals")
    print("=" * 70)

    ensure_dir(cfg.outdir)

    print(f"\nLoading input: {cfg.input_csv}")
    obs = load_activity(cfg.input_csv)
    print(f"  Total rows: {len(obs):,}")

    print("\nSumming steps per day...")
    daily = daily_totals(obs)
    empty_days = fully_missing_days(daily)
    stats = describe_daily_totals(daily)

    summary = pd.DataFrame([{
        "mean_daily_steps": stats["mean"],
        "median_daily_steps": stats["median"],
        "n_days": stats["n_days"],
        "n_days_with_total": stats["n_days_with_total"],
        "n_fully_missing_days": len(empty_days)
    }])

    print("\n" + "-" * 70)
    print("Summary Statistics:")
    print("-" * 70)
    print_summary_stats("Days with a total", stats["n_days"], stats["n_days_with_total"])
    print_summary_stats("Days without observations", stats["n_days"], len(empty_days))
    print(f"  Mean daily steps: {stats['mean']:,.2f}")
    print(f"  Median daily steps: {stats['median']:,.2f}")

    partial = daily[(daily["n_missing"] > 0) & (daily["n_missing"] < daily["n_intervals"])]
    if len(partial) > 0:
        print(f"  Warning: {len(partial):,} day(s) are only partially missing; their totals are NA")

    print("\nSaving outputs...")
    save_dataframe(daily, cfg.outdir / "daily_totals.csv")
    save_dataframe(summary, cfg.outdir / "daily_totals_summary.csv")

    print("\n" + "=" * 70)
    print("STEP 2 COMPLETED")
    print("=" * 70)

    return daily, summary


def main():
    """
    Example usage of Step 2.

    This is a template for running Step 2. Modify the paths below to match
    your data location before running.
    """
    # =========================================================================
    # CONFIGURATION - Modify these paths for your environment
    # =========================================================================
    input_csv = Path("output/step1/activity_clean.csv")   # Cleaned data from Step 1
    outdir = Path("output/step2")                         # Output directory
    # =========================================================================

    config = Step2Config(input_csv=input_csv, outdir=outdir)

    daily, summary = run_step2(config)
    return daily, summary


if __name__ == "__main__":
    main()
