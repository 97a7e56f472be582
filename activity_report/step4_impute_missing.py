"""
Step 4: Missing Value Imputation

This module fills every missing step count with the average for the same
interval (from Step 3) and recomputes the daily totals.

Imputed values are joined on the interval code, not aligned by position,
and keep their fractional part even though measured counts are integers.
"""

from __future__ import annotations
from pathlib import Path
from typing import Tuple
import pandas as pd

from .config import Step4Config, REQUIRED_COLS
from .step1_load_activity import load_activity
from .step2_daily_totals import daily_totals, describe_daily_totals
from .step3_interval_averages import load_interval_averages
from .utils import (
    ensure_dir,
    save_dataframe,
    print_summary_stats
)


def check_missing_blocks(obs: pd.DataFrame) -> pd.DataFrame:
    """
    Find days whose missing values do not form a whole-day block.

    Args:
        obs: Observation table

    Returns:
        DataFrame with date, n_missing, n_intervals for partially missing days
    """
    daily = daily_totals(obs)
    partial = (daily["n_missing"] > 0) & (daily["n_missing"] < daily["n_intervals"])
    return daily.loc[partial, ["date", "n_missing", "n_intervals"]].reset_index(drop=True)


def impute_missing(obs: pd.DataFrame, averages: pd.DataFrame) -> pd.DataFrame:
    """
    Replace missing step counts with the average of their interval.

    The input frame is not modified. Rows whose interval has no defined
    average stay missing.

    Args:
        obs: Observation table
        averages: Interval averages with interval and mean_steps

    Returns:
        Copy of obs with Float64 steps and a boolean imputed column

    Raises:
        ValueError: If averages has more than one row for an interval
    """
    if averages["interval"].duplicated().any():
        raise ValueError("Interval averages contain duplicate interval codes")

    merged = obs.merge(
        averages[["interval", "mean_steps"]],
        on="interval",
        how="left",
        validate="many_to_one"
    )
    merged.index = obs.index

    steps = merged["steps"].astype("Float64")
    is_missing = steps.isna()

    imputed = obs.copy()
    imputed["steps"] = steps.fillna(merged["mean_steps"].astype("Float64"))
    imputed["imputed"] = (is_missing & imputed["steps"].notna()).astype(bool)

    return imputed


def compare_daily_totals(before: pd.DataFrame, after: pd.DataFrame) -> pd.DataFrame:
    """
    Compare mean and median daily totals before and after imputation.

    Args:
        before: daily_totals of the original observations
        after: daily_totals of the imputed observations

    Returns:
        DataFrame with statistic, before, after, difference
    """
    stats_before = describe_daily_totals(before)
    stats_after = describe_daily_totals(after)

    rows = []
    for stat in ["mean", "median"]:
        rows.append({
            "statistic": stat,
            "before": stats_before[stat],
            "after": stats_after[stat],
            "difference": stats_after[stat] - stats_before[stat]
        })

    return pd.DataFrame(rows)


def run_step4(cfg: Step4Config) -> Tuple[pd.DataFrame, pd.DataFrame, pd.DataFrame]:
    """
    Execute Step 4: Impute missing step counts.

    This step:
    1. Loads the cleaned observations from Step 1
    2. Loads the interval averages from Step 3
    3. Reports days with partial (non whole-day) gaps
    4. Fills missing steps with the matching interval average
    5. Recomputes daily totals on the completed data
    6. Compares mean/median daily totals before and after

    Args:
        cfg: Step4Config with input/output paths

    Returns:
        Tuple of (imputed_observations, daily_totals_imputed, comparison)
    """
    print("\n" + "=" * 70)
    print("STEP 4: Missing Value Imputation")
    print("=" * 70)

    ensure_dir(cfg.outdir)

    print(f"\nLoading observations: {cfg.activity_csv}")
    obs = load_activity(cfg.activity_csv)
    print(f"  Total rows: {len(obs):,}")

    print(f"Loading interval averages: {cfg.averages_csv}")
    averages = load_interval_averages(cfg.averages_csv)
    print(f"  Intervals: {len(averages):,}")

    partial = check_missing_blocks(obs)
    if len(partial) > 0:
        print(f"  Warning: {len(partial):,} day(s) have partial gaps; imputing them by interval code")
        for _, row in partial.iterrows():
            print(f"    {row['date']:%Y-%m-%d}: {row['n_missing']} / {row['n_intervals']} missing")

    print("\nImputing missing steps...")
    imputed = impute_missing(obs, averages)
    print_summary_stats("Imputed observations", len(imputed), int(imputed["imputed"].sum()))

    still_missing = int(imputed["steps"].isna().sum())
    if still_missing > 0:
        print(f"  Warning: {still_missing:,} observation(s) remain missing (interval average undefined)")

    print("\nRecomputing daily totals...")
    before = daily_totals(obs)
    after = daily_totals(imputed)
    comparison = compare_daily_totals(before, after)

    print("\n" + "-" * 70)
    print("Daily Totals Before / After Imputation:")
    print("-" * 70)
    for _, row in comparison.iterrows():
        print(f"  {row['statistic']:6s}: {row['before']:12,.2f} -> {row['after']:12,.2f} ({row['difference']:+,.2f})")

    print("\nSaving outputs...")
    save_dataframe(imputed[REQUIRED_COLS + ["imputed"]], cfg.outdir / "activity_imputed.csv")
    save_dataframe(after, cfg.outdir / "daily_totals_imputed.csv")
    save_dataframe(comparison, cfg.outdir / "imputation_comparison.csv")

    print("\n" + "=" * 70)
    print("STEP 4 COMPLETED")
    print("=" * 70)

    return imputed, after, comparison


def main():
    """
    Example usage of Step 4.

    This is a template for running Step 4. Modify the paths below to match
    your data location before running.
    """
    # =========================================================================
    # CONFIGURATION - Modify these paths for your environment
    # =========================================================================
    activity_csv = Path("output/step1/activity_clean.csv")     # Cleaned data from Step 1
    averages_csv = Path("output/step3/interval_averages.csv")  # Averages from Step 3
    outdir = Path("output/step4")                              # Output directory
    # =========================================================================

    config = Step4Config(
        activity_csv=activity_csv,
        averages_csv=averages_csv,
        outdir=outdir
    )

    imputed, daily, comparison = run_step4(config)
    return imputed, daily, comparison


if __name__ == "__main__":
    main()
