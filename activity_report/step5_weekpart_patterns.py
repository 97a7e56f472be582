"""
Step 5: Weekday vs Weekend Activity Patterns

This module labels each imputed observation as weekday or weekend and
averages steps per interval separately for the two kinds of day.
"""

from __future__ import annotations
from pathlib import Path
import pandas as pd

from .config import Step5Config, WEEKEND_DAYS, DAY_KINDS
from .intervals import CANONICAL_INTERVALS
from .step1_load_activity import load_activity
from .utils import (
    ensure_dir,
    save_dataframe
)


def classify_day_kind(dates: pd.Series) -> pd.Series:
    """
    Label dates falling on Saturday or Sunday as "weekend", others as "weekday".

    Args:
        dates: datetime64 Series

    Returns:
        Categorical Series with categories ["weekday", "weekend"]
    """
    is_weekend = dates.dt.day_name().isin(WEEKEND_DAYS)
    labels = is_weekend.map({True: "weekend", False: "weekday"})
    return pd.Series(
        pd.Categorical(labels, categories=DAY_KINDS),
        index=dates.index,
        name="day_kind"
    )


def add_day_kind(obs: pd.DataFrame) -> pd.DataFrame:
    """Return a copy of obs with a day_kind column."""
    out = obs.copy()
    out["day_kind"] = classify_day_kind(out["date"])
    return out


def weekpart_interval_averages(imputed: pd.DataFrame) -> pd.DataFrame:
    """
    Mean steps per (day_kind, interval).

    Each day kind gets all 288 intervals, with missing means where that
    kind of day is absent from the data.

    Args:
        imputed: Imputed observations (day_kind is derived if absent)

    Returns:
        DataFrame with day_kind, interval, mean_steps; 576 rows ordered by
        day kind then interval
    """
    if "day_kind" not in imputed.columns:
        imputed = add_day_kind(imputed)

    grid = pd.MultiIndex.from_product([DAY_KINDS, CANONICAL_INTERVALS], names=["day_kind", "interval"])

    means = (
        imputed["steps"].astype("Float64")
        .groupby([imputed["day_kind"].astype(str), imputed["interval"]])
        .mean()
        .reindex(grid)
    )

    out = means.rename("mean_steps").reset_index()
    out["day_kind"] = pd.Categorical(out["day_kind"], categories=DAY_KINDS)
    return out


def run_step5(cfg: Step5Config) -> pd.DataFrame:
    """
    Execute Step 5: Compare weekday and weekend activity patterns.

    This step:
    1. Loads the imputed observations from Step 4
    2. Classifies each date as weekday or weekend
    3. Averages steps per interval for each day kind
    4. Exports the two 288-interval series

    Args:
        cfg: Step5Config with input/output paths

    Returns:
        DataFrame with day_kind, interval, mean_steps
    """
    print("\n" + "=" * 70)
    print("STEP 5: Weekday vs Weekend Activity Patterns")
    print("=" * 70)

    ensure_dir(cfg.outdir)

    print(f"\nLoading input: {cfg.input_csv}")
    imputed = load_activity(cfg.input_csv, allow_fractional=True)
    print(f"  Total rows: {len(imputed):,}")

    print("\nClassifying days...")
    imputed = add_day_kind(imputed)
    days = imputed.drop_duplicates("date")["day_kind"].value_counts()
    for kind in DAY_KINDS:
        print(f"  {kind.capitalize()} days: {int(days.get(kind, 0)):,}")

    print("\nAveraging steps per interval and day kind...")
    weekpart = weekpart_interval_averages(imputed)

    print("\n" + "-" * 70)
    print("Summary Statistics:")
    print("-" * 70)
    for kind in DAY_KINDS:
        series = weekpart.loc[weekpart["day_kind"] == kind, "mean_steps"].dropna().astype(float)
        if series.empty:
            print(f"  {kind.capitalize()}: no data")
            continue
        print(f"  {kind.capitalize()}: mean {series.mean():.2f} steps/interval, max {series.max():.2f}")

    print("\nSaving outputs...")
    save_dataframe(weekpart, cfg.outdir / "weekpart_interval_averages.csv")

    print("\n" + "=" * 70)
    print("STEP 5 COMPLETED")
    print("=" * 70)

    return weekpart


def main():
    """
    Example usage of Step 5.

    This is a template for running Step 5. Modify the paths below to match
    your data location before running.
    """
    # =========================================================================
    # CONFIGURATION - Modify these paths for your environment
    # =========================================================================
    input_csv = Path("output/step4/activity_imputed.csv")   # Imputed data from Step 4
    outdir = Path("output/step5")                           # Output directory
    # =========================================================================

    config = Step5Config(input_csv=input_csv, outdir=outdir)

    weekpart = run_step5(config)
    return weekpart


if __name__ == "__main__":
    main()
