"""
Step 6: Activity Visualization and Summary

This module renders the report figures from the tables produced by
Steps 1-5 and collects the headline statistics in one table:
    - histogram of daily totals before imputation
    - histogram of daily totals after imputation
    - time series of average steps per interval
    - weekday vs weekend time series panels
"""

from __future__ import annotations
from pathlib import Path
from typing import List, Tuple, Optional
import numpy as np
import pandas as pd

try:
    import matplotlib.pyplot as plt
    MATPLOTLIB_AVAILABLE = True
except ImportError:
    MATPLOTLIB_AVAILABLE = False

from .config import VisualizationConfig, DAY_KINDS, NA_VALUES
from .intervals import interval_labels
from .step1_load_activity import load_activity, missing_summary
from .step2_daily_totals import load_daily_totals, describe_daily_totals, fully_missing_days
from .step3_interval_averages import load_interval_averages, peak_or_missing
from .utils import (
    ensure_dir,
    load_csv_safe,
    validate_required_columns,
    save_dataframe
)


def set_academic_mpl_style() -> None:
    """Simple paper-friendly matplotlib styling."""
    if not MATPLOTLIB_AVAILABLE:
        return

    plt.rcParams.update({
        "font.size": 11,
        "axes.titlesize": 12,
        "axes.labelsize": 11,
        "xtick.labelsize": 10,
        "ytick.labelsize": 10,
        "legend.fontsize": 10,

        "axes.linewidth": 1.0,
        "lines.linewidth": 1.5,
        "xtick.major.width": 1.0,
        "ytick.major.width": 1.0,

        "savefig.dpi": 150,
        "figure.dpi": 100,
    })


def _interval_ticks(intervals: np.ndarray, every: int = 36) -> Tuple[np.ndarray, List[str]]:
    """Tick positions (row numbers) and h:mm labels, one every 3 hours by default."""
    positions = np.arange(0, len(intervals), every)
    return positions, interval_labels(intervals[positions])


def save_histogram(
    data: np.ndarray,
    bins: int,
    xlabel: str,
    title: str,
    out_path: Path,
    line_specs: Optional[List[Tuple[float, str, str]]] = None,
    alpha: float = 0.6
) -> Optional[Path]:
    """
    Histogram with frequency (count) on y-axis.

    Args:
        data: Data to plot (NaN values are dropped)
        bins: Number of histogram bins
        xlabel: X-axis label
        title: Figure title
        out_path: PNG output path
        line_specs: List of (x, linestyle, label) for vertical reference lines
        alpha: Transparency for histogram bars

    Returns:
        Path of the saved figure, or None if nothing was drawn
    """
    if not MATPLOTLIB_AVAILABLE:
        print("Warning: matplotlib not available. Skipping visualization.")
        return None

    data = data[~np.isnan(data)]
    if data.size == 0:
        print(f"[warn] no data for plot: {out_path.name}")
        return None

    set_academic_mpl_style()

    fig, ax = plt.subplots(figsize=(6.8, 4.2))
    ax.hist(data, bins=bins, density=False, alpha=alpha, edgecolor="black", linewidth=0.6)

    if line_specs:
        for x, ls, lab in line_specs:
            ax.axvline(x, linestyle=ls, linewidth=2.0, label=lab)
        ax.legend(frameon=False)

    ax.set_title(title)
    ax.set_xlabel(xlabel)
    ax.set_ylabel("Frequency")
    fig.tight_layout()

    ensure_dir(out_path.parent)
    fig.savefig(out_path)
    plt.close(fig)

    print(f"[ok] saved: {out_path}")
    return out_path


def save_time_series(averages: pd.DataFrame, title: str, out_path: Path) -> Optional[Path]:
    """
    Line plot of mean steps per interval with h:mm tick labels.

    Args:
        averages: DataFrame with interval and mean_steps
        title: Figure title
        out_path: PNG output path

    Returns:
        Path of the saved figure, or None if matplotlib is unavailable
    """
    if not MATPLOTLIB_AVAILABLE:
        print("Warning: matplotlib not available. Skipping visualization.")
        return None

    set_academic_mpl_style()

    intervals = averages["interval"].to_numpy()
    values = averages["mean_steps"].astype(float).to_numpy()
    positions, labels = _interval_ticks(intervals)

    fig, ax = plt.subplots(figsize=(8.0, 4.2))
    ax.plot(np.arange(len(intervals)), values)
    ax.set_xticks(positions)
    ax.set_xticklabels(labels)
    ax.set_title(title)
    ax.set_xlabel("Time of day")
    ax.set_ylabel("Average steps")
    fig.tight_layout()

    ensure_dir(out_path.parent)
    fig.savefig(out_path)
    plt.close(fig)

    print(f"[ok] saved: {out_path}")
    return out_path


def save_weekpart_panels(weekpart: pd.DataFrame, out_path: Path) -> Optional[Path]:
    """
    Two stacked panels (weekday, weekend) of mean steps per interval.

    Args:
        weekpart: DataFrame with day_kind, interval, mean_steps
        out_path: PNG output path

    Returns:
        Path of the saved figure, or None if matplotlib is unavailable
    """
    if not MATPLOTLIB_AVAILABLE:
        print("Warning: matplotlib not available. Skipping visualization.")
        return None

    set_academic_mpl_style()

    fig, axes = plt.subplots(len(DAY_KINDS), 1, figsize=(8.0, 6.4), sharex=True, sharey=True)
    for ax, kind in zip(axes, DAY_KINDS):
        series = weekpart[weekpart["day_kind"].astype(str) == kind].sort_values("interval")
        intervals = series["interval"].to_numpy()
        ax.plot(np.arange(len(intervals)), series["mean_steps"].astype(float).to_numpy())
        ax.set_title(kind)
        ax.set_ylabel("Average steps")

    positions, labels = _interval_ticks(intervals)
    axes[-1].set_xticks(positions)
    axes[-1].set_xticklabels(labels)
    axes[-1].set_xlabel("Time of day")
    fig.tight_layout()

    ensure_dir(out_path.parent)
    fig.savefig(out_path)
    plt.close(fig)

    print(f"[ok] saved: {out_path}")
    return out_path


def load_weekpart_averages(csv_path: Path) -> pd.DataFrame:
    """Load weekday/weekend interval averages written by Step 5."""
    df = load_csv_safe(csv_path, dtype="str")
    validate_required_columns(df, ["day_kind", "interval", "mean_steps"], str(csv_path))

    means = df["mean_steps"]
    df["interval"] = pd.to_numeric(df["interval"], errors="raise").astype("int64")
    df["mean_steps"] = pd.to_numeric(means.mask(means.isin(NA_VALUES)), errors="raise").astype("Float64")
    df["day_kind"] = pd.Categorical(df["day_kind"], categories=DAY_KINDS)

    return df


def summary_statistics(
    obs: pd.DataFrame,
    daily: pd.DataFrame,
    averages: pd.DataFrame,
    daily_imputed: pd.DataFrame
) -> pd.DataFrame:
    """
    Collect the headline statistics of the report.

    Args:
        obs: Original observations
        daily: Daily totals before imputation
        averages: Interval averages
        daily_imputed: Daily totals after imputation

    Returns:
        DataFrame with metric and value columns
    """
    missing = missing_summary(obs).iloc[0]
    before = describe_daily_totals(daily)
    after = describe_daily_totals(daily_imputed)
    peak = peak_or_missing(averages)
    if pd.isna(peak["interval"]):
        print("  Warning: no interval has observations; peak interval is NA")

    rows = [
        ("mean_daily_steps", before["mean"]),
        ("median_daily_steps", before["median"]),
        ("mean_daily_steps_imputed", after["mean"]),
        ("median_daily_steps_imputed", after["median"]),
        ("n_observations", int(missing["n_observations"])),
        ("n_missing_observations", int(missing["n_missing"])),
        ("missing_rate", float(missing["missing_rate"])),
        ("n_days", before["n_days"]),
        ("n_fully_missing_days", len(fully_missing_days(daily))),
        ("peak_interval", peak["interval"]),
        ("peak_interval_time", peak["label"]),
        ("peak_interval_mean_steps", peak["mean_steps"]),
    ]

    return pd.DataFrame(rows, columns=["metric", "value"])


def run_visualization(cfg: VisualizationConfig) -> pd.DataFrame:
    """
    Execute visualization: Render report figures and summary statistics.

    This step:
    1. Loads observations, daily totals, interval averages and weekpart
       averages produced by Steps 1-5
    2. Computes the summary statistics table
    3. Draws daily-total histograms before and after imputation
    4. Draws the interval time series and the weekday/weekend panels
    5. Exports the summary statistics

    Args:
        cfg: VisualizationConfig with input/output paths and parameters

    Returns:
        DataFrame with summary statistics
    """
    print("\n" + "=" * 70)
    print("VISUALIZATION: Activity Report Figures")
    print("=" * 70)

    ensure_dir(cfg.outdir)

    if not MATPLOTLIB_AVAILABLE:
        print("\nWarning: matplotlib is not installed. Skipping visualization.")
        print("Install with: pip install matplotlib")
        print("Only the summary statistics CSV will be generated.\n")

    print("\nLoading inputs...")
    obs = load_activity(cfg.activity_csv)
    daily = load_daily_totals(cfg.daily_csv)
    averages = load_interval_averages(cfg.averages_csv)
    daily_imputed = load_daily_totals(cfg.daily_imputed_csv)
    weekpart = load_weekpart_averages(cfg.weekpart_csv)
    print(f"  Observations: {len(obs):,}")
    print(f"  Days: {len(daily):,}")

    print("\nComputing summary statistics...")
    summary = summary_statistics(obs, daily, averages, daily_imputed)

    print("\n" + "-" * 70)
    print("Summary Statistics:")
    print("-" * 70)
    for _, row in summary.iterrows():
        print(f"  {row['metric']:30s}: {row['value']}")

    if MATPLOTLIB_AVAILABLE:
        print("\nGenerating figures...")

        for frame, stem, title in [
            (daily, "hist_daily_totals", "Total steps per day"),
            (daily_imputed, "hist_daily_totals_imputed", "Total steps per day (imputed)"),
        ]:
            stats = describe_daily_totals(frame)
            line_specs = [
                (stats["mean"], "--", f"Mean = {stats['mean']:,.0f}"),
                (stats["median"], ":", f"Median = {stats['median']:,.0f}"),
            ]
            save_histogram(
                data=frame["total_steps"].astype(float).to_numpy(),
                bins=cfg.hist_bins,
                xlabel="Total steps per day",
                title=title,
                out_path=cfg.outdir / f"{stem}.png",
                line_specs=line_specs
            )

        save_time_series(averages, "Average steps per 5-minute interval", cfg.outdir / "interval_averages.png")
        save_weekpart_panels(weekpart, cfg.outdir / "weekpart_interval_averages.png")

    print("\nSaving summary statistics...")
    save_dataframe(summary, cfg.outdir / "summary_statistics.csv")

    print("\n" + "=" * 70)
    print("VISUALIZATION COMPLETED")
    print("=" * 70)

    return summary


def main():
    """Example usage of visualization."""
    # =========================================================================
    # CONFIGURATION - Modify these paths for your environment
    # =========================================================================
    base_dir = Path("output")
    # =========================================================================

    config = VisualizationConfig(
        activity_csv=base_dir / "step1/activity_clean.csv",
        daily_csv=base_dir / "step2/daily_totals.csv",
        averages_csv=base_dir / "step3/interval_averages.csv",
        daily_imputed_csv=base_dir / "step4/daily_totals_imputed.csv",
        weekpart_csv=base_dir / "step5/weekpart_interval_averages.csv",
        outdir=base_dir / "visualization"
    )

    summary = run_visualization(config)
    return summary


if __name__ == "__main__":
    main()
