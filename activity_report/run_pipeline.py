"""
Run the complete activity report pipeline.

Steps are executed strictly in dependency order; each step reads the
CSV outputs of the previous ones from its own output subdirectory.
"""

from __future__ import annotations
from pathlib import Path
from typing import Dict
import pandas as pd

from .config import (
    Step1Config,
    Step2Config,
    Step3Config,
    Step4Config,
    Step5Config,
    VisualizationConfig,
    PipelineConfig
)
from .step1_load_activity import run_step1
from .step2_daily_totals import run_step2
from .step3_interval_averages import run_step3
from .step4_impute_missing import run_step4
from .step5_weekpart_patterns import run_step5
from .step6_visualize_activity import run_visualization, summary_statistics
from .utils import save_dataframe


def run_pipeline(cfg: PipelineConfig) -> Dict[str, pd.DataFrame]:
    """
    Execute all pipeline steps.

    Args:
        cfg: PipelineConfig with input path and output base directory

    Returns:
        Dict of the main result tables keyed by name
    """
    dir1, dir2, dir3, dir4, dir5, dir_viz = [cfg.output_base_dir / d for d in cfg.step_dirs]

    obs, missing = run_step1(Step1Config(
        input_csv=cfg.input_csv,
        outdir=dir1,
        input_zip=cfg.input_zip
    ))
    clean_csv = dir1 / "activity_clean.csv"

    daily, daily_summary = run_step2(Step2Config(input_csv=clean_csv, outdir=dir2))
    averages, peak = run_step3(Step3Config(input_csv=clean_csv, outdir=dir3))

    imputed, daily_imputed, comparison = run_step4(Step4Config(
        activity_csv=clean_csv,
        averages_csv=dir3 / "interval_averages.csv",
        outdir=dir4
    ))

    weekpart = run_step5(Step5Config(input_csv=dir4 / "activity_imputed.csv", outdir=dir5))

    if cfg.make_plots:
        summary = run_visualization(VisualizationConfig(
            activity_csv=clean_csv,
            daily_csv=dir2 / "daily_totals.csv",
            averages_csv=dir3 / "interval_averages.csv",
            daily_imputed_csv=dir4 / "daily_totals_imputed.csv",
            weekpart_csv=dir5 / "weekpart_interval_averages.csv",
            outdir=dir_viz,
            hist_bins=cfg.hist_bins
        ))
    else:
        summary = summary_statistics(obs, daily, averages, daily_imputed)
        save_dataframe(summary, dir_viz / "summary_statistics.csv")

    print("\n" + "=" * 70)
    print("PIPELINE COMPLETED")
    print("=" * 70)

    return {
        "observations": obs,
        "missing_summary": missing,
        "daily_totals": daily,
        "interval_averages": averages,
        "peak_interval": peak,
        "imputed": imputed,
        "daily_totals_imputed": daily_imputed,
        "imputation_comparison": comparison,
        "weekpart_interval_averages": weekpart,
        "summary": summary,
    }


def main():
    """
    Run the full pipeline.

    This is a template. Modify the paths below to match your data location
    before running.
    """
    # =========================================================================
    # CONFIGURATION - Modify these paths for your environment
    # =========================================================================
    input_csv = Path("data/activity.csv")    # Input: 5-minute step counts
    input_zip = Path("data/activity.zip")    # Archive to extract from if CSV is absent
    output_base_dir = Path("output")         # One subdirectory per step
    # =========================================================================

    config = PipelineConfig(
        input_csv=input_csv,
        output_base_dir=output_base_dir,
        input_zip=input_zip
    )

    results = run_pipeline(config)
    return results


if __name__ == "__main__":
    main()
