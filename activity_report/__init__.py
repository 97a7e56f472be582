"""
Activity Monitoring Report Pipeline

A step-by-step pipeline that turns 5-minute step counts into daily totals,
interval averages, imputed data and weekday/weekend activity patterns.

Modules:
    - config: Configuration classes and constants
    - utils: Shared utility functions
    - intervals: Interval identifiers and h:mm labels
    - step1_load_activity: Load and validate activity data
    - step2_daily_totals: Sum steps per day
    - step3_interval_averages: Average steps per 5-minute interval
    - step4_impute_missing: Fill missing steps with interval averages
    - step5_weekpart_patterns: Weekday vs weekend interval averages
    - step6_visualize_activity: Report figures and summary statistics
    - run_pipeline: Run all steps in order
"""

__version__ = "1.0.0"
__author__ = "Activity Report Pipeline Team"

from .config import (
    Step1Config,
    Step2Config,
    Step3Config,
    Step4Config,
    Step5Config,
    VisualizationConfig,
    PipelineConfig
)

from .intervals import interval_id_to_time
from .step1_load_activity import run_step1, load_activity
from .step2_daily_totals import run_step2, daily_totals
from .step3_interval_averages import run_step3, interval_averages
from .step4_impute_missing import run_step4, impute_missing
from .step5_weekpart_patterns import run_step5, weekpart_interval_averages
from .step6_visualize_activity import run_visualization
from .run_pipeline import run_pipeline


__all__ = [
    # Config classes
    "Step1Config",
    "Step2Config",
    "Step3Config",
    "Step4Config",
    "Step5Config",
    "VisualizationConfig",
    "PipelineConfig",
    # Core transformations
    "interval_id_to_time",
    "load_activity",
    "daily_totals",
    "interval_averages",
    "impute_missing",
    "weekpart_interval_averages",
    # Step functions
    "run_step1",
    "run_step2",
    "run_step3",
    "run_step4",
    "run_step5",
    "run_visualization",
    "run_pipeline",
]
