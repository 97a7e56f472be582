"""
Configuration classes and constants for the activity report pipeline.

This module contains all configuration dataclasses and constants used across
the pipeline that turns 5-minute step counts into daily and interval-level
activity statistics.
"""

from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional


# ============================================================================
# Constants
# ============================================================================

# Column requirements
REQUIRED_COLS = ["steps", "date", "interval"]

# Time and day constants
INTERVAL_MINUTES = 5
INTERVALS_PER_DAY = 288  # 24 hours * 60 minutes / 5 minutes

# Input parsing
DATE_FORMAT = "%Y-%m-%d"
NA_VALUES = ["", "NA", "NaN", "nan"]

# Day-kind classification
WEEKEND_DAYS = ("Saturday", "Sunday")
DAY_KINDS = ["weekday", "weekend"]

# Histogram defaults
HIST_BINS = 20


# ============================================================================
# Configuration Classes
# ============================================================================

@dataclass(frozen=True)
class Step1Config:
    """Configuration for Step 1: Load and validate activity data."""

    input_csv: Path
    outdir: Path
    input_zip: Optional[Path] = None


@dataclass(frozen=True)
class Step2Config:
    """Configuration for Step 2: Daily step totals."""

    input_csv: Path
    outdir: Path


@dataclass(frozen=True)
class Step3Config:
    """Configuration for Step 3: Average steps per interval."""

    input_csv: Path
    outdir: Path


@dataclass(frozen=True)
class Step4Config:
    """Configuration for Step 4: Missing value imputation."""

    activity_csv: Path
    averages_csv: Path
    outdir: Path


@dataclass(frozen=True)
class Step5Config:
    """Configuration for Step 5: Weekday vs weekend activity patterns."""

    input_csv: Path
    outdir: Path


@dataclass(frozen=True)
class VisualizationConfig:
    """Configuration for activity plots and summary statistics."""

    activity_csv: Path
    daily_csv: Path
    averages_csv: Path
    daily_imputed_csv: Path
    weekpart_csv: Path
    outdir: Path
    hist_bins: int = HIST_BINS


@dataclass(frozen=True)
class PipelineConfig:
    """Configuration for the complete pipeline."""

    # Input data paths
    input_csv: Path

    # Output directory
    output_base_dir: Path

    # Archive to extract input_csv from when it is not on disk yet
    input_zip: Optional[Path] = None

    # Pipeline parameters
    hist_bins: int = HIST_BINS
    make_plots: bool = True

    # Step output subdirectories
    step_dirs: List[str] = None

    def __post_init__(self):
        """Initialize default step output directories if not provided."""
        if self.step_dirs is None:
            object.__setattr__(self, 'step_dirs', [
                'step1', 'step2', 'step3', 'step4', 'step5', 'visualization'
            ])
