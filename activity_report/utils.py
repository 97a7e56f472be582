"""
Utility functions shared across the activity report pipeline.

This module contains helper functions for data loading, validation,
output and common operations used throughout the pipeline.
"""

from __future__ import annotations
from pathlib import Path
from typing import List, Optional
import zipfile
import pandas as pd


def ensure_dir(path: Path) -> None:
    """
    Create directory if it doesn't exist.

    Args:
        path: Directory path to create
    """
    path.mkdir(parents=True, exist_ok=True)


def ensure_input_csv(csv_path: Path, zip_path: Optional[Path] = None) -> Path:
    """
    Make sure the input CSV exists on disk, extracting it from an archive if needed.

    The call is idempotent: an existing CSV is left untouched.

    Args:
        csv_path: Expected path of the input CSV
        zip_path: Optional zip archive containing a member named like csv_path

    Returns:
        Path to the input CSV

    Raises:
        FileNotFoundError: If neither the CSV nor the archive exists, or the
            archive does not contain the CSV
    """
    if csv_path.exists():
        return csv_path

    if zip_path is None or not zip_path.exists():
        raise FileNotFoundError(f"Input file not found: {csv_path}")

    print(f"  Extracting {csv_path.name} from {zip_path}")
    with zipfile.ZipFile(zip_path) as archive:
        members = [m for m in archive.namelist() if Path(m).name == csv_path.name]
        if not members:
            raise FileNotFoundError(f"{csv_path.name} not found in archive: {zip_path}")

        ensure_dir(csv_path.parent)
        csv_path.write_bytes(archive.read(members[0]))

    return csv_path


def load_csv_safe(csv_path: Path, dtype: str = "str") -> pd.DataFrame:
    """
    Load CSV file with safe defaults.

    Missing-value markers are not interpreted here: every cell is read as text
    (empty cells become NaN) so callers decide how to parse each column.

    Args:
        csv_path: Path to CSV file
        dtype: Default dtype for columns (default: 'str')

    Returns:
        DataFrame with lowercased column names

    Raises:
        FileNotFoundError: If CSV file doesn't exist
    """
    if not csv_path.exists():
        raise FileNotFoundError(f"Input file not found: {csv_path}")

    df = pd.read_csv(csv_path, dtype=dtype, keep_default_na=False, na_values=[""])
    df.columns = df.columns.str.lower().str.strip()

    return df


def validate_required_columns(df: pd.DataFrame, required_cols: List[str], file_name: str = "Input") -> None:
    """
    Validate that DataFrame contains all required columns.

    Args:
        df: DataFrame to validate
        required_cols: List of required column names
        file_name: Name of file for error message

    Raises:
        ValueError: If any required columns are missing
    """
    missing = set(required_cols) - set(df.columns)
    if missing:
        raise ValueError(f"{file_name} missing required columns: {missing}")


def describe_bad_rows(values: pd.Series, bad_mask: pd.Series, limit: int = 5) -> str:
    """
    Format the first offending rows of a column for an error message.

    Row numbers are 1-based data rows (the header is not counted).

    Args:
        values: Original column values
        bad_mask: Boolean mask of offending rows
        limit: Maximum number of rows to list

    Returns:
        String like "row 3: 'abc', row 7: '1.5' (and 2 more)"
    """
    bad = values[bad_mask]
    shown = [f"row {pos + 1}: {val!r}" for pos, val in zip(bad.index[:limit], bad.iloc[:limit])]
    text = ", ".join(shown)
    if len(bad) > limit:
        text += f" (and {len(bad) - limit} more)"
    return text


def save_dataframe(df: pd.DataFrame, output_path: Path) -> None:
    """
    Save DataFrame to CSV with UTF-8 encoding.

    Dates are written as YYYY-MM-DD and missing values as "NA", so outputs can
    be read back by the step loaders.

    Args:
        df: DataFrame to save
        output_path: Path to output CSV file
    """
    ensure_dir(output_path.parent)
    df.to_csv(output_path, index=False, encoding="utf-8", na_rep="NA", date_format="%Y-%m-%d")
    print(f"  Saved: {output_path}")


def print_summary_stats(label: str, total: int, count: int) -> None:
    """
    Print summary statistics with percentage.

    Args:
        label: Label for the statistic
        total: Total count
        count: Specific count
    """
    pct = (count / total * 100) if total > 0 else 0
    print(f"  {label}: {count:,} / {total:,} ({pct:.2f}%)")
