"""
Cohort normalization for rolling statistical features.

Every pass recomputes min/max/mean/std from the full cohort snapshot it is
given, so repeated calls on an unchanged snapshot return identical values.
Null inputs stay null and never count toward the cohort statistics.
"""

from typing import Iterable, List, Optional, Sequence

import numpy as np
import pandas as pd
from scipy import stats

# Below this a cohort's spread is treated as zero
_ZERO_STD = 1e-12


def _as_series(values: Sequence[Optional[float]]) -> pd.Series:
    return pd.Series(list(values), dtype="float64")


def _to_optional_list(values: Iterable[float], precision: int) -> List[Optional[float]]:
    return [None if pd.isna(v) else round(float(v), precision) for v in values]


def min_max_normalize(
    values: Sequence[Optional[float]], precision: int = 3
) -> List[Optional[float]]:
    """
    Scale values to [0, 1] with (x - min) / (max - min).

    A cohort whose values are all equal maps every member to 0.

    Args:
        values: Raw values, None for missing
        precision: Decimal places to round to

    Returns:
        Normalized values in input order, None where the input was None.
    """
    series = _as_series(values)
    valid = series.dropna()
    if valid.empty:
        return [None] * len(series)

    low, high = valid.min(), valid.max()
    span = high - low
    if span == 0:
        scaled = series.where(series.isna(), 0.0)
    else:
        scaled = (series - low) / span
    return _to_optional_list(scaled, precision)


def z_score_normalize(
    values: Sequence[Optional[float]], precision: int = 3
) -> List[Optional[float]]:
    """
    Standardize values with (x - mean) / std using the population std.

    A zero-spread cohort maps every member to 0.

    Args:
        values: Raw values, None for missing
        precision: Decimal places to round to

    Returns:
        Z-scores in input order, None where the input was None.
    """
    arr = _as_series(values).to_numpy(dtype=float)
    mask = ~np.isnan(arr)
    result = np.full(arr.shape, np.nan)
    if not mask.any():
        return [None] * len(arr)

    valid = arr[mask]
    if float(np.std(valid)) < _ZERO_STD:
        result[mask] = 0.0
    else:
        result[mask] = stats.zscore(valid, ddof=0)
    return _to_optional_list(result, precision)


def clip(value: Optional[float], bound: float) -> float:
    """Clamp a value to [-bound, bound], reading None as 0."""
    if value is None:
        return 0.0
    return float(np.clip(value, -bound, bound))


def normalize_cohorts(
    frame: pd.DataFrame,
    min_max_columns: Iterable[str] = (),
    z_score_columns: Iterable[str] = (),
    by: str = "position",
    precision: int = 3,
    suffix: str = "_norm",
) -> pd.DataFrame:
    """
    Normalize feature columns independently within each cohort.

    Each column gets a ``<column><suffix>`` companion. A missing value in one
    column never affects another column for the same row.

    Args:
        frame: One row per player, must contain ``by`` and the listed columns
        min_max_columns: Columns scaled with min-max
        z_score_columns: Columns standardized with z-scores
        by: Cohort column
        precision: Decimal places to round to
        suffix: Suffix for the output columns

    Returns:
        A copy of ``frame`` with the normalized columns added.
    """
    out = frame.copy()
    if frame.empty:
        return out

    grouped = frame.groupby(by, sort=False, dropna=False)

    def _apply(column: str, func) -> None:
        if column not in frame.columns:
            out[f"{column}{suffix}"] = np.nan
            return
        out[f"{column}{suffix}"] = grouped[column].transform(
            lambda s: pd.Series(func(s.tolist(), precision), index=s.index, dtype="float64")
        )

    for column in min_max_columns:
        _apply(column, min_max_normalize)
    for column in z_score_columns:
        _apply(column, z_score_normalize)
    return out
