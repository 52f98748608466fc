"""Median/MAD outlier detection for numeric samples"""

import logging
import warnings
from typing import Any, Tuple

import numpy as np
import pandas as pd
from scipy import stats

from ..models.result import DetectionResult
from ..models.sample import SampleValidator, CriterionWarning


# Normal-consistency constant for the MAD
MAD_SCALE = 1.4826

logger = logging.getLogger("outliers.detector")


def robust_center_spread(values: np.ndarray, skipna: bool = False) -> Tuple[float, float]:
    """
    Median and scaled median absolute deviation of a float array

    Missing entries (NaN) are dropped when ``skipna`` is set; otherwise any
    missing entry makes both statistics NaN.
    """
    missing = np.isnan(values)
    if missing.any():
        if not skipna:
            return np.nan, np.nan
        values = values[~missing]

    center = float(np.median(values))
    spread = float(stats.median_abs_deviation(values, scale=1.0)) * MAD_SCALE
    return center, spread


def robust_scores(values: np.ndarray, center: float, spread: float) -> np.ndarray:
    """
    Absolute deviation from center in units of spread

    Division follows IEEE rules: x/0 is inf, 0/0 and anything involving a
    missing value is NaN.
    """
    with np.errstate(divide='ignore', invalid='ignore'):
        return np.abs(values - center) / spread


def detect(sample: Any, criterion: Any = 4, skipna: bool = False) -> DetectionResult:
    """
    Flag values that deviate from the median by more than ``criterion``
    scaled MADs

    Args:
        sample: Numeric scalar or one-dimensional list-like; None/NaN are missing
        criterion: Number of scaled MADs; only the first element of a
            list-like is used, negatives are replaced by their absolute value
        skipna: Drop missing values before computing median and MAD

    Returns:
        DetectionResult with flagged values and their 0-based positions

    Raises:
        TypeError: sample or criterion is not numeric
        ValueError: every value in the sample is missing
    """
    values = SampleValidator.validate_sample(sample)
    crit, messages = SampleValidator.validate_criterion(criterion)

    for message in messages:
        warnings.warn(message, CriterionWarning, stacklevel=2)

    center, spread = robust_center_spread(values, skipna=skipna)
    scores = robust_scores(values, center, spread)

    with np.errstate(invalid='ignore'):
        flagged = scores > crit

    indices = np.flatnonzero(flagged).astype(np.int64)

    logger.debug(
        f"center={center:.6g} spread={spread:.6g} criterion={crit:.6g} "
        f"flagged {len(indices)}/{len(values)}"
    )

    return DetectionResult(
        values=values[indices],
        indices=indices,
        center=center,
        spread=spread,
        criterion=crit,
        warnings=tuple(messages)
    )


class RobustOutlierDetector:
    """
    Detect outliers in a numeric sample with the median and scaled MAD

    A value is an outlier when ``|value - median| / (1.4826 * MAD)`` exceeds
    the criterion. Comparisons involving missing values never flag.
    """

    def __init__(self, criterion: Any = 4, skipna: bool = False):
        """
        Initialize outlier detector

        Args:
            criterion: Threshold in scaled MADs
            skipna: Drop missing values before computing median and MAD
        """
        self.criterion = criterion
        self.skipna = skipna
        self.logger = logging.getLogger("outliers.detector")

    def detect(self, sample: Any) -> DetectionResult:
        """Run detection with this detector's settings"""
        return detect(sample, criterion=self.criterion, skipna=self.skipna)

    def robust_scores(self, sample: Any) -> np.ndarray:
        """Per-element robust score; NaN where undefined"""
        values = SampleValidator.validate_sample(sample)
        center, spread = robust_center_spread(values, skipna=self.skipna)
        return robust_scores(values, center, spread)

    def get_clean_data(self, sample: Any, result: DetectionResult):
        """
        Return the sample with flagged positions removed

        A Series keeps its labels; anything else comes back as a float array.
        """
        values = SampleValidator.validate_sample(sample)
        keep = np.ones(len(values), dtype=bool)
        keep[result.indices] = False

        if isinstance(sample, pd.Series):
            return sample.iloc[np.flatnonzero(keep)]
        return values[keep]

    def flag_outliers(self, df: pd.DataFrame, column: str) -> pd.DataFrame:
        """
        Add outlier flags and scores for one column of a DataFrame

        Args:
            df: Input DataFrame
            column: Numeric column to check

        Returns:
            Copy of df with ``is_outlier`` and ``robust_score`` columns added
        """
        if column not in df.columns:
            raise KeyError(f"Column '{column}' not found")

        result = self.detect(df[column])

        df = df.copy()
        is_outlier = np.zeros(len(df), dtype=bool)
        is_outlier[result.indices] = True
        df['is_outlier'] = is_outlier
        df['robust_score'] = self.robust_scores(df[column])

        self.logger.info(f"Flagged {result.n_outliers} of {len(df)} rows in '{column}'")
        return df

    def summarize(self, result: DetectionResult, sample: Any) -> pd.DataFrame:
        """
        Create summary report of a detection

        Args:
            result: Result from detect()
            sample: The sample the result was computed on

        Returns:
            DataFrame with Category/Metric/Value rows
        """
        values = SampleValidator.validate_sample(sample)
        n_missing = int(np.isnan(values).sum())

        summary_data = [
            {'Category': 'Overall', 'Metric': 'Total Observations', 'Value': len(values)},
            {'Category': 'Overall', 'Metric': 'Missing Observations', 'Value': n_missing},
            {'Category': 'Overall', 'Metric': 'Total Outliers', 'Value': result.n_outliers},
            {'Category': 'Overall', 'Metric': 'Outlier Rate',
             'Value': f"{result.n_outliers / len(values):.2%}"},
            {'Category': 'Statistics', 'Metric': 'Center', 'Value': result.center},
            {'Category': 'Statistics', 'Metric': 'Spread', 'Value': result.spread},
            {'Category': 'Thresholds', 'Metric': 'criterion', 'Value': result.criterion},
        ]

        for message in result.warnings:
            summary_data.append({'Category': 'Warnings', 'Metric': 'warning', 'Value': message})

        return pd.DataFrame(summary_data)
