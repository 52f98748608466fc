"""Generate synthetic contaminated samples for testing"""

import numpy as np
import pandas as pd


class SyntheticDataGenerator:
    """Generate normal samples with a small high-valued contamination"""

    def __init__(self, seed: int = 42):
        self.seed = seed
        self.rng = np.random.RandomState(seed)

    def generate_contaminated_sample(self,
                                     n_inliers: int = 98,
                                     inlier_mean: float = 25.0,
                                     inlier_std: float = 3.0,
                                     n_outliers: int = 2,
                                     outlier_mean: float = 625.0,
                                     outlier_std: float = 15.0) -> np.ndarray:
        """
        Draw inliers followed by outliers

        Args:
            n_inliers: Number of draws around inlier_mean
            inlier_mean: Mean of the bulk of the sample
            inlier_std: Standard deviation of the bulk
            n_outliers: Number of draws around outlier_mean, appended last
            outlier_mean: Mean of the contamination
            outlier_std: Standard deviation of the contamination

        Returns:
            Float array of length n_inliers + n_outliers
        """
        if n_inliers < 0 or n_outliers < 0:
            raise ValueError("Sample sizes must be non-negative")

        inliers = self.rng.normal(inlier_mean, inlier_std, n_inliers)
        outliers = self.rng.normal(outlier_mean, outlier_std, n_outliers)
        return np.concatenate([inliers, outliers])

    def inject_missing(self, sample: np.ndarray, fraction: float = 0.05) -> np.ndarray:
        """Return a copy with a random fraction of entries set to NaN"""
        if not 0.0 <= fraction <= 1.0:
            raise ValueError(f"fraction must be in [0, 1], got {fraction}")

        values = np.array(sample, dtype=float)
        n_missing = int(round(fraction * len(values)))
        if n_missing:
            positions = self.rng.choice(len(values), size=n_missing, replace=False)
            values[positions] = np.nan
        return values

    def generate_dataframe(self, missing_fraction: float = 0.0, **kwargs) -> pd.DataFrame:
        """Contaminated sample as a DataFrame with a ``value`` column"""
        sample = self.generate_contaminated_sample(**kwargs)
        if missing_fraction:
            sample = self.inject_missing(sample, missing_fraction)

        return pd.DataFrame({
            'observation_id': np.arange(len(sample)),
            'value': sample
        })
