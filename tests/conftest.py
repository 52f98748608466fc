"""Pytest configuration and fixtures"""

import pytest
import pandas as pd
import numpy as np

from robust_outliers.data import SyntheticDataGenerator


@pytest.fixture
def constructed_sample():
    """
    Sample with a known median (25) and MAD (1)

    49 values of 24 and 47 values of 26, two moderate outliers (20 at
    position 40, 30 at position 71) and two extreme ones (610, 631) in the
    last two positions. Moderate outliers score 5 / 1.4826 ~= 3.37.
    """
    bulk = [24.0 if i % 2 == 0 else 26.0 for i in range(94)] + [24.0, 24.0]
    return np.array(bulk[:40] + [20.0] + bulk[40:70] + [30.0] + bulk[70:] + [610.0, 631.0])


@pytest.fixture
def synthetic_generator():
    """Create synthetic data generator with fixed seed"""
    return SyntheticDataGenerator(seed=42)


@pytest.fixture
def contaminated_sample(synthetic_generator):
    """98 draws around 25 followed by 2 draws around 625"""
    return synthetic_generator.generate_contaminated_sample()


@pytest.fixture
def sample_csv(tmp_path, constructed_sample):
    """Constructed sample written to a CSV file with a value column"""
    path = tmp_path / "sample.csv"
    pd.DataFrame({'value': constructed_sample}).to_csv(path, index=False)
    return path
