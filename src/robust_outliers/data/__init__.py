"""Data generation and loading modules"""

from .synthetic_generator import SyntheticDataGenerator
from .data_loader import SampleLoader

__all__ = [
    'SyntheticDataGenerator',
    'SampleLoader'
]
