"""Data models for robust outlier detection"""

from .sample import SampleValidator, CriterionWarning
from .result import DetectionResult

__all__ = [
    'SampleValidator',
    'CriterionWarning',
    'DetectionResult'
]
