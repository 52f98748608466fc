"""Robust (median/MAD) outlier detection for numeric samples"""

from .models import DetectionResult, CriterionWarning, SampleValidator
from .outliers import detect, RobustOutlierDetector, SensitivityAnalyzer, SensitivityResult

__version__ = "0.1.0"

__all__ = [
    'detect',
    'RobustOutlierDetector',
    'DetectionResult',
    'CriterionWarning',
    'SampleValidator',
    'SensitivityAnalyzer',
    'SensitivityResult'
]
