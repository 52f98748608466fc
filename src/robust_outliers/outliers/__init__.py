"""Outlier detection and criterion sensitivity module"""

from .detection import detect, RobustOutlierDetector, robust_center_spread, MAD_SCALE
from .sensitivity import SensitivityAnalyzer, SensitivityResult

__all__ = [
    'detect',
    'RobustOutlierDetector',
    'robust_center_spread',
    'MAD_SCALE',
    'SensitivityAnalyzer',
    'SensitivityResult'
]
