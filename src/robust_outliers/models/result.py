"""Detection result model"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

import numpy as np
import pandas as pd


def _finite_or_none(value: float) -> Optional[float]:
    if not np.isfinite(value):
        return None
    return float(value)


@dataclass(frozen=True, eq=False)
class DetectionResult:
    """Flagged values and their 0-based positions in the sample"""
    values: np.ndarray  # Flagged values, original order
    indices: np.ndarray  # Positions of flagged values, ascending
    center: float  # Median used as robust center
    spread: float  # Scaled MAD used as robust spread
    criterion: float  # Criterion after normalization
    warnings: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if len(self.values) != len(self.indices):
            raise ValueError(
                f"values and indices differ in length: "
                f"{len(self.values)} != {len(self.indices)}"
            )

    @property
    def n_outliers(self) -> int:
        return len(self.indices)

    def to_frame(self) -> pd.DataFrame:
        """Flagged observations as a DataFrame with index/value columns"""
        return pd.DataFrame({
            'index': self.indices.astype(np.int64),
            'value': self.values.astype(float)
        })

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly representation; NaN and infinite numbers become None"""
        return {
            'values': [_finite_or_none(v) for v in self.values],
            'indices': [int(i) for i in self.indices],
            'center': _finite_or_none(self.center),
            'spread': _finite_or_none(self.spread),
            'criterion': _finite_or_none(self.criterion),
            'warnings': list(self.warnings)
        }
