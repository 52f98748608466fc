"""Data loading and result export utilities"""

import logging
from pathlib import Path
from typing import Union

import pandas as pd

from ..models.result import DetectionResult


class SampleLoader:
    """Load numeric samples from CSV or JSON files"""

    SUPPORTED_FORMATS = ('.csv', '.json')

    def __init__(self, data_dir: Union[str, Path] = '.'):
        self.data_dir = Path(data_dir)
        self.logger = logging.getLogger("data.loader")

    def _resolve(self, filename: Union[str, Path]) -> Path:
        filepath = self.data_dir / filename
        if filepath.suffix.lower() not in self.SUPPORTED_FORMATS:
            raise ValueError(
                f"Unsupported file format '{filepath.suffix}', "
                f"expected one of {self.SUPPORTED_FORMATS}"
            )
        return filepath

    def load_frame(self, filename: Union[str, Path]) -> pd.DataFrame:
        """Load a whole table; JSON files hold a list of records"""
        filepath = self._resolve(filename)

        if filepath.suffix.lower() == '.csv':
            df = pd.read_csv(filepath)
        else:
            df = pd.read_json(filepath, orient='records')

        self.logger.info(f"Loaded {len(df)} rows from {filepath}")
        return df

    def load_sample(self, filename: Union[str, Path], column: str = 'value') -> pd.Series:
        """Load one column of a table as the sample"""
        df = self.load_frame(filename)

        if column not in df.columns:
            raise KeyError(
                f"Column '{column}' not found in {Path(filename).name}; "
                f"available: {list(df.columns)}"
            )

        return df[column]

    def save_result(self, result: DetectionResult, filename: Union[str, Path]) -> Path:
        """Write flagged observations as CSV or JSON records"""
        filepath = self._resolve(filename)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        frame = result.to_frame()
        if filepath.suffix.lower() == '.csv':
            frame.to_csv(filepath, index=False)
        else:
            frame.to_json(filepath, orient='records')

        self.logger.info(f"Saved {len(frame)} outliers to {filepath}")
        return filepath
