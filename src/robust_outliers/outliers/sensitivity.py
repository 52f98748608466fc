"""Sensitivity of robust outlier detection to the criterion"""

import logging
import warnings
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

import numpy as np
import pandas as pd

from ..models.result import DetectionResult
from ..models.sample import SampleValidator
from .detection import detect


@dataclass
class SensitivityResult:
    """Results from a criterion sweep"""
    results: Dict[float, DetectionResult]  # Requested criterion -> detection
    summary: pd.DataFrame  # One row per criterion, sorted by effective criterion
    is_monotone: bool  # Smaller criteria flag supersets of larger ones


class SensitivityAnalyzer:
    """
    Run detection over a grid of criteria on the same sample

    Every run is an independent call to ``detect``, so runs may execute on a
    thread pool.
    """

    DEFAULT_CRITERIA = (2.0, 2.5, 3.0, 3.5, 4.0, 5.0)

    def __init__(self,
                 parallel: bool = False,
                 max_workers: Optional[int] = None,
                 skipna: bool = False):
        """
        Initialize sensitivity analyzer

        Args:
            parallel: Whether to run criteria in parallel
            max_workers: Maximum parallel workers
            skipna: Missing-value policy passed to every detection
        """
        self.parallel = parallel
        self.max_workers = max_workers
        self.skipna = skipna
        self.logger = logging.getLogger("outliers.sensitivity")

    def analyze(self,
                sample: Any,
                criteria: Optional[Iterable[Any]] = None) -> SensitivityResult:
        """
        Detect outliers for every criterion in the grid

        Args:
            sample: Numeric sample
            criteria: Criteria to test; defaults to DEFAULT_CRITERIA. Repeated
                entries (e.g. 3 and 3.0) run once, at their first position

        Returns:
            SensitivityResult with per-criterion detections and a summary
        """
        # Fatal sample errors surface before anything is scheduled
        values = SampleValidator.validate_sample(sample)

        criteria = list(self.DEFAULT_CRITERIA if criteria is None else criteria)
        if not all(pd.api.types.is_scalar(c) for c in criteria):
            raise TypeError("criteria must be scalar values")

        unique = list(dict.fromkeys(criteria))
        if len(unique) < len(criteria):
            self.logger.debug(f"Dropped {len(criteria) - len(unique)} repeated criteria")
        criteria = unique

        self.logger.info(f"Running detection for {len(criteria)} criteria")
        if self.parallel:
            results = self._run_parallel(values, criteria)
        else:
            results = self._run_sequential(values, criteria)

        summary = self._summarize(results, len(values))

        return SensitivityResult(
            results=results,
            summary=summary,
            is_monotone=self._check_monotone(results)
        )

    def _run_single(self, values: np.ndarray, criterion: Any) -> DetectionResult:
        return detect(values, criterion=criterion, skipna=self.skipna)

    def _run_sequential(self,
                        values: np.ndarray,
                        criteria: List[Any]) -> Dict[Any, DetectionResult]:
        """Run criteria sequentially"""
        results = {}

        for i, criterion in enumerate(criteria):
            self.logger.debug(f"Running criterion {i+1}/{len(criteria)}: {criterion}")
            try:
                results[criterion] = self._run_single(values, criterion)
            except (TypeError, ValueError) as e:
                warnings.warn(f"Criterion {criterion!r} failed: {e}")

        return results

    def _run_parallel(self,
                      values: np.ndarray,
                      criteria: List[Any]) -> Dict[Any, DetectionResult]:
        """Run criteria in parallel"""
        results = {}

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            future_to_criterion = {
                executor.submit(self._run_single, values, criterion): criterion
                for criterion in criteria
            }

            for future in as_completed(future_to_criterion):
                criterion = future_to_criterion[future]
                try:
                    results[criterion] = future.result()
                    self.logger.debug(f"Completed criterion: {criterion}")
                except (TypeError, ValueError) as e:
                    warnings.warn(f"Criterion {criterion!r} failed: {e}")

        # Keep the caller's order regardless of completion order
        return {c: results[c] for c in criteria if c in results}

    def _summarize(self,
                   results: Dict[Any, DetectionResult],
                   n_observations: int) -> pd.DataFrame:
        rows = []
        for criterion, result in results.items():
            rows.append({
                'criterion': criterion,
                'effective_criterion': result.criterion,
                'n_outliers': result.n_outliers,
                'outlier_rate': result.n_outliers / n_observations,
                'n_warnings': len(result.warnings)
            })

        columns = ['criterion', 'effective_criterion', 'n_outliers', 'outlier_rate', 'n_warnings']
        summary = pd.DataFrame(rows, columns=columns)
        return summary.sort_values('effective_criterion', kind='stable').reset_index(drop=True)

    @staticmethod
    def _check_monotone(results: Dict[Any, DetectionResult]) -> bool:
        """Check that flagged sets shrink as the effective criterion grows"""
        ordered = sorted(
            (r for r in results.values() if not np.isnan(r.criterion)),
            key=lambda r: r.criterion
        )
        for looser, stricter in zip(ordered, ordered[1:]):
            if not set(stricter.indices.tolist()) <= set(looser.indices.tolist()):
                return False
        return True

    def create_report(self, sensitivity_result: SensitivityResult) -> str:
        """Create text summary of a criterion sweep"""
        lines = []

        lines.append("=" * 60)
        lines.append("CRITERION SENSITIVITY REPORT")
        lines.append("=" * 60)

        summary = sensitivity_result.summary
        lines.append(f"\nCriteria tested: {len(summary)}")
        lines.append(f"Nested flagged sets: {'yes' if sensitivity_result.is_monotone else 'no'}")

        lines.append("\nOUTLIERS BY CRITERION:")
        for row in summary.itertuples(index=False):
            lines.append(
                f"  crit={row.effective_criterion:<6g} "
                f"outliers={row.n_outliers:<4d} rate={row.outlier_rate:.2%}"
            )

        lines.append("\n" + "=" * 60)

        return "\n".join(lines)
