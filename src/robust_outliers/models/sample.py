"""Sample and criterion validation"""

import math
import numbers
from typing import Any, List, Tuple

import numpy as np
import pandas as pd


class CriterionWarning(UserWarning):
    """Criterion was adjusted before detection ran"""


class SampleValidator:
    """Centralized coercion of detector inputs to float arrays

    Missing values (None, NaN, pd.NA) are represented as ``np.nan`` in the
    coerced array. Booleans, strings and other non-number objects make an
    input non-numeric.
    """

    NOT_NUMERIC = "{name} must be numeric"
    ALL_MISSING = "x values are all NA"
    MULTI_CRITERION = "length(crit) > 1, only the first element was used"
    MISSING_CRITERION = "crit value is NA"
    NEGATIVE_CRITERION = "crit < 0, abs(crit) used instead"

    @staticmethod
    def _is_missing(value: Any) -> bool:
        return pd.api.types.is_scalar(value) and bool(pd.isna(value))

    @staticmethod
    def _is_number(value: Any) -> bool:
        # Decimal is a Number but not Real; complex values are rejected
        if isinstance(value, (bool, np.bool_)):
            return False
        if isinstance(value, numbers.Complex) and not isinstance(value, numbers.Real):
            return False
        return isinstance(value, numbers.Number)

    @staticmethod
    def _to_float(value: Any) -> float:
        try:
            return float(value)
        except OverflowError:
            # Integers beyond float range saturate like IEEE overflow
            return math.inf if value > 0 else -math.inf

    @classmethod
    def as_numeric_array(cls, values: Any, name: str) -> np.ndarray:
        """
        Coerce a scalar or one-dimensional list-like to a float64 array

        Args:
            values: Input values
            name: Argument name used in the error message

        Returns:
            A new float64 array; missing entries are NaN

        Raises:
            TypeError: if the input is not numeric
        """
        error = TypeError(cls.NOT_NUMERIC.format(name=name))

        if isinstance(values, (str, bytes, dict, bool, np.bool_)):
            raise error

        if isinstance(values, pd.Series):
            series = values
        elif isinstance(values, np.ndarray):
            if values.ndim > 1:
                raise error
            series = pd.Series(values.ravel())
        else:
            if pd.api.types.is_scalar(values):
                items = [values]
            else:
                try:
                    items = list(values)
                except TypeError as exc:
                    raise error from exc
            try:
                series = pd.Series(items)
            except OverflowError:
                # Oversized integers: convert element by element below
                series = pd.Series(items, dtype=object)

        dtype = series.dtype
        if pd.api.types.is_bool_dtype(dtype) or pd.api.types.is_complex_dtype(dtype):
            raise error

        if pd.api.types.is_numeric_dtype(dtype):
            return series.to_numpy(dtype=float, na_value=np.nan, copy=True)

        if not pd.api.types.is_object_dtype(dtype):
            raise error

        coerced = []
        for item in series:
            if cls._is_missing(item):
                coerced.append(np.nan)
            elif cls._is_number(item):
                coerced.append(cls._to_float(item))
            else:
                raise error
        return np.array(coerced, dtype=float)

    @classmethod
    def validate_sample(cls, sample: Any) -> np.ndarray:
        """Coerce a sample, rejecting non-numeric and all-missing input"""
        values = cls.as_numeric_array(sample, "x")
        if np.isnan(values).all():
            raise ValueError(cls.ALL_MISSING)
        return values

    @classmethod
    def validate_criterion(cls, criterion: Any) -> Tuple[float, List[str]]:
        """
        Normalize a criterion to a single non-negative float

        Returns:
            (criterion, messages) where messages lists the adjustments made,
            in the order they were applied. A missing criterion is returned
            as NaN.
        """
        values = cls.as_numeric_array(criterion, "crit")
        messages = []

        if values.size > 1:
            messages.append(cls.MULTI_CRITERION)
            values = values[:1]

        value = float(values[0]) if values.size else np.nan

        if np.isnan(value):
            messages.append(cls.MISSING_CRITERION)
        elif value < 0:
            messages.append(cls.NEGATIVE_CRITERION)
            value = abs(value)

        return value, messages
