from __future__ import annotations
import typing
import numpy as np
from ..types import *
from ..coercion import to_number

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable

Number = Union[int, float]


def _python_scalar(value):
    return value.item() if hasattr(value, 'item') else value


class StatsAccessor(Generic[T]):
    """
    descriptive statistics. every method consumes the sequence, coerces the
    values to numbers (nan when that fails) and gives IS_EMPTY for no input.
    """

    def __init__(self, enumerable_instance: 'Enumerable[T]'):
        self._enumerable = enumerable_instance

    def _get_values(self, selector: Optional[Selector[T, Any]] = None) -> np.ndarray:
        """helper to extract numeric values for statistical operations."""
        values = self._enumerable.select(selector).to.list()
        return np.array([to_number(x) for x in values], dtype=float)

    def median(self, selector: Optional[Selector[T, Any]] = None) -> Any:
        """calculate median value"""
        values = self._get_values(selector)
        if values.size == 0: return IS_EMPTY
        return _python_scalar(np.median(values))

    def variance(self, selector: Optional[Selector[T, Any]] = None) -> Any:
        """population variance (ddof=0, numpy's default)"""
        values = self._get_values(selector)
        if values.size == 0: return IS_EMPTY
        return _python_scalar(np.var(values))

    def std_dev(self, selector: Optional[Selector[T, Any]] = None) -> Any:
        """calculate standard deviation"""
        values = self._get_values(selector)
        if values.size == 0: return IS_EMPTY
        return _python_scalar(np.std(values))

    def percentile(self, q: float, selector: Optional[Selector[T, Any]] = None) -> Any:
        """calculate percentile (0 <= q <= 100), linear interpolation between ranks"""
        if not 0 <= q <= 100: raise ValueError("percentile must be between 0 and 100")
        values = self._get_values(selector)
        if values.size == 0: return IS_EMPTY
        return _python_scalar(np.percentile(values, q))

    def mode(self, selector: Optional[Selector[T, K]] = None) -> Any:
        """most frequent value, ties go to the one seen first"""
        data = self._enumerable.select(selector).to.list()
        if not data: return IS_EMPTY
        counts: List[Tuple[Any, int]] = []
        for value in data:
            for i, (seen, n) in enumerate(counts):
                if seen == value:
                    counts[i] = (seen, n + 1)
                    break
            else:
                counts.append((value, 1))
        return max(counts, key=lambda pair: pair[1])[0]
