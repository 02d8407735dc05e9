from __future__ import annotations
import typing
import numpy as np
from ..types import *
from ..coercion import invoke_for_valid_number, parse_float, is_nan

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable

Number = Union[int, float]


def _python_scalar(value):
    return value.item() if hasattr(value, 'item') else value


def _numpy_op(ufunc: Callable) -> Callable[[Number], Number]:
    """wraps a numpy ufunc so domain errors give nan / inf instead of raising"""
    def apply(x: Number) -> Number:
        with np.errstate(all='ignore'):
            return _python_scalar(ufunc(float(x)))
    return apply


def _abs(x: Number) -> Number:
    # python ints are unbounded, numpy would wrap them at 64 bits
    if isinstance(x, int):
        return abs(x)
    return _numpy_op(np.abs)(x)


def _round_half_up(x: Number) -> float:
    # halves round up, -2.5 -> -2
    with np.errstate(all='ignore'):
        return _python_scalar(np.floor(float(x) + 0.5))


class _NumericOperations(Generic[T]):
    """
    math maps. every element is coerced to a number first (float, or int with
    handle_as_int); values that can not be read as a number come out as nan.
    """

    def _map_numbers(self: 'Enumerable[T]', op: Callable[[Number], Number],
                     handle_as_int: bool = False) -> 'Enumerable[Number]':
        return self.select(lambda x: invoke_for_valid_number(x, op, handle_as_int))

    def abs(self, handle_as_int: bool = False) -> 'Enumerable[Number]':
        return self._map_numbers(_abs, handle_as_int)

    def ceil(self) -> 'Enumerable[Number]':
        return self._map_numbers(_numpy_op(np.ceil))

    def floor(self) -> 'Enumerable[Number]':
        return self._map_numbers(_numpy_op(np.floor))

    def round(self) -> 'Enumerable[Number]':
        return self._map_numbers(_round_half_up)

    # --- trigonometry ---

    def sin(self, handle_as_int: bool = False) -> 'Enumerable[Number]':
        return self._map_numbers(_numpy_op(np.sin), handle_as_int)

    def cos(self, handle_as_int: bool = False) -> 'Enumerable[Number]':
        return self._map_numbers(_numpy_op(np.cos), handle_as_int)

    def tan(self, handle_as_int: bool = False) -> 'Enumerable[Number]':
        return self._map_numbers(_numpy_op(np.tan), handle_as_int)

    def arc_sin(self, handle_as_int: bool = False) -> 'Enumerable[Number]':
        return self._map_numbers(_numpy_op(np.arcsin), handle_as_int)

    def arc_cos(self, handle_as_int: bool = False) -> 'Enumerable[Number]':
        return self._map_numbers(_numpy_op(np.arccos), handle_as_int)

    def arc_tan(self, handle_as_int: bool = False) -> 'Enumerable[Number]':
        return self._map_numbers(_numpy_op(np.arctan), handle_as_int)

    def sin_h(self, handle_as_int: bool = False) -> 'Enumerable[Number]':
        return self._map_numbers(_numpy_op(np.sinh), handle_as_int)

    def cos_h(self, handle_as_int: bool = False) -> 'Enumerable[Number]':
        return self._map_numbers(_numpy_op(np.cosh), handle_as_int)

    def tan_h(self, handle_as_int: bool = False) -> 'Enumerable[Number]':
        return self._map_numbers(_numpy_op(np.tanh), handle_as_int)

    def arc_sin_h(self, handle_as_int: bool = False) -> 'Enumerable[Number]':
        return self._map_numbers(_numpy_op(np.arcsinh), handle_as_int)

    def arc_cos_h(self, handle_as_int: bool = False) -> 'Enumerable[Number]':
        return self._map_numbers(_numpy_op(np.arccosh), handle_as_int)

    def arc_tan_h(self, handle_as_int: bool = False) -> 'Enumerable[Number]':
        return self._map_numbers(_numpy_op(np.arctanh), handle_as_int)

    # --- powers and logarithms ---

    def exp(self, handle_as_int: bool = False) -> 'Enumerable[Number]':
        return self._map_numbers(_numpy_op(np.exp), handle_as_int)

    def log(self, base: Any = None, handle_as_int: bool = False) -> 'Enumerable[Number]':
        """natural logarithm, or the logarithm to 'base' when it is a number"""
        base = parse_float(base)
        if is_nan(base):
            return self._map_numbers(_numpy_op(np.log), handle_as_int)
        return self._map_numbers(_numpy_op(lambda x: np.log(x) / np.log(base)), handle_as_int)

    def pow(self, exponent: Any = 2, handle_as_int: bool = False) -> 'Enumerable[Number]':
        exponent = parse_float(exponent)
        if is_nan(exponent):
            exponent = 2.0
        return self._map_numbers(_numpy_op(lambda x: np.power(x, exponent)), handle_as_int)

    def root(self, power: Any = 2, handle_as_int: bool = False) -> 'Enumerable[Number]':
        power = parse_float(power)
        if is_nan(power):
            power = 2.0
        with np.errstate(all='ignore'):
            inverse = np.float64(1.0) / power
        return self._map_numbers(_numpy_op(lambda x: np.power(x, inverse)), handle_as_int)

    def sqrt(self, handle_as_int: bool = False) -> 'Enumerable[Number]':
        return self._map_numbers(_numpy_op(np.sqrt), handle_as_int)
