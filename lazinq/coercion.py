"""
lenient value coercion. nothing in here raises on malformed input:
unparseable numbers come back as nan, missing strings as "".
"""
import math
import numbers
import re
from typing import Any, Callable, Optional, Union

Number = Union[int, float]

_FLOAT_PREFIX = re.compile(r'[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)')
_INT_PREFIX = re.compile(r'[+-]?\d+')


def to_string_safe(value: Any) -> str:
    if isinstance(value, str):
        return value
    if value is None:
        return ""
    return str(value)


def is_number(value: Any) -> bool:
    """true for real numbers. bools are not treated as numbers."""
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def is_nan(value: Any) -> bool:
    return isinstance(value, float) and math.isnan(value)


def parse_float(value: Any) -> float:
    """parses the longest leading float literal, nan if there is none"""
    match = _FLOAT_PREFIX.match(to_string_safe(value).strip())
    if not match:
        return math.nan
    return float(match.group(0))


def parse_int(value: Any) -> Number:
    """parses the longest leading integer literal, nan if there is none"""
    match = _INT_PREFIX.match(to_string_safe(value).strip())
    if not match:
        return math.nan
    return int(match.group(0))


def to_number(value: Any, handle_as_int: bool = False) -> Number:
    if is_number(value):
        return value
    return parse_int(value) if handle_as_int else parse_float(value)


def invoke_for_valid_number(value: Any, action: Optional[Callable[[Number], Any]],
                            handle_as_int: bool = False) -> Any:
    """coerce to a number and apply the action unless the result is nan"""
    number = to_number(value, handle_as_int)
    if not is_nan(number) and action is not None:
        number = action(number)
    return number
