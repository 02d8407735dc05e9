"""
builders that turn missing or partial arguments into total functions.
"""
from typing import NamedTuple
from .coercion import to_string_safe, is_number
from .config import get_config
from .types import *

# marks an argument the caller did not pass (None is a valid default value)
MISSING = Symbol("MISSING")


def identity(x):
    return x


def default_compare(x: Any, y: Any) -> int:
    """three way comparison. values that are neither less nor greater compare as equal."""
    if x is y or x == y:
        return 0
    try:
        if x < y:
            return -1
        if x > y:
            return 1
    except TypeError:
        # None against a number, str against int and the like
        pass
    return 0


def structural_equals(x: Any, y: Any) -> bool:
    return x == y


def strict_equals(x: Any, y: Any) -> bool:
    """equal and of the exact same type, so 1, 1.0 and True are all different"""
    return type(x) is type(y) and x == y


def _loose_number(text: str) -> float:
    text = text.strip()
    if not text:
        return 0.0
    try:
        return float(text)
    except ValueError:
        return float('nan')


def loose_equals(x: Any, y: Any) -> bool:
    """equality that coerces between strings and numbers, e.g. '1' equals 1"""
    if x == y:
        return True
    if x is None or y is None:
        return False
    if isinstance(x, str) and (is_number(y) or isinstance(y, bool)):
        return _loose_number(x) == float(y)
    if isinstance(y, str) and (is_number(x) or isinstance(x, bool)):
        return float(x) == _loose_number(y)
    return False


_EQUALITY_STRATEGIES = {
    'structural': structural_equals,
    'loose': loose_equals,
    'strict': strict_equals,
}


def to_comparer_safe(comparer: Optional[Comparer]) -> Comparer:
    return comparer if comparer else default_compare


def to_equality_comparer_safe(comparer: Union[EqualityComparer, bool, None]) -> EqualityComparer:
    """
    None uses the configured default equality, True forces strict equality,
    any callable is used as is.
    """
    if comparer is True:
        return strict_equals
    if not callable(comparer):
        return _EQUALITY_STRATEGIES[get_config().default_equality]
    return comparer


def to_predicate_safe(predicate: Any = None, default_value: bool = True) -> Predicate:
    if predicate is None:
        result = bool(default_value)
        return lambda _: result
    if not callable(predicate):
        result = bool(predicate)
        return lambda _: result
    return predicate


def to_item_message_safe(message: ItemMessage) -> Callable[[Any, int], str]:
    if message is None:
        provider = lambda item, index: f"condition failed at index {index}"
    elif not callable(message):
        provider = lambda item, index: message
    else:
        provider = message
    return lambda item, index: to_string_safe(provider(item, index))


class OrDefaultArguments(NamedTuple):
    predicate: Predicate
    default_value: Any


def get_or_default_arguments(predicate_or_default: Any = MISSING, default_value: Any = MISSING) -> OrDefaultArguments:
    """
    resolves the (predicate, default) pair of the *_or_default operators.
    a single callable argument is a predicate, any other single argument is the default.
    """
    predicate = None
    if predicate_or_default is MISSING:
        default = NOT_FOUND
    elif default_value is MISSING:
        if callable(predicate_or_default):
            predicate = predicate_or_default
            default = NOT_FOUND
        else:
            default = predicate_or_default
    else:
        predicate = predicate_or_default
        default = default_value
    return OrDefaultArguments(to_predicate_safe(predicate), default)
