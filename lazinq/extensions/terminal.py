from __future__ import annotations
import logging
import typing
import numpy as np
import pandas as pd
from ..types import *
from ..coercion import to_string_safe, parse_int, to_number
from ..errors import (
    NotFoundError, AmbiguousMatchError, AggregateError, FunctionError, ConditionFailedError
)
from ..helpers import (
    MISSING, identity, to_comparer_safe, to_equality_comparer_safe, to_predicate_safe,
    to_item_message_safe, get_or_default_arguments
)

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable

logger = logging.getLogger(__name__)

# internal "no match" marker, distinct from any default a caller can pass
_ELEMENT_NOT_FOUND = Symbol("ELEMENT_NOT_FOUND")


def _add(accumulator, item):
    return item if accumulator is IS_EMPTY else accumulator + item


def _multiply(accumulator, item):
    return item if accumulator is IS_EMPTY else accumulator * item


class _TerminalOperations(Generic[T]):
    """eager operators. each of them consumes (part of) the sequence."""

    def to_array(self: 'Enumerable[T]') -> List[T]:
        """the remaining elements as a list"""
        return [item for item in self]

    def to_object(self: 'Enumerable[T]', key_selector: Optional[Callable[[T, int], K]] = None) -> Dict[K, T]:
        """a dict of the elements, keyed by index unless a key_selector(item, index) is given"""
        key_selector = key_selector if key_selector else lambda item, index: index
        return {key_selector(item, index): item for index, item in enumerate(self)}

    def consume(self: 'Enumerable[T]') -> 'Enumerable[T]':
        """pulls every remaining element and throws it away"""
        for _ in self:
            pass
        return self

    def push_to(self: 'Enumerable[T]', stack: Any) -> 'Enumerable[T]':
        """appends the remaining elements to a list-like stack"""
        if stack is not None:
            for item in self.to_array():
                stack.append(item)
        return self

    def join_to_string(self: 'Enumerable[T]', separator: Any = "") -> str:
        return to_string_safe(separator).join(to_string_safe(item) for item in self)

    # --- aggregation ---

    def aggregate(self: 'Enumerable[T]', func: Optional[Accumulator[U, T]] = None, seed: Any = MISSING,
                  result_selector: Optional[Selector[U, V]] = None) -> Any:
        """
        left fold. the default func adds. without a seed the first element
        starts the fold, and an empty sequence gives IS_EMPTY.
        """
        func = func if func else lambda acc, item: acc + item
        result_selector = result_selector if result_selector else identity
        accumulator = seed
        for item in self:
            accumulator = item if accumulator is MISSING else func(accumulator, item)
        if accumulator is MISSING:
            return IS_EMPTY
        return result_selector(accumulator)

    def sum(self: 'Enumerable[T]') -> Any:
        return self.aggregate(_add, IS_EMPTY)

    def product(self: 'Enumerable[T]') -> Any:
        return self.aggregate(_multiply, IS_EMPTY)

    def average(self: 'Enumerable[T]', selector: Optional[Selector[T, Any]] = None) -> Any:
        """arithmetic mean, values that are no numbers are parsed first (nan when they fail)"""
        count, total = 0, 0.0
        for value in self.select(selector):
            count += 1
            total += to_number(value)
        return total / count if count > 0 else IS_EMPTY

    def _extreme(self: 'Enumerable[T]', value_selector, comparer, wanted_sign: int) -> Any:
        value_selector = value_selector if value_selector else identity
        comparer = to_comparer_safe(comparer)
        result, best = IS_EMPTY, None
        for item in self:
            value = value_selector(item)
            if result is IS_EMPTY or comparer(value, best) * wanted_sign > 0:
                result, best = item, value
        return result

    def max(self: 'Enumerable[T]', value_selector: Optional[Selector[T, Any]] = None,
            comparer: Optional[Comparer] = None) -> Any:
        """the element with the greatest value, IS_EMPTY for an empty sequence"""
        return self._extreme(value_selector, comparer, 1)

    def min(self: 'Enumerable[T]', value_selector: Optional[Selector[T, Any]] = None,
            comparer: Optional[Comparer] = None) -> Any:
        """the element with the smallest value, IS_EMPTY for an empty sequence"""
        return self._extreme(value_selector, comparer, -1)

    # --- quantifiers ---

    def all(self: 'Enumerable[T]', predicate: Optional[Predicate[T]] = None) -> bool:
        predicate = to_predicate_safe(predicate)
        for item in self:
            if not predicate(item):
                return False
        return True

    def any(self: 'Enumerable[T]', predicate: Optional[Predicate[T]] = None) -> bool:
        predicate = to_predicate_safe(predicate)
        for item in self:
            if predicate(item):
                return True
        return False

    def count(self: 'Enumerable[T]', predicate: Optional[Predicate[T]] = None) -> int:
        predicate = to_predicate_safe(predicate)
        return sum(1 for item in self if predicate(item))

    def length(self: 'Enumerable[T]') -> int:
        return self.count()

    def is_empty(self: 'Enumerable[T]') -> bool:
        return self.length() < 1

    def index_of(self: 'Enumerable[T]', value: Any, comparer: Union[EqualityComparer, bool, None] = None) -> int:
        comparer = to_equality_comparer_safe(comparer)
        for index, item in enumerate(self):
            if comparer(item, value):
                return index
        return -1

    def last_index_of(self: 'Enumerable[T]', value: Any,
                      comparer: Union[EqualityComparer, bool, None] = None) -> int:
        comparer = to_equality_comparer_safe(comparer)
        last_index = -1
        for index, item in enumerate(self):
            if comparer(item, value):
                last_index = index
        return last_index

    def contains(self: 'Enumerable[T]', value: Any, comparer: Union[EqualityComparer, bool, None] = None) -> bool:
        return self.index_of(value, comparer) > -1

    def sequence_equal(self: 'Enumerable[T]', other: Iterable[U],
                       comparer: Union[EqualityComparer, bool, None] = None) -> bool:
        """true when both sequences have the same length and pairwise equal elements"""
        from ..factories import from_iterable
        other = from_iterable(other)
        comparer = to_equality_comparer_safe(comparer)
        while True:
            x = self.pull()
            if x.done:
                break
            y = other.pull()
            if y.done or not comparer(x.value, y.value):
                return False
        return other.pull().done

    # --- element lookup ---

    def element_at(self: 'Enumerable[T]', index: Any) -> T:
        result = self.element_at_or_default(index, _ELEMENT_NOT_FOUND)
        if result is _ELEMENT_NOT_FOUND:
            raise NotFoundError(f"no element at index {index}")
        return result

    def element_at_or_default(self: 'Enumerable[T]', index: Any, default_value: Any = NOT_FOUND) -> Any:
        index = parse_int(index)
        for i, item in enumerate(self):
            if i == index:
                return item
        return default_value

    def first(self: 'Enumerable[T]', predicate: Optional[Predicate[T]] = None) -> T:
        """get first element"""
        result = self.first_or_default(to_predicate_safe(predicate), _ELEMENT_NOT_FOUND)
        if result is _ELEMENT_NOT_FOUND:
            raise NotFoundError()
        return result

    def first_or_default(self: 'Enumerable[T]', predicate_or_default: Any = MISSING,
                         default_value: Any = MISSING) -> Any:
        """get first element or default (NOT_FOUND if no default is given)"""
        args = get_or_default_arguments(predicate_or_default, default_value)
        for item in self:
            if args.predicate(item):
                return item
        return args.default_value

    def last(self: 'Enumerable[T]', predicate: Optional[Predicate[T]] = None) -> T:
        result = self.last_or_default(to_predicate_safe(predicate), _ELEMENT_NOT_FOUND)
        if result is _ELEMENT_NOT_FOUND:
            raise NotFoundError()
        return result

    def last_or_default(self: 'Enumerable[T]', predicate_or_default: Any = MISSING,
                        default_value: Any = MISSING) -> Any:
        args = get_or_default_arguments(predicate_or_default, default_value)
        result = _ELEMENT_NOT_FOUND
        for item in self:
            if args.predicate(item):
                result = item
        return args.default_value if result is _ELEMENT_NOT_FOUND else result

    def single(self: 'Enumerable[T]', predicate: Optional[Predicate[T]] = None) -> T:
        """get single element, erroring if not exactly one"""
        result = self.single_or_default(to_predicate_safe(predicate), _ELEMENT_NOT_FOUND)
        if result is _ELEMENT_NOT_FOUND:
            raise NotFoundError()
        return result

    def single_or_default(self: 'Enumerable[T]', predicate_or_default: Any = MISSING,
                          default_value: Any = MISSING) -> Any:
        """
        the only matching element, or the default when nothing matches.
        more than one match is always an AmbiguousMatchError, default or not.
        """
        args = get_or_default_arguments(predicate_or_default, default_value)
        result = _ELEMENT_NOT_FOUND
        for item in self:
            if not args.predicate(item):
                continue
            if result is not _ELEMENT_NOT_FOUND:
                raise AmbiguousMatchError()
            result = item
        return args.default_value if result is _ELEMENT_NOT_FOUND else result

    # --- actions ---

    def for_each(self: 'Enumerable[T]', action: Optional[EachAction[T]]) -> 'Enumerable[T]':
        """calls action(item, index) for each element. the first error stops the loop."""
        for index, item in enumerate(self):
            if action:
                action(item, index)
        return self

    def each(self: 'Enumerable[T]', action: Optional[EachAction[T]]) -> 'Enumerable[T]':
        return self.for_each(action)

    def for_all(self: 'Enumerable[T]', action: Optional[EachAction[T]]) -> 'Enumerable[T]':
        """
        calls action(item, index) for every element, even after failures.
        the failures are raised together as one AggregateError at the end.
        """
        errors = []
        for index, item in enumerate(self):
            try:
                if action:
                    action(item, index)
            except Exception as e:
                errors.append(FunctionError(e, action, index))
        if errors:
            logger.debug(f"for_all collected {len(errors)} failure(s)")
            raise AggregateError(errors)
        return self

    def each_all(self: 'Enumerable[T]', action: Optional[EachAction[T]]) -> 'Enumerable[T]':
        return self.for_all(action)

    def assert_(self: 'Enumerable[T]', predicate: Optional[Predicate[T]],
                message: ItemMessage = None) -> 'Enumerable[T]':
        """raises ConditionFailedError for the first element that does not match"""
        predicate = to_predicate_safe(predicate)
        message = to_item_message_safe(message)
        for index, item in enumerate(self):
            if not predicate(item):
                raise ConditionFailedError(message(item, index), index, item)
        return self

    def assert_all(self: 'Enumerable[T]', predicate: Optional[Predicate[T]],
                   message: ItemMessage = None) -> 'Enumerable[T]':
        """checks every element, then raises one AggregateError for all that did not match"""
        predicate = to_predicate_safe(predicate)
        message = to_item_message_safe(message)
        errors = [ConditionFailedError(message(item, index), index, item)
                  for index, item in enumerate(self) if not predicate(item)]
        if errors:
            logger.debug(f"assert_all collected {len(errors)} failure(s)")
            raise AggregateError(errors)
        return self


class TerminalAccessor(Generic[T]):
    """
    eager conversions. each call drains what is left of the sequence, through
    an optional selector, into a python, numpy or pandas container.
    """

    def __init__(self, enumerable_instance: 'Enumerable[T]'):
        self._enumerable = enumerable_instance

    def _drain(self, selector: Optional[Selector[T, Any]] = None) -> List[Any]:
        return self._enumerable.select(selector).to_array()

    def list(self, selector: Optional[Selector[T, U]] = None) -> List[U]:
        return self._drain(selector)

    def array(self, selector: Optional[Selector[T, U]] = None, dtype: Any = None) -> np.ndarray:
        """numpy infers the dtype unless one is given"""
        return np.asarray(self._drain(selector), dtype=dtype)

    def set(self, selector: Optional[Selector[T, U]] = None) -> Set[U]:
        return set(self._drain(selector))

    def dict(self, key_selector: KeySelector[T, K],
             value_selector: Optional[Selector[T, V]] = None) -> Dict[K, V]:
        """later elements overwrite earlier ones with the same key"""
        value_selector = value_selector if value_selector else identity
        return dict(self._drain(lambda item: (key_selector(item), value_selector(item))))

    def pandas(self, selector: Optional[Selector[T, Any]] = None, name: Optional[str] = None) -> pd.Series:
        return pd.Series(self._drain(selector), name=name)

    def df(self, columns: Optional[List[str]] = None) -> pd.DataFrame:
        """
        one row per element. namedtuple fields and dict keys become columns,
        for dict records 'columns' picks and orders the keys to keep.
        """
        return pd.DataFrame(self._drain(), columns=columns)
