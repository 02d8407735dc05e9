from __future__ import annotations
import json
import logging
import typing
from itertools import chain, takewhile, dropwhile
from ..types import *
from ..coercion import to_string_safe, parse_float, parse_int, is_nan, is_number
from ..config import get_config
from ..errors import UnsupportedOperationError
from ..helpers import MISSING, identity, to_predicate_safe

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable

logger = logging.getLogger(__name__)


def _count_or_one(count: Any) -> int:
    """counts and sizes that can not be parsed fall back to 1"""
    parsed = parse_int(count)
    return 1 if is_nan(parsed) else parsed


class _CoreOperations(Generic[T]):
    # --- projection ---

    def select(self: 'Enumerable[T]', selector: Optional[Selector[T, U]] = None) -> 'Enumerable[U]':
        """project each element to a new form"""
        from ..factories import from_iterable
        selector = selector if selector else identity
        def select_data():
            for item in self:
                yield selector(item)
        return from_iterable(select_data())

    def select_many(self: 'Enumerable[T]', selector: Optional[Selector[T, Iterable[U]]] = None) -> 'Enumerable[U]':
        """project each element to a sequence and flatten the results"""
        from ..factories import from_iterable
        selector = selector if selector else lambda x: [x]
        def flat_map_data():
            for item in self:
                yield from from_iterable(selector(item))
        return from_iterable(flat_map_data())

    def flatten(self: 'Enumerable[T]') -> 'Enumerable[Any]':
        """flatten one level. elements that are not sequences pass through."""
        from ..factories import is_sequence
        return self.select_many(lambda x: x if is_sequence(x) else [x])

    def cast(self: 'Enumerable[T]', type_name: Optional[str] = None) -> 'Enumerable[Any]':
        """
        converts every element to one of the named target types:
        bool, float, function, null, number, object (json), int, string, symbol, undefined.
        an unknown name raises UnsupportedOperationError once the first element is pulled.
        """
        type_name = to_string_safe(type_name).strip()
        if not type_name:
            return self.select()
        return self.select(lambda x: _cast_value(x, type_name))

    # --- filtering ---

    def where(self: 'Enumerable[T]', predicate: Predicate[T]) -> 'Enumerable[T]':
        """filter elements based on a predicate"""
        from ..factories import from_iterable
        predicate = to_predicate_safe(predicate)
        def filter_data():
            for item in self:
                if predicate(item):
                    yield item
        return from_iterable(filter_data())

    def of_type(self: 'Enumerable[T]', type_filter: Union[Type[U], Tuple[Type, ...], None]) -> 'Enumerable[U]':
        """filters the elements of a sequence based on a specified type"""
        if not type_filter:
            return self.where(None)
        return self.where(lambda item: isinstance(item, type_filter))

    def not_(self: 'Enumerable[T]', predicate: Any = MISSING) -> 'Enumerable[T]':
        """inverted where(). without a predicate the falsy elements are kept."""
        if predicate is MISSING:
            return self.where(lambda x: not x)
        predicate = to_predicate_safe(predicate)
        return self.where(lambda x: not predicate(x))

    def not_empty(self: 'Enumerable[T]') -> 'Enumerable[T]':
        return self.where(lambda x: bool(x))

    def no_nan(self: 'Enumerable[T]', check_for_int: bool = False) -> 'Enumerable[T]':
        """keeps the elements that can be read as a number"""
        parse = parse_int if check_for_int else parse_float
        return self.where(lambda x: not is_nan(parse(x)))

    # --- partitioning ---

    def skip(self: 'Enumerable[T]', count: Any = 1) -> 'Enumerable[T]':
        """skip the first 'count' elements"""
        from ..factories import from_iterable
        count = _count_or_one(count)
        def skip_data():
            skipped = 0
            for item in self:
                if skipped < count:
                    skipped += 1
                    continue
                yield item
        return from_iterable(skip_data())

    def skip_while(self: 'Enumerable[T]', predicate: Predicate[T]) -> 'Enumerable[T]':
        """skip elements while predicate is true"""
        from ..factories import from_iterable
        return from_iterable(dropwhile(to_predicate_safe(predicate), self))

    def skip_last(self: 'Enumerable[T]') -> 'Enumerable[T]':
        """everything except the last element"""
        from ..factories import from_iterable
        def skip_last_data():
            previous = self.pull()
            if previous.done:
                return
            for item in self:
                yield previous.value
                previous = Step(item, False)
        return from_iterable(skip_last_data())

    def take(self: 'Enumerable[T]', count: Any = 1) -> 'Enumerable[T]':
        """take the first 'count' elements. never pulls more than that from the source."""
        from ..factories import from_iterable
        count = _count_or_one(count)
        def take_data():
            if count < 1:
                return
            taken = 0
            for item in self:
                yield item
                taken += 1
                if taken >= count:
                    break
        return from_iterable(take_data())

    def take_while(self: 'Enumerable[T]', predicate: Predicate[T]) -> 'Enumerable[T]':
        """take elements while predicate is true"""
        from ..factories import from_iterable
        return from_iterable(takewhile(to_predicate_safe(predicate), self))

    # --- composition ---

    def concat(self: 'Enumerable[T]', *sequences: Iterable[U]) -> 'Enumerable[Union[T, U]]':
        """concatenate with other sequences, preserving all elements and order."""
        return self.concat_array(sequences)

    def concat_array(self: 'Enumerable[T]', sequences: Optional[Iterable[Iterable[U]]]) -> 'Enumerable[Union[T, U]]':
        from ..factories import from_iterable
        others = chain.from_iterable(from_iterable(sequence) for sequence in (sequences or ()))
        return from_iterable(chain(self, others))

    def append(self: 'Enumerable[T]', *sequences: Iterable[U]) -> 'Enumerable[Union[T, U]]':
        return self.concat_array(sequences)

    def append_array(self: 'Enumerable[T]', sequences: Optional[Iterable[Iterable[U]]]) -> 'Enumerable[Union[T, U]]':
        return self.concat_array(sequences)

    def prepend(self: 'Enumerable[T]', *sequences: Iterable[U]) -> 'Enumerable[Union[T, U]]':
        """puts the elements of other sequences in front of this one"""
        return self.prepend_array(sequences)

    def prepend_array(self: 'Enumerable[T]', sequences: Optional[Iterable[Iterable[U]]]) -> 'Enumerable[Union[T, U]]':
        from ..factories import from_iterable
        others = chain.from_iterable(from_iterable(sequence) for sequence in (sequences or ()))
        return from_iterable(chain(others, self))

    def default_if_empty(self: 'Enumerable[T]', *default_items: T) -> 'Enumerable[T]':
        """returns the elements of a sequence, or the default items if the sequence is empty"""
        return self.default_sequence_if_empty(default_items)

    def default_sequence_if_empty(self: 'Enumerable[T]', default_sequence: Iterable[T]) -> 'Enumerable[T]':
        from ..factories import from_iterable
        def default_data():
            has_items = False
            for item in self:
                has_items = True
                yield item
            if not has_items:
                yield from from_iterable(default_sequence)
        return from_iterable(default_data())

    def default_array_if_empty(self: 'Enumerable[T]', default_array: Iterable[T]) -> 'Enumerable[T]':
        return self.default_sequence_if_empty(default_array)

    def intersperse(self: 'Enumerable[T]', *separators: U) -> 'Enumerable[Union[T, U]]':
        """puts the separators between every two elements"""
        from ..factories import from_iterable
        def intersperse_data():
            is_first = True
            for item in self:
                if not is_first:
                    yield from separators
                is_first = False
                yield item
        return from_iterable(intersperse_data())

    def intersperse_array(self: 'Enumerable[T]', separators: Iterable[U]) -> 'Enumerable[Union[T, U]]':
        from ..factories import from_iterable
        return self.intersperse(*from_iterable(separators).to_array())

    # --- chunking ---

    def _next_chunk_array(self: 'Enumerable[T]', size: int) -> List[T]:
        chunk = []
        for item in self:
            chunk.append(item)
            if len(chunk) >= size:
                break
        return chunk

    def chunk(self: 'Enumerable[T]', size: Any = 1) -> 'Enumerable[Enumerable[T]]':
        """split into array backed chunks of up to 'size' elements"""
        from ..factories import from_iterable
        size = _count_or_one(size)
        def chunk_data():
            while True:
                chunk = self._next_chunk_array(size)
                if not chunk:
                    break
                yield from_iterable(chunk)
        return from_iterable(chunk_data())

    def clone(self: 'Enumerable[T]', count: Any = None,
              item_selector: Optional[Selector[T, U]] = None) -> 'Enumerable[Enumerable[U]]':
        """
        materializes the sequence once and yields 'count' independent copies of it.
        without a count the copies never end.
        """
        from ..factories import from_iterable
        count = parse_int(count)
        def clone_data():
            items = self.to_array()
            remaining = count
            while True:
                if not is_nan(remaining):
                    if remaining < 1:
                        break
                    remaining -= 1
                copy = from_iterable(items)
                yield copy.select(item_selector) if item_selector else copy
        return from_iterable(clone_data())

    def zip(self: 'Enumerable[T]', second: Iterable[U],
            result_selector: Optional[ZipSelector[T, U, V]] = None) -> 'Enumerable[V]':
        """pairs elements in lock-step and stops at the end of the shorter sequence"""
        from ..factories import from_iterable
        result_selector = result_selector if result_selector else lambda x, y, i: x + y
        def zip_data():
            other = from_iterable(second)
            index = -1
            while True:
                left = self.pull()
                if left.done:
                    break
                right = other.pull()
                if right.done:
                    break
                index += 1
                yield result_selector(left.value, right.value, index)
        return from_iterable(zip_data())

    # --- side effects ---

    def pipe(self: 'Enumerable[T]', action: Optional[EachAction[T]]) -> 'Enumerable[T]':
        """calls action(item, index) for every element as it passes through"""
        from ..factories import from_iterable
        def pipe_data():
            for index, item in enumerate(self):
                if action:
                    action(item, index)
                yield item
        return from_iterable(pipe_data())

    def trace(self: 'Enumerable[T]', formatter: Optional[Selector[T, Any]] = None) -> 'Enumerable[T]':
        """logs every element that passes through, see config.trace_level"""
        formatter = formatter if formatter else lambda item: item if item is None else str(item)
        def log_item(item, index):
            config = get_config()
            logging.getLogger(config.trace_logger).log(config.trace_level, f"[{index}] {formatter(item)}")
        return self.pipe(log_item)

    def make_resettable(self: 'Enumerable[T]') -> 'Enumerable[T]':
        """this sequence if it can be reset, else an array backed copy of the rest of it"""
        from ..factories import from_iterable
        if self.can_reset:
            return self
        return from_iterable(self.to_array())


def _cast_value(x: Any, type_name: str) -> Any:
    if type_name in ('bool', 'boolean'):
        return bool(x)
    if type_name == 'float':
        return parse_float(x)
    if type_name in ('func', 'function'):
        if callable(x):
            return x
        return lambda *args, **kwargs: x
    if type_name in ('null', 'undefined'):
        return None
    if type_name == 'number':
        return x if is_number(x) else parse_float(x)
    if type_name == 'object':
        if isinstance(x, (str, bytes, bytearray)):
            return json.loads(x)
        return x
    if type_name in ('int', 'integer'):
        return parse_int(x)
    if type_name == 'string':
        return str(x)
    if type_name == 'symbol':
        if isinstance(x, Symbol):
            return x
        return Symbol(x if x is None or is_number(x) else to_string_safe(x))
    raise UnsupportedOperationError(f"not supported type '{type_name}'")
