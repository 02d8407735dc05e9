import random
import typing
from collections.abc import Iterable as IterableABC
from .types import *
from .coercion import to_string_safe, to_number, parse_int, is_nan

if typing.TYPE_CHECKING:
    from .enumerable import Enumerable, OrderedEnumerable

CancelableFactory = Callable[[Callable[..., None], int], Any]


def _limit(count: Any) -> Optional[int]:
    """a parsed count, None means unlimited"""
    if count is None:
        return None
    count = parse_int(count)
    return None if is_nan(count) else count


def _pull_data(sequence):
    while True:
        step = sequence.pull()
        if step.done:
            return
        yield step.value


def from_iterable(data: Optional[Iterable[T]] = None) -> 'Enumerable[T]':
    """create enumerable from iterable"""
    from .enumerable import IEnumerable, ArrayEnumerable, IteratorEnumerable
    if data is None:
        return ArrayEnumerable([])
    if isinstance(data, IEnumerable):
        return IteratorEnumerable(_pull_data(data))
    if isinstance(data, str):
        return from_string(data)
    if isinstance(data, (list, tuple, range)):
        return ArrayEnumerable(data)
    return IteratorEnumerable(iter(data))


def from_string(value: Any) -> 'Enumerable[str]':
    """the characters of the string form of a value"""
    from .enumerable import ArrayEnumerable
    return ArrayEnumerable(list(to_string_safe(value)))


def create(*items: T) -> 'Enumerable[T]':
    return from_iterable(list(items))


def empty() -> 'Enumerable[Any]':
    """create empty enumerable"""
    return from_iterable(iter(()))


def from_range(start: Any = 0, count: Any = None) -> 'Enumerable[Union[int, float]]':
    """consecutive numbers from start, endless without a count"""
    start = to_number(start)
    start = 0 if is_nan(start) else start
    count = _limit(count)
    def range_data():
        current, remaining = start, count
        while remaining is None or remaining > 0:
            yield current
            current += 1
            if remaining is not None:
                remaining -= 1
    return from_iterable(range_data())


def repeat(item: T, count: Any = None) -> 'Enumerable[T]':
    """create enumerable with repeated item, endless without a count"""
    count = _limit(count)
    def repeat_data():
        remaining = count
        while remaining is None or remaining > 0:
            yield item
            if remaining is not None:
                remaining -= 1
    return from_iterable(repeat_data())


def _build_data(factory: CancelableFactory, count: Optional[int]):
    """
    yields (index, value) from factory(cancel, index) until cancelled or count is reached.
    a value produced in the call that cancels is dropped.
    """
    running = [True]

    def cancel(flag: bool = True):
        running[0] = not flag

    index = 0
    while running[0] and (count is None or index < count):
        value = factory(cancel, index)
        if running[0]:
            yield value
        index += 1


def build(factory: CancelableFactory, count: Any = None) -> 'Enumerable[Any]':
    """sequence of factory(cancel, index) results"""
    return from_iterable(_build_data(factory, _limit(count)))


def build_many(factory: CancelableFactory, count: Any = None) -> 'Enumerable[Any]':
    """like build(), but every factory result is a sequence that gets flattened"""
    def build_many_data():
        for items in _build_data(factory, _limit(count)):
            if items is not None:
                yield from from_iterable(items)
    return from_iterable(build_many_data())


def randoms(count: Any = None,
            value_provider: Optional[Callable[[float, int], Any]] = None) -> 'Enumerable[Any]':
    """random floats in [0, 1), optionally mapped by value_provider(value, index)"""
    value_provider = value_provider if value_provider else lambda value, index: value
    return build(lambda cancel, index: value_provider(random.random(), index), count)


def pop_from(stack: Any) -> 'Enumerable[T]':
    """drains a list-like stack from its end"""
    def pop_data():
        while stack:
            yield stack.pop()
    return from_iterable(pop_data())


def shift_from(queue: Any) -> 'Enumerable[T]':
    """drains a list or deque from its front"""
    def shift_data():
        while queue:
            yield queue.popleft() if hasattr(queue, 'popleft') else queue.pop(0)
    return from_iterable(shift_data())


def sort(items: Iterable[T], selector: Optional[KeySelector[T, K]] = None,
         comparer: Optional[Comparer] = None) -> 'OrderedEnumerable[T]':
    if not selector:
        return from_iterable(items).order(comparer)
    return from_iterable(items).order_by(selector, comparer)


def sort_desc(items: Iterable[T], selector: Optional[KeySelector[T, K]] = None,
              comparer: Optional[Comparer] = None) -> 'OrderedEnumerable[T]':
    if not selector:
        return from_iterable(items).order_descending(comparer)
    return from_iterable(items).order_by_descending(selector, comparer)


# --- checks ---

def as_enumerable(value: Any) -> Optional['Enumerable[Any]']:
    """the value itself if it already is a sequence, None stays None"""
    if value is None or is_enumerable(value):
        return value
    return from_iterable(value)


def is_enumerable(value: Any) -> bool:
    from .enumerable import IEnumerable
    return isinstance(value, IEnumerable)


def is_sequence(value: Any) -> bool:
    """anything from_iterable() accepts as a source"""
    return value is not None and isinstance(value, (IterableABC, str))


def is_empty(value: Any) -> bool:
    """is the IS_EMPTY marker"""
    return value is IS_EMPTY


def not_found(value: Any) -> bool:
    """is the NOT_FOUND marker"""
    return value is NOT_FOUND


def is_none_or_empty(sequence: Optional['Enumerable[Any]']) -> bool:
    """None or without remaining elements. consumes the sequence."""
    return sequence is None or sequence.is_empty()


# --- aliases ---
lazinq = from_iterable
Q = from_iterable
