from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from functools import cmp_to_key
from .types import *
from .errors import UnsupportedOperationError
from .helpers import identity, to_comparer_safe

# --- operators ---
from .extensions.core import _CoreOperations
from .extensions.set import _SetOperations
from .extensions.grouping import _GroupingOperations
from .extensions.join import _JoinOperations
from .extensions.ordering import _OrderingOperations
from .extensions.numeric import _NumericOperations
from .extensions.terminal import _TerminalOperations
from .extensions.asynchronous import _AsyncOperations

# --- accessors ---
from .extensions.terminal import TerminalAccessor
from .extensions.stats import StatsAccessor

logger = logging.getLogger(__name__)


# --- capability interface ---

class IEnumerable(ABC, Generic[T]):
    """anything implementing this is treated as a lazinq sequence"""

    @abstractmethod
    def pull(self) -> Step:
        """produce the next element, or the done step"""
        pass

    @property
    @abstractmethod
    def can_reset(self) -> bool:
        pass

    @abstractmethod
    def reset(self) -> 'IEnumerable[T]':
        pass


# --- base sequence implementation ---

class Enumerable(
    IEnumerable[T],
    _CoreOperations[T],
    _SetOperations[T],
    _GroupingOperations[T],
    _JoinOperations[T],
    _OrderingOperations[T],
    _NumericOperations[T],
    _TerminalOperations[T],
    _AsyncOperations[T]
):
    """a lazy, pull based, single pass cursor with linq-style operators."""

    def __init__(self):
        self._index = -1
        self._current: Optional[Step] = None
        # --- initialize accessors ---
        self.to = TerminalAccessor(self)
        self.stats = StatsAccessor(self)

    def __iter__(self) -> Iterator[T]:
        return self

    def __next__(self) -> T:
        step = self.pull()
        if step.done:
            raise StopIteration
        return step.value

    @property
    def index(self) -> int:
        """zero based index of the current element, -1 before the first pull"""
        return self._index

    @property
    def current(self) -> Optional[Step]:
        return self._current

    @property
    def can_reset(self) -> bool:
        return False

    def reset(self) -> 'Enumerable[T]':
        raise UnsupportedOperationError(f"{type(self).__name__} cannot be reset")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(index={self._index})"


class IteratorEnumerable(Enumerable[T]):
    """a sequence on top of a python iterator. not resettable."""

    def __init__(self, iterator: Optional[Iterator[T]] = None):
        super().__init__()
        self._iterator = iterator if iterator is not None else iter(())

    def pull(self) -> Step:
        try:
            value = next(self._iterator)
        except StopIteration:
            result = DONE
        else:
            self._index += 1
            result = Step(value, False)
        self._current = result
        return result


class ArrayEnumerable(Enumerable[T]):
    """a resettable sequence on top of an indexable collection."""

    def __init__(self, array: Optional[Sequence[T]] = None):
        super().__init__()
        self._array = array if array is not None else []

    @property
    def can_reset(self) -> bool:
        return True

    def length(self) -> int:
        """number of remaining elements. does not move the cursor."""
        return max(len(self._array) - (self._index + 1), 0)

    def pull(self) -> Step:
        next_index = self._index + 1
        if next_index >= len(self._array):
            result = DONE
        else:
            self._index = next_index
            result = Step(self._array[next_index], False)
        self._current = result
        return result

    def reset(self) -> 'ArrayEnumerable[T]':
        self._index = -1
        self._current = None
        return self


class EnumerableWrapper(Enumerable[T]):
    """delegates the cursor to another sequence"""

    def __init__(self, sequence: IEnumerable[T]):
        super().__init__()
        self._sequence = sequence

    @property
    def index(self) -> int:
        return self._sequence.index

    @property
    def current(self) -> Optional[Step]:
        return self._sequence.current

    @property
    def can_reset(self) -> bool:
        return self._sequence.can_reset

    def length(self) -> int:
        return self._sequence.length()

    def pull(self) -> Step:
        return self._sequence.pull()

    def reset(self) -> 'EnumerableWrapper[T]':
        self._sequence.reset()
        return self


class Grouping(EnumerableWrapper[T], Generic[K, T]):
    """the values of one group together with their key"""

    def __init__(self, key: K, sequence: IEnumerable[T]):
        super().__init__(sequence)
        self._key = key

    @property
    def key(self) -> K:
        return self._key

    def __repr__(self) -> str:
        return f"Grouping(key={self._key!r})"


# --- ordered sequence ---

class OrderedEnumerable(EnumerableWrapper[T]):
    """
    a sorted sequence. the source is materialized when the ordering is created,
    later then_by() levels re-sort that original snapshot, never the sorted output.
    """

    def __init__(self, sequence: IEnumerable[T], selector: Optional[KeySelector[T, K]] = None,
                 comparer: Optional[Comparer] = None):
        from .factories import from_iterable
        self._order_selector = selector if selector else identity
        self._order_comparer = to_comparer_safe(comparer)
        self._original_items: List[T] = from_iterable(sequence).to_array()

        # decorate once, so each key is computed exactly one time
        decorated = [(self._order_selector(item), item) for item in self._original_items]
        compare = self._order_comparer
        decorated.sort(key=cmp_to_key(lambda x, y: compare(x[0], y[0])))
        logger.debug(f"ordered snapshot of {len(decorated)} items")

        super().__init__(from_iterable([item for _, item in decorated]))

    @property
    def selector(self) -> KeySelector[T, Any]:
        return self._order_selector

    @property
    def comparer(self) -> Comparer:
        return self._order_comparer

    def then(self, comparer: Optional[Comparer] = None) -> 'OrderedEnumerable[T]':
        """tie-break by the elements themselves"""
        return self.then_by(identity, comparer)

    def then_by(self, selector: Optional[KeySelector[T, K]] = None,
                comparer: Optional[Comparer] = None) -> 'OrderedEnumerable[T]':
        """secondary sort ascending"""
        from .factories import from_iterable
        selector = selector if selector else identity
        comparer = to_comparer_safe(comparer)
        previous_selector, previous_comparer = self._order_selector, self._order_comparer

        def composite_compare(x: Tuple, y: Tuple) -> int:
            primary = previous_comparer(x[0], y[0])
            if primary != 0:
                return primary
            return comparer(x[1], y[1])

        return from_iterable(self._original_items).order_by(
            lambda item: (previous_selector(item), selector(item)),
            composite_compare
        )

    def then_by_descending(self, selector: Optional[KeySelector[T, K]] = None,
                           comparer: Optional[Comparer] = None) -> 'OrderedEnumerable[T]':
        """secondary sort descending"""
        comparer = to_comparer_safe(comparer)
        return self.then_by(selector, lambda x, y: comparer(y, x))

    def then_descending(self, comparer: Optional[Comparer] = None) -> 'OrderedEnumerable[T]':
        return self.then_by_descending(identity, comparer)
