from __future__ import annotations
import typing
from ..types import *
from ..helpers import identity, to_equality_comparer_safe

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable


def _contains(items: List[Any], value: Any, comparer: EqualityComparer) -> bool:
    for candidate in items:
        if comparer(value, candidate):
            return True
    return False


class _SetOperations(Generic[T]):
    """
    set-theoretic operators. equality is decided by a pluggable comparer
    (None: configured default, True: strict, or any two argument callable),
    so membership is a linear scan instead of a hash lookup.
    """

    def distinct(self: 'Enumerable[T]', comparer: Union[EqualityComparer, bool, None] = None) -> 'Enumerable[T]':
        """return distinct elements. preserves order of first appearance."""
        return self.distinct_by(identity, comparer)

    def distinct_by(self: 'Enumerable[T]', selector: Optional[KeySelector[T, K]],
                    comparer: Union[EqualityComparer, bool, None] = None) -> 'Enumerable[T]':
        """return the first element for every distinct key"""
        from ..factories import from_iterable
        selector = selector if selector else identity
        comparer = to_equality_comparer_safe(comparer)
        def distinct_data():
            seen_keys = []
            for item in self:
                key = selector(item)
                if not _contains(seen_keys, key, comparer):
                    seen_keys.append(key)
                    yield item
        return from_iterable(distinct_data())

    def except_(self: 'Enumerable[T]', second: Iterable[T],
                comparer: Union[EqualityComparer, bool, None] = None) -> 'Enumerable[T]':
        """return elements from the first sequence not in the second (set difference)."""
        from ..factories import from_iterable
        comparer = to_equality_comparer_safe(comparer)
        def except_data():
            # the second sequence is read completely before the first one is pulled
            excluded = from_iterable(second).distinct().to_array()
            for item in self:
                if not _contains(excluded, item, comparer):
                    yield item
        return from_iterable(except_data())

    def intersect(self: 'Enumerable[T]', second: Iterable[T],
                  comparer: Union[EqualityComparer, bool, None] = None) -> 'Enumerable[T]':
        """return the order-preserving intersection of two sequences."""
        from ..factories import from_iterable
        comparer = to_equality_comparer_safe(comparer)
        def intersect_data():
            included = from_iterable(second).distinct().to_array()
            for item in self:
                if _contains(included, item, comparer):
                    yield item
        return from_iterable(intersect_data())

    def union(self: 'Enumerable[T]', second: Iterable[T],
              comparer: Union[EqualityComparer, bool, None] = None) -> 'Enumerable[T]':
        """return the order-preserving union of two sequences (distinct elements)."""
        return self.concat(second).distinct(comparer)
