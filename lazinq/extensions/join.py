from __future__ import annotations
import typing
from ..types import *
from ..helpers import identity, to_equality_comparer_safe
from .grouping import collect_groups

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable


def _resolve_key_selectors(outer_key_selector, inner_key_selector):
    """a missing key selector borrows the other one, both missing means identity"""
    if not outer_key_selector and not inner_key_selector:
        return identity, identity
    return (outer_key_selector or inner_key_selector), (inner_key_selector or outer_key_selector)


class _JoinOperations(Generic[T]):
    def _matching_groups(self: 'Enumerable[T]', inner: Iterable[U], outer_key_selector, inner_key_selector,
                         key_comparer: EqualityComparer):
        """pairs of (outer values, inner values) whose keys match"""
        from ..factories import from_iterable
        default_comparer = to_equality_comparer_safe(None)
        outer_groups = collect_groups(self, outer_key_selector, default_comparer)
        inner_groups = collect_groups(from_iterable(inner), inner_key_selector, default_comparer)
        for outer_key, outer_values in outer_groups:
            for inner_key, inner_values in inner_groups:
                if key_comparer(outer_key, inner_key):
                    yield outer_values, inner_values

    def join(self: 'Enumerable[T]', inner: Iterable[U],
             outer_key_selector: Optional[KeySelector[T, K]] = None,
             inner_key_selector: Optional[KeySelector[U, K]] = None,
             result_selector: Optional[Callable[[T, U], V]] = None,
             key_comparer: Union[EqualityComparer, bool, None] = None) -> 'Enumerable[V]':
        """inner join two sequences based on matching keys"""
        from ..factories import from_iterable
        outer_key_selector, inner_key_selector = _resolve_key_selectors(outer_key_selector, inner_key_selector)
        result_selector = result_selector if result_selector else JoinedItems
        key_comparer = to_equality_comparer_safe(key_comparer)
        def join_data():
            for outer_values, inner_values in self._matching_groups(
                    inner, outer_key_selector, inner_key_selector, key_comparer):
                for outer_item in outer_values:
                    for inner_item in inner_values:
                        yield result_selector(outer_item, inner_item)
        return from_iterable(join_data())

    def group_join(self: 'Enumerable[T]', inner: Iterable[U],
                   outer_key_selector: Optional[KeySelector[T, K]] = None,
                   inner_key_selector: Optional[KeySelector[U, K]] = None,
                   result_selector: Optional[Callable[[T, 'Enumerable[U]'], V]] = None,
                   key_comparer: Union[EqualityComparer, bool, None] = None) -> 'Enumerable[V]':
        """each outer element together with the sequence of matching inner elements"""
        from ..factories import from_iterable
        outer_key_selector, inner_key_selector = _resolve_key_selectors(outer_key_selector, inner_key_selector)
        result_selector = result_selector if result_selector else JoinedItems
        key_comparer = to_equality_comparer_safe(key_comparer)
        def group_join_data():
            for outer_values, inner_values in self._matching_groups(
                    inner, outer_key_selector, inner_key_selector, key_comparer):
                for outer_item in outer_values:
                    yield result_selector(outer_item, from_iterable(inner_values))
        return from_iterable(group_join_data())
