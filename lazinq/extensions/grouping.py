from __future__ import annotations
import typing
from ..types import *
from ..helpers import identity, to_equality_comparer_safe

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable, Grouping


def collect_groups(items: Iterable[T], key_selector: KeySelector[T, K],
                   key_comparer: EqualityComparer) -> List[Tuple[K, List[T]]]:
    """
    eager (key, values) pairs in first-key-occurrence order.
    keys are matched with a linear scan, so unhashable keys work too.
    """
    groups: List[Tuple[K, List[T]]] = []
    for item in items:
        key = key_selector(item)
        for group_key, values in groups:
            if key_comparer(key, group_key):
                values.append(item)
                break
        else:
            groups.append((key, [item]))
    return groups


class _GroupingOperations(Generic[T]):
    def group_by(self: 'Enumerable[T]', key_selector: Optional[KeySelector[T, K]] = None,
                 key_comparer: Union[EqualityComparer, bool, None] = None) -> 'Enumerable[Grouping[K, T]]':
        """group elements by a key. the groups are built on the first pull."""
        from ..enumerable import Grouping
        from ..factories import from_iterable
        key_selector = key_selector if key_selector else identity
        key_comparer = to_equality_comparer_safe(key_comparer)
        def group_data():
            for key, values in collect_groups(self, key_selector, key_comparer):
                yield Grouping(key, from_iterable(values))
        return from_iterable(group_data())

    def to_lookup(self: 'Enumerable[T]', key_selector: Optional[KeySelector[T, K]] = None,
                  key_comparer: Union[EqualityComparer, bool, None] = None) -> Dict[K, 'Grouping[K, T]']:
        """eager: a dict from each key to its grouping. keys must be hashable."""
        return {group.key: group for group in self.group_by(key_selector, key_comparer)}
