from __future__ import annotations
import random
import typing
from itertools import count
from ..types import *
from ..helpers import identity, to_comparer_safe

if typing.TYPE_CHECKING:
    from ..enumerable import OrderedEnumerable


class _OrderingOperations(Generic[T]):
    """
    sorting needs every element, so unlike the other operators these read the
    whole source as soon as they are called.
    """

    def order(self, comparer: Optional[Comparer] = None) -> 'OrderedEnumerable[T]':
        """sort the elements themselves"""
        return self.order_by(identity, comparer)

    def order_by(self, selector: Optional[KeySelector[T, K]] = None,
                 comparer: Optional[Comparer] = None) -> 'OrderedEnumerable[T]':
        """stable sort by a key"""
        from ..enumerable import OrderedEnumerable
        return OrderedEnumerable(self, selector, comparer)

    def order_by_descending(self, selector: Optional[KeySelector[T, K]] = None,
                            comparer: Optional[Comparer] = None) -> 'OrderedEnumerable[T]':
        """sort elements by a key in descending order"""
        comparer = to_comparer_safe(comparer)
        return self.order_by(selector, lambda x, y: comparer(y, x))

    def order_descending(self, comparer: Optional[Comparer] = None) -> 'OrderedEnumerable[T]':
        return self.order_by_descending(identity, comparer)

    def reverse(self) -> 'OrderedEnumerable[T]':
        """inverts the order of the elements in a sequence"""
        positions = count()
        return self.order_by_descending(lambda _: next(positions))

    def rand(self, sort_value_provider: Optional[Callable[[], Any]] = None) -> 'OrderedEnumerable[T]':
        """orders by a random key per element"""
        sort_value_provider = sort_value_provider if sort_value_provider else random.random
        return self.order_by(lambda _: sort_value_provider())

    def shuffle(self, sort_value_provider: Optional[Callable[[], Any]] = None) -> 'OrderedEnumerable[T]':
        return self.rand(sort_value_provider)
