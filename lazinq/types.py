from typing import (
    TypeVar, Generic, Callable, Iterator, Iterable, Any, Optional, Union,
    Dict, List, Tuple, Set, Type, NamedTuple, Sequence
)

T = TypeVar('T')
U = TypeVar('U')
K = TypeVar('K')
V = TypeVar('V')

Predicate = Callable[[T], bool]
Selector = Callable[[T], U]
KeySelector = Callable[[T], K]
Comparer = Callable[[T, T], int]
EqualityComparer = Callable[[T, U], bool]
Accumulator = Callable[[U, T], U]
EachAction = Callable[[T, int], Any]
ZipSelector = Callable[[T, U, int], V]
ItemMessage = Union[str, Callable[[T, int], Any], None]


class Symbol:
    """a unique, immutable marker. two symbols are only equal when identical."""

    __slots__ = ('_description',)

    def __init__(self, description: Any = None):
        object.__setattr__(self, '_description', description)

    def __setattr__(self, name, value):
        raise AttributeError("symbols are immutable")

    @property
    def description(self) -> Any:
        return self._description

    def __repr__(self) -> str:
        if self._description is None:
            return "Symbol()"
        return f"Symbol({self._description})"


# process-wide sentinels
IS_EMPTY = Symbol("IS_EMPTY")
NOT_FOUND = Symbol("NOT_FOUND")


class Step(NamedTuple):
    """the result of a single pull: a value, or the done signal"""
    value: Any
    done: bool


DONE: Step = Step(None, True)


class JoinedItems(NamedTuple):
    """default result of join() and group_join()"""
    outer: Any
    inner: Any
