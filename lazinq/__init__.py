r"""
'    .__                  .__
'    |  | _____  ________ |__| ____   ______
'    |  | \__  \ \___   / |  |/    \ / ____/
'    |  |__/ __ \_/    /  |  |   |  < <_|  |
'    |____(____  /_____ \ |__|___|  /\__   |
'              \/      \/         \/    |__|
"""
import logging

# expose the main classes
from .enumerable import (
    IEnumerable,
    Enumerable,
    IteratorEnumerable,
    ArrayEnumerable,
    EnumerableWrapper,
    Grouping,
    OrderedEnumerable
)
from .extensions.asynchronous import AsyncContext

# expose the factory functions
from .factories import (
    from_iterable,
    from_string,
    create,
    empty,
    from_range,
    repeat,
    build,
    build_many,
    randoms,
    pop_from,
    shift_from,
    sort,
    sort_desc,
    as_enumerable,
    is_enumerable,
    is_sequence,
    is_empty,
    not_found,
    is_none_or_empty,
    lazinq,
    Q
)

# expose supporting data classes
from .types import Symbol, Step, JoinedItems, IS_EMPTY, NOT_FOUND
from .errors import (
    LazinqError,
    NotFoundError,
    AmbiguousMatchError,
    UnsupportedOperationError,
    ConditionFailedError,
    FunctionError,
    AggregateError,
    RejectedError
)
from .config import LazinqConfig, get_config, configure, reset_config

logging.getLogger(__name__).addHandler(logging.NullHandler())

# define what `import *` does
__all__ = [
    "IEnumerable",
    "Enumerable",
    "IteratorEnumerable",
    "ArrayEnumerable",
    "EnumerableWrapper",
    "Grouping",
    "OrderedEnumerable",
    "AsyncContext",
    "from_iterable",
    "from_string",
    "create",
    "empty",
    "from_range",
    "repeat",
    "build",
    "build_many",
    "randoms",
    "pop_from",
    "shift_from",
    "sort",
    "sort_desc",
    "as_enumerable",
    "is_enumerable",
    "is_sequence",
    "is_empty",
    "not_found",
    "is_none_or_empty",
    "lazinq",
    "Q",
    "Symbol",
    "Step",
    "JoinedItems",
    "IS_EMPTY",
    "NOT_FOUND",
    "LazinqError",
    "NotFoundError",
    "AmbiguousMatchError",
    "UnsupportedOperationError",
    "ConditionFailedError",
    "FunctionError",
    "AggregateError",
    "RejectedError",
    "LazinqConfig",
    "get_config",
    "configure",
    "reset_config"
]
