from typing import Any, Callable, Iterable, Optional, Tuple


class LazinqError(Exception):
    """base class for every error raised by lazinq"""
    pass


class NotFoundError(LazinqError, LookupError):
    """a strict lookup (first, last, single, element_at) found nothing."""

    def __init__(self, message: str = "element not found"):
        super().__init__(message)


class AmbiguousMatchError(LazinqError, LookupError):
    """single() matched more than one element."""

    def __init__(self, message: str = "sequence contains more than one matching element"):
        super().__init__(message)


class UnsupportedOperationError(LazinqError):
    """the operation is not available for this sequence or argument."""
    pass


class ConditionFailedError(LazinqError, AssertionError):
    """an assert_() / assert_all() condition did not hold for an element."""

    def __init__(self, message: str, index: int = -1, item: Any = None):
        super().__init__(message)
        self.index = index
        self.item = item


class FunctionError(LazinqError):
    """
    wraps an error raised by an action for one element.
    keeps the zero based index of the element and the action that failed.
    """

    def __init__(self, inner_error: BaseException, function: Optional[Callable] = None, index: int = -1):
        super().__init__(inner_error)
        self.inner_error = inner_error
        self.function = function
        self.index = index
        self.__cause__ = inner_error

    def __str__(self) -> str:
        title = "ACTION ERROR"
        if self.index >= 0:
            title += f" #{self.index}"
        line = "=" * (len(title) + 5)
        return f"{title}\n{line}\n{self.inner_error}"


class AggregateError(LazinqError):
    """bundles a list of independent failures. none of them is dropped."""

    def __init__(self, errors: Iterable[BaseException]):
        self._errors: Tuple[BaseException, ...] = tuple(e for e in errors if e is not None)
        super().__init__(f"{len(self._errors)} error(s) occurred")

    @property
    def errors(self) -> Tuple[BaseException, ...]:
        return self._errors

    def __len__(self) -> int:
        return len(self._errors)

    def __str__(self) -> str:
        blocks = []
        for i, error in enumerate(self._errors):
            title = f"ERROR #{i + 1}"
            blocks.append(f"{title}\n{'=' * (len(title) + 5)}\n{error}")
        return "\n\n".join(blocks)


class RejectedError(LazinqError):
    """an async_() action rejected with a reason that is not an exception."""

    def __init__(self, reason: Any):
        super().__init__(f"action rejected: {reason!r}")
        self.reason = reason
