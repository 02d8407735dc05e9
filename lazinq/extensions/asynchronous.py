from __future__ import annotations
import asyncio
import inspect
import logging
import typing
from ..types import *
from ..errors import RejectedError
from ..helpers import MISSING

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable

logger = logging.getLogger(__name__)

AsyncAction = Callable[['AsyncContext'], Any]

_RESOLVED, _CANCELLED, _REJECTED = 'resolved', 'cancelled', 'rejected'


class _AsyncRun:
    """state shared by every context of one async_() call"""

    def __init__(self):
        self.result: Any = None
        self.value: Any = None


class AsyncContext(Generic[T]):
    """
    what an async_() action gets for one element.
    the action finishes the element with exactly one of resolve(), cancel() or
    reject(); any later call for the same element is ignored.
    """

    def __init__(self, sequence: 'Enumerable[T]', item: T, index: int, previous_value: Any,
                 run: _AsyncRun, completion: asyncio.Future):
        self._sequence = sequence
        self._item = item
        self._index = index
        self._previous_value = previous_value
        self._run = run
        self._completion = completion

    @property
    def item(self) -> T:
        return self._item

    @property
    def index(self) -> int:
        return self._index

    @property
    def is_first(self) -> bool:
        return self._index == 0

    @property
    def previous_value(self) -> Any:
        """the value the previous element resolved with"""
        return self._previous_value

    @property
    def sequence(self) -> 'Enumerable[T]':
        return self._sequence

    @property
    def value(self) -> Any:
        """scratch value kept across all elements of the run"""
        return self._run.value

    @value.setter
    def value(self, new_value: Any):
        self._run.value = new_value

    @property
    def result(self) -> Any:
        """what the async_() coroutine returns"""
        return self._run.result

    @result.setter
    def result(self, new_value: Any):
        self._run.result = new_value

    @property
    def completed(self) -> bool:
        return self._completion.done()

    def _complete(self, outcome: str, payload: Any = None) -> bool:
        if self._completion.done():
            return False
        self._completion.set_result((outcome, payload))
        return True

    def resolve(self, next_value: Any = None):
        """finish this element, next_value becomes previous_value of the next one"""
        self._complete(_RESOLVED, next_value)

    def cancel(self, result: Any = MISSING):
        """stop the whole run successfully"""
        if self._completion.done():
            return
        if result is not MISSING:
            self._run.result = result
        self._complete(_CANCELLED)

    def reject(self, reason: Any, result: Any = MISSING):
        """stop the whole run with an error"""
        if self._completion.done():
            return
        if result is not MISSING:
            self._run.result = result
        self._complete(_REJECTED, reason)


class _AsyncOperations(Generic[T]):
    async def async_(self: 'Enumerable[T]', action: Optional[AsyncAction] = None,
                     previous_value: Any = None) -> Any:
        """
        walks the sequence one element at a time. the next element is pulled
        only after the action resolved the current one, so exactly one action
        is in flight. the action may be a plain function or a coroutine
        function, an exception raised by it rejects the run.

        returns the context's result once the sequence is exhausted or cancelled,
        raises the rejection reason otherwise.
        """
        loop = asyncio.get_running_loop()
        run = _AsyncRun()
        index = -1
        while True:
            step = self.pull()
            if step.done:
                return run.result
            index += 1

            completion = loop.create_future()
            context = AsyncContext(self, step.value, index, previous_value, run, completion)
            if action is None:
                context.resolve()
            else:
                try:
                    returned = action(context)
                    if inspect.isawaitable(returned):
                        await returned
                except Exception as e:
                    context.reject(e)

            outcome, payload = await completion
            if outcome == _RESOLVED:
                previous_value = payload
            elif outcome == _CANCELLED:
                logger.debug(f"async_ cancelled at index {index}")
                return run.result
            else:
                logger.debug(f"async_ rejected at index {index}: {payload!r}")
                if isinstance(payload, BaseException):
                    raise payload
                raise RejectedError(payload)
