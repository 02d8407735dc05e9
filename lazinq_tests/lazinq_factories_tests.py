import suite
from collections import deque
from lazinq import (
    Q, lazinq, from_iterable, from_string, create, empty, from_range, repeat, build, build_many,
    randoms, pop_from, shift_from, as_enumerable, is_enumerable, is_sequence, is_empty,
    not_found, is_none_or_empty, Enumerable, ArrayEnumerable, IteratorEnumerable, IEnumerable,
    Step, IS_EMPTY, NOT_FOUND
)

test = suite.test
assert_that = suite.assert_that


class Countdown(IEnumerable):
    """a minimal third party sequence that only speaks the pull protocol"""

    def __init__(self, start):
        self._left = start

    def pull(self):
        if self._left <= 0:
            return Step(None, True)
        self._left -= 1
        return Step(self._left + 1, False)

    @property
    def can_reset(self):
        return False

    def reset(self):
        return self


# --- from_iterable ---

@test("from_iterable picks the backing by source type")
def test_from_iterable_kinds():
    assert_that(isinstance(from_iterable([1]), ArrayEnumerable), "lists are array backed")
    assert_that(isinstance(from_iterable((1,)), ArrayEnumerable), "tuples are array backed")
    assert_that(isinstance(from_iterable(range(3)), ArrayEnumerable), "ranges are array backed")
    assert_that(isinstance(from_iterable(x for x in [1]), IteratorEnumerable), "generators are iterator backed")
    assert_that(from_iterable(None).to_array() == [], "None gives an empty sequence")
    assert_that(from_iterable('hey').to_array() == ['h', 'e', 'y'], "strings give characters")
    assert_that(from_iterable({'a': 1, 'b': 2}).to_array() == ['a', 'b'], "dicts give their keys")


@test("from_iterable wraps any pull based sequence")
def test_from_iterable_protocol():
    seq = from_iterable(Countdown(3))
    assert_that(isinstance(seq, Enumerable), "wrapped into a full sequence")
    assert_that(seq.select(lambda x: x * 10).to_array() == [30, 20, 10], "operators work on the wrapper")


@test("wrapping a sequence shares its cursor")
def test_from_iterable_shares_cursor():
    source = Q([1, 2, 3])
    wrapped = from_iterable(source)
    assert_that(wrapped.first() == 1, "first element through the wrapper")
    assert_that(source.to_array() == [2, 3], "the source moved along")


@test("lazinq and Q are aliases of from_iterable")
def test_aliases():
    assert_that(lazinq is from_iterable and Q is from_iterable, "aliases")


@test("from_string and create")
def test_from_string_create():
    assert_that(from_string(123).to_array() == ['1', '2', '3'], "from_string of a number")
    assert_that(from_string(None).to_array() == [], "from_string of None")
    assert_that(create(1, 'a', None).to_array() == [1, 'a', None], "create")
    assert_that(create().to_array() == [] and empty().to_array() == [], "empty sequences")


# --- generators ---

@test("from_range counts up, endless without a count")
def test_from_range():
    assert_that(from_range(10, 5).to_array() == [10, 11, 12, 13, 14], "range with count")
    assert_that(from_range(1.5, 2).to_array() == [1.5, 2.5], "float start")
    assert_that(from_range('x', 2).to_array() == [0, 1], "unparseable start falls back to 0")
    assert_that(from_range(0, 0).to_array() == [], "zero count")
    assert_that(from_range(7).take(3).to_array() == [7, 8, 9], "endless range")


@test("repeat repeats an item")
def test_repeat():
    assert_that(repeat('a', 3).to_array() == ['a', 'a', 'a'], "repeat with count")
    assert_that(repeat(0, '2').to_array() == [0, 0], "count is parsed")
    assert_that(repeat(None).take(4).count() == 4, "endless repeat")


@test("build calls the factory until cancelled")
def test_build():
    squares = build(lambda cancel, index: index * index, 4).to_array()
    assert_that(squares == [0, 1, 4, 9], f"build with count: {squares}")

    def until_five(cancel, index):
        if index >= 5:
            cancel()
        return index

    assert_that(build(until_five).to_array() == [0, 1, 2, 3, 4], "the value of the cancelling call is dropped")

    def undo_cancel(cancel, index):
        cancel()
        cancel(False)
        return index

    assert_that(build(undo_cancel, 2).to_array() == [0, 1], "cancel(False) takes the cancel back")


@test("build_many flattens the factory results")
def test_build_many():
    def ranges(cancel, index):
        if index == 3:
            cancel()
        return range(index)

    assert_that(build_many(ranges).to_array() == [0, 0, 1], "flattened ranges")
    assert_that(build_many(lambda cancel, index: None, 3).to_array() == [], "None results are skipped")


@test("randoms yields floats in [0, 1)")
def test_randoms():
    values = randoms(50).to_array()
    assert_that(len(values) == 50 and all(0 <= v < 1 for v in values), "random range")
    dice = randoms(20, lambda value, index: int(value * 6) + 1).to_array()
    assert_that(all(1 <= d <= 6 for d in dice), "value provider maps the values")
    assert_that(randoms().take(3).count() == 3, "endless without a count")


@test("pop_from and shift_from drain their container")
def test_pop_shift():
    stack = [1, 2, 3]
    assert_that(pop_from(stack).to_array() == [3, 2, 1] and stack == [], "pop_from")
    queue = [1, 2, 3]
    assert_that(shift_from(queue).to_array() == [1, 2, 3] and queue == [], "shift_from on a list")
    dq = deque('ab')
    assert_that(shift_from(dq).to_array() == ['a', 'b'] and not dq, "shift_from on a deque")


@test("pop_from is lazy")
def test_pop_lazy():
    stack = [1, 2, 3]
    seq = pop_from(stack)
    assert_that(stack == [1, 2, 3], "nothing popped before consumption")
    seq.first()
    assert_that(stack == [1, 2], "one pop for one element")


# --- checks ---

@test("as_enumerable keeps sequences and None")
def test_as_enumerable():
    seq = Q([1])
    assert_that(as_enumerable(seq) is seq, "sequences are returned as is")
    assert_that(as_enumerable(None) is None, "None stays None")
    assert_that(as_enumerable([1, 2]).to_array() == [1, 2], "lists are wrapped")


@test("is_enumerable and is_sequence")
def test_is_enumerable_sequence():
    assert_that(is_enumerable(Q([])) and is_enumerable(Countdown(1)), "sequences")
    assert_that(not is_enumerable([1]) and not is_enumerable(None), "plain values")
    assert_that(is_sequence('abc') and is_sequence([1]) and is_sequence(x for x in []), "iterables")
    assert_that(not is_sequence(None) and not is_sequence(5), "non iterables")


@test("is_empty and not_found recognize the markers")
def test_markers():
    assert_that(is_empty(empty().sum()) and not is_empty(None), "is_empty")
    assert_that(not_found(empty().first_or_default()) and not not_found(0), "not_found")
    assert_that(IS_EMPTY is not NOT_FOUND and IS_EMPTY != NOT_FOUND, "markers are distinct")


@test("is_none_or_empty")
def test_is_none_or_empty():
    assert_that(is_none_or_empty(None) and is_none_or_empty(empty()), "None and empty")
    assert_that(not is_none_or_empty(Q([0])), "a sequence with an element")


if __name__ == "__main__":
    suite.run(title="lazinq factories test")
