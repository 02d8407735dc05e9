import math
import numpy as np
import pandas as pd
import suite
from collections import namedtuple
from dgen import from_schema
from lazinq import (
    Q, empty, from_range, IS_EMPTY, NOT_FOUND, NotFoundError, AmbiguousMatchError,
    AggregateError, FunctionError, ConditionFailedError, LazinqError
)

test = suite.test
assert_that = suite.assert_that
assert_raises = suite.assert_raises

Item = namedtuple('Item', ['name', 'price', 'qty'])
items = [Item('pen', 2.5, 10), Item('book', 12.0, 2), Item('bag', 30.0, 1), Item('ink', 2.5, 4)]

sensor_schema = {
    'sensor': {'_qen_provider': 'choice', 'from': ['t1', 't2', 't3']},
    'reading': ('pyfloat', {'min_value': -20, 'max_value': 40}),
}


# --- conversions ---

@test("count matches the length of to_array")
def test_count_matches_array():
    assert_that(len(from_range(3, 7).to_array()) == from_range(3, 7).count(), "count and to_array disagree")


@test("to_object keys by index or by selector")
def test_to_object():
    assert_that(Q('ab').to_object() == {0: 'a', 1: 'b'}, "index keys")
    by_name = Q(items).to_object(lambda item, index: f"{index}:{item.name}")
    assert_that(list(by_name) == ['0:pen', '1:book', '2:bag', '3:ink'], f"selector keys: {list(by_name)}")


@test("the to accessor converts to python containers")
def test_to_accessor_python():
    assert_that(Q((1, 2)).to.list() == [1, 2], "to.list")
    assert_that(Q([1, 1, 2]).to.set() == {1, 2}, "to.set")
    assert_that(Q(items).to.dict(lambda i: i.name, lambda i: i.qty)['book'] == 2, "to.dict")
    by_price = Q(items).to.dict(lambda i: i.price, lambda i: i.name)
    assert_that(by_price[2.5] == 'ink', "later elements win on duplicate keys")
    assert_that(Q(items).to.set(lambda i: i.price) == {2.5, 12.0, 30.0}, "to.set with a selector")
    assert_that(Q(items).to.list(lambda i: i.qty) == [10, 2, 1, 4], "to.list with a selector")


@test("the to accessor converts to numpy and pandas")
def test_to_accessor_numpy_pandas():
    arr = Q([1, 2, 3]).to.array()
    assert_that(isinstance(arr, np.ndarray) and arr.sum() == 6, "to.array")
    series = Q([1.5, 2.5]).to.pandas()
    assert_that(isinstance(series, pd.Series) and series.mean() == 2.0, "to.pandas")
    prices = Q(items).to.pandas(lambda i: i.price, name='price')
    assert_that(prices.name == 'price' and prices.tolist() == [2.5, 12.0, 30.0, 2.5], "to.pandas with selector and name")
    qty = Q(items).to.array(lambda i: i.qty, dtype=float)
    assert_that(qty.dtype == np.float64 and qty.tolist() == [10.0, 2.0, 1.0, 4.0], "to.array with a dtype")
    readings = from_schema(sensor_schema, seed=1).take(12)
    df = readings.to.df()
    assert_that(isinstance(df, pd.DataFrame) and list(df.columns) == ['sensor', 'reading'], "to.df columns")
    assert_that(len(df) == 12, "to.df rows")
    picked = from_schema(sensor_schema, seed=2).take(5).to.df(columns=['reading'])
    assert_that(list(picked.columns) == ['reading'] and len(picked) == 5, "to.df keeps the chosen columns")
    named = Q(items).to.df()
    assert_that(list(named.columns) == ['name', 'price', 'qty'], "namedtuple fields become columns")


@test("join_to_string stringifies every element")
def test_join_to_string():
    assert_that(Q([1, None, 'x']).join_to_string(', ') == "1, , x", "None becomes an empty string")
    assert_that(empty().join_to_string('-') == "", "empty gives an empty string")


@test("push_to appends to a stack")
def test_push_to():
    stack = [0]
    Q([1, 2]).push_to(stack)
    assert_that(stack == [0, 1, 2], f"push_to failed: {stack}")


@test("consume drains the sequence")
def test_consume():
    seq = Q([1, 2, 3])
    seq.consume()
    assert_that(seq.index == 2 and seq.pull().done, "consume should read everything")


# --- aggregation ---

@test("aggregate folds from the left")
def test_aggregate():
    assert_that(Q([1, 2, 3]).aggregate() == 6, "default func adds")
    assert_that(Q('abc').aggregate(lambda acc, x: x + acc) == 'cba', "no seed: first element seeds")
    assert_that(Q([1, 2, 3]).aggregate(lambda acc, x: acc * x, 10) == 60, "with seed")
    assert_that(Q([1, 2]).aggregate(lambda a, x: a + x, 0, lambda r: r * 100) == 300, "result selector")
    assert_that(empty().aggregate() is IS_EMPTY, "empty without seed")
    assert_that(empty().aggregate(seed=5) == 5, "empty with seed returns the seed")


@test("sum, product, average, min and max of empty sequences are IS_EMPTY")
def test_empty_aggregates():
    for name in ('sum', 'product', 'average', 'min', 'max'):
        assert_that(getattr(empty(), name)() is IS_EMPTY, f"{name} of empty should be IS_EMPTY")


@test("sum and product")
def test_sum_product():
    assert_that(Q([1, 2, 3, 4]).sum() == 10, "sum")
    assert_that(Q([1, 2, 3, 4]).product() == 24, "product")
    assert_that(Q(['a', 'b']).sum() == 'ab', "sum follows +")


@test("average coerces values to numbers")
def test_average():
    assert_that(Q([1, '2', 3.0]).average() == 2.0, "mixed average")
    assert_that(Q(items).average(lambda i: i.qty) == 4.25, "average with selector")
    assert_that(math.isnan(Q([1, 'x']).average()), "unparseable values poison the average")


@test("min and max return the element with the extreme value")
def test_min_max():
    assert_that(Q([3, 1, 2]).min() == 1 and Q([3, 1, 2]).max() == 3, "plain min/max")
    assert_that(Q(items).max(lambda i: i.price).name == 'bag', "max with selector")
    assert_that(Q(items).min(lambda i: i.price).name == 'pen', "ties keep the first element")
    assert_that(Q([3, None, 1]).max() == 3 and Q([3, None, 1]).min() == 1, "None compares as equal and never replaces the current extreme")
    longest = Q(['aa', 'b', 'ccc']).max(comparer=lambda x, y: len(x) - len(y))
    assert_that(longest == 'ccc', "custom comparer")


# --- quantifiers and search ---

@test("all, any and count")
def test_quantifiers():
    assert_that(Q([2, 4]).all(lambda x: x % 2 == 0), "all true")
    assert_that(not Q([2, 5]).all(lambda x: x % 2 == 0), "all false")
    assert_that(empty().all(lambda x: False), "all of empty is true")
    assert_that(Q([1, 2]).any(lambda x: x > 1) and not empty().any(), "any")
    assert_that(Q(items).count(lambda i: i.price < 5) == 2, "count with predicate")


@test("is_empty and length")
def test_is_empty_length():
    assert_that(empty().is_empty() and not Q([0]).is_empty(), "is_empty")
    assert_that(from_range(0, 4).length() == 4, "length")


@test("contains, index_of and last_index_of")
def test_search():
    data = [1, 2, 3, 2]
    assert_that(Q(data).contains(3) and not Q(data).contains('3'), "structural contains")
    assert_that(Q(data).contains('3', lambda x, y: str(x) == y), "contains with comparer")
    assert_that(Q(data).index_of(2) == 1 and Q(data).last_index_of(2) == 3, "index_of / last_index_of")
    assert_that(Q(data).index_of(9) == -1 and Q(data).last_index_of(9) == -1, "missing is -1")
    assert_that(Q([1.0]).index_of(1, True) == -1, "strict comparison distinguishes int and float")


@test("sequence_equal compares pairwise and by length")
def test_sequence_equal():
    assert_that(Q([1, 2]).sequence_equal([1, 2]), "equal sequences")
    assert_that(not Q([1, 2]).sequence_equal([1, 2, 3]), "longer second")
    assert_that(not Q([1, 2, 3]).sequence_equal([1, 2]), "longer first")
    assert_that(not Q([1, 2]).sequence_equal([2, 1]), "different order")
    assert_that(Q(['A']).sequence_equal(['a'], lambda x, y: x.lower() == y.lower()), "custom comparer")


# --- element lookup ---

@test("element_at and element_at_or_default")
def test_element_at():
    assert_that(Q('abc').element_at(1) == 'b' and Q('abc').element_at('2') == 'c', "element_at")
    assert_raises(NotFoundError, lambda: Q('abc').element_at(3))
    assert_that(Q('abc').element_at_or_default(5) is NOT_FOUND, "default is NOT_FOUND")
    assert_that(Q('abc').element_at_or_default(5, '?') == '?', "custom default")


@test("first and first_or_default")
def test_first():
    assert_that(Q([5, 6, 7]).first() == 5 and Q([5, 6, 7]).first(lambda x: x > 5) == 6, "first")
    assert_raises(NotFoundError, lambda: empty().first())
    assert_raises(LookupError, lambda: Q([1]).first(lambda x: x > 1))
    assert_that(empty().first_or_default() is NOT_FOUND, "no default")
    assert_that(empty().first_or_default(42) == 42, "single non callable argument is the default")
    assert_that(Q([1, 2]).first_or_default(lambda x: x > 5) is NOT_FOUND, "predicate only")
    assert_that(Q([1, 2]).first_or_default(lambda x: x > 5, 0) == 0, "predicate and default")
    assert_that(Q([None]).first_or_default('x') is None, "None is a real element")


@test("last and last_or_default")
def test_last():
    assert_that(Q([5, 6, 7]).last() == 7 and Q([5, 6, 7]).last(lambda x: x < 7) == 6, "last")
    assert_raises(NotFoundError, lambda: empty().last())
    assert_that(Q([1]).last_or_default(lambda x: x > 3, -1) == -1, "last_or_default")


@test("single and single_or_default")
def test_single():
    assert_that(Q([9]).single() == 9, "single element")
    assert_that(Q([1, 2, 3]).single(lambda x: x == 2) == 2, "single match")
    assert_raises(NotFoundError, lambda: empty().single())
    assert_raises(AmbiguousMatchError, lambda: Q([1, 2]).single())
    assert_that(empty().single_or_default('d') == 'd', "default when nothing matches")
    error = assert_raises(AmbiguousMatchError, lambda: Q([1, 2]).single_or_default(lambda x: x > 0, 'd'))
    assert_that(isinstance(error, LookupError) and isinstance(error, LazinqError), "error hierarchy")


# --- actions ---

@test("for_each stops at the first failure")
def test_for_each():
    seen = []

    def action(item, index):
        if index == 1:
            raise ValueError("boom")
        seen.append(item)

    assert_raises(ValueError, lambda: Q('abc').for_each(action))
    assert_that(seen == ['a'], f"for_each should stop: {seen}")
    collected = []
    Q([1, 2]).each(lambda item, index: collected.append(index))
    assert_that(collected == [0, 1], "each is for_each")


@test("for_all runs every action and aggregates the failures")
def test_for_all():
    seen = []

    def action(item, index):
        seen.append(item)
        if index in (1, 2):
            raise ValueError(f"bad {item}")

    error = assert_raises(AggregateError, lambda: Q([10, 20, 30, 40]).for_all(action))
    assert_that(seen == [10, 20, 30, 40], "every element should be visited")
    assert_that(len(error) == 2 and all(isinstance(e, FunctionError) for e in error.errors), "two FunctionErrors")
    assert_that([e.index for e in error.errors] == [1, 2], "indexes 1 and 2")
    first = error.errors[0]
    assert_that(isinstance(first.inner_error, ValueError) and first.__cause__ is first.inner_error, "cause chain")
    assert_that(first.function is action, "the failing action is kept")
    assert_that("ERROR #1" in str(error) and "ACTION ERROR #1" in str(error), f"report: {error}")


@test("for_all without failures returns the sequence")
def test_for_all_ok():
    total = []
    Q([1, 2]).each_all(lambda item, index: total.append(item))
    assert_that(total == [1, 2], "each_all is for_all")


@test("assert_ raises for the first element that fails")
def test_assert():
    error = assert_raises(ConditionFailedError, lambda: Q([1, 2, -3, -4]).assert_(lambda x: x > 0))
    assert_that(error.index == 2 and error.item == -3, f"first failing element: {error.index} {error.item}")
    assert_that(isinstance(error, AssertionError), "ConditionFailedError is an AssertionError")
    assert_that(str(error) == "condition failed at index 2", f"default message: {error}")
    custom = assert_raises(ConditionFailedError,
                           lambda: Q(['a']).assert_(lambda x: False, lambda item, index: f"bad {item}"))
    assert_that(str(custom) == "bad a", "custom message provider")


@test("assert_all collects every failing element")
def test_assert_all():
    error = assert_raises(AggregateError, lambda: Q([1, -2, 3, -4]).assert_all(lambda x: x > 0, "negative"))
    assert_that([e.item for e in error.errors] == [-2, -4], "both negatives reported")
    assert_that(all(str(e) == "negative" for e in error.errors), "string message")
    assert_that(Q([1, 2]).assert_all(lambda x: x > 0) is not None, "no failures returns the sequence")


if __name__ == "__main__":
    suite.run(title="lazinq terminal operations test")
