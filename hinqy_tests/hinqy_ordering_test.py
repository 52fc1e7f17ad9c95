import logging
import suite
from collections import namedtuple
from dgen import from_schema
from hinqy import P, fn, Comparer, override, OrderedIterable, OrderedHierarchyIterable
from hinqy.ordered import SortKey, sort_indices
from hinqy.comparison import default_comparer
from hinqy_fixtures import build_tree, names, PROVIDERS

test = suite.test
assert_that = suite.assert_that
assert_raises = suite.assert_raises

Book = namedtuple('Book', ['title', 'id'])

books_schema = {
    'title': {'_qen_provider': 'choice', 'from': ['dune', 'emma', 'ulysses', 'beloved']},
    'id': {'_qen_provider': 'int', 'low': 1, 'high': 50},
    'price': ('pyfloat', {'min_value': 1, 'max_value': 100, 'right_digits': 2}),
}


@test("order_by sorts a small list ascending")
def test_order_by_basic():
    result = list(fn.order_by([3, 1, 2], lambda x: x))
    assert_that(result == [1, 2, 3], f"expected [1, 2, 3], got {result}")


@test("order_by then then_by sorts by title then id")
def test_then_by_scenario():
    source = [Book('B', 2), Book('A', 1), Book('B', 1)]
    result = list(fn.then_by(fn.order_by(source, lambda b: b.title), lambda b: b.id))
    assert_that(result == [Book('A', 1), Book('B', 1), Book('B', 2)], f"wrong order: {result}")


@test("equal keys keep their source order")
def test_stability():
    source = [Book('B', 2), Book('B', 1), Book('A', 9), Book('B', 0)]
    result = list(fn.order_by(source, lambda b: b.title))
    assert_that(result == [Book('A', 9), Book('B', 2), Book('B', 1), Book('B', 0)], f"unstable: {result}")


@test("descending order keeps ties in source order")
def test_descending_stability():
    source = [('x', 1), ('y', 2), ('z', 1), ('w', 2)]
    result = list(fn.order_by_descending(source, lambda t: t[1]))
    assert_that(result == [('y', 2), ('w', 2), ('x', 1), ('z', 1)], f"descending ties reordered: {result}")


@test("mixed directions across levels")
def test_mixed_directions():
    source = [(1, 'a'), (2, 'b'), (1, 'c'), (2, 'a')]
    ordered = fn.then_by_descending(fn.order_by(source, lambda t: t[0]), lambda t: t[1])
    result = list(ordered)
    assert_that(result == [(1, 'c'), (1, 'a'), (2, 'b'), (2, 'a')], f"wrong mixed order: {result}")


@test("order_by on an empty source yields nothing")
def test_empty():
    assert_that(list(fn.order_by([], lambda x: x)) == [], "empty source should stay empty")


@test("then_by leaves the earlier ordered sequence untouched")
def test_then_by_is_persistent():
    source = [(2, 'b'), (1, 'z'), (1, 'a'), (2, 'a')]
    by_first = fn.order_by(source, lambda t: t[0])
    by_both = fn.then_by(by_first, lambda t: t[1])
    by_both_desc = fn.then_by_descending(by_first, lambda t: t[1])
    assert_that(list(by_first) == [(1, 'z'), (1, 'a'), (2, 'b'), (2, 'a')], "original chain changed")
    assert_that(list(by_both) == [(1, 'a'), (1, 'z'), (2, 'a'), (2, 'b')], "ascending branch wrong")
    assert_that(list(by_both_desc) == [(1, 'z'), (1, 'a'), (2, 'b'), (2, 'a')], "descending branch wrong")


@test("ordering is lazy and re-iterable")
def test_lazy_and_reiterable():
    calls = []
    source = [3, 1, 2]
    ordered = fn.order_by(source, lambda x: calls.append(x) or x)
    assert_that(calls == [], "key selector ran before iteration")
    first_pass = list(ordered)
    source.append(0)
    second_pass = list(ordered)
    assert_that(first_pass == [1, 2, 3], f"first pass wrong: {first_pass}")
    assert_that(second_pass == [0, 1, 2, 3], f"second pass should see the new element: {second_pass}")


@test("each key selector runs once per element per level")
def test_key_selector_call_count():
    counts = {'title': 0, 'id': 0}

    def by_title(book):
        counts['title'] += 1
        return book.title

    def by_id(book):
        counts['id'] += 1
        return book.id

    source = [Book('B', 2), Book('A', 1), Book('B', 1), Book('C', 5)]
    list(fn.then_by(fn.order_by(source, by_title), by_id))
    assert_that(counts == {'title': 4, 'id': 4}, f"selectors called too often: {counts}")


@test("a comparer function or Comparer instance drives the order")
def test_custom_comparer():
    by_length = lambda a, b: len(a) - len(b)
    result = list(fn.order_by(['ccc', 'a', 'bb'], lambda s: s, by_length))
    assert_that(result == ['a', 'bb', 'ccc'], f"function comparer ignored: {result}")

    reversed_alpha = Comparer.create(lambda a, b: (a < b) - (a > b))
    result = list(fn.order_by(['a', 'c', 'b'], lambda s: s, reversed_alpha))
    assert_that(result == ['c', 'b', 'a'], f"Comparer instance ignored: {result}")


@test("None sorts first and mixed types do not raise")
def test_mixed_values():
    result = list(fn.order_by([3, None, 'b', 1.5, 'a', None], lambda x: x))
    assert_that(result == [None, None, 1.5, 3, 'a', 'b'], f"mixed order wrong: {result}")


@test("nan sorts after every other number")
def test_nan_order():
    nan = float('nan')
    result = list(fn.order_by([2.0, nan, 1.0], lambda x: x))
    assert_that(result[:2] == [1.0, 2.0], f"numbers should come first: {result}")
    assert_that(result[2] != result[2], "nan should be last")


@test("numpy fast path matches the comparator path")
def test_numpy_path_matches():
    records = from_schema(books_schema, seed=7).take(300).to.list()

    def run():
        ordered = fn.then_by(fn.order_by_descending(records, lambda r: r['id']), lambda r: r['price'])
        return [id(r) for r in ordered]

    with override(numpy_sort_threshold=1):
        fast = run()
    with override(numpy_sort_threshold=None):
        slow = run()
    assert_that(fast == slow, "numpy and comparator paths disagree")


@test("long key chains with many ties match a stable tuple-key sort")
def test_chain_stability_random():
    tie_schema = {
        'category': {'_qen_provider': 'choice', 'from': ['a', 'b', 'c']},
        'id': {'_qen_provider': 'int', 'low': 1, 'high': 5},
        'bucket': {'_qen_provider': 'int', 'low': 0, 'high': 2},
        'score': {'_qen_provider': 'int', 'low': 0, 'high': 3},
    }
    for seed in range(4):
        records = from_schema(tie_schema, seed=seed).take(200).to.list()

        mixed = lambda: fn.then_by_descending(
            fn.then_by(fn.order_by(records, lambda r: r['category']), lambda r: r['bucket']),
            lambda r: r['id'])
        numeric = lambda: fn.then_by(
            fn.then_by_descending(fn.order_by_descending(records, lambda r: r['id']), lambda r: r['score']),
            lambda r: r['bucket'])

        expected_mixed = [id(r) for r in sorted(records, key=lambda r: (r['category'], r['bucket'], -r['id']))]
        expected_numeric = [id(r) for r in sorted(records, key=lambda r: (-r['id'], -r['score'], r['bucket']))]

        for threshold in (1, None):
            with override(numpy_sort_threshold=threshold):
                got_mixed = [id(r) for r in mixed()]
                got_numeric = [id(r) for r in numeric()]
            assert_that(got_mixed == expected_mixed, f"seed {seed}, threshold {threshold}: mixed chain unstable")
            assert_that(got_numeric == expected_numeric, f"seed {seed}, threshold {threshold}: numeric chain unstable")


@test("numpy fast path is skipped for non-numeric or huge keys")
def test_numpy_path_fallback():
    big = 2 ** 60
    source = [big + 1, big, 5]
    with override(numpy_sort_threshold=1):
        result = list(fn.order_by(source, lambda x: x))
        words = list(fn.order_by(['b', 'a'], lambda x: x))
    assert_that(result == [5, big, big + 1], f"large ints lost precision: {result}")
    assert_that(words == ['a', 'b'], f"string keys wrong: {words}")


@test("sort_indices logs which path ran")
def test_sort_logging():
    records = []

    class Capture(logging.Handler):
        def emit(self, record):
            records.append(record.getMessage())

    logger = logging.getLogger('hinqy.ordered')
    handler = Capture(level=logging.DEBUG)
    previous_level = logger.level
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    try:
        with override(numpy_sort_threshold=None):
            sort_indices([2, 1], (SortKey(lambda x: x, default_comparer, False),))
    finally:
        logger.removeHandler(handler)
        logger.setLevel(previous_level)
    assert_that(any('composite comparer' in message for message in records), f"no debug record: {records}")


@test("ordering arguments are validated eagerly")
def test_ordering_validation():
    with assert_raises(TypeError):
        fn.order_by(42, lambda x: x)
    with assert_raises(TypeError):
        fn.order_by([1], 'not callable')
    with assert_raises(TypeError):
        fn.order_by([1], lambda x: x, comparer=5)
    with assert_raises(TypeError):
        fn.then_by([1, 2], lambda x: x)


@test("order_by keeps the hierarchy tag and then_by")
def test_ordering_flows_hierarchy():
    tree = build_tree()
    tagged = fn.to_hierarchy([tree['AB'], tree['AA']], PROVIDERS['derived'])
    ordered = fn.order_by(tagged, lambda n: n.name)
    assert_that(isinstance(ordered, OrderedHierarchyIterable), "provider lost by order_by")
    refined = fn.then_by(ordered, lambda n: n.depth)
    assert_that(isinstance(refined, OrderedHierarchyIterable), "provider lost by then_by")
    assert_that(names(fn.children(refined)) == ['AAA', 'AAB', 'AAC'], "axis over ordered nodes failed")


@test("fluent order_by and then_by_descending")
def test_fluent_ordering():
    people = [{'name': 'ann', 'age': 30}, {'name': 'bob', 'age': 25}, {'name': 'cid', 'age': 30}]
    result = P(people).order_by(lambda p: p['age']).then_by_descending(lambda p: p['name']).select(lambda p: p['name']).to.list()
    assert_that(result == ['bob', 'cid', 'ann'], f"fluent order wrong: {result}")


@test("reverse inverts a sequence")
def test_reverse():
    assert_that(list(fn.reverse([1, 2, 3])) == [3, 2, 1], "reverse failed")
    assert_that(isinstance(fn.order_by([1], lambda x: x), OrderedIterable), "order_by should be ordered")


if __name__ == "__main__":
    suite.run(title="hinqy ordering tests")
