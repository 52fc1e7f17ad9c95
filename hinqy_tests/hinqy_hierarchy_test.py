import logging
import sys
import suite
from dgen import TreeNode, TreeNodeProvider, LinkedTreeNodeProvider, random_tree
from hinqy import fn, Equaler, HierarchyProvider, HierarchyIterable, from_hierarchy, P
from hinqy_fixtures import build_tree, names, PROVIDERS, function_provider, CountingProvider

test = suite.test
assert_that = suite.assert_that
assert_raises = suite.assert_raises


def axis(operator, provider, *node_names, tree=None, **kwargs):
    """run an axis operator over the named nodes and return the result names"""
    tree = tree or build_tree()
    source = fn.to_hierarchy([tree[name] for name in node_names], provider)
    return names(operator(source, **kwargs))


def for_each_provider(check):
    for label, provider in PROVIDERS.items():
        check(label, provider)


@test("descendants of a small tree in document order")
def test_descendants_scenario():
    a = TreeNode('A')
    aa = TreeNode('AA', a)
    ab = TreeNode('AB', a)
    a.children.extend([aa, ab])
    aa.children.extend([TreeNode('AAA', aa), TreeNode('AAB', aa)])
    result = names(fn.descendants(fn.to_hierarchy([a], TreeNodeProvider())))
    assert_that(result == ['AA', 'AAA', 'AAB', 'AB'], f"wrong descendants: {result}")


@test("descendants and descendants_and_self follow document order")
def test_descendants():
    def check(label, provider):
        result = axis(fn.descendants, provider, 'A')
        assert_that(result == ['AA', 'AAA', 'AAAA', 'AAB', 'AAC', 'AB', 'AC', 'ACA'], f"{label}: {result}")
        result = axis(fn.descendants_and_self, provider, 'AA')
        assert_that(result == ['AA', 'AAA', 'AAAA', 'AAB', 'AAC'], f"{label}: {result}")
    for_each_provider(check)


@test("ancestors are nearest first and empty for the root")
def test_ancestors():
    def check(label, provider):
        assert_that(axis(fn.ancestors, provider, 'AAAA') == ['AAA', 'AA', 'A'], f"{label}: ancestors")
        assert_that(axis(fn.ancestors_and_self, provider, 'AAB') == ['AAB', 'AA', 'A'], f"{label}: ancestors_and_self")
        assert_that(axis(fn.ancestors, provider, 'A') == [], f"{label}: root has no ancestors")
    for_each_provider(check)


@test("root, parents and self")
def test_root_parents_self():
    def check(label, provider):
        assert_that(axis(fn.root, provider, 'AAAA', 'ACA') == ['A', 'A'], f"{label}: root")
        assert_that(axis(fn.parents, provider, 'AAB', 'A') == ['AA'], f"{label}: parents")
        assert_that(axis(fn.self_, provider, 'AB', 'AC') == ['AB', 'AC'], f"{label}: self")
    for_each_provider(check)


@test("children, first_child and last_child")
def test_children():
    def check(label, provider):
        assert_that(axis(fn.children, provider, 'AA') == ['AAA', 'AAB', 'AAC'], f"{label}: children")
        assert_that(axis(fn.first_child, provider, 'AA', 'AB') == ['AAA'], f"{label}: first_child")
        assert_that(axis(fn.last_child, provider, 'AA', 'AC') == ['AAC', 'ACA'], f"{label}: last_child")
    for_each_provider(check)


@test("nth_child counts from either end")
def test_nth_child():
    def check(label, provider):
        assert_that(axis(fn.nth_child, provider, 'AA', offset=0) == ['AAA'], f"{label}: offset 0")
        assert_that(axis(fn.nth_child, provider, 'AA', offset=1) == ['AAB'], f"{label}: offset 1")
        assert_that(axis(fn.nth_child, provider, 'AA', offset=-3) == ['AAA'], f"{label}: offset -3")
        assert_that(axis(fn.nth_child, provider, 'AA', offset=3) == [], f"{label}: past the end")
        assert_that(axis(fn.nth_child, provider, 'AA', offset=-4) == [], f"{label}: before the start")
        assert_that(axis(fn.nth_child, provider, 'AA', offset=2.0) == ['AAC'], f"{label}: integral float")
    for_each_provider(check)


@test("nth_child(-1) equals last_child")
def test_nth_child_last():
    def check(label, provider):
        for name in ['A', 'AA', 'AAA', 'AB', 'AC']:
            last = axis(fn.last_child, provider, name)
            nth = axis(fn.nth_child, provider, name, offset=-1)
            assert_that(last == nth, f"{label}: {name} -> {nth} vs {last}")
    for_each_provider(check)


@test("nth_child applies its predicate")
def test_nth_child_predicate():
    result = axis(fn.nth_child, PROVIDERS['derived'], 'AA', 'A', offset=0, predicate=lambda n: n.name == 'AA')
    assert_that(result == ['AA'], f"predicate ignored: {result}")


@test("nth_child validates its offset")
def test_nth_child_validation():
    source = fn.to_hierarchy([], PROVIDERS['derived'])
    with assert_raises(TypeError):
        fn.nth_child(source, True)
    with assert_raises(TypeError):
        fn.nth_child(source, '1')
    with assert_raises(ValueError):
        fn.nth_child(source, 1.5)
    with assert_raises(ValueError):
        fn.nth_child(source, float('nan'))


@test("siblings exclude the node, siblings_and_self include it")
def test_siblings():
    def check(label, provider):
        assert_that(axis(fn.siblings, provider, 'AAB') == ['AAA', 'AAC'], f"{label}: siblings")
        assert_that(axis(fn.siblings_and_self, provider, 'AAB') == ['AAA', 'AAB', 'AAC'], f"{label}: siblings_and_self")
        assert_that(axis(fn.siblings, provider, 'A') == [], f"{label}: root has no siblings")
    for_each_provider(check)


@test("preceding siblings are nearest first, following siblings in order")
def test_preceding_following_siblings():
    def check(label, provider):
        assert_that(axis(fn.preceding_siblings, provider, 'AAC') == ['AAB', 'AAA'], f"{label}: preceding")
        assert_that(axis(fn.following_siblings, provider, 'AAA') == ['AAB', 'AAC'], f"{label}: following")
        assert_that(axis(fn.siblings_before_self, provider, 'AB') == ['AA'], f"{label}: alias before")
        assert_that(axis(fn.siblings_after_self, provider, 'AB') == ['AC'], f"{label}: alias after")
    for_each_provider(check)


@test("preceding walks backwards through the document, skipping ancestors")
def test_preceding():
    def check(label, provider):
        result = axis(fn.preceding, provider, 'AB')
        assert_that(result == ['AAC', 'AAB', 'AAAA', 'AAA', 'AA'], f"{label}: {result}")
        result = axis(fn.preceding, provider, 'AAB')
        assert_that(result == ['AAAA', 'AAA'], f"{label}: {result}")
    for_each_provider(check)


@test("following walks forwards, each later sibling's subtree bottom-up")
def test_following():
    def check(label, provider):
        assert_that(axis(fn.following, provider, 'AB') == ['ACA', 'AC'], f"{label}: from AB")
        result = axis(fn.following, provider, 'AAC')
        assert_that(result == ['AB', 'ACA', 'AC'], f"{label}: from AAC {result}")
        result = axis(fn.following, provider, 'AAAA')
        assert_that(result == ['AAB', 'AAC', 'AB', 'ACA', 'AC'], f"{label}: {result}")
        assert_that(axis(fn.following, provider, 'A') == [], f"{label}: the root has nothing after it")
    for_each_provider(check)
    result = axis(fn.following, function_provider, 'AA')
    assert_that(result == ['AB', 'ACA', 'AC'], f"function provider: {result}")


@test("axis predicates filter the related nodes")
def test_axis_predicate():
    result = axis(fn.descendants, PROVIDERS['linked'], 'A', predicate=lambda n: len(n.name) == 3)
    assert_that(result == ['AAA', 'AAB', 'AAC', 'ACA'], f"predicate ignored: {result}")


@test("None and disowned elements are skipped silently")
def test_silent_absence():
    tree = build_tree()
    source = fn.to_hierarchy([None, tree['AC'], 'stranger'], PROVIDERS['linked'])
    assert_that(names(fn.children(source)) == ['ACA'], "absent elements should contribute nothing")
    source = fn.to_hierarchy([None, tree['AB']], PROVIDERS['derived'])
    assert_that(names(fn.parents(source)) == ['A'], "None should be skipped")


@test("None entries from children() are skipped")
def test_none_children():
    a = TreeNode('A')
    b = TreeNode('B', a)
    provider = HierarchyProvider.create(lambda n: n.parent, lambda n: [None, b, None] if n is a else None)
    result = names(fn.descendants(fn.to_hierarchy([a], provider)))
    assert_that(result == ['B'], f"None children not skipped: {result}")


@test("providers built from functions work like subclasses")
def test_function_provider():
    result = axis(fn.following_siblings, function_provider, 'AA')
    assert_that(result == ['AB', 'AC'], f"function provider failed: {result}")
    with assert_raises(TypeError):
        HierarchyProvider.create(lambda n: n, lambda n: n, sideways=lambda n: n)
    with assert_raises(TypeError):
        HierarchyProvider.create(lambda n: n, 'children')


@test("top_most removes descendants of other members")
def test_top_most():
    def check(label, provider):
        assert_that(axis(fn.top_most, provider, 'AAA', 'AA', 'AB') == ['AA', 'AB'], f"{label}: scenario")
        assert_that(axis(fn.top_most, provider, 'AAAA', 'AAA', 'AA', 'A') == ['A'], f"{label}: chain")
        assert_that(axis(fn.top_most, provider, 'AAB', 'AB', 'ACA') == ['AAB', 'AB', 'ACA'], f"{label}: antichain")
    for_each_provider(check)


@test("bottom_most removes ancestors of other members")
def test_bottom_most():
    def check(label, provider):
        assert_that(axis(fn.bottom_most, provider, 'A', 'AA', 'AAAA', 'AB') == ['AAAA', 'AB'], f"{label}: mixed")
        assert_that(axis(fn.bottom_most, provider, 'AAAA', 'AAA', 'AA', 'A') == ['AAAA'], f"{label}: chain")
        assert_that(axis(fn.bottom_most, provider, 'AC', 'AAB') == ['AC', 'AAB'], f"{label}: antichain")
    for_each_provider(check)


@test("top_most and bottom_most apply their predicate to survivors")
def test_pruning_predicate():
    result = axis(fn.top_most, PROVIDERS['derived'], 'AAA', 'AA', 'AB', predicate=lambda n: n.name != 'AB')
    assert_that(result == ['AA'], f"predicate ignored: {result}")


@test("pruned results match a brute-force antichain on random trees")
def test_pruning_random():
    provider = TreeNodeProvider()

    def chain(node):
        return list(fn.ancestors(fn.to_hierarchy([node], provider)))

    for seed in range(8):
        nodes = random_tree(60, seed=seed)
        sample = nodes[seed % 3::3]
        source = fn.to_hierarchy(sample, provider)
        chains = {id(n): chain(n) for n in sample}

        # a node survives top_most unless a sample member is one of its ancestors,
        # and bottom_most unless it is an ancestor of a sample member
        expected_top = [n for n in sample if not any(a is o for a in chains[id(n)] for o in sample)]
        expected_bottom = [n for n in sample if not any(n is a for o in sample for a in chains[id(o)])]

        top = list(fn.top_most(source))
        bottom = list(fn.bottom_most(source))
        assert_that(len(top) == len(expected_top) and all(a is b for a, b in zip(top, expected_top)),
                    f"seed {seed}: top_most kept {len(top)} node(s), expected {len(expected_top)}")
        assert_that(len(bottom) == len(expected_bottom) and all(a is b for a, b in zip(bottom, expected_bottom)),
                    f"seed {seed}: bottom_most kept {len(bottom)} node(s), expected {len(expected_bottom)}")
        assert_that(top and bottom, f"seed {seed}: pruning should never empty a non-empty sample")


@test("parent, children, descendants and root agree on random trees")
def test_round_trip_random():
    def check(label, provider):
        for seed in range(3):
            nodes = random_tree(80, seed=seed)
            for node in nodes:
                tagged = fn.to_hierarchy([node], provider)
                top = list(fn.root(tagged))
                assert_that(len(top) == 1 and top[0] is nodes[0], f"{label}, seed {seed}: wrong root for {node!r}")
                assert_that(any(d is node for d in fn.descendants_and_self(fn.to_hierarchy(top, provider))),
                            f"{label}, seed {seed}: {node!r} not under its root")
                parent = node.parent
                if parent is None:
                    assert_that(list(fn.parents(tagged)) == [], f"{label}: the root has no parent")
                    continue
                up = list(fn.parents(tagged))
                assert_that(len(up) == 1 and up[0] is parent, f"{label}, seed {seed}: parents of {node!r}")
                kids = list(fn.children(fn.to_hierarchy([parent], provider)))
                assert_that(any(k is node for k in kids), f"{label}, seed {seed}: {node!r} missing from children")
                assert_that(any(d is node for d in fn.descendants(fn.to_hierarchy(top, provider))),
                            f"{label}, seed {seed}: {node!r} not a descendant of its root")
    for_each_provider(check)


@test("ancestor sets are computed at most once per node")
def test_ancestor_memoisation():
    tree = build_tree()
    provider = CountingProvider()
    source = fn.to_hierarchy([tree['AAAA'], tree['AAB'], tree['ACA'], tree['AB']], provider)
    list(fn.top_most(source))
    # one walk per node: AAAA has 3 ancestors (+1 terminating call), AAB 2, ACA 2, AB 1
    assert_that(provider.parent_calls == 4 + 3 + 3 + 2, f"ancestor walks repeated: {provider.parent_calls}")


@test("a custom equaler matches nodes by value")
def test_pruning_equaler():
    tree = build_tree()
    by_name = Equaler.create(lambda x, y: x.name == y.name, lambda x: hash(x.name))
    result = axis(fn.top_most, PROVIDERS['derived'], 'AAA', 'AA', tree=tree, equaler=by_name)
    assert_that(result == ['AA'], f"equaler ignored: {result}")
    with assert_raises(TypeError):
        fn.top_most(fn.to_hierarchy([], PROVIDERS['derived']), equaler='by name')


@test("top_most logs candidates against survivors")
def test_pruning_logging():
    records = []

    class Capture(logging.Handler):
        def emit(self, record):
            records.append(record.getMessage())

    logger = logging.getLogger('hinqy.fn.hierarchy')
    handler = Capture(level=logging.DEBUG)
    previous_level = logger.level
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    try:
        axis(fn.top_most, PROVIDERS['derived'], 'AAA', 'AA', 'AB')
    finally:
        logger.removeHandler(handler)
        logger.setLevel(previous_level)
    assert_that("top_most kept 2 of 3 node(s)" in records, f"missing record: {records}")


@test("deep trees do not hit the recursion limit")
def test_deep_tree():
    depth = sys.getrecursionlimit() + 500
    root = node = TreeNode('n0')
    for i in range(1, depth):
        child = TreeNode(f'n{i}', node)
        node.children.append(child)
        node = child
    provider = LinkedTreeNodeProvider()
    count = sum(1 for _ in fn.descendants(fn.to_hierarchy([root], provider)))
    assert_that(count == depth - 1, f"wrong descendant count: {count}")
    preceding = sum(1 for _ in fn.preceding(fn.to_hierarchy([node], TreeNodeProvider())))
    assert_that(preceding == 0, "a single chain has no preceding nodes")
    assert_that(axis(fn.root, provider, 'leaf', tree={'leaf': node}) == ['n0'], "root of deep chain")


@test("closing a descendants walk early closes the upstream source")
def test_early_close():
    tree = build_tree()
    events = []

    def source_data():
        try:
            yield tree['A']
            yield tree['AB']
        finally:
            events.append('closed')

    tagged = fn.to_hierarchy(HierarchyIteratorSource(source_data), PROVIDERS['derived'])
    walk = iter(fn.descendants(tagged))
    assert_that(next(walk).name == 'AA', "first descendant should be AA")
    walk.close()
    assert_that(events == ['closed'], f"upstream not closed: {events}")


class HierarchyIteratorSource:
    def __init__(self, factory):
        self._factory = factory

    def __iter__(self):
        return self._factory()


@test("axis operators validate eagerly")
def test_hierarchy_validation():
    with assert_raises(TypeError):
        fn.descendants([1, 2])
    with assert_raises(TypeError):
        fn.children(fn.to_hierarchy([], PROVIDERS['derived']), predicate=3)
    with assert_raises(TypeError):
        fn.to_hierarchy([], object())
    assert_that(isinstance(fn.where(fn.to_hierarchy([], PROVIDERS['derived']), bool), HierarchyIterable),
                "where should keep the hierarchy tag")


@test("fluent tree accessor")
def test_tree_accessor():
    tree = build_tree()
    result = from_hierarchy([tree['AA']], PROVIDERS['linked']).tree.children().tree.first_child().select(lambda n: n.name).to.list()
    assert_that(result == ['AAAA'], f"fluent axes failed: {result}")
    top = P([tree['AAA'], tree['AA']]).to_hierarchy(PROVIDERS['derived']).tree.top_most().to.list()
    assert_that(names(top) == ['AA'], f"fluent top_most failed: {names(top)}")
    with assert_raises(TypeError):
        P([tree['AA']]).tree.children()


if __name__ == "__main__":
    suite.run(title="hinqy hierarchy tests")
