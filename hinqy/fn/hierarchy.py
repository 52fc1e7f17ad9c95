"""
hierarchy axis operators over HierarchyIterable sequences.

every operator validates its arguments immediately and returns a new HierarchyIterable
over the related nodes, optionally filtered by a predicate. elements the provider does
not own (None, or `owns()` answering false) contribute nothing.
"""
from __future__ import annotations
import logging
from .. import axis as _axis
from .. import guards
from ..types import *
from ..collections import HashMap, HashSet
from ..comparison import Equaler
from ..hierarchy import HierarchyIterable, HierarchyProvider, is_hierarchy_element
from ..iteration import opened

logger = logging.getLogger(__name__)

AxisFunction = Callable[[HierarchyProvider, Any], Iterator[Any]]


class AxisHierarchyIterable(HierarchyIterable[TNode]):
    """the related nodes of every element of a source, along one axis"""

    def __init__(self, source: HierarchyIterable[TNode], axis: AxisFunction,
                 predicate: Optional[Predicate[TNode]]):
        self._source = source
        self._axis = axis
        self._predicate = predicate

    def __iter__(self) -> Iterator[TNode]:
        provider = self._source.hierarchy()
        axis = self._axis
        predicate = self._predicate
        with opened(self._source) as elements:
            for element in elements:
                if not is_hierarchy_element(provider, element):
                    continue
                with opened(axis(provider, element)) as related_nodes:
                    for related in related_nodes:
                        if predicate is None or predicate(related):
                            yield related

    def hierarchy(self) -> HierarchyProvider[TNode]:
        return self._source.hierarchy()


def _axis_operator(axis: AxisFunction, name: str, doc: str) -> Callable[..., HierarchyIterable]:
    def operator(source: HierarchyIterable[TNode], predicate: Optional[Predicate[TNode]] = None) -> HierarchyIterable[TNode]:
        guards.must_be_hierarchy_iterable(source, "source")
        guards.must_be_function_or_none(predicate, "predicate")
        return AxisHierarchyIterable(source, axis, predicate)

    operator.__name__ = operator.__qualname__ = name
    operator.__doc__ = doc
    return operator


root = _axis_operator(_axis.root, "root", "select the root of each node, like `/` in xpath or `:root` in css")
ancestors = _axis_operator(_axis.ancestors, "ancestors", "select the ancestors of each node, nearest first (`ancestor::*`)")
ancestors_and_self = _axis_operator(_axis.ancestors_and_self, "ancestors_and_self", "select each node followed by its ancestors (`ancestor-or-self::*`)")
descendants = _axis_operator(_axis.descendants, "descendants", "select the descendants of each node in document order (`descendant::*`)")
descendants_and_self = _axis_operator(_axis.descendants_and_self, "descendants_and_self", "select each node followed by its descendants (`descendant-or-self::*`)")
parents = _axis_operator(_axis.parents, "parents", "select the parent of each node (`..`)")
self_ = _axis_operator(_axis.self_, "self_", "select each node itself, optionally filtered (`self::*`)")
siblings = _axis_operator(_axis.siblings, "siblings", "select the siblings of each node, excluding the node")
siblings_and_self = _axis_operator(_axis.siblings_and_self, "siblings_and_self", "select the siblings of each node, including the node (`../*`)")
preceding_siblings = _axis_operator(_axis.preceding_siblings, "preceding_siblings", "select the siblings before each node, nearest first (`preceding-sibling::*`)")
following_siblings = _axis_operator(_axis.following_siblings, "following_siblings", "select the siblings after each node (`following-sibling::*`)")
preceding = _axis_operator(_axis.preceding, "preceding", "select every node before each node, ancestors excluded, nearest first (`preceding::*`)")
following = _axis_operator(_axis.following, "following", "select every node after each node, descendants excluded (`following::*`)")
children = _axis_operator(_axis.children, "children", "select the children of each node (`child::*`, or `>` in css)")
first_child = _axis_operator(_axis.first_child, "first_child", "select the first child of each node (`:first-child`)")
last_child = _axis_operator(_axis.last_child, "last_child", "select the last child of each node (`:last-child`)")

siblings_before_self = preceding_siblings
siblings_after_self = following_siblings


def nth_child(source: HierarchyIterable[TNode], offset: int,
              predicate: Optional[Predicate[TNode]] = None) -> HierarchyIterable[TNode]:
    """
    select the child at `offset` of each node, like `:nth-child()` in css.
    a negative offset counts from the end, so -1 is the last child.
    """
    guards.must_be_hierarchy_iterable(source, "source")
    offset = guards.to_integer(offset, "offset")
    guards.must_be_function_or_none(predicate, "predicate")
    return AxisHierarchyIterable(source, lambda provider, element: _axis.nth_child(provider, element, offset), predicate)


# --- pruning ---

class AncestorSets:
    """ancestor sets computed on demand, at most once per node, for one pruning pass"""

    def __init__(self, provider: HierarchyProvider, equaler: Equaler):
        self._provider = provider
        self._equaler = equaler
        self._sets: HashMap[Any, HashSet] = HashMap(equaler)

    def of(self, node: Any) -> HashSet:
        return self._sets.get_or_add(node, lambda: HashSet(_axis.ancestors(self._provider, node), self._equaler))


def prune(nodes: List[TNode], ancestor_sets: AncestorSets, keep_top: bool) -> List[TNode]:
    """
    remove every node dominated by another node of the same list: descendants of another
    member when `keep_top`, ancestors of another member otherwise. survivors keep their order.
    """
    i = len(nodes) - 1
    while i >= 1:
        node = nodes[i]
        j = i - 1
        while j >= 0:
            other = nodes[j]
            if keep_top:
                drop_node = other in ancestor_sets.of(node)
                drop_other = not drop_node and node in ancestor_sets.of(other)
            else:
                drop_node = node in ancestor_sets.of(other)
                drop_other = not drop_node and other in ancestor_sets.of(node)
            if drop_node:
                del nodes[i]
                break
            if drop_other:
                del nodes[j]
                # everything above j moved down one slot, node included
                i -= 1
            j -= 1
        i -= 1
    return nodes


class PrunedHierarchyIterable(HierarchyIterable[TNode]):
    def __init__(self, source: HierarchyIterable[TNode], predicate: Optional[Predicate[TNode]],
                 equaler: Equaler, keep_top: bool):
        self._source = source
        self._predicate = predicate
        self._equaler = equaler
        self._keep_top = keep_top

    def __iter__(self) -> Iterator[TNode]:
        provider = self._source.hierarchy()
        with opened(self._source) as elements:
            candidates = [element for element in elements if is_hierarchy_element(provider, element)]
        count = len(candidates)
        survivors = prune(candidates, AncestorSets(provider, self._equaler), self._keep_top)
        logger.debug("%s kept %d of %d node(s)", "top_most" if self._keep_top else "bottom_most", len(survivors), count)
        predicate = self._predicate
        for node in survivors:
            if predicate is None or predicate(node):
                yield node

    def hierarchy(self) -> HierarchyProvider[TNode]:
        return self._source.hierarchy()


def top_most(source: HierarchyIterable[TNode], predicate: Optional[Predicate[TNode]] = None,
             equaler: Optional[Equaler[TNode]] = None) -> HierarchyIterable[TNode]:
    """
    keep only the top-most nodes: any node that is a descendant of another node
    of the same sequence is removed. nodes are matched by identity unless an equaler is given.
    """
    guards.must_be_hierarchy_iterable(source, "source")
    guards.must_be_function_or_none(predicate, "predicate")
    resolved = guards.to_equaler(equaler, "equaler", identity=True)
    return PrunedHierarchyIterable(source, predicate, resolved, keep_top=True)


def bottom_most(source: HierarchyIterable[TNode], predicate: Optional[Predicate[TNode]] = None,
                equaler: Optional[Equaler[TNode]] = None) -> HierarchyIterable[TNode]:
    """
    keep only the bottom-most nodes: any node that is an ancestor of another node
    of the same sequence is removed.
    """
    guards.must_be_hierarchy_iterable(source, "source")
    guards.must_be_function_or_none(predicate, "predicate")
    resolved = guards.to_equaler(equaler, "equaler", identity=True)
    return PrunedHierarchyIterable(source, predicate, resolved, keep_top=False)


def to_hierarchy(source: Iterable[T], provider: HierarchyProvider[TNode]) -> HierarchyIterable[TNode]:
    """tag a sequence with the provider its elements belong to. ordered sequences stay ordered"""
    guards.must_be_iterable(source, "source")
    guards.must_be_hierarchy_provider(provider, "provider")
    return HierarchyIterable.create(source, provider)
