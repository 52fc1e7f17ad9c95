"""
async hierarchy axis operators.

the source may be an AsyncHierarchyIterable or a sync HierarchyIterable; the provider
itself stays synchronous. predicates may return awaitables.
"""
from __future__ import annotations
import logging
from .. import axis as _axis
from .. import guards
from ..types import *
from ..comparison import Equaler
from ..fn.hierarchy import AxisFunction, AncestorSets, prune
from ..hierarchy import AsyncHierarchyIterable, HierarchyProvider, is_hierarchy_element
from ..iteration import opened, opened_async, resolve

logger = logging.getLogger(__name__)


class AsyncAxisHierarchyIterable(AsyncHierarchyIterable[TNode]):
    def __init__(self, source, axis: AxisFunction, predicate: Optional[AsyncPredicate[TNode]]):
        self._source = source
        self._axis = axis
        self._predicate = predicate

    def __aiter__(self):
        async def related_data():
            provider = self._source.hierarchy()
            predicate = self._predicate
            async with opened_async(self._source) as elements:
                async for element in elements:
                    if not is_hierarchy_element(provider, element):
                        continue
                    with opened(self._axis(provider, element)) as related_nodes:
                        for related in related_nodes:
                            if predicate is None or await resolve(predicate(related)):
                                yield related

        return related_data()

    def hierarchy(self) -> HierarchyProvider[TNode]:
        return self._source.hierarchy()


def _axis_operator(axis: AxisFunction, name: str) -> Callable[..., AsyncHierarchyIterable]:
    def operator(source, predicate: Optional[AsyncPredicate[TNode]] = None) -> AsyncHierarchyIterable[TNode]:
        guards.must_be_async_or_sync_hierarchy_iterable(source, "source")
        guards.must_be_function_or_none(predicate, "predicate")
        return AsyncAxisHierarchyIterable(source, axis, predicate)

    operator.__name__ = operator.__qualname__ = name
    operator.__doc__ = f"async form of hinqy.fn.{name}"
    return operator


root = _axis_operator(_axis.root, "root")
ancestors = _axis_operator(_axis.ancestors, "ancestors")
ancestors_and_self = _axis_operator(_axis.ancestors_and_self, "ancestors_and_self")
descendants = _axis_operator(_axis.descendants, "descendants")
descendants_and_self = _axis_operator(_axis.descendants_and_self, "descendants_and_self")
parents = _axis_operator(_axis.parents, "parents")
self_ = _axis_operator(_axis.self_, "self_")
siblings = _axis_operator(_axis.siblings, "siblings")
siblings_and_self = _axis_operator(_axis.siblings_and_self, "siblings_and_self")
preceding_siblings = _axis_operator(_axis.preceding_siblings, "preceding_siblings")
following_siblings = _axis_operator(_axis.following_siblings, "following_siblings")
preceding = _axis_operator(_axis.preceding, "preceding")
following = _axis_operator(_axis.following, "following")
children = _axis_operator(_axis.children, "children")
first_child = _axis_operator(_axis.first_child, "first_child")
last_child = _axis_operator(_axis.last_child, "last_child")

siblings_before_self = preceding_siblings
siblings_after_self = following_siblings


def nth_child(source, offset: int, predicate: Optional[AsyncPredicate[TNode]] = None) -> AsyncHierarchyIterable[TNode]:
    guards.must_be_async_or_sync_hierarchy_iterable(source, "source")
    offset = guards.to_integer(offset, "offset")
    guards.must_be_function_or_none(predicate, "predicate")
    return AsyncAxisHierarchyIterable(source, lambda provider, element: _axis.nth_child(provider, element, offset), predicate)


class AsyncPrunedHierarchyIterable(AsyncHierarchyIterable[TNode]):
    def __init__(self, source, predicate: Optional[AsyncPredicate[TNode]], equaler: Equaler, keep_top: bool):
        self._source = source
        self._predicate = predicate
        self._equaler = equaler
        self._keep_top = keep_top

    def __aiter__(self):
        async def pruned_data():
            provider = self._source.hierarchy()
            candidates = []
            async with opened_async(self._source) as elements:
                async for element in elements:
                    if is_hierarchy_element(provider, element):
                        candidates.append(element)
            count = len(candidates)
            survivors = prune(candidates, AncestorSets(provider, self._equaler), self._keep_top)
            logger.debug("%s kept %d of %d node(s)", "top_most" if self._keep_top else "bottom_most", len(survivors), count)
            for node in survivors:
                if self._predicate is None or await resolve(self._predicate(node)):
                    yield node

        return pruned_data()

    def hierarchy(self) -> HierarchyProvider[TNode]:
        return self._source.hierarchy()


def top_most(source, predicate: Optional[AsyncPredicate[TNode]] = None,
             equaler: Optional[Equaler[TNode]] = None) -> AsyncHierarchyIterable[TNode]:
    guards.must_be_async_or_sync_hierarchy_iterable(source, "source")
    guards.must_be_function_or_none(predicate, "predicate")
    resolved = guards.to_equaler(equaler, "equaler", identity=True)
    return AsyncPrunedHierarchyIterable(source, predicate, resolved, keep_top=True)


def bottom_most(source, predicate: Optional[AsyncPredicate[TNode]] = None,
                equaler: Optional[Equaler[TNode]] = None) -> AsyncHierarchyIterable[TNode]:
    guards.must_be_async_or_sync_hierarchy_iterable(source, "source")
    guards.must_be_function_or_none(predicate, "predicate")
    resolved = guards.to_equaler(equaler, "equaler", identity=True)
    return AsyncPrunedHierarchyIterable(source, predicate, resolved, keep_top=False)


def to_hierarchy(source, provider: HierarchyProvider[TNode]) -> AsyncHierarchyIterable[TNode]:
    """tag an async (or sync) sequence with the provider its elements belong to"""
    guards.must_be_async_or_sync_iterable(source, "source")
    guards.must_be_hierarchy_provider(provider, "provider")
    return AsyncHierarchyIterable.create(source, provider)
