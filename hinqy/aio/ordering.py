from __future__ import annotations
from collections.abc import AsyncIterable
from .. import guards
from ..types import *
from ..comparison import Comparer
from ..hierarchy import flow_hierarchy
from ..iteration import opened_async, LazyAsyncIterable
from ..ordered import AsyncOrderedIterable, SortKey, sort_indices


async def _materialize(source) -> List[Any]:
    elements = []
    async with opened_async(source) as iterator:
        async for element in iterator:
            elements.append(element)
    return elements


class AsyncOrderByIterable(AsyncOrderedIterable):
    """the async ordered sequence: the source is awaited in full, then sorted like the sync one"""

    def __init__(self, source, sort_keys: Tuple[SortKey, ...]):
        self._source = source
        self._sort_keys = sort_keys

    def __aiter__(self):
        async def sorted_data():
            elements = await _materialize(self._source)
            for index in sort_indices(elements, self._sort_keys):
                yield elements[index]

        return sorted_data()

    def then_by(self, key_selector: KeySelector[T, K], comparer: Optional[Comparer[K]] = None,
                descending: bool = False) -> 'AsyncOrderByIterable':
        guards.must_be_function(key_selector, "key_selector")
        resolved = guards.to_comparer(comparer, "comparer")
        guards.must_be_bool(descending, "descending")
        return AsyncOrderByIterable(self._source, self._sort_keys + (SortKey(key_selector, resolved, descending),))

    def __repr__(self) -> str:
        return f"AsyncOrderByIterable(keys={len(self._sort_keys)})"


def _order(source, key_selector, comparer, descending: bool) -> AsyncOrderedIterable:
    guards.must_be_async_or_sync_iterable(source, "source")
    guards.must_be_function(key_selector, "key_selector")
    resolved = guards.to_comparer(comparer, "comparer")
    return flow_hierarchy(AsyncOrderByIterable(source, (SortKey(key_selector, resolved, descending),)), source)


def order_by(source, key_selector: KeySelector[T, K],
             comparer: Optional[Union[Comparer[K], Comparison[K]]] = None) -> AsyncOrderedIterable:
    """sort ascending by a synchronous key"""
    return _order(source, key_selector, comparer, False)


def order_by_descending(source, key_selector: KeySelector[T, K],
                        comparer: Optional[Union[Comparer[K], Comparison[K]]] = None) -> AsyncOrderedIterable:
    return _order(source, key_selector, comparer, True)


def _refine(source, key_selector, comparer, descending: bool) -> AsyncOrderedIterable:
    guards.must_be_async_ordered_iterable(source, "source")
    guards.must_be_function(key_selector, "key_selector")
    resolved = guards.to_comparer(comparer, "comparer")
    return flow_hierarchy(source.then_by(key_selector, resolved, descending), source)


def then_by(source: AsyncOrderedIterable, key_selector: KeySelector[T, K],
            comparer: Optional[Union[Comparer[K], Comparison[K]]] = None) -> AsyncOrderedIterable:
    return _refine(source, key_selector, comparer, False)


def then_by_descending(source: AsyncOrderedIterable, key_selector: KeySelector[T, K],
                       comparer: Optional[Union[Comparer[K], Comparison[K]]] = None) -> AsyncOrderedIterable:
    return _refine(source, key_selector, comparer, True)


def reverse(source) -> AsyncIterable:
    guards.must_be_async_or_sync_iterable(source, "source")

    async def reversed_data():
        for element in reversed(await _materialize(source)):
            yield element

    return flow_hierarchy(LazyAsyncIterable(reversed_data), source)
