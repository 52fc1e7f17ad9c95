"""
async basic operators.

sources may be async iterables or sync iterables of (possibly awaitable) elements.
predicates and selectors may answer directly or with an awaitable.
"""
from __future__ import annotations
from collections.abc import AsyncIterable
from .. import guards
from ..types import *
from ..collections import HashSet
from ..hierarchy import flow_hierarchy
from ..iteration import opened_async, resolve, LazyAsyncIterable


def to_async(source: Union[AsyncIterable, Iterable[T]]) -> AsyncIterable:
    """view any iterable as an async one, awaiting awaitable elements"""
    guards.must_be_async_or_sync_iterable(source, "source")

    async def async_data():
        async with opened_async(source) as iterator:
            async for element in iterator:
                yield element

    return flow_hierarchy(LazyAsyncIterable(async_data), source)


def where(source, predicate: AsyncPredicate[T]) -> AsyncIterable:
    guards.must_be_async_or_sync_iterable(source, "source")
    guards.must_be_function(predicate, "predicate")

    async def filter_data():
        async with opened_async(source) as iterator:
            async for element in iterator:
                if await resolve(predicate(element)):
                    yield element

    return flow_hierarchy(LazyAsyncIterable(filter_data), source)


def select(source, selector: AsyncSelector[T, U]) -> AsyncIterable:
    guards.must_be_async_or_sync_iterable(source, "source")
    guards.must_be_function(selector, "selector")

    async def map_data():
        async with opened_async(source) as iterator:
            async for element in iterator:
                yield await resolve(selector(element))

    return LazyAsyncIterable(map_data)


def select_many(source, selector: AsyncSelector[T, Any]) -> AsyncIterable:
    """project each element to a sync or async sequence and flatten"""
    guards.must_be_async_or_sync_iterable(source, "source")
    guards.must_be_function(selector, "selector")

    async def flat_map_data():
        async with opened_async(source) as iterator:
            async for element in iterator:
                inner = await resolve(selector(element))
                guards.must_be_async_or_sync_iterable(inner, "selector result")
                async with opened_async(inner) as inner_iterator:
                    async for inner_element in inner_iterator:
                        yield inner_element

    return LazyAsyncIterable(flat_map_data)


def take(source, count: int) -> AsyncIterable:
    guards.must_be_async_or_sync_iterable(source, "source")
    count = guards.to_count(count, "count")

    async def take_data():
        if count == 0:
            return
        taken = 0
        async with opened_async(source) as iterator:
            async for element in iterator:
                yield element
                taken += 1
                if taken >= count:
                    return

    return flow_hierarchy(LazyAsyncIterable(take_data), source)


def skip(source, count: int) -> AsyncIterable:
    guards.must_be_async_or_sync_iterable(source, "source")
    count = guards.to_count(count, "count")

    async def skip_data():
        skipped = 0
        async with opened_async(source) as iterator:
            async for element in iterator:
                if skipped < count:
                    skipped += 1
                    continue
                yield element

    return flow_hierarchy(LazyAsyncIterable(skip_data), source)


def take_while(source, predicate: AsyncPredicate[T]) -> AsyncIterable:
    guards.must_be_async_or_sync_iterable(source, "source")
    guards.must_be_function(predicate, "predicate")

    async def take_while_data():
        async with opened_async(source) as iterator:
            async for element in iterator:
                if not await resolve(predicate(element)):
                    return
                yield element

    return flow_hierarchy(LazyAsyncIterable(take_while_data), source)


def skip_while(source, predicate: AsyncPredicate[T]) -> AsyncIterable:
    guards.must_be_async_or_sync_iterable(source, "source")
    guards.must_be_function(predicate, "predicate")

    async def skip_while_data():
        skipping = True
        async with opened_async(source) as iterator:
            async for element in iterator:
                if skipping and await resolve(predicate(element)):
                    continue
                skipping = False
                yield element

    return flow_hierarchy(LazyAsyncIterable(skip_while_data), source)


def concat(source, *others) -> AsyncIterable:
    guards.must_be_async_or_sync_iterable(source, "source")
    for position, other in enumerate(others):
        guards.must_be_async_or_sync_iterable(other, f"others[{position}]")

    async def concat_data():
        for sequence in (source, *others):
            async with opened_async(sequence) as iterator:
                async for element in iterator:
                    yield element

    return flow_hierarchy(LazyAsyncIterable(concat_data), source)


def distinct(source, key_selector: Optional[AsyncSelector[T, K]] = None, equaler=None) -> AsyncIterable:
    guards.must_be_async_or_sync_iterable(source, "source")
    guards.must_be_function_or_none(key_selector, "key_selector")
    resolved = guards.to_equaler(equaler, "equaler")

    async def distinct_data():
        seen = HashSet(equaler=resolved)
        async with opened_async(source) as iterator:
            async for element in iterator:
                key = await resolve(key_selector(element)) if key_selector is not None else element
                if seen.add(key):
                    yield element

    return flow_hierarchy(LazyAsyncIterable(distinct_data), source)
