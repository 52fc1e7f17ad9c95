"""async terminal operators; each one is a coroutine"""
from __future__ import annotations
from .. import guards
from ..types import *
from ..iteration import opened_async, resolve

_no_seed = object()


async def to_list(source) -> List[Any]:
    guards.must_be_async_or_sync_iterable(source, "source")
    result = []
    async with opened_async(source) as iterator:
        async for element in iterator:
            result.append(element)
    return result


async def to_dict(source, key_selector: AsyncSelector[T, K],
                  value_selector: Optional[AsyncSelector[T, V]] = None) -> Dict[K, V]:
    guards.must_be_async_or_sync_iterable(source, "source")
    guards.must_be_function(key_selector, "key_selector")
    guards.must_be_function_or_none(value_selector, "value_selector")
    result = {}
    async with opened_async(source) as iterator:
        async for element in iterator:
            key = await resolve(key_selector(element))
            result[key] = await resolve(value_selector(element)) if value_selector is not None else element
    return result


async def count(source, predicate: Optional[AsyncPredicate[T]] = None) -> int:
    guards.must_be_async_or_sync_iterable(source, "source")
    guards.must_be_function_or_none(predicate, "predicate")
    total = 0
    async with opened_async(source) as iterator:
        async for element in iterator:
            if predicate is None or await resolve(predicate(element)):
                total += 1
    return total


async def any_(source, predicate: Optional[AsyncPredicate[T]] = None) -> bool:
    guards.must_be_async_or_sync_iterable(source, "source")
    guards.must_be_function_or_none(predicate, "predicate")
    async with opened_async(source) as iterator:
        async for element in iterator:
            if predicate is None or await resolve(predicate(element)):
                return True
    return False


async def all_(source, predicate: AsyncPredicate[T]) -> bool:
    guards.must_be_async_or_sync_iterable(source, "source")
    guards.must_be_function(predicate, "predicate")
    async with opened_async(source) as iterator:
        async for element in iterator:
            if not await resolve(predicate(element)):
                return False
    return True


async def first(source, predicate: Optional[AsyncPredicate[T]] = None) -> T:
    guards.must_be_async_or_sync_iterable(source, "source")
    guards.must_be_function_or_none(predicate, "predicate")
    async with opened_async(source) as iterator:
        async for element in iterator:
            if predicate is None or await resolve(predicate(element)):
                return element
    if predicate is None:
        raise ValueError("sequence contains no elements")
    raise ValueError("no element satisfies the condition")


async def first_or_default(source, predicate: Optional[AsyncPredicate[T]] = None,
                           default: Optional[T] = None) -> Optional[T]:
    guards.must_be_async_or_sync_iterable(source, "source")
    guards.must_be_function_or_none(predicate, "predicate")
    async with opened_async(source) as iterator:
        async for element in iterator:
            if predicate is None or await resolve(predicate(element)):
                return element
    return default


async def last(source, predicate: Optional[AsyncPredicate[T]] = None) -> T:
    guards.must_be_async_or_sync_iterable(source, "source")
    guards.must_be_function_or_none(predicate, "predicate")
    found = False
    result = None
    async with opened_async(source) as iterator:
        async for element in iterator:
            if predicate is None or await resolve(predicate(element)):
                found, result = True, element
    if found:
        return result
    if predicate is None:
        raise ValueError("sequence contains no elements")
    raise ValueError("no element satisfies the condition")


async def aggregate(source, accumulator: Callable[[U, T], Union[U, Awaitable[U]]], seed: U = _no_seed) -> U:
    """fold the sequence left to right; the accumulator may return an awaitable"""
    guards.must_be_async_or_sync_iterable(source, "source")
    guards.must_be_function(accumulator, "accumulator")
    current = seed
    async with opened_async(source) as iterator:
        async for element in iterator:
            if current is _no_seed:
                current = element
            else:
                current = await resolve(accumulator(current, element))
    if current is _no_seed:
        raise ValueError("cannot aggregate empty sequence without seed")
    return current
