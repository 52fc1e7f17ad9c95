import typing
from .types import *
from . import guards
from .iteration import LazyIterable

if typing.TYPE_CHECKING:
    from .enumerable import Enumerable
    from .async_enumerable import AsyncEnumerable
    from .hierarchy import HierarchyProvider


def from_iterable(data: Iterable[T]) -> 'Enumerable[T]':
    """create enumerable from iterable"""
    from .enumerable import Enumerable
    return Enumerable(data)


def from_range(start: int, count: int) -> 'Enumerable[int]':
    """create enumerable from range"""
    from .enumerable import Enumerable
    start = guards.to_integer(start, "start")
    count = guards.to_count(count, "count")
    return Enumerable(range(start, start + count))


def repeat(item: T, count: int) -> 'Enumerable[T]':
    """create enumerable with repeated item"""
    from .enumerable import Enumerable
    count = guards.to_count(count, "count")

    def repeat_data():
        for _ in range(count):
            yield item

    return Enumerable(LazyIterable(repeat_data))


def empty() -> 'Enumerable[Any]':
    """create empty enumerable"""
    from .enumerable import Enumerable
    return Enumerable(())


def generate(generator_func: Callable[[], T], count: int) -> 'Enumerable[T]':
    """generate sequence using a function; the function runs again on every iteration"""
    from .enumerable import Enumerable
    guards.must_be_function(generator_func, "generator_func")
    count = guards.to_count(count, "count")

    def generate_data():
        for _ in range(count):
            yield generator_func()

    return Enumerable(LazyIterable(generate_data))


def from_hierarchy(nodes: Iterable[T], provider: 'HierarchyProvider[T]') -> 'Enumerable[T]':
    """create enumerable over nodes of a hierarchy, ready for the .tree accessor"""
    return from_iterable(nodes).to_hierarchy(provider)


def from_async(data) -> 'AsyncEnumerable[Any]':
    """create async enumerable from an async iterable, or a sync iterable of awaitables"""
    from .async_enumerable import AsyncEnumerable
    return AsyncEnumerable(data)


# --- aliases ---
hinqy = from_iterable
P = from_iterable
