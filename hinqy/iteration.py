"""
closeable iteration helpers shared by every operator.

`opened` and `opened_async` scope an upstream iterator to a `with` block and close
it on every exit path: exhaustion, the consumer stopping early (GeneratorExit),
or an exception from a user callback.
"""
import inspect
from collections.abc import AsyncIterable
from contextlib import contextmanager, asynccontextmanager
from .types import *


@contextmanager
def opened(source: Iterable[T]) -> Iterator[Iterator[T]]:
    iterator = iter(source)
    try:
        yield iterator
    finally:
        close = getattr(iterator, 'close', None)
        if close is not None:
            close()


async def resolve(value: Any) -> Any:
    """await the value if it is awaitable, otherwise hand it back unchanged"""
    if inspect.isawaitable(value):
        return await value
    return value


async def _from_sync(source: Iterable[Any]) -> AsyncIterator[Any]:
    with opened(source) as iterator:
        for element in iterator:
            yield await resolve(element)


@asynccontextmanager
async def opened_async(source: Union[AsyncIterable, Iterable]):
    """
    open an async iterable, or a sync iterable whose elements may be awaitables,
    as one async iterator that is closed (awaited) on exit.
    """
    if isinstance(source, AsyncIterable):
        iterator = source.__aiter__()
    else:
        iterator = _from_sync(source)
    try:
        yield iterator
    finally:
        aclose = getattr(iterator, 'aclose', None)
        if aclose is not None:
            await aclose()


class LazyIterable(Iterable[T]):
    """a re-iterable sequence: each iteration calls the factory for a fresh generator"""

    def __init__(self, factory: Callable[[], Iterator[T]]):
        self._factory = factory

    def __iter__(self) -> Iterator[T]:
        return self._factory()


class LazyAsyncIterable(AsyncIterable):
    """async counterpart of LazyIterable"""

    def __init__(self, factory: Callable[[], AsyncIterator[Any]]):
        self._factory = factory

    def __aiter__(self) -> AsyncIterator[Any]:
        return self._factory()
