from __future__ import annotations
from collections.abc import AsyncIterable
from .types import *
from . import aio, guards
from .comparison import Comparer
from .hierarchy import Hierarchical
from .extensions.terminal import AsyncTerminalAccessor
from .extensions.tree import AsyncTreeAccessor


class AsyncEnumerable(Generic[T], AsyncIterable):
    """
    fluent wrapper over an async iterable (or a sync iterable of awaitables).
    use it with `async for`, or finish a query with one of the `.to` coroutines.
    """

    def __init__(self, source):
        guards.must_be_async_or_sync_iterable(source, "source")
        if isinstance(source, AsyncEnumerable):
            source = source._source
        self._source = source
        self.to = AsyncTerminalAccessor(self)
        self.tree = AsyncTreeAccessor(self)

    def __aiter__(self) -> AsyncIterator[T]:
        return aio.to_async(self._source).__aiter__()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({type(self._source).__name__})"

    def is_hierarchical(self) -> bool:
        return isinstance(self._source, Hierarchical)

    def where(self, predicate: AsyncPredicate[T]) -> 'AsyncEnumerable[T]':
        return AsyncEnumerable(aio.where(self._source, predicate))

    def select(self, selector: AsyncSelector[T, U]) -> 'AsyncEnumerable[U]':
        return AsyncEnumerable(aio.select(self._source, selector))

    def select_many(self, selector: AsyncSelector[T, Any]) -> 'AsyncEnumerable[Any]':
        return AsyncEnumerable(aio.select_many(self._source, selector))

    def take(self, count: int) -> 'AsyncEnumerable[T]':
        return AsyncEnumerable(aio.take(self._source, count))

    def skip(self, count: int) -> 'AsyncEnumerable[T]':
        return AsyncEnumerable(aio.skip(self._source, count))

    def take_while(self, predicate: AsyncPredicate[T]) -> 'AsyncEnumerable[T]':
        return AsyncEnumerable(aio.take_while(self._source, predicate))

    def skip_while(self, predicate: AsyncPredicate[T]) -> 'AsyncEnumerable[T]':
        return AsyncEnumerable(aio.skip_while(self._source, predicate))

    def concat(self, *others) -> 'AsyncEnumerable[T]':
        return AsyncEnumerable(aio.concat(self._source, *others))

    def distinct(self, key_selector: Optional[AsyncSelector[T, K]] = None, equaler=None) -> 'AsyncEnumerable[T]':
        return AsyncEnumerable(aio.distinct(self._source, key_selector, equaler))

    def reverse(self) -> 'AsyncEnumerable[T]':
        return AsyncEnumerable(aio.reverse(self._source))

    def order_by(self, key_selector: KeySelector[T, K], comparer=None) -> 'AsyncOrderedEnumerable[T]':
        """sort by a synchronous key once the whole source has been awaited"""
        return AsyncOrderedEnumerable(aio.order_by(self._source, key_selector, comparer))

    def order_by_descending(self, key_selector: KeySelector[T, K], comparer=None) -> 'AsyncOrderedEnumerable[T]':
        return AsyncOrderedEnumerable(aio.order_by_descending(self._source, key_selector, comparer))

    def to_hierarchy(self, provider) -> 'AsyncEnumerable[T]':
        """tag the sequence with a hierarchy provider, enabling the .tree accessor"""
        tagged = aio.to_hierarchy(self._source, provider)
        return AsyncOrderedEnumerable(tagged) if isinstance(self, AsyncOrderedEnumerable) else AsyncEnumerable(tagged)


class AsyncOrderedEnumerable(AsyncEnumerable[T]):
    def __init__(self, source):
        guards.must_be_async_ordered_iterable(source, "source")
        super().__init__(source)

    def then_by(self, key_selector: KeySelector[T, K],
                comparer: Optional[Union[Comparer[K], Comparison[K]]] = None) -> 'AsyncOrderedEnumerable[T]':
        return AsyncOrderedEnumerable(aio.then_by(self._source, key_selector, comparer))

    def then_by_descending(self, key_selector: KeySelector[T, K],
                           comparer: Optional[Union[Comparer[K], Comparison[K]]] = None) -> 'AsyncOrderedEnumerable[T]':
        return AsyncOrderedEnumerable(aio.then_by_descending(self._source, key_selector, comparer))
