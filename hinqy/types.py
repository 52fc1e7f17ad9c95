from typing import (
    TypeVar, Generic, Callable, Iterator, Iterable, Any, Optional, Union,
    Dict, List, Tuple, Set, Type, Awaitable, AsyncIterator, Mapping
)

T = TypeVar('T')
U = TypeVar('U')
K = TypeVar('K')
V = TypeVar('V')
TNode = TypeVar('TNode')

Predicate = Callable[[T], bool]
Selector = Callable[[T], U]
KeySelector = Callable[[T], K]
Comparison = Callable[[T, T], int]
Accumulator = Callable[[U, T], U]

# async callbacks may answer directly or with an awaitable
AsyncPredicate = Callable[[T], Union[bool, Awaitable[bool]]]
AsyncSelector = Callable[[T], Union[U, Awaitable[U]]]


class Grouping(Generic[K, T]):
    """a key paired with the elements that produced it"""

    def __init__(self, key: K, items: List[T]):
        self.key = key
        self.items = items

    def __iter__(self) -> Iterator[T]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __eq__(self, other) -> bool:
        return isinstance(other, Grouping) and self.key == other.key and self.items == other.items

    def __repr__(self) -> str:
        return f"Grouping(key={self.key!r}, items={len(self.items)})"


class Lookup(Mapping):
    """
    read-only mapping from key to the list of matching elements.
    a key that was never seen maps to an empty list instead of raising.
    """

    def __init__(self, buckets):
        # buckets is a HashMap of key -> list, already keyed through the caller's equaler
        self._buckets = buckets
        self._groupings = [Grouping(key, items) for key, items in buckets.items()]

    def __getitem__(self, key) -> List:
        found = self._buckets.get(key)
        return list(found) if found is not None else []

    def __contains__(self, key) -> bool:
        return self._buckets.has(key)

    def __iter__(self) -> Iterator:
        return (g.key for g in self._groupings)

    def __len__(self) -> int:
        return len(self._groupings)

    def groupings(self) -> List[Grouping]:
        return list(self._groupings)

    def __repr__(self) -> str:
        return f"Lookup(keys={len(self._groupings)})"
