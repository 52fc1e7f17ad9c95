from __future__ import annotations

from .types import *
from . import fn, guards
from .comparison import Comparer
from .hierarchy import Hierarchical

# --- core functionality ---
from .extensions.core import _CoreOperations

# --- accessors ---
from .extensions.set import SetAccessor
from .extensions.join import JoinAccessor
from .extensions.grouping import GroupingAccessor
from .extensions.terminal import TerminalAccessor
from .extensions.tree import TreeAccessor


# --- base enumerable implementation ---

class _BaseEnumerable(Iterable[T]):
    def __init__(self, source: Iterable[T]):
        """wrap any iterable. nothing is evaluated until the enumerable is iterated"""
        guards.must_be_iterable(source, "source")
        if isinstance(source, _BaseEnumerable):
            source = source._source
        self._source = source

    def __iter__(self) -> Iterator[T]:
        # each iteration re-runs the whole query chain
        return iter(self._source)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({type(self._source).__name__})"

    def is_hierarchical(self) -> bool:
        """whether the sequence carries a hierarchy provider"""
        return isinstance(self._source, Hierarchical)


# --- main enumerable class ---

class Enumerable(
    _BaseEnumerable[T],
    _CoreOperations[T]
):
    """a lazy, linq-inspired enumerable class for python iterables."""
    def __init__(self, source: Iterable[T]):
        super().__init__(source)
        # --- initialize accessors ---
        self.set = SetAccessor(self)
        self.join = JoinAccessor(self)
        self.group = GroupingAccessor(self)
        self.to = TerminalAccessor(self)
        self.tree = TreeAccessor(self)


# --- ordered enumerable class ---

class OrderedEnumerable(Enumerable[T]):
    """represents a sorted sequence, allowing for subsequent orderings."""

    def __init__(self, source):
        guards.must_be_ordered_iterable(source, "source")
        super().__init__(source)

    def then_by(self, key_selector: KeySelector[T, K],
                comparer: Optional[Union[Comparer[K], Comparison[K]]] = None) -> 'OrderedEnumerable[T]':
        """secondary sort ascending"""
        return OrderedEnumerable(fn.then_by(self._source, key_selector, comparer))

    def then_by_descending(self, key_selector: KeySelector[T, K],
                           comparer: Optional[Union[Comparer[K], Comparison[K]]] = None) -> 'OrderedEnumerable[T]':
        """secondary sort descending"""
        return OrderedEnumerable(fn.then_by_descending(self._source, key_selector, comparer))
