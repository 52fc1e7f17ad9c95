from __future__ import annotations
import typing
from .. import fn
from ..types import *

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable


class SetAccessor(Generic[T]):
    """
    order-preserving set operations. elements are matched with `==`/`hash` unless an
    equaler is supplied, so unhashable elements work with a custom one.
    """

    def __init__(self, enumerable_instance: 'Enumerable[T]'):
        self._enumerable = enumerable_instance

    def distinct(self, key_selector: Optional[KeySelector[T, K]] = None, equaler=None) -> 'Enumerable[T]':
        """return distinct elements. preserves order of first appearance."""
        from ..enumerable import Enumerable
        return Enumerable(fn.distinct(self._enumerable._source, key_selector, equaler))

    def union(self, other: Iterable[T], equaler=None) -> 'Enumerable[T]':
        """return the order-preserving union of two sequences (distinct elements)."""
        from ..enumerable import Enumerable
        return Enumerable(fn.union(self._enumerable._source, other, equaler))

    def intersect(self, other: Iterable[T], equaler=None) -> 'Enumerable[T]':
        """return the order-preserving intersection of two sequences."""
        from ..enumerable import Enumerable
        return Enumerable(fn.intersect(self._enumerable._source, other, equaler))

    def except_(self, other: Iterable[T], equaler=None) -> 'Enumerable[T]':
        """return elements from the first sequence not in the second (set difference)."""
        from ..enumerable import Enumerable
        return Enumerable(fn.except_(self._enumerable._source, other, equaler))

    def concat(self, *others: Iterable[T]) -> 'Enumerable[T]':
        """concatenate sequences, keeping duplicates"""
        from ..enumerable import Enumerable
        return Enumerable(fn.concat(self._enumerable._source, *others))
