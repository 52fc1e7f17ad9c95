from __future__ import annotations
from .. import guards
from ..types import *
from ..comparison import Comparer
from ..hierarchy import flow_hierarchy
from ..iteration import opened, LazyIterable
from ..ordered import OrderedIterable, SortKey, sort_indices


def _materialize(source: Iterable[T]) -> List[T]:
    with opened(source) as iterator:
        return list(iterator)


class OrderByIterable(OrderedIterable[T]):
    """
    a lazily sorted sequence. the sort chain is held as an explicit tuple of keys;
    then_by builds a new sequence with one more key and leaves this one untouched.
    """

    def __init__(self, source: Iterable[T], sort_keys: Tuple[SortKey, ...]):
        self._source = source
        self._sort_keys = sort_keys

    def __iter__(self) -> Iterator[T]:
        elements = _materialize(self._source)
        for index in sort_indices(elements, self._sort_keys):
            yield elements[index]

    def then_by(self, key_selector: KeySelector[T, K], comparer: Optional[Comparer[K]] = None,
                descending: bool = False) -> 'OrderByIterable[T]':
        guards.must_be_function(key_selector, "key_selector")
        resolved = guards.to_comparer(comparer, "comparer")
        guards.must_be_bool(descending, "descending")
        return OrderByIterable(self._source, self._sort_keys + (SortKey(key_selector, resolved, descending),))

    def __repr__(self) -> str:
        return f"OrderByIterable(keys={len(self._sort_keys)})"


def order_by(source: Iterable[T], key_selector: KeySelector[T, K],
             comparer: Optional[Union[Comparer[K], Comparison[K]]] = None) -> OrderedIterable[T]:
    """sort ascending by a key. the sort runs when the result is iterated"""
    guards.must_be_iterable(source, "source")
    guards.must_be_function(key_selector, "key_selector")
    resolved = guards.to_comparer(comparer, "comparer")
    return flow_hierarchy(OrderByIterable(source, (SortKey(key_selector, resolved, False),)), source)


def order_by_descending(source: Iterable[T], key_selector: KeySelector[T, K],
                        comparer: Optional[Union[Comparer[K], Comparison[K]]] = None) -> OrderedIterable[T]:
    """sort descending by a key"""
    guards.must_be_iterable(source, "source")
    guards.must_be_function(key_selector, "key_selector")
    resolved = guards.to_comparer(comparer, "comparer")
    return flow_hierarchy(OrderByIterable(source, (SortKey(key_selector, resolved, True),)), source)


def then_by(source: OrderedIterable[T], key_selector: KeySelector[T, K],
            comparer: Optional[Union[Comparer[K], Comparison[K]]] = None) -> OrderedIterable[T]:
    """add an ascending subordinate key to an ordered sequence"""
    guards.must_be_ordered_iterable(source, "source")
    guards.must_be_function(key_selector, "key_selector")
    resolved = guards.to_comparer(comparer, "comparer")
    return flow_hierarchy(source.then_by(key_selector, resolved, False), source)


def then_by_descending(source: OrderedIterable[T], key_selector: KeySelector[T, K],
                       comparer: Optional[Union[Comparer[K], Comparison[K]]] = None) -> OrderedIterable[T]:
    """add a descending subordinate key to an ordered sequence"""
    guards.must_be_ordered_iterable(source, "source")
    guards.must_be_function(key_selector, "key_selector")
    resolved = guards.to_comparer(comparer, "comparer")
    return flow_hierarchy(source.then_by(key_selector, resolved, True), source)


def reverse(source: Iterable[T]) -> Iterable[T]:
    """invert the order of a sequence"""
    guards.must_be_iterable(source, "source")

    def reversed_data():
        yield from reversed(_materialize(source))

    return flow_hierarchy(LazyIterable(reversed_data), source)
