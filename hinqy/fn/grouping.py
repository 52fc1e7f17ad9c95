from __future__ import annotations
from .. import guards
from ..types import *
from ..collections import HashMap
from ..iteration import opened, LazyIterable


def _bucket(source: Iterable[T], key_selector: KeySelector[T, K],
            element_selector: Optional[Selector[T, U]], equaler) -> HashMap:
    buckets = HashMap(equaler)
    with opened(source) as iterator:
        for element in iterator:
            value = element_selector(element) if element_selector is not None else element
            buckets.get_or_add(key_selector(element), list).append(value)
    return buckets


def group_by(source: Iterable[T], key_selector: KeySelector[T, K],
             element_selector: Optional[Selector[T, U]] = None,
             result_selector: Optional[Callable[[K, List[U]], V]] = None,
             equaler=None) -> Iterable[Union[Grouping[K, U], V]]:
    """group elements by key, in order of each key's first appearance"""
    guards.must_be_iterable(source, "source")
    guards.must_be_function(key_selector, "key_selector")
    guards.must_be_function_or_none(element_selector, "element_selector")
    guards.must_be_function_or_none(result_selector, "result_selector")
    resolved = guards.to_equaler(equaler, "equaler")

    def group_data():
        for key, items in _bucket(source, key_selector, element_selector, resolved).items():
            yield result_selector(key, items) if result_selector is not None else Grouping(key, items)

    return LazyIterable(group_data)


def to_lookup(source: Iterable[T], key_selector: KeySelector[T, K],
              element_selector: Optional[Selector[T, U]] = None, equaler=None) -> Lookup:
    """eagerly build a read-only key -> elements mapping; unknown keys map to []"""
    guards.must_be_iterable(source, "source")
    guards.must_be_function(key_selector, "key_selector")
    guards.must_be_function_or_none(element_selector, "element_selector")
    resolved = guards.to_equaler(equaler, "equaler")
    return Lookup(_bucket(source, key_selector, element_selector, resolved))


def chunk(source: Iterable[T], size: int) -> Iterable[List[T]]:
    """split into lists of `size` elements; the last one may be shorter"""
    guards.must_be_iterable(source, "source")
    size = guards.to_integer(size, "size")
    if size <= 0:
        raise ValueError("argument out of range: size")

    def chunk_data():
        current = []
        with opened(source) as iterator:
            for element in iterator:
                current.append(element)
                if len(current) == size:
                    yield current
                    current = []
        if current:
            yield current

    return LazyIterable(chunk_data)
