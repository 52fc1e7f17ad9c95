from __future__ import annotations
from itertools import islice
from .. import guards
from ..types import *
from ..collections import HashSet
from ..hierarchy import flow_hierarchy
from ..iteration import opened, LazyIterable


def where(source: Iterable[T], predicate: Predicate[T]) -> Iterable[T]:
    """filter elements based on a predicate"""
    guards.must_be_iterable(source, "source")
    guards.must_be_function(predicate, "predicate")

    def filter_data():
        with opened(source) as iterator:
            for element in iterator:
                if predicate(element):
                    yield element

    return flow_hierarchy(LazyIterable(filter_data), source)


def select(source: Iterable[T], selector: Selector[T, U]) -> Iterable[U]:
    """project each element to a new form"""
    guards.must_be_iterable(source, "source")
    guards.must_be_function(selector, "selector")

    def map_data():
        with opened(source) as iterator:
            for element in iterator:
                yield selector(element)

    return LazyIterable(map_data)


def select_many(source: Iterable[T], selector: Selector[T, Iterable[U]]) -> Iterable[U]:
    """project and flatten sequences"""
    guards.must_be_iterable(source, "source")
    guards.must_be_function(selector, "selector")

    def flat_map_data():
        with opened(source) as iterator:
            for element in iterator:
                with opened(selector(element)) as inner:
                    yield from inner

    return LazyIterable(flat_map_data)


def take(source: Iterable[T], count: int) -> Iterable[T]:
    """take the first 'count' elements"""
    guards.must_be_iterable(source, "source")
    count = guards.to_count(count, "count")

    def take_data():
        if count == 0:
            return
        with opened(source) as iterator:
            yield from islice(iterator, count)

    return flow_hierarchy(LazyIterable(take_data), source)


def skip(source: Iterable[T], count: int) -> Iterable[T]:
    """skip the first 'count' elements"""
    guards.must_be_iterable(source, "source")
    count = guards.to_count(count, "count")

    def skip_data():
        with opened(source) as iterator:
            yield from islice(iterator, count, None)

    return flow_hierarchy(LazyIterable(skip_data), source)


def take_while(source: Iterable[T], predicate: Predicate[T]) -> Iterable[T]:
    """take elements while predicate is true"""
    guards.must_be_iterable(source, "source")
    guards.must_be_function(predicate, "predicate")

    def take_while_data():
        with opened(source) as iterator:
            for element in iterator:
                if not predicate(element):
                    return
                yield element

    return flow_hierarchy(LazyIterable(take_while_data), source)


def skip_while(source: Iterable[T], predicate: Predicate[T]) -> Iterable[T]:
    """skip elements while predicate is true"""
    guards.must_be_iterable(source, "source")
    guards.must_be_function(predicate, "predicate")

    def skip_while_data():
        skipping = True
        with opened(source) as iterator:
            for element in iterator:
                if skipping and predicate(element):
                    continue
                skipping = False
                yield element

    return flow_hierarchy(LazyIterable(skip_while_data), source)


def concat(source: Iterable[T], *others: Iterable[T]) -> Iterable[T]:
    """concatenate sequences, preserving all elements and order"""
    guards.must_be_iterable(source, "source")
    for position, other in enumerate(others):
        guards.must_be_iterable(other, f"others[{position}]")

    def concat_data():
        for sequence in (source, *others):
            with opened(sequence) as iterator:
                yield from iterator

    return flow_hierarchy(LazyIterable(concat_data), source)


def append(source: Iterable[T], element: T) -> Iterable[T]:
    """appends a value to the end of the sequence"""
    guards.must_be_iterable(source, "source")
    return concat(source, (element,))


def prepend(source: Iterable[T], element: T) -> Iterable[T]:
    """adds a value to the beginning of the sequence"""
    guards.must_be_iterable(source, "source")

    def prepend_data():
        yield element
        with opened(source) as iterator:
            yield from iterator

    return flow_hierarchy(LazyIterable(prepend_data), source)


def zip_(source: Iterable[T], other: Iterable[U],
         result_selector: Optional[Callable[[T, U], V]] = None) -> Iterable[Union[Tuple[T, U], V]]:
    """pair elements positionally, stopping at the shorter sequence"""
    guards.must_be_iterable(source, "source")
    guards.must_be_iterable(other, "other")
    guards.must_be_function_or_none(result_selector, "result_selector")

    def zip_data():
        with opened(source) as left, opened(other) as right:
            for pair in zip(left, right):
                yield result_selector(*pair) if result_selector is not None else pair

    return LazyIterable(zip_data)


def distinct(source: Iterable[T], key_selector: Optional[KeySelector[T, K]] = None,
             equaler=None) -> Iterable[T]:
    """distinct elements, in order of first appearance"""
    guards.must_be_iterable(source, "source")
    guards.must_be_function_or_none(key_selector, "key_selector")
    resolved = guards.to_equaler(equaler, "equaler")

    def distinct_data():
        seen = HashSet(equaler=resolved)
        with opened(source) as iterator:
            for element in iterator:
                if seen.add(key_selector(element) if key_selector is not None else element):
                    yield element

    return flow_hierarchy(LazyIterable(distinct_data), source)


def union(source: Iterable[T], other: Iterable[T], equaler=None) -> Iterable[T]:
    """order-preserving union of two sequences (distinct elements)"""
    guards.must_be_iterable(other, "other")
    return distinct(concat(source, other), equaler=equaler)


def intersect(source: Iterable[T], other: Iterable[T], equaler=None) -> Iterable[T]:
    """distinct elements of the first sequence that also appear in the second"""
    guards.must_be_iterable(source, "source")
    guards.must_be_iterable(other, "other")
    resolved = guards.to_equaler(equaler, "equaler")

    def intersect_data():
        with opened(other) as others:
            remaining = HashSet(others, resolved)
        with opened(source) as iterator:
            for element in iterator:
                # removal keeps a second occurrence from matching again
                if remaining.remove(element):
                    yield element

    return flow_hierarchy(LazyIterable(intersect_data), source)


def except_(source: Iterable[T], other: Iterable[T], equaler=None) -> Iterable[T]:
    """distinct elements of the first sequence that do not appear in the second"""
    guards.must_be_iterable(source, "source")
    guards.must_be_iterable(other, "other")
    resolved = guards.to_equaler(equaler, "equaler")

    def except_data():
        with opened(other) as others:
            seen = HashSet(others, resolved)
        with opened(source) as iterator:
            for element in iterator:
                if seen.add(element):
                    yield element

    return flow_hierarchy(LazyIterable(except_data), source)


def default_if_empty(source: Iterable[T], default_value: T) -> Iterable[T]:
    """the elements of a sequence, or a single default value if the sequence is empty"""
    guards.must_be_iterable(source, "source")

    def default_data():
        empty = True
        with opened(source) as iterator:
            for element in iterator:
                empty = False
                yield element
        if empty:
            yield default_value

    return LazyIterable(default_data)


def of_type(source: Iterable[Any], type_filter: Type[U]) -> Iterable[U]:
    """filters the elements of a sequence based on a specified type"""
    if not isinstance(type_filter, (type, tuple)):
        raise TypeError("type expected: type_filter")
    return where(source, lambda element: isinstance(element, type_filter))
