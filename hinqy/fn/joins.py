from __future__ import annotations
from .. import guards
from ..types import *
from ..collections import HashMap
from ..iteration import opened, LazyIterable


def _inner_lookup(inner: Iterable[U], inner_key_selector: KeySelector[U, K], equaler) -> HashMap:
    lookup = HashMap(equaler)
    with opened(inner) as iterator:
        for inner_item in iterator:
            lookup.get_or_add(inner_key_selector(inner_item), list).append(inner_item)
    return lookup


def _check_join(outer, inner, outer_key_selector, inner_key_selector, result_selector) -> None:
    guards.must_be_iterable(outer, "outer")
    guards.must_be_iterable(inner, "inner")
    guards.must_be_function(outer_key_selector, "outer_key_selector")
    guards.must_be_function(inner_key_selector, "inner_key_selector")
    guards.must_be_function(result_selector, "result_selector")


def join(outer: Iterable[T], inner: Iterable[U], outer_key_selector: KeySelector[T, K],
         inner_key_selector: KeySelector[U, K], result_selector: Callable[[T, U], V],
         equaler=None) -> Iterable[V]:
    """inner join two sequences based on matching keys"""
    _check_join(outer, inner, outer_key_selector, inner_key_selector, result_selector)
    resolved = guards.to_equaler(equaler, "equaler")

    def join_data():
        lookup = _inner_lookup(inner, inner_key_selector, resolved)
        with opened(outer) as iterator:
            for outer_item in iterator:
                for inner_item in lookup.get(outer_key_selector(outer_item), ()):
                    yield result_selector(outer_item, inner_item)

    return LazyIterable(join_data)


def left_join(outer: Iterable[T], inner: Iterable[U], outer_key_selector: KeySelector[T, K],
              inner_key_selector: KeySelector[U, K], result_selector: Callable[[T, Optional[U]], V],
              default_inner: Optional[U] = None, equaler=None) -> Iterable[V]:
    """left outer join - includes all outer elements even without matches"""
    _check_join(outer, inner, outer_key_selector, inner_key_selector, result_selector)
    resolved = guards.to_equaler(equaler, "equaler")

    def left_join_data():
        lookup = _inner_lookup(inner, inner_key_selector, resolved)
        with opened(outer) as iterator:
            for outer_item in iterator:
                matched = lookup.get(outer_key_selector(outer_item))
                if matched:
                    for inner_item in matched:
                        yield result_selector(outer_item, inner_item)
                else:
                    yield result_selector(outer_item, default_inner)

    return LazyIterable(left_join_data)


def group_join(outer: Iterable[T], inner: Iterable[U], outer_key_selector: KeySelector[T, K],
               inner_key_selector: KeySelector[U, K], result_selector: Callable[[T, List[U]], V],
               equaler=None) -> Iterable[V]:
    """pair each outer element with the list of its matching inner elements"""
    _check_join(outer, inner, outer_key_selector, inner_key_selector, result_selector)
    resolved = guards.to_equaler(equaler, "equaler")

    def group_join_data():
        lookup = _inner_lookup(inner, inner_key_selector, resolved)
        with opened(outer) as iterator:
            for outer_item in iterator:
                yield result_selector(outer_item, list(lookup.get(outer_key_selector(outer_item), ())))

    return LazyIterable(group_join_data)
