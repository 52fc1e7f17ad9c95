"""
eager argument validation.

every operator calls these before it builds its lazy sequence, so a bad argument
raises at the call site rather than the first time the sequence is iterated.
TypeError means the argument has the wrong shape, ValueError means it is out of range.
"""
import math
import numbers
from collections.abc import AsyncIterable
from .types import *
from .comparison import Comparer, Equaler, default_comparer, identity_equaler, default_equaler


def must_be_iterable(value: Any, name: str) -> None:
    if not isinstance(value, Iterable):
        raise TypeError(f"iterable expected: {name}")


def must_be_async_or_sync_iterable(value: Any, name: str) -> None:
    if not isinstance(value, (AsyncIterable, Iterable)):
        raise TypeError(f"async iterable or iterable expected: {name}")


def must_be_function(value: Any, name: str) -> None:
    if not callable(value):
        raise TypeError(f"function expected: {name}")


def must_be_function_or_none(value: Any, name: str) -> None:
    if value is not None and not callable(value):
        raise TypeError(f"function expected: {name}")


def must_be_bool(value: Any, name: str) -> None:
    if not isinstance(value, bool):
        raise TypeError(f"bool expected: {name}")


def to_comparer(value: Any, name: str) -> Comparer:
    """resolve a comparer argument: None, a Comparer, or a two-argument comparison function"""
    if value is None:
        return default_comparer
    if Comparer.has_instance(value):
        return value
    if callable(value):
        return Comparer.create(value)
    raise TypeError(f"comparer expected: {name}")


def to_equaler(value: Any, name: str, identity: bool = False) -> Equaler:
    if value is None:
        return identity_equaler if identity else default_equaler
    if not Equaler.has_instance(value):
        raise TypeError(f"equaler expected: {name}")
    return value


def to_integer(value: Any, name: str) -> int:
    """accept ints and integral floats. bools and non-numbers are rejected outright"""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise TypeError(f"number expected: {name}")
    if isinstance(value, numbers.Integral):
        return int(value)
    if math.isnan(value) or math.isinf(value) or not float(value).is_integer():
        raise ValueError(f"argument out of range: {name}")
    return int(value)


def to_count(value: Any, name: str) -> int:
    count = to_integer(value, name)
    if count < 0:
        raise ValueError(f"argument out of range: {name}")
    return count


def must_be_ordered_iterable(value: Any, name: str) -> None:
    from .ordered import OrderedIterable
    if not isinstance(value, OrderedIterable):
        raise TypeError(f"ordered iterable expected: {name}")


def must_be_async_ordered_iterable(value: Any, name: str) -> None:
    from .ordered import AsyncOrderedIterable
    if not isinstance(value, AsyncOrderedIterable):
        raise TypeError(f"async ordered iterable expected: {name}")


def must_be_hierarchy_provider(value: Any, name: str) -> None:
    from .hierarchy import HierarchyProvider
    if not HierarchyProvider.has_instance(value):
        raise TypeError(f"hierarchy provider expected: {name}")


def must_be_hierarchy_iterable(value: Any, name: str) -> None:
    from .hierarchy import HierarchyIterable
    if not isinstance(value, HierarchyIterable):
        raise TypeError(f"hierarchy iterable expected: {name}")


def must_be_async_or_sync_hierarchy_iterable(value: Any, name: str) -> None:
    from .hierarchy import HierarchyIterable, AsyncHierarchyIterable
    if not isinstance(value, (AsyncHierarchyIterable, HierarchyIterable)):
        raise TypeError(f"async hierarchy iterable or hierarchy iterable expected: {name}")
