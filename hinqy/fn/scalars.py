"""terminal operators. each one consumes its source immediately"""
from __future__ import annotations
from collections import deque
import numpy as np
import pandas as pd
from .. import guards
from ..types import *
from ..iteration import opened

_no_seed = object()


def to_list(source: Iterable[T]) -> List[T]:
    guards.must_be_iterable(source, "source")
    with opened(source) as iterator:
        return list(iterator)


def to_dict(source: Iterable[T], key_selector: KeySelector[T, K],
            value_selector: Optional[Selector[T, V]] = None) -> Dict[K, V]:
    """convert to dictionary; later keys overwrite earlier ones"""
    guards.must_be_iterable(source, "source")
    guards.must_be_function(key_selector, "key_selector")
    guards.must_be_function_or_none(value_selector, "value_selector")
    with opened(source) as iterator:
        return {key_selector(item): value_selector(item) if value_selector is not None else item for item in iterator}


def to_set(source: Iterable[T]) -> Set[T]:
    guards.must_be_iterable(source, "source")
    with opened(source) as iterator:
        return set(iterator)


def count(source: Iterable[T], predicate: Optional[Predicate[T]] = None) -> int:
    guards.must_be_iterable(source, "source")
    guards.must_be_function_or_none(predicate, "predicate")
    with opened(source) as iterator:
        if predicate is None:
            return sum(1 for _ in iterator)
        return sum(1 for item in iterator if predicate(item))


def any_(source: Iterable[T], predicate: Optional[Predicate[T]] = None) -> bool:
    """check if any element satisfies condition; stops at the first match"""
    guards.must_be_iterable(source, "source")
    guards.must_be_function_or_none(predicate, "predicate")
    with opened(source) as iterator:
        for item in iterator:
            if predicate is None or predicate(item):
                return True
    return False


def all_(source: Iterable[T], predicate: Predicate[T]) -> bool:
    guards.must_be_iterable(source, "source")
    guards.must_be_function(predicate, "predicate")
    with opened(source) as iterator:
        for item in iterator:
            if not predicate(item):
                return False
    return True


def first(source: Iterable[T], predicate: Optional[Predicate[T]] = None) -> T:
    guards.must_be_iterable(source, "source")
    guards.must_be_function_or_none(predicate, "predicate")
    with opened(source) as iterator:
        for item in iterator:
            if predicate is None or predicate(item):
                return item
    if predicate is None:
        raise ValueError("sequence contains no elements")
    raise ValueError("no element satisfies the condition")


def first_or_default(source: Iterable[T], predicate: Optional[Predicate[T]] = None,
                     default: Optional[T] = None) -> Optional[T]:
    guards.must_be_iterable(source, "source")
    guards.must_be_function_or_none(predicate, "predicate")
    with opened(source) as iterator:
        for item in iterator:
            if predicate is None or predicate(item):
                return item
    return default


def last(source: Iterable[T], predicate: Optional[Predicate[T]] = None) -> T:
    guards.must_be_iterable(source, "source")
    guards.must_be_function_or_none(predicate, "predicate")
    found = False
    result = None
    with opened(source) as iterator:
        for item in iterator:
            if predicate is None or predicate(item):
                found, result = True, item
    if found:
        return result
    if predicate is None:
        raise ValueError("sequence contains no elements")
    raise ValueError("no element satisfies the condition")


def single(source: Iterable[T], predicate: Optional[Predicate[T]] = None) -> T:
    """get single element, erroring if not exactly one"""
    guards.must_be_iterable(source, "source")
    guards.must_be_function_or_none(predicate, "predicate")
    matches = []
    with opened(source) as iterator:
        for item in iterator:
            if predicate is None or predicate(item):
                matches.append(item)
                if len(matches) > 1:
                    raise ValueError("sequence contains more than one matching element")
    if not matches:
        raise ValueError("sequence contains no matching elements")
    return matches[0]


def element_at(source: Iterable[T], index: int) -> T:
    """the element at `index`; a negative index counts from the end"""
    guards.must_be_iterable(source, "source")
    index = guards.to_integer(index, "index")
    with opened(source) as iterator:
        if index >= 0:
            for position, item in enumerate(iterator):
                if position == index:
                    return item
        else:
            window = deque(iterator, maxlen=-index)
            if len(window) == -index:
                return window[0]
    raise ValueError("argument out of range: index")


def aggregate(source: Iterable[T], accumulator: Accumulator[U, T], seed: U = _no_seed,
              result_selector: Optional[Selector[U, V]] = None) -> Union[U, V]:
    """fold the sequence left to right. without a seed the first element starts the fold"""
    guards.must_be_iterable(source, "source")
    guards.must_be_function(accumulator, "accumulator")
    guards.must_be_function_or_none(result_selector, "result_selector")
    with opened(source) as iterator:
        current = seed
        if current is _no_seed:
            current = next(iterator, _no_seed)
            if current is _no_seed:
                raise ValueError("cannot aggregate empty sequence without seed")
        for item in iterator:
            current = accumulator(current, item)
    return result_selector(current) if result_selector is not None else current


def to_array(source: Iterable[T], dtype=None) -> np.ndarray:
    """convert to numpy array"""
    return np.array(to_list(source), dtype=dtype)


def to_series(source: Iterable[T], name: Optional[str] = None) -> pd.Series:
    """convert to pandas series"""
    return pd.Series(to_list(source), name=name)


def to_dataframe(source: Iterable[T], columns: Optional[List[str]] = None) -> pd.DataFrame:
    """convert to pandas dataframe; records may be dicts, tuples or objects with __dict__"""
    rows = to_list(source)
    if rows and not isinstance(rows[0], (dict, tuple, list)) and hasattr(rows[0], '__dict__'):
        rows = [vars(row) for row in rows]
    return pd.DataFrame(rows, columns=columns)
