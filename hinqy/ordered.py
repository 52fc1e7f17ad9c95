"""
the stable multi-key ordering engine.

an ordered sequence carries its sort chain as a tuple of SortKey records, first key first.
nothing is sorted until the sequence is iterated. at that point the source is
materialised once, each level's keys are computed once per element, and the levels
are folded right-to-left into one comparator over element indices whose last resort
is the original index. a single sort over that comparator is stable across any
number of chained keys.
"""
import logging
import math
from abc import ABC, abstractmethod
from collections.abc import AsyncIterable
from functools import cmp_to_key
from typing import NamedTuple

import numpy as np

from .types import *
from .comparison import Comparer, default_comparer
from .config import get_settings

logger = logging.getLogger(__name__)

# largest magnitude a key may have and still round-trip through float64 exactly
_EXACT_FLOAT_LIMIT = 2 ** 53


class SortKey(NamedTuple):
    key_selector: Callable[[Any], Any]
    comparer: Comparer
    descending: bool


class OrderedIterable(ABC, Iterable[T]):
    """an iterable whose order can be refined with a subordinate key"""

    @abstractmethod
    def then_by(self, key_selector: KeySelector[T, K], comparer: Comparer[K], descending: bool) -> 'OrderedIterable[T]':
        pass


class AsyncOrderedIterable(ABC, AsyncIterable):
    """async counterpart of OrderedIterable"""

    @abstractmethod
    def then_by(self, key_selector: KeySelector[T, K], comparer: Comparer[K], descending: bool) -> 'AsyncOrderedIterable[T]':
        pass


def _build_sorter(key_columns: List[List[Any]], sort_keys: Tuple[SortKey, ...]) -> Callable[[int, int], int]:
    def by_index(x: int, y: int) -> int:
        return x - y

    sorter = by_index
    for sort_key, keys in zip(reversed(sort_keys), reversed(key_columns)):
        sorter = _level_sorter(keys, sort_key.comparer, sort_key.descending, sorter)
    return sorter


def _level_sorter(keys: List[Any], comparer: Comparer, descending: bool,
                  next_sorter: Callable[[int, int], int]) -> Callable[[int, int], int]:
    compare = comparer.compare

    def sorter(x: int, y: int) -> int:
        result = compare(keys[x], keys[y])
        if result == 0:
            return next_sorter(x, y)
        return -result if descending else result

    return sorter


def _numeric_column(keys: List[Any], descending: bool) -> Optional[np.ndarray]:
    """one level's keys as a float64 column, or None if they are not plain finite numbers"""
    for key in keys:
        if type(key) not in (int, float, bool):
            return None
        if isinstance(key, float) and not math.isfinite(key):
            return None
        if abs(key) >= _EXACT_FLOAT_LIMIT:
            return None
    values = np.asarray(keys, dtype=np.float64)
    return -values if descending else values


def _numpy_indices(key_columns: List[List[Any]], sort_keys: Tuple[SortKey, ...]) -> Optional[List[int]]:
    columns = []
    for sort_key, keys in zip(sort_keys, key_columns):
        column = _numeric_column(keys, sort_key.descending)
        if column is None:
            return None
        columns.append(column)
    # lexsort treats the last column as the primary key and is stable, so ties keep index order
    return np.lexsort(columns[::-1]).tolist()


def _use_numpy(count: int, sort_keys: Tuple[SortKey, ...]) -> bool:
    threshold = get_settings().numpy_sort_threshold
    if threshold is None or count < max(threshold, 1):
        return False
    return all(sort_key.comparer is default_comparer for sort_key in sort_keys)


def sort_indices(elements: List[T], sort_keys: Tuple[SortKey, ...]) -> List[int]:
    """the permutation of `elements` that satisfies the whole sort chain"""
    count = len(elements)
    if count == 0 or not sort_keys:
        return list(range(count))

    # keys are selected once per element per level, in chain order
    key_columns = [[sort_key.key_selector(element) for element in elements] for sort_key in sort_keys]

    if _use_numpy(count, sort_keys):
        indices = _numpy_indices(key_columns, sort_keys)
        if indices is not None:
            logger.debug("sorted %d elements over %d key(s) with numpy", count, len(sort_keys))
            return indices

    indices = list(range(count))
    indices.sort(key=cmp_to_key(_build_sorter(key_columns, sort_keys)))
    logger.debug("sorted %d elements over %d key(s) with the composite comparer", count, len(sort_keys))
    return indices
