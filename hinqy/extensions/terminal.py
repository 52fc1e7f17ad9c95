from __future__ import annotations
import typing
import numpy as np
import pandas as pd
from .. import fn, aio
from ..types import *
from ..fn.scalars import _no_seed

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable
    from ..async_enumerable import AsyncEnumerable


class TerminalAccessor(Generic[T]):
    def __init__(self, enumerable_instance: 'Enumerable[T]'):
        self._enumerable = enumerable_instance

    def list(self) -> List[T]:
        """convert to list"""
        return fn.to_list(self._enumerable._source)

    def array(self, dtype=None) -> np.ndarray:
        """convert to numpy array"""
        return fn.to_array(self._enumerable._source, dtype)

    def set(self) -> Set[T]:
        """convert to set"""
        return fn.to_set(self._enumerable._source)

    def dict(self, key_selector: KeySelector[T, K],
             value_selector: Optional[Selector[T, V]] = None) -> Dict[K, V]:
        """convert to dictionary"""
        return fn.to_dict(self._enumerable._source, key_selector, value_selector)

    def pandas(self, name: Optional[str] = None) -> pd.Series:
        """convert to pandas series"""
        return fn.to_series(self._enumerable._source, name)

    def df(self, columns: Optional[List[str]] = None) -> pd.DataFrame:
        """convert to pandas dataframe"""
        return fn.to_dataframe(self._enumerable._source, columns)

    def count(self, predicate: Optional[Predicate[T]] = None) -> int:
        """count elements"""
        return fn.count(self._enumerable._source, predicate)

    def any(self, predicate: Optional[Predicate[T]] = None) -> bool:
        """check if any element satisfies condition"""
        return fn.any_(self._enumerable._source, predicate)

    def all(self, predicate: Predicate[T]) -> bool:
        """check if all elements satisfy condition"""
        return fn.all_(self._enumerable._source, predicate)

    def first(self, predicate: Optional[Predicate[T]] = None) -> T:
        """get first element"""
        return fn.first(self._enumerable._source, predicate)

    def first_or_default(self, predicate: Optional[Predicate[T]] = None,
                         default: Optional[T] = None) -> Optional[T]:
        """get first element or default"""
        return fn.first_or_default(self._enumerable._source, predicate, default)

    def last(self, predicate: Optional[Predicate[T]] = None) -> T:
        return fn.last(self._enumerable._source, predicate)

    def single(self, predicate: Optional[Predicate[T]] = None) -> T:
        """get single element, erroring if not exactly one"""
        return fn.single(self._enumerable._source, predicate)

    def element_at(self, index: int) -> T:
        return fn.element_at(self._enumerable._source, index)

    def aggregate(self, accumulator: Accumulator[U, T], seed: U = _no_seed,
                  result_selector: Optional[Selector[U, V]] = None) -> Union[U, V]:
        """applies accumulator function over sequence"""
        return fn.aggregate(self._enumerable._source, accumulator, seed, result_selector)


class AsyncTerminalAccessor(Generic[T]):
    """terminal operators of an AsyncEnumerable; each returns a coroutine"""

    def __init__(self, enumerable_instance: 'AsyncEnumerable[T]'):
        self._enumerable = enumerable_instance

    def list(self) -> Awaitable[List[T]]:
        return aio.to_list(self._enumerable._source)

    def dict(self, key_selector: AsyncSelector[T, K],
             value_selector: Optional[AsyncSelector[T, V]] = None) -> Awaitable[Dict[K, V]]:
        return aio.to_dict(self._enumerable._source, key_selector, value_selector)

    def count(self, predicate: Optional[AsyncPredicate[T]] = None) -> Awaitable[int]:
        return aio.count(self._enumerable._source, predicate)

    def any(self, predicate: Optional[AsyncPredicate[T]] = None) -> Awaitable[bool]:
        return aio.any_(self._enumerable._source, predicate)

    def all(self, predicate: AsyncPredicate[T]) -> Awaitable[bool]:
        return aio.all_(self._enumerable._source, predicate)

    def first(self, predicate: Optional[AsyncPredicate[T]] = None) -> Awaitable[T]:
        return aio.first(self._enumerable._source, predicate)

    def first_or_default(self, predicate: Optional[AsyncPredicate[T]] = None,
                         default: Optional[T] = None) -> Awaitable[Optional[T]]:
        return aio.first_or_default(self._enumerable._source, predicate, default)

    def last(self, predicate: Optional[AsyncPredicate[T]] = None) -> Awaitable[T]:
        return aio.last(self._enumerable._source, predicate)

    def aggregate(self, accumulator: Callable[[U, T], Any], *seed: U) -> Awaitable[U]:
        """fold the sequence; pass a seed as the second argument to start from it"""
        return aio.aggregate(self._enumerable._source, accumulator, *seed)
