"""
comparer and equaler capabilities consumed by ordering, set and hierarchy operators.

a comparer answers `compare(x, y)` with a negative number, zero or a positive number.
an equaler answers `equals(x, y)` and `hash(x)`, consistently with each other.
"""
import math
import numbers
from decimal import Decimal
from abc import ABC, abstractmethod
from .types import *


class Comparer(ABC, Generic[T]):
    """a total-order comparison capability"""

    @abstractmethod
    def compare(self, x: T, y: T) -> int:
        pass

    @staticmethod
    def create(comparison: Comparison[T]) -> 'Comparer[T]':
        """wrap a two-argument comparison function"""
        return _FunctionComparer(comparison)

    @staticmethod
    def has_instance(value: Any) -> bool:
        return callable(getattr(value, 'compare', None))


class _FunctionComparer(Comparer[T]):
    def __init__(self, comparison: Comparison[T]):
        self._comparison = comparison

    def compare(self, x: T, y: T) -> int:
        return self._comparison(x, y)

    def __repr__(self) -> str:
        return f"Comparer({getattr(self._comparison, '__name__', self._comparison)!r})"


class Equaler(ABC, Generic[T]):
    """an equality capability with a matching hash"""

    @abstractmethod
    def equals(self, x: T, y: T) -> bool:
        pass

    @abstractmethod
    def hash(self, x: T) -> int:
        pass

    @staticmethod
    def create(equality: Callable[[T, T], bool], hasher: Optional[Callable[[T], int]] = None) -> 'Equaler[T]':
        """build an equaler from functions. the hasher defaults to the builtin hash"""
        return _FunctionEqualer(equality, hasher if hasher is not None else hash)

    @staticmethod
    def has_instance(value: Any) -> bool:
        return callable(getattr(value, 'equals', None)) and callable(getattr(value, 'hash', None))


class _FunctionEqualer(Equaler[T]):
    def __init__(self, equality: Callable[[T, T], bool], hasher: Callable[[T], int]):
        self._equality = equality
        self._hasher = hasher

    def equals(self, x: T, y: T) -> bool:
        return bool(self._equality(x, y))

    def hash(self, x: T) -> int:
        return self._hasher(x)


# --- default comparison ---

def _is_real(value: Any) -> bool:
    # Decimal registers as a Number but not as Real or Complex
    return isinstance(value, numbers.Real) or (isinstance(value, numbers.Number) and not isinstance(value, numbers.Complex))


def _is_nan(value: Any) -> bool:
    if isinstance(value, Decimal):
        return value.is_nan()
    return isinstance(value, float) and math.isnan(value)


def _type_rank(value: Any) -> Tuple[int, str]:
    """fallback order for values that cannot be compared with each other"""
    if _is_real(value): return 0, ''
    if isinstance(value, str): return 1, ''
    if isinstance(value, (bytes, bytearray)): return 2, ''
    value_type = type(value)
    return 3, f"{value_type.__module__}.{value_type.__qualname__}"


def _default_compare(x: Any, y: Any) -> int:
    if x is y: return 0
    # none sorts first
    if x is None: return -1
    if y is None: return 1

    # nan sorts after every other number and equal to itself
    x_nan, y_nan = _is_nan(x), _is_nan(y)
    if x_nan or y_nan:
        if x_nan and y_nan: return 0
        if x_nan and _is_real(y): return 1
        if y_nan and _is_real(x): return -1

    try:
        if x < y: return -1
        if x > y: return 1
        return 0
    except TypeError:
        pass

    x_rank, y_rank = _type_rank(x), _type_rank(y)
    if x_rank < y_rank: return -1
    if x_rank > y_rank: return 1
    # same type, no order: leave it to the caller's tie-break
    return 0


default_comparer: Comparer[Any] = Comparer.create(_default_compare)

default_equaler: Equaler[Any] = Equaler.create(lambda x, y: x == y, hash)

# nodes are usually compared by identity, which also works for unhashable nodes
identity_equaler: Equaler[Any] = Equaler.create(lambda x, y: x is y, id)
