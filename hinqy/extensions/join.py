from __future__ import annotations
import typing
from .. import fn
from ..types import *

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable


class JoinAccessor(Generic[T]):
    def __init__(self, enumerable_instance: 'Enumerable[T]'):
        self._enumerable = enumerable_instance

    def join(self, inner: Iterable[U], outer_key_selector: KeySelector[T, K],
             inner_key_selector: KeySelector[U, K],
             result_selector: Callable[[T, U], V], equaler=None) -> 'Enumerable[V]':
        """inner join two sequences based on matching keys"""
        from ..enumerable import Enumerable
        return Enumerable(fn.join(self._enumerable._source, inner, outer_key_selector,
                                  inner_key_selector, result_selector, equaler))

    def left_join(self, inner: Iterable[U], outer_key_selector: KeySelector[T, K],
                  inner_key_selector: KeySelector[U, K],
                  result_selector: Callable[[T, Optional[U]], V],
                  default_inner: Optional[U] = None, equaler=None) -> 'Enumerable[V]':
        """left outer join - includes all outer elements even without matches"""
        from ..enumerable import Enumerable
        return Enumerable(fn.left_join(self._enumerable._source, inner, outer_key_selector,
                                       inner_key_selector, result_selector, default_inner, equaler))

    def group_join(self, inner: Iterable[U], outer_key_selector: KeySelector[T, K],
                   inner_key_selector: KeySelector[U, K],
                   result_selector: Callable[[T, List[U]], V], equaler=None) -> 'Enumerable[V]':
        """group join - groups inner elements by outer key"""
        from ..enumerable import Enumerable
        return Enumerable(fn.group_join(self._enumerable._source, inner, outer_key_selector,
                                        inner_key_selector, result_selector, equaler))
