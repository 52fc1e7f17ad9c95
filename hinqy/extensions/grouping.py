from __future__ import annotations
import typing
from .. import fn
from ..types import *

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable


class GroupingAccessor(Generic[T]):
    def __init__(self, enumerable_instance: 'Enumerable[T]'):
        self._enumerable = enumerable_instance

    def group_by(self, key_selector: KeySelector[T, K], element_selector: Optional[Selector[T, U]] = None,
                 result_selector: Optional[Callable[[K, List[U]], V]] = None,
                 equaler=None) -> 'Enumerable[Union[Grouping[K, U], V]]':
        """group elements by a key"""
        from ..enumerable import Enumerable
        return Enumerable(fn.group_by(self._enumerable._source, key_selector, element_selector, result_selector, equaler))

    def to_lookup(self, key_selector: KeySelector[T, K], element_selector: Optional[Selector[T, U]] = None,
                  equaler=None) -> Lookup:
        """key -> elements mapping, built immediately"""
        return fn.to_lookup(self._enumerable._source, key_selector, element_selector, equaler)

    def chunk(self, size: int) -> 'Enumerable[List[T]]':
        """split into chunks of specified size"""
        from ..enumerable import Enumerable
        return Enumerable(fn.chunk(self._enumerable._source, size))
