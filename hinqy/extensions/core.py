from __future__ import annotations
import typing
from .. import fn
from ..types import *

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable, OrderedEnumerable
    from ..hierarchy import HierarchyProvider


class _CoreOperations(Generic[T]):
    """the chainable operators; each one wraps the matching hinqy.fn operator"""

    def where(self: 'Enumerable[T]', predicate: Predicate[T]) -> 'Enumerable[T]':
        """filter elements based on a predicate"""
        from ..enumerable import Enumerable
        return Enumerable(fn.where(self._source, predicate))

    def select(self: 'Enumerable[T]', selector: Selector[T, U]) -> 'Enumerable[U]':
        """project each element to a new form"""
        from ..enumerable import Enumerable
        return Enumerable(fn.select(self._source, selector))

    def select_many(self: 'Enumerable[T]', selector: Selector[T, Iterable[U]]) -> 'Enumerable[U]':
        """project and flatten sequences"""
        from ..enumerable import Enumerable
        return Enumerable(fn.select_many(self._source, selector))

    def order_by(self: 'Enumerable[T]', key_selector: KeySelector[T, K], comparer=None) -> 'OrderedEnumerable[T]':
        """sort elements by a key"""
        from ..enumerable import OrderedEnumerable
        return OrderedEnumerable(fn.order_by(self._source, key_selector, comparer))

    def order_by_descending(self: 'Enumerable[T]', key_selector: KeySelector[T, K], comparer=None) -> 'OrderedEnumerable[T]':
        """sort elements by a key in descending order"""
        from ..enumerable import OrderedEnumerable
        return OrderedEnumerable(fn.order_by_descending(self._source, key_selector, comparer))

    def take(self: 'Enumerable[T]', count: int) -> 'Enumerable[T]':
        """take the first 'count' elements"""
        from ..enumerable import Enumerable
        return Enumerable(fn.take(self._source, count))

    def skip(self: 'Enumerable[T]', count: int) -> 'Enumerable[T]':
        """skip the first 'count' elements"""
        from ..enumerable import Enumerable
        return Enumerable(fn.skip(self._source, count))

    def take_while(self: 'Enumerable[T]', predicate: Predicate[T]) -> 'Enumerable[T]':
        from ..enumerable import Enumerable
        return Enumerable(fn.take_while(self._source, predicate))

    def skip_while(self: 'Enumerable[T]', predicate: Predicate[T]) -> 'Enumerable[T]':
        from ..enumerable import Enumerable
        return Enumerable(fn.skip_while(self._source, predicate))

    def reverse(self: 'Enumerable[T]') -> 'Enumerable[T]':
        """inverts the order of the elements in a sequence"""
        from ..enumerable import Enumerable
        return Enumerable(fn.reverse(self._source))

    def append(self: 'Enumerable[T]', element: T) -> 'Enumerable[T]':
        from ..enumerable import Enumerable
        return Enumerable(fn.append(self._source, element))

    def prepend(self: 'Enumerable[T]', element: T) -> 'Enumerable[T]':
        from ..enumerable import Enumerable
        return Enumerable(fn.prepend(self._source, element))

    def zip(self: 'Enumerable[T]', other: Iterable[U],
            result_selector: Optional[Callable[[T, U], V]] = None) -> 'Enumerable[Union[Tuple[T, U], V]]':
        """pair elements positionally, stopping at the shorter sequence"""
        from ..enumerable import Enumerable
        return Enumerable(fn.zip_(self._source, other, result_selector))

    def default_if_empty(self: 'Enumerable[T]', default_value: T) -> 'Enumerable[T]':
        """returns the elements of a sequence, or a default value in a singleton collection if the sequence is empty"""
        from ..enumerable import Enumerable
        return Enumerable(fn.default_if_empty(self._source, default_value))

    def of_type(self: 'Enumerable[T]', type_filter: Type[U]) -> 'Enumerable[U]':
        """filters the elements of a sequence based on a specified type"""
        from ..enumerable import Enumerable
        return Enumerable(fn.of_type(self._source, type_filter))

    def to_hierarchy(self: 'Enumerable[T]', provider: 'HierarchyProvider[T]') -> 'Enumerable[T]':
        """tag the sequence with a hierarchy provider, enabling the .tree accessor"""
        from ..enumerable import Enumerable, OrderedEnumerable
        tagged = fn.to_hierarchy(self._source, provider)
        return OrderedEnumerable(tagged) if isinstance(self, OrderedEnumerable) else Enumerable(tagged)
