"""
hierarchy provider contract and hierarchy-tagged sequences.

a HierarchyProvider describes a tree the library does not own: it answers `parent(node)`
and `children(node)`, and may add fast paths (`root`, `first_child`, `last_child`,
`previous_sibling`, `next_sibling`) plus an `owns` check. absence is always `None`.

a HierarchyIterable is a sequence that carries the provider its elements belong to.
axis operators read the provider from it, so the tag has to survive filtering and ordering.
"""
from abc import ABC, abstractmethod
from collections.abc import AsyncIterable
from .types import *
from .ordered import OrderedIterable, AsyncOrderedIterable
from .iteration import opened_async

_OPTIONAL_MEMBERS = ('owns', 'root', 'first_child', 'last_child', 'previous_sibling', 'next_sibling')


class HierarchyProvider(ABC, Generic[TNode]):
    """
    subclass and implement `parent` and `children`. the optional members stay None on
    the base class; define them as methods to enable the matching fast path.
    """

    owns: Optional[Callable[[TNode], bool]] = None
    root: Optional[Callable[[TNode], TNode]] = None
    first_child: Optional[Callable[[TNode], Optional[TNode]]] = None
    last_child: Optional[Callable[[TNode], Optional[TNode]]] = None
    previous_sibling: Optional[Callable[[TNode], Optional[TNode]]] = None
    next_sibling: Optional[Callable[[TNode], Optional[TNode]]] = None

    @abstractmethod
    def parent(self, node: TNode) -> Optional[TNode]:
        pass

    @abstractmethod
    def children(self, node: TNode) -> Optional[Iterable[TNode]]:
        pass

    @staticmethod
    def has_instance(value: Any) -> bool:
        """duck-typed check: parent and children are callable, optional members are callable or absent"""
        if value is None:
            return False
        if not callable(getattr(value, 'parent', None)) or not callable(getattr(value, 'children', None)):
            return False
        for name in _OPTIONAL_MEMBERS:
            member = getattr(value, name, None)
            if member is not None and not callable(member):
                return False
        return True

    @staticmethod
    def create(parent: Callable[[TNode], Optional[TNode]],
               children: Callable[[TNode], Optional[Iterable[TNode]]],
               **fast_paths: Callable) -> 'HierarchyProvider[TNode]':
        """build a provider from plain functions"""
        return _FunctionHierarchyProvider(parent, children, **fast_paths)


class _FunctionHierarchyProvider(HierarchyProvider[TNode]):
    def __init__(self, parent, children, **fast_paths):
        if not callable(parent): raise TypeError("function expected: parent")
        if not callable(children): raise TypeError("function expected: children")
        unknown = set(fast_paths) - set(_OPTIONAL_MEMBERS)
        if unknown:
            raise TypeError(f"unknown hierarchy member(s): {', '.join(sorted(unknown))}")
        self._parent = parent
        self._children = children
        for name, member in fast_paths.items():
            if member is not None and not callable(member):
                raise TypeError(f"function expected: {name}")
            setattr(self, name, member)

    def parent(self, node: TNode) -> Optional[TNode]:
        return self._parent(node)

    def children(self, node: TNode) -> Optional[Iterable[TNode]]:
        return self._children(node)


def is_hierarchy_element(provider: HierarchyProvider[TNode], value: Any) -> bool:
    """false for None and for values the provider disowns. such values are skipped, never an error"""
    if value is None:
        return False
    owns = getattr(provider, 'owns', None)
    return owns is None or bool(owns(value))


# --- hierarchy-tagged sequences ---

class Hierarchical(ABC, Generic[TNode]):
    @abstractmethod
    def hierarchy(self) -> HierarchyProvider[TNode]:
        """the provider the elements of this sequence belong to"""
        pass


class HierarchyIterable(Hierarchical[TNode], Iterable[TNode]):
    """a sequence whose elements are nodes of a known hierarchy"""

    @staticmethod
    def create(source: Iterable[T], provider: HierarchyProvider[TNode]) -> 'HierarchyIterable[TNode]':
        if isinstance(source, OrderedIterable):
            return _OrderedHierarchyWrapper(source, provider)
        return _HierarchyWrapper(source, provider)


class OrderedHierarchyIterable(HierarchyIterable[TNode], OrderedIterable[TNode]):
    pass


class AsyncHierarchyIterable(Hierarchical[TNode], AsyncIterable):
    """async counterpart of HierarchyIterable"""

    @staticmethod
    def create(source: Union[AsyncIterable, Iterable], provider: HierarchyProvider[TNode]) -> 'AsyncHierarchyIterable[TNode]':
        if isinstance(source, AsyncOrderedIterable):
            return _AsyncOrderedHierarchyWrapper(source, provider)
        return _AsyncHierarchyWrapper(source, provider)


class AsyncOrderedHierarchyIterable(AsyncHierarchyIterable[TNode], AsyncOrderedIterable):
    pass


class _HierarchyWrapper(HierarchyIterable[TNode]):
    def __init__(self, source: Iterable[T], provider: HierarchyProvider[TNode]):
        self._source = source
        self._provider = provider

    def __iter__(self) -> Iterator[T]:
        return iter(self._source)

    def hierarchy(self) -> HierarchyProvider[TNode]:
        return self._provider


class _OrderedHierarchyWrapper(_HierarchyWrapper[TNode], OrderedHierarchyIterable[TNode]):
    def then_by(self, key_selector, comparer, descending) -> 'OrderedHierarchyIterable[TNode]':
        return _OrderedHierarchyWrapper(self._source.then_by(key_selector, comparer, descending), self._provider)


class _AsyncHierarchyWrapper(AsyncHierarchyIterable[TNode]):
    def __init__(self, source, provider: HierarchyProvider[TNode]):
        self._source = source
        self._provider = provider

    def __aiter__(self):
        async def pass_through():
            async with opened_async(self._source) as elements:
                async for element in elements:
                    yield element

        return pass_through()

    def hierarchy(self) -> HierarchyProvider[TNode]:
        return self._provider


class _AsyncOrderedHierarchyWrapper(_AsyncHierarchyWrapper[TNode], AsyncOrderedHierarchyIterable[TNode]):
    def then_by(self, key_selector, comparer, descending) -> 'AsyncOrderedHierarchyIterable[TNode]':
        return _AsyncOrderedHierarchyWrapper(self._source.then_by(key_selector, comparer, descending), self._provider)


def flow_hierarchy(result: Any, source: Any) -> Any:
    """carry the provider of `source` over to `result` when the result lost it"""
    if not isinstance(source, Hierarchical) or isinstance(result, Hierarchical):
        return result
    if isinstance(result, AsyncIterable):
        return AsyncHierarchyIterable.create(result, source.hierarchy())
    return HierarchyIterable.create(result, source.hierarchy())
