from __future__ import annotations
import typing
from abc import ABC, abstractmethod
from types import ModuleType
from .. import fn, aio
from ..types import *
from ..hierarchy import Hierarchical

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable
    from ..async_enumerable import AsyncEnumerable


class _BaseTreeAccessor(ABC, Generic[TNode]):
    """
    hierarchy axes over a provider-tagged sequence. the operators come from `_ops`
    (hinqy.fn or hinqy.aio) and their results are wrapped back into the fluent type.
    """

    _ops: ModuleType

    def __init__(self, enumerable_instance):
        self._enumerable = enumerable_instance

    @abstractmethod
    def _wrap(self, result):
        pass

    def _source(self):
        source = self._enumerable._source
        if not isinstance(source, Hierarchical):
            raise TypeError("sequence has no hierarchy provider: call to_hierarchy() first")
        return source

    def hierarchy(self):
        """the provider the elements belong to"""
        return self._source().hierarchy()

    def root(self, predicate: Optional[Predicate[TNode]] = None):
        return self._wrap(self._ops.root(self._source(), predicate))

    def ancestors(self, predicate: Optional[Predicate[TNode]] = None):
        """nearest ancestor first"""
        return self._wrap(self._ops.ancestors(self._source(), predicate))

    def ancestors_and_self(self, predicate: Optional[Predicate[TNode]] = None):
        return self._wrap(self._ops.ancestors_and_self(self._source(), predicate))

    def descendants(self, predicate: Optional[Predicate[TNode]] = None):
        """document (pre-)order"""
        return self._wrap(self._ops.descendants(self._source(), predicate))

    def descendants_and_self(self, predicate: Optional[Predicate[TNode]] = None):
        return self._wrap(self._ops.descendants_and_self(self._source(), predicate))

    def parents(self, predicate: Optional[Predicate[TNode]] = None):
        return self._wrap(self._ops.parents(self._source(), predicate))

    def self_(self, predicate: Optional[Predicate[TNode]] = None):
        return self._wrap(self._ops.self_(self._source(), predicate))

    def siblings(self, predicate: Optional[Predicate[TNode]] = None):
        return self._wrap(self._ops.siblings(self._source(), predicate))

    def siblings_and_self(self, predicate: Optional[Predicate[TNode]] = None):
        return self._wrap(self._ops.siblings_and_self(self._source(), predicate))

    def preceding_siblings(self, predicate: Optional[Predicate[TNode]] = None):
        """nearest sibling first"""
        return self._wrap(self._ops.preceding_siblings(self._source(), predicate))

    def following_siblings(self, predicate: Optional[Predicate[TNode]] = None):
        return self._wrap(self._ops.following_siblings(self._source(), predicate))

    siblings_before_self = preceding_siblings
    siblings_after_self = following_siblings

    def preceding(self, predicate: Optional[Predicate[TNode]] = None):
        return self._wrap(self._ops.preceding(self._source(), predicate))

    def following(self, predicate: Optional[Predicate[TNode]] = None):
        return self._wrap(self._ops.following(self._source(), predicate))

    def children(self, predicate: Optional[Predicate[TNode]] = None):
        return self._wrap(self._ops.children(self._source(), predicate))

    def first_child(self, predicate: Optional[Predicate[TNode]] = None):
        return self._wrap(self._ops.first_child(self._source(), predicate))

    def last_child(self, predicate: Optional[Predicate[TNode]] = None):
        return self._wrap(self._ops.last_child(self._source(), predicate))

    def nth_child(self, offset: int, predicate: Optional[Predicate[TNode]] = None):
        """the child at offset; -1 is the last child"""
        return self._wrap(self._ops.nth_child(self._source(), offset, predicate))

    def top_most(self, predicate: Optional[Predicate[TNode]] = None, equaler=None):
        """drop every node that descends from another node of the sequence"""
        return self._wrap(self._ops.top_most(self._source(), predicate, equaler))

    def bottom_most(self, predicate: Optional[Predicate[TNode]] = None, equaler=None):
        """drop every node that is an ancestor of another node of the sequence"""
        return self._wrap(self._ops.bottom_most(self._source(), predicate, equaler))


class TreeAccessor(_BaseTreeAccessor[TNode]):
    _ops = fn

    def _wrap(self, result) -> 'Enumerable[TNode]':
        from ..enumerable import Enumerable
        return Enumerable(result)


class AsyncTreeAccessor(_BaseTreeAccessor[TNode]):
    _ops = aio

    def _wrap(self, result) -> 'AsyncEnumerable[TNode]':
        from ..async_enumerable import AsyncEnumerable
        return AsyncEnumerable(result)
