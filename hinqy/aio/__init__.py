"""function-level operators over async iterables, or sync iterables of awaitables"""
from .queries import (
    to_async, where, select, select_many, take, skip, take_while, skip_while, concat, distinct
)
from .ordering import AsyncOrderByIterable, order_by, order_by_descending, then_by, then_by_descending, reverse
from .hierarchy import (
    root, ancestors, ancestors_and_self, descendants, descendants_and_self, parents, self_,
    siblings, siblings_and_self, preceding_siblings, siblings_before_self, following_siblings,
    siblings_after_self, preceding, following, children, first_child, last_child, nth_child,
    top_most, bottom_most, to_hierarchy
)
from .scalars import to_list, to_dict, count, any_, all_, first, first_or_default, last, aggregate

__all__ = [
    "to_async", "where", "select", "select_many", "take", "skip", "take_while", "skip_while",
    "concat", "distinct",
    "AsyncOrderByIterable", "order_by", "order_by_descending", "then_by", "then_by_descending", "reverse",
    "root", "ancestors", "ancestors_and_self", "descendants", "descendants_and_self", "parents",
    "self_", "siblings", "siblings_and_self", "preceding_siblings", "siblings_before_self",
    "following_siblings", "siblings_after_self", "preceding", "following", "children",
    "first_child", "last_child", "nth_child", "top_most", "bottom_most", "to_hierarchy",
    "to_list", "to_dict", "count", "any_", "all_", "first", "first_or_default", "last", "aggregate",
]
