"""function-level operators over synchronous iterables"""
from .queries import (
    where, select, select_many, take, skip, take_while, skip_while, concat, append, prepend,
    zip_, distinct, union, intersect, except_, default_if_empty, of_type
)
from .ordering import OrderByIterable, order_by, order_by_descending, then_by, then_by_descending, reverse
from .hierarchy import (
    root, ancestors, ancestors_and_self, descendants, descendants_and_self, parents, self_,
    siblings, siblings_and_self, preceding_siblings, siblings_before_self, following_siblings,
    siblings_after_self, preceding, following, children, first_child, last_child, nth_child,
    top_most, bottom_most, to_hierarchy
)
from .grouping import group_by, to_lookup, chunk
from .joins import join, left_join, group_join
from .scalars import (
    to_list, to_dict, to_set, count, any_, all_, first, first_or_default, last, single,
    element_at, aggregate, to_array, to_series, to_dataframe
)

__all__ = [
    "where", "select", "select_many", "take", "skip", "take_while", "skip_while", "concat",
    "append", "prepend", "zip_", "distinct", "union", "intersect", "except_",
    "default_if_empty", "of_type",
    "OrderByIterable", "order_by", "order_by_descending", "then_by", "then_by_descending", "reverse",
    "root", "ancestors", "ancestors_and_self", "descendants", "descendants_and_self", "parents",
    "self_", "siblings", "siblings_and_self", "preceding_siblings", "siblings_before_self",
    "following_siblings", "siblings_after_self", "preceding", "following", "children",
    "first_child", "last_child", "nth_child", "top_most", "bottom_most", "to_hierarchy",
    "group_by", "to_lookup", "chunk",
    "join", "left_join", "group_join",
    "to_list", "to_dict", "to_set", "count", "any_", "all_", "first", "first_or_default",
    "last", "single", "element_at", "aggregate", "to_array", "to_series", "to_dataframe",
]
