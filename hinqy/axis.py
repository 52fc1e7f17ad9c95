"""
per-node axis traversals over a HierarchyProvider.

each function takes a provider and one node and returns a generator of related nodes.
the provider's optional members are used as fast paths when present; otherwise the
axis is derived from `parent` and `children` alone. deep trees are walked with explicit
stacks, so no axis is bounded by the interpreter's recursion limit.
"""
from collections import deque
from .types import *
from .iteration import opened


def _member(provider: Any, name: str) -> Optional[Callable]:
    return getattr(provider, name, None)


def _child_nodes(provider, element) -> Iterator[Any]:
    children = provider.children(element)
    if children is None:
        return
    with opened(children) as iterator:
        for child in iterator:
            if child is not None:
                yield child


def _child_nodes_by_sibling(provider, element) -> Iterator[Any]:
    child = provider.first_child(element)
    while child is not None:
        yield child
        child = provider.next_sibling(child)


def _reverse_child_nodes(provider, element) -> Iterator[Any]:
    yield from reversed(list(_child_nodes(provider, element)))


def _reverse_child_nodes_by_sibling(provider, element) -> Iterator[Any]:
    child = provider.last_child(element)
    while child is not None:
        yield child
        child = provider.previous_sibling(child)


def _forward_expander(provider) -> Callable[[Any, Any], Iterator[Any]]:
    if _member(provider, 'first_child') and _member(provider, 'next_sibling'):
        return _child_nodes_by_sibling
    return _child_nodes


def _backward_expander(provider) -> Callable[[Any, Any], Iterator[Any]]:
    if _member(provider, 'last_child') and _member(provider, 'previous_sibling'):
        return _reverse_child_nodes_by_sibling
    return _reverse_child_nodes


def _close_all(pending: Iterable[Any]) -> None:
    for iterator in pending:
        iterator.close()


# --- self, parent, children ---

def self_(provider, element) -> Iterator[Any]:
    yield element


def parents(provider, element) -> Iterator[Any]:
    parent = provider.parent(element)
    if parent is not None:
        yield parent


def children(provider, element) -> Iterator[Any]:
    yield from _child_nodes(provider, element)


def first_child(provider, element) -> Iterator[Any]:
    if _member(provider, 'first_child'):
        child = provider.first_child(element)
        if child is not None:
            yield child
        return
    with opened(_child_nodes(provider, element)) as iterator:
        for child in iterator:
            yield child
            return


def last_child(provider, element) -> Iterator[Any]:
    if _member(provider, 'last_child'):
        child = provider.last_child(element)
        if child is not None:
            yield child
        return
    last = None
    for child in _child_nodes(provider, element):
        last = child
    if last is not None:
        yield last


def nth_child(provider, element, offset: int) -> Iterator[Any]:
    """the child at `offset`; negative offsets count from the end, -1 being the last child"""
    if offset == 0:
        yield from first_child(provider, element)
    elif offset == -1:
        yield from last_child(provider, element)
    elif offset > 0:
        with opened(_child_nodes(provider, element)) as iterator:
            for index, child in enumerate(iterator):
                if index == offset:
                    yield child
                    return
    else:
        window = deque(_child_nodes(provider, element), maxlen=-offset)
        if len(window) == -offset:
            yield window[0]


# --- ancestors ---

def _ancestors(provider, element, include_self: bool) -> Iterator[Any]:
    ancestor = element if include_self else provider.parent(element)
    while ancestor is not None:
        yield ancestor
        ancestor = provider.parent(ancestor)


def ancestors(provider, element) -> Iterator[Any]:
    """nearest ancestor first"""
    return _ancestors(provider, element, False)


def ancestors_and_self(provider, element) -> Iterator[Any]:
    return _ancestors(provider, element, True)


def root(provider, element) -> Iterator[Any]:
    if _member(provider, 'root'):
        found = provider.root(element)
        if found is not None:
            yield found
        return
    found = None
    for ancestor in _ancestors(provider, element, True):
        found = ancestor
    if found is not None:
        yield found


# --- descendants ---

def _descendants(provider, element, include_self: bool, after: bool = False) -> Iterator[Any]:
    """
    pre-order (document order) by default. with `after`, post-order: every node is
    yielded once its subtree is done, so `element` itself comes last.
    """
    if include_self and not after:
        yield element
    expand = _forward_expander(provider)
    stack = [(element, expand(provider, element))]
    try:
        while stack:
            node, pending = stack[-1]
            # child generators never produce None, so None marks an exhausted level
            child = next(pending, None)
            if child is None:
                stack.pop()
                if after and (stack or include_self):
                    yield node
                continue
            if not after:
                yield child
            stack.append((child, expand(provider, child)))
    finally:
        _close_all(pending for _, pending in stack)


def _reverse_descendants(provider, element, include_self: bool) -> Iterator[Any]:
    """exact reverse of document order: last descendant first, `element` itself last"""
    expand = _backward_expander(provider)
    stack = [(element, expand(provider, element))]
    try:
        while stack:
            node, pending = stack[-1]
            child = next(pending, None)
            if child is None:
                stack.pop()
                if stack or include_self:
                    yield node
                continue
            stack.append((child, expand(provider, child)))
    finally:
        _close_all(pending for _, pending in stack)


def descendants(provider, element) -> Iterator[Any]:
    return _descendants(provider, element, False)


def descendants_and_self(provider, element) -> Iterator[Any]:
    return _descendants(provider, element, True)


# --- siblings ---

def _has_sibling_links(provider) -> bool:
    return bool(_member(provider, 'previous_sibling') and _member(provider, 'next_sibling'))


def _siblings_by_parent(provider, element, include_self: bool) -> Iterator[Any]:
    parent = provider.parent(element)
    if parent is None:
        return
    with opened(_child_nodes(provider, parent)) as iterator:
        for child in iterator:
            if include_self or child is not element:
                yield child


def _preceding_siblings_by_link(provider, element) -> Iterator[Any]:
    node = provider.previous_sibling(element)
    while node is not None:
        yield node
        node = provider.previous_sibling(node)


def _following_siblings_by_link(provider, element) -> Iterator[Any]:
    node = provider.next_sibling(element)
    while node is not None:
        yield node
        node = provider.next_sibling(node)


def _preceding_siblings_by_parent(provider, element) -> Iterator[Any]:
    before = []
    found = False
    with opened(_siblings_by_parent(provider, element, True)) as iterator:
        for sibling in iterator:
            if sibling is element:
                found = True
                break
            before.append(sibling)
    if found:
        yield from reversed(before)


def _following_siblings_by_parent(provider, element) -> Iterator[Any]:
    seen_self = False
    with opened(_siblings_by_parent(provider, element, True)) as iterator:
        for sibling in iterator:
            if seen_self:
                yield sibling
            elif sibling is element:
                seen_self = True


def _siblings(provider, element, include_self: bool) -> Iterator[Any]:
    if not _has_sibling_links(provider):
        yield from _siblings_by_parent(provider, element, include_self)
        return
    yield from reversed(list(_preceding_siblings_by_link(provider, element)))
    if include_self:
        yield element
    yield from _following_siblings_by_link(provider, element)


def siblings(provider, element) -> Iterator[Any]:
    """document order, excluding the node itself"""
    return _siblings(provider, element, False)


def siblings_and_self(provider, element) -> Iterator[Any]:
    return _siblings(provider, element, True)


def preceding_siblings(provider, element) -> Iterator[Any]:
    """nearest sibling first"""
    if _member(provider, 'previous_sibling'):
        return _preceding_siblings_by_link(provider, element)
    return _preceding_siblings_by_parent(provider, element)


def following_siblings(provider, element) -> Iterator[Any]:
    if _member(provider, 'next_sibling'):
        return _following_siblings_by_link(provider, element)
    return _following_siblings_by_parent(provider, element)


# --- preceding / following ---

def preceding(provider, element) -> Iterator[Any]:
    """every node before `element` in document order, ancestors excluded, nearest first"""
    for ancestor in _ancestors(provider, element, True):
        for sibling in preceding_siblings(provider, ancestor):
            yield from _reverse_descendants(provider, sibling, True)


def following(provider, element) -> Iterator[Any]:
    """
    every node after `element`, descendants excluded. ancestor levels go inner to outer,
    siblings in document order, and each sibling's subtree in post-order (the sibling last).
    """
    for ancestor in _ancestors(provider, element, True):
        for sibling in following_siblings(provider, ancestor):
            yield from _descendants(provider, sibling, True, after=True)
