r"""
'    ___ ___ .___ _______   ________ _____.___.
'   /   |   \|   |\      \  \_____  \\__  |   |
'  /    ~    \   |/   |   \  /  / \  \/   |   |
'  \    Y    /   /    |    \/   \_/.  \____   |
'   \___|_  /|___\____|__  /\_____\ \_/ ______|
'         \/             \/        \__>/
"""

# expose the main classes
from .enumerable import Enumerable, OrderedEnumerable
from .async_enumerable import AsyncEnumerable, AsyncOrderedEnumerable

# expose the factory functions
from .factories import (
    from_iterable,
    from_range,
    repeat,
    empty,
    generate,
    from_hierarchy,
    from_async,
    hinqy,
    P
)

# expose the capabilities and sequence interfaces
from .comparison import Comparer, Equaler, default_comparer, default_equaler, identity_equaler
from .hierarchy import (
    HierarchyProvider,
    Hierarchical,
    HierarchyIterable,
    OrderedHierarchyIterable,
    AsyncHierarchyIterable,
    AsyncOrderedHierarchyIterable
)
from .ordered import OrderedIterable, AsyncOrderedIterable
from .types import Grouping, Lookup
from .config import Settings, get_settings, configure, override
from . import fn, aio

# define what `import *` does
__all__ = [
    "Enumerable",
    "OrderedEnumerable",
    "AsyncEnumerable",
    "AsyncOrderedEnumerable",
    "from_iterable",
    "from_range",
    "repeat",
    "empty",
    "generate",
    "from_hierarchy",
    "from_async",
    "hinqy",
    "P",
    "Comparer",
    "Equaler",
    "default_comparer",
    "default_equaler",
    "identity_equaler",
    "HierarchyProvider",
    "Hierarchical",
    "HierarchyIterable",
    "OrderedHierarchyIterable",
    "AsyncHierarchyIterable",
    "AsyncOrderedHierarchyIterable",
    "OrderedIterable",
    "AsyncOrderedIterable",
    "Grouping",
    "Lookup",
    "Settings",
    "get_settings",
    "configure",
    "override",
    "fn",
    "aio",
]
