'''
.------..------..------..------.
|d.--. ||g.--. ||e.--. ||n.--. |
| :/\: || :/\: || (\/) || :(): |
| (__) || :\/: || :\/: || ()() |
| '--'d|| '--'g|| '--'e|| '--'n|
`------'`------'`------'`------'
'''

import numpy as np
from faker import Faker
from hinqy import from_iterable, Enumerable, HierarchyProvider
from typing import Any, Callable, Dict, List, Optional, Iterable


class Generator:
    """
    interprets a record schema. a schema value may be:
      - a dict with `_qen_provider`: one of the providers below
      - a plain dict: a nested record, built key by key so `ref` sees earlier keys
      - a one-item list: a list of that item, `_qen_count` giving n or (low, high)
      - a faker method name, or a (name, kwargs) tuple
      - anything else: itself
    """

    def __init__(self, seed: Optional[int] = None):
        self._fake = Faker()
        if seed is not None:
            self._fake.seed_instance(seed)
        self._rng = np.random.default_rng(seed)
        self._providers: Dict[str, Callable[[Dict, Dict], Any]] = {
            'ref': self._ref,
            'choice': self._choice,
            'int': self._int,
            'literal': self._literal,
        }

    @property
    def rng(self) -> np.random.Generator:
        return self._rng

    @property
    def fake(self) -> Faker:
        return self._fake

    # --- providers ---

    @staticmethod
    def _ref(config: Dict, context: Dict) -> Any:
        name = config['key']
        if name not in context:
            raise ValueError(f"ref '{name}' is not an earlier key of this record")
        fmt = config.get('format')
        return fmt.format(context[name]) if fmt is not None else context[name]

    def _choice(self, config: Dict, context: Dict) -> Any:
        options = config['from']
        # pick an index so the value keeps its python type
        return options[int(self._rng.integers(0, len(options)))]

    def _int(self, config: Dict, context: Dict) -> int:
        # both ends included; plain ints keep sort keys native
        return int(self._rng.integers(config['low'], config['high'], endpoint=True))

    @staticmethod
    def _literal(config: Dict, context: Dict) -> Any:
        if 'value' not in config:
            raise ValueError("literal provider needs a 'value'")
        return config['value']

    def _faker(self, name: str, kwargs: Optional[Dict] = None) -> Any:
        method = getattr(self._fake, name, None)
        if method is None:
            raise ValueError(f"faker has no provider '{name}'")
        return method(**(kwargs or {}))

    # --- interpreter ---

    def create(self, schema: Any, context: Optional[Dict] = None) -> Any:
        context = context or {}
        if isinstance(schema, dict):
            if '_qen_provider' not in schema:
                record = {}
                for name, field in schema.items():
                    record[name] = self.create(field, {**context, **record})
                return record
            provider = self._providers.get(schema['_qen_provider'])
            if provider is None:
                raise ValueError(f"unknown _qen_provider: '{schema['_qen_provider']}'")
            return provider(schema, context)
        if isinstance(schema, list):
            if not schema:
                return []
            item = schema[0]
            size = self._list_size(item)
            if isinstance(item, dict) and '_qen_items' in item:
                item = item['_qen_items']
            return [self.create(item, context) for _ in range(size)]
        if isinstance(schema, tuple) and len(schema) == 2 and isinstance(schema[1], dict):
            return self._faker(schema[0], schema[1])
        if isinstance(schema, str) and hasattr(self._fake, schema):
            return self._faker(schema)
        return schema

    def _list_size(self, item: Any) -> int:
        size = item.get('_qen_count', 5) if isinstance(item, dict) else 5
        if isinstance(size, (list, tuple)):
            low, high = size
            return int(self._rng.integers(low, high, endpoint=True))
        return size


class _SchemaProvider:
    def __init__(self, schema: Any, seed: Optional[int] = None):
        self._schema = schema
        self._generator = Generator(seed)

    def take(self, count: int) -> Enumerable:
        """generate `count` records up front; the enumerable replays the same records"""
        return from_iterable([self._generator.create(self._schema) for _ in range(count)])


def from_schema(schema: Any, seed: Optional[int] = None) -> _SchemaProvider:
    return _SchemaProvider(schema, seed)


# --- random trees ---

class TreeNode:
    """a generated tree node. equality is identity, so nodes stay usable as dict keys"""

    __slots__ = ('name', 'parent', 'children', 'depth')

    def __init__(self, name: str, parent: Optional['TreeNode'] = None):
        self.name = name
        self.parent = parent
        self.children: List['TreeNode'] = []
        self.depth = parent.depth + 1 if parent is not None else 0

    def __repr__(self) -> str:
        return f"TreeNode({self.name!r}, depth={self.depth})"


class TreeNodeProvider(HierarchyProvider[TreeNode]):
    """parent/children only, so every axis takes its derived path"""

    def parent(self, node: TreeNode) -> Optional[TreeNode]:
        return node.parent

    def children(self, node: TreeNode) -> Iterable[TreeNode]:
        return node.children


class LinkedTreeNodeProvider(TreeNodeProvider):
    """the same trees, with every fast path enabled"""

    def owns(self, value: Any) -> bool:
        return isinstance(value, TreeNode)

    def root(self, node: TreeNode) -> TreeNode:
        while node.parent is not None:
            node = node.parent
        return node

    def first_child(self, node: TreeNode) -> Optional[TreeNode]:
        return node.children[0] if node.children else None

    def last_child(self, node: TreeNode) -> Optional[TreeNode]:
        return node.children[-1] if node.children else None

    def previous_sibling(self, node: TreeNode) -> Optional[TreeNode]:
        return self._sibling(node, -1)

    def next_sibling(self, node: TreeNode) -> Optional[TreeNode]:
        return self._sibling(node, 1)

    @staticmethod
    def _sibling(node: TreeNode, step: int) -> Optional[TreeNode]:
        if node.parent is None:
            return None
        siblings = node.parent.children
        index = next(i for i, sibling in enumerate(siblings) if sibling is node) + step
        return siblings[index] if 0 <= index < len(siblings) else None


def random_tree(size: int, max_children: int = 4, seed: Optional[int] = None) -> List[TreeNode]:
    """
    build a random tree of `size` nodes with faker-generated names.
    returns every node in document (pre-)order, root first.
    """
    if size < 1:
        raise ValueError("a tree needs at least one node")
    generator = Generator(seed)
    root = TreeNode(generator.fake.first_name())
    created = [root]
    open_nodes = [root]
    while len(created) < size:
        # attach to a random node that still has room
        parent = open_nodes[int(generator.rng.integers(0, len(open_nodes)))]
        child = TreeNode(generator.fake.first_name(), parent)
        parent.children.append(child)
        if len(parent.children) >= max_children:
            open_nodes.remove(parent)
        created.append(child)
        open_nodes.append(child)

    ordered = []
    stack = [root]
    while stack:
        node = stack.pop()
        ordered.append(node)
        stack.extend(reversed(node.children))
    return ordered
