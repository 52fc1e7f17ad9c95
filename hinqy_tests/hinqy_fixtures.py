"""
shared trees for the hierarchy tests.

    A
    ├── AA
    │   ├── AAA
    │   │   └── AAAA
    │   ├── AAB
    │   └── AAC
    ├── AB
    └── AC
        └── ACA
"""
from dgen import TreeNode, TreeNodeProvider, LinkedTreeNodeProvider
from hinqy import HierarchyProvider


def build_tree():
    """fresh copy of the tree above, as a name -> node dict"""
    nodes = {}

    def add(name, parent=None):
        node = TreeNode(name, parent)
        if parent is not None:
            parent.children.append(node)
        nodes[name] = node
        return node

    a = add('A')
    aa = add('AA', a)
    aaa = add('AAA', aa)
    add('AAAA', aaa)
    add('AAB', aa)
    add('AAC', aa)
    add('AB', a)
    ac = add('AC', a)
    add('ACA', ac)
    return nodes


def names(sequence):
    return [node.name for node in sequence]


# derived axes only, and every fast path; each hierarchy test runs against both
PROVIDERS = {
    'derived': TreeNodeProvider(),
    'linked': LinkedTreeNodeProvider(),
}

# the same tree described by plain functions
function_provider = HierarchyProvider.create(lambda node: node.parent, lambda node: node.children)


class CountingProvider(TreeNodeProvider):
    """records how often parent() is called, to observe ancestor-set memoisation"""

    def __init__(self):
        self.parent_calls = 0

    def parent(self, node):
        self.parent_calls += 1
        return node.parent
