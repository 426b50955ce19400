"""
Tests on individual nodes, i.e. splitting and linking, independent of the tree
"""
import pytest

from .context import NodeType, InternalNode, LeafNode, child_index, lower_bound, upper_bound


def make_leaf(branching_factor, keys):
    leaf = LeafNode(branching_factor)
    for key in keys:
        leaf.insert(key, f"v{key}")
    return leaf


def test_key_helpers():
    keys = [1, 3, 3, 5]
    # routing goes right of equal keys
    assert child_index(keys, 3) == 3
    assert child_index(keys, 0) == 0
    assert child_index(keys, 9) == 4
    assert lower_bound(keys, 3) == 1
    assert lower_bound(keys, 9) == 4
    assert upper_bound(keys, 3) == 2
    assert upper_bound(keys, 0) == -1


def test_leaf_insert_keeps_order():
    leaf = LeafNode(5)
    for key, value in [(3, "a"), (1, "b"), (3, "c"), (2, "d")]:
        leaf.insert(key, value)
    assert leaf.keys == [1, 2, 3, 3]
    assert leaf.values == ["b", "d", "a", "c"]


def test_leaf_overflow():
    leaf = make_leaf(3, [1, 2, 3])
    assert not leaf.is_overflow()
    leaf.insert(4, "v4")
    assert leaf.is_overflow()


def test_leaf_split():
    leaf = make_leaf(3, [1, 2, 3, 4])
    sibling = leaf.split()
    # mid = 3 // 2 = 1
    assert leaf.keys == [1]
    assert leaf.values == ["v1"]
    assert sibling.keys == [2, 3, 4]
    assert sibling.values == ["v2", "v3", "v4"]
    assert leaf.next is sibling
    assert sibling.previous is leaf
    assert sibling.next is None


def test_leaf_split_relinks_chain():
    leaf = make_leaf(4, [1, 2, 3, 4, 5])
    right = make_leaf(4, [10])
    leaf.next = right
    right.previous = leaf

    sibling = leaf.split()
    assert leaf.next is sibling
    assert sibling.previous is leaf
    assert sibling.next is right
    assert right.previous is sibling


def test_internal_split():
    node = InternalNode(3)
    node.keys = [10, 20, 30]
    node.children = [make_leaf(3, [k]) for k in [5, 15, 25, 35]]
    assert node.is_overflow()

    sibling = node.split()
    assert node.keys == [10]
    assert [child.keys for child in node.children] == [[5], [15]]
    # returned node has as many keys as children, until the caller pops the separator
    assert sibling.keys == [20, 30]
    assert [child.keys for child in sibling.children] == [[25], [35]]


def test_internal_insert_promotes_leaf_separator():
    left = make_leaf(3, [1])
    right = make_leaf(3, [5, 6, 7])
    left.next, right.previous = right, left
    node = InternalNode(3)
    node.keys = [5]
    node.children = [left, right]

    node.insert(8, "v8")
    # right leaf split into [5] and [6, 7, 8]; separator is copied, not moved
    assert node.keys == [5, 6]
    assert [child.keys for child in node.children] == [[1], [5], [6, 7, 8]]
    assert node.children[1].next is node.children[2]


def test_internal_insert_promotes_internal_separator():
    leaves = [make_leaf(3, [5]), make_leaf(3, [10, 15]), make_leaf(3, [20, 25, 26])]
    for left, right in zip(leaves, leaves[1:]):
        left.next, right.previous = right, left
    child = InternalNode(3)
    child.keys = [10, 20]
    child.children = leaves
    node = InternalNode(3)
    node.children = [child]

    node.insert(27, "v27")
    # leaf split promotes 25 into child; child overflows and splits at mid = 1,
    # and its separator 20 is moved up, i.e. removed from the new sibling
    assert node.keys == [20]
    child, sibling = node.children
    assert child.keys == [10]
    assert sibling.keys == [25]
    assert [leaf.keys for leaf in child.children] == [[5], [10, 15]]
    assert [leaf.keys for leaf in sibling.children] == [[20], [25, 26, 27]]
    assert len(sibling.children) == len(sibling.keys) + 1


def test_first_leaf_node():
    assert InternalNode(3).get_first_leaf_node() is None
    leaf = make_leaf(3, [1])
    assert leaf.get_first_leaf_node() is leaf
    node = InternalNode(3)
    node.keys = [2]
    node.children = [leaf, make_leaf(3, [2])]
    assert node.get_first_leaf_node() is leaf


def test_node_types():
    assert LeafNode(3).node_type == NodeType.NodeLeaf
    assert InternalNode(3).node_type == NodeType.NodeInternal


@pytest.mark.parametrize("comparator,expected", [
    ("==", ["v2"]),
    ("<=", ["v1", "v2"]),
    (">=", ["v2", "v3"]),
    ("!=", []),
])
def test_leaf_range_search(comparator, expected):
    leaf = make_leaf(5, [1, 2, 3])
    assert leaf.range_search(2, comparator) == expected
