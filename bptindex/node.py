from __future__ import annotations

"""
Contains the node types that make up the tree.

There are two kinds of nodes: internal nodes, which hold separator keys and
children, and leaf nodes, which hold the actual key-value entries. Leaves are
additionally chained together, via `previous` and `next`, in ascending key order.
The chain is what range searches walk; internal nodes are only used to find a
starting leaf.

The split convention for this tree: the node being split keeps the lower half,
and the newly created node (that is returned) holds the upper half.
"""
import abc
import logging

from bisect import bisect_left, bisect_right
from enum import Enum
from typing import Any, List, Optional

from .constants import EQUAL_EQUAL, GREATER_EQUAL, LESS_EQUAL


class NodeType(Enum):
    NodeInternal = 1
    NodeLeaf = 2


# section: key helpers shared by both node types


def child_index(keys: list, key: Any) -> int:
    """
    find the child `key` should be routed to, i.e. position of the
    first key strictly greater than `key`. If there is no such key,
    this is len(keys), i.e. the last child.

    NOTE: equal keys are routed right; this makes the routed-to leaf
    the right-most leaf that may contain `key`
    """
    return bisect_right(keys, key)


def lower_bound(keys: list, key: Any) -> int:
    """
    index of first key not less than `key`; len(keys) if none
    """
    return bisect_left(keys, key)


def upper_bound(keys: list, key: Any) -> int:
    """
    index of last key not greater than `key`; -1 if none
    """
    return bisect_right(keys, key) - 1


def promote_separator(child: Node, sibling: Node) -> Any:
    """
    Determine the separator key between `child` and its new split `sibling`.

    If the split nodes are internal, the sibling's first key is removed,
    since that key is moved up into the parent, and the sibling
    must end up with 1 fewer key than children.

    If the split nodes are leaves, the sibling's first key is a real entry;
    it is copied up and must stay in the sibling.
    """
    if child.node_type == NodeType.NodeInternal:
        return sibling.keys.pop(0)
    return sibling.keys[0]


class Node(abc.ABC):
    """
    The contract shared by internal and leaf nodes.

    Each node holds an ascending list of `keys`. Keys that compare equal
    keep their arrival order. A node is bound to the branching factor of
    the tree that created it.
    """

    keys: List[Any]
    branching_factor: int

    @property
    @abc.abstractmethod
    def node_type(self) -> NodeType:
        pass

    @abc.abstractmethod
    def insert(self, key: Any, value: Any):
        """
        insert key and value into the subtree rooted at this node,
        splitting any overflowing descendants. Overflow of this node
        itself must be handled by the caller.
        """

    @abc.abstractmethod
    def split(self) -> Node:
        """
        Split an overflowing node. This node keeps the lower half of its
        entries, and the returned sibling holds the upper half.
        """

    @abc.abstractmethod
    def range_search(self, key: Any, comparator: str) -> list:
        pass

    @abc.abstractmethod
    def is_overflow(self) -> bool:
        pass

    @abc.abstractmethod
    def get_first_leaf_node(self) -> Optional[LeafNode]:
        pass

    def __str__(self):
        return str(self.keys)

    def __repr__(self):
        return f"{self.__class__.__name__}({self.keys})"


class InternalNode(Node):
    """
    An internal node has 1 more child than keys.
    All children at index i have keys less than (or, for a run of duplicate
    keys split across leaves, equal to) the key at index i; the last child
    has keys >= the last key.
    """

    def __init__(self, branching_factor: int):
        self.branching_factor = branching_factor
        self.keys: List[Any] = []
        self.children: List[Node] = []

    @property
    def node_type(self) -> NodeType:
        return NodeType.NodeInternal

    def get_first_leaf_node(self) -> Optional[LeafNode]:
        if not self.children:
            return None
        return self.children[0].get_first_leaf_node()

    def is_overflow(self) -> bool:
        return len(self.children) > self.branching_factor

    def insert(self, key: Any, value: Any):
        child_num = child_index(self.keys, key)
        child = self.children[child_num]
        child.insert(key, value)
        if not child.is_overflow():
            return

        sibling = child.split()
        separator = promote_separator(child, sibling)
        # sibling is greater than child; hence goes right after it
        self.keys.insert(child_num, separator)
        self.children.insert(child_num + 1, sibling)
        logging.debug(f"split {child.node_type.name} child [{child_num}]; promoted separator {separator!r}")

    def split(self) -> InternalNode:
        """
        Keys are split at `mid` and children at `mid + 1`. Thus the returned
        node temporarily has as many keys as children; the caller must pop
        its first key and move it into the parent (see `promote_separator`).
        """
        mid = self.branching_factor // 2
        sibling = InternalNode(self.branching_factor)
        sibling.keys = self.keys[mid:]
        sibling.children = self.children[mid + 1:]
        del self.keys[mid:]
        del self.children[mid + 1:]
        return sibling

    def range_search(self, key: Any, comparator: str) -> list:
        # internal nodes only route; results are gathered along the leaf chain
        return self.children[child_index(self.keys, key)].range_search(key, comparator)


class LeafNode(Node):
    """
    A leaf holds keys and a parallel list of values. `previous` and `next`
    are lateral references to the neighbouring leaves; they do not
    own the neighbour, the neighbour's parent does.
    """

    def __init__(self, branching_factor: int):
        self.branching_factor = branching_factor
        self.keys: List[Any] = []
        self.values: List[Any] = []
        self.previous: Optional[LeafNode] = None
        self.next: Optional[LeafNode] = None

    @property
    def node_type(self) -> NodeType:
        return NodeType.NodeLeaf

    def get_first_leaf_node(self) -> LeafNode:
        return self

    def is_overflow(self) -> bool:
        return len(self.values) > self.branching_factor

    def insert(self, key: Any, value: Any):
        # go after any equal keys, to preserve arrival order
        cell_num = bisect_right(self.keys, key)
        self.keys.insert(cell_num, key)
        self.values.insert(cell_num, value)

    def split(self) -> LeafNode:
        mid = self.branching_factor // 2
        sibling = LeafNode(self.branching_factor)
        sibling.keys = self.keys[mid:]
        sibling.values = self.values[mid:]
        del self.keys[mid:]
        del self.values[mid:]

        # link sibling into the chain, right after self
        if self.next is not None:
            self.next.previous = sibling
        sibling.next = self.next
        sibling.previous = self
        self.next = sibling
        return sibling

    def range_search(self, key: Any, comparator: str) -> list:
        """
        returns list of values in sorted order based on their corresponding keys;
        values with same keys are in the order they were added to the tree

        NOTE: this expects to be invoked on the leaf `key` routes to
        """
        if comparator == EQUAL_EQUAL:
            return self.find_equal(key)
        elif comparator == LESS_EQUAL:
            return self.find_less_equal(key)
        elif comparator == GREATER_EQUAL:
            return self.find_greater_equal(key)
        return []

    # section: range search helpers

    def first_leaf_holding(self, key: Any) -> LeafNode:
        """
        A run of duplicates of `key` can be split across leaves; since equal
        keys are routed right, the earlier part of the run can be on preceding
        leaves. Walk back to the left-most leaf that may hold `key`.
        """
        curr = self
        while curr.previous is not None and curr.previous.keys and not curr.previous.keys[-1] < key:
            curr = curr.previous
        return curr

    def find_equal(self, key: Any) -> list:
        """
        collect the run of `key`, starting from the left-most leaf holding it;
        the run ends on the first leaf that holds a greater key
        """
        out = []
        curr = self.first_leaf_holding(key)
        while curr is not None:
            idx = lower_bound(curr.keys, key)
            last_idx = upper_bound(curr.keys, key)
            out.extend(curr.values[idx:last_idx + 1])
            if last_idx < len(curr.keys) - 1:
                # this leaf has a greater key; the run has ended
                break
            curr = curr.next
        return out

    def find_greater_equal(self, key: Any) -> list:
        start = self.first_leaf_holding(key)
        out = start.values[lower_bound(start.keys, key):]
        curr = start.next
        while curr is not None:
            out.extend(curr.values)
            curr = curr.next
        return out

    def find_less_equal(self, key: Any) -> list:
        """
        Traverse to the start of the chain, instead of prepending while walking
        backwards, which would shift values each time. This is 2-pass and
        linear in the size of the tree.

        NOTE: this leaf is the right-most leaf that may hold `key`, so every
        key on the next leaves is strictly greater, and the scan stops here
        """
        out = []
        curr = self
        while curr.previous is not None:
            curr = curr.previous
        while curr is not self:
            out.extend(curr.values)
            curr = curr.next

        last_idx = upper_bound(self.keys, key)
        out.extend(self.values[:last_idx + 1])
        return out
