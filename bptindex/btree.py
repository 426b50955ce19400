from __future__ import annotations

"""
Contains the implementation of the btree
"""
import logging

from collections import deque
from enum import Enum
from typing import Any, Iterator, List, Optional, Tuple, Union

from .constants import (
    MIN_BRANCHING_FACTOR,
    LESS_EQUAL,
    EQUAL_EQUAL,
    GREATER_EQUAL,
)
from .cursor import Cursor
from .node import (
    Node,
    NodeType,
    InternalNode,
    LeafNode,
    promote_separator,
)


class InvalidArgumentException(ValueError):
    """
    Raised on an invalid branching factor or a missing key
    """
    pass


class Comparator(Enum):
    LE = LESS_EQUAL
    EQ = EQUAL_EQUAL
    GE = GREATER_EQUAL


class BPTree:
    """
    An in-memory B+ tree, mapping comparable keys to arbitrary values.
    Duplicate keys are allowed.

    The public interface consists of `insert`, `get`, `range_search`,
    and `size`, along with iteration helpers, printers and validators.

    Invariants:
        - all children at index i have keys less than the key at index i
        - the last child has keys >= the last key
        - an internal node has 1 more child than keys
        - a leaf node has as many values as keys

    NOTE: the tree is meant to be owned by a single caller. There is no
    locking; concurrent mutation, or reading while another thread
    writes, is not supported.
    """

    def __init__(self, branching_factor: int):
        """
        :param branching_factor: max number of children of an internal node;
            also the max number of entries on a leaf
        """
        if branching_factor <= MIN_BRANCHING_FACTOR:
            raise InvalidArgumentException(f"Illegal branching factor: {branching_factor}")
        self._branching_factor = branching_factor
        # created lazily on first insert
        self.root: Optional[Node] = None

    @property
    def branching_factor(self) -> int:
        return self._branching_factor

    # section : public interface

    def insert(self, key: Any, value: Any):
        """
        insert `key` and `value`

        Algorithm:
            insert into root; the root recursively routes down to a leaf,
            and any child that overflows is split by its parent on the way back up.

            If the root itself overflows, a new root is created with the old root
            and its split as children. This is the only way the tree grows in height.

        :raises InvalidArgumentException: if key is None
        """
        if key is None:
            raise InvalidArgumentException("key must not be None")

        if self.root is None:
            self.root = LeafNode(self.branching_factor)

        self.root.insert(key, value)

        # an overflow bumped all the way up to the root
        if self.root.is_overflow():
            old_root = self.root
            sibling = old_root.split()
            new_root = InternalNode(self.branching_factor)
            new_root.keys.append(promote_separator(old_root, sibling))
            # sibling goes second since it's greater than old root
            new_root.children.extend([old_root, sibling])
            self.root = new_root
            logging.debug(f"root split; tree height is now {self.height()}")

    def get(self, key: Any) -> Optional[Any]:
        """
        return the value of the first entry with a matching key;
        None if key is None or not found
        """
        if key is None or self.root is None or not self.root.keys:
            return None
        found = self.root.range_search(key, EQUAL_EQUAL)
        if not found:
            return None
        return found[0]

    def range_search(self, key: Any, comparator: Union[Comparator, str]) -> list:
        """
        return values whose keys satisfy `<key> <comparator> key`,
        e.g. if key = 2.5 and comparator = ">=", return all
        values with keys >= 2.5

        :param comparator: one of "<=", "==", ">=", or the equivalent `Comparator`
        :return: list of values, ordered by key; empty if key is None, the
            comparator is not recognized, or nothing matches
        """
        if isinstance(comparator, Comparator):
            comparator = comparator.value
        if comparator not in (LESS_EQUAL, EQUAL_EQUAL, GREATER_EQUAL):
            return []
        if key is None or self.root is None:
            return []
        return self.root.range_search(key, comparator)

    def size(self) -> int:
        """
        number of leaves in the tree; NOT the number of entries
        """
        if self.root is None:
            return 0
        leaf = self.root.get_first_leaf_node()
        size = 0
        while leaf is not None:
            size += 1
            leaf = leaf.next
        return size

    # section : read helpers

    def first_leaf(self) -> Optional[LeafNode]:
        if self.root is None:
            return None
        return self.root.get_first_leaf_node()

    def items(self) -> Iterator[Tuple[Any, Any]]:
        """
        iterate over (key, value) entries in key order
        """
        cursor = Cursor(self)
        while not cursor.end_of_tree:
            yield cursor.get_entry()
            cursor.advance()

    def keys(self) -> List[Any]:
        return [key for key, _ in self.items()]

    def values(self) -> List[Any]:
        return [value for _, value in self.items()]

    def num_entries(self) -> int:
        return sum(len(leaf.keys) for leaf in self.leaves())

    def leaves(self) -> Iterator[LeafNode]:
        leaf = self.first_leaf()
        while leaf is not None:
            yield leaf
            leaf = leaf.next

    def height(self) -> int:
        """
        number of levels; 0 for an empty tree
        """
        height = 0
        node = self.root
        while node is not None:
            height += 1
            if node.node_type == NodeType.NodeLeaf:
                break
            node = node.children[0] if node.children else None
        return height

    # section: btree debugging utilities

    def __str__(self):
        """
        level-order rendering; one line per level.
        Being in the same square bracket [] means in the same node;
        being in the same curly bracket {} means having the same parent.
        """
        if self.root is None:
            return "{}\n"
        lines = []
        queue = deque([[self.root]])
        while queue:
            next_queue = deque()
            groups = []
            while queue:
                nodes = queue.popleft()
                groups.append("{" + ", ".join(str(node) for node in nodes) + "}")
                for node in nodes:
                    if node.node_type == NodeType.NodeInternal:
                        next_queue.append(node.children)
            lines.append(", ".join(groups))
            queue = next_queue
        return "\n".join(lines) + "\n"

    def __repr__(self):
        return f"BPTree(branching_factor={self.branching_factor}, size={self.size()})"

    @staticmethod
    def depth_to_indent(depth: int) -> str:
        return " " * (depth * 4)

    def print_tree(self, node: Node = None, depth: int = 0):
        """
        print entire tree node by node, starting at an optional node
        :param node: root of invocation; not necessarily global root
        :param depth: depth of current invocation (used for formatting indentation)
        """
        if node is None:
            node = self.root
            if node is None:
                print("empty tree")
                return

        indent = self.depth_to_indent(depth)
        if node.node_type == NodeType.NodeLeaf:
            self.print_leaf_node(node, depth=depth)
        else:
            body = f".. printing internal node at depth: [{depth}] .."
            divider = f"{indent}{len(body) * '.'}"
            print(divider)
            print(f"{indent}{body}")
            print(divider)
            self.print_internal_node(node, recurse=True, depth=depth)
            print(divider)

    def print_internal_node(self, node: InternalNode, recurse: bool = True, depth: int = 0):
        indent = self.depth_to_indent(depth)
        print(f"{indent}internal (num keys: {len(node.keys)}, num children: {len(node.children)})")
        for i, key in enumerate(node.keys):
            print(f"{indent}{i}-key: {key!r}")

        if not recurse:
            return

        for child in node.children:
            self.print_tree(child, depth=depth + 1)

    @staticmethod
    def print_leaf_node(node: LeafNode, depth: int = 0):
        indent = BPTree.depth_to_indent(depth)
        print(f"{indent}leaf (size: {len(node.keys)}, has_prev: {node.previous is not None}, "
              f"has_next: {node.next is not None})")
        for i, (key, value) in enumerate(zip(node.keys, node.values)):
            print(f"{indent}{i} - {key!r}: {value!r}")

    def validate(self) -> bool:
        """
        invoke all sub-validators
        :return:
            raises AssertionError on failure
            True on success
        """
        self.validate_children()
        self.validate_ordering()
        self.validate_sibling_chain()
        return True

    def validate_children(self) -> bool:
        """
        validate:
            1) each internal node has 1 more child than keys
            2) each leaf has as many values as keys
            3) no node, other than the root, overflows
            4) all leaves are at the same depth
        """
        if self.root is None:
            return True
        leaf_depths = set()
        stack = [(self.root, 0)]
        while stack:
            node, depth = stack.pop()
            if node is not self.root:
                assert not node.is_overflow(), f"validation: non-root node {node!r} overflows"
            if node.node_type == NodeType.NodeInternal:
                assert len(node.children) == len(node.keys) + 1, (
                    f"validation: internal node {node!r} has {len(node.children)} children "
                    f"and {len(node.keys)} keys"
                )
                for child in node.children:
                    stack.append((child, depth + 1))
            else:
                assert len(node.keys) == len(node.values), (
                    f"validation: leaf {node!r} has {len(node.keys)} keys and {len(node.values)} values"
                )
                leaf_depths.add(depth)
        assert len(leaf_depths) == 1, f"validation: leaves found at different depths {leaf_depths}"
        return True

    def validate_ordering(self) -> bool:
        """
        traverse the tree, starting at root, and ensure keys are ordered as expected,
        i.e. every key under a child is bounded by the separator keys around it

        NOTE: a run of duplicates split across two leaves means the left leaf
        can hold copies of its upper separator; hence the upper bound is inclusive
        """
        if self.root is None:
            return True
        # bounds are None when unbounded
        stack = [(self.root, None, None)]
        while stack:
            node, lower_bound, upper_bound = stack.pop()
            for i, key in enumerate(node.keys):
                if lower_bound is not None:
                    assert not key < lower_bound, (
                        f"validation: lower bound [{lower_bound!r}] constraint violated [{key!r}]"
                    )
                if upper_bound is not None:
                    assert not upper_bound < key, (
                        f"validation: upper bound [{upper_bound!r}] constraint violated [{key!r}]"
                    )
                if i > 0:
                    prev_key = node.keys[i - 1]
                    assert not key < prev_key, f"validation: keys out of order {prev_key!r}, {key!r}"

            if node.node_type == NodeType.NodeInternal:
                for child_num, child in enumerate(node.children):
                    # lower bound is the previous key for non-zero child, and parent's lower bound for 0-child
                    child_lower_bound = node.keys[child_num - 1] if child_num > 0 else lower_bound
                    child_upper_bound = node.keys[child_num] if child_num < len(node.keys) else upper_bound
                    stack.append((child, child_lower_bound, child_upper_bound))
        return True

    def validate_sibling_chain(self) -> bool:
        """
        validate the leaf chain visits every leaf exactly once, in tree order,
        with consistent back references, and that keys along it are non-decreasing
        """
        if self.root is None:
            return True
        # leaves in tree order, via a depth-first walk
        tree_leaves = []
        stack = [self.root]
        while stack:
            node = stack.pop()
            if node.node_type == NodeType.NodeLeaf:
                tree_leaves.append(node)
            else:
                stack.extend(reversed(node.children))

        chain_leaves = list(self.leaves())
        assert len(chain_leaves) == len(tree_leaves), (
            f"validation: chain has {len(chain_leaves)} leaves; tree has {len(tree_leaves)}"
        )
        prev_leaf = None
        prev_key = None
        for chain_leaf, tree_leaf in zip(chain_leaves, tree_leaves):
            assert chain_leaf is tree_leaf, "validation: chain order differs from tree order"
            assert chain_leaf.previous is prev_leaf, "validation: inconsistent previous reference"
            for key in chain_leaf.keys:
                if prev_key is not None:
                    assert not key < prev_key, f"validation: chain keys out of order {prev_key!r}, {key!r}"
                prev_key = key
            prev_leaf = chain_leaf
        assert prev_leaf.next is None, "validation: last leaf has a next reference"
        return True
