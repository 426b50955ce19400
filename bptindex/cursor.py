from typing import TYPE_CHECKING, Any, Optional, Tuple

from .node import LeafNode

if TYPE_CHECKING:
    from .btree import BPTree


class Cursor:
    """
    Represents a cursor over the entries of a tree. A cursor walks the
    leaf chain, i.e. it never revisits internal nodes after locating
    the first leaf.
    """
    def __init__(self, tree: 'BPTree'):
        self.tree = tree
        self.leaf: Optional[LeafNode] = None
        self.cell_num = 0
        self.end_of_tree = False
        self.first_leaf()

    def first_leaf(self):
        """
        set cursor location to left-most/first leaf
        """
        self.leaf = self.tree.first_leaf()
        self.cell_num = 0
        self.end_of_tree = self.leaf is None or len(self.leaf.keys) == 0

    def get_entry(self) -> Tuple[Any, Any]:
        """
        return (key, value) pointed to by cursor
        """
        return self.leaf.keys[self.cell_num], self.leaf.values[self.cell_num]

    def next_leaf(self):
        """
        move to the first cell of the next non-empty leaf
        """
        leaf = self.leaf.next
        while leaf is not None and len(leaf.keys) == 0:
            leaf = leaf.next
        if leaf is None:
            # there is nothing
            self.end_of_tree = True
            return
        self.leaf = leaf
        self.cell_num = 0

    def advance(self):
        """
        advance the cursor
         1) from left most leaf node to right most leaf node
         2) from leftmost cell to right most cell
        """
        if self.end_of_tree:
            return
        # we are currently on the last cell in the leaf
        # go to the next leaf if it exists
        if self.cell_num >= len(self.leaf.keys) - 1:
            self.next_leaf()
        else:
            self.cell_num += 1
