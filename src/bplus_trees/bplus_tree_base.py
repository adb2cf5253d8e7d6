"""B+-tree base implementation"""

from __future__ import annotations
from typing import Any, Iterator, Optional, Type

from bplus_trees.base import (
    BPlusNodeBase,
    InternalNodeBase,
    LeafNodeBase,
    debug_log,
)


class BPlusTreeBase:
    """
    An ordered set of unique keys stored in a B+-tree.

    The tree owns a single root node; internal nodes own their children.
    Leaves are additionally chained through ``next``/``prev``.

    Attributes:
        root (BPlusNodeBase): The root node. An empty tree is a single empty leaf.
    """
    __slots__ = ("root",)

    # set by factory
    BF: int
    LeafClass: Type[LeafNodeBase]
    InternalClass: Type[InternalNodeBase]

    def __init__(self, root: Optional[BPlusNodeBase] = None):
        self.root: BPlusNodeBase = root if root is not None else self.LeafClass()

    def __str__(self):
        return f"{type(self).__name__}(bf={self.BF}, root={self.root.items_str()})"

    __repr__ = __str__

    def __contains__(self, key) -> bool:
        return self.contains(key)

    # Public API
    def is_empty(self) -> bool:
        root = self.root
        return root.is_leaf() and not root.items

    def clear(self) -> None:
        """Drop every node and start over from a single empty leaf."""
        self.root = self.LeafClass()

    def contains(self, key) -> bool:
        """
        Descends from the root along the covering child of ``key`` and
        checks the leaf it ends in. O(log_bf n).
        """
        node = self.root
        while not node.is_leaf():
            node = node.children[node.covering_index(key)]
        return node.find(key) >= 0

    def first(self) -> Optional[Any]:
        """Returns the smallest key, or None if the tree is empty."""
        return self.root.first_key()

    def last(self) -> Optional[Any]:
        """Returns the largest key, or None if the tree is empty."""
        return self.root.last_key()

    def add(self, key) -> bool:
        """
        Public method (O(log n)): Insert a key into the tree. Keys already
        present are left untouched.

        Args:
            key: Any key comparable with the keys already stored.

        Returns:
            bool: True if the key was inserted, False if it was present.
        """
        inserted = self._add(self.root, key)
        if self.root.is_overfull():
            self._grow_root()
        return inserted

    def remove(self, key) -> bool:
        """
        Public method (O(log n)): Remove a key from the tree.

        Returns:
            bool: True if the key was found and removed, otherwise False.
        """
        removed = self._remove(self.root, key)
        root = self.root
        if not root.is_leaf() and not root.items:
            debug_log("Root emptied, promoting its only child")
            self.root = root.children[0]
        return removed

    def render(self, prefix: str = "") -> str:
        """Return the box-drawing text rendering of the tree."""
        from bplus_trees.display import print_pretty
        return print_pretty(self, prefix)

    def print_structure(self) -> str:
        from bplus_trees.display import print_structure
        return print_structure(self)

    def iter_leaf_nodes(self) -> Iterator[LeafNodeBase]:
        """
        Iterates over all leaf nodes from smallest to largest keys
        by following the leaf chain from the leftmost leaf.
        """
        node = self.root
        while not node.is_leaf():
            node = node.children[0]
        while node is not None:
            yield node
            node = node.next

    def item_count(self) -> int:
        """Number of keys stored in the tree, O(n / bf)."""
        return sum(len(leaf.items) for leaf in self.iter_leaf_nodes())

    def height(self) -> int:
        """Number of levels; a lone leaf has height 1."""
        height = 1
        node = self.root
        while not node.is_leaf():
            height += 1
            node = node.children[0]
        return height

    # Private Methods
    def _add(self, node: BPlusNodeBase, key) -> bool:
        at = node.covering_index(key)
        if node.is_leaf():
            if at > 0 and node.items[at - 1] == key:
                return False
            node.items.insert(at, key)
            return True

        child = node.children[at]
        inserted = self._add(child, key)
        if inserted and child.is_overfull():
            self._split_child(node, at)
        return inserted

    def _split_child(self, parent: InternalNodeBase, at: int) -> None:
        """Split ``parent.children[at]`` and hook the new sibling in right after it."""
        child = parent.children[at]
        separator, sibling = child.split()
        parent.items.insert(at, separator)
        parent.children.insert(at + 1, sibling)
        debug_log("Split %s at separator %r", type(child).__name__, separator)

    def _grow_root(self) -> None:
        old_root = self.root
        separator, sibling = old_root.split()
        new_root = self.InternalClass()
        new_root.items.append(separator)
        new_root.children.append(old_root)
        new_root.children.append(sibling)
        self.root = new_root
        debug_log("Root split at %r, tree grew to height %d", separator, self.height())

    def _remove(self, node: BPlusNodeBase, key) -> bool:
        if node.is_leaf():
            i = node.find(key)
            if i < 0:
                return False
            del node.items[i]
            return True

        at = node.covering_index(key)
        child = node.children[at]
        removed = self._remove(child, key)
        if removed and child.is_underfull():
            self._rebalance_child(node, at)
        return removed

    def _rebalance_child(self, parent: InternalNodeBase, at: int) -> None:
        """Restore the occupancy of ``parent.children[at]`` by borrowing or merging."""
        children = parent.children
        if at > 0 and children[at - 1].can_lend():
            self._borrow_from_left(parent, at)
        elif at < len(children) - 1 and children[at + 1].can_lend():
            self._borrow_from_right(parent, at)
        else:
            self._merge_children(parent, at if at < len(children) - 1 else at - 1)

    def _borrow_from_left(self, parent: InternalNodeBase, at: int) -> None:
        child = parent.children[at]
        sibling = parent.children[at - 1]
        if child.is_leaf():
            child.items.insert(0, sibling.items.pop())
        else:
            # Rotate right through the parent
            child.items.insert(0, parent.items[at - 1])
            sibling.items.pop()
            child.children.insert(0, sibling.children.pop())
        parent.items[at - 1] = child.first_key()
        debug_log("Borrowed from left sibling, separator now %r", parent.items[at - 1])

    def _borrow_from_right(self, parent: InternalNodeBase, at: int) -> None:
        child = parent.children[at]
        sibling = parent.children[at + 1]
        if child.is_leaf():
            child.items.append(sibling.items.pop(0))
        else:
            # Rotate left through the parent
            child.items.append(parent.items[at])
            sibling.items.pop(0)
            child.children.append(sibling.children.pop(0))
        parent.items[at] = sibling.first_key()
        debug_log("Borrowed from right sibling, separator now %r", parent.items[at])

    def _merge_children(self, parent: InternalNodeBase, at: int) -> None:
        """Fold ``parent.children[at + 1]`` into ``parent.children[at]``."""
        left = parent.children[at]
        right = parent.children[at + 1]
        left.absorb(right, parent.items[at])
        del parent.items[at]
        del parent.children[at + 1]
        debug_log("Merged %s pair into %s", type(left).__name__, left.items_str())

        # With an odd branching factor two minimal leaves can exceed capacity
        if left.is_overfull():
            self._split_child(parent, at)
