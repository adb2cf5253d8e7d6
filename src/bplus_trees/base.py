from bisect import bisect_left, bisect_right
from typing import Any, List, Optional, Tuple
import logging

from bplus_trees.logging_config import get_logger

# Get logger for this module
logger = get_logger("BPlusTree")


class InvalidConfig(ValueError):
    """Raised when a tree is configured with an unusable branching factor."""


class BPlusNodeBase:
    """
    Base class for B+-tree nodes. Factory will set:
      - MAX_ITEMS : the most items a node may hold (bf - 1)
      - MIN_ITEMS : below this many items a non-root node is rebalanced
    """
    __slots__ = ("items",)

    # set by factory
    MAX_ITEMS: int
    MIN_ITEMS: int

    def __init__(self) -> None:
        self.items: List[Any] = []

    def is_leaf(self) -> bool:
        raise NotImplementedError

    def covering_index(self, key) -> int:
        """Index of the first item strictly greater than ``key``."""
        return bisect_right(self.items, key)

    def is_overfull(self) -> bool:
        return len(self.items) > self.MAX_ITEMS

    def is_underfull(self) -> bool:
        return len(self.items) < self.MIN_ITEMS

    def can_lend(self) -> bool:
        return len(self.items) > self.MIN_ITEMS

    def items_str(self) -> str:
        return "[" + ", ".join(str(k) for k in self.items) + "]"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(items={self.items!r})"


class LeafNodeBase(BPlusNodeBase):
    """
    A leaf holding keys. ``next`` and ``prev`` link neighbouring leaves;
    they never own the node they point to.
    """
    __slots__ = ("next", "prev")

    def __init__(self) -> None:
        super().__init__()
        self.next: Optional[LeafNodeBase] = None
        self.prev: Optional[LeafNodeBase] = None

    def is_leaf(self) -> bool:
        return True

    def find(self, key) -> int:
        """Position of ``key`` in this leaf, or -1 if absent."""
        items = self.items
        i = bisect_left(items, key)
        if i < len(items) and items[i] == key:
            return i
        return -1

    def first_key(self):
        return self.items[0] if self.items else None

    def last_key(self):
        return self.items[-1] if self.items else None

    def split(self) -> Tuple[Any, "LeafNodeBase"]:
        """
        Move the upper half of the items into a new right sibling and link
        it directly after this leaf. The middle key stays in the sibling
        and is returned as the separator for the parent.
        """
        items = self.items
        mid = len(items) // 2
        right = type(self)()
        right.items = items[mid:]
        del items[mid:]

        right.prev = self
        right.next = self.next
        if self.next is not None:
            self.next.prev = right
        self.next = right
        return right.items[0], right

    def absorb(self, right: "LeafNodeBase", separator=None) -> None:
        """Append all of ``right``'s keys and unlink it from the leaf chain."""
        self.items.extend(right.items)
        self.next = right.next
        if self.next is not None:
            self.next.prev = self
        right.next = right.prev = None


class InternalNodeBase(BPlusNodeBase):
    """An internal node: ``len(children) == len(items) + 1``."""
    __slots__ = ("children",)

    def __init__(self) -> None:
        super().__init__()
        self.children: List[BPlusNodeBase] = []

    def is_leaf(self) -> bool:
        return False

    def first_key(self):
        return self.children[0].first_key()

    def last_key(self):
        return self.children[-1].last_key()

    def split(self) -> Tuple[Any, "InternalNodeBase"]:
        """
        Move the items after the middle one, together with the children to
        their right, into a new sibling. The middle item leaves both nodes
        and is returned for the parent.
        """
        items = self.items
        children = self.children
        mid = len(items) // 2
        separator = items[mid]

        right = type(self)()
        right.items = items[mid + 1:]
        right.children = children[mid + 1:]
        del items[mid:]
        del children[mid + 1:]
        return separator, right

    def absorb(self, right: "InternalNodeBase", separator=None) -> None:
        """Pull ``separator`` down and append all of ``right``'s items and children."""
        self.items.append(separator)
        self.items.extend(right.items)
        self.children.extend(right.children)


def debug_log(message, *args, **kwargs):
    """Log a debug message only if debug logging is enabled"""
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(message, *args, **kwargs)
