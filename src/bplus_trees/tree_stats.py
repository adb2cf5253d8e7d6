"""Statistics and invariant checking for B+-tree structures."""

from __future__ import annotations

from dataclasses import dataclass
from itertools import islice
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from bplus_trees.base import BPlusNodeBase
    from bplus_trees.bplus_tree_base import BPlusTreeBase


_UNBOUNDED = object()


@dataclass
class Stats:
    """Aggregated statistics for a B+-tree."""

    height: int
    node_count: int
    leaf_count: int
    item_count: int
    separator_count: int
    item_slot_count: int
    least_item: Any | None
    greatest_item: Any | None
    is_search_tree: bool
    items_sorted: bool
    children_match_items: bool
    leaves_same_depth: bool
    occupancy_ok: bool
    linked_leaf_nodes: bool
    leaf_keys_in_order: bool


def min_leaf_fill(bf: int) -> int:
    """Fewest keys a non-root leaf holds once any operation has returned."""
    return bf // 2


def min_internal_fill(bf: int) -> int:
    """Fewest separators a non-root internal node holds."""
    return (bf + 1) // 2 - 1


def bptree_stats_(t: BPlusTreeBase) -> Stats:
    """
    Returns aggregated statistics for a B+-tree in **O(n)** time.

    Every node is visited once with the key range ``[lo, hi)`` its
    ancestors' separators allow; the leaf chain is walked once afterwards
    and compared against the leaves found by the descent.
    """
    bf = t.BF
    stats = Stats(
        height=t.height(),
        node_count=0,
        leaf_count=0,
        item_count=0,
        separator_count=0,
        item_slot_count=0,
        least_item=t.first(),
        greatest_item=t.last(),
        is_search_tree=True,
        items_sorted=True,
        children_match_items=True,
        leaves_same_depth=True,
        occupancy_ok=True,
        linked_leaf_nodes=True,
        leaf_keys_in_order=True,
    )

    leaves_in_order: list[BPlusNodeBase] = []
    leaf_depths = set()

    def visit(node: BPlusNodeBase, depth: int, lo: Any, hi: Any, is_root: bool) -> None:
        items = node.items
        n = len(items)
        stats.node_count += 1
        stats.item_slot_count += bf - 1

        if any(items[i] >= items[i + 1] for i in range(n - 1)):
            stats.items_sorted = False

        if n > bf - 1:
            stats.occupancy_ok = False

        if node.is_leaf():
            stats.leaf_count += 1
            stats.item_count += n
            leaf_depths.add(depth)
            leaves_in_order.append(node)
            if not is_root and n < min_leaf_fill(bf):
                stats.occupancy_ok = False
            for key in items:
                if (lo is not _UNBOUNDED and key < lo) or (hi is not _UNBOUNDED and key >= hi):
                    stats.is_search_tree = False
            return

        stats.separator_count += n
        if len(node.children) != n + 1:
            stats.children_match_items = False
            return
        if is_root and n < 1:
            stats.occupancy_ok = False
        if not is_root and n < min_internal_fill(bf):
            stats.occupancy_ok = False

        for i, child in enumerate(node.children):
            child_lo = items[i - 1] if i > 0 else lo
            child_hi = items[i] if i < n else hi
            visit(child, depth + 1, child_lo, child_hi, False)

    visit(t.root, 1, _UNBOUNDED, _UNBOUNDED, True)
    stats.leaves_same_depth = len(leaf_depths) == 1

    # ---------- leaf walk ONCE at the root -----------------------------
    chained = list(islice(t.iter_leaf_nodes(), stats.leaf_count + 1))
    if len(chained) != len(leaves_in_order) or any(
        a is not b for a, b in zip(chained, leaves_in_order)
    ):
        stats.linked_leaf_nodes = False
    else:
        prev = None
        for leaf in chained:
            if leaf.prev is not prev:
                stats.linked_leaf_nodes = False
                break
            prev = leaf

    prev_key = _UNBOUNDED
    for leaf in chained:
        for key in leaf.items:
            if prev_key is not _UNBOUNDED and key <= prev_key:
                stats.leaf_keys_in_order = False
            prev_key = key

    return stats
