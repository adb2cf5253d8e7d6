"""Shared invariant-checking utilities.

This module provides tree invariant validation that can be used by both
the stats scripts and the test suite.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from bplus_trees.tree_stats import bptree_stats_

if TYPE_CHECKING:
    from bplus_trees.bplus_tree_base import BPlusTreeBase
    from bplus_trees.tree_stats import Stats

TREE_FLAGS = (
    "is_search_tree",
    "items_sorted",
    "children_match_items",
    "leaves_same_depth",
    "occupancy_ok",
    "linked_leaf_nodes",
    "leaf_keys_in_order",
)


class InvariantError(Exception):
    """Raised when a B+-tree invariant is violated."""


def assert_tree_invariants_raise(
    t: BPlusTreeBase,
    stats: Optional[Stats] = None,
) -> None:
    """Check all invariants, raising :class:`InvariantError` on the first failure."""
    if stats is None:
        stats = bptree_stats_(t)

    for flag in TREE_FLAGS:
        if not getattr(stats, flag):
            raise InvariantError(f"Invariant failed: {flag} is False")

    if t.is_empty():
        if stats.item_count != 0 or stats.node_count != 1:
            raise InvariantError(
                f"Invariant failed: empty tree has item_count={stats.item_count}, "
                f"node_count={stats.node_count}"
            )
        return

    if stats.item_count <= 0:
        raise InvariantError(f"Invariant failed: item_count={stats.item_count} ≤ 0 for non-empty tree")
    if stats.least_item is None:
        raise InvariantError("Invariant failed: least_item is None for non-empty tree")
    if stats.greatest_item is None:
        raise InvariantError("Invariant failed: greatest_item is None for non-empty tree")
    # Each leaf but the first is introduced by exactly one separator
    if stats.separator_count != stats.leaf_count - 1:
        raise InvariantError(
            f"Invariant failed: separator_count={stats.separator_count} ≠ "
            f"leaf_count - 1 = {stats.leaf_count - 1}"
        )


def check_leaf_keys(
    tree: BPlusTreeBase,
    expected_keys: list | None = None,
) -> tuple[list, bool, bool]:
    """Traverse leaf nodes and validate keys.

    Returns
    -------
    (keys, presence_ok, order_ok)
    """
    keys: list = []
    order_ok = True

    prev_key = None
    for leaf in tree.iter_leaf_nodes():
        for key in leaf.items:
            if keys and key <= prev_key:
                order_ok = False
            keys.append(key)
            prev_key = key

    presence_ok = True
    if expected_keys is not None:
        if len(keys) != len(expected_keys):
            presence_ok = False
        else:
            presence_ok = set(keys) == set(expected_keys)

    return keys, presence_ok, order_ok
