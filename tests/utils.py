"""Utility functions for testing B+-tree invariants."""

from typing import Optional

from bplus_trees.bplus_tree_base import BPlusTreeBase
from bplus_trees.invariants import TREE_FLAGS
from bplus_trees.tree_stats import Stats


def assert_tree_invariants_tc(tc, t: BPlusTreeBase, stats: Stats, err_msg: Optional[str] = "") -> None:
    """TestCase version: use inside unittest.TestCase methods."""
    for flag in TREE_FLAGS:
        tc.assertTrue(
            getattr(stats, flag),
            f"Invariant failed: {flag} is False \n\n{err_msg}"
        )

    if t.is_empty():
        tc.assertEqual(
            stats.node_count, 1,
            f"Invariant failed: empty tree has {stats.node_count} nodes\n\n{err_msg}"
        )
        tc.assertIsNone(stats.least_item, f"Empty tree reports least_item\n\n{err_msg}")
        tc.assertIsNone(stats.greatest_item, f"Empty tree reports greatest_item\n\n{err_msg}")
        return

    tc.assertGreater(
        stats.item_count, 0,
        f"Invariant failed: item_count={stats.item_count} ≤ 0 for non-empty tree\n\n{err_msg}"
    )
    tc.assertEqual(
        stats.separator_count, stats.leaf_count - 1,
        f"Invariant failed: separator_count={stats.separator_count} ≠ "
        f"leaf_count - 1 = {stats.leaf_count - 1}\n\n{err_msg}"
    )
    tc.assertIsNotNone(
        stats.least_item,
        f"Invariant failed: least_item is None for non-empty tree\n\n{err_msg}"
    )
    tc.assertIsNotNone(
        stats.greatest_item,
        f"Invariant failed: greatest_item is None for non-empty tree\n\n{err_msg}"
    )
    tc.assertEqual(
        t.item_count(), stats.item_count,
        f"Invariant failed: item_count()={t.item_count()} ≠ stats.item_count={stats.item_count}\n\n{err_msg}"
    )
