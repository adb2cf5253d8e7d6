"""
bplus_trees — An in-memory ordered set backed by a B+-tree.

Quick-start imports::

    from bplus_trees import create_bplustree

    tree = create_bplustree(4)
    tree.add(42)
"""

from bplus_trees.base import InternalNodeBase, InvalidConfig, LeafNodeBase
from bplus_trees.bplus_tree_base import BPlusTreeBase
from bplus_trees.factory import (
    DEFAULT_BRANCHING_FACTOR,
    create_bplustree,
    make_bplustree_classes,
)

# Stats & invariants
from bplus_trees.invariants import (
    InvariantError,
    assert_tree_invariants_raise,
    check_leaf_keys,
)
from bplus_trees.tree_stats import Stats, bptree_stats_

__all__ = [
    "BPlusTreeBase",
    "DEFAULT_BRANCHING_FACTOR",
    "InternalNodeBase",
    "InvalidConfig",
    "InvariantError",
    "LeafNodeBase",
    "Stats",
    "assert_tree_invariants_raise",
    "bptree_stats_",
    "check_leaf_keys",
    "create_bplustree",
    "make_bplustree_classes",
]
