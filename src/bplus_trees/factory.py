"""B+-tree factory module."""

from bplus_trees.base import InternalNodeBase, InvalidConfig, LeafNodeBase
from bplus_trees.bplus_tree_base import BPlusTreeBase

DEFAULT_BRANCHING_FACTOR = 3
MIN_BRANCHING_FACTOR = 3


def make_bplustree_classes(
    bf: int,
) -> tuple[type[BPlusTreeBase], type[LeafNodeBase], type[InternalNodeBase]]:
    """
    Factory function to generate B+-tree and node classes specialized
    for a given branching factor.

    Args:
        bf: The maximum number of children of an internal node (>= 3)

    Returns:
        BPlusTreeBF: Subclass of BPlusTreeBase with LeafClass and InternalClass set
        LeafNodeBF: Subclass of LeafNodeBase with its item bounds set
        InternalNodeBF: Subclass of InternalNodeBase with its item bounds set

    Raises:
        TypeError: If bf is not an int.
        InvalidConfig: If bf is smaller than 3.
    """
    if not isinstance(bf, int) or isinstance(bf, bool):
        raise TypeError(f"make_bplustree_classes(): bf must be an int, got {type(bf).__name__}")
    if bf < MIN_BRANCHING_FACTOR:
        raise InvalidConfig(f"Branching factor must be at least {MIN_BRANCHING_FACTOR}, got {bf}")

    # 1) Leaf nodes rebalance below half of bf rounded up
    LeafNodeBF = type(
        f"LeafNode_BF{bf}",
        (LeafNodeBase,),
        {
            "MAX_ITEMS": bf - 1,
            "MIN_ITEMS": (bf + 1) // 2,
            "__slots__": (),
        },
    )

    # 2) Internal nodes need one separator less than their minimum child count
    InternalNodeBF = type(
        f"InternalNode_BF{bf}",
        (InternalNodeBase,),
        {
            "MAX_ITEMS": bf - 1,
            "MIN_ITEMS": (bf + 1) // 2 - 1,
            "__slots__": (),
        },
    )

    # 3) The tree class ties both node kinds together
    BPlusTreeBF = type(
        f"BPlusTree_BF{bf}",
        (BPlusTreeBase,),
        {
            "BF": bf,
            "LeafClass": LeafNodeBF,
            "InternalClass": InternalNodeBF,
            "__slots__": (),
        },
    )

    return BPlusTreeBF, LeafNodeBF, InternalNodeBF


def create_bplustree(bf: int = DEFAULT_BRANCHING_FACTOR) -> BPlusTreeBase:
    """
    Create a new empty B+-tree with the given branching factor.

    Args:
        bf: The branching factor (defaults to 3)

    Returns:
        A new empty tree
    """
    BPlusTreeBF, _, _ = make_bplustree_classes(bf)
    return BPlusTreeBF()
