"""Pretty-printing and display utilities for B+-tree structures."""

from __future__ import annotations

from typing import TYPE_CHECKING, List

if TYPE_CHECKING:
    from bplus_trees.base import BPlusNodeBase
    from bplus_trees.bplus_tree_base import BPlusTreeBase


BRANCH = "├─"
LAST_BRANCH = "└─"
PIPE_INDENT = "│  "
BLANK_INDENT = "   "


def print_pretty(tree: BPlusTreeBase, prefix: str = "") -> str:
    """
    Renders a B+-tree so:
      • The first line holds the root's items.
      • Every child follows its parent depth-first, left→right, hung off
        a ``├─`` connector (``└─`` for the last child of a node).
      • Each level indents by ``│  `` under a non-last child and by
        three spaces under the last one.

    Every line, including the last, ends with a newline.
    """
    lines = [prefix + tree.root.items_str()]
    _collect_children(tree.root, prefix, lines)
    return "\n".join(lines) + "\n"


def _collect_children(node: BPlusNodeBase, prefix: str, lines: List[str]) -> None:
    if node.is_leaf():
        return
    last = len(node.children) - 1
    for i, child in enumerate(node.children):
        is_last = i == last
        lines.append(prefix + (LAST_BRANCH if is_last else BRANCH) + child.items_str())
        _collect_children(child, prefix + (BLANK_INDENT if is_last else PIPE_INDENT), lines)


def collect_leaf_keys(tree: BPlusTreeBase) -> list:
    """Collect all keys by walking the leaf chain."""
    out = []
    for leaf in tree.iter_leaf_nodes():
        out.extend(leaf.items)
    return out


def print_structure(
    tree: BPlusTreeBase,
    indent: int = 0,
    max_depth: int = 8,
) -> str:
    """Return a debugging-oriented structural dump of a B+-tree.

    Prints each node's class and items; leaves also show the first key
    of the leaves their ``prev`` and ``next`` links point at.
    """
    result = [f"{' ' * indent}{type(tree).__name__}(bf={tree.BF}, height={tree.height()})"]

    def dump(node: BPlusNodeBase, depth: int) -> None:
        pad = ' ' * (indent + 4 * (depth + 1))
        if depth > max_depth:
            result.append(f"{pad}... (max depth reached)")
            return
        if node.is_leaf():
            prev_key = node.prev.first_key() if node.prev is not None else None
            next_key = node.next.first_key() if node.next is not None else None
            result.append(
                f"{pad}{type(node).__name__}{node.items_str()} "
                f"prev={prev_key!r} next={next_key!r}"
            )
            return
        result.append(f"{pad}{type(node).__name__}{node.items_str()}")
        for child in node.children:
            dump(child, depth + 1)

    dump(tree.root, 0)
    return "\n".join(result)
