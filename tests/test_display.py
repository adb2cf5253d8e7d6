"""Tests for text rendering and structure dumps"""

import unittest

from bplus_trees.display import collect_leaf_keys, print_pretty, print_structure
from tests.test_base import BaseTreeTestCase


class TestPrintPretty(BaseTreeTestCase):

    def test_empty_tree(self):
        self.assertEqual(self.tree.render(), "[]\n")

    def test_single_leaf(self):
        self.add_all([2, 1])
        self.assertEqual(self.tree.render(), "[1, 2]\n")

    def test_three_levels(self):
        self.add_all([1, 2, 3, 4, 5])
        expected = (
            "[3]\n"
            "├─[2]\n"
            "│  ├─[1]\n"
            "│  └─[2]\n"
            "└─[4]\n"
            "   ├─[3]\n"
            "   └─[4, 5]\n"
        )
        self.assertEqual(self.tree.render(), expected)
        self.assertEqual(print_pretty(self.tree), expected)

    def test_prefix_on_every_line(self):
        self.add_all([1, 2, 3])
        self.assertEqual(
            self.tree.render("> "),
            "> [2]\n> ├─[1]\n> └─[2, 3]\n",
        )

    def test_render_is_deterministic(self):
        self.add_all([9, 4, 7, 1, 8])
        self.assertEqual(self.tree.render(), self.tree.render())


class TestPrintStructure(BaseTreeTestCase):

    def test_structure_shows_leaf_links(self):
        self.add_all([1, 2, 3])
        dump = print_structure(self.tree)
        lines = dump.splitlines()
        self.assertIn("bf=3", lines[0])
        self.assertIn("height=2", lines[0])
        self.assertIn("InternalNode_BF3[2]", lines[1])
        self.assertIn("LeafNode_BF3[1] prev=None next=2", lines[2])
        self.assertIn("LeafNode_BF3[2, 3] prev=1 next=None", lines[3])
        self.assertEqual(self.tree.print_structure(), dump)

    def test_collect_leaf_keys(self):
        self.add_all([5, 3, 9, 1])
        self.assertEqual(collect_leaf_keys(self.tree), [1, 3, 5, 9])


if __name__ == "__main__":
    unittest.main()
