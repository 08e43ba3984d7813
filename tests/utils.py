"""Utility functions for testing AVL-G tree invariants."""

from typing import Optional

from avlg_trees.avlg_tree import AVLGTree
from avlg_trees.base import Node
from avlg_trees.invariants import TREE_FLAGS
from avlg_trees.tree_stats import Stats


def assert_tree_invariants_tc(tc, t: AVLGTree, stats: Stats, err_msg: Optional[str] = "") -> None:
    """TestCase version: use inside unittest.TestCase methods."""
    for flag in TREE_FLAGS:
        tc.assertTrue(
            getattr(stats, flag),
            f"Invariant failed: {flag} is False \n\n{err_msg}"
        )

    tc.assertEqual(
        stats.node_count, t.get_count(),
        f"Invariant failed: node_count={stats.node_count} ≠ get_count()={t.get_count()}\n\n{err_msg}"
    )
    tc.assertEqual(
        stats.height, t.height(),
        f"Invariant failed: recomputed height={stats.height} ≠ height()={t.height()}\n\n{err_msg}"
    )

    if not t.is_empty():
        tc.assertGreater(
            stats.node_count, 0,
            f"Invariant failed: node_count={stats.node_count} ≤ 0 for non-empty tree\n\n{err_msg}"
        )
        tc.assertIsNotNone(
            stats.least_key,
            f"Invariant failed: least_key is None for non-empty tree\n\n{err_msg}"
        )
        tc.assertIsNotNone(
            stats.greatest_key,
            f"Invariant failed: greatest_key is None for non-empty tree\n\n{err_msg}"
        )
        tc.assertLessEqual(
            abs(stats.max_imbalance), t.max_imbalance,
            f"Invariant failed: |max_imbalance|={abs(stats.max_imbalance)} > g={t.max_imbalance}\n\n{err_msg}"
        )
        tc.assertEqual(
            stats.max_imbalance, t.get_max_imbalance(),
            f"Invariant failed: stats.max_imbalance={stats.max_imbalance} ≠ "
            f"get_max_imbalance()={t.get_max_imbalance()}\n\n{err_msg}"
        )


def make_node(key, left: Optional[Node] = None, right: Optional[Node] = None) -> Node:
    """Build a node by hand with a correct cached height."""
    node = Node(key)
    node.left = left
    node.right = right
    node.update_height()
    return node


def tree_from_root(g: int, root: Optional[Node]) -> AVLGTree:
    """Wrap a hand-built node graph in a tree, fixing up its count."""
    tree = AVLGTree(g)
    tree.root = root
    count = 0
    stack = [root] if root is not None else []
    while stack:
        node = stack.pop()
        count += 1
        stack.extend(c for c in (node.left, node.right) if c is not None)
    tree._count = count
    return tree


def shape(node: Optional[Node]):
    """Nested ``(key, left, right)`` tuples describing the shape under ``node``."""
    if node is None:
        return None
    return (node.key, shape(node.left), shape(node.right))
