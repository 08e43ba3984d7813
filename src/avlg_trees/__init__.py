"""
avlg_trees — Binary search trees with a relaxed AVL balance condition.

Quick-start imports::

    from avlg_trees import AVLGTree

    tree = AVLGTree(2)
    for key in (10, 20, 30):
        tree.insert(key)
"""

# Shared primitives
from avlg_trees.base import (
    AVLGTreeError,
    EmptyTreeError,
    InvalidBalanceError,
    Node,
    node_balance,
    node_height,
)

# AVL-G tree
from avlg_trees.avlg_tree import AVLGTree

# Stats, invariants & display
from avlg_trees.display import print_pretty, print_structure
from avlg_trees.invariants import (
    InvariantError,
    assert_tree_invariants_raise,
    check_keys_in_order,
)
from avlg_trees.tree_stats import Stats, avlg_stats_

__all__ = [
    # Errors
    "AVLGTreeError",
    # AVL-G tree
    "AVLGTree",
    "EmptyTreeError",
    "InvalidBalanceError",
    "InvariantError",
    # Primitives
    "Node",
    # Stats & invariants
    "Stats",
    "assert_tree_invariants_raise",
    "avlg_stats_",
    "check_keys_in_order",
    "node_balance",
    "node_height",
    "print_pretty",
    "print_structure",
]
