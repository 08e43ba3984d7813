"""Shared invariant-checking utilities.

This module provides tree invariant validation that can be used by both
the stats scripts and the test suite.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from avlg_trees.logging_config import get_logger

logger = get_logger(__name__)

if TYPE_CHECKING:
    from avlg_trees.avlg_tree import AVLGTree
    from avlg_trees.tree_stats import Stats

TREE_FLAGS = (
    "is_search_tree",
    "is_avlg_balanced",
    "heights_consistent",
    "count_consistent",
)


class InvariantError(Exception):
    """Raised when an AVL-G tree invariant is violated."""


def assert_tree_invariants_raise(
    t: AVLGTree,
    stats: Stats,
) -> None:
    """Check all invariants, raising :class:`InvariantError` on the first failure."""
    for flag in TREE_FLAGS:
        if not getattr(stats, flag):
            logger.error("Invariant failed: %s is False for %s", flag, t)
            raise InvariantError(f"Invariant failed: {flag} is False")

    if not t.is_empty():
        if stats.node_count <= 0:
            raise InvariantError(f"Invariant failed: node_count={stats.node_count} ≤ 0 for non-empty tree")
        if stats.height < 0:
            raise InvariantError(f"Invariant failed: height={stats.height} < 0 for non-empty tree")
        if stats.least_key is None:
            raise InvariantError("Invariant failed: least_key is None for non-empty tree")
        if stats.greatest_key is None:
            raise InvariantError("Invariant failed: greatest_key is None for non-empty tree")
        if abs(stats.max_imbalance) > t.max_imbalance:
            raise InvariantError(
                f"Invariant failed: |max_imbalance|={abs(stats.max_imbalance)} > g={t.max_imbalance}"
            )
        if stats.height != t.height():
            raise InvariantError(
                f"Invariant failed: t.height()={t.height()} ≠ stats.height={stats.height}"
            )


def check_keys_in_order(
    tree: AVLGTree,
    expected_keys: list[Any] | None = None,
) -> tuple[list[Any], bool, bool]:
    """Walk the tree in order and validate its keys.

    Returns
    -------
    (keys, presence_ok, order_ok)
    """
    keys: list[Any] = []
    order_ok = True

    stack = []
    node = tree.root
    while stack or node is not None:
        while node is not None:
            stack.append(node)
            node = node.left
        node = stack.pop()
        if keys and not keys[-1] < node.key:
            order_ok = False
        keys.append(node.key)
        node = node.right

    presence_ok = True
    if expected_keys is not None:
        if len(keys) != len(expected_keys):
            presence_ok = False
        else:
            presence_ok = set(keys) == set(expected_keys)

    return keys, presence_ok, order_ok
