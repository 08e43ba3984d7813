"""Statistics and invariant checking for AVL-G tree structures."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple

from avlg_trees.base import Node
from avlg_trees.logging_config import get_logger

if TYPE_CHECKING:
    from avlg_trees.avlg_tree import AVLGTree

logger = get_logger(__name__)


@dataclass
class Stats:
    """Aggregated statistics for an AVL-G tree."""

    node_count: int
    leaf_count: int
    height: int
    max_imbalance: int
    least_key: Any | None
    greatest_key: Any | None
    is_search_tree: bool
    is_avlg_balanced: bool
    heights_consistent: bool
    count_consistent: bool


@dataclass
class _Partial:
    """Per-subtree values carried up the post-order walk."""

    node_count: int
    leaf_count: int
    height: int
    max_imbalance: int
    least_key: Any
    greatest_key: Any
    is_search_tree: bool
    is_avlg_balanced: bool
    heights_consistent: bool


def _combine(
    node: Node,
    left: Optional[_Partial],
    right: Optional[_Partial],
    g: int,
) -> _Partial:
    left_h = left.height if left is not None else -1
    right_h = right.height if right is not None else -1
    height = max(left_h, right_h) + 1
    balance = left_h - right_h

    # pre-order tie rule: node, then left subtree, then right subtree
    worst = balance
    for child in (left, right):
        if child is not None and abs(child.max_imbalance) > abs(worst):
            worst = child.max_imbalance

    is_search_tree = True
    is_balanced = abs(balance) <= g
    heights_ok = node.height == height
    node_count = 1
    leaf_count = 1 if left is None and right is None else 0
    least = greatest = node.key

    if left is not None:
        is_search_tree = left.is_search_tree and left.greatest_key < node.key
        is_balanced = is_balanced and left.is_avlg_balanced
        heights_ok = heights_ok and left.heights_consistent
        node_count += left.node_count
        leaf_count += left.leaf_count
        least = left.least_key
    if right is not None:
        is_search_tree = is_search_tree and right.is_search_tree and node.key < right.least_key
        is_balanced = is_balanced and right.is_avlg_balanced
        heights_ok = heights_ok and right.heights_consistent
        node_count += right.node_count
        leaf_count += right.leaf_count
        greatest = right.greatest_key

    return _Partial(
        node_count=node_count,
        leaf_count=leaf_count,
        height=height,
        max_imbalance=worst,
        least_key=least,
        greatest_key=greatest,
        is_search_tree=is_search_tree,
        is_avlg_balanced=is_balanced,
        heights_consistent=heights_ok,
    )


def avlg_stats_(t: Optional[AVLGTree]) -> Stats:
    """
    Returns aggregated statistics for an AVL-G tree in **O(n)** time.

    Heights and balance factors are recomputed from the structure rather than
    read from the cached node heights, so ``heights_consistent`` and
    ``is_avlg_balanced`` hold independently of the cache.
    """
    if t is None or t.root is None:
        return Stats(
            node_count=0,
            leaf_count=0,
            height=-1,
            max_imbalance=0,
            least_key=None,
            greatest_key=None,
            is_search_tree=True,
            is_avlg_balanced=True,
            heights_consistent=True,
            count_consistent=(t is None or t.get_count() == 0),
        )

    g = t.max_imbalance
    done: Dict[int, _Partial] = {}
    stack: List[Tuple[Node, bool]] = [(t.root, False)]
    while stack:
        node, expanded = stack.pop()
        if not expanded:
            stack.append((node, True))
            if node.right is not None:
                stack.append((node.right, False))
            if node.left is not None:
                stack.append((node.left, False))
            continue
        left = done.pop(id(node.left), None) if node.left is not None else None
        right = done.pop(id(node.right), None) if node.right is not None else None
        done[id(node)] = _combine(node, left, right, g)

    root = done[id(t.root)]
    stats = Stats(
        node_count=root.node_count,
        leaf_count=root.leaf_count,
        height=root.height,
        max_imbalance=root.max_imbalance,
        least_key=root.least_key,
        greatest_key=root.greatest_key,
        is_search_tree=root.is_search_tree,
        is_avlg_balanced=root.is_avlg_balanced,
        heights_consistent=root.heights_consistent,
        count_consistent=root.node_count == t.get_count(),
    )
    logger.debug("avlg_stats_(): %s", stats)
    return stats
