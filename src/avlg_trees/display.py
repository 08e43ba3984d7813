"""Pretty-printing and display utilities for AVL-G tree structures."""

from __future__ import annotations

import collections
from typing import TYPE_CHECKING, Optional

from avlg_trees.base import node_balance

if TYPE_CHECKING:
    from avlg_trees.avlg_tree import AVLGTree


# ANSI colour codes
PRIMARY = '\033[32m'    # green
SECONDARY = '\033[33m'  # yellow
RESET = '\033[0m'


def print_pretty(tree: Optional[AVLGTree], color: bool = True) -> str:
    """
    Renders an AVL-G tree so:
      • Lines go from the root (depth 0) down to the deepest level.
      • Every node sits in the column of its in-order position, so a
        parent is always horizontally between its two subtrees.
      • All columns have the same width.
    Nodes whose balance factor has reached ``±g`` are highlighted.
    """
    from avlg_trees.avlg_tree import AVLGTree

    if tree is None:
        return f"{type(tree).__name__}: None"

    if not isinstance(tree, AVLGTree):
        raise TypeError(f"print_pretty() expects AVLGTree, got {type(tree).__name__}")

    tree_type = type(tree).__name__
    if tree.is_empty():
        return f"{tree_type}: Empty"

    g = tree.max_imbalance

    # 1) In-order pass: column index, depth and text of every node
    layers_raw = collections.defaultdict(list)  # depth -> [(column, text, tight)]
    max_len = 0
    column = 0
    stack = []
    node, depth = tree.root, 0
    while stack or node is not None:
        while node is not None:
            stack.append((node, depth))
            node, depth = node.left, depth + 1
        node, depth = stack.pop()
        text = node.short_key()
        max_len = max(max_len, len(text))
        layers_raw[depth].append((column, text, abs(node_balance(node)) == g))
        column += 1
        node, depth = node.right, depth + 1

    # 2) Fixed column width: widest text + 1 space padding
    column_width = max_len + 1

    # 3) Place texts at their columns
    out_lines = []
    for depth in sorted(layers_raw):
        line = ""
        cursor = 0
        for col, text, tight in layers_raw[depth]:
            line += " " * ((col - cursor) * column_width)
            cell = text.center(column_width)
            if color:
                colour = SECONDARY if tight else PRIMARY
                cell = cell.replace(text, f"{colour}{text}{RESET}", 1)
            line += cell
            cursor = col + 1
        label = f"Depth {depth}:".ljust(10)
        out_lines.append(f"{label}{line.rstrip()}")

    return f"{tree_type}(g={g}, count={tree.get_count()})\n" + "\n".join(out_lines) + "\n"


def print_structure(
    tree: Optional[AVLGTree],
    indent: int = 0,
    max_depth: Optional[int] = None,
) -> str:
    """Return a debugging-oriented structural dump of an AVL-G tree.

    One line per node with its cached height and balance factor; absent
    children of inner nodes are shown as ``Empty``.
    """
    prefix = ' ' * indent
    if tree is None or tree.root is None:
        return f"{prefix}Empty {tree.__class__.__name__}"

    result = []
    stack = [(tree.root, 0, "Root")]
    while stack:
        node, depth, label = stack.pop()
        pad = prefix + ' ' * (4 * depth)
        if node is None:
            result.append(f"{pad}{label}: Empty")
            continue
        if max_depth is not None and depth > max_depth:
            result.append(f"{pad}{label}: ... (max depth reached)")
            continue
        result.append(
            f"{pad}{label}: {node.__class__.__name__}(key={node.short_key()}, "
            f"height={node.height}, balance={node_balance(node)})"
        )
        # Leaves get no child lines
        if node.left is None and node.right is None:
            continue
        stack.append((node.right, depth + 1, "Right"))
        stack.append((node.left, depth + 1, "Left"))
    return "\n".join(result)
