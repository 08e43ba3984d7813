"""AVL-G tree implementation"""

from __future__ import annotations
from typing import Any, Callable, List, Optional

from avlg_trees.base import (
    EmptyTreeError,
    InvalidBalanceError,
    Node,
    debug_log,
    node_balance,
)


class AVLGTree:
    """
    A binary search tree with a relaxed AVL balance condition.

    Every node may have a height difference of up to ``g`` between its two
    subtrees, where ``g`` is fixed at construction. An AVL-1 tree is a classic
    AVL tree; larger values of ``g`` trade search depth for fewer rotations.

    Attributes:
        root (Optional[Node]): The root node, or None if the tree is empty.
        rotation_count (int): Number of single rotations applied so far. A
            double rotation counts as two. Not reset by :meth:`clear`.
    """
    __slots__ = ("_g", "_count", "root", "rotation_count")

    def __init__(self, max_imbalance: int):
        """
        Args:
            max_imbalance (int): The maximum imbalance ``g`` allowed at any node.

        Raises:
            TypeError: If max_imbalance is not an int.
            InvalidBalanceError: If max_imbalance is smaller than 1.
        """
        if isinstance(max_imbalance, bool) or not isinstance(max_imbalance, int):
            raise TypeError(
                f"AVLGTree(): max_imbalance must be an int, got {type(max_imbalance).__name__}"
            )
        if max_imbalance < 1:
            raise InvalidBalanceError(
                f"AVLGTree(): max_imbalance must be >= 1, got {max_imbalance}"
            )
        self._g = max_imbalance
        self._count = 0
        self.root: Optional[Node] = None
        self.rotation_count = 0
        debug_log("Created AVL-%d tree", max_imbalance)

    @property
    def max_imbalance(self) -> int:
        """The balance parameter ``g`` supplied at construction."""
        return self._g

    def __len__(self) -> int:
        return self._count

    def __contains__(self, key: Any) -> bool:
        if self.is_empty():
            return False
        return self._find(key) is not None

    def __str__(self):
        if self.is_empty():
            return f"Empty AVLGTree(g={self._g})"
        return f"AVLGTree(g={self._g}, count={self._count}, root={self.root})"

    __repr__ = __str__

    # Public API
    def insert(self, key: Any) -> None:
        """
        Insert ``key`` into the tree. Inserting a key that is already present
        leaves the tree unchanged.

        Rebalancing on the way back up selects the rotation case by comparing
        ``key`` against the child's key.
        """
        if self.root is None:
            self.root = Node(key)
            self._count = 1
            return

        path: List[Node] = []
        cur = self.root
        while cur is not None:
            if key == cur.key:
                return
            path.append(cur)
            cur = cur.left if key < cur.key else cur.right

        parent = path[-1]
        if key < parent.key:
            parent.left = Node(key)
        else:
            parent.right = Node(key)
        self._count += 1

        self._retrace(path, lambda node: self._rebalance_insert(node, key))

    def delete(self, key: Any) -> Any:
        """
        Delete ``key`` from the tree.

        A node with two children takes over the key of its in-order successor,
        whose original node is then removed from the right subtree.

        Returns:
            The removed key, or None if the key was not found.

        Raises:
            EmptyTreeError: If the tree is empty.
        """
        if self.is_empty():
            raise EmptyTreeError("delete(): tree is empty")

        path: List[Node] = []
        target = self.root
        while target is not None and target.key != key:
            path.append(target)
            target = target.left if key < target.key else target.right

        if target is None:
            return None

        removed = target.key
        if target.left is not None and target.right is not None:
            # Remove the successor node instead, after copying its key up
            path.append(target)
            succ = target.right
            while succ.left is not None:
                path.append(succ)
                succ = succ.left
            debug_log("delete(): promoting successor %r into node %r", succ.key, removed)
            target.key = succ.key
            self._replace_child(path[-1], succ, succ.right)
        else:
            child = target.left if target.left is not None else target.right
            self._replace_child(path[-1] if path else None, target, child)
        self._count -= 1

        self._retrace(path, self._rebalance_delete)
        return removed

    def search(self, key: Any) -> Any:
        """
        Search for ``key`` in the tree.

        Returns:
            The stored key if found, otherwise None.

        Raises:
            EmptyTreeError: If the tree is empty.
        """
        if self.is_empty():
            raise EmptyTreeError("search(): tree is empty")
        node = self._find(key)
        return node.key if node is not None else None

    def height(self) -> int:
        """Height of the tree; -1 if the tree is empty."""
        if self.is_empty():
            return -1
        return self.root.height

    def is_empty(self) -> bool:
        return self._count == 0

    def get_root(self) -> Any:
        """
        Returns:
            The key stored at the root node.

        Raises:
            EmptyTreeError: If the tree is empty.
        """
        if self.is_empty():
            raise EmptyTreeError("get_root(): tree is empty")
        return self.root.key

    def get_count(self) -> int:
        return self._count

    def clear(self) -> None:
        """Remove all keys. The node graph is released with the root."""
        self.root = None
        self._count = 0

    def get_max_imbalance(self) -> int:
        """
        The balance factor with the largest absolute value found at any node.

        The result is signed. On ties the node met first in pre-order wins.
        Returns 0 for an empty tree.
        """
        worst = 0
        stack = [self.root] if self.root is not None else []
        while stack:
            node = stack.pop()
            bal = node_balance(node)
            if abs(bal) > abs(worst):
                worst = bal
            if node.right is not None:
                stack.append(node.right)
            if node.left is not None:
                stack.append(node.left)
        return worst

    def is_bst(self) -> bool:
        """Whether every key lies strictly between the bounds set by its ancestors."""
        if self.root is None:
            return True
        stack = [(self.root, None, None)]
        while stack:
            node, low, high = stack.pop()
            if low is not None and not low.key < node.key:
                return False
            if high is not None and not node.key < high.key:
                return False
            if node.left is not None:
                stack.append((node.left, low, node))
            if node.right is not None:
                stack.append((node.right, node, high))
        return True

    def is_avlg_balanced(self) -> bool:
        """Whether ``|balance(node)| <= g`` holds at every node."""
        stack = [self.root] if self.root is not None else []
        while stack:
            node = stack.pop()
            if abs(node_balance(node)) > self._g:
                return False
            if node.left is not None:
                stack.append(node.left)
            if node.right is not None:
                stack.append(node.right)
        return True

    def print_structure(self, indent: int = 0, max_depth: Optional[int] = None) -> str:
        """Indented dump of the tree, one node per line with height and balance."""
        from avlg_trees.display import print_structure
        return print_structure(self, indent=indent, max_depth=max_depth)

    # Private Methods
    def _find(self, key: Any) -> Optional[Node]:
        cur = self.root
        while cur is not None:
            if key == cur.key:
                return cur
            cur = cur.left if key < cur.key else cur.right
        return None

    def _replace_child(self, parent: Optional[Node], old: Node, new: Optional[Node]) -> None:
        if parent is None:
            self.root = new
        elif parent.left is old:
            parent.left = new
        else:
            parent.right = new

    def _retrace(self, path: List[Node], rebalance: Callable[[Node], Node]) -> None:
        """Recompute heights bottom-up along ``path`` and rebalance each level."""
        for i in range(len(path) - 1, -1, -1):
            node = path[i]
            node.update_height()
            subtree = rebalance(node)
            if subtree is not node:
                self._replace_child(path[i - 1] if i > 0 else None, node, subtree)

    def _rotate_left(self, x: Node) -> Node:
        y = x.right
        z = y.left
        x.right = z
        y.left = x
        # x now sits below y
        x.update_height()
        y.update_height()
        self.rotation_count += 1
        debug_log("rotate_left(): %r -> new subtree root %r", x.key, y.key)
        return y

    def _rotate_right(self, x: Node) -> Node:
        y = x.left
        z = y.right
        x.left = z
        y.right = x
        x.update_height()
        y.update_height()
        self.rotation_count += 1
        debug_log("rotate_right(): %r -> new subtree root %r", x.key, y.key)
        return y

    def _rebalance_insert(self, node: Node, key: Any) -> Node:
        """Fix ``node`` after inserting ``key`` below it; cases chosen by key comparison."""
        g = self._g
        balance = node_balance(node)
        # LL
        if balance > g and key < node.left.key:
            return self._rotate_right(node)
        # RR
        if balance < -g and key > node.right.key:
            return self._rotate_left(node)
        # LR
        if balance > g and key > node.left.key:
            node.left = self._rotate_left(node.left)
            return self._rotate_right(node)
        # RL
        if balance < -g and key < node.right.key:
            node.right = self._rotate_right(node.right)
            return self._rotate_left(node)
        return node

    def _rebalance_delete(self, node: Node) -> Node:
        """Fix ``node`` after a removal below it; cases chosen by the child's balance sign."""
        g = self._g
        balance = node_balance(node)
        if balance > g and node_balance(node.left) >= 0:
            return self._rotate_right(node)
        if balance < -g and node_balance(node.right) <= 0:
            return self._rotate_left(node)
        if balance > g and node_balance(node.left) < 0:
            node.left = self._rotate_left(node.left)
            return self._rotate_right(node)
        if balance < -g and node_balance(node.right) > 0:
            node.right = self._rotate_right(node.right)
            return self._rotate_left(node)
        return node
