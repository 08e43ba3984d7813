"""Shared primitives: nodes, errors and O(1) height/balance helpers."""

from typing import Any, Optional
import logging

from avlg_trees.logging_config import get_logger

logger = get_logger("AVLGTree")


class AVLGTreeError(Exception):
    """Base class for errors raised by AVL-G tree operations."""


class InvalidBalanceError(AVLGTreeError, ValueError):
    """Raised when a tree is constructed with a balance parameter smaller than 1."""


class EmptyTreeError(AVLGTreeError):
    """Raised by ``delete``, ``search`` and ``get_root`` on a tree without keys."""


class Node:
    """
    A single AVL-G tree node.

    Attributes:
        key: The stored key. May be overwritten in place when a two-child
            node takes over its in-order successor's key during deletion.
        height (int): Cached height of the subtree rooted here; 0 for a leaf.
        left (Optional[Node]): Owned left child.
        right (Optional[Node]): Owned right child.
    """
    __slots__ = ("key", "height", "left", "right")

    def __init__(self, key: Any):
        self.key = key
        self.height = 0
        self.left: Optional[Node] = None
        self.right: Optional[Node] = None

    def update_height(self) -> None:
        self.height = max(node_height(self.left), node_height(self.right)) + 1

    def short_key(self) -> str:
        """Create a short representation of the key for display purposes."""
        if isinstance(self.key, (bytes, bytearray)):
            s = self.key.hex()
        else:
            s = str(self.key)
        return s if len(s) <= 10 else f"{s[:3]}...{s[-3:]}"

    def __repr__(self) -> str:
        cls = self.__class__.__name__
        return f"{cls}(key={self.key!r}, height={self.height})"

    def __str__(self):
        cls = self.__class__.__name__
        return f"{cls}(key={self.short_key()}, height={self.height})"


def node_height(node: Optional[Node]) -> int:
    """Cached height of ``node``; -1 for an absent node."""
    if node is None:
        return -1
    return node.height


def node_balance(node: Optional[Node]) -> int:
    """Balance factor ``height(left) - height(right)``; 0 for an absent node."""
    if node is None:
        return 0
    return node_height(node.left) - node_height(node.right)


def debug_log(message, *args, **kwargs):
    """Log a debug message only if debug logging is enabled"""
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(message, *args, **kwargs)
