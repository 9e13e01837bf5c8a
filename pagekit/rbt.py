"""Red-black tree keyed by unsigned integer values.

Nodes are created by the caller and linked into the tree in place, so a
node object can carry an arbitrary ``content`` payload and be located
again later by identity.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, Optional


class Color(Enum):
    RED = "red"
    BLACK = "black"


class NodeProperty(Enum):
    """Where a node sits relative to its parent."""

    ROOT = "root"
    LEFT_CHILD = "left"
    RIGHT_CHILD = "right"
    CORRUPTED = "corrupted"
    ERROR = "error"


class TreeError(Exception):
    """Raised when a tree operation cannot be carried out."""


@dataclass(eq=False)
class RBNode:
    value: int
    content: Any = None
    color: Color = Color.RED
    parent: Optional["RBNode"] = field(default=None, repr=False)
    left: Optional["RBNode"] = field(default=None, repr=False)
    right: Optional["RBNode"] = field(default=None, repr=False)


def node_color(node: Optional[RBNode]) -> Color:
    """Colour of a node; absent nodes count as black."""
    if node is None or node.color is Color.BLACK:
        return Color.BLACK
    return Color.RED


def _swap_colors(a: RBNode, b: RBNode) -> None:
    a.color, b.color = b.color, a.color


_BLUE = "\x1b[34m"
_RED = "\x1b[31m"
_RESET = "\x1b[0m"

_BROKEN = (NodeProperty.ERROR, NodeProperty.CORRUPTED)


class RedBlackTree:
    """A red-black tree with unique integer keys."""

    def __init__(self) -> None:
        self.root: Optional[RBNode] = None

    def __iter__(self) -> Iterator[RBNode]:
        stack: list[RBNode] = []
        node = self.root
        while stack or node is not None:
            while node is not None:
                stack.append(node)
                node = node.left
            node = stack.pop()
            yield node
            node = node.right

    # -- structure queries -------------------------------------------------

    def node_property(self, target: Optional[RBNode]) -> NodeProperty:
        if self.root is None or target is None:
            return NodeProperty.ERROR
        if target is self.root:
            return NodeProperty.ROOT if target.parent is None else NodeProperty.CORRUPTED
        parent = target.parent
        if parent is None:
            return NodeProperty.CORRUPTED
        if parent.left is target:
            return NodeProperty.LEFT_CHILD
        if parent.right is target:
            return NodeProperty.RIGHT_CHILD
        return NodeProperty.CORRUPTED

    def _checked_property(self, target: Optional[RBNode]) -> NodeProperty:
        prop = self.node_property(target)
        if prop in _BROKEN:
            raise TreeError(f"node is not part of the tree ({prop.value})")
        return prop

    def uncle(self, target: RBNode) -> Optional[RBNode]:
        prop = self.node_property(target)
        if prop in _BROKEN or prop is NodeProperty.ROOT:
            return None
        parent_prop = self.node_property(target.parent)
        if parent_prop is NodeProperty.LEFT_CHILD:
            return target.parent.parent.right
        if parent_prop is NodeProperty.RIGHT_CHILD:
            return target.parent.parent.left
        return None

    def sibling(self, target: RBNode) -> Optional[RBNode]:
        prop = self.node_property(target)
        if prop is NodeProperty.LEFT_CHILD:
            return target.parent.right
        if prop is NodeProperty.RIGHT_CHILD:
            return target.parent.left
        return None

    # -- searching -----------------------------------------------------------

    def find(self, value: int, exact: bool, upper: bool) -> Optional[RBNode]:
        """Find the node holding ``value`` or its nearest neighbour.

        With ``upper`` the smallest node not below ``value`` is looked for,
        otherwise the largest node not above it.  With ``exact`` only a node
        holding ``value`` itself is returned.
        """
        if self.root is None:
            return None
        if upper:
            result = self.find_upper_nearest(self.root, value)
        else:
            result = self.find_lower_nearest(self.root, value)
        if exact and (result is None or result.value != value):
            return None
        return result

    def find_upper_nearest(self, current: RBNode, value: int) -> Optional[RBNode]:
        if self.node_property(current) in _BROKEN:
            return None
        node = current
        while True:
            if node.value == value:
                return node
            if node.value > value:
                if node.left is None:
                    return node
                node = node.left
            else:
                if node.right is None:
                    while node.parent is not None and node is node.parent.right:
                        node = node.parent
                    return node.parent
                node = node.right

    def find_lower_nearest(self, current: RBNode, value: int) -> Optional[RBNode]:
        if self.node_property(current) in _BROKEN:
            return None
        node = current
        while True:
            if node.value == value:
                return node
            if node.value < value:
                if node.right is None:
                    return node
                node = node.right
            else:
                if node.left is None:
                    while node.parent is not None and node is node.parent.left:
                        node = node.parent
                    return node.parent
                node = node.left

    # -- rotations and swaps -------------------------------------------------

    def _replace_in_parent(self, old: RBNode, new: RBNode, prop: NodeProperty) -> None:
        if prop is NodeProperty.ROOT:
            self.root = new
            new.parent = None
        elif prop is NodeProperty.LEFT_CHILD:
            old.parent.left = new
            new.parent = old.parent
        else:
            old.parent.right = new
            new.parent = old.parent

    def rotate_left(self, target: RBNode) -> None:
        prop = self._checked_property(target)
        pivot = target.right
        if pivot is None:
            raise TreeError("cannot rotate left without a right child")
        self._replace_in_parent(target, pivot, prop)
        target.parent = pivot
        target.right = pivot.left
        if target.right is not None:
            target.right.parent = target
        pivot.left = target

    def rotate_right(self, target: RBNode) -> None:
        prop = self._checked_property(target)
        pivot = target.left
        if pivot is None:
            raise TreeError("cannot rotate right without a left child")
        self._replace_in_parent(target, pivot, prop)
        target.parent = pivot
        target.left = pivot.right
        if target.left is not None:
            target.left.parent = target
        pivot.right = target

    def swap_nodes(self, a: RBNode, b: RBNode) -> None:
        """Exchange the positions of two nodes, keeping their colours."""
        a_prop = self._checked_property(a)
        b_prop = self._checked_property(b)
        if a_prop is NodeProperty.ROOT and b_prop is NodeProperty.ROOT:
            raise TreeError("cannot swap the root with itself")

        def resolve(node: Optional[RBNode]) -> Optional[RBNode]:
            if node is a:
                return b
            if node is b:
                return a
            return node

        a_links = (a.parent, a.left, a.right)
        b_links = (b.parent, b.left, b.right)
        a.parent, a.left, a.right = (resolve(n) for n in b_links)
        b.parent, b.left, b.right = (resolve(n) for n in a_links)

        for node, prop in ((a, b_prop), (b, a_prop)):
            if prop is NodeProperty.ROOT:
                self.root = node
            elif prop is NodeProperty.LEFT_CHILD:
                node.parent.left = node
            else:
                node.parent.right = node
        for node in (a, b):
            for child in (node.left, node.right):
                if child is not None:
                    child.parent = node

    # -- insertion -----------------------------------------------------------

    def insert(self, node: RBNode) -> None:
        if node.left is not None or node.right is not None:
            raise TreeError("a node to insert must have no children")
        if self.root is None:
            self.root = node
            node.parent = None
            node.color = Color.BLACK
            return
        if self.node_property(self.root) is not NodeProperty.ROOT:
            raise TreeError("tree root is corrupted")

        upper = self.find_upper_nearest(self.root, node.value)
        if upper is None:
            attach = self.root
            while attach.right is not None:
                attach = attach.right
            attach.right = node
        elif upper.value == node.value:
            raise TreeError(f"value {node.value} is already in the tree")
        elif upper.left is None:
            attach = upper
            attach.left = node
        else:
            attach = upper.left
            while attach.right is not None:
                attach = attach.right
            attach.right = node
        node.parent = attach
        self._insert_balance(node)

    def _insert_balance(self, node: RBNode) -> None:
        node.color = Color.RED
        while True:
            prop = self._checked_property(node)
            if prop is NodeProperty.ROOT:
                node.color = Color.BLACK
                return
            parent = node.parent
            if parent.color is Color.BLACK:
                return
            parent_prop = self._checked_property(parent)
            if parent_prop is NodeProperty.ROOT:
                parent.color = Color.BLACK
                return
            uncle = self.uncle(node)
            grand = parent.parent
            if node_color(uncle) is Color.RED:
                parent.color = Color.BLACK
                uncle.color = Color.BLACK
                grand.color = Color.RED
                node = grand
                continue
            if parent_prop is NodeProperty.LEFT_CHILD:
                if prop is NodeProperty.LEFT_CHILD:
                    _swap_colors(parent, grand)
                else:
                    self.rotate_left(parent)
                    _swap_colors(node, grand)
                self.rotate_right(grand)
            else:
                if prop is NodeProperty.RIGHT_CHILD:
                    _swap_colors(parent, grand)
                else:
                    self.rotate_right(parent)
                    _swap_colors(node, grand)
                self.rotate_left(grand)
            return

    # -- removal -------------------------------------------------------------

    def remove(self, target: RBNode) -> None:
        self._checked_property(target)
        if target.left is not None and target.right is not None:
            successor = target.right
            while successor.left is not None:
                successor = successor.left
            _swap_colors(target, successor)
            self.swap_nodes(target, successor)

        self._remove_balance(target)

        prop = self._checked_property(target)
        child = target.left if target.left is not None else target.right
        if prop is NodeProperty.ROOT:
            self.root = child
        elif prop is NodeProperty.LEFT_CHILD:
            target.parent.left = child
        else:
            target.parent.right = child
        if child is not None:
            child.parent = target.parent
        target.parent = target.left = target.right = None

    def _remove_balance(self, target: RBNode) -> None:
        if target.color is Color.RED:
            return
        child = target.left if target.left is not None else target.right
        if child is not None:
            child.color = Color.BLACK
            return
        if self.node_property(target) is NodeProperty.ROOT:
            return
        self._fix_double_black(target)

    def _fix_double_black(self, node: RBNode) -> None:
        while self.node_property(node) is not NodeProperty.ROOT:
            sibling = self.sibling(node)
            if sibling is None:
                raise TreeError("tree is corrupted: missing sibling")
            parent = node.parent
            sibling_prop = self.node_property(sibling)

            if sibling.color is Color.RED:
                _swap_colors(sibling, parent)
                if sibling_prop is NodeProperty.RIGHT_CHILD:
                    self.rotate_left(parent)
                else:
                    self.rotate_right(parent)
                continue

            left_red = node_color(sibling.left) is Color.RED
            right_red = node_color(sibling.right) is Color.RED
            if left_red or right_red:
                if sibling_prop is NodeProperty.LEFT_CHILD:
                    if left_red:
                        _swap_colors(sibling, parent)
                        sibling.left.color = Color.BLACK
                        self.rotate_right(parent)
                        return
                    _swap_colors(sibling, sibling.right)
                    self.rotate_left(sibling)
                else:
                    if right_red:
                        _swap_colors(sibling, parent)
                        sibling.right.color = Color.BLACK
                        self.rotate_left(parent)
                        return
                    _swap_colors(sibling, sibling.left)
                    self.rotate_right(sibling)
                continue

            sibling.color = Color.RED
            if parent.color is Color.RED:
                parent.color = Color.BLACK
                return
            node = parent

    # -- display -------------------------------------------------------------

    def format_tree(self) -> str:
        """Render the tree sideways, right subtrees first, with ANSI colours."""
        if self.root is None:
            return ""
        parts: list[str] = []
        self._format(self.root, 0, parts)
        return "".join(parts)

    def _format(self, node: RBNode, level: int, parts: list[str]) -> None:
        colour = _BLUE if node.color is Color.BLACK else _RED
        parts.append(f"{colour}{node.value:3d}{_RESET} | ")
        if node.right is not None:
            self._format(node.right, level + 1, parts)
        else:
            parts.append("--- | ")
        parts.append("\n")
        parts.append("    | " * (level + 1))
        if node.left is not None:
            self._format(node.left, level + 1, parts)
        else:
            parts.append("--- | ")