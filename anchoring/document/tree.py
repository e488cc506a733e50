"""Plain in-memory ordered tree implementing DocumentModel.

Suitable for hosts that are not markup at all (a PDF layout tree, an AST,
a word-processor model): build ``Node`` objects and wrap the root in a
``TreeDocument``.

Example:
    root = element("body", element("p", text("The cat sat on the mat.")))
    document = TreeDocument(root)
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import NamedTuple

from anchoring.document.paths import descend, indexed_path
from anchoring.selectors import TEXT_KIND, PathStep


class Node:
    """A branch node (``kind`` plus children) or a text leaf.

    Nodes compare and hash by identity, so a node is the same leaf handle for
    as long as it lives, even when its text changes.
    """

    def __init__(self, kind: str, text: str | None = None) -> None:
        self.kind = kind
        self.text = text
        self.parent: Node | None = None
        self.children: list[Node] = []

    @property
    def is_leaf(self) -> bool:
        return self.kind == TEXT_KIND

    def append(self, *children: Node) -> Node:
        """Append children and return self (for chaining)."""
        for child in children:
            self.insert(len(self.children), child)
        return self

    def insert(self, index: int, child: Node) -> Node:
        """Insert a child at ``index`` and return it."""
        if self.is_leaf:
            raise ValueError("text leaves cannot have children")
        if child.parent is not None:
            child.parent.remove(child)
        child.parent = self
        self.children.insert(index, child)
        return child

    def remove(self, child: Node) -> None:
        self.children.remove(child)
        child.parent = None

    def iter_leaves(self) -> Iterator[Node]:
        """Yield the leaves of this subtree in document order."""
        stack = [self]
        while stack:
            node = stack.pop()
            if node.is_leaf:
                yield node
            else:
                stack.extend(reversed(node.children))

    def __repr__(self) -> str:
        if self.is_leaf:
            return f"Node(text={self.text!r})"
        return f"Node({self.kind!r}, children={len(self.children)})"


def element(kind: str, *children: Node) -> Node:
    """Create a branch node with children."""
    return Node(kind).append(*children)


def text(value: str) -> Node:
    """Create a text leaf."""
    return Node(TEXT_KIND, value)


class TreePosition(NamedTuple):
    """Host position handle returned by ``TreeDocument.make_span``."""

    leaf: Node
    offset: int


class TreeDocument:
    """DocumentModel over a tree of ``Node`` objects."""

    def __init__(self, root: Node) -> None:
        self._root = root

    @property
    def root(self) -> Node:
        return self._root

    def leaves_in_order(self) -> list[Node]:
        return list(self._root.iter_leaves())

    def text_of(self, leaf: Node) -> str:
        return leaf.text or ""

    def parent_of(self, node: Node) -> Node | None:
        if node is self._root:
            return None
        return node.parent

    def leaves_under(self, node: Node) -> list[Node]:
        return list(node.iter_leaves())

    def structural_path_of(self, node: Node) -> tuple[PathStep, ...]:
        return indexed_path(
            node,
            self._root,
            self.parent_of,
            _children_of,
            _kind_of,
        )

    def resolve_path(self, path: tuple[PathStep, ...]) -> Node | None:
        return descend(self._root, path, _children_of, _kind_of)

    def make_span(self, leaf: Node, offset: int) -> TreePosition:
        return TreePosition(leaf, offset)


def _children_of(node: Node) -> list[Node]:
    return node.children


def _kind_of(node: Node) -> str:
    return node.kind
