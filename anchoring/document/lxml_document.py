"""DocumentModel over an lxml element tree (HTML or XML hosts).

lxml stores text as ``element.text`` (before the first child) and
``child.tail`` (after a child). Each non-empty string becomes a text leaf,
which gives the same leaf sequence as a DOM tree's text nodes:

    <p>The <b>cat</b> sat.</p>  ->  "The " | "cat" | " sat."

Text leaves are indexed among sibling text leaves (``text()[n]``), elements
among same-tag siblings. Text inside skipped tags (head, script, style, ...) is not
part of the document; comments and processing instructions contribute only
their tail text.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterator
from dataclasses import dataclass
from typing import NamedTuple

import lxml.html
from lxml import etree

from anchoring.config import DEFAULT_SKIP_TAGS
from anchoring.document.paths import descend, indexed_path
from anchoring.selectors import TEXT_KIND, PathStep


def get_tag_name(elem: etree._Element) -> str:
    """Get tag name without namespace prefix.

    Args:
        elem: XML element

    Returns:
        Tag name without namespace (e.g., "p" not "{ns}p"), "" for comments
    """
    tag = elem.tag
    if isinstance(tag, str) and "}" in tag:
        return tag.split("}")[-1]
    return tag if isinstance(tag, str) else ""


@dataclass(frozen=True)
class TextLeaf:
    """A text string of the tree: ``owner.text`` or ``owner.tail``."""

    owner: etree._Element
    is_tail: bool = False

    @property
    def text(self) -> str:
        value = self.owner.tail if self.is_tail else self.owner.text
        return value or ""


class TextPosition(NamedTuple):
    """Host position handle returned by ``LxmlDocument.make_span``."""

    leaf: TextLeaf
    offset: int


class LxmlDocument:
    """DocumentModel backed by an lxml element tree."""

    def __init__(
        self,
        root: etree._Element,
        skip_tags: frozenset[str] | set[str] = DEFAULT_SKIP_TAGS,
    ) -> None:
        """Initialize the document.

        Args:
            root: Root element; paths start below it
            skip_tags: Tags whose content is not anchorable text
        """
        self._root = root
        self._skip_tags = frozenset(skip_tags)

    @classmethod
    def from_html(
        cls,
        markup: str | bytes,
        skip_tags: frozenset[str] | set[str] = DEFAULT_SKIP_TAGS,
    ) -> LxmlDocument:
        """Parse an HTML document (the root is the ``html`` element)."""
        return cls(lxml.html.document_fromstring(markup), skip_tags)

    @classmethod
    def from_xml(
        cls,
        data: str | bytes,
        skip_tags: frozenset[str] | set[str] = frozenset(),
    ) -> LxmlDocument:
        """Parse an XML document.

        Pass bytes when the document carries an encoding declaration.
        """
        return cls(etree.fromstring(data), skip_tags)

    @property
    def root(self) -> etree._Element:
        return self._root

    def leaves_in_order(self) -> list[TextLeaf]:
        return list(self._iter_leaves(self._root))

    def text_of(self, leaf: TextLeaf) -> str:
        return leaf.text

    def parent_of(self, node: Hashable) -> etree._Element | None:
        if isinstance(node, TextLeaf):
            return node.owner.getparent() if node.is_tail else node.owner
        if node is self._root:
            return None
        return node.getparent()  # type: ignore[attr-defined]

    def leaves_under(self, node: Hashable) -> list[TextLeaf]:
        if isinstance(node, TextLeaf):
            return [node]
        return list(self._iter_leaves(node))  # type: ignore[arg-type]

    def structural_path_of(self, node: Hashable) -> tuple[PathStep, ...]:
        return indexed_path(
            node,
            self._root,
            self.parent_of,
            self._children_of,
            _kind_of,
        )

    def resolve_path(self, path: tuple[PathStep, ...]) -> Hashable | None:
        return descend(self._root, path, self._children_of, _kind_of)

    def make_span(self, leaf: TextLeaf, offset: int) -> TextPosition:
        return TextPosition(leaf, offset)

    def _children_of(self, node: Hashable) -> list[Hashable]:
        """Element children and text leaves of a node, in document order."""
        if isinstance(node, TextLeaf):
            return []

        elem: etree._Element = node  # type: ignore[assignment]
        if get_tag_name(elem) in self._skip_tags:
            return []

        children: list[Hashable] = []
        if elem.text:
            children.append(TextLeaf(elem))

        for child in elem:
            # Comments and processing instructions only contribute their tail
            if isinstance(child.tag, str):
                children.append(child)
            if child.tail:
                children.append(TextLeaf(child, is_tail=True))

        return children

    def _iter_leaves(self, elem: etree._Element) -> Iterator[TextLeaf]:
        stack: list[Hashable] = [elem]
        while stack:
            node = stack.pop()
            if isinstance(node, TextLeaf):
                yield node
            else:
                stack.extend(reversed(self._children_of(node)))


def _kind_of(node: Hashable) -> str:
    if isinstance(node, TextLeaf):
        return TEXT_KIND
    return get_tag_name(node)  # type: ignore[arg-type]
