"""Flattened document text with an offset index back to leaves.

The flattened text is the concatenation of all leaf texts in document order.
It is the coordinate space of position and fuzzy selectors. Building it is a
single linear walk; mapping an absolute offset back to a leaf is a binary
search over the leaf start offsets.
"""

from __future__ import annotations

from bisect import bisect_left, bisect_right
from collections.abc import Hashable, Sequence
from itertools import pairwise
from typing import TYPE_CHECKING, NamedTuple

from anchoring.utils import clamp_window

if TYPE_CHECKING:
    from anchoring.document.protocols import DocumentModel


class LeafPosition(NamedTuple):
    """A leaf and an offset inside its text."""

    leaf: Hashable
    offset: int


class FlattenedText:
    """Concatenated leaf text plus an absolute-offset index."""

    def __init__(self, leaves: Sequence[Hashable], texts: Sequence[str]) -> None:
        """Initialize from parallel leaf and text sequences.

        Args:
            leaves: Leaf handles in document order
            texts: Text of each leaf
        """
        self._leaves = list(leaves)
        self._starts: list[int] = []
        self._positions: dict[Hashable, int] = {}

        running = 0
        for i, (leaf, text) in enumerate(zip(self._leaves, texts, strict=True)):
            self._starts.append(running)
            self._positions[leaf] = i
            running += len(text)

        self.text = "".join(texts)

    @classmethod
    def from_document(cls, document: DocumentModel) -> FlattenedText:
        """Flatten a whole document."""
        leaves = list(document.leaves_in_order())
        return cls(leaves, [document.text_of(leaf) for leaf in leaves])

    @classmethod
    def from_node(cls, document: DocumentModel, node: Hashable) -> FlattenedText:
        """Flatten the subtree of one node."""
        leaves = list(document.leaves_under(node))
        return cls(leaves, [document.text_of(leaf) for leaf in leaves])

    def section(self, first: Hashable, last: Hashable) -> FlattenedText:
        """Text of the leaves from ``first`` through ``last``, sliced from this text.

        Raises:
            KeyError: If either leaf is not part of this text
        """
        i, j = self._positions[first], self._positions[last]
        bounds = self._starts[i : j + 1]
        bounds.append(self._starts[j + 1] if j + 1 < len(self._starts) else len(self.text))
        texts = [self.text[a:b] for a, b in pairwise(bounds)]
        return FlattenedText(self._leaves[i : j + 1], texts)

    def __len__(self) -> int:
        return len(self.text)

    def __contains__(self, leaf: object) -> bool:
        try:
            return leaf in self._positions
        except TypeError:
            return False

    @property
    def leaves(self) -> list[Hashable]:
        return list(self._leaves)

    def leaf_length(self, leaf: Hashable) -> int:
        i = self._positions[leaf]
        end = self._starts[i + 1] if i + 1 < len(self._starts) else len(self.text)
        return end - self._starts[i]

    def offset_of(self, leaf: Hashable, local_offset: int) -> int:
        """Absolute offset of a position inside a leaf.

        Raises:
            KeyError: If the leaf is not part of this text
        """
        return self._starts[self._positions[leaf]] + local_offset

    def index_of(self, leaf: Hashable) -> int:
        """Document-order index of a leaf.

        Raises:
            KeyError: If the leaf is not part of this text
        """
        return self._positions[leaf]

    def locate(self, offset: int, is_end: bool = False) -> LeafPosition:
        """Map an absolute offset back to a leaf position.

        An offset on the boundary between two leaves maps to the start of the
        following leaf, or to the end of the preceding leaf when ``is_end``.

        Raises:
            IndexError: If the offset lies outside the text
        """
        if not self._leaves or offset < 0 or offset > len(self.text):
            raise IndexError(f"Offset {offset} outside text of length {len(self.text)}")

        if is_end:
            i = max(bisect_left(self._starts, offset) - 1, 0)
        else:
            i = bisect_right(self._starts, offset) - 1
        return LeafPosition(self._leaves[i], offset - self._starts[i])

    def context(self, start: int, end: int, length: int) -> tuple[str, str]:
        """Text windows of ``length`` characters before ``start`` and after ``end``."""
        return clamp_window(self.text, start, end, length)
