"""One read-only pass over a document."""

from __future__ import annotations

from collections.abc import Hashable
from functools import cached_property

from anchoring.document.flattened import FlattenedText
from anchoring.document.protocols import DocumentModel


class DocumentSnapshot:
    """A document plus its lazily built flattened text.

    Share one snapshot across all selectors resolved against the same
    document state so that the document is flattened at most once. Create a
    new snapshot after the document changes.
    """

    def __init__(self, document: DocumentModel) -> None:
        self.document = document
        self._node_texts: dict[Hashable, FlattenedText] = {}

    @classmethod
    def of(cls, document: DocumentModel | DocumentSnapshot) -> DocumentSnapshot:
        """Wrap a document, or return an existing snapshot unchanged."""
        if isinstance(document, DocumentSnapshot):
            return document
        return cls(document)

    @cached_property
    def flattened(self) -> FlattenedText:
        return FlattenedText.from_document(self.document)

    @property
    def is_flattened(self) -> bool:
        return "flattened" in self.__dict__

    def node_text(self, node: Hashable) -> FlattenedText:
        """Flattened text of one node's subtree, built once per node.

        Once the whole document is flattened the subtree text is a slice of
        it between the node's first and last leaf.
        """
        cached = self._node_texts.get(node)
        if cached is not None:
            return cached

        if self.is_flattened:
            leaves = self.document.leaves_under(node)
            if leaves:
                cached = self.flattened.section(leaves[0], leaves[-1])
            else:
                cached = FlattenedText([], [])
        else:
            cached = FlattenedText.from_node(self.document, node)
        self._node_texts[node] = cached
        return cached
