"""Protocol definitions for documents that spans are anchored in."""

from __future__ import annotations

from collections.abc import Hashable, Sequence
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from anchoring.selectors import PathStep


@runtime_checkable
class DocumentModel(Protocol):
    """Read-only view of one snapshot of a tree-structured document.

    Hosts (an lxml tree, a PDF text layer, an AST) implement this protocol.
    Leaves are opaque, hashable handles to text-bearing nodes; branch nodes
    are opaque handles too. The engine never mutates a document and treats
    it as unchanged for the duration of a resolution pass.
    """

    @property
    def root(self) -> Hashable:
        """The document root. Structural paths start below it."""
        ...

    def leaves_in_order(self) -> Sequence[Hashable]:
        """Return all text-bearing leaves in document order.

        Returns:
            A finite sequence; calling again restarts from the first leaf
        """
        ...

    def text_of(self, leaf: Hashable) -> str:
        """Return the text of a leaf."""
        ...

    def parent_of(self, node: Hashable) -> Hashable | None:
        """Return the parent of a node, or None for the root."""
        ...

    def leaves_under(self, node: Hashable) -> Sequence[Hashable]:
        """Return the leaves of a node's subtree in document order.

        For a leaf this is the leaf itself.
        """
        ...

    def structural_path_of(self, node: Hashable) -> tuple[PathStep, ...]:
        """Return the indexed sibling path from the root to a node."""
        ...

    def resolve_path(self, path: tuple[PathStep, ...]) -> Hashable | None:
        """Return the node at a structural path, or None if it does not exist."""
        ...

    def make_span(self, leaf: Hashable, offset: int) -> Any:
        """Return a host position handle for an offset inside a leaf."""
        ...
