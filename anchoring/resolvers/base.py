"""Shared behaviour of the restoration tiers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Generic, TypeVar

from anchoring.config import AnchoringConfig
from anchoring.document.snapshot import DocumentSnapshot
from anchoring.errors import ResolutionError
from anchoring.logging_config import logger

if TYPE_CHECKING:
    from anchoring.document.flattened import FlattenedText
    from anchoring.document.protocols import DocumentModel
    from anchoring.models import ResolvedSpan, Tier

S = TypeVar("S")


def preview(text: str, width: int = 40) -> str:
    """Short repr of a text for log messages."""
    if len(text) > width:
        text = text[: width - 3] + "..."
    return repr(text)


class TierResolver(ABC, Generic[S]):
    """Base class for a restoration tier.

    ``resolve`` raises a ResolutionError subclass when the tier cannot
    re-locate the selector; ``try_resolve`` turns that into None.
    """

    tier: Tier

    def __init__(self, config: AnchoringConfig | None = None) -> None:
        self.config = config or AnchoringConfig()

    @abstractmethod
    def resolve(
        self,
        selector: S,
        document: DocumentModel | DocumentSnapshot,
    ) -> ResolvedSpan:
        """Re-locate a selector.

        Args:
            selector: The tier's selector
            document: Target document, or a snapshot shared across selectors

        Returns:
            The resolved span

        Raises:
            ResolutionError: If the tier cannot re-locate the selector
        """

    def try_resolve(
        self,
        selector: S,
        document: DocumentModel | DocumentSnapshot,
    ) -> ResolvedSpan | None:
        """Re-locate a selector, returning None instead of raising."""
        try:
            return self.resolve(selector, DocumentSnapshot.of(document))
        except ResolutionError as e:
            logger.debug(f"{self.tier.value} tier failed: {e}")
            return None

    def _context_mismatch(
        self,
        text_before: str,
        text_after: str,
        actual_before: str,
        actual_after: str,
    ) -> bool:
        """Compare stored context with the actual context.

        A mismatch is logged as a warning and never fails the tier: the exact
        text is the hard requirement, context is advisory.

        Returns:
            True if the context differs
        """
        if actual_before == text_before and actual_after == text_after:
            return False

        logger.warning(
            f"{self.tier.value} context mismatch (document may have changed): "
            f"expected {preview(text_before)}|{preview(text_after)}, "
            f"found {preview(actual_before)}|{preview(actual_after)}"
        )
        return True


def span_bounds(text: FlattenedText, start: int, end: int) -> tuple:
    """Leaf positions for an absolute range: (start leaf, offset, end leaf, offset)."""
    start_leaf, start_offset = text.locate(start)
    end_leaf, end_offset = text.locate(end, is_end=True)
    return start_leaf, start_offset, end_leaf, end_offset
