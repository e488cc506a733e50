"""Create portable selectors for a span in a live document."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from anchoring.config import AnchoringConfig
from anchoring.document.flattened import FlattenedText
from anchoring.document.paths import common_ancestor
from anchoring.document.protocols import DocumentModel
from anchoring.document.snapshot import DocumentSnapshot
from anchoring.errors import InvalidSpan
from anchoring.logging_config import logger
from anchoring.models import TextSpan
from anchoring.resolvers.base import preview
from anchoring.selectors import (
    FuzzySelector,
    MultiSelector,
    PositionSelector,
    StructuralSelector,
)


class AnchorBuilder:
    """Builds a MultiSelector (structural, position and fuzzy) for a span.

    Example:
        builder = AnchorBuilder()
        leaf = document.leaves_in_order()[0]
        selector = builder.build(document, TextSpan(leaf, 4, leaf, 7))
    """

    def __init__(self, config: AnchoringConfig | None = None) -> None:
        self.config = config or AnchoringConfig()

    def build(
        self,
        document: DocumentModel | DocumentSnapshot,
        span: TextSpan,
        created_at: datetime | None = None,
    ) -> MultiSelector:
        """Create selectors for one span.

        Args:
            document: The document the span lives in (or a shared snapshot)
            span: Start and end leaf positions
            created_at: Creation time (default: now)

        Returns:
            The MultiSelector for the span

        Raises:
            InvalidSpan: If the span does not describe text in the document
        """
        snapshot = DocumentSnapshot.of(document)
        flattened = snapshot.flattened
        start, end = self._absolute_bounds(flattened, span)
        text = flattened.text[start:end]

        structural = self._structural_selector(snapshot, span, text)

        before, after = flattened.context(start, end, self.config.context_length)
        position = PositionSelector(
            start_offset=start,
            end_offset=end,
            text=text,
            text_before=before,
            text_after=after,
        )

        before, after = flattened.context(start, end, self.config.fuzzy_context_length)
        fuzzy = FuzzySelector(
            text=text,
            text_before=before,
            text_after=after,
            threshold=self.config.fuzzy_threshold,
        )

        selector = MultiSelector.create(structural, position, fuzzy, created_at)
        logger.debug(
            f"Anchored {preview(text)} at {structural.to_xpath()} "
            f"[{selector.content_hash}]"
        )
        return selector

    def build_many(
        self,
        document: DocumentModel | DocumentSnapshot,
        spans: Iterable[TextSpan],
    ) -> list[MultiSelector]:
        """Create selectors for many spans, flattening the document once."""
        snapshot = DocumentSnapshot.of(document)
        return [self.build(snapshot, span) for span in spans]

    def _absolute_bounds(self, flattened: FlattenedText, span: TextSpan) -> tuple[int, int]:
        for name, leaf, offset in (
            ("start", span.start_leaf, span.start_offset),
            ("end", span.end_leaf, span.end_offset),
        ):
            if leaf not in flattened:
                raise InvalidSpan(f"{name} leaf is not part of the document")
            length = flattened.leaf_length(leaf)
            if not 0 <= offset <= length:
                raise InvalidSpan(
                    f"{name} offset {offset} outside leaf text of length {length}"
                )

        start = flattened.offset_of(span.start_leaf, span.start_offset)
        end = flattened.offset_of(span.end_leaf, span.end_offset)
        if end < start:
            raise InvalidSpan(f"span ends ({end}) before it starts ({start})")
        if end == start:
            raise InvalidSpan("span is empty")
        return start, end

    def _structural_selector(
        self,
        snapshot: DocumentSnapshot,
        span: TextSpan,
        text: str,
    ) -> StructuralSelector:
        document = snapshot.document
        if span.start_leaf == span.end_leaf:
            target = span.start_leaf
        else:
            target = common_ancestor(span.start_leaf, span.end_leaf, document.parent_of)
            if target is None:
                raise InvalidSpan("span leaves share no common ancestor")

        node_text = snapshot.node_text(target)
        start = node_text.offset_of(span.start_leaf, span.start_offset)
        end = node_text.offset_of(span.end_leaf, span.end_offset)
        before, after = node_text.context(start, end, self.config.context_length)

        return StructuralSelector(
            path=document.structural_path_of(target),
            start_offset=start,
            end_offset=end,
            text=text,
            text_before=before,
            text_after=after,
        )
