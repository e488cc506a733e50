"""Tier 2: resolve a position selector by absolute offsets."""

from __future__ import annotations

from anchoring.document.protocols import DocumentModel
from anchoring.document.snapshot import DocumentSnapshot
from anchoring.errors import TextMismatch
from anchoring.logging_config import logger
from anchoring.models import ResolvedSpan, Tier
from anchoring.resolvers.base import TierResolver, span_bounds
from anchoring.selectors import PositionSelector


class PositionResolver(TierResolver[PositionSelector]):
    """Survives structural reshuffling that keeps the flattened text intact.

    Brittle to characters inserted or removed anywhere before the span.
    """

    tier = Tier.POSITION

    def resolve(
        self,
        selector: PositionSelector,
        document: DocumentModel | DocumentSnapshot,
    ) -> ResolvedSpan:
        flattened = DocumentSnapshot.of(document).flattened
        start, end = selector.start_offset, selector.end_offset

        actual = flattened.text[start:end]
        if end > len(flattened) or actual != selector.text:
            raise TextMismatch(self.tier, selector.text, actual)

        actual_before, actual_after = flattened.context(
            start, end, self.config.context_length
        )
        warning = self._context_mismatch(
            selector.text_before,
            selector.text_after,
            actual_before,
            actual_after,
        )

        start_leaf, start_offset, end_leaf, end_offset = span_bounds(
            flattened, start, end
        )
        logger.debug(f"Position restoration successful at {start}-{end}")
        return ResolvedSpan(
            start_leaf=start_leaf,
            start_offset=start_offset,
            end_leaf=end_leaf,
            end_offset=end_offset,
            tier=self.tier,
            text=actual,
            context_warning=warning,
        )
