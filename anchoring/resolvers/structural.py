"""Tier 1: resolve a structural selector by walking its path from the root."""

from __future__ import annotations

from anchoring.document.protocols import DocumentModel
from anchoring.document.snapshot import DocumentSnapshot
from anchoring.errors import NodeNotFound, TextMismatch
from anchoring.logging_config import logger
from anchoring.models import ResolvedSpan, Tier
from anchoring.resolvers.base import TierResolver, span_bounds
from anchoring.selectors import StructuralSelector


class StructuralResolver(TierResolver[StructuralSelector]):
    """Fast and exact, but brittle to structural changes before the node.

    Descends the indexed sibling path, then checks that the stored text is
    still at the stored offsets inside the node's text.
    """

    tier = Tier.STRUCTURAL

    def resolve(
        self,
        selector: StructuralSelector,
        document: DocumentModel | DocumentSnapshot,
    ) -> ResolvedSpan:
        snapshot = DocumentSnapshot.of(document)

        node = snapshot.document.resolve_path(selector.path)
        if node is None:
            raise NodeNotFound(self.tier, selector.to_xpath())

        node_text = snapshot.node_text(node)
        start, end = selector.start_offset, selector.end_offset

        actual = node_text.text[start:end]
        if end > len(node_text) or actual != selector.text:
            raise TextMismatch(self.tier, selector.text, actual)

        actual_before, actual_after = node_text.context(
            start, end, self.config.context_length
        )
        warning = self._context_mismatch(
            selector.text_before,
            selector.text_after,
            actual_before,
            actual_after,
        )

        start_leaf, start_offset, end_leaf, end_offset = span_bounds(
            node_text, start, end
        )
        logger.debug(f"Structural restoration successful at {selector.to_xpath()}")
        return ResolvedSpan(
            start_leaf=start_leaf,
            start_offset=start_offset,
            end_leaf=end_leaf,
            end_offset=end_offset,
            tier=self.tier,
            text=actual,
            context_warning=warning,
        )
