"""Tier 3: resolve a fuzzy selector by approximate search and context scoring."""

from __future__ import annotations

from anchoring.document.protocols import DocumentModel
from anchoring.document.snapshot import DocumentSnapshot
from anchoring.errors import ContextTooDissimilar, NoMatch
from anchoring.logging_config import logger
from anchoring.matching import context_similarity, find_first_match
from anchoring.models import ResolvedSpan, Tier
from anchoring.resolvers.base import TierResolver, preview, span_bounds
from anchoring.selectors import FuzzySelector


class FuzzyResolver(TierResolver[FuzzySelector]):
    """Slow, robust to content drift around and inside the span.

    The first candidate found is accepted only if its surrounding context is
    similar enough to the stored context; otherwise the tier fails.
    """

    tier = Tier.FUZZY

    def resolve(
        self,
        selector: FuzzySelector,
        document: DocumentModel | DocumentSnapshot,
    ) -> ResolvedSpan:
        flattened = DocumentSnapshot.of(document).flattened
        max_errors = self.config.max_errors(len(selector.text))

        match = find_first_match(flattened.text, selector.text, max_errors)
        if match is None:
            raise NoMatch(self.tier, selector.text, max_errors)

        actual_before, actual_after = flattened.context(
            match.start, match.end, self.config.fuzzy_context_length
        )
        score = context_similarity(
            selector.text_before,
            actual_before,
            selector.text_after,
            actual_after,
        )
        if score < selector.threshold:
            raise ContextTooDissimilar(self.tier, score, selector.threshold)

        start_leaf, start_offset, end_leaf, end_offset = span_bounds(
            flattened, match.start, match.end
        )
        matched = flattened.text[match.start : match.end]
        logger.debug(
            f"Fuzzy restoration successful: {preview(matched)} "
            f"({match.errors} edit(s), context {score:.2f})"
        )
        return ResolvedSpan(
            start_leaf=start_leaf,
            start_offset=start_offset,
            end_leaf=end_leaf,
            end_offset=end_offset,
            tier=self.tier,
            text=matched,
            score=score,
        )
