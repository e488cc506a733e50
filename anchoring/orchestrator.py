"""Restore anchored spans through the prioritized tier chain."""

from __future__ import annotations

from collections.abc import Iterable

from anchoring.config import AnchoringConfig
from anchoring.document.protocols import DocumentModel
from anchoring.document.snapshot import DocumentSnapshot
from anchoring.errors import ResolutionError
from anchoring.logging_config import logger
from anchoring.models import RestorationOutcome, Tier, TierFailure
from anchoring.resolvers import FuzzyResolver, PositionResolver, StructuralResolver
from anchoring.resolvers.base import preview
from anchoring.selectors import MultiSelector


class RestorationOrchestrator:
    """Runs structural, position and fuzzy resolution in that order.

    The first tier that succeeds wins. When every tier fails the outcome is
    ``Tier.FAILED`` with no span; that is reported as a value, never raised.
    Orchestrators hold only configuration and can be shared between threads.

    Example:
        orchestrator = RestorationOrchestrator()
        outcome = orchestrator.restore(selector, document)
        if outcome.succeeded:
            start, end = outcome.span.materialize(document)
    """

    def __init__(self, config: AnchoringConfig | None = None) -> None:
        self.config = config or AnchoringConfig()
        self.structural = StructuralResolver(self.config)
        self.position = PositionResolver(self.config)
        self.fuzzy = FuzzyResolver(self.config)

    def restore(
        self,
        selector: MultiSelector,
        document: DocumentModel | DocumentSnapshot,
    ) -> RestorationOutcome:
        """Restore one selector.

        Args:
            selector: The stored selectors for the span
            document: Target document (or a snapshot shared across selectors)

        Returns:
            The outcome, with the winning tier and the failures of earlier tiers
        """
        snapshot = DocumentSnapshot.of(document)
        failures: list[TierFailure] = []

        with logger.indent_block(
            f"Restoring {preview(selector.text)} [{selector.content_hash}]"
        ):
            for resolver, part in (
                (self.structural, selector.structural),
                (self.position, selector.position),
                (self.fuzzy, selector.fuzzy),
            ):
                try:
                    span = resolver.resolve(part, snapshot)
                except ResolutionError as e:
                    logger.debug(f"{resolver.tier.value} tier failed: {e}")
                    failures.append(TierFailure.from_error(e))
                    continue

                return RestorationOutcome(
                    span=span,
                    tier=resolver.tier,
                    failures=tuple(failures),
                )

            logger.info(f"All restoration tiers failed for {preview(selector.text)}")

        return RestorationOutcome(span=None, tier=Tier.FAILED, failures=tuple(failures))

    def restore_batch(
        self,
        selectors: Iterable[MultiSelector],
        document: DocumentModel | DocumentSnapshot,
    ) -> list[RestorationOutcome]:
        """Restore many selectors against the same document state.

        The document is flattened at most once for the whole batch, and
        duplicate selectors (same content hash and selector data) are resolved
        once. Results are in input order and identical to calling ``restore``
        for each selector.
        """
        snapshot = DocumentSnapshot.of(document)
        resolved: dict[tuple, RestorationOutcome] = {}
        outcomes: list[RestorationOutcome] = []

        for selector in selectors:
            key = (
                selector.content_hash,
                selector.structural,
                selector.position,
                selector.fuzzy,
            )
            if key not in resolved:
                resolved[key] = self.restore(selector, snapshot)
            outcomes.append(resolved[key])

        restored = sum(1 for outcome in outcomes if outcome.succeeded)
        logger.debug(f"Batch restored {restored}/{len(outcomes)} selector(s)")
        return outcomes
