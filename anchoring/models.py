"""Result and input types for anchoring."""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from anchoring.document.protocols import DocumentModel
    from anchoring.errors import ResolutionError


class Tier(str, Enum):
    """Resolution strategy that produced a span, tried in this order."""

    STRUCTURAL = "structural"
    POSITION = "position"
    FUZZY = "fuzzy"
    FAILED = "failed"


@dataclass(frozen=True)
class TextSpan:
    """A span in a live document, as handed to the builder.

    Leaves are the document's own opaque leaf handles.
    """

    start_leaf: Hashable
    start_offset: int
    end_leaf: Hashable
    end_offset: int


@dataclass(frozen=True)
class ResolvedSpan:
    """A selector re-located in a document."""

    start_leaf: Hashable
    start_offset: int
    end_leaf: Hashable
    end_offset: int
    tier: Tier
    text: str
    context_warning: bool = False
    """True when the text matched but its surrounding context did not."""

    score: float = 1.0
    """Context similarity for fuzzy matches, 1.0 for exact tiers."""

    def materialize(self, document: DocumentModel) -> tuple[Any, Any]:
        """Host position handles for the start and end of the span."""
        return (
            document.make_span(self.start_leaf, self.start_offset),
            document.make_span(self.end_leaf, self.end_offset),
        )


@dataclass(frozen=True)
class TierFailure:
    """Why one tier could not resolve a selector."""

    tier: Tier
    error: str
    message: str

    @classmethod
    def from_error(cls, error: ResolutionError) -> TierFailure:
        return cls(tier=error.tier, error=type(error).__name__, message=str(error))


@dataclass(frozen=True)
class RestorationOutcome:
    """Result of restoring one selector.

    A ``failed`` tier with no span is an ordinary outcome (the anchored text
    is gone), not an error.
    """

    span: ResolvedSpan | None
    tier: Tier
    failures: tuple[TierFailure, ...] = field(default=())

    @property
    def succeeded(self) -> bool:
        return self.span is not None
