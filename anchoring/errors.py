"""Error taxonomy for anchor creation and resolution.

``InvalidSpan`` is a programmer error raised while building selectors.
``ResolutionError`` and its subclasses are expected, recoverable outcomes of
a single tier; the orchestrator turns them into a fallback or a ``failed``
outcome and never lets them reach the caller.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from anchoring.models import Tier


class AnchoringError(Exception):
    """Base class for all anchoring errors."""


class InvalidSpan(AnchoringError, ValueError):
    """Raised when a span does not describe text in the given document."""


class ResolutionError(AnchoringError):
    """A resolver tier could not re-locate a selector."""

    def __init__(self, tier: Tier, message: str) -> None:
        """Initialize the error.

        Args:
            tier: The tier that failed
            message: Human readable reason
        """
        self.tier = tier
        super().__init__(message)


class NodeNotFound(ResolutionError):
    """The structural path does not resolve in the target document."""

    def __init__(self, tier: Tier, path: str) -> None:
        self.path = path
        super().__init__(tier, f"No node at path {path}")


class TextMismatch(ResolutionError):
    """The text found at the stored offsets differs from the selector text."""

    def __init__(self, tier: Tier, expected: str, actual: str) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(tier, f"Expected {expected!r} but found {actual!r}")


class NoMatch(ResolutionError):
    """Approximate search found no candidate within the edit budget."""

    def __init__(self, tier: Tier, text: str, max_errors: int) -> None:
        self.text = text
        self.max_errors = max_errors
        super().__init__(
            tier, f"No match for {text!r} within {max_errors} edit(s)"
        )


class ContextTooDissimilar(ResolutionError):
    """A fuzzy candidate was found but its context does not corroborate it."""

    def __init__(self, tier: Tier, similarity: float, threshold: float) -> None:
        self.similarity = similarity
        self.threshold = threshold
        super().__init__(
            tier,
            f"Context similarity {similarity:.3f} below threshold {threshold:.3f}",
        )
