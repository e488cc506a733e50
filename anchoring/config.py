"""Shared configuration for anchor creation and restoration."""

from dataclasses import dataclass

# Context window around the span for structural and position selectors
DEFAULT_CONTEXT_LENGTH = 30

# Wider context window for fuzzy selectors
FUZZY_CONTEXT_LENGTH = 50

# Minimum averaged context similarity for a fuzzy match (0.0 - 1.0)
DEFAULT_FUZZY_THRESHOLD = 0.8

# Edit budget for approximate search, as a fraction of the selector text length
DEFAULT_MAX_ERROR_RATIO = 0.25

# Tags whose text is not rendered body content and therefore never anchored
DEFAULT_SKIP_TAGS = frozenset({"head", "title", "script", "style", "template", "noscript"})


def validate_threshold(threshold: float) -> None:
    """Validate a similarity threshold.

    Args:
        threshold: The threshold to validate

    Raises:
        ValueError: If the threshold is outside 0.0 - 1.0
    """
    if not 0.0 <= threshold <= 1.0:
        raise ValueError(
            f"Invalid threshold: {threshold}. Expected a value between 0.0 and 1.0"
        )


def validate_context_length(length: int) -> None:
    """Validate a context window length.

    Raises:
        ValueError: If the length is negative
    """
    if length < 0:
        raise ValueError(f"Invalid context length: {length}. Expected >= 0")


def validate_error_ratio(ratio: float) -> None:
    """Validate the approximate search error ratio.

    Raises:
        ValueError: If the ratio is outside 0.0 - 1.0 (exclusive upper bound)
    """
    if not 0.0 <= ratio < 1.0:
        raise ValueError(
            f"Invalid error ratio: {ratio}. Expected 0.0 <= ratio < 1.0"
        )


@dataclass(frozen=True)
class AnchoringConfig:
    """Tunables shared by the builder, the resolvers and the orchestrator."""

    context_length: int = DEFAULT_CONTEXT_LENGTH
    fuzzy_context_length: int = FUZZY_CONTEXT_LENGTH
    fuzzy_threshold: float = DEFAULT_FUZZY_THRESHOLD
    max_error_ratio: float = DEFAULT_MAX_ERROR_RATIO

    def __post_init__(self) -> None:
        validate_context_length(self.context_length)
        validate_context_length(self.fuzzy_context_length)
        validate_threshold(self.fuzzy_threshold)
        validate_error_ratio(self.max_error_ratio)

    def max_errors(self, text_length: int) -> int:
        """Edit budget for approximate search of a text of the given length."""
        return int(text_length * self.max_error_ratio)
