"""
anchoring - Robust anchoring of text spans in mutable documents.

This library provides:
- Selector creation: structural path, absolute position and fuzzy quote
- Restoration through a Structural -> Position -> Fuzzy fallback chain
- Batched restoration that flattens a document once for many selectors
- DocumentModel implementations for lxml trees and plain in-memory trees

Import patterns:

    # Primary API (recommended)
    from anchoring import AnchorBuilder, RestorationOrchestrator, TextSpan

    # Full submodule imports (for internal types)
    from anchoring.selectors import StructuralSelector, PathStep
    from anchoring.document.flattened import FlattenedText

Example usage:

    from anchoring import AnchorBuilder, LxmlDocument, RestorationOrchestrator, TextSpan

    document = LxmlDocument.from_html("<p>The cat sat on the mat.</p>")
    leaf = document.leaves_in_order()[0]
    selector = AnchorBuilder().build(document, TextSpan(leaf, 4, leaf, 22))

    # Later, against an edited copy of the document
    outcome = RestorationOrchestrator().restore(selector, edited_document)
    if outcome.succeeded:
        print(outcome.tier, outcome.span.text)
"""

from anchoring.builder import AnchorBuilder
from anchoring.config import AnchoringConfig
from anchoring.document import DocumentModel, LxmlDocument, TreeDocument
from anchoring.document.snapshot import DocumentSnapshot
from anchoring.errors import (
    AnchoringError,
    ContextTooDissimilar,
    InvalidSpan,
    NodeNotFound,
    NoMatch,
    ResolutionError,
    TextMismatch,
)
from anchoring.models import ResolvedSpan, RestorationOutcome, TextSpan, Tier
from anchoring.orchestrator import RestorationOrchestrator
from anchoring.selectors import (
    FuzzySelector,
    MultiSelector,
    PositionSelector,
    StructuralSelector,
)

# Primary public API
__all__ = [
    "AnchorBuilder",
    "AnchoringConfig",
    "AnchoringError",
    "ContextTooDissimilar",
    "DocumentModel",
    "DocumentSnapshot",
    "FuzzySelector",
    "InvalidSpan",
    "LxmlDocument",
    "MultiSelector",
    "NoMatch",
    "NodeNotFound",
    "PositionSelector",
    "ResolutionError",
    "ResolvedSpan",
    "RestorationOrchestrator",
    "RestorationOutcome",
    "StructuralSelector",
    "TextMismatch",
    "TextSpan",
    "Tier",
    "TreeDocument",
]
