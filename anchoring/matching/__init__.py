"""
Approximate matching for the fuzzy restoration tier.
"""

from anchoring.matching.search import ApproximateMatch, find_first_match
from anchoring.matching.similarity import (
    context_similarity,
    levenshtein,
    similarity_score,
)

__all__ = [
    "ApproximateMatch",
    "context_similarity",
    "find_first_match",
    "levenshtein",
    "similarity_score",
]
