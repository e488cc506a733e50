"""Restoration tiers, in priority order."""

from anchoring.resolvers.base import TierResolver
from anchoring.resolvers.fuzzy import FuzzyResolver
from anchoring.resolvers.position import PositionResolver
from anchoring.resolvers.structural import StructuralResolver

__all__ = [
    "FuzzyResolver",
    "PositionResolver",
    "StructuralResolver",
    "TierResolver",
]
