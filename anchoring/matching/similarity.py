"""
Edit-distance based similarity for fuzzy context verification.
"""


def levenshtein(s1: str, s2: str) -> int:
    """
    Levenshtein edit distance (insertions, deletions, substitutions).

    Uses two rows of the dynamic programming table, so memory is linear in
    the shorter string.
    """
    if s1 == s2:
        return 0
    if len(s1) < len(s2):
        s1, s2 = s2, s1
    if not s2:
        return len(s1)

    previous = list(range(len(s2) + 1))
    for i, c1 in enumerate(s1, start=1):
        current = [i]
        for j, c2 in enumerate(s2, start=1):
            current.append(
                min(
                    previous[j] + 1,  # deletion
                    current[j - 1] + 1,  # insertion
                    previous[j - 1] + (c1 != c2),  # substitution
                )
            )
        previous = current
    return previous[-1]


def similarity_score(s1: str, s2: str) -> float:
    """
    Calculate similarity score between two strings.

    ``1 - levenshtein(s1, s2) / max(len(s1), len(s2))``

    Returns a float between 0.0 (completely different) and 1.0 (identical).
    Symmetric in its arguments.
    """
    if s1 == s2:
        return 1.0
    if not s1 or not s2:
        return 0.0
    return 1.0 - levenshtein(s1, s2) / max(len(s1), len(s2))


def context_similarity(
    expected_before: str,
    actual_before: str,
    expected_after: str,
    actual_after: str,
) -> float:
    """Average similarity of the before and after context windows."""
    before = similarity_score(expected_before, actual_before)
    after = similarity_score(expected_after, actual_after)
    return (before + after) / 2
