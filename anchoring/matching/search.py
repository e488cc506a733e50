"""
Bounded approximate substring search.

Exact occurrences are tried first. Otherwise a bitap (Wu-Manber) scan finds
match end positions within an edit budget, and a small alignment over the
window before the end recovers the match start.

Selection policy: the lowest error count wins; among candidates with the
same error count, the first (leftmost) one in the text.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ApproximateMatch:
    """A candidate occurrence of a pattern in a text.

    Attributes:
        start: Offset where the match begins
        end: Offset just past the match
        errors: Edit distance between the pattern and ``text[start:end]``
    """

    start: int
    end: int
    errors: int


def find_first_match(text: str, pattern: str, max_errors: int) -> ApproximateMatch | None:
    """
    Find the first best occurrence of ``pattern`` in ``text``.

    Args:
        text: The text to search in
        pattern: The text to search for
        max_errors: Maximum number of edits (insertions, deletions, substitutions)

    Returns:
        The match, or None if no occurrence is within the edit budget
    """
    if not pattern:
        return None

    pos = text.find(pattern)
    if pos != -1:
        return ApproximateMatch(start=pos, end=pos + len(pattern), errors=0)

    # An edit budget as large as the pattern would match anywhere
    max_errors = min(max_errors, len(pattern) - 1)
    if max_errors <= 0:
        return None

    found = _bitap(text, pattern, max_errors)
    if found is None:
        return None

    errors, end = found
    start = _align_start(text, pattern, end, errors)
    return ApproximateMatch(start=start, end=end, errors=errors)


def _bitap(text: str, pattern: str, max_errors: int) -> tuple[int, int] | None:
    """
    Wu-Manber bitap scan with Levenshtein errors.

    Bit ``i`` of ``rows[d]`` is set when ``pattern[: i + 1]`` matches a suffix
    of the text read so far with at most ``d`` edits.

    Returns:
        (errors, end offset) of the first match with the fewest errors
    """
    m = len(pattern)
    masks: dict[str, int] = {}
    for i, char in enumerate(pattern):
        masks[char] = masks.get(char, 0) | (1 << i)

    full = (1 << m) - 1
    goal = 1 << (m - 1)
    # Up to d leading pattern characters can be deleted before any text
    rows = [(1 << d) - 1 for d in range(max_errors + 1)]
    best: tuple[int, int] | None = None

    for j, char in enumerate(text):
        mask = masks.get(char, 0)

        previous_old = rows[0]
        rows[0] = ((previous_old << 1) | 1) & mask
        for d in range(1, max_errors + 1):
            old = rows[d]
            rows[d] = (
                (((old << 1) | 1) & mask)  # match
                | previous_old  # insertion in text
                | ((previous_old | rows[d - 1]) << 1)  # substitution, deletion
                | 1
            ) & full
            previous_old = old

        for d in range(max_errors + 1):
            if rows[d] & goal:
                if best is None or d < best[0]:
                    best = (d, j + 1)
                break

        # Exact occurrences were ruled out, one edit is the best possible
        if best is not None and best[0] == 1:
            break

    return best


def _align_start(text: str, pattern: str, end: int, errors: int) -> int:
    """
    Recover where a match ending at ``end`` begins.

    Aligns the reversed pattern against the reversed window before ``end``
    and picks the window length with the lowest edit distance, preferring
    the length closest to the pattern's.
    """
    m = len(pattern)
    window = text[max(0, end - m - errors) : end][::-1]
    reversed_pattern = pattern[::-1]

    # previous[j]: distance between the consumed pattern prefix and window[:j]
    previous = list(range(len(window) + 1))
    for i, p_char in enumerate(reversed_pattern, start=1):
        current = [i]
        for j, w_char in enumerate(window, start=1):
            current.append(
                min(
                    previous[j] + 1,
                    current[j - 1] + 1,
                    previous[j - 1] + (p_char != w_char),
                )
            )
        previous = current

    length = min(
        range(len(window) + 1),
        key=lambda j: (previous[j], abs(j - m), j),
    )
    return end - length
