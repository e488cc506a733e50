"""
Utility functions for the anchoring engine
"""

_BASE36_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


def to_base36(value: int) -> str:
    """
    Render an integer in base 36 (lowercase, leading "-" when negative)

    Args:
        value: Integer to render

    Returns:
        Base 36 string (e.g., 35 -> "z", -36 -> "-10")
    """
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    value = abs(value)
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36_DIGITS[remainder])
    return sign + "".join(reversed(digits))


def content_hash(text: str) -> str:
    """
    Cheap 32-bit polynomial hash of a selector's text

    Used for fast deduplication of selectors before resolution, never for
    integrity or security.

    Args:
        text: Text to hash

    Returns:
        Signed 32-bit hash rendered in base 36
    """
    value = 0
    for char in text:
        value = (value * 31 + ord(char)) & 0xFFFFFFFF
    if value & 0x80000000:
        value -= 1 << 32
    return to_base36(value)


def clamp_window(text: str, start: int, end: int, length: int) -> tuple[str, str]:
    """
    Context windows of at most ``length`` characters around ``text[start:end]``

    Returns:
        (text before start, text after end)
    """
    before = text[max(0, start - length) : start]
    after = text[end : end + length]
    return before, after
