from __future__ import annotations


def wrap_index(index: int, length: int) -> int:
    """Map a signed, 1-based index onto a list position.

    Negative indices count back from the end (-1 is the last entry). The result
    is never below 1; there is no upper clamp, so callers decide what a
    position past ``length`` means.
    """
    if index < 0:
        index = length + 1 + index
    return max(1, int(index))
