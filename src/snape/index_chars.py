from __future__ import annotations

from string import ascii_lowercase, ascii_uppercase

QUICK_SELECT_CHARS = ascii_lowercase + ascii_uppercase


def char_for(position: int) -> str:
    """Return the quick-select character shown for a flat-view position.

    Positions past ``Z`` wrap back onto the lowercase letters, so they share
    a key with an earlier row and cannot be reached by quick select.
    """
    if position < 0:
        raise ValueError(f"Position must be non-negative: {position}")
    if position < len(QUICK_SELECT_CHARS):
        return QUICK_SELECT_CHARS[position]
    return ascii_lowercase[position % len(ascii_lowercase)]


def position_for(char: str) -> int | None:
    if len(char) != 1:
        return None
    position = QUICK_SELECT_CHARS.find(char)
    if position < 0:
        return None
    return position
