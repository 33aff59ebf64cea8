from __future__ import annotations

import logging
from typing import Callable

import pyperclip

logger = logging.getLogger(__name__)

ClipboardWriter = Callable[[str], None]


def copy_text(text: str, fallback: ClipboardWriter | None = None) -> bool:
    """Place ``text`` on the system clipboard.

    When no system clipboard mechanism is available, ``fallback`` (for
    example a terminal OSC 52 writer) receives the text instead.
    """
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as exc:
        logger.debug("System clipboard unavailable: %s", exc)
        if fallback is None:
            return False
        fallback(text)
    return True
