from __future__ import annotations

import pyperclip

from snape.clipboard import copy_text


def test_copy_text_uses_system_clipboard(monkeypatch) -> None:
    copied: list[str] = []
    monkeypatch.setattr(pyperclip, "copy", copied.append)

    assert copy_text("hello")
    assert copied == ["hello"]


def test_copy_text_falls_back_when_clipboard_unavailable(monkeypatch) -> None:
    def fail(text: str) -> None:
        raise pyperclip.PyperclipException("no clipboard")

    monkeypatch.setattr(pyperclip, "copy", fail)
    received: list[str] = []

    assert copy_text("hello", fallback=received.append)
    assert received == ["hello"]


def test_copy_text_without_fallback_reports_failure(monkeypatch) -> None:
    def fail(text: str) -> None:
        raise pyperclip.PyperclipException("no clipboard")

    monkeypatch.setattr(pyperclip, "copy", fail)

    assert not copy_text("hello")
