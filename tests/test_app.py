from __future__ import annotations

import asyncio
import json
from pathlib import Path

from snape.app import SnapeApp
from snape.config import AppTheme
from snape.ui.picker import SeparatorListItem, SnippetListItem
from snape.ui.screens import AboutScreen


def _make_snippets(root: Path) -> None:
    (root / "01-work").mkdir(parents=True)
    (root / "b.txt").write_text("bravo", encoding="utf-8")
    (root / "a.txt").write_text("alpha", encoding="utf-8")
    (root / "01-work" / "c.txt").write_text("charlie", encoding="utf-8")


def _app(root: Path, copied: list[str]) -> SnapeApp:
    return SnapeApp(root, config_file=root.parent / "settings.json", clipboard=copied.append)


def test_app_lists_catalog_with_separators(tmp_path: Path) -> None:
    root = tmp_path / "snippets"
    _make_snippets(root)
    copied: list[str] = []
    app = _app(root, copied)

    async def run() -> list[type]:
        async with app.run_test() as pilot:
            await pilot.pause()
            rows = list(app.query_one("#snippet_list").children)
            return [type(row) for row in rows]

    kinds = asyncio.run(run())

    assert kinds == [SnippetListItem, SnippetListItem, SeparatorListItem, SnippetListItem]


def test_quick_select_copies_and_exits(tmp_path: Path) -> None:
    root = tmp_path / "snippets"
    _make_snippets(root)
    copied: list[str] = []
    app = _app(root, copied)

    async def run() -> None:
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("b")
            await pilot.pause(0.5)

    asyncio.run(run())

    assert copied == ["bravo"]
    assert app.return_value is not None
    assert app.return_value.name == "b"


def test_filter_then_enter_copies_match(tmp_path: Path) -> None:
    root = tmp_path / "snippets"
    _make_snippets(root)
    copied: list[str] = []
    app = _app(root, copied)

    async def run() -> None:
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("slash", "c", "h")
            await pilot.pause()
            assert app.controller.query == "ch"
            assert [snippet.name for snippet in app.controller.flat_view] == ["c"]
            await pilot.press("enter")
            await pilot.pause(0.5)

    asyncio.run(run())

    assert copied == ["charlie"]


def test_escape_cancels_without_copying(tmp_path: Path) -> None:
    root = tmp_path / "snippets"
    _make_snippets(root)
    copied: list[str] = []
    app = _app(root, copied)

    async def run() -> None:
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("escape")

    asyncio.run(run())

    assert copied == []
    assert app.return_value is None


def test_question_mark_opens_about_screen(tmp_path: Path) -> None:
    root = tmp_path / "snippets"
    _make_snippets(root)
    copied: list[str] = []
    app = _app(root, copied)

    async def run() -> None:
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("question_mark")
            await pilot.pause()
            assert isinstance(app.screen, AboutScreen)
            await pilot.press("escape")
            await pilot.pause()
            assert not isinstance(app.screen, AboutScreen)
            assert not app.controller.is_finished

    asyncio.run(run())

    assert copied == []


def test_clicking_row_copies_snippet(tmp_path: Path) -> None:
    root = tmp_path / "snippets"
    _make_snippets(root)
    copied: list[str] = []
    app = _app(root, copied)

    async def run() -> None:
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.click(SnippetListItem)
            await pilot.pause(0.5)

    asyncio.run(run())

    assert copied == ["alpha"]
    assert app.return_value is not None
    assert app.return_value.name == "a"


def test_settings_screen_saves_theme(tmp_path: Path) -> None:
    root = tmp_path / "snippets"
    _make_snippets(root)
    copied: list[str] = []
    app = _app(root, copied)

    async def run() -> None:
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("ctrl+s")
            await pilot.pause()
            await pilot.press("down", "down", "enter")
            await pilot.pause()

    asyncio.run(run())

    assert app.theme_choice == AppTheme.DARK
    data = json.loads((tmp_path / "settings.json").read_text(encoding="utf-8"))
    assert data["theme"] == "Dark"


def test_notice_with_brackets_is_shown_as_plain_text(tmp_path: Path) -> None:
    root = tmp_path / "snippets"
    _make_snippets(root)
    notice = "Settings file is not valid JSON: /tmp/[x/settings.json"
    app = SnapeApp(
        root,
        config_file=tmp_path / "settings.json",
        clipboard=lambda text: None,
        notice=notice,
    )

    async def run() -> list[str]:
        async with app.run_test() as pilot:
            await pilot.pause()
            return [notification.message for notification in app._notifications]

    messages = asyncio.run(run())

    assert notice in messages
