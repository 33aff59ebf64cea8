from __future__ import annotations

from pathlib import Path

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Button, Label, ListItem, ListView, Static

from ..config import AppTheme

ABOUT_TITLE = "Snape - A Severus Snippet Manager"
ABOUT_TAGLINE = "Handle your snippets with Severus precision."
SHORTCUTS: tuple[tuple[str, str], ...] = (
    ("↑/↓", "navigate snippets"),
    ("enter", "select snippet and copy to clipboard"),
    ("a-z, A-Z", "quick selection by index"),
    ("/", "enter filter mode"),
    ("?", "show this page"),
    ("escape", "quit (or leave filter mode)"),
    ("ctrl+o", "open snippets folder"),
    ("ctrl+s", "settings"),
    ("ctrl+r", "reload snippets"),
)
_KEY_STYLE = "bold #7aa2f7"
_HEADING_STYLE = "bold"


def format_about_body(version: str, snippets_dir: Path, settings_file: Path) -> Text:
    body = Text()
    body.append(f"Version: {version}\n\n")
    body.append("Keyboard shortcuts\n", style=_HEADING_STYLE)
    width = max(len(key) for key, _ in SHORTCUTS)
    for key, description in SHORTCUTS:
        body.append(key.ljust(width + 2), style=_KEY_STYLE)
        body.append(f"{description}\n")
    body.append("\nFile locations\n", style=_HEADING_STYLE)
    body.append(f"Snippets: {snippets_dir}\n")
    body.append(f"Settings: {settings_file}\n\n")
    body.append(
        "Each file in the snippets directory becomes a snippet named after the file. "
        "Each subfolder becomes a group; a leading number such as \"01-\" orders the "
        "groups and is hidden from the group title."
    )
    return body


class AboutScreen(ModalScreen[None]):
    BINDINGS = [
        ("escape", "close", "Close"),
        ("question_mark", "close", "Close"),
        ("q", "close", "Close"),
    ]

    CSS = """
    AboutScreen {
        align: center middle;
        background: $surface 80%;
    }

    #about_dialog {
        width: 90%;
        max-width: 76;
        height: 80%;
        padding: 1 2;
        border: heavy $accent;
        background: $panel;
    }

    #about_title {
        text-style: bold;
        color: $accent;
    }

    #about_tagline, #about_hint {
        color: $text-muted;
    }

    #about_scroll {
        height: 1fr;
        margin: 1 0;
    }
    """

    def __init__(self, version: str, snippets_dir: Path, settings_file: Path) -> None:
        super().__init__()
        self._body = format_about_body(version, snippets_dir, settings_file)

    def compose(self) -> ComposeResult:
        with Vertical(id="about_dialog"):
            yield Label(ABOUT_TITLE, id="about_title")
            yield Label(ABOUT_TAGLINE, id="about_tagline")
            with VerticalScroll(id="about_scroll"):
                yield Static(self._body, id="about_body")
            yield Label("escape, ? or q to close", id="about_hint")

    def on_mount(self) -> None:
        self.query_one("#about_scroll", VerticalScroll).focus()

    def action_close(self) -> None:
        self.dismiss(None)


class ThemeListItem(ListItem):
    def __init__(self, theme: AppTheme, current: bool) -> None:
        self.theme = theme
        marker = "●" if current else "○"
        super().__init__(Label(f"{marker} {theme.value}", markup=False))


class SettingsScreen(ModalScreen[AppTheme | None]):
    BINDINGS = [("escape", "cancel", "Cancel")]

    CSS = """
    SettingsScreen {
        align: center middle;
        background: $surface 80%;
    }

    #settings_dialog {
        width: 90%;
        max-width: 48;
        height: auto;
        padding: 1 2;
        border: heavy $accent;
        background: $panel;
    }

    #theme_list {
        height: 5;
    }

    #settings_note {
        height: 1;
        color: $text-muted;
    }
    """

    def __init__(self, current: AppTheme) -> None:
        super().__init__()
        self._current = current

    def compose(self) -> ComposeResult:
        with Vertical(id="settings_dialog"):
            yield Label("Theme")
            yield ListView(id="theme_list")
            yield Label("Window size is saved automatically", id="settings_note")
            with Horizontal():
                yield Button("Apply", id="settings_apply")
                yield Button("Close", id="settings_close")

    def on_mount(self) -> None:
        list_view = self.query_one("#theme_list", ListView)
        themes = list(AppTheme)
        for theme in themes:
            list_view.append(ThemeListItem(theme, theme == self._current))
        list_view.index = themes.index(self._current)
        list_view.focus()

    def action_cancel(self) -> None:
        self.dismiss(None)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "settings_close":
            self.dismiss(None)
        elif event.button.id == "settings_apply":
            self.dismiss(self._selected_theme())

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        if isinstance(event.item, ThemeListItem):
            self.dismiss(event.item.theme)

    def _selected_theme(self) -> AppTheme | None:
        list_view = self.query_one("#theme_list", ListView)
        if list_view.index is None:
            return None
        items = [child for child in list_view.children if isinstance(child, ThemeListItem)]
        if not items:
            return None
        index = max(0, min(list_view.index, len(items) - 1))
        return items[index].theme
