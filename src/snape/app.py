from __future__ import annotations

import argparse
import logging
import webbrowser
from dataclasses import replace
from pathlib import Path

from textual import events
from textual.app import App, ComposeResult
from textual.containers import Horizontal, Vertical
from textual.logging import TextualHandler
from textual.theme import Theme
from textual.widgets import Label, ListItem, ListView, Static

from . import __version__
from .catalog import Snippet, build_catalog
from .clipboard import ClipboardWriter, copy_text
from .config import (
    DEFAULT_WINDOW_HEIGHT,
    DEFAULT_WINDOW_WIDTH,
    MAX_WINDOW_SIZE,
    MIN_WINDOW_SIZE,
    AppConfig,
    AppTheme,
    is_valid_window_size,
    load_config,
    save_config,
)
from .paths import settings_path, snippets_root
from .selection import (
    ArrowDown,
    ArrowUp,
    Backspace,
    CharTyped,
    Enter,
    Escape,
    InputEvent,
    RowActivated,
    SelectionController,
)
from .source import load_snippet_files
from .ui.picker import (
    BROWSE_HINT,
    FILTER_HINT,
    FOOTER_HINT,
    SnippetListItem,
    build_rows,
    format_count,
    format_preview,
    format_search_line,
    row_index_for_position,
)
from .ui.screens import AboutScreen, SettingsScreen

logger = logging.getLogger(__name__)

COPY_EXIT_DELAY = 0.3
CELL_WIDTH_PX = 8
CELL_HEIGHT_PX = 16

TOKYO_NIGHT_THEME = Theme(
    name="tokyo-night",
    primary="#7aa2f7",
    secondary="#7dcfff",
    accent="#bb9af7",
    warning="#e0af68",
    error="#f7768e",
    success="#9ece6a",
    foreground="#c0caf5",
    background="#1a1b26",
    surface="#1f2335",
    panel="#24283b",
    boost="#2f334d",
    variables={
        "block-cursor-background": "#7aa2f7",
        "block-cursor-foreground": "#1a1b26",
        "footer-key-foreground": "#7aa2f7",
    },
)

_TEXTUAL_THEMES = {
    AppTheme.SYSTEM: TOKYO_NIGHT_THEME.name,
    AppTheme.LIGHT: "textual-light",
    AppTheme.DARK: "textual-dark",
}

_KEY_EVENTS: dict[str, InputEvent] = {
    "up": ArrowUp(),
    "down": ArrowDown(),
    "enter": Enter(),
    "escape": Escape(),
    "backspace": Backspace(),
}


class SnippetListView(ListView):
    can_focus = False


class SnapeApp(App[Snippet | None]):
    BINDINGS = [
        ("ctrl+o", "open_folder", "Open Folder"),
        ("ctrl+s", "settings", "Settings"),
        ("ctrl+r", "reload", "Reload"),
    ]

    CSS = """
    Screen {
        align: center middle;
        background: $background;
        color: $text;
    }

    #picker {
        max-width: 100%;
        max-height: 100%;
        border: round $primary;
        background: $panel;
    }

    #mode_hint {
        width: 100%;
        content-align: center middle;
        color: $text-muted;
        padding: 0 1;
    }

    #search_line {
        padding: 0 1;
    }

    #snippet_list {
        height: 1fr;
        border-top: solid $boost;
        border-bottom: solid $boost;
    }

    #preview {
        height: 8;
        padding: 0 1;
        color: $text;
        background: $surface;
        overflow-y: hidden;
    }

    #footer {
        height: 1;
        padding: 0 1;
    }

    #snippet_count {
        width: 1fr;
        color: $text-muted;
    }

    #footer_hint {
        color: $text-muted;
    }

    ListView {
        background: transparent;
    }

    ListView > .snippet-row {
        padding: 0 1;
    }

    ListView > .separator-row {
        padding: 0 1;
        background: transparent;
    }

    ListView > ListItem.-highlight {
        background: $primary 30%;
    }

    .hidden {
        display: none;
    }
    """

    def __init__(
        self,
        snippets_dir: Path | None = None,
        *,
        width: int = DEFAULT_WINDOW_WIDTH,
        height: int = DEFAULT_WINDOW_HEIGHT,
        theme_choice: AppTheme = AppTheme.SYSTEM,
        config_file: Path | None = None,
        clipboard: ClipboardWriter | None = None,
        notice: str | None = None,
    ) -> None:
        super().__init__()
        if not is_valid_window_size(width):
            raise ValueError(_size_error("width-size", width))
        if not is_valid_window_size(height):
            raise ValueError(_size_error("height-size", height))
        self.register_theme(TOKYO_NIGHT_THEME)
        self.snippets_dir = snippets_dir or snippets_root()
        self.window_width = width
        self.window_height = height
        self.theme_choice = theme_choice
        self.theme = _TEXTUAL_THEMES[theme_choice]
        self._config_file = config_file
        self._clipboard = clipboard
        self._notice = notice
        self._controller = SelectionController()
        self._rows: list[ListItem] = []
        self._rendered_key: tuple[int, str] | None = None
        self._snippet_list: SnippetListView | None = None
        self._preview: Static | None = None

    @property
    def controller(self) -> SelectionController:
        return self._controller

    def compose(self) -> ComposeResult:
        with Vertical(id="picker"):
            yield Label(BROWSE_HINT, id="mode_hint")
            yield Label("", id="search_line", classes="hidden")
            yield SnippetListView(id="snippet_list")
            yield Static("", id="preview")
            with Horizontal(id="footer"):
                yield Label("", id="snippet_count")
                yield Label(FOOTER_HINT, id="footer_hint")

    def on_mount(self) -> None:
        picker = self.query_one("#picker", Vertical)
        picker.styles.width = self.window_width // CELL_WIDTH_PX
        picker.styles.height = self.window_height // CELL_HEIGHT_PX
        self._snippet_list = self.query_one("#snippet_list", SnippetListView)
        self._preview = self.query_one("#preview", Static)
        self.reload_snippets()
        if self._notice:
            self.notify(self._notice, severity="warning", markup=False)

    def reload_snippets(self) -> None:
        logger.info("Snippets directory: %s", self.snippets_dir)
        catalog = build_catalog(load_snippet_files(self.snippets_dir))
        self._controller.load(catalog)
        self._rendered_key = None
        self._refresh_view()

    def on_key(self, event: events.Key) -> None:
        if len(self.screen_stack) > 1 or self._controller.is_finished:
            return
        input_event = _input_event_for_key(event)
        if input_event is None:
            return
        if self._controller.dispatch(input_event):
            event.stop()
            event.prevent_default()
            self._after_dispatch()
            return
        if event.character == "?" and not self._controller.is_filtering:
            event.stop()
            event.prevent_default()
            self.call_later(self.action_help)

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        if not isinstance(event.item, SnippetListItem):
            return
        if self._controller.dispatch(RowActivated(event.item.position)):
            self._after_dispatch()

    def action_reload(self) -> None:
        self.reload_snippets()

    def action_help(self) -> None:
        settings_file = self._config_file or settings_path()
        self.push_screen(AboutScreen(__version__, self.snippets_dir, settings_file))

    def action_settings(self) -> None:
        self.push_screen(SettingsScreen(self.theme_choice), self._handle_settings)

    def action_open_folder(self) -> None:
        opened = webbrowser.open(self.snippets_dir.resolve().as_uri())
        if not opened:
            self.notify(f"Failed to open {self.snippets_dir}", severity="error", markup=False)

    def _handle_settings(self, theme: AppTheme | None) -> None:
        if theme is None or theme == self.theme_choice:
            return
        self.theme_choice = theme
        self.theme = _TEXTUAL_THEMES[theme]
        config, _ = load_config(self._config_file)
        error = save_config(replace(config, theme=theme), self._config_file)
        if error:
            self.notify(error, severity="warning", markup=False)

    def _after_dispatch(self) -> None:
        if self._controller.is_finished:
            self._finish()
            return
        self._refresh_view()

    def _finish(self) -> None:
        snippet = self._controller.result
        if snippet is None:
            self.exit(None)
            return
        logger.info("Selected snippet: %s", snippet.display_name)
        self._copy(snippet.content)
        self.notify("Copied!", timeout=COPY_EXIT_DELAY * 2)
        self.set_timer(COPY_EXIT_DELAY, lambda: self.exit(snippet))

    def _copy(self, text: str) -> None:
        if self._clipboard is not None:
            self._clipboard(text)
            return
        if not copy_text(text, fallback=self.copy_to_clipboard):
            self.notify("Clipboard unavailable", severity="error")

    def _refresh_view(self) -> None:
        controller = self._controller
        key = (id(controller.catalog), controller.query)
        if self._snippet_list is not None and key != self._rendered_key:
            self._rows = build_rows(controller.items)
            self._snippet_list.clear()
            self._snippet_list.extend(self._rows)
            self._rendered_key = key
            self.call_after_refresh(self._sync_highlight)
        self._sync_highlight()
        self._update_header()
        self.query_one("#snippet_count", Label).update(format_count(len(controller.flat_view)))
        if self._preview is not None:
            self._preview.update(format_preview(controller.selected_snippet))

    def _sync_highlight(self) -> None:
        if self._snippet_list is None or self._controller.is_finished:
            return
        index = row_index_for_position(self._rows, self._controller.selected)
        self._snippet_list.index = index
        if index is None or index >= len(self._snippet_list.children):
            return
        row = self._snippet_list.children[index]
        if row is self._rows[index]:
            self._snippet_list.scroll_to_widget(row, animate=False)

    def _update_header(self) -> None:
        hint = self.query_one("#mode_hint", Label)
        search = self.query_one("#search_line", Label)
        if self._controller.is_filtering:
            hint.update(FILTER_HINT)
            search.update(format_search_line(self._controller.query))
            search.remove_class("hidden")
        else:
            hint.update(BROWSE_HINT)
            search.add_class("hidden")


def _input_event_for_key(event: events.Key) -> InputEvent | None:
    mapped = _KEY_EVENTS.get(event.key)
    if mapped is not None:
        return mapped
    if event.is_printable and event.character:
        return CharTyped(event.character)
    return None


def _size_error(option: str, value: int) -> str:
    return f"{option} must be between {MIN_WINDOW_SIZE} and {MAX_WINDOW_SIZE} (got {value})"


def _cli_help_text() -> str:
    return (
        "Handle your snippets with Severus precision.\n\n"
        f"Snippets directory: {snippets_root()}\n"
        f"Settings file: {settings_path()}\n\n"
        "The picker lists your snippets; selecting one copies it to the clipboard."
    )


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(name)s: %(message)s",
        handlers=[TextualHandler()],
        force=True,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="snape",
        description=_cli_help_text(),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--verbose", action="store_true", help="Enable verbose output messages")
    parser.add_argument(
        "--width-size",
        type=int,
        default=None,
        help=f"Picker width ({MIN_WINDOW_SIZE}-{MAX_WINDOW_SIZE}, default: {DEFAULT_WINDOW_WIDTH})",
    )
    parser.add_argument(
        "--height-size",
        type=int,
        default=None,
        help=f"Picker height ({MIN_WINDOW_SIZE}-{MAX_WINDOW_SIZE}, default: {DEFAULT_WINDOW_HEIGHT})",
    )
    parser.add_argument("--snippets-dir", help="Directory to load snippets from")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def resolve_window_size(
    config: AppConfig,
    width: int | None,
    height: int | None,
) -> tuple[int, int]:
    if width is None or width == DEFAULT_WINDOW_WIDTH:
        width = config.window_width
    if height is None or height == DEFAULT_WINDOW_HEIGHT:
        height = config.window_height
    return width, height


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)
    for option, value in (("width-size", args.width_size), ("height-size", args.height_size)):
        if value is not None and not is_valid_window_size(value):
            parser.error(_size_error(option, value))
    _configure_logging(args.verbose)
    config, config_error = load_config()
    if config_error:
        logger.warning(config_error)
    width, height = resolve_window_size(config, args.width_size, args.height_size)
    snippets_dir = Path(args.snippets_dir).expanduser() if args.snippets_dir else None
    logger.info("Starting Snape snippet manager (size: %dx%d)...", width, height)
    try:
        app = SnapeApp(
            snippets_dir,
            width=width,
            height=height,
            theme_choice=config.theme,
            notice=config_error,
        )
    except ValueError as exc:
        parser.error(str(exc))
    app.run()
    error = save_config(
        replace(
            config,
            window_width=width,
            window_height=height,
            theme=app.theme_choice,
        )
    )
    if error:
        logger.warning(error)
