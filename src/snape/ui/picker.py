from __future__ import annotations

from rich.text import Text
from textual.widgets import Label, ListItem

from ..catalog import CatalogItem, SeparatorItem, Snippet, SnippetItem
from ..index_chars import char_for

_INDEX_STYLE = "bold #7aa2f7"
_NAME_STYLE = "#c0caf5"
_SEPARATOR_STYLE = "bold #565f89"
_RULE_STYLE = "#3b4261"
_SEARCH_STYLE = "bold #ff9e64"
_SNIPPET_ICON = ""
_SEPARATOR_LEAD = 3

BROWSE_HINT = "↑↓ Enter or [index]  |  '/' to filter  |  '?' for help"
FILTER_HINT = "Filter mode - ESC to quit | ↑↓ Enter to select"
FOOTER_HINT = "ctrl+o folder  ctrl+s settings"
EMPTY_PREVIEW = "No snippet selected."


class SnippetListItem(ListItem):
    def __init__(self, snippet: Snippet, position: int) -> None:
        self.snippet = snippet
        self.position = position
        super().__init__(Label(format_snippet_label(snippet, position)), classes="snippet-row")


class SeparatorListItem(ListItem):
    def __init__(self, title: str) -> None:
        self.title = title
        super().__init__(
            Label(format_separator_label(title)),
            classes="separator-row",
            disabled=True,
        )


def build_rows(items: list[CatalogItem]) -> list[ListItem]:
    rows: list[ListItem] = []
    position = 0
    for item in items:
        if isinstance(item, SeparatorItem):
            rows.append(SeparatorListItem(item.title))
        elif isinstance(item, SnippetItem):
            rows.append(SnippetListItem(item.snippet, position))
            position += 1
    return rows


def row_index_for_position(rows: list[ListItem], position: int) -> int | None:
    for index, row in enumerate(rows):
        if isinstance(row, SnippetListItem) and row.position == position:
            return index
    return None


def format_snippet_label(snippet: Snippet, position: int) -> Text:
    label = Text()
    label.append(f"[{char_for(position)}]", style=_INDEX_STYLE)
    label.append(f"  {_SNIPPET_ICON}  ")
    label.append(snippet.display_name, style=_NAME_STYLE)
    return label


def format_separator_label(title: str) -> Text:
    label = Text()
    label.append("─" * _SEPARATOR_LEAD, style=_RULE_STYLE)
    label.append(f" {title.upper()} ", style=_SEPARATOR_STYLE)
    label.append("─" * 40, style=_RULE_STYLE)
    label.no_wrap = True
    label.overflow = "crop"
    return label


def format_search_line(query: str) -> Text:
    line = Text()
    line.append(f"Search: {query}", style=_SEARCH_STYLE)
    line.append("▌", style=_SEARCH_STYLE)
    return line


def format_count(count: int) -> str:
    noun = "snippet" if count == 1 else "snippets"
    return f"{count} {noun}"


def format_preview(snippet: Snippet | None) -> Text:
    if snippet is None:
        return Text(EMPTY_PREVIEW, style="dim")
    preview = Text()
    preview.append(snippet.display_name, style="bold")
    if snippet.group:
        preview.append(f"  ({snippet.group})", style="dim")
    preview.append("\n\n")
    preview.append(snippet.content)
    return preview
