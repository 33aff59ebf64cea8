from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .catalog import Catalog, CatalogItem, Snippet
from .filtering import filter_snippets, visible_items
from .index_chars import position_for

FILTER_TRIGGER = "/"
_FILTER_PUNCTUATION = frozenset(" -_.")


@dataclass(frozen=True)
class Browsing:
    selected: int = 0


@dataclass(frozen=True)
class Filtering:
    selected: int = 0
    query: str = ""


@dataclass(frozen=True)
class Terminal:
    snippet: Snippet | None = None


SelectionState = Union[Browsing, Filtering, Terminal]


@dataclass(frozen=True)
class ArrowUp:
    pass


@dataclass(frozen=True)
class ArrowDown:
    pass


@dataclass(frozen=True)
class Enter:
    pass


@dataclass(frozen=True)
class Escape:
    pass


@dataclass(frozen=True)
class Backspace:
    pass


@dataclass(frozen=True)
class CharTyped:
    char: str


@dataclass(frozen=True)
class RowActivated:
    position: int


InputEvent = Union[ArrowUp, ArrowDown, Enter, Escape, Backspace, CharTyped, RowActivated]


def is_filter_char(char: str) -> bool:
    if len(char) != 1:
        return False
    return char.isalpha() or char.isnumeric() or char in _FILTER_PUNCTUATION


class SelectionController:
    """Turns picker input events into browse/filter/terminal state changes.

    ``dispatch`` returns ``False`` for events the current state does not
    handle so the caller can fall back to its own bindings. Positions always
    address the flat view: the catalog's snippets narrowed by the current
    filter query, without separators.
    """

    def __init__(self, catalog: Catalog | None = None) -> None:
        self._catalog = catalog or Catalog()
        self._state: SelectionState = Browsing()
        self._view: list[Snippet] = list(self._catalog.snippets)

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    @property
    def state(self) -> SelectionState:
        return self._state

    @property
    def flat_view(self) -> list[Snippet]:
        return list(self._view)

    @property
    def items(self) -> list[CatalogItem]:
        return visible_items(self._catalog, self.query)

    @property
    def query(self) -> str:
        if isinstance(self._state, Filtering):
            return self._state.query
        return ""

    @property
    def selected(self) -> int:
        if isinstance(self._state, (Browsing, Filtering)):
            return self._state.selected
        return 0

    @property
    def selected_snippet(self) -> Snippet | None:
        if isinstance(self._state, Terminal):
            return self._state.snippet
        return self._snippet_at(self.selected)

    @property
    def is_filtering(self) -> bool:
        return isinstance(self._state, Filtering)

    @property
    def is_finished(self) -> bool:
        return isinstance(self._state, Terminal)

    @property
    def result(self) -> Snippet | None:
        if isinstance(self._state, Terminal):
            return self._state.snippet
        return None

    def load(self, catalog: Catalog) -> None:
        self._catalog = catalog
        self._set_state(Browsing())

    def dispatch(self, event: InputEvent) -> bool:
        if isinstance(self._state, Terminal):
            return False
        if isinstance(event, ArrowUp):
            return self.move(-1)
        if isinstance(event, ArrowDown):
            return self.move(1)
        if isinstance(event, Enter):
            return self.confirm()
        if isinstance(event, Escape):
            if isinstance(self._state, Filtering):
                return self.exit_filter_mode()
            return self.cancel()
        if isinstance(event, Backspace):
            return self.backspace()
        if isinstance(event, CharTyped):
            return self._handle_char(event.char)
        if isinstance(event, RowActivated):
            return self.activate(event.position)
        return False

    def move(self, delta: int) -> bool:
        if isinstance(self._state, Terminal):
            return False
        last = max(0, len(self._view) - 1)
        current = min(max(self._state.selected, 0), last)
        target = min(max(current + delta, 0), last)
        if isinstance(self._state, Filtering):
            self._state = Filtering(selected=target, query=self._state.query)
        else:
            self._state = Browsing(selected=target)
        return True

    def enter_filter_mode(self) -> bool:
        if not isinstance(self._state, Browsing):
            return False
        self._set_state(Filtering())
        return True

    def exit_filter_mode(self) -> bool:
        if not isinstance(self._state, Filtering):
            return False
        self._set_state(Browsing())
        return True

    def append_filter_char(self, char: str) -> bool:
        if not isinstance(self._state, Filtering) or not is_filter_char(char):
            return False
        self._set_state(Filtering(query=self._state.query + char))
        return True

    def backspace(self) -> bool:
        if not isinstance(self._state, Filtering) or not self._state.query:
            return False
        self._set_state(Filtering(query=self._state.query[:-1]))
        return True

    def quick_select(self, char: str) -> bool:
        if not isinstance(self._state, Browsing):
            return False
        position = position_for(char)
        if position is None:
            return False
        return self.activate(position)

    def activate(self, position: int) -> bool:
        if isinstance(self._state, Terminal) or self._snippet_at(position) is None:
            return False
        if isinstance(self._state, Filtering):
            self._state = Filtering(selected=position, query=self._state.query)
        else:
            self._state = Browsing(selected=position)
        return self.confirm()

    def confirm(self) -> bool:
        if isinstance(self._state, Terminal):
            return False
        snippet = self._snippet_at(self._state.selected)
        if snippet is None:
            return False
        self._state = Terminal(snippet)
        return True

    def cancel(self) -> bool:
        if not isinstance(self._state, Browsing):
            return False
        self._state = Terminal(None)
        return True

    def _handle_char(self, char: str) -> bool:
        if isinstance(self._state, Filtering):
            return self.append_filter_char(char)
        if char == FILTER_TRIGGER:
            return self.enter_filter_mode()
        return self.quick_select(char)

    def _set_state(self, state: SelectionState) -> None:
        self._state = state
        self._view = filter_snippets(self._catalog.snippets, self.query)

    def _snippet_at(self, position: int) -> Snippet | None:
        if 0 <= position < len(self._view):
            return self._view[position]
        return None
