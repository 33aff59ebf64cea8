from __future__ import annotations

from typing import Sequence

from .catalog import Catalog, CatalogItem, Snippet, SnippetItem


def matches_query(snippet: Snippet, query: str) -> bool:
    needle = query.casefold()
    return needle in snippet.display_name.casefold() or needle in snippet.content.casefold()


def filter_snippets(snippets: Sequence[Snippet], query: str) -> list[Snippet]:
    if not query:
        return list(snippets)
    return [snippet for snippet in snippets if matches_query(snippet, query)]


def visible_items(catalog: Catalog, query: str) -> list[CatalogItem]:
    """Rows to display for ``query``: grouped items when browsing, flat matches otherwise."""
    if not query:
        return list(catalog.items)
    return [SnippetItem(snippet) for snippet in filter_snippets(catalog.snippets, query)]
