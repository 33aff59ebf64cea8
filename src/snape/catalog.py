from __future__ import annotations

import re
import uuid
from collections import Counter
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Iterable, Iterator, Union

from .source import RawSnippet

_NUMERIC_PREFIX = re.compile(r"^\d+-")


@dataclass(frozen=True)
class Snippet:
    name: str
    display_name: str
    content: str
    source_path: Path
    group: str | None = None
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    @property
    def extension(self) -> str:
        return self.source_path.suffix.lstrip(".")


@dataclass(frozen=True)
class Group:
    folder_name: str
    display_name: str
    snippets: tuple[Snippet, ...]


@dataclass(frozen=True)
class SnippetItem:
    snippet: Snippet

    @property
    def key(self) -> str:
        return str(self.snippet.id)


@dataclass(frozen=True)
class SeparatorItem:
    title: str

    @property
    def key(self) -> str:
        return f"separator-{self.title}"


CatalogItem = Union[SnippetItem, SeparatorItem]


@dataclass(frozen=True)
class Catalog:
    items: tuple[CatalogItem, ...] = ()
    groups: tuple[Group, ...] = ()

    @property
    def snippets(self) -> tuple[Snippet, ...]:
        return tuple(item.snippet for item in self.items if isinstance(item, SnippetItem))

    def __len__(self) -> int:
        return len(self.snippets)

    def __iter__(self) -> Iterator[Snippet]:
        return iter(self.snippets)

    def find(self, snippet_id: uuid.UUID) -> Snippet | None:
        for snippet in self.snippets:
            if snippet.id == snippet_id:
                return snippet
        return None


def strip_numeric_prefix(folder_name: str) -> str:
    return _NUMERIC_PREFIX.sub("", folder_name, count=1)


def snippet_sort_key(snippet: Snippet) -> str:
    return snippet.name.casefold()


def build_catalog(candidates: Iterable[RawSnippet]) -> Catalog:
    """Order raw snippets into ungrouped-first, then grouped-by-folder items.

    Ungrouped snippets and each group's members are sorted case-insensitively
    by name; groups are sorted by their raw folder name, so numeric prefixes
    such as ``01-`` drive group order. Groups without members produce no
    separator. Duplicate names are disambiguated across the whole catalog by
    appending the file extension.
    """
    ungrouped: list[Snippet] = []
    grouped: dict[str, list[Snippet]] = {}
    for candidate in candidates:
        snippet = Snippet(
            name=candidate.name,
            display_name=candidate.name,
            content=candidate.content,
            source_path=candidate.path,
            group=candidate.group,
        )
        if candidate.group is None:
            ungrouped.append(snippet)
        else:
            grouped.setdefault(candidate.group, []).append(snippet)

    ungrouped.sort(key=snippet_sort_key)
    folders = sorted(
        (folder for folder, members in grouped.items() if members),
        key=str.casefold,
    )
    ordered = list(ungrouped)
    for folder in folders:
        grouped[folder].sort(key=snippet_sort_key)
        ordered.extend(grouped[folder])

    resolved = iter(resolve_duplicate_names(ordered))
    items: list[CatalogItem] = [SnippetItem(next(resolved)) for _ in ungrouped]
    groups: list[Group] = []
    for folder in folders:
        members = tuple(next(resolved) for _ in grouped[folder])
        group = Group(
            folder_name=folder,
            display_name=strip_numeric_prefix(folder),
            snippets=members,
        )
        groups.append(group)
        items.append(SeparatorItem(group.display_name))
        items.extend(SnippetItem(snippet) for snippet in members)
    return Catalog(items=tuple(items), groups=tuple(groups))


def resolve_duplicate_names(snippets: list[Snippet]) -> list[Snippet]:
    counts = Counter(snippet.name for snippet in snippets)
    result: list[Snippet] = []
    for snippet in snippets:
        if counts[snippet.name] > 1 and snippet.extension:
            snippet = replace(snippet, display_name=f"{snippet.name}.{snippet.extension}")
        result.append(snippet)
    return result
