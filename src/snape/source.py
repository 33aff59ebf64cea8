from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

SAMPLE_SNIPPETS: tuple[tuple[str, str], ...] = (
    ("hello.txt", "Hello, World!"),
    ("greeting.txt", "Hi there!\n\nHope you're having a great day!"),
    (
        "hello-world.go",
        'package main\n\nimport "fmt"\n\nfunc main() {\n\tfmt.Println("Hello, World!")\n}',
    ),
)


@dataclass(frozen=True)
class RawSnippet:
    name: str
    content: str
    path: Path
    group: str | None = None

    @property
    def extension(self) -> str:
        return self.path.suffix.lstrip(".")


def load_snippet_files(root: Path) -> list[RawSnippet]:
    """List the snippet root, seeding the sample files once if it is empty.

    A root that exists but cannot be listed yields nothing and is not seeded.
    """
    _ensure_root(root)
    candidates = scan_snippets(root)
    if candidates is None:
        return []
    if candidates:
        return candidates
    seed_sample_snippets(root)
    return scan_snippets(root) or []


def scan_snippets(root: Path) -> list[RawSnippet] | None:
    entries = _list_entries(root)
    if entries is None:
        logger.debug("Failed to read snippets directory: %s", root)
        return None
    candidates: list[RawSnippet] = []
    for entry in entries:
        if _is_dir(entry):
            group_entries = _list_entries(Path(entry.path))
            if group_entries is None:
                logger.debug("Failed to read group directory: %s", entry.path)
                continue
            for child in group_entries:
                snippet = _read_snippet(child, group=entry.name)
                if snippet is not None:
                    candidates.append(snippet)
            continue
        snippet = _read_snippet(entry, group=None)
        if snippet is not None:
            candidates.append(snippet)
    return candidates


def seed_sample_snippets(root: Path) -> list[Path]:
    created: list[Path] = []
    for filename, content in SAMPLE_SNIPPETS:
        path = root / filename
        if path.exists():
            continue
        try:
            path.write_text(content, encoding="utf-8")
        except OSError as exc:
            logger.debug("Failed to create sample snippet %s (%s)", path, exc)
            continue
        logger.debug("Created sample snippet: %s", filename)
        created.append(path)
    return created


def _ensure_root(root: Path) -> None:
    try:
        root.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        logger.debug("Failed to create snippets directory: %s (%s)", root, exc)


def _list_entries(directory: Path) -> list[os.DirEntry] | None:
    try:
        with os.scandir(directory) as iterator:
            entries = [entry for entry in iterator if not entry.name.startswith(".")]
    except OSError:
        return None
    entries.sort(key=lambda entry: entry.name)
    return entries


def _is_dir(entry: os.DirEntry) -> bool:
    try:
        return entry.is_dir()
    except OSError:
        return False


def _is_file(entry: os.DirEntry) -> bool:
    try:
        return entry.is_file()
    except OSError:
        return False


def _read_snippet(entry: os.DirEntry, group: str | None) -> RawSnippet | None:
    if not _is_file(entry):
        return None
    path = Path(entry.path)
    try:
        content = path.read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("Failed to load %s: %s", entry.name, exc)
        return None
    if group is None:
        logger.debug("Loaded snippet: %s", path.stem)
    else:
        logger.debug("Loaded snippet: %s (group: %s)", path.stem, group)
    return RawSnippet(name=path.stem, content=content, path=path, group=group)
