"""Documentation tree traversal."""

from __future__ import annotations

import os
from collections.abc import Callable, Iterable

from javadoc_index.index.errors import ScanError
from javadoc_index.index.models import ScanResult, SkippedPath
from javadoc_index.index.naming import derive

DEFAULT_EXCLUDED_DIRS = ("class-use",)

DirectoryFilter = Callable[[str], bool]


def exclude_dir_names(names: Iterable[str]) -> DirectoryFilter:
    """Build a predicate excluding directories whose base name is in ``names``."""
    excluded = frozenset(names)

    def predicate(name: str) -> bool:
        return name in excluded

    return predicate


default_exclude = exclude_dir_names(DEFAULT_EXCLUDED_DIRS)


def scan(directory: str, root: str, exclude: DirectoryFilter = default_exclude) -> dict[str, str]:
    """Return qualified name -> page path for every class page below ``directory``."""
    return scan_tree(directory, root, exclude=exclude).entries


def scan_tree(
    directory: str,
    root: str | None = None,
    exclude: DirectoryFilter = default_exclude,
) -> ScanResult:
    """Walk ``directory`` and collect class entries named relative to ``root``.

    Dot-prefixed entries are ignored at every level and directories matching
    ``exclude`` are pruned. A root that cannot be listed raises ScanError;
    unreadable subdirectories are skipped and reported in ``skipped``.
    """
    base = root if root is not None else directory
    entries: dict[str, str] = {}
    skipped: list[SkippedPath] = []
    stack: list[str] = [directory]
    while stack:
        current = stack.pop()
        try:
            with os.scandir(current) as listing:
                children = sorted(listing, key=lambda item: item.name)
        except OSError as exc:
            if current == directory:
                raise ScanError(path=current, reason=exc.strerror or str(exc)) from exc
            skipped.append(SkippedPath(path=current, reason=exc.strerror or str(exc)))
            continue
        for child in reversed(children):
            if child.name.startswith("."):
                continue
            if child.is_dir(follow_symlinks=False):
                if exclude(child.name):
                    continue
                stack.append(child.path)
                continue
            if not child.is_file():
                continue
            entry = derive(child.path, base)
            if entry is not None:
                entries[entry.qualified_name] = entry.location
    return ScanResult(root=base, entries=entries, skipped=tuple(skipped))
