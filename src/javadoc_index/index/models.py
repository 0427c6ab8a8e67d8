"""Typed models for indexing state."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class ClassEntry:
    """One documented class and the page that describes it."""

    qualified_name: str
    location: str


@dataclass(slots=True, frozen=True)
class SkippedPath:
    """Subdirectory that could not be listed during a scan."""

    path: str
    reason: str


@dataclass(slots=True, frozen=True)
class ScanResult:
    """Entries found under one root plus the subtrees that were skipped."""

    root: str
    entries: dict[str, str]
    skipped: tuple[SkippedPath, ...]


@dataclass(slots=True, frozen=True)
class IndexStatus:
    """Current index status snapshot."""

    loaded_roots: tuple[str, ...]
    entry_count: int
    cache_dir: str
    compress: bool
