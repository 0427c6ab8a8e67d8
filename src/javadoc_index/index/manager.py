"""In-memory class index merged from cached or freshly scanned roots."""

from __future__ import annotations

import threading
from collections.abc import Iterable
from pathlib import Path

from javadoc_index.index.cache import CacheStore, cache_key, read_record
from javadoc_index.index.discovery import DirectoryFilter, default_exclude, scan_tree
from javadoc_index.index.errors import (
    CacheCorruptError,
    CacheMissError,
    JavadocIndexError,
    NoSnapshotError,
)
from javadoc_index.index.models import IndexStatus
from javadoc_index.index.paths import canonicalize
from javadoc_index.logging import JsonlEventLogger


class IndexManager:
    """Owns the merged index and the set of roots already merged into it.

    Roots are loaded from their cache record when one exists and scanned
    otherwise; later roots overwrite earlier entries with the same name.
    A corrupt cache record is replaced by a fresh scan; one that cannot be
    read fails the root.
    """

    def __init__(
        self,
        store: CacheStore,
        snapshot_dir: Path | None = None,
        exclude: DirectoryFilter = default_exclude,
        logger: JsonlEventLogger | None = None,
    ) -> None:
        self._store = store
        self._snapshot_dir = snapshot_dir
        self._exclude = exclude
        self._logger = logger
        self._lock = threading.RLock()
        self._index: dict[str, str] = {}
        self._loaded: set[str] = set()

    @property
    def store(self) -> CacheStore:
        return self._store

    def clear(self) -> None:
        """Forget every merged root and entry."""
        with self._lock:
            self._index = {}
            self._loaded = set()

    def is_loaded(self, root_id: str) -> bool:
        with self._lock:
            return root_id in self._loaded

    def entries(self) -> dict[str, str]:
        """Return a snapshot copy of the merged index."""
        with self._lock:
            return dict(self._index)

    def get(self, name: str) -> str | None:
        """Return the page location for one qualified name."""
        with self._lock:
            return self._index.get(name)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._index

    def add_root(self, ref: str) -> None:
        """Merge one local documentation root, scanning it on cache miss."""
        root_id = canonicalize(ref)
        with self._lock:
            if root_id in self._loaded:
                return
            try:
                entries, source = self._load_or_scan(root_id)
            except JavadocIndexError as exc:
                self._emit("root_failed", root_id, ok=False, error_code=exc.code, reason=str(exc))
                raise
            self._merge(root_id, entries)
            self._emit("root_loaded", root_id, source=source, entry_count=len(entries))

    def add_roots(self, refs: Iterable[str]) -> None:
        """Merge roots in input order, stopping at the first one that fails."""
        for ref in refs:
            self.add_root(ref)

    def load_remote_snapshot(self, url_keys: Iterable[str]) -> None:
        """Merge bundled snapshots for remote documentation URLs."""
        for url in url_keys:
            with self._lock:
                if url in self._loaded:
                    continue
                try:
                    entries = self._read_snapshot(url)
                except JavadocIndexError as exc:
                    self._emit("root_failed", url, ok=False, error_code=exc.code, reason=str(exc))
                    raise
                self._merge(url, entries)
                self._emit("root_loaded", url, source="snapshot", entry_count=len(entries))

    def status(self) -> IndexStatus:
        with self._lock:
            return IndexStatus(
                loaded_roots=tuple(sorted(self._loaded)),
                entry_count=len(self._index),
                cache_dir=str(self._store.cache_dir),
                compress=self._store.compress,
            )

    def _load_or_scan(self, root_id: str) -> tuple[dict[str, str], str]:
        cache_file = self._store.path_for(root_id)
        try:
            return self._store.load(cache_file), "cache"
        except CacheMissError:
            pass
        except CacheCorruptError as exc:
            self._emit("cache_corrupt", root_id, ok=False, error_code=exc.code, reason=exc.reason)
        result = scan_tree(root_id, root_id, exclude=self._exclude)
        for skipped in result.skipped:
            self._emit(
                "subtree_skipped", root_id, ok=False, path=skipped.path, reason=skipped.reason
            )
        self._store.save(cache_file, result.entries, root=root_id)
        return result.entries, "scan"

    def _read_snapshot(self, url: str) -> dict[str, str]:
        path = self._snapshot_path(url)
        if path is None:
            raise NoSnapshotError(url=url, path="")
        try:
            return read_record(path, version=self._store.version)
        except CacheMissError as exc:
            raise NoSnapshotError(url=url, path=str(path)) from exc

    def _snapshot_path(self, url: str) -> Path | None:
        if self._snapshot_dir is None:
            return None
        preferred = self._store.compress
        candidates = [
            self._snapshot_dir / cache_key(url, version=self._store.version, compress=flag)
            for flag in (preferred, not preferred)
        ]
        for candidate in candidates:
            if candidate.exists():
                return candidate
        return candidates[0]

    def _merge(self, root_id: str, entries: dict[str, str]) -> None:
        self._index.update(entries)
        self._loaded.add(root_id)

    def _emit(
        self,
        event: str,
        root: str,
        ok: bool = True,
        error_code: str | None = None,
        **metadata: object,
    ) -> None:
        if self._logger is None:
            return
        try:
            self._logger.emit(event, root, ok=ok, error_code=error_code, **metadata)
        except OSError:
            # The event log is best-effort; the load outcome is what callers see.
            return
