"""Versioned per-root cache records on disk."""

from __future__ import annotations

import gzip
import json
import os
import re
import zlib
from pathlib import Path

from javadoc_index.index.errors import (
    CacheCorruptError,
    CacheMissError,
    CacheReadError,
    CacheWriteError,
)

CACHE_VERSION = "v1"
COMPRESSED_SUFFIX = ".gz"

_UNSAFE_KEY_CHARS = re.compile(r"[/\\:]")


class CacheStore:
    """Reads and writes one JSON cache record per documentation root."""

    def __init__(
        self, cache_dir: Path, compress: bool = True, version: str = CACHE_VERSION
    ) -> None:
        self._cache_dir = cache_dir
        self._compress = compress
        self._version = version

    @property
    def cache_dir(self) -> Path:
        """Return the directory holding cache records."""
        return self._cache_dir

    @property
    def compress(self) -> bool:
        return self._compress

    @property
    def version(self) -> str:
        return self._version

    def cache_key_for(self, root_or_url: str) -> str:
        """Return the record file name for a root identity or URL key."""
        return cache_key(root_or_url, version=self._version, compress=self._compress)

    def path_for(self, root_or_url: str) -> Path:
        return self._cache_dir / self.cache_key_for(root_or_url)

    def load(self, cache_file: Path) -> dict[str, str]:
        """Load a record, raising CacheMissError, CacheReadError or CacheCorruptError."""
        return read_record(cache_file, version=self._version)

    def save(self, cache_file: Path, data: dict[str, str], root: str = "") -> None:
        """Persist ``data`` with write-to-temp then rename."""
        payload = {
            "schema_version": self._version,
            "root": root,
            "entries": dict(data),
        }
        encoded = json.dumps(payload, sort_keys=True).encode("utf-8")
        if cache_file.name.endswith(COMPRESSED_SUFFIX):
            encoded = gzip.compress(encoded, mtime=0)
        tmp = cache_file.with_name(f"{cache_file.name}.{os.getpid()}.tmp")
        try:
            cache_file.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_bytes(encoded)
            tmp.replace(cache_file)
        except OSError as exc:
            if tmp.exists():
                tmp.unlink()
            raise CacheWriteError(path=str(cache_file), reason=exc.strerror or str(exc)) from exc

    def remove(self, root_or_url: str) -> bool:
        """Delete the record for a root; return True when one existed."""
        path = self.path_for(root_or_url)
        if not path.exists():
            return False
        path.unlink()
        return True

    def entries(self) -> list[str]:
        """List record file names written with the current version, sorted."""
        if not self._cache_dir.is_dir():
            return []
        marker = f"-{self._version}"
        return sorted(
            path.name
            for path in self._cache_dir.iterdir()
            if path.is_file()
            and (path.name.endswith(marker) or path.name.endswith(marker + COMPRESSED_SUFFIX))
        )


def cache_key(root_or_url: str, version: str = CACHE_VERSION, compress: bool = True) -> str:
    """Sanitize path and scheme separators, then append version and suffix."""
    key = f"{_UNSAFE_KEY_CHARS.sub('+', root_or_url)}-{version}"
    if compress:
        key += COMPRESSED_SUFFIX
    return key


def read_record(path: Path, version: str = CACHE_VERSION) -> dict[str, str]:
    """Decode and validate a record file fully before returning its entries."""
    try:
        raw = path.read_bytes()
    except (FileNotFoundError, NotADirectoryError) as exc:
        raise CacheMissError(path=str(path)) from exc
    except OSError as exc:
        raise CacheReadError(path=str(path), reason=exc.strerror or str(exc)) from exc
    try:
        if path.name.endswith(COMPRESSED_SUFFIX):
            raw = gzip.decompress(raw)
        payload = json.loads(raw.decode("utf-8"))
    except (OSError, EOFError, zlib.error, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise CacheCorruptError(path=str(path), reason=str(exc)) from exc
    if not isinstance(payload, dict):
        raise CacheCorruptError(path=str(path), reason="top-level value is not an object")
    found = payload.get("schema_version")
    if found != version:
        raise CacheCorruptError(
            path=str(path), reason=f"schema_version {found!r} does not match {version!r}"
        )
    entries = payload.get("entries")
    if not isinstance(entries, dict):
        raise CacheCorruptError(path=str(path), reason="entries is not an object")
    output: dict[str, str] = {}
    for name, location in entries.items():
        if not isinstance(location, str):
            raise CacheCorruptError(
                path=str(path), reason=f"location for {name!r} is not a string"
            )
        output[name] = location
    return output
