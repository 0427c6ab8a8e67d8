"""Error taxonomy for indexing and cache operations."""

from __future__ import annotations


class JavadocIndexError(Exception):
    """Base class for index failures surfaced to callers."""

    code = "INDEX_ERROR"


class CacheMissError(JavadocIndexError):
    """Raised when no cache record exists for a root."""

    code = "CACHE_MISS"

    def __init__(self, path: str) -> None:
        super().__init__(f"No cache record at {path}")
        self.path = path


class CacheCorruptError(JavadocIndexError):
    """Raised when a cache record exists but cannot be decoded."""

    code = "CACHE_CORRUPT"

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Corrupt cache record at {path}: {reason}")
        self.path = path
        self.reason = reason


class CacheReadError(JavadocIndexError):
    """Raised when a cache record exists but the file cannot be read."""

    code = "CACHE_READ_FAILED"

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot read cache record {path}: {reason}")
        self.path = path
        self.reason = reason


class CacheWriteError(JavadocIndexError):
    """Raised when a cache record cannot be persisted."""

    code = "CACHE_WRITE_FAILED"

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot write cache record {path}: {reason}")
        self.path = path
        self.reason = reason


class NoSnapshotError(JavadocIndexError):
    """Raised when no bundled snapshot exists for a remote documentation URL."""

    code = "NO_SNAPSHOT"

    def __init__(self, url: str, path: str) -> None:
        super().__init__(f"No bundled snapshot for {url}")
        self.url = url
        self.path = path


class ScanError(JavadocIndexError):
    """Raised when a documentation root cannot be listed."""

    code = "SCAN_FAILED"

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot scan {path}: {reason}")
        self.path = path
        self.reason = reason
