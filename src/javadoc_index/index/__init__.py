"""Indexing, caching and lookup package."""

from .cache import CACHE_VERSION, CacheStore, cache_key, read_record
from .discovery import DEFAULT_EXCLUDED_DIRS, default_exclude, exclude_dir_names, scan, scan_tree
from .errors import (
    CacheCorruptError,
    CacheMissError,
    CacheReadError,
    CacheWriteError,
    JavadocIndexError,
    NoSnapshotError,
    ScanError,
)
from .lookup import CORE_SENTINEL, Chooser, LookupService, completion_order
from .manager import IndexManager
from .models import ClassEntry, IndexStatus, ScanResult, SkippedPath
from .naming import derive, is_class_page
from .paths import canonicalize

__all__ = [
    "CACHE_VERSION",
    "CORE_SENTINEL",
    "CacheCorruptError",
    "CacheMissError",
    "CacheReadError",
    "CacheStore",
    "CacheWriteError",
    "Chooser",
    "ClassEntry",
    "DEFAULT_EXCLUDED_DIRS",
    "IndexManager",
    "IndexStatus",
    "JavadocIndexError",
    "LookupService",
    "NoSnapshotError",
    "ScanError",
    "ScanResult",
    "SkippedPath",
    "cache_key",
    "canonicalize",
    "completion_order",
    "default_exclude",
    "derive",
    "exclude_dir_names",
    "is_class_page",
    "read_record",
    "scan",
    "scan_tree",
]
